import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import networkx as nx
import numpy as np

from .core.base import Tour, tour_length
from .core.population import Population
from .core.route import Route


@dataclass
class GenerationStats:
    generation: int
    best: float
    mean: float
    worst: float
    best_seen: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class SolveResult:
    tour: Tour
    distance: float
    graph_length: float
    optimum: Optional[float] = None

    @property
    def gap(self) -> Optional[float]:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return None
        return (self.graph_length - self.optimum) / self.optimum


def evaluate_population(population: Population) -> None:
    for route in population:
        route.invalidate()
        route.distance()
        route.fitness()


def population_stats(population: Population, generation: int, best_seen: float) -> GenerationStats:
    dists = np.asarray(population.distances(), dtype=float)
    return GenerationStats(
        generation=generation,
        best=float(dists.min()),
        mean=float(dists.mean()),
        worst=float(dists.max()),
        best_seen=best_seen,
    )


def solve_result(route: Route, graph: nx.Graph, optimum: Optional[float] = None) -> SolveResult:
    tour = route.city_ids()
    return SolveResult(
        tour=tour,
        distance=route.distance(),
        graph_length=tour_length(graph, tour),
        optimum=optimum,
    )


def history_table(history: List[GenerationStats]) -> np.ndarray:
    """Rows of (generation, best, mean, worst, best_seen)."""
    if not history:
        return np.empty((0, 5))
    return np.array(
        [[s.generation, s.best, s.mean, s.worst, s.best_seen] for s in history], dtype=float
    )
