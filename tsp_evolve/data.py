import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import networkx as nx
import tsplib95

from .core.base import City


@dataclass
class Instance:
    name: str
    cities: List[City]
    graph: nx.Graph
    optimum: Optional[float] = None
    path: Optional[Path] = None


def generate_cities(
    n: int, rng: random.Random, width: float = 100.0, height: float = 100.0
) -> List[City]:
    if n < 2:
        raise ValueError(f"need at least 2 cities, got {n}")
    return [City(i, rng.random() * width, rng.random() * height) for i in range(n)]


def build_graph(cities: Iterable[City]) -> nx.Graph:
    """Complete graph over the cities, weighted by Euclidean distance."""
    cities = list(cities)
    graph = nx.Graph()
    for c in cities:
        graph.add_node(c.id, pos=(c.x, c.y))
    for i, a in enumerate(cities):
        for b in cities[i + 1 :]:
            graph.add_edge(a.id, b.id, weight=a.distance_to(b))
    return graph


def random_instance(n: int, rng: random.Random) -> Instance:
    cities = generate_cities(n, rng)
    return Instance(name=f"random{n}", cities=cities, graph=build_graph(cities))


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(problem, path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.parse(candidate.read_text())
        if not tour_file.tours:
            continue
        nodes = list(tour_file.tours[0])
        dist = 0.0
        for i in range(len(nodes)):
            a = nodes[i]
            b = nodes[(i + 1) % len(nodes)]
            dist += problem.get_weight(a, b)
        return float(dist)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"TSPLIB file not found: {path}")
    problem = tsplib95.load(path)
    coords = problem.node_coords or problem.display_data
    if not coords:
        raise ValueError(f"{path} has no node coordinates")
    cities = [City(int(node), float(xy[0]), float(xy[1])) for node, xy in sorted(coords.items())]
    if len(cities) < 2:
        raise ValueError(f"{path} has fewer than 2 cities")
    return Instance(
        name=problem.name or path.stem,
        cities=cities,
        graph=problem.get_graph(),
        optimum=_load_optimum(problem, path),
        path=path,
    )
