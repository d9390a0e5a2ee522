import math
from dataclasses import dataclass, field
from typing import List, Sequence

import networkx as nx


Tour = List[int]


class InvariantError(RuntimeError):
    """Internal state that the engine should never reach."""


class EmptyPopulationError(InvariantError):
    pass


class DegenerateRouteError(InvariantError):
    pass


@dataclass(frozen=True)
class City:
    id: int
    x: float = field(compare=False)
    y: float = field(compare=False)

    def distance_to(self, other: "City") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


def tour_length(graph: nx.Graph, tour: Sequence[int]) -> float:
    dist = 0.0
    n = len(tour)
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dist += graph[a][b]["weight"]
    return float(dist)
