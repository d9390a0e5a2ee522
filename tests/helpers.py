import math
import random
from typing import List

from tsp_evolve.core import City, Route


def square_cities() -> List[City]:
    return [City(0, 0.0, 0.0), City(1, 1.0, 0.0), City(2, 1.0, 1.0), City(3, 0.0, 1.0)]


def pentagon(radius: float = 10.0) -> List[City]:
    return [
        City(i, radius * math.cos(2 * math.pi * i / 5), radius * math.sin(2 * math.pi * i / 5))
        for i in range(5)
    ]


def random_cities(n: int, seed: int) -> List[City]:
    rng = random.Random(seed)
    return [City(i, rng.uniform(0, 100), rng.uniform(0, 100)) for i in range(n)]


def shuffled_route(cities: List[City], rng: random.Random) -> Route:
    route = Route(cities)
    route.shuffle(rng)
    return route
