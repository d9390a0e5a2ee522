import random
from typing import Iterator, List, Sequence

from .base import City, EmptyPopulationError
from .route import Route


class Population:
    def __init__(self, routes: Sequence[Route] = ()):
        self.routes: List[Route] = list(routes)

    @staticmethod
    def random(cities: Sequence[City], size: int, rng: random.Random) -> "Population":
        pop = Population()
        for _ in range(size):
            route = Route(cities)
            route.shuffle(rng)
            pop.add_individual(route)
        return pop

    def add_individual(self, route: Route) -> None:
        self.routes.append(route)

    def get_individual(self, index: int) -> Route:
        return self.routes[index]

    def size(self) -> int:
        return len(self.routes)

    def fittest(self) -> Route:
        if not self.routes:
            raise EmptyPopulationError("fittest() called on an empty population")
        # max() keeps the first of equally fit routes.
        return max(self.routes, key=lambda r: r.fitness())

    def distances(self) -> List[float]:
        return [r.distance() for r in self.routes]

    def __len__(self) -> int:
        return len(self.routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)
