import random
from typing import Iterable, Iterator, List, Optional, Sequence

from .base import City, DegenerateRouteError, Tour


class Route:
    """A closed tour visiting every city exactly once.

    Distance and fitness are cached; every method that changes the city order
    clears both caches.
    """

    def __init__(self, cities: Iterable[City]):
        self.cities: List[City] = list(cities)
        self._distance: Optional[float] = None
        self._fitness: Optional[float] = None

    def invalidate(self) -> None:
        self._distance = None
        self._fitness = None

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self.cities)
        self.invalidate()

    def distance(self) -> float:
        if self._distance is None:
            dist = 0.0
            n = len(self.cities)
            for i in range(n):
                dist += self.cities[i].distance_to(self.cities[(i + 1) % n])
            self._distance = dist
        return self._distance

    def fitness(self) -> float:
        if self._fitness is None:
            dist = self.distance()
            if dist == 0.0:
                raise DegenerateRouteError(
                    f"route over {len(self.cities)} cities has zero length; fitness is undefined"
                )
            self._fitness = 1.0 / dist
        return self._fitness

    def contains_city(self, city: City) -> bool:
        return city in self.cities

    def get_city(self, index: int) -> City:
        return self.cities[index]

    def set_city(self, index: int, city: City) -> None:
        self.cities[index] = city
        self.invalidate()

    def swap_cities(self, i: int, j: int) -> None:
        self.cities[i], self.cities[j] = self.cities[j], self.cities[i]
        self.invalidate()

    def clone(self) -> "Route":
        other = Route(self.cities)
        other._distance = self._distance
        other._fitness = self._fitness
        return other

    def city_ids(self) -> Tour:
        return [c.id for c in self.cities]

    def is_permutation_of(self, cities: Sequence[City]) -> bool:
        return len(self.cities) == len(cities) and sorted(self.city_ids()) == sorted(
            c.id for c in cities
        )

    def __contains__(self, city: City) -> bool:
        return self.contains_city(city)

    def __len__(self) -> int:
        return len(self.cities)

    def __iter__(self) -> Iterator[City]:
        return iter(self.cities)

    def __repr__(self) -> str:
        return f"Route(cities={len(self.cities)}, distance={self.distance():.2f})"
