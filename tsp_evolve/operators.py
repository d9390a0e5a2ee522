import random
from typing import List, Optional

from .core.base import City, InvariantError
from .core.population import Population
from .core.route import Route


def tournament_size(population_size: int) -> int:
    return max(1, population_size // 10)


def tournament_select(population: Population, size: int, rng: random.Random) -> Route:
    # Sampling is with replacement, so the same route may be drawn twice.
    n = population.size()
    tournament = Population()
    for _ in range(size):
        tournament.add_individual(population.get_individual(rng.randrange(n)))
    return tournament.fittest()


def _copied_from_first(index: int, start: int, end: int) -> bool:
    if start < end:
        return start < index < end
    if start > end:
        return not (end < index < start)
    return False


def crossover_at(parent1: Route, parent2: Route, start: int, end: int) -> Route:
    """Ordered crossover with fixed cut points.

    Positions selected by ``start``/``end`` keep parent 1's city; the rest are
    filled with the missing cities in parent 2's order.
    """
    n = len(parent1)
    slots: List[Optional[City]] = [None] * n
    for i in range(n):
        if _copied_from_first(i, start, end):
            slots[i] = parent1.get_city(i)

    placed = {c.id for c in slots if c is not None}
    free = (i for i in range(n) if slots[i] is None)
    for city in parent2:
        if city.id in placed:
            continue
        slot = next(free, None)
        if slot is None:
            raise InvariantError("parents do not share the same city set")
        slots[slot] = city
        placed.add(city.id)

    if any(c is None for c in slots):
        raise InvariantError(f"crossover left empty slots (start={start}, end={end})")
    return Route(slots)


def ordered_crossover(parent1: Route, parent2: Route, rng: random.Random) -> Route:
    n = len(parent1)
    start = rng.randrange(n)
    end = rng.randrange(n)
    return crossover_at(parent1, parent2, start, end)


def swap_mutate(route: Route, rate: float, rng: random.Random) -> None:
    n = len(route)
    for i in range(n):
        if rng.random() < rate:
            route.swap_cities(i, rng.randrange(n))
