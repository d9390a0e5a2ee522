import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .core.base import City
from .core.population import Population
from .core.route import Route
from .evaluation import GenerationStats, evaluate_population, population_stats
from .operators import ordered_crossover, swap_mutate, tournament_select
from .operators import tournament_size as default_tournament_size


@dataclass
class EvolutionConfig:
    population_size: int = 100
    generations: int = 1000
    mutation_rate: float = 0.02
    random_seed: int = 123
    tournament_size: Optional[int] = None

    def validate(self) -> None:
        if self.population_size <= 0:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError(f"mutation_rate must be in [0, 1], got {self.mutation_rate}")
        if self.tournament_size is not None and self.tournament_size <= 0:
            raise ValueError(f"tournament_size must be positive, got {self.tournament_size}")

    @property
    def effective_tournament_size(self) -> int:
        if self.tournament_size is not None:
            return self.tournament_size
        return default_tournament_size(self.population_size)


class GeneticEngine:
    def __init__(
        self,
        config: EvolutionConfig,
        cities: Sequence[City],
        rng: random.Random = None,
        on_generation: Callable[[GenerationStats], None] = None,
    ):
        config.validate()
        if len(cities) < 2:
            raise ValueError(f"need at least 2 cities, got {len(cities)}")
        if len({c.id for c in cities}) != len(cities):
            raise ValueError("city ids must be distinct")
        self.cfg = config
        self.cities: List[City] = list(cities)
        self.rng = rng or random.Random(config.random_seed)
        self.on_generation = on_generation
        self.population = Population.random(self.cities, config.population_size, self.rng)
        self.best_seen: Optional[Route] = None
        self.generation = 0
        self.history: List[GenerationStats] = []

    def select(self) -> Route:
        return tournament_select(self.population, self.cfg.effective_tournament_size, self.rng)

    def breed(self) -> Route:
        parent1 = self.select()
        parent2 = self.select()
        child = ordered_crossover(parent1, parent2, self.rng)
        swap_mutate(child, self.cfg.mutation_rate, self.rng)
        return child

    def step(self) -> None:
        evaluate_population(self.population)
        best = self.population.fittest()
        if self.best_seen is None or best.distance() < self.best_seen.distance():
            self.best_seen = best.clone()

        stats = population_stats(self.population, self.generation, self.best_seen.distance())
        self.history.append(stats)
        if self.on_generation is not None:
            self.on_generation(stats)

        new_pop = Population()
        new_pop.add_individual(best.clone())
        while new_pop.size() < self.cfg.population_size:
            new_pop.add_individual(self.breed())
        self.population = new_pop
        self.generation += 1

    def run(self) -> Route:
        for _ in range(self.cfg.generations):
            self.step()
        return self.best()

    def best(self) -> Route:
        """Best route seen so far, or the current fittest before the first generation."""
        if self.best_seen is not None:
            return self.best_seen
        evaluate_population(self.population)
        return self.population.fittest()
