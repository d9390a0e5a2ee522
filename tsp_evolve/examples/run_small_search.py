import math
import random

from tsp_evolve.core import City
from tsp_evolve.evolutionary import EvolutionConfig, GeneticEngine


def pentagon(radius: float = 10.0):
    return [
        City(i, radius * math.cos(2 * math.pi * i / 5), radius * math.sin(2 * math.pi * i / 5))
        for i in (0, 2, 4, 1, 3)
    ]


def main():
    cities = pentagon()
    cfg = EvolutionConfig(population_size=20, generations=200, mutation_rate=0.02, random_seed=7)
    engine = GeneticEngine(cfg, cities, rng=random.Random(cfg.random_seed))
    best = engine.run()
    print(f"best tour={best.city_ids()} distance={best.distance():.4f}")
    for stats in engine.history[::50]:
        print(f"gen {stats.generation}: best={stats.best:.4f} mean={stats.mean:.4f}")


if __name__ == "__main__":
    main()
