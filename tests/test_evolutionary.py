"""
Unit and integration tests for the generational engine
"""

import math
import random
import unittest

import numpy as np

from tsp_evolve.core import City, DegenerateRouteError
from tsp_evolve.evaluation import history_table
from tsp_evolve.evolutionary import EvolutionConfig, GeneticEngine

from .helpers import pentagon, random_cities


class TestEvolutionConfig(unittest.TestCase):
    def test_defaults_match_reference_run(self):
        cfg = EvolutionConfig()
        self.assertEqual(cfg.population_size, 100)
        self.assertEqual(cfg.generations, 1000)
        self.assertEqual(cfg.mutation_rate, 0.02)
        self.assertEqual(cfg.effective_tournament_size, 10)

    def test_invalid_values(self):
        for kwargs in (
            {"population_size": 0},
            {"population_size": -5},
            {"generations": -1},
            {"mutation_rate": -0.1},
            {"mutation_rate": 1.5},
            {"tournament_size": 0},
        ):
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    EvolutionConfig(**kwargs).validate()

    def test_small_population_tournament_clamped(self):
        self.assertEqual(EvolutionConfig(population_size=5).effective_tournament_size, 1)
        self.assertEqual(EvolutionConfig(population_size=5, tournament_size=3).effective_tournament_size, 3)


class TestGeneticEngine(unittest.TestCase):
    def test_rejects_bad_city_sets(self):
        cfg = EvolutionConfig(population_size=10, generations=1)
        with self.assertRaises(ValueError):
            GeneticEngine(cfg, [City(0, 0.0, 0.0)])
        with self.assertRaises(ValueError):
            GeneticEngine(cfg, [City(0, 0.0, 0.0), City(0, 1.0, 1.0)])

    def test_rejects_bad_config_before_running(self):
        with self.assertRaises(ValueError):
            GeneticEngine(EvolutionConfig(mutation_rate=2.0), random_cities(5, seed=0))

    def test_zero_generations(self):
        cities = random_cities(6, seed=1)
        engine = GeneticEngine(EvolutionConfig(population_size=10, generations=0), cities)
        best = engine.run()
        self.assertEqual(engine.generation, 0)
        self.assertEqual(engine.history, [])
        self.assertTrue(best.is_permutation_of(cities))

    def test_population_size_kept(self):
        cities = random_cities(8, seed=2)
        engine = GeneticEngine(EvolutionConfig(population_size=17, generations=5), cities)
        for _ in range(5):
            engine.step()
            self.assertEqual(engine.population.size(), 17)
        self.assertEqual(engine.generation, 5)

    def test_population_size_one(self):
        cities = random_cities(5, seed=3)
        engine = GeneticEngine(EvolutionConfig(population_size=1, generations=10), cities)
        best = engine.run()
        self.assertEqual(engine.population.size(), 1)
        self.assertTrue(best.is_permutation_of(cities))

    def test_every_route_stays_a_permutation(self):
        for seed in range(5):
            cities = random_cities(12, seed=seed)
            engine = GeneticEngine(
                EvolutionConfig(population_size=20, generations=15, mutation_rate=0.2, random_seed=seed),
                cities,
            )
            for _ in range(15):
                engine.step()
                for route in engine.population:
                    self.assertTrue(route.is_permutation_of(cities))

    def test_best_seen_monotonic(self):
        for seed in range(5):
            cities = random_cities(15, seed=100 + seed)
            engine = GeneticEngine(
                EvolutionConfig(population_size=30, generations=40, random_seed=seed), cities
            )
            engine.run()
            table = history_table(engine.history)
            self.assertTrue(np.all(np.diff(table[:, 4]) <= 0))
            # With elitism the generation best never gets worse either.
            self.assertTrue(np.all(np.diff(table[:, 1]) <= 1e-9))
            self.assertAlmostEqual(engine.best_seen.distance(), table[-1, 4])

    def test_elite_carried_unmutated(self):
        cities = random_cities(10, seed=7)
        engine = GeneticEngine(EvolutionConfig(population_size=20, mutation_rate=1.0), cities)
        engine.step()
        elite = engine.population.get_individual(0)
        self.assertEqual(elite.city_ids(), engine.best_seen.city_ids())
        self.assertIsNot(elite, engine.best_seen)

    def test_generations_do_not_share_routes(self):
        cities = random_cities(10, seed=8)
        engine = GeneticEngine(EvolutionConfig(population_size=20), cities)
        old = list(engine.population)
        engine.step()
        new_ids = {id(r) for r in engine.population}
        self.assertFalse(any(id(r) in new_ids for r in old))

    def test_on_generation_callback(self):
        seen = []
        engine = GeneticEngine(
            EvolutionConfig(population_size=10, generations=4),
            random_cities(6, seed=9),
            on_generation=seen.append,
        )
        engine.run()
        self.assertEqual([s.generation for s in seen], [0, 1, 2, 3])
        for s in seen:
            self.assertLessEqual(s.best, s.mean + 1e-9)
            self.assertLessEqual(s.mean, s.worst + 1e-9)

    def test_coincident_cities_abort(self):
        cities = [City(i, 5.0, 5.0) for i in range(4)]
        engine = GeneticEngine(EvolutionConfig(population_size=5, generations=3), cities)
        with self.assertRaises(DegenerateRouteError):
            engine.run()


class TestPentagonScenario(unittest.TestCase):
    def setUp(self):
        self.cities = pentagon()
        self.optimal = 5 * 2 * 10.0 * math.sin(math.pi / 5)

    def _run(self, seed: int):
        cfg = EvolutionConfig(population_size=20, generations=200, mutation_rate=0.02, random_seed=seed)
        engine = GeneticEngine(cfg, self.cities, rng=random.Random(seed))
        return engine.run()

    def test_same_seed_is_deterministic(self):
        first = self._run(42)
        second = self._run(42)
        self.assertEqual(first.distance(), second.distance())
        self.assertEqual(first.city_ids(), second.city_ids())

    def test_different_seeds_terminate_with_valid_tours(self):
        for seed in (1, 2):
            best = self._run(seed)
            self.assertTrue(best.is_permutation_of(self.cities))
            self.assertTrue(math.isfinite(best.distance()))
            self.assertGreater(best.distance(), 0.0)
            self.assertGreaterEqual(best.distance(), self.optimal - 1e-9)

    def test_finds_perimeter(self):
        # Only 12 distinct tours exist over five cities.
        self.assertAlmostEqual(self._run(3).distance(), self.optimal)


if __name__ == "__main__":
    unittest.main()
