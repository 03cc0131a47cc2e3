"""
Tests for GA operators: chromosome factories, selection, crossover and mutation.
"""

import unittest
from collections import Counter

import numpy as np

from bombard_ant.data_models import Chromosome, create_chromosome, random_chromosome
from bombard_ant.fitness import FitnessModel
from bombard_ant.geometry import GridBounds, Point, random_point
from bombard_ant.nests import select_nests
from bombard_ant.selection import roulette_wheel_selection, total_fitness
from bombard_ant.crossover import single_point_crossover
from bombard_ant.mutation import mutate


class StubRng:
    """Generator stand-in returning fixed draws."""

    def __init__(self, random_value=0.5, integer_value=0, uniform_value=0.0):
        self.random_value = random_value
        self.integer_value = integer_value
        self.uniform_value = uniform_value

    def random(self):
        return self.random_value

    def integers(self, low, high):
        return self.integer_value

    def uniform(self, low, high):
        return self.uniform_value


def make_population(fitness_values):
    return [Chromosome(bombs=[Point(0, 0)], fitness=f) for f in fitness_values]


class TestChromosome(unittest.TestCase):
    """Test chromosome construction."""

    def setUp(self):
        self.model = FitnessModel(select_nests(), blast_radius=10.0)
        self.rng = np.random.default_rng(42)

    def test_create_evaluates_eagerly(self):
        bombs = [Point(25, 65), Point(54, 56), Point(67, 78)]
        chromosome = create_chromosome(bombs, self.model)
        self.assertEqual(chromosome.fitness, self.model.evaluate(bombs))
        self.assertGreater(chromosome.fitness, 0.0)

    def test_create_copies_genes_and_drops_ants(self):
        bombs = [Point(1, 2, 50)]
        chromosome = create_chromosome(bombs, self.model)
        bombs[0].x = 99
        self.assertEqual(chromosome.bombs[0].x, 1)
        self.assertEqual(chromosome.bombs[0].ants, 0)

    def test_copy_is_independent(self):
        chromosome = random_chromosome(3, self.model, GridBounds(), self.rng)
        clone = chromosome.copy()
        clone.bombs[0].x += 1
        self.assertNotEqual(clone.bombs[0].x, chromosome.bombs[0].x)
        self.assertEqual(clone.fitness, chromosome.fitness)

    def test_random_chromosome_length(self):
        chromosome = random_chromosome(5, self.model, GridBounds(), self.rng)
        self.assertEqual(len(chromosome), 5)
        self.assertEqual(len(chromosome.positions()), 5)


class TestSelection(unittest.TestCase):
    """Test roulette-wheel selection."""

    def test_zero_fitness_is_uniform(self):
        """With no fitness every index is equally likely"""
        population = make_population([0.0] * 5)
        rng = np.random.default_rng(42)
        counts = Counter(roulette_wheel_selection(population, 0.0, rng) for _ in range(10000))

        self.assertEqual(set(counts.keys()), set(range(5)))
        for count in counts.values():
            self.assertGreater(count, 1700)
            self.assertLess(count, 2300)

    def test_negative_total_falls_back(self):
        population = make_population([0.0, 0.0])
        idx = roulette_wheel_selection(population, -1.0, StubRng(integer_value=1))
        self.assertEqual(idx, 1)

    def test_only_fit_member_selected(self):
        population = make_population([0.0, 0.0, 10.0])
        rng = np.random.default_rng(42)
        for _ in range(200):
            self.assertEqual(roulette_wheel_selection(population, 10.0, rng), 2)

    def test_proportional(self):
        population = make_population([1.0, 3.0])
        rng = np.random.default_rng(3)
        counts = Counter(roulette_wheel_selection(population, 4.0, rng) for _ in range(8000))
        self.assertAlmostEqual(counts[1] / 8000, 0.75, delta=0.03)

    def test_first_index_reaching_slice(self):
        population = make_population([2.0, 2.0, 2.0])
        self.assertEqual(roulette_wheel_selection(population, 6.0, StubRng(uniform_value=2.0)), 0)
        self.assertEqual(roulette_wheel_selection(population, 6.0, StubRng(uniform_value=2.5)), 1)

    def test_overflow_returns_last(self):
        """A slice beyond the cumulative sum falls back to the last index"""
        population = make_population([1.0, 1.0, 1.0])
        idx = roulette_wheel_selection(population, 10.0, StubRng(uniform_value=9.0))
        self.assertEqual(idx, 2)

    def test_total_computed_when_missing(self):
        population = make_population([0.0, 5.0])
        self.assertEqual(total_fitness(population), 5.0)
        self.assertEqual(roulette_wheel_selection(population, None, StubRng(uniform_value=1.0)), 1)


class TestCrossover(unittest.TestCase):
    """Test single-point crossover."""

    def setUp(self):
        self.model = FitnessModel(select_nests(), blast_radius=10.0)
        self.bounds = GridBounds()
        self.parent_a = create_chromosome([Point(i, i) for i in range(1, 6)], self.model)
        self.parent_b = create_chromosome([Point(50 + i, 50 + i) for i in range(1, 6)], self.model)

    def test_fixed_point_split(self):
        """Genes up to k come from one parent, the rest from the other"""
        for k in range(5):
            child_a, child_b = single_point_crossover(
                self.parent_a, self.parent_b, 1.0, 0.0, self.model, self.bounds,
                StubRng(random_value=0.5, integer_value=k)
            )
            self.assertEqual(child_a.positions()[:k + 1], self.parent_a.positions()[:k + 1])
            self.assertEqual(child_a.positions()[k + 1:], self.parent_b.positions()[k + 1:])
            self.assertEqual(child_b.positions()[:k + 1], self.parent_b.positions()[:k + 1])
            self.assertEqual(child_b.positions()[k + 1:], self.parent_a.positions()[k + 1:])

    def test_no_crossover_copies_parents(self):
        rng = np.random.default_rng(42)
        child_a, child_b = single_point_crossover(
            self.parent_a, self.parent_b, 0.0, 0.0, self.model, self.bounds, rng
        )
        self.assertEqual(child_a.positions(), self.parent_a.positions())
        self.assertEqual(child_b.positions(), self.parent_b.positions())
        self.assertEqual(child_a.fitness, self.parent_a.fitness)

    def test_children_do_not_alias_parents(self):
        """Mutating children leaves parents untouched"""
        before_a = self.parent_a.positions()
        before_b = self.parent_b.positions()
        rng = np.random.default_rng(42)
        child_a, child_b = single_point_crossover(
            self.parent_a, self.parent_b, 1.0, 1.0, self.model, self.bounds, rng
        )
        self.assertEqual(self.parent_a.positions(), before_a)
        self.assertEqual(self.parent_b.positions(), before_b)
        self.assertIsNot(child_a.bombs[0], self.parent_a.bombs[0])

    def test_children_fitness_in_sync(self):
        rng = np.random.default_rng(1)
        child_a, child_b = single_point_crossover(
            self.parent_a, self.parent_b, 0.8, 0.5, self.model, self.bounds, rng
        )
        self.assertEqual(child_a.fitness, self.model.evaluate(child_a.bombs))
        self.assertEqual(child_b.fitness, self.model.evaluate(child_b.bombs))


class TestMutation(unittest.TestCase):
    """Test per-gene mutation."""

    def setUp(self):
        self.model = FitnessModel(select_nests(), blast_radius=10.0)
        self.bounds = GridBounds(100, 100)
        self.rng = np.random.default_rng(42)

    def test_zero_rate_keeps_genes(self):
        chromosome = random_chromosome(4, self.model, self.bounds, self.rng)
        before = chromosome.positions()
        fitness = chromosome.fitness

        mutated = mutate(chromosome, 0.0, self.model, self.bounds, self.rng)

        self.assertEqual(mutated, [])
        self.assertEqual(chromosome.positions(), before)
        self.assertEqual(chromosome.fitness, fitness)

    def test_full_rate_replaces_every_gene(self):
        chromosome = random_chromosome(6, self.model, self.bounds, self.rng)
        before = chromosome.positions()

        mutated = mutate(chromosome, 1.0, self.model, self.bounds, self.rng)

        self.assertEqual(mutated, list(range(6)))
        for old, bomb in zip(before, chromosome.bombs):
            self.assertNotEqual(old, bomb.as_tuple())
            self.assertTrue(self.bounds.contains(bomb))

    def test_fitness_recomputed(self):
        chromosome = random_chromosome(3, self.model, self.bounds, self.rng)
        mutate(chromosome, 1.0, self.model, self.bounds, self.rng)
        self.assertEqual(chromosome.fitness, self.model.evaluate(chromosome.bombs))

    def test_replacement_drawn_like_random_point(self):
        """Each replaced gene takes the next uniform grid position"""
        chromosome = create_chromosome([Point(1, 1), Point(2, 2)], self.model)
        mutate(chromosome, 1.0, self.model, self.bounds, np.random.default_rng(9))

        expected_rng = np.random.default_rng(9)
        expected = []
        for _ in range(2):
            expected_rng.random()
            expected.append(random_point(self.bounds, expected_rng).as_tuple())

        self.assertEqual(chromosome.positions(), expected)

    def test_respects_custom_bounds(self):
        bounds = GridBounds(10, 5)
        chromosome = random_chromosome(20, self.model, bounds, self.rng)
        mutate(chromosome, 1.0, self.model, bounds, self.rng)
        for bomb in chromosome.bombs:
            self.assertTrue(bounds.contains(bomb))


if __name__ == '__main__':
    unittest.main()
