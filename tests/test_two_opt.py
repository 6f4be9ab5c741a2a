import unittest
from unittest import mock

import numpy as np

from grasp_tsp.datasets import BERLIN52
from grasp_tsp.construction import construct_randomized_greedy
from grasp_tsp.instance import ProblemInstance
from grasp_tsp.two_opt import local_search, stochastic_two_opt
from grasp_tsp.tour import Tour


class TestStochasticTwoOpt(unittest.TestCase):

    def setUp(self):
        self.rng = np.random.default_rng(2025)

    def test_rearranges_same_cities(self):
        perm = np.arange(1, 11)
        for _ in range(200):
            other = stochastic_two_opt(perm, self.rng)
            self.assertEqual(len(other), len(perm))
            self.assertIsNot(other, perm)
            self.assertFalse(np.array_equal(other, perm))
            self.assertEqual(sorted(other.tolist()), perm.tolist())

    def test_input_untouched(self):
        perm = np.arange(6)
        stochastic_two_opt(perm, self.rng)
        np.testing.assert_array_equal(perm, np.arange(6))

    def test_works_on_read_only_orders(self):
        instance = ProblemInstance.from_coordinates(BERLIN52[:6])
        tour = Tour.from_order(range(6), instance)
        other = stochastic_two_opt(tour.order, self.rng)
        other[0] = other[0]
        self.assertEqual(sorted(other.tolist()), list(range(6)))

    def test_four_cities(self):
        perm = np.array([0, 1, 2, 3])
        for _ in range(50):
            other = stochastic_two_opt(perm, self.rng)
            self.assertFalse(np.array_equal(other, perm))
            self.assertEqual(sorted(other.tolist()), [0, 1, 2, 3])

    def test_too_short(self):
        with self.assertRaises(ValueError):
            stochastic_two_opt([0, 1, 2], self.rng)


class TestLocalSearch(unittest.TestCase):

    def setUp(self):
        self.rng = np.random.default_rng(11)
        self.instance = ProblemInstance.from_coordinates([(0, 0), (3, 3), (1, 1), (2, 2), (4, 4)])

    def test_improves_bad_tour(self):
        best = Tour.from_order([0, 1, 2, 3, 4], self.instance)
        result = local_search(best, self.instance, 50, self.rng)
        self.assertIsNot(result, best)
        self.assertFalse(np.array_equal(result.order, best.order))
        self.assertLess(result.cost, best.cost)

    def test_keeps_optimal_tour(self):
        best = Tour.from_order([0, 2, 3, 1, 4], self.instance)
        result = local_search(best, self.instance, 10, self.rng)
        self.assertEqual(result.cost, best.cost)
        self.assertIs(result, best)

    def test_never_worse(self):
        instance = ProblemInstance.from_coordinates(BERLIN52)
        for _ in range(5):
            start = construct_randomized_greedy(instance, 1.0, self.rng)
            result = local_search(start, instance, 20, self.rng)
            self.assertLessEqual(result.cost, start.cost)

    def test_stops_after_exactly_budget_failures(self):
        best = Tour.from_order([0, 2, 3, 1, 4], self.instance)
        for budget in (1, 7):
            with mock.patch('grasp_tsp.two_opt.stochastic_two_opt', wraps=stochastic_two_opt) as move:
                local_search(best, self.instance, budget, self.rng)
            self.assertEqual(move.call_count, budget)

    def test_improvement_resets_failure_count(self):
        # cost 17 start; moves: equal (17), optimum (10), then three equal (10)
        moves = [np.array(order) for order in
                 ([4, 3, 2, 1, 0], [0, 2, 3, 1, 4], [4, 1, 3, 2, 0], [4, 1, 3, 2, 0], [4, 1, 3, 2, 0])]
        best = Tour.from_order([0, 1, 2, 3, 4], self.instance)
        with mock.patch('grasp_tsp.two_opt.stochastic_two_opt', side_effect=moves) as move:
            result = local_search(best, self.instance, 3, self.rng)
        self.assertEqual(move.call_count, 5)
        self.assertEqual(result.cost, 10)
        np.testing.assert_array_equal(result.order, [0, 2, 3, 1, 4])

    def test_single_attempt_budget(self):
        best = Tour.from_order([0, 2, 3, 1, 4], self.instance)
        result = local_search(best, self.instance, 1, self.rng)
        self.assertEqual(result.cost, best.cost)

    def test_tiny_instances_returned_unchanged(self):
        instance = ProblemInstance.from_coordinates([(0, 0), (1, 5), (4, 2)])
        best = Tour.from_order([2, 0, 1], instance)
        self.assertIs(local_search(best, instance, 10, self.rng), best)

    def test_budget_must_be_positive(self):
        best = Tour.from_order([0, 1, 2, 3, 4], self.instance)
        with self.assertRaises(ValueError):
            local_search(best, self.instance, 0, self.rng)


if __name__ == '__main__':
    unittest.main()
