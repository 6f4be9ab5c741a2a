import unittest

import numpy as np

from grasp_tsp.config import GRASPConfig
from grasp_tsp.datasets import BERLIN52
from grasp_tsp.solver import TSPSolver
from grasp_tsp.tour import check_feasibility


class TestTSPSolver(unittest.TestCase):

    def setUp(self):
        self.coordinates = np.array(BERLIN52[:20], dtype=float)
        self.config = GRASPConfig(max_iterations=3, max_no_improvements=20)

    def test_solve_returns_permutation(self):
        solver = TSPSolver(self.coordinates, config=self.config, rng=np.random.default_rng(0))
        solution = solver.solve()
        self.assertIsInstance(solution, np.ndarray)
        self.assertTrue(check_feasibility(solution, 20))
        self.assertEqual(solver.result.iterations_run, 3)
        np.testing.assert_array_equal(solution, solver.result.order)

    def test_solution_is_writable_copy(self):
        solver = TSPSolver(self.coordinates, config=self.config, rng=np.random.default_rng(0))
        solution = solver.solve()
        solution[0] = solution[0]
        self.assertIsNot(solution, solver.result.order)

    def test_distance_matrix_is_rounded(self):
        solver = TSPSolver([(0, 0), (1, 1), (2, 2)])
        self.assertEqual(solver.distance_matrix[0, 1], 1)
        self.assertEqual(solver.distance_matrix[0, 2], 3)

    def test_rejects_invalid_coordinates(self):
        with self.assertRaises(ValueError):
            TSPSolver([(0, 0)])


if __name__ == '__main__':
    unittest.main()
