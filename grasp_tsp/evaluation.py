from __future__ import annotations

import concurrent.futures
import csv
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from tqdm import tqdm

from .config import GRASPConfig
from .instance import ProblemInstance, tour_length
from .solver import TSPSolver
from .tour import check_feasibility

logger = logging.getLogger(__name__)

__all__ = ['GRASPEvaluation']

FIELDNAMES = ['instance_name', 'seed', 'cost', 'gap', 'time']


class GRASPEvaluation:
    """
    Runs GRASP on a set of TSP instances with several seeds in parallel
    and writes one result row per (instance, seed) to a CSV file.
    """

    def __init__(self,
                 instances: Mapping[str, Sequence],
                 seeds: Sequence[int] = (0,),
                 config: Optional[GRASPConfig] = None,
                 num_threads: int = 4,
                 output_csv_path: Optional[str] = 'grasp_results.csv',
                 baselines: Optional[Mapping[str, float]] = None):
        """
        Args:
            instances: instance name -> (x, y) coordinates.
            seeds: one solve per seed and instance.
            config: GRASP parameters shared by every run; its seed is overridden per task.
            num_threads: size of the thread pool running the tasks.
            output_csv_path: where to write the results, None to skip writing.
            baselines: instance name -> reference tour length used for the gap.
        """
        if num_threads < 1:
            raise ValueError(f"num_threads must be >= 1, got {num_threads}.")
        self.instances = {name: ProblemInstance.from_coordinates(coords) for name, coords in instances.items()}
        self.seeds = list(seeds)
        self.config = config if config is not None else GRASPConfig()
        self.num_threads = num_threads
        self.output_csv_path = output_csv_path
        self.baselines = dict(baselines or {})

        logger.info("Loaded %d TSP instances, %d seeds each, %d threads.",
                    len(self.instances), len(self.seeds), self.num_threads)

    def _run_single_solve(self, task_args: Tuple[str, int]) -> Dict[str, Any]:
        """Solve one instance with one seed."""
        instance_name, seed = task_args
        instance = self.instances[instance_name]
        row = {'instance_name': instance_name, 'seed': seed, 'cost': 'runtime_error', 'gap': 'N/A', 'time': 0.0}

        try:
            solver = TSPSolver(instance.coordinates, config=self.config, rng=np.random.default_rng(seed))
            solve_start_time = time.perf_counter()
            solution = solver.solve()
            row['time'] = time.perf_counter() - solve_start_time

            if not check_feasibility(solution, instance.n_cities):
                row['cost'] = 'infeasible'
                return row

            cost = tour_length(solution, instance)
            row['cost'] = cost
            baseline = self.baselines.get(instance_name)
            if baseline:
                row['gap'] = (cost - baseline) / baseline
        except Exception:
            logger.exception("Runtime error on %s with seed %s", instance_name, seed)
        return row

    def evaluate(self) -> List[Dict[str, Any]]:
        """Evaluate every (instance, seed) pair; rows come back in task order."""
        start_time = time.perf_counter()
        tasks = [(name, seed) for name in self.instances for seed in self.seeds]

        rows = [None] * len(tasks)
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.num_threads) as executor:
            future_to_index = {executor.submit(self._run_single_solve, task): k for k, task in enumerate(tasks)}
            for future in tqdm(concurrent.futures.as_completed(future_to_index), total=len(tasks),
                               desc="Evaluating GRASP"):
                rows[future_to_index[future]] = future.result()

        if self.output_csv_path is not None:
            self.write_results_to_csv(rows)

        logger.info("Evaluation finished in %.2f seconds.", time.perf_counter() - start_time)
        return rows

    def write_results_to_csv(self, results_data: List[Dict[str, Any]]):
        """Writes the evaluation results to a CSV file."""
        if not results_data:
            logger.warning("No results to write.")
            return

        with open(self.output_csv_path, 'w', newline='') as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=FIELDNAMES, restval='N/A')
            writer.writeheader()
            writer.writerows(results_data)
        logger.info("Wrote results to '%s'", self.output_csv_path)
