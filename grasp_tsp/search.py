import concurrent.futures
import logging
import time
from typing import Optional

import numpy as np

from .config import GRASPConfig
from .construction import construct_randomized_greedy
from .instance import ProblemInstance, as_instance
from .two_opt import local_search
from .tour import SearchResult, Tour

logger = logging.getLogger(__name__)


def _reduce_restarts(finished):
    """
    Merge completed restarts given as ``{restart index: Tour}``.

    The winner is the minimum over (cost, restart index). ``history[i]`` is the
    running best after restart ``i``; a restart skipped by the time limit
    repeats the previous value, so ``history[iteration]`` is always the winning
    cost.
    """
    best = Tour.unset()
    best_iteration = -1
    history = []
    for i in range(max(finished) + 1 if finished else 0):
        candidate = finished.get(i)
        if candidate is not None and candidate.cost < best.cost:
            best = candidate
            best_iteration = i
        history.append(best.cost)
    return best, best_iteration, history


class GRASP:
    """
    Greedy Randomized Adaptive Search Procedure for the Euclidean TSP.

    Every restart builds a tour with the randomized greedy constructor and
    refines it with stochastic 2-opt; the best tour over all restarts wins.
    """

    def __init__(self, config: Optional[GRASPConfig] = None):
        self.config = config if config is not None else GRASPConfig()

    def _restart(self, instance: ProblemInstance, rng: np.random.Generator) -> Tour:
        candidate = construct_randomized_greedy(instance, self.config.greediness_factor, rng)
        return local_search(candidate, instance, self.config.max_no_improvements, rng)

    def search(self, cities, rng: Optional[np.random.Generator] = None) -> SearchResult:
        """
        Run the full search.

        Args:
            cities: a ProblemInstance or a sequence of (x, y) pairs.
            rng: random source, defaults to ``np.random.default_rng(config.seed)``.

        Returns:
            SearchResult holding the best tour and the restart that found it.
        """
        instance = as_instance(cities)
        if rng is None:
            rng = np.random.default_rng(self.config.seed)

        start_time = time.perf_counter()
        if self.config.n_workers > 1:
            best, best_iteration, history, iterations_run = self._search_parallel(instance, rng, start_time)
        else:
            best, best_iteration, history, iterations_run = self._search_sequential(instance, rng, start_time)

        return SearchResult(
            tour=best,
            iteration=best_iteration,
            history=tuple(history),
            iterations_run=iterations_run,
            elapsed=time.perf_counter() - start_time,
        )

    def _time_is_up(self, start_time: float) -> bool:
        limit = self.config.time_limit
        return limit is not None and time.perf_counter() - start_time >= limit

    def _search_sequential(self, instance, rng, start_time):
        best = Tour.unset()
        best_iteration = -1
        history = []

        for i in range(self.config.max_iterations):
            if i > 0 and self._time_is_up(start_time):
                logger.info("time limit reached after %d iterations", i)
                break
            candidate = self._restart(instance, rng)
            if candidate.cost < best.cost:
                best = candidate
                best_iteration = i
            history.append(best.cost)
            logger.info(" > iteration #%d, best=%s", i + 1, best.cost)

        return best, best_iteration, history, len(history)

    def _search_parallel(self, instance, rng, start_time):
        # one stream per restart: the winner is independent of scheduling and worker count
        streams = rng.spawn(self.config.max_iterations)

        def run(i):
            if i > 0 and self._time_is_up(start_time):
                return i, None
            return i, self._restart(instance, streams[i])

        finished = {}
        running_best = np.inf
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.config.n_workers) as executor:
            futures = [executor.submit(run, i) for i in range(self.config.max_iterations)]
            for future in concurrent.futures.as_completed(futures):
                i, candidate = future.result()
                if candidate is None:
                    continue
                finished[i] = candidate
                running_best = min(running_best, candidate.cost)
                logger.info(" > restart #%d done (%d/%d), best=%s",
                            i + 1, len(finished), self.config.max_iterations, running_best)

        if len(finished) < self.config.max_iterations:
            logger.info("time limit reached after %d iterations", len(finished))

        best, best_iteration, history = _reduce_restarts(finished)
        return best, best_iteration, history, len(finished)


def grasp_search(cities, rng: Optional[np.random.Generator] = None, **options) -> SearchResult:
    """Shortcut for ``GRASP(GRASPConfig(**options)).search(cities, rng)``."""
    return GRASP(GRASPConfig(**options)).search(cities, rng)
