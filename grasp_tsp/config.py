"""GRASP parameters with their defaults.

  - max_iterations: outer restarts (construction + local search).
  - max_no_improvements: consecutive failed 2-opt moves that end a local search.
  - greediness_factor: RCL width, 0 = nearest city only, 1 = any unvisited city.
  - seed: seed for the default random generator, None for fresh entropy.
  - n_workers: restarts run on a thread pool when greater than 1.
  - time_limit: seconds after which no new restart is started, None for no limit.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GRASPConfig:
    max_iterations: int = 50
    max_no_improvements: int = 50
    greediness_factor: float = 0.3
    seed: Optional[int] = None
    n_workers: int = 1
    time_limit: Optional[float] = None

    def __post_init__(self):
        for name in ('max_iterations', 'max_no_improvements', 'n_workers'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}.")
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}.")

        alpha = self.greediness_factor
        if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real) or not math.isfinite(alpha):
            raise ValueError(f"greediness_factor must be a finite number, got {alpha!r}.")
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"greediness_factor must be in [0, 1], got {alpha}.")

        if self.time_limit is not None:
            if not isinstance(self.time_limit, numbers.Real) or not self.time_limit > 0:
                raise ValueError(f"time_limit must be a positive number of seconds, got {self.time_limit!r}.")


__all__ = ['GRASPConfig']
