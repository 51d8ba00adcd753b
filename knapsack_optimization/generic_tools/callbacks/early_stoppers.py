#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import logging
import time
from typing import Optional

from knapsack_optimization.generic_tools.callbacks.callback import Callback
from knapsack_optimization.generic_tools.do_solver import (
    BoundsProviderMixin,
    SolverDO,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)

logger = logging.getLogger(__name__)


class TimerStopper(Callback):
    """Stop once `total_seconds` have elapsed since the solve started.

    The clock is only read every `check_nb_steps` new solutions, so a solver
    finding no solution is never stopped by it. Use the `time_limit`
    hyperparameter of the branch and bound for a hard limit.

    """

    def __init__(self, total_seconds: float, check_nb_steps: int = 1):
        self.total_seconds = total_seconds
        self.check_nb_steps = check_nb_steps
        self.start_time: Optional[float] = None

    def on_solve_start(self, solver: SolverDO):
        self.start_time = time.perf_counter()

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        if step % self.check_nb_steps != 0:
            return False
        elapsed = time.perf_counter() - self.start_time
        logger.debug(f"{elapsed:.3f}s elapsed since solve start")
        if elapsed >= self.total_seconds:
            logger.info(f"Stopping solve after {elapsed:.3f}s")
            return True
        return False


class NbIterationStopper(Callback):
    """Stop once `nb_iteration_max` solutions have been stored in the current solve."""

    def __init__(self, nb_iteration_max: int):
        self.nb_iteration_max = nb_iteration_max
        self.nb_iteration = 0

    def on_solve_start(self, solver: SolverDO):
        self.nb_iteration = 0

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        self.nb_iteration += 1
        stop = self.nb_iteration >= self.nb_iteration_max
        if stop:
            logger.info(f"Stopping solve after {self.nb_iteration} solutions")
        return stop


class ObjectiveGapStopper(Callback):
    """Stop when the incumbent is close enough to the optimistic bound.

    Requires a solver implementing `BoundsProviderMixin` (the branch and bound).
    The gap is checked in absolute value, then relatively to the bound.

    """

    def __init__(
        self,
        objective_gap_rel: Optional[float] = None,
        objective_gap_abs: Optional[float] = None,
    ):
        self.objective_gap_rel = objective_gap_rel
        self.objective_gap_abs = objective_gap_abs

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        if not isinstance(solver, BoundsProviderMixin):
            raise ValueError(
                f"{solver.__class__.__name__} does not provide bounds "
                f"and cannot be used with {self.__class__.__name__}."
            )
        gap = solver.get_current_absolute_gap()
        if gap is None:
            return False
        if self.objective_gap_abs is not None and gap <= self.objective_gap_abs:
            logger.debug(f"Stopping solve, absolute gap {gap}")
            return True
        bound = solver.get_current_best_internal_objective_bound()
        if self.objective_gap_rel is not None and bound != 0:
            if gap / abs(bound) <= self.objective_gap_rel:
                logger.debug(f"Stopping solve, relative gap {gap / abs(bound)}")
                return True
        return False
