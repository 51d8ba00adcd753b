"""Solver base classes shared by knapsack and subset sum solvers."""

#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
from __future__ import annotations  # see annotations as str

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from knapsack_optimization.generic_tools.callbacks.callback import Callback
from knapsack_optimization.generic_tools.do_problem import (
    Number,
    ParamsObjectiveFunction,
    Problem,
    Solution,
    build_aggreg_function_and_params_objective,
)
from knapsack_optimization.generic_tools.hyperparameters.hyperparametrizable import (
    Hyperparametrizable,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
    fitness_class,
)


class StatusSolver(Enum):
    """Quality of the result returned by the last solve.

    OPTIMAL: the best stored solution is proven optimal (exact algorithm ran to completion).
    SATISFIED: the best stored solution is feasible, with no optimality guarantee
        (heuristic, exhausted budget or stop asked by a callback).
    UNSATISFIABLE: no solution meets the requested constraints.
    UNKNOWN: no solve performed yet.

    """

    SATISFIED = "SATISFIED"
    UNSATISFIABLE = "UNSATISFIABLE"
    OPTIMAL = "OPTIMAL"
    UNKNOWN = "UNKNOWN"


class SolverDO(Hyperparametrizable, ABC):
    """Base class of every solver.

    The instance is validated when the solver is built (`problem.check_instance()`),
    so a malformed instance never reaches an algorithm.
    Aggregation of the problem kpis into a single fitness is prepared once here and
    exposed as `aggreg_from_sol` / `aggreg_from_dict`.

    """

    problem: Problem
    status_solver: StatusSolver = StatusSolver.UNKNOWN

    def __init__(
        self,
        problem: Problem,
        params_objective_function: Optional[ParamsObjectiveFunction] = None,
        **kwargs: Any,
    ):
        problem.check_instance()
        self.problem = problem
        (
            self.aggreg_from_sol,
            self.aggreg_from_dict,
            self.params_objective_function,
        ) = build_aggreg_function_and_params_objective(
            problem=self.problem,
            params_objective_function=params_objective_function,
        )

    @abstractmethod
    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        """Run the algorithm on `self.problem`.

        Args:
            callbacks: observers notified at solve start and end, and for each new
                solution stored (`on_step_end`, able to stop the solve)
            **kwargs: hyperparameters of the solver

        Returns: a fresh result storage, whose `status_solver` tells whether its best
            solution is proven optimal.

        """
        ...

    def create_result_storage(
        self,
        list_solution_fits: Optional[list[tuple[Solution, fitness_class]]] = None,
    ) -> ResultStorage:
        """Result storage using the objective sense of the solver and its current status."""
        return ResultStorage(
            mode_optim=self.params_objective_function.sense_function,
            list_solution_fits=list_solution_fits,
            status_solver=self.status_solver,
        )

    def init_model(self, **kwargs: Any) -> None:
        """Prepare the internal data of the algorithm (sorted items, tables, ...).

        Solvers needing it call it at the start of `solve()`, so calling it beforehand is optional.

        """
        ...

    def is_optimal(self) -> Optional[bool]:
        """Whether the last solve proved optimality, None if no solve happened."""
        if self.status_solver == StatusSolver.UNKNOWN:
            return None
        return self.status_solver == StatusSolver.OPTIMAL


class BoundsProviderMixin(ABC):
    """Solvers able to report the incumbent value and an optimistic bound during the search.

    Used by `ObjectiveGapStopper` to stop a solve once the gap is small enough.

    """

    @abstractmethod
    def get_current_best_internal_objective_bound(self) -> Optional[Number]:
        ...

    @abstractmethod
    def get_current_best_internal_objective_value(self) -> Optional[Number]:
        ...

    def get_current_absolute_gap(self) -> Optional[Number]:
        """|incumbent value - bound|, None while one of them is unknown."""
        bound = self.get_current_best_internal_objective_bound()
        best_sol = self.get_current_best_internal_objective_value()
        if bound is None or best_sol is None:
            return None
        return abs(best_sol - bound)
