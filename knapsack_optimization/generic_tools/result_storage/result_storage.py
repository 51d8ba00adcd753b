#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations

from collections.abc import Iterable, MutableSequence
from typing import TYPE_CHECKING, Optional, Union

from knapsack_optimization.generic_tools.do_problem import (
    ModeOptim,
    Number,
    ParamsObjectiveFunction,
    Problem,
    Solution,
    build_aggreg_function_and_params_objective,
)

if TYPE_CHECKING:  # do_solver imports this module
    from knapsack_optimization.generic_tools.do_solver import StatusSolver

fitness_class = Number


class ResultStorage(MutableSequence):
    """Ordered list of (solution, fitness) pairs found by a solver.

    Pairs are stored in the order the solver found them, so the last improving
    solution of a search is always at the end.
    `status_solver` records how the storage was produced (proven optimal, feasible only, ...).

    """

    list_solution_fits: list[tuple[Solution, fitness_class]]
    status_solver: Optional[StatusSolver]

    def __init__(
        self,
        mode_optim: ModeOptim,
        list_solution_fits: Optional[list[tuple[Solution, fitness_class]]] = None,
        status_solver: Optional[StatusSolver] = None,
    ):
        self.list_solution_fits = (
            [] if list_solution_fits is None else list_solution_fits
        )
        self.mode_optim = mode_optim
        self.maximize = mode_optim == ModeOptim.MAXIMIZATION
        self.status_solver = status_solver

    def __getitem__(self, index) -> tuple[Solution, fitness_class]:
        return self.list_solution_fits[index]

    def __setitem__(self, index: int, value: tuple[Solution, fitness_class]):
        self.list_solution_fits[index] = value

    def __delitem__(self, index: int) -> None:
        del self.list_solution_fits[index]

    def __len__(self) -> int:
        return len(self.list_solution_fits)

    def insert(self, index, value: tuple[Solution, fitness_class]) -> None:
        self.list_solution_fits.insert(index, value)

    def _ranked(self) -> list[tuple[Solution, fitness_class]]:
        # sorted is stable: among equal fitnesses the earliest found comes first
        return sorted(
            self.list_solution_fits, key=lambda sol_fit: sol_fit[1], reverse=self.maximize
        )

    def get_best_solution_fit(
        self, satisfying: Optional[Problem] = None
    ) -> Union[tuple[Solution, fitness_class], tuple[None, None]]:
        """Best pair stored, or (None, None).

        Args:
            satisfying: if given, only solutions satisfying this problem are candidates.

        """
        for sol, fit in self._ranked():
            if satisfying is None or satisfying.satisfy(sol):
                return sol, fit
        return None, None

    def get_best_solution(self) -> Optional[Solution]:
        return self.get_best_solution_fit()[0]


def from_solutions_to_result_storage(
    list_solution: Iterable[Solution],
    problem: Problem,
    params_objective_function: Optional[ParamsObjectiveFunction] = None,
) -> ResultStorage:
    """Evaluate solutions built outside a solver and gather them in a storage."""
    (
        aggreg_from_sol,
        _,
        params_objective_function,
    ) = build_aggreg_function_and_params_objective(
        problem=problem, params_objective_function=params_objective_function
    )
    return ResultStorage(
        mode_optim=params_objective_function.sense_function,
        list_solution_fits=[(sol, aggreg_from_sol(sol)) for sol in list_solution],
    )
