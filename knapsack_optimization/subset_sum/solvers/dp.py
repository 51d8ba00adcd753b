#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
import logging
from typing import Any, Optional

import numpy as np

from knapsack_optimization.generic_tools.callbacks.callback import (
    Callback,
    CallbackList,
)
from knapsack_optimization.generic_tools.do_solver import StatusSolver
from knapsack_optimization.generic_tools.dyn_prog_tools import TableDpSolver
from knapsack_optimization.generic_tools.exceptions import Unsatisfiable
from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    CategoricalHyperparameter,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.subset_sum.problem import SubsetSumSolution
from knapsack_optimization.subset_sum.solvers import SubsetSumSolver

logger = logging.getLogger(__name__)


class DpSubsetSumSolver(SubsetSumSolver, TableDpSolver):
    """Dynamic programming solver of subset sum.

    table[i, s] tells whether the sum s can be reached with some of the first i numbers.
    Sums above the target are never stored.

    """

    hyperparameters = TableDpSolver.hyperparameters + [
        CategoricalHyperparameter(
            name="exact_target", default=False, choices=[True, False]
        ),
    ]

    table: Optional[np.ndarray] = None

    def init_model(self, **kwargs: Any) -> None:
        kwargs = self.complete_with_default_hyperparameters(kwargs)
        self.check_capacity(
            self.problem.target,
            nb_rows=self.problem.nb_numbers + 1,
            capacity_ceiling=kwargs["capacity_ceiling"],
            table_cells_ceiling=kwargs["table_cells_ceiling"],
        )
        self.table = None

    def fill_table(self) -> np.ndarray:
        target = self.problem.target
        table = np.zeros((self.problem.nb_numbers + 1, target + 1), dtype=bool)
        table[0, 0] = True
        for i, number in enumerate(self.problem.list_numbers, start=1):
            table[i] = table[i - 1]
            if number <= target:
                table[i, number:] |= table[i - 1, : target + 1 - number]
            if logger.isEnabledFor(logging.DEBUG):
                reachable = np.flatnonzero(table[i]).tolist()
                logger.debug(f"i={i} reachable {len(reachable)} sums: {reachable}")
        self.table = table
        return table

    def _ensure_table(self, **kwargs: Any) -> np.ndarray:
        # hyperparameters given explicitly are checked again on a fresh table
        if self.table is None or kwargs:
            self.init_model(**kwargs)
            self.fill_table()
        return self.table

    def reachable_sums(self, **kwargs: Any) -> list[list[int]]:
        """Sorted reachable sums (up to the target) for each prefix of the numbers.

        The table of the last solve is reused unless hyperparameters are given.

        """
        self._ensure_table(**kwargs)
        return [np.flatnonzero(row).tolist() for row in self.table]

    def is_reachable(self, **kwargs: Any) -> bool:
        """Decision answer: can the target be reached exactly?"""
        return bool(self._ensure_table(**kwargs)[-1, self.problem.target])

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        kwargs = self.complete_with_default_hyperparameters(kwargs)
        self.init_model(**kwargs)
        callbacks_list = CallbackList(callbacks=callbacks)
        callbacks_list.on_solve_start(solver=self)
        table = self.fill_table()
        best_sum = int(np.flatnonzero(table[-1]).max())
        if kwargs["exact_target"] and best_sum != self.problem.target:
            self.status_solver = StatusSolver.UNSATISFIABLE
            raise Unsatisfiable(
                f"No subset sums exactly to {self.problem.target}, "
                f"best reachable sum is {best_sum}."
            )
        taken = [0] * self.problem.nb_numbers
        current_sum = best_sum
        for i in range(self.problem.nb_numbers, 0, -1):
            if table[i - 1, current_sum]:
                continue
            taken[i - 1] = 1
            current_sum -= self.problem.list_numbers[i - 1]
        solution = SubsetSumSolution(
            problem=self.problem, list_taken=taken, value=best_sum
        )
        self.status_solver = StatusSolver.OPTIMAL
        res = self.create_result_storage(
            [(solution, self.aggreg_from_sol(solution))],
        )
        callbacks_list.on_solve_end(res=res, solver=self)
        return res
