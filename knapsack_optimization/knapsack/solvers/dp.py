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
from knapsack_optimization.generic_tools.do_problem import Number, is_integral
from knapsack_optimization.generic_tools.do_solver import StatusSolver
from knapsack_optimization.generic_tools.dyn_prog_tools import TableDpSolver
from knapsack_optimization.generic_tools.exceptions import InvalidInstance
from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    CategoricalHyperparameter,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.knapsack.problem import KnapsackSolution
from knapsack_optimization.knapsack.solvers import KnapsackSolver
from knapsack_optimization.knapsack.solvers.fractional import sort_by_ratio

logger = logging.getLogger(__name__)

_INT64_SAFE_TOTAL = 2**62


class ExactDpKnapsackSolver(KnapsackSolver, TableDpSolver):
    """Dynamic programming solver of the 0/1 knapsack problem.

    table[i, c] is the best value reachable with the first i items and capacity c.
    Weights and capacity must be integers; values can be any non-negative numbers.
    Time and memory are in O(nb_items * capacity).

    After a solve, the table is available in `self.table` and the row order of items
    in `self.index_order`.

    """

    hyperparameters = TableDpSolver.hyperparameters + [
        CategoricalHyperparameter(
            name="greedy_start", default=False, choices=[True, False]
        ),
    ]

    table: Optional[np.ndarray] = None
    index_order: Optional[list[int]] = None

    def get_integer_weights(self) -> tuple[list[int], int]:
        """Integer weights and capacity, raising InvalidInstance if not integral."""
        if not is_integral(self.problem.max_capacity):
            raise InvalidInstance(
                "Capacity must be an integer for dynamic programming, "
                f"got {self.problem.max_capacity}. Use branch and bound instead."
            )
        weights = []
        for item in self.problem.list_items:
            if not is_integral(item.weight):
                raise InvalidInstance(
                    f"Weight of item {item.index} must be an integer for dynamic programming, "
                    f"got {item.weight}. Use branch and bound instead."
                )
            weights.append(int(item.weight))
        return weights, int(self.problem.max_capacity)

    def init_model(self, **kwargs: Any) -> None:
        kwargs = self.complete_with_default_hyperparameters(kwargs)
        weights, capacity = self.get_integer_weights()
        self.check_capacity(
            capacity,
            nb_rows=self.problem.nb_items + 1,
            capacity_ceiling=kwargs["capacity_ceiling"],
            table_cells_ceiling=kwargs["table_cells_ceiling"],
        )
        values = [item.value for item in self.problem.list_items]
        if (
            all(isinstance(v, int) for v in values)
            and sum(values) < _INT64_SAFE_TOTAL
        ):
            dtype: Any = np.int64
        else:
            # exact arithmetic on python numbers (Fraction, float, big int)
            dtype = object
        if kwargs["greedy_start"]:
            self.index_order = sort_by_ratio(self.problem.list_items)
        else:
            self.index_order = list(range(self.problem.nb_items))
        self.weights = weights
        self.capacity = capacity
        self.table = np.zeros((self.problem.nb_items + 1, capacity + 1), dtype=dtype)

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        self.init_model(**kwargs)
        callbacks_list = CallbackList(callbacks=callbacks)
        callbacks_list.on_solve_start(solver=self)
        table = self.table
        capacity = self.capacity
        for row, position in enumerate(self.index_order, start=1):
            weight = self.weights[position]
            value = self.problem.list_items[position].value
            previous = table[row - 1]
            table[row] = previous
            if weight <= capacity:
                table[row, weight:] = np.maximum(
                    previous[weight:], previous[: capacity + 1 - weight] + value
                )
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    f"i={row} item id={self.problem.item_labels[position]}: {table[row].tolist()}"
                )
        solution = self.retrieve_solution()
        self.status_solver = StatusSolver.OPTIMAL
        res = self.create_result_storage(
            [(solution, self.aggreg_from_sol(solution))],
        )
        callbacks_list.on_solve_end(res=res, solver=self)
        return res

    def retrieve_solution(self) -> KnapsackSolution:
        """Walk the table backward to recover a witness of the optimal value."""
        taken = [0] * self.problem.nb_items
        value: Number = 0
        weight: Number = 0
        cur_capacity = self.capacity
        for row in range(len(self.index_order), 0, -1):
            if self.table[row, cur_capacity] != self.table[row - 1, cur_capacity]:
                position = self.index_order[row - 1]
                item = self.problem.list_items[position]
                taken[position] = 1
                value += item.value
                weight += item.weight
                cur_capacity -= self.weights[position]
        logger.debug(f"Optimal value {self.table[-1, self.capacity]}")
        return KnapsackSolution(
            problem=self.problem, value=value, weight=weight, list_taken=taken
        )
