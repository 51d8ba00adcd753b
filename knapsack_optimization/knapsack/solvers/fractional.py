#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import logging
from collections.abc import Sequence
from fractions import Fraction
from typing import Any, Optional

from knapsack_optimization.generic_tools.callbacks.callback import (
    Callback,
    CallbackList,
)
from knapsack_optimization.generic_tools.do_problem import Number
from knapsack_optimization.generic_tools.do_solver import StatusSolver
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.knapsack.problem import (
    FractionalKnapsackSolution,
    Item,
)
from knapsack_optimization.knapsack.solvers import KnapsackSolver

logger = logging.getLogger(__name__)


def sort_by_ratio(list_items: Sequence[Item]) -> list[int]:
    """Positions of the items sorted by value/weight ratio, best first.

    Ratios are compared exactly (as fractions). Weightless items have an infinite
    ratio and come first. Ties are broken by position ascending.

    """

    def key(position: int) -> tuple:
        ratio = list_items[position].ratio
        if ratio is None:
            return 0, 0, position
        return 1, -ratio, position

    return sorted(range(len(list_items)), key=key)


def compute_fractional_bound(
    sorted_items: Sequence[Item], capacity: Number
) -> Number:
    """Optimal value of the continuous relaxation.

    Args:
        sorted_items: items already sorted by decreasing value/weight ratio
        capacity: capacity left for these items

    Returns: value of the greedy fractional filling.

    """
    bound: Number = 0
    remaining = capacity
    for item in sorted_items:
        if item.weight <= remaining:
            remaining -= item.weight
            bound += item.value
        else:
            bound += item.value * (Fraction(remaining) / Fraction(item.weight))
            break
    return bound


class FractionalGreedyKnapsackSolver(KnapsackSolver):
    """Greedy solver of the fractional (continuous) knapsack problem.

    Items are taken by decreasing value/weight ratio, the first one not fitting
    entirely being cut to fill the knapsack. This is optimal for the continuous relaxation.

    """

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        callbacks_list = CallbackList(callbacks=callbacks)
        callbacks_list.on_solve_start(solver=self)
        list_items = self.problem.list_items
        order = sort_by_ratio(list_items)
        logger.debug(
            f"Sorted item ids: {[self.problem.item_labels[i] for i in order]}"
        )
        taken = [Fraction(0)] * self.problem.nb_items
        remaining = self.problem.max_capacity
        value: Number = 0
        weight: Number = 0
        for round_index, position in enumerate(order):
            item = list_items[position]
            if item.weight <= remaining:
                take_fraction = Fraction(1)
            else:
                take_fraction = Fraction(remaining) / Fraction(item.weight)
            if take_fraction == 0:
                break
            taken[position] = take_fraction
            remaining -= item.weight * take_fraction
            value += item.value * take_fraction
            weight += item.weight * take_fraction
            logger.debug(
                f"round={round_index} current_id={self.problem.item_labels[position]} "
                f"take_fraction={take_fraction} available_capacity={remaining} "
                f"effective_profit={value}"
            )
            if take_fraction < 1:
                break
        solution = FractionalKnapsackSolution(
            problem=self.problem, list_taken=taken, value=value, weight=weight
        )
        self.status_solver = StatusSolver.OPTIMAL
        res = self.create_result_storage(
            [(solution, self.aggreg_from_sol(solution))],
        )
        callbacks_list.on_solve_end(res=res, solver=self)
        return res
