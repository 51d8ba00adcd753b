#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import logging
from collections.abc import Iterable, Sequence
from itertools import combinations
from typing import Any, Optional

from knapsack_optimization.generic_tools.callbacks.callback import (
    Callback,
    CallbackList,
)
from knapsack_optimization.generic_tools.do_problem import Number
from knapsack_optimization.generic_tools.do_solver import StatusSolver
from knapsack_optimization.generic_tools.exceptions import InvalidParameter
from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    IntegerHyperparameter,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.knapsack.problem import KnapsackProblem, KnapsackSolution
from knapsack_optimization.knapsack.solvers import KnapsackSolver
from knapsack_optimization.knapsack.solvers.fractional import sort_by_ratio

logger = logging.getLogger(__name__)


def greedy_using_queue(
    knapsack_problem: KnapsackProblem,
    queue: Sequence[int],
    forced: Iterable[int] = (),
) -> KnapsackSolution:
    """Fill the knapsack following a queue of item positions.

    Forced items are put first, then each item of the queue is taken if it still fits
    and skipped otherwise. The caller must ensure the forced items fit together.

    Args:
        knapsack_problem: instance to solve
        queue: item positions, in the order they are considered
        forced: item positions put in the knapsack before anything else

    """
    list_items = knapsack_problem.list_items
    taken = [0] * knapsack_problem.nb_items
    value: Number = 0
    weight: Number = 0
    for position in forced:
        taken[position] = 1
        value += list_items[position].value
        weight += list_items[position].weight
    for position in queue:
        if taken[position]:
            continue
        item = list_items[position]
        if item.weight + weight <= knapsack_problem.max_capacity:
            taken[position] = 1
            value += item.value
            weight += item.weight
            logger.debug(f"Taking item id={knapsack_problem.item_labels[position]}")
        else:
            logger.debug(
                f"Item id={knapsack_problem.item_labels[position]} weights too much. "
                f"item.weight={item.weight} > available_weight={knapsack_problem.max_capacity - weight}"
            )
    return KnapsackSolution(
        problem=knapsack_problem, value=value, weight=weight, list_taken=taken
    )


class Greedy0KnapsackSolver(KnapsackSolver):
    """Integer greedy: take items by decreasing value/weight ratio when they fit.

    No backtracking, the result may not be optimal.

    """

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        callbacks_list = CallbackList(callbacks=callbacks)
        callbacks_list.on_solve_start(solver=self)
        queue = sort_by_ratio(self.problem.list_items)
        logger.debug(
            f"Sorted item ids: {[self.problem.item_labels[i] for i in queue]}"
        )
        solution = greedy_using_queue(self.problem, queue)
        self.status_solver = StatusSolver.SATISFIED
        res = self.create_result_storage(
            [(solution, self.aggreg_from_sol(solution))],
        )
        callbacks_list.on_solve_end(res=res, solver=self)
        return res


class GreedyKKnapsackSolver(KnapsackSolver):
    """Best of the greedy fillings completing every subset of at most k forced items.

    For each subset of at most `k` items fitting in the knapsack, the subset is forced
    in and the remaining capacity filled with the ratio greedy. The best filling is kept,
    the first one found winning ties. k=0 is the plain ratio greedy.
    Costs about n^k greedy runs, the result may not be optimal.

    """

    hyperparameters = [
        IntegerHyperparameter(name="k", low=0, default=1),
    ]

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        kwargs = self.complete_with_default_hyperparameters(kwargs)
        k = kwargs["k"]
        if k is None:
            raise InvalidParameter("k must be an integer, got None.")
        if k > self.problem.nb_items:
            raise InvalidParameter(
                f"k={k} exceeds the number of items ({self.problem.nb_items})."
            )
        callbacks_list = CallbackList(callbacks=callbacks)
        callbacks_list.on_solve_start(solver=self)
        list_items = self.problem.list_items
        queue = sort_by_ratio(list_items)
        self.status_solver = StatusSolver.SATISFIED
        res = self.create_result_storage()
        best: Optional[KnapsackSolution] = None
        step = 0
        stopping = False
        for size in range(k + 1):
            for forced in combinations(range(self.problem.nb_items), size):
                forced_weight = sum(list_items[position].weight for position in forced)
                if forced_weight > self.problem.max_capacity:
                    continue
                solution = greedy_using_queue(self.problem, queue, forced=forced)
                if best is None or solution.value > best.value:
                    logger.debug(
                        f"New best value {solution.value} forcing item ids "
                        f"{[self.problem.item_labels[i] for i in forced]}"
                    )
                    best = solution
                    res.append((solution, self.aggreg_from_sol(solution)))
                    step += 1
                    stopping = callbacks_list.on_step_end(
                        step=step, res=res, solver=self
                    )
                    if stopping:
                        break
            if stopping:
                logger.info(f"{self.__class__.__name__} stopped by user callback.")
                break
        callbacks_list.on_solve_end(res=res, solver=self)
        return res
