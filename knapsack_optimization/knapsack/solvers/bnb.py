#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

from knapsack_optimization.generic_tools.callbacks.callback import (
    Callback,
    CallbackList,
)
from knapsack_optimization.generic_tools.do_problem import Number
from knapsack_optimization.generic_tools.do_solver import (
    BoundsProviderMixin,
    StatusSolver,
)
from knapsack_optimization.generic_tools.exceptions import BudgetExceeded
from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    CategoricalHyperparameter,
    FloatHyperparameter,
    IntegerHyperparameter,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.knapsack.problem import KnapsackSolution
from knapsack_optimization.knapsack.solvers import KnapsackSolver
from knapsack_optimization.knapsack.solvers.fractional import (
    compute_fractional_bound,
    sort_by_ratio,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchNode:
    """Partial selection of the branch and bound tree.

    Attributes:
        depth: number of items already decided, in ratio order
        weight: weight of the items taken so far
        value: value of the items taken so far
        bound: optimistic value reachable from this node (fractional relaxation)
        taken: positions (in problem.list_items) of the items taken so far

    """

    depth: int
    weight: Number
    value: Number
    bound: Number
    taken: tuple[int, ...] = ()


class BranchAndBoundKnapsackSolver(KnapsackSolver, BoundsProviderMixin):
    """Exact depth-first branch and bound for the 0/1 knapsack problem.

    Items are decided in decreasing value/weight ratio order, including an item being
    explored before excluding it. A node is pruned as soon as its fractional bound
    cannot beat the incumbent. No table is built, so weights and capacity can be any
    non-negative numbers.

    Budgets (`max_nodes` expanded nodes, `time_limit` in seconds) are checked between
    node expansions. When one runs out, BudgetExceeded is raised with the incumbent
    stored in its `result`, unless `partial_result_on_budget` is True, in which case
    that partial result is returned with a SATISFIED status.

    """

    hyperparameters = [
        IntegerHyperparameter(name="max_nodes", low=0, default=None),
        FloatHyperparameter(name="time_limit", low=0.0, default=None),
        CategoricalHyperparameter(
            name="partial_result_on_budget", default=False, choices=[True, False]
        ),
    ]

    _stack: list[SearchNode]
    _incumbent_value: Optional[Number] = None

    def init_model(self, **kwargs: Any) -> None:
        self.index_order = sort_by_ratio(self.problem.list_items)
        self.sorted_items = [self.problem.list_items[i] for i in self.index_order]
        self._stack = []
        self._incumbent_value = None
        self.nb_expanded_nodes = 0
        self.nb_pruned_nodes = 0

    def get_current_best_internal_objective_bound(self) -> Optional[Number]:
        if self._incumbent_value is None:
            return None
        return max(
            [self._incumbent_value] + [node.bound for node in self._stack],
        )

    def get_current_best_internal_objective_value(self) -> Optional[Number]:
        return self._incumbent_value

    def compute_bound(self, depth: int, weight: Number, value: Number) -> Number:
        return value + compute_fractional_bound(
            self.sorted_items[depth:], self.problem.max_capacity - weight
        )

    def build_solution(self, node: SearchNode) -> KnapsackSolution:
        taken = [0] * self.problem.nb_items
        for position in node.taken:
            taken[position] = 1
        return KnapsackSolution(
            problem=self.problem, list_taken=taken, value=node.value, weight=node.weight
        )

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        kwargs = self.complete_with_default_hyperparameters(kwargs)
        self.init_model(**kwargs)
        max_nodes = kwargs["max_nodes"]
        time_limit = kwargs["time_limit"]
        callbacks_list = CallbackList(callbacks=callbacks)
        callbacks_list.on_solve_start(solver=self)
        t_start = time.time()

        nb_items = self.problem.nb_items
        capacity = self.problem.max_capacity
        root = SearchNode(
            depth=0, weight=0, value=0, bound=self.compute_bound(0, 0, 0)
        )
        incumbent = SearchNode(depth=0, weight=0, value=0, bound=0)
        self._incumbent_value = incumbent.value
        self._stack = [root]
        empty_solution = self.build_solution(incumbent)
        res = self.create_result_storage(
            [(empty_solution, self.aggreg_from_sol(empty_solution))],
        )
        step = 0
        stop_reason: Optional[str] = None
        while self._stack:
            node = self._stack.pop()
            if node.bound <= self._incumbent_value:
                self.nb_pruned_nodes += 1
                callbacks_list.on_node_pruned(node=node, solver=self)
                continue
            if node.depth == nb_items:
                incumbent = node
                self._incumbent_value = node.value
                solution = self.build_solution(node)
                res.append((solution, self.aggreg_from_sol(solution)))
                step += 1
                logger.debug(f"New incumbent of value {node.value}")
                if callbacks_list.on_step_end(step=step, res=res, solver=self):
                    stop_reason = "user callback"
                    break
                continue
            if max_nodes is not None and self.nb_expanded_nodes >= max_nodes:
                stop_reason = f"max_nodes={max_nodes}"
                self._stack.append(node)
                break
            if time_limit is not None and time.time() - t_start >= time_limit:
                stop_reason = f"time_limit={time_limit}s"
                self._stack.append(node)
                break
            self.nb_expanded_nodes += 1
            callbacks_list.on_node_expanded(node=node, solver=self)
            position = self.index_order[node.depth]
            item = self.sorted_items[node.depth]
            children = [
                SearchNode(
                    depth=node.depth + 1,
                    weight=node.weight,
                    value=node.value,
                    bound=self.compute_bound(node.depth + 1, node.weight, node.value),
                    taken=node.taken,
                )
            ]
            if node.weight + item.weight <= capacity:
                weight = node.weight + item.weight
                value = node.value + item.value
                children.append(
                    SearchNode(
                        depth=node.depth + 1,
                        weight=weight,
                        value=value,
                        bound=self.compute_bound(node.depth + 1, weight, value),
                        taken=node.taken + (position,),
                    )
                )
            # exclude pushed first so that include is explored first
            for child in children:
                if child.bound <= self._incumbent_value:
                    self.nb_pruned_nodes += 1
                    callbacks_list.on_node_pruned(node=child, solver=self)
                else:
                    self._stack.append(child)

        logger.info(
            f"{self.__class__.__name__}: {self.nb_expanded_nodes} nodes expanded, "
            f"{self.nb_pruned_nodes} pruned, best value {incumbent.value}"
        )
        if stop_reason is None:
            self.status_solver = StatusSolver.OPTIMAL
        else:
            self.status_solver = StatusSolver.SATISFIED
            logger.info(f"{self.__class__.__name__} stopped by {stop_reason}.")
        res.status_solver = self.status_solver
        callbacks_list.on_solve_end(res=res, solver=self)
        if (
            stop_reason is not None
            and stop_reason != "user callback"
            and not kwargs["partial_result_on_budget"]
        ):
            raise BudgetExceeded(
                f"Search budget exhausted ({stop_reason}) after {self.nb_expanded_nodes} "
                f"expanded nodes, best value found {incumbent.value} is not proven optimal.",
                result=res,
            )
        return res
