#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from enum import Enum
from typing import Any, Union

from knapsack_optimization.generic_tools.do_problem import Problem
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.knapsack.problem import KnapsackProblem
from knapsack_optimization.knapsack.solvers import KnapsackSolver
from knapsack_optimization.knapsack.solvers.bnb import BranchAndBoundKnapsackSolver
from knapsack_optimization.knapsack.solvers.dp import ExactDpKnapsackSolver
from knapsack_optimization.knapsack.solvers.fractional import (
    FractionalGreedyKnapsackSolver,
)
from knapsack_optimization.knapsack.solvers.greedy import (
    Greedy0KnapsackSolver,
    GreedyKKnapsackSolver,
)


class KnapsackSolverName(Enum):
    FRACTIONAL = "fractional"
    DP = "dyn_prog"
    BRANCH_AND_BOUND = "branch_and_bound"
    GREEDY_0 = "greedy_0"
    GREEDY_K = "greedy_k"


solvers: dict[str, list[tuple[type[KnapsackSolver], dict[str, Any]]]] = {
    KnapsackSolverName.FRACTIONAL.value: [(FractionalGreedyKnapsackSolver, {})],
    KnapsackSolverName.DP.value: [(ExactDpKnapsackSolver, {})],
    KnapsackSolverName.BRANCH_AND_BOUND.value: [(BranchAndBoundKnapsackSolver, {})],
    KnapsackSolverName.GREEDY_0.value: [(Greedy0KnapsackSolver, {})],
    KnapsackSolverName.GREEDY_K.value: [(GreedyKKnapsackSolver, {"k": 1})],
}

solvers_map = {}
for key in solvers:
    for solver, param in solvers[key]:
        solvers_map[solver] = (key, param)

solvers_compatibility: dict[type[KnapsackSolver], list[type[Problem]]] = {}
for x in solvers:
    for y in solvers[x]:
        solvers_compatibility[y[0]] = [KnapsackProblem]


def look_for_solver(domain: KnapsackProblem) -> list[type[KnapsackSolver]]:
    class_domain = domain.__class__
    return look_for_solver_class(class_domain)


def look_for_solver_class(
    class_domain: type[KnapsackProblem],
) -> list[type[KnapsackSolver]]:
    available = []
    for solver in solvers_compatibility:
        if class_domain in solvers_compatibility[solver]:
            available += [solver]
    return available


def get_solver_class(
    method: Union[KnapsackSolverName, str, type[KnapsackSolver]],
) -> type[KnapsackSolver]:
    """Solver class from its name (enum member or value) or the class itself."""
    if isinstance(method, type):
        return method
    name = KnapsackSolverName(method).value
    return solvers[name][0][0]


def solve(
    method: Union[KnapsackSolverName, str, type[KnapsackSolver]],
    problem: KnapsackProblem,
    **args: Any,
) -> ResultStorage:
    solver = get_solver_class(method)(problem, **args)
    solver.init_model(**args)
    return solver.solve(**args)
