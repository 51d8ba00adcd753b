#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from typing import Any

from knapsack_optimization.generic_tools.do_problem import Problem
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.subset_sum.problem import SubsetSumProblem
from knapsack_optimization.subset_sum.solvers import SubsetSumSolver
from knapsack_optimization.subset_sum.solvers.dp import DpSubsetSumSolver

solvers: dict[str, list[tuple[type[SubsetSumSolver], dict[str, Any]]]] = {
    "dyn_prog": [(DpSubsetSumSolver, {"exact_target": False})],
}

solvers_map = {}
for key in solvers:
    for solver, param in solvers[key]:
        solvers_map[solver] = (key, param)

solvers_compatibility: dict[type[SubsetSumSolver], list[type[Problem]]] = {}
for x in solvers:
    for y in solvers[x]:
        solvers_compatibility[y[0]] = [SubsetSumProblem]


def look_for_solver(domain: SubsetSumProblem) -> list[type[SubsetSumSolver]]:
    return [
        solver
        for solver in solvers_compatibility
        if domain.__class__ in solvers_compatibility[solver]
    ]


def solve(
    method: type[SubsetSumSolver], problem: SubsetSumProblem, **args: Any
) -> ResultStorage:
    solver = method(problem, **args)
    solver.init_model(**args)
    return solver.solve(**args)
