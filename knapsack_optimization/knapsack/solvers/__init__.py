#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from knapsack_optimization.generic_tools.do_solver import SolverDO
from knapsack_optimization.knapsack.problem import KnapsackProblem


class KnapsackSolver(SolverDO):
    problem: KnapsackProblem
