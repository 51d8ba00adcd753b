#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
import random
from itertools import combinations

import pytest

from knapsack_optimization.generic_tools.do_solver import StatusSolver
from knapsack_optimization.generic_tools.exceptions import (
    CapacityTooLarge,
    InvalidInstance,
    Unsatisfiable,
)
from knapsack_optimization.subset_sum.problem import (
    SubsetSumProblem,
    SubsetSumSolution,
)
from knapsack_optimization.subset_sum.solvers.dp import DpSubsetSumSolver
from knapsack_optimization.subset_sum.solvers_map import (
    look_for_solver,
    solve,
    solvers_map,
)


def test_subset_sum_reachable():
    problem = SubsetSumProblem(list_numbers=[3, 34, 4, 12, 5, 2], target=9)
    solver = DpSubsetSumSolver(problem)
    res = solver.solve()
    solution = res.get_best_solution()
    assert solution.value == 9
    assert solution.get_taken_indexes() == [2, 4]
    assert res.status_solver == StatusSolver.OPTIMAL
    assert solver.is_reachable()
    assert problem.satisfy(solution)


def test_subset_sum_exact_target():
    problem = SubsetSumProblem(list_numbers=[3, 34, 4, 12, 5, 2], target=9)
    solution = DpSubsetSumSolver(problem).solve(exact_target=True).get_best_solution()
    assert solution.value == 9


def test_subset_sum_not_reachable():
    problem = SubsetSumProblem(list_numbers=[2, 4], target=5)
    solver = DpSubsetSumSolver(problem)
    solution = solver.solve().get_best_solution()
    assert solution.value == 4
    assert solution.get_taken_indexes() == [1]
    assert not solver.is_reachable()
    with pytest.raises(Unsatisfiable):
        solver.solve(exact_target=True)
    assert solver.status_solver == StatusSolver.UNSATISFIABLE


def test_subset_sum_zero_target():
    problem = SubsetSumProblem(list_numbers=[1, 2, 3], target=0)
    solution = DpSubsetSumSolver(problem).solve().get_best_solution()
    assert solution.value == 0
    assert solution.get_taken_indexes() == []


def test_subset_sum_reachable_sums():
    problem = SubsetSumProblem(list_numbers=[2, 4], target=5)
    solver = DpSubsetSumSolver(problem)
    assert solver.reachable_sums() == [[0], [0, 2], [0, 2, 4]]
    assert not solver.is_reachable()
    # new hyperparameters are not ignored once a table exists
    with pytest.raises(CapacityTooLarge):
        solver.is_reachable(capacity_ceiling=4)
    with pytest.raises(CapacityTooLarge):
        solver.reachable_sums(capacity_ceiling=4)
    assert solver.reachable_sums(capacity_ceiling=5) == [[0], [0, 2], [0, 2, 4]]


def test_subset_sum_course_example():
    numbers = [7, 13, 17, 20, 29, 31, 31, 35, 57]
    problem = SubsetSumProblem(list_numbers=numbers, target=174)
    solver = DpSubsetSumSolver(problem)
    solution = solver.solve(exact_target=True).get_best_solution()
    assert solution.value == 174
    assert sum(numbers[i] for i in solution.get_taken_indexes()) == 174
    assert solver.reachable_sums()[-1][-1] == 174


@pytest.mark.parametrize(
    "list_numbers, target", [([1, -2], 3), ([1, 2], -3), ([1.5], 3), ([True], 1)]
)
def test_subset_sum_invalid(list_numbers, target):
    with pytest.raises(InvalidInstance):
        SubsetSumProblem(list_numbers=list_numbers, target=target)


def test_subset_sum_capacity_ceiling():
    problem = SubsetSumProblem(list_numbers=[1, 2], target=100)
    with pytest.raises(CapacityTooLarge):
        DpSubsetSumSolver(problem).solve(capacity_ceiling=99)


def test_subset_sum_table_cells_ceiling():
    problem = SubsetSumProblem(list_numbers=[1] * 199, target=1_000_000)
    with pytest.raises(CapacityTooLarge) as exc_info:
        DpSubsetSumSolver(problem).solve()
    assert exc_info.value.ceiling == 100_000_000 // 200 - 1
    small = SubsetSumProblem(list_numbers=[1, 2], target=10)
    with pytest.raises(CapacityTooLarge):
        DpSubsetSumSolver(small).solve(table_cells_ceiling=32)
    assert DpSubsetSumSolver(small).solve(table_cells_ceiling=33).get_best_solution().value == 3


def test_subset_sum_evaluate():
    problem = SubsetSumProblem(list_numbers=[3, 4, 5], target=8)
    solution = SubsetSumSolution(problem=problem, list_taken=[1, 1, 1])
    assert problem.evaluate(solution) == {"value": 12, "target_violation": 4}
    assert not problem.satisfy(solution)
    assert problem.satisfy(problem.get_dummy_solution())


def test_subset_sum_random(random_seed):
    for _ in range(30):
        numbers = [random.randint(0, 15) for _ in range(random.randint(0, 8))]
        target = random.randint(0, 40)
        problem = SubsetSumProblem(list_numbers=numbers, target=target)
        solution = DpSubsetSumSolver(problem).solve().get_best_solution()
        best = max(
            s
            for size in range(len(numbers) + 1)
            for s in (sum(c) for c in combinations(numbers, size))
            if s <= target
        )
        assert solution.value == best
        assert sum(numbers[i] for i in solution.get_taken_indexes()) == best


def test_subset_sum_solvers_map():
    problem = SubsetSumProblem(list_numbers=[3, 5], target=7)
    assert look_for_solver(problem) == [DpSubsetSumSolver]
    for solver_class in solvers_map:
        res = solve(solver_class, problem, **solvers_map[solver_class][1])
        assert res.get_best_solution().value == 5
