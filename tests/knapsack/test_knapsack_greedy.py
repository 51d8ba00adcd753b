#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import pytest

from knapsack_optimization.generic_tools.callbacks.early_stoppers import (
    NbIterationStopper,
)
from knapsack_optimization.generic_tools.do_solver import StatusSolver
from knapsack_optimization.generic_tools.exceptions import InvalidParameter
from knapsack_optimization.knapsack.problem import build_knapsack_problem
from knapsack_optimization.knapsack.solvers.greedy import (
    Greedy0KnapsackSolver,
    GreedyKKnapsackSolver,
    greedy_using_queue,
)


def test_greedy0_small(small_problem):
    res = Greedy0KnapsackSolver(small_problem).solve()
    solution = res.get_best_solution()
    assert solution.value == 160
    assert solution.get_taken_indexes() == [0, 1]
    assert res.status_solver == StatusSolver.SATISFIED


def test_greedy0_sixteen_items(sixteen_items_problem):
    problem = sixteen_items_problem
    solution = Greedy0KnapsackSolver(problem).solve().get_best_solution()
    labels = {problem.item_labels[i] for i in solution.get_taken_indexes()}
    assert labels == {"6", "4", "13", "12", "3", "9", "16"}
    assert solution.weight == 120
    assert solution.value == 44


@pytest.mark.parametrize("k, expected_value", [(0, 160), (1, 180), (2, 220), (3, 220)])
def test_greedyk_small(small_problem, k, expected_value):
    res = GreedyKKnapsackSolver(small_problem).solve(k=k)
    solution = res.get_best_solution()
    assert solution.value == expected_value
    assert small_problem.satisfy(solution)
    assert res.status_solver == StatusSolver.SATISFIED


def test_greedyk_zero_is_greedy0(sixteen_items_problem):
    greedy0 = Greedy0KnapsackSolver(sixteen_items_problem).solve().get_best_solution()
    greedyk = (
        GreedyKKnapsackSolver(sixteen_items_problem).solve(k=0).get_best_solution()
    )
    assert greedy0 == greedyk


def test_greedyk_default_k(small_problem):
    assert GreedyKKnapsackSolver.get_default_hyperparameters() == {"k": 1}
    solution = GreedyKKnapsackSolver(small_problem).solve().get_best_solution()
    assert solution.value == 180


@pytest.mark.parametrize("k", [-1, 4, 1.5, "2", None])
def test_greedyk_invalid_k(small_problem, k):
    with pytest.raises(InvalidParameter):
        GreedyKKnapsackSolver(small_problem).solve(k=k)


def test_greedyk_stop_by_callback(small_problem):
    res = GreedyKKnapsackSolver(small_problem).solve(
        k=2, callbacks=[NbIterationStopper(nb_iteration_max=1)]
    )
    assert len(res) == 1
    assert res.get_best_solution().value == 160


def test_greedy_using_queue_forced(small_problem):
    solution = greedy_using_queue(small_problem, queue=[0, 1, 2], forced=[2])
    assert solution.get_taken_indexes() == [0, 2]
    assert solution.value == 180
    assert solution.weight == 40


def test_greedy_zero_weight_items():
    problem = build_knapsack_problem(weights=[5, 0, 5], values=[1, 2, 10], capacity=5)
    solution = Greedy0KnapsackSolver(problem).solve().get_best_solution()
    assert solution.get_taken_indexes() == [1, 2]
    assert solution.value == 12
