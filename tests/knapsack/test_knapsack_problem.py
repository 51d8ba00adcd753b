#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
import math
from fractions import Fraction

import pytest

from knapsack_optimization.generic_tools.exceptions import InvalidInstance
from knapsack_optimization.knapsack.problem import (
    Item,
    KnapsackProblem,
    KnapsackSolution,
    build_knapsack_problem,
)


def test_item_ratio():
    assert Item(index=0, value=3, weight=2).ratio == Fraction(3, 2)
    assert Item(index=0, value=3, weight=0).ratio is None


@pytest.mark.parametrize(
    "value, weight",
    [(-1, 2), (1, -2), (True, 2), (1, math.nan), (1, math.inf), ("1", 2)],
)
def test_invalid_item(value, weight):
    with pytest.raises(InvalidInstance):
        Item(index=0, value=value, weight=weight)


def test_invalid_capacity():
    with pytest.raises(InvalidInstance):
        build_knapsack_problem(weights=[1], values=[1], capacity=-1)
    # input errors are also ValueError
    with pytest.raises(ValueError):
        build_knapsack_problem(weights=[1], values=[1], capacity=-1)


def test_invalid_problem():
    with pytest.raises(InvalidInstance):
        build_knapsack_problem(weights=[1, 2], values=[1], capacity=1)
    with pytest.raises(InvalidInstance):
        KnapsackProblem(
            list_items=[Item(index=0, value=1, weight=1), Item(index=0, value=2, weight=1)],
            max_capacity=1,
        )
    with pytest.raises(InvalidInstance):
        KnapsackProblem(
            list_items=[Item(index=0, value=1, weight=1)],
            max_capacity=1,
            item_labels=["a", "b"],
        )


@pytest.mark.parametrize("indexes", [[1, 0], [0, 2], [1]])
def test_item_index_is_position(indexes):
    with pytest.raises(InvalidInstance):
        KnapsackProblem(
            list_items=[Item(index=i, value=1, weight=1) for i in indexes],
            max_capacity=1,
        )


def test_evaluate_and_satisfy(small_problem):
    solution = KnapsackSolution(problem=small_problem, list_taken=[0, 1, 1])
    assert small_problem.evaluate(solution) == {"value": 220, "weight_violation": 0}
    assert solution.weight == 50
    assert small_problem.satisfy(solution)

    solution = KnapsackSolution(problem=small_problem, list_taken=[1, 1, 1])
    assert small_problem.evaluate(solution) == {"value": 280, "weight_violation": 10}
    assert not small_problem.satisfy(solution)


def test_dummy_solution(small_problem):
    dummy_solution = small_problem.get_dummy_solution()
    assert dummy_solution.value == 0
    assert small_problem.satisfy(dummy_solution)


def test_solution_copy(small_problem):
    solution = KnapsackSolution(problem=small_problem, list_taken=[1, 0, 0])
    solution_copy = solution.copy()
    solution_copy.list_taken[1] = 1
    assert solution.list_taken == [1, 0, 0]
    assert solution.get_taken_indexes() == [0]


def test_default_labels(small_problem):
    assert small_problem.item_labels == ["0", "1", "2"]
