#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import random

import numpy as np
from pytest import fixture

from knapsack_optimization.generic_tools.dyn_prog_tools import (
    KO_CAPACITY_CEILING_ENVVARNAME,
)
from knapsack_optimization.knapsack.problem import (
    Item,
    KnapsackProblem,
    build_knapsack_problem,
)

# (id, profit, weight)
SIXTEEN_ITEMS = [
    (1, 3, 20),
    (2, 3, 32),
    (3, 10, 40),
    (4, 5, 8),
    (5, 2, 16),
    (6, 4, 4),
    (7, 2, 32),
    (8, 9, 40),
    (9, 2, 8),
    (10, 5, 32),
    (11, 3, 28),
    (12, 9, 20),
    (13, 10, 16),
    (14, 3, 20),
    (15, 10, 40),
    (16, 4, 24),
]

# (profit, weight)
SEVEN_ITEMS = [(6, 2), (5, 3), (8, 6), (9, 7), (6, 5), (7, 9), (3, 4)]


@fixture
def random_seed():
    random.seed(0)
    np.random.seed(0)


@fixture(autouse=True)
def no_capacity_ceiling_envvar(monkeypatch):
    monkeypatch.delenv(KO_CAPACITY_CEILING_ENVVARNAME, raising=False)


@fixture
def small_problem() -> KnapsackProblem:
    """Capacity 50, 0/1 optimum 220 (items 1 and 2), fractional optimum 240."""
    return build_knapsack_problem(
        weights=[10, 20, 30], values=[60, 100, 120], capacity=50
    )


@fixture
def sixteen_items_problem() -> KnapsackProblem:
    return KnapsackProblem(
        list_items=[
            Item(index=position, value=profit, weight=weight)
            for position, (_, profit, weight) in enumerate(SIXTEEN_ITEMS)
        ],
        max_capacity=120,
        item_labels=[str(id_) for id_, _, _ in SIXTEEN_ITEMS],
    )


@fixture
def seven_items_problem() -> KnapsackProblem:
    return build_knapsack_problem(
        weights=[weight for _, weight in SEVEN_ITEMS],
        values=[profit for profit, _ in SEVEN_ITEMS],
        capacity=9,
    )
