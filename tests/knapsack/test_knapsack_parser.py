#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
from fractions import Fraction

import pytest

from knapsack_optimization.generic_tools.exceptions import InvalidInstance
from knapsack_optimization.knapsack.parser import (
    flip_csv,
    parse_csv_file,
    parse_file,
    parse_input_data,
    parse_items_csv,
    parse_number,
)
from knapsack_optimization.knapsack.solvers.fractional import (
    FractionalGreedyKnapsackSolver,
)

KS_4_0 = """4 11
8 4
10 5
15 8
4 3
"""

FLIPPED_CSV = """id,1,2,3
weight,10,20,30
profit,60,100,120
"""


def test_parse_input_data():
    knapsack_problem = parse_input_data(KS_4_0)
    assert knapsack_problem.nb_items == 4
    assert knapsack_problem.max_capacity == 11
    assert knapsack_problem.list_items[2].value == 15
    assert knapsack_problem.list_items[2].weight == 8


def test_parse_file(tmp_path):
    file_path = tmp_path / "ks_4_0"
    file_path.write_text(KS_4_0)
    knapsack_problem = parse_file(str(file_path))
    assert knapsack_problem.nb_items == 4
    dummy_solution = knapsack_problem.get_dummy_solution()
    assert knapsack_problem.satisfy(dummy_solution)


@pytest.mark.parametrize(
    "input_data",
    ["", "2 10\n1 1\n", "x 10\n1 1\n", "1 10\n1\n", "1 10\n1 -1\n", "1 -10\n1 1\n"],
)
def test_parse_input_data_malformed(input_data):
    with pytest.raises(InvalidInstance):
        parse_input_data(input_data)


def test_parse_number():
    assert parse_number("3") == 3
    assert isinstance(parse_number("3"), int)
    assert parse_number("2.5") == Fraction(5, 2)
    assert parse_number("3/4") == Fraction(3, 4)
    with pytest.raises(InvalidInstance):
        parse_number("three")


def test_parse_items_csv_with_header():
    items, labels = parse_items_csv("id,weight,profit\na,10,60\nb,20,100\n")
    assert labels == ["a", "b"]
    assert [(item.index, item.weight, item.value) for item in items] == [
        (0, 10, 60),
        (1, 20, 100),
    ]


def test_parse_items_csv_flipped():
    items, labels = parse_items_csv(FLIPPED_CSV, flipped=True)
    assert labels == ["1", "2", "3"]
    assert [item.weight for item in items] == [10, 20, 30]
    assert [item.value for item in items] == [60, 100, 120]


def test_flip_csv():
    assert flip_csv("a,b\nc,d\n") == "a,c\nb,d"
    with pytest.raises(InvalidInstance):
        flip_csv("a,b\nc\n")


@pytest.mark.parametrize("csv_text", ["1,2\n", "1,2,x\n", "1,-2,3\n"])
def test_parse_items_csv_malformed(csv_text):
    with pytest.raises(InvalidInstance):
        parse_items_csv(csv_text)


def test_parse_csv_file(tmp_path):
    file_path = tmp_path / "items.csv"
    file_path.write_text(FLIPPED_CSV)
    problem = parse_csv_file(str(file_path), capacity=50, flipped=True)
    assert problem.item_labels == ["1", "2", "3"]
    solution = FractionalGreedyKnapsackSolver(problem).solve().get_best_solution()
    assert solution.value == 240
