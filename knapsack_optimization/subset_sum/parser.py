#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from knapsack_optimization.generic_tools.exceptions import InvalidInstance
from knapsack_optimization.subset_sum.problem import SubsetSumProblem


def parse_input_data(input_data: str) -> SubsetSumProblem:
    """
    Parse a string of the following form :
    target
    number1 number2 ... numberN
    Numbers can be separated by whitespaces, newlines or commas.
    """
    tokens = input_data.replace(",", " ").split()
    if not tokens:
        raise InvalidInstance("Empty subset sum input.")
    try:
        values = [int(token) for token in tokens]
    except ValueError as e:
        raise InvalidInstance(f"Subset sum input must hold integers only: {e}") from e
    return SubsetSumProblem(list_numbers=values[1:], target=values[0])


def parse_file(file_path: str) -> SubsetSumProblem:
    with open(file_path, "r", encoding="utf-8") as input_data_file:
        return parse_input_data(input_data_file.read())
