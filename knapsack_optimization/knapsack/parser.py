#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from fractions import Fraction
from typing import Optional

from knapsack_optimization.generic_tools.do_problem import Number
from knapsack_optimization.generic_tools.exceptions import InvalidInstance
from knapsack_optimization.knapsack.problem import Item, KnapsackProblem


def parse_number(token: str, line: Optional[str] = None) -> Number:
    """Exact number from a token: an int, else a Fraction ("2.5", "3/4")."""
    token = token.strip()
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return Fraction(token)
    except ValueError as e:
        where = f" in line {line!r}" if line is not None else ""
        raise InvalidInstance(f"Cannot read a number from {token!r}{where}.") from e


def parse_input_data(
    input_data: str, force_recompute_values: bool = False
) -> KnapsackProblem:
    """
    Parse a string of the following form :
    item_count max_capacity
    item1_value item1_weight
    ...
    itemN_value itemN_weight
    """
    lines = [line for line in input_data.split("\n") if line.strip()]
    if not lines:
        raise InvalidInstance("Empty knapsack input.")
    first_line = lines[0].split()
    if len(first_line) != 2:
        raise InvalidInstance(
            f"First line should be 'item_count capacity', got {lines[0]!r}."
        )
    try:
        item_count = int(first_line[0])
    except ValueError as e:
        raise InvalidInstance(f"Invalid item count in line {lines[0]!r}.") from e
    capacity = parse_number(first_line[1], line=lines[0])
    if len(lines) - 1 < item_count:
        raise InvalidInstance(
            f"Expected {item_count} items, got only {len(lines) - 1} lines."
        )
    items = []
    for i in range(1, item_count + 1):
        line = lines[i]
        parts = line.split()
        if len(parts) != 2:
            raise InvalidInstance(f"Item line should be 'value weight', got {line!r}.")
        items.append(
            Item(
                index=i - 1,
                value=parse_number(parts[0], line=line),
                weight=parse_number(parts[1], line=line),
            )
        )
    return KnapsackProblem(
        list_items=items,
        max_capacity=capacity,
        force_recompute_values=force_recompute_values,
    )


def parse_file(file_path: str, force_recompute_values: bool = False) -> KnapsackProblem:
    with open(file_path, "r", encoding="utf-8") as input_data_file:
        input_data = input_data_file.read()
        knapsack_problem = parse_input_data(
            input_data, force_recompute_values=force_recompute_values
        )
        return knapsack_problem


def flip_csv(csv_text: str) -> str:
    """Transpose a csv written from left to right (one field per line) into rows."""
    lines = [line.split(",") for line in csv_text.splitlines() if line.strip()]
    if not lines:
        return ""
    if any(len(line) != len(lines[0]) for line in lines):
        raise InvalidInstance("All lines of a flipped csv must have the same length.")
    return "\n".join(",".join(column) for column in zip(*lines))


def parse_items_csv(
    csv_text: str, flipped: bool = False
) -> tuple[list[Item], list[str]]:
    """Read items from `id,weight,profit` csv rows.

    A header row (first field not being a number) is skipped.

    Args:
        csv_text: content of the csv
        flipped: True if the csv is written from left to right, each line being a field

    Returns: items (indexed by their position) and their ids, used as labels.

    """
    if flipped:
        csv_text = flip_csv(csv_text)
    rows = [line for line in csv_text.splitlines() if line.strip()]
    items: list[Item] = []
    labels: list[str] = []
    for row_index, line in enumerate(rows):
        fields = [field.strip() for field in line.split(",")]
        if len(fields) != 3:
            raise InvalidInstance(f"Item row should be 'id,weight,profit', got {line!r}.")
        if row_index == 0:
            try:
                parse_number(fields[1])
            except InvalidInstance:
                # header
                continue
        items.append(
            Item(
                index=len(items),
                value=parse_number(fields[2], line=line),
                weight=parse_number(fields[1], line=line),
            )
        )
        labels.append(fields[0])
    return items, labels


def parse_csv_file(
    file_path: str, capacity: Number, flipped: bool = False
) -> KnapsackProblem:
    with open(file_path, "r", encoding="utf-8") as input_data_file:
        items, labels = parse_items_csv(input_data_file.read(), flipped=flipped)
    return KnapsackProblem(list_items=items, max_capacity=capacity, item_labels=labels)
