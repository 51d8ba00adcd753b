#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

from knapsack_optimization.generic_tools.do_problem import (
    ModeOptim,
    Number,
    ObjectiveDoc,
    ObjectiveHandling,
    ObjectiveRegister,
    Problem,
    Solution,
    TypeObjective,
    check_non_negative_number,
)
from knapsack_optimization.generic_tools.exceptions import InvalidInstance


@dataclass(frozen=True)
class Item:
    index: int
    value: Number
    weight: Number

    def __post_init__(self):
        check_non_negative_number(self.value, name=f"Value of item {self.index}")
        check_non_negative_number(self.weight, name=f"Weight of item {self.index}")

    @property
    def ratio(self) -> Optional[Fraction]:
        """Exact value/weight ratio, None for a weightless item (infinite ratio)."""
        if self.weight == 0:
            return None
        return Fraction(self.value) / Fraction(self.weight)

    def __str__(self) -> str:
        return f"item {self.index} (weight={self.weight}, value={self.value})"


class KnapsackSolution(Solution):
    """0/1 selection of items.

    Attributes:
        list_taken: for each item position in problem.list_items, 1 if taken else 0.
        value: total value of taken items (computed by problem.evaluate() if None)
        weight: total weight of taken items (computed by problem.evaluate() if None)

    """

    def __init__(
        self,
        problem: "KnapsackProblem",
        list_taken: list[Union[int, Fraction]],
        value: Optional[Number] = None,
        weight: Optional[Number] = None,
    ):
        self.problem = problem
        self.value = value
        self.weight = weight
        self.list_taken = list_taken

    def copy(self) -> "KnapsackSolution":
        return self.__class__(
            problem=self.problem,
            value=self.value,
            weight=self.weight,
            list_taken=list(self.list_taken),
        )

    def get_taken_indexes(self) -> list[int]:
        """Positions of the items (at least partially) taken, in ascending order."""
        return [i for i, taken in enumerate(self.list_taken) if taken]

    def __str__(self) -> str:
        return f"value={self.value} weight={self.weight} taken={self.list_taken}"

    def __hash__(self) -> int:
        return hash(tuple(self.list_taken))

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, KnapsackSolution) and self.list_taken == other.list_taken
        )


class FractionalKnapsackSolution(KnapsackSolution):
    """Selection of item fractions, solution of the continuous relaxation.

    `list_taken[i]` is the fraction (a `Fraction` in [0, 1]) of item i put in the knapsack.

    """

    @property
    def list_fraction(self) -> list[Fraction]:
        return self.list_taken


class KnapsackProblem(Problem):
    """0/1 knapsack instance.

    Args:
        list_items: items, `list_items[i].index` must be i
        max_capacity: weight capacity of the knapsack
        force_recompute_values: if True, evaluate() never trusts the value stored in a solution
        item_labels: optional display labels of the items (e.g. ids read from a csv file)

    Raises:
        InvalidInstance: if capacity is negative, if an item index differs from its position
            or if labels do not match the items.

    """

    def __init__(
        self,
        list_items: Sequence[Item],
        max_capacity: Number,
        force_recompute_values: bool = False,
        item_labels: Optional[Sequence[str]] = None,
    ):
        self.list_items = list(list_items)
        self.nb_items = len(self.list_items)
        self.max_capacity = max_capacity
        self.force_recompute_values = force_recompute_values
        if item_labels is None:
            item_labels = [str(item.index) for item in self.list_items]
        self.item_labels = list(item_labels)
        self.check_instance()

    def check_instance(self) -> None:
        check_non_negative_number(self.max_capacity, name="Capacity")
        for position, item in enumerate(self.list_items):
            if not isinstance(item, Item):
                raise InvalidInstance(f"{item!r} is not an Item.")
            check_non_negative_number(item.value, name=f"Value of item {item.index}")
            check_non_negative_number(item.weight, name=f"Weight of item {item.index}")
            if item.index != position:
                raise InvalidInstance(
                    f"Item at position {position} has index {item.index}, "
                    "items must be indexed by their position."
                )
        if len(self.item_labels) != self.nb_items:
            raise InvalidInstance(
                f"Got {len(self.item_labels)} labels for {self.nb_items} items."
            )

    def get_objective_register(self) -> ObjectiveRegister:
        return ObjectiveRegister(
            objective_sense=ModeOptim.MAXIMIZATION,
            objective_handling=ObjectiveHandling.AGGREGATE,
            dict_objective_to_doc={
                "value": ObjectiveDoc(TypeObjective.OBJECTIVE, default_weight=1),
                # any overweight selection ranks below the empty one
                "weight_violation": ObjectiveDoc(
                    TypeObjective.PENALTY, default_weight=-100000
                ),
            },
        )

    def evaluate(self, knapsack_solution: KnapsackSolution) -> dict[str, Number]:  # type: ignore
        """Kpis of the selection, filling its value and weight when missing.

        A value already stored in the solution is trusted unless
        `force_recompute_values` is set. Overweight is reported as `weight_violation`.

        """
        if self.force_recompute_values or None in (
            knapsack_solution.value,
            knapsack_solution.weight,
        ):
            self.evaluate_value(knapsack_solution)
        return {
            "value": knapsack_solution.value,
            "weight_violation": self.evaluate_weight_violation(knapsack_solution),
        }

    def evaluate_value(self, knapsack_solution: KnapsackSolution) -> Number:
        """Recompute (and store) value and weight of the selection."""
        pairs = list(zip(knapsack_solution.list_taken, self.list_items))
        knapsack_solution.value = sum(taken * item.value for taken, item in pairs)
        knapsack_solution.weight = sum(taken * item.weight for taken, item in pairs)
        return knapsack_solution.value

    def evaluate_weight_violation(self, knapsack_solution: KnapsackSolution) -> Number:
        return max(0, knapsack_solution.weight - self.max_capacity)  # type: ignore

    def satisfy(self, knapsack_solution: KnapsackSolution) -> bool:  # type: ignore
        if knapsack_solution.weight is None:
            self.evaluate_value(knapsack_solution)
        return knapsack_solution.weight <= self.max_capacity  # type: ignore

    def __str__(self) -> str:
        header = f"Knapsack with {self.nb_items} items, capacity {self.max_capacity}"
        return "\n".join([header] + [str(item) for item in self.list_items])

    def get_dummy_solution(self) -> KnapsackSolution:
        kp_sol = KnapsackSolution(problem=self, list_taken=[0] * self.nb_items)
        self.evaluate(kp_sol)
        return kp_sol

    def get_solution_type(self) -> type[Solution]:
        return KnapsackSolution


def build_knapsack_problem(
    weights: Sequence[Number], values: Sequence[Number], capacity: Number
) -> KnapsackProblem:
    """Build an instance from parallel lists of weights and values."""
    if len(weights) != len(values):
        raise InvalidInstance(
            f"Got {len(weights)} weights but {len(values)} values."
        )
    return KnapsackProblem(
        list_items=[
            Item(index=i, value=value, weight=weight)
            for i, (weight, value) in enumerate(zip(weights, values))
        ],
        max_capacity=capacity,
    )
