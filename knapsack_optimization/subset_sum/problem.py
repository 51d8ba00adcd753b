#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from collections.abc import Sequence
from numbers import Integral
from typing import Any, Optional

from knapsack_optimization.generic_tools.do_problem import (
    ModeOptim,
    ObjectiveDoc,
    ObjectiveHandling,
    ObjectiveRegister,
    Problem,
    Solution,
    TypeObjective,
)
from knapsack_optimization.generic_tools.exceptions import InvalidInstance


def check_non_negative_integer(x: Any, name: str) -> None:
    if isinstance(x, bool) or not isinstance(x, Integral):
        raise InvalidInstance(f"{name} must be an integer, got {x!r}.")
    if x < 0:
        raise InvalidInstance(f"{name} must be non-negative, got {x!r}.")


class SubsetSumSolution(Solution):
    """Subset of the numbers, `list_taken[i]` being 1 if number i is used."""

    def __init__(
        self,
        problem: "SubsetSumProblem",
        list_taken: list[int],
        value: Optional[int] = None,
    ):
        self.problem = problem
        self.list_taken = list_taken
        self.value = value

    def copy(self) -> "SubsetSumSolution":
        return SubsetSumSolution(
            problem=self.problem, list_taken=list(self.list_taken), value=self.value
        )

    def get_taken_indexes(self) -> list[int]:
        return [i for i, taken in enumerate(self.list_taken) if taken]

    def __str__(self) -> str:
        return f"Sum={self.value}\nTaken : {self.list_taken}"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, SubsetSumSolution)
            and self.list_taken == other.list_taken
        )

    def __hash__(self) -> int:
        return hash(str(self))


class SubsetSumProblem(Problem):
    """Subset sum instance: reach the largest sum not exceeding `target`.

    Args:
        list_numbers: non-negative integers, each usable at most once
        target: non-negative integer sum to reach

    """

    def __init__(self, list_numbers: Sequence[int], target: int):
        self.list_numbers = list(list_numbers)
        self.nb_numbers = len(self.list_numbers)
        self.target = target
        self.check_instance()

    def check_instance(self) -> None:
        check_non_negative_integer(self.target, name="Target")
        for i, number in enumerate(self.list_numbers):
            check_non_negative_integer(number, name=f"Number {i}")

    def get_objective_register(self) -> ObjectiveRegister:
        return ObjectiveRegister(
            objective_sense=ModeOptim.MAXIMIZATION,
            objective_handling=ObjectiveHandling.AGGREGATE,
            dict_objective_to_doc={
                "value": ObjectiveDoc(type=TypeObjective.OBJECTIVE, default_weight=1),
                "target_violation": ObjectiveDoc(
                    type=TypeObjective.PENALTY, default_weight=-100000
                ),
            },
        )

    def evaluate(self, solution: SubsetSumSolution) -> dict[str, int]:  # type: ignore
        value = sum(
            number
            for number, taken in zip(self.list_numbers, solution.list_taken)
            if taken
        )
        solution.value = value
        return {"value": value, "target_violation": max(0, value - self.target)}

    def satisfy(self, solution: SubsetSumSolution) -> bool:  # type: ignore
        return self.evaluate(solution)["target_violation"] == 0

    def get_dummy_solution(self) -> SubsetSumSolution:
        solution = SubsetSumSolution(problem=self, list_taken=[0] * self.nb_numbers)
        self.evaluate(solution)
        return solution

    def get_solution_type(self) -> type[Solution]:
        return SubsetSumSolution

    def __str__(self) -> str:
        return f"Subset sum with target {self.target} and numbers {self.list_numbers}"
