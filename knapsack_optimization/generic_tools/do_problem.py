"""Problem and solution interfaces, and aggregation of their kpis into a fitness."""

#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from numbers import Real
from typing import Any, Optional, Union

from knapsack_optimization.generic_tools.exceptions import InvalidInstance

logger = logging.getLogger(__name__)

Number = Union[int, float, Fraction]
"""Numbers accepted for weights, values and capacities."""


class ModeOptim(Enum):
    MAXIMIZATION = 0
    MINIMIZATION = 1


class ObjectiveHandling(Enum):
    """SINGLE: only the first kpi counts. AGGREGATE: weighted sum of all kpis."""

    SINGLE = 0
    AGGREGATE = 1


class TypeObjective(Enum):
    OBJECTIVE = 0
    PENALTY = 1


@dataclass(frozen=True)
class ObjectiveDoc:
    type: TypeObjective
    default_weight: Number


@dataclass
class ObjectiveRegister:
    """Kpis returned by `Problem.evaluate()`, with their role and default weight.

    Penalties get weights of the opposite sign of the objectives, large enough
    for any infeasible solution to rank below every feasible one.

    """

    objective_sense: ModeOptim
    objective_handling: ObjectiveHandling
    dict_objective_to_doc: dict[str, ObjectiveDoc]

    def get_objective_names(self) -> list[str]:
        return sorted(self.dict_objective_to_doc)

    def get_list_objective_and_default_weight(
        self,
    ) -> tuple[list[str], list[Number]]:
        names = self.get_objective_names()
        return names, [self.dict_objective_to_doc[name].default_weight for name in names]


def check_non_negative_number(x: Any, name: str) -> None:
    """Raise InvalidInstance unless x is a finite real number >= 0 (bool excluded)."""
    if isinstance(x, bool) or not isinstance(x, Real):
        raise InvalidInstance(f"{name} must be a real number, got {x!r}.")
    if isinstance(x, float) and not math.isfinite(x):
        raise InvalidInstance(f"{name} must be finite, got {x!r}.")
    if x < 0:
        raise InvalidInstance(f"{name} must be non-negative, got {x!r}.")


def is_integral(x: Number) -> bool:
    """True for integer values whatever their type, e.g. 3, 3.0 or Fraction(6, 2)."""
    if isinstance(x, int):
        return True
    if isinstance(x, Fraction):
        return x.denominator == 1
    return float(x).is_integer()


class Solution(ABC):
    def __init__(self, problem: Problem):
        self.problem = problem

    @abstractmethod
    def copy(self) -> Solution:
        """Independent copy: mutating it leaves the original untouched."""
        ...


class Problem(ABC):
    """An instance to solve.

    Subclasses describe their kpis in `get_objective_register()` and compute them
    in `evaluate()`. `satisfy()` tells feasibility, independently of the kpis.

    """

    @abstractmethod
    def evaluate(self, variable: Solution) -> dict[str, Number]:
        ...

    @abstractmethod
    def satisfy(self, variable: Solution) -> bool:
        ...

    def check_instance(self) -> None:
        """Raise InvalidInstance if the data is malformed. Accepts anything by default."""
        ...

    @abstractmethod
    def get_solution_type(self) -> type[Solution]:
        ...

    @abstractmethod
    def get_objective_register(self) -> ObjectiveRegister:
        ...

    def get_objective_names(self) -> list[str]:
        return self.get_objective_register().get_objective_names()

    def get_dummy_solution(self) -> Solution:
        """A trivial solution, feasible whenever the problem allows it."""
        raise NotImplementedError()


@dataclass
class ParamsObjectiveFunction:
    """How kpis are turned into a fitness for one solve: which ones, with which weights."""

    objective_handling: ObjectiveHandling
    objectives: list[str]
    weights: list[Number]
    sense_function: ModeOptim


def get_default_objective_setup(problem: Problem) -> ParamsObjectiveFunction:
    register = problem.get_objective_register()
    objectives, weights = register.get_list_objective_and_default_weight()
    logger.debug(f"Default objectives {objectives} with weights {weights}")
    return ParamsObjectiveFunction(
        objective_handling=register.objective_handling,
        objectives=objectives,
        weights=weights,
        sense_function=register.objective_sense,
    )


def build_aggreg_function_and_params_objective(
    problem: Problem,
    params_objective_function: Optional[ParamsObjectiveFunction] = None,
) -> tuple[
    Callable[[Solution], Number],
    Callable[[dict[str, Number]], Number],
    ParamsObjectiveFunction,
]:
    """Fitness functions of a solution and of a kpi dict, plus the params used.

    The problem defaults apply when `params_objective_function` is None.
    Weights multiply the kpis as they are, so int and Fraction kpis give an exact fitness.

    """
    if params_objective_function is None:
        params_objective_function = get_default_objective_setup(problem)
    objectives = params_objective_function.objectives
    weights = params_objective_function.weights
    if params_objective_function.objective_handling == ObjectiveHandling.SINGLE:
        objectives, weights = objectives[:1], weights[:1]

    def aggreg_from_dict(kpis: dict[str, Number]) -> Number:
        return sum(kpis[name] * weight for name, weight in zip(objectives, weights))

    def aggreg_from_sol(solution: Solution) -> Number:
        return aggreg_from_dict(problem.evaluate(solution))

    return aggreg_from_sol, aggreg_from_dict, params_objective_function
