#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations  # see annotations as str

from dataclasses import dataclass, field
from numbers import Integral, Real
from typing import Any, Optional, Union

from knapsack_optimization.generic_tools.exceptions import InvalidParameter


@dataclass
class Hyperparameter:
    """Description of a keyword argument accepted by a solver.

    `name` is the keyword as given to `__init__()`, `init_model()` or `solve()`.
    A `default` of None means the argument is unset unless the caller gives it.

    """

    name: str
    default: Optional[Any] = None

    def check_value(self, value: Any) -> None:
        """Raise InvalidParameter if `value` is not admissible.

        None always passes, as it stands for "not set".

        """
        ...


@dataclass
class _NumericHyperparameter(Hyperparameter):
    low: Optional[Real] = None
    high: Optional[Real] = None

    expected_type = Real
    expected_type_name = "a number"

    def check_value(self, value: Any) -> None:
        if value is None:
            return
        # bool is an Integral, but True is never a meaningful budget
        if isinstance(value, bool) or not isinstance(value, self.expected_type):
            raise InvalidParameter(
                f"{self.name} must be {self.expected_type_name}, got {value!r}."
            )
        if self.low is not None and value < self.low:
            raise InvalidParameter(f"{self.name} must be >= {self.low}, got {value}.")
        if self.high is not None and value > self.high:
            raise InvalidParameter(f"{self.name} must be <= {self.high}, got {value}.")


@dataclass
class IntegerHyperparameter(_NumericHyperparameter):
    """Integer in [low, high], unbounded on a side set to None."""

    expected_type = Integral
    expected_type_name = "an integer"


@dataclass
class FloatHyperparameter(_NumericHyperparameter):
    """Real number in [low, high], unbounded on a side set to None."""


LabelType = Optional[Union[bool, int, float, str]]


@dataclass
class CategoricalHyperparameter(Hyperparameter):
    """Value taken among a fixed list of choices."""

    choices: list[LabelType] = field(default_factory=list)

    def __post_init__(self):
        self.choices = list(self.choices)

    def check_value(self, value: Any) -> None:
        if value is None:
            return
        if value not in self.choices:
            raise InvalidParameter(
                f"{self.name} must be one of {self.choices}, got {value!r}."
            )
