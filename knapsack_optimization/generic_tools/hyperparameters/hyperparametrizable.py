#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations  # see annotations as str

from typing import Any, Optional

from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    Hyperparameter,
)


class Hyperparametrizable:
    """Mixin for solvers declaring their keyword arguments as hyperparameters.

    Subclasses list them in the class attribute `hyperparameters`; the methods
    below fill in defaults and validate values before the algorithm sees them.

    """

    hyperparameters: list[Hyperparameter] = []

    @classmethod
    def get_hyperparameters_names(cls) -> list[str]:
        return [h.name for h in cls.hyperparameters]

    @classmethod
    def get_hyperparameter(cls, name: str) -> Hyperparameter:
        for h in cls.hyperparameters:
            if h.name == name:
                return h
        raise KeyError(name)

    @classmethod
    def _select(cls, names: Optional[list[str]]) -> list[Hyperparameter]:
        if names is None:
            return list(cls.hyperparameters)
        return [cls.get_hyperparameter(name) for name in names]

    @classmethod
    def get_default_hyperparameters(
        cls, names: Optional[list[str]] = None
    ) -> dict[str, Any]:
        """Default value of each hyperparameter (all of them unless `names` is given)."""
        return {h.name: h.default for h in cls._select(names)}

    @classmethod
    def check_hyperparameters(
        cls, kwargs: dict[str, Any], names: Optional[list[str]] = None
    ) -> None:
        """Validate the values of `kwargs` corresponding to hyperparameters.

        Raises:
            InvalidParameter: for the first inadmissible value met.

        """
        for h in cls._select(names):
            if h.name in kwargs:
                h.check_value(kwargs[h.name])

    @classmethod
    def complete_with_default_hyperparameters(
        cls, kwargs: dict[str, Any], names: Optional[list[str]] = None
    ) -> dict[str, Any]:
        """New kwargs where missing hyperparameters take their default.

        Keys that are not hyperparameters are passed through untouched.

        """
        kwargs_complete = cls.get_default_hyperparameters(names=names)
        kwargs_complete.update(kwargs)
        cls.check_hyperparameters(kwargs_complete, names=names)
        return kwargs_complete
