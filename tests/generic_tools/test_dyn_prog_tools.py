#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import pytest

from knapsack_optimization.generic_tools.dyn_prog_tools import (
    KO_CAPACITY_CEILING_ENVVARNAME,
    KO_DEFAULT_CAPACITY_CEILING,
    get_capacity_ceiling,
)
from knapsack_optimization.generic_tools.exceptions import (
    BudgetExceeded,
    CapacityTooLarge,
    InvalidInstance,
    InvalidParameter,
    KnapsackOptimizationError,
    Unsatisfiable,
)


def test_default_capacity_ceiling():
    assert get_capacity_ceiling() == KO_DEFAULT_CAPACITY_CEILING == 10_000_000
    assert get_capacity_ceiling(5) == 5


def test_capacity_ceiling_envvar(monkeypatch):
    monkeypatch.setenv(KO_CAPACITY_CEILING_ENVVARNAME, "123")
    assert get_capacity_ceiling() == 123
    assert get_capacity_ceiling(5) == 5
    monkeypatch.setenv(KO_CAPACITY_CEILING_ENVVARNAME, "1e3")
    with pytest.raises(InvalidParameter):
        get_capacity_ceiling()


def test_exceptions_hierarchy():
    for error_class in [
        InvalidInstance,
        InvalidParameter,
        CapacityTooLarge,
        BudgetExceeded,
        Unsatisfiable,
    ]:
        assert issubclass(error_class, KnapsackOptimizationError)
    assert issubclass(InvalidInstance, ValueError)
    assert issubclass(InvalidParameter, ValueError)
    error = CapacityTooLarge(capacity=12, ceiling=10)
    assert "12" in str(error) and "10" in str(error)
    assert BudgetExceeded("out of nodes").result is None
