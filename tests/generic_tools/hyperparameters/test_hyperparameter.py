#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
from typing import Any, Optional

import pytest

from knapsack_optimization.generic_tools.callbacks.callback import Callback
from knapsack_optimization.generic_tools.do_solver import SolverDO
from knapsack_optimization.generic_tools.exceptions import InvalidParameter
from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    CategoricalHyperparameter,
    FloatHyperparameter,
    IntegerHyperparameter,
)
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)
from knapsack_optimization.knapsack.solvers.bnb import BranchAndBoundKnapsackSolver
from knapsack_optimization.knapsack.solvers.dp import ExactDpKnapsackSolver


class DummySolver(SolverDO):
    hyperparameters = [
        IntegerHyperparameter("nb", low=0, high=2, default=1),
        FloatHyperparameter("coeff", low=-1.0, high=1.0, default=1.0),
        CategoricalHyperparameter("use_it", choices=[True, False], default=True),
    ]

    def solve(
        self, callbacks: Optional[list[Callback]] = None, **kwargs: Any
    ) -> ResultStorage:
        return self.create_result_storage()


def test_get_hyperparameters_and_co():
    assert DummySolver.get_hyperparameters_names() == ["nb", "coeff", "use_it"]
    assert isinstance(DummySolver.get_hyperparameter("nb"), IntegerHyperparameter)
    assert DummySolver.get_default_hyperparameters() == {
        "nb": 1,
        "coeff": 1.0,
        "use_it": True,
    }


def test_get_unknown_hyperparameter():
    with pytest.raises(KeyError):
        DummySolver.get_hyperparameter("unknown")
    assert DummySolver.get_default_hyperparameters(names=["coeff"]) == {"coeff": 1.0}


def test_complete_with_default_hyperparameters():
    kwargs = DummySolver.complete_with_default_hyperparameters({"nb": 2, "other": 0})
    assert kwargs == {"nb": 2, "coeff": 1.0, "use_it": True, "other": 0}


@pytest.mark.parametrize(
    "kwargs",
    [{"nb": 3}, {"nb": -1}, {"nb": 1.0}, {"coeff": 2.0}, {"coeff": "a"}, {"use_it": 1.5}],
)
def test_check_hyperparameters(kwargs):
    with pytest.raises(InvalidParameter):
        DummySolver.complete_with_default_hyperparameters(kwargs)


def test_none_means_not_set():
    DummySolver.check_hyperparameters({"nb": None, "coeff": None})


def test_solvers_hyperparameters():
    assert ExactDpKnapsackSolver.get_default_hyperparameters() == {
        "capacity_ceiling": None,
        "table_cells_ceiling": 100_000_000,
        "greedy_start": False,
    }
    assert BranchAndBoundKnapsackSolver.get_default_hyperparameters() == {
        "max_nodes": None,
        "time_limit": None,
        "partial_result_on_budget": False,
    }
