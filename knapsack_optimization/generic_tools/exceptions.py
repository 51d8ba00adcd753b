#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # avoid cycling imports due solely to annotations
    from knapsack_optimization.generic_tools.result_storage.result_storage import (
        ResultStorage,
    )


class KnapsackOptimizationError(Exception):
    """Base class of all errors raised by knapsack-optimization solvers."""

    ...


class InvalidInstance(KnapsackOptimizationError, ValueError):
    """The problem instance is malformed.

    e.g. negative capacity, negative weight or value, non-integer weight for
    a table-based solver. Raised before any algorithm runs.

    """

    ...


class InvalidParameter(KnapsackOptimizationError, ValueError):
    """A solver parameter is out of its admissible range (e.g. GreedyK's k)."""

    ...


class CapacityTooLarge(KnapsackOptimizationError):
    """The dynamic programming table would exceed the configured ceiling.

    The caller can recover by choosing a solver not relying on a table
    (branch and bound or a greedy heuristic).

    """

    def __init__(self, capacity: int, ceiling: int):
        super().__init__(
            f"Capacity {capacity} exceeds the dynamic programming ceiling {ceiling}. "
            "Use a branch and bound or greedy solver instead, "
            "or raise the `capacity_ceiling` or `table_cells_ceiling` hyperparameters."
        )
        self.capacity = capacity
        self.ceiling = ceiling


class BudgetExceeded(KnapsackOptimizationError):
    """The search budget (nodes or time) ran out before optimality was proven.

    Attributes:
        result: result storage holding the best solution found so far
            (the incumbent). It is not proven optimal.

    """

    def __init__(self, message: str, result: Optional[ResultStorage] = None):
        super().__init__(message)
        self.result = result


class Unsatisfiable(KnapsackOptimizationError):
    """The problem has no solution satisfying the requested constraints."""

    ...
