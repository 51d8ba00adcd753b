#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.
import logging
import os
from typing import Optional

from knapsack_optimization.generic_tools.do_solver import SolverDO
from knapsack_optimization.generic_tools.exceptions import (
    CapacityTooLarge,
    InvalidParameter,
)
from knapsack_optimization.generic_tools.hyperparameters.hyperparameter import (
    IntegerHyperparameter,
)

KO_CAPACITY_CEILING_ENVVARNAME = "KNAPSACK_OPTIMIZATION_CAPACITY_CEILING"
KO_DEFAULT_CAPACITY_CEILING = 10_000_000
KO_DEFAULT_TABLE_CELLS_CEILING = 100_000_000

logger = logging.getLogger(__name__)


def get_capacity_ceiling(capacity_ceiling: Optional[int] = None) -> int:
    """Return the capacity ceiling of dynamic programming tables.

    Params:
        capacity_ceiling: if given, returned as is. Else we look for the environment variable
            KNAPSACK_OPTIMIZATION_CAPACITY_CEILING, and fall back to 10_000_000.

    """
    if capacity_ceiling is not None:
        return capacity_ceiling
    value = os.environ.get(KO_CAPACITY_CEILING_ENVVARNAME)
    if not value:
        return KO_DEFAULT_CAPACITY_CEILING
    try:
        return int(value)
    except ValueError as e:
        raise InvalidParameter(
            f"Environment variable {KO_CAPACITY_CEILING_ENVVARNAME} must be an integer, got {value!r}."
        ) from e


class TableDpSolver(SolverDO):
    """Base class for solvers filling a dynamic programming table.

    The table has one row per prefix of the items and one column per integer
    between 0 and the capacity (or target sum). Before allocating anything, the
    capacity is checked against `capacity_ceiling` and the number of cells
    against `table_cells_ceiling`.

    """

    hyperparameters = [
        IntegerHyperparameter(name="capacity_ceiling", low=0, default=None),
        IntegerHyperparameter(
            name="table_cells_ceiling",
            low=1,
            default=KO_DEFAULT_TABLE_CELLS_CEILING,
        ),
    ]

    def check_capacity(
        self,
        capacity: int,
        nb_rows: int,
        capacity_ceiling: Optional[int],
        table_cells_ceiling: Optional[int],
    ) -> None:
        """Raise CapacityTooLarge if a table of `nb_rows` x (capacity + 1) is too large.

        The reported ceiling is the largest capacity allowed for this number of rows.
        A `table_cells_ceiling` of None leaves the number of cells unbounded.

        """
        ceiling = get_capacity_ceiling(capacity_ceiling)
        if table_cells_ceiling is not None:
            ceiling = min(ceiling, table_cells_ceiling // nb_rows - 1)
        if capacity > ceiling:
            logger.warning(
                f"{self.__class__.__name__}: capacity {capacity} above ceiling {ceiling} "
                f"for a table of {nb_rows} rows."
            )
            raise CapacityTooLarge(capacity=capacity, ceiling=ceiling)
