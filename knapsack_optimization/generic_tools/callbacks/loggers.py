#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

import logging
from typing import Any, Optional

from knapsack_optimization.generic_tools.callbacks.callback import Callback
from knapsack_optimization.generic_tools.do_solver import SolverDO
from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)

logger = logging.getLogger(__name__)


class _LevelsMixin:
    def __init__(
        self,
        step_verbosity_level: int = logging.DEBUG,
        end_verbosity_level: int = logging.INFO,
    ):
        self.step_verbosity_level = step_verbosity_level
        self.end_verbosity_level = end_verbosity_level


class NbIterationTracker(_LevelsMixin, Callback):
    """Count the solutions stored by a solver, logging each of them."""

    def __init__(self, **kwargs: int):
        super().__init__(**kwargs)
        self.nb_iteration = 0

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        self.nb_iteration += 1
        logger.log(self.step_verbosity_level, f"Solution #{self.nb_iteration} stored")
        return False

    def on_solve_end(self, res: ResultStorage, solver: SolverDO):
        logger.log(
            self.end_verbosity_level,
            f"{solver.__class__.__name__} stored {self.nb_iteration} solutions",
        )


class ObjectiveLogger(NbIterationTracker):
    """Log the best fitness so far each time a solution is stored, and at the end."""

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        self.nb_iteration += 1
        logger.log(
            self.step_verbosity_level,
            f"Solution #{self.nb_iteration}, best objective={res.get_best_solution_fit()[1]}",
        )
        return False

    def on_solve_end(self, res: ResultStorage, solver: SolverDO):
        logger.log(
            self.end_verbosity_level,
            f"{solver.__class__.__name__} finished with status={res.status_solver}, "
            f"best objective={res.get_best_solution_fit()[1]}",
        )


class SearchTreeLogger(Callback):
    """Count the nodes a tree search expands and prunes.

    Counters are reset at each solve start. Each node is logged at
    `node_verbosity_level`, the totals at `end_verbosity_level`.

    """

    def __init__(
        self,
        node_verbosity_level: int = logging.DEBUG,
        end_verbosity_level: int = logging.INFO,
    ):
        self.node_verbosity_level = node_verbosity_level
        self.end_verbosity_level = end_verbosity_level
        self.nb_expanded = 0
        self.nb_pruned = 0

    def on_solve_start(self, solver: SolverDO):
        self.nb_expanded = 0
        self.nb_pruned = 0

    def on_node_expanded(self, node: Any, solver: SolverDO):
        self.nb_expanded += 1
        logger.log(self.node_verbosity_level, f"expand {node}")

    def on_node_pruned(self, node: Any, solver: SolverDO):
        self.nb_pruned += 1
        logger.log(self.node_verbosity_level, f"prune {node}")

    def on_solve_end(self, res: ResultStorage, solver: SolverDO):
        logger.log(
            self.end_verbosity_level,
            f"{self.nb_expanded} nodes expanded, {self.nb_pruned} nodes pruned",
        )
