#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations  # making annotations strings

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional, Union

from knapsack_optimization.generic_tools.result_storage.result_storage import (
    ResultStorage,
)

if TYPE_CHECKING:  # do_solver imports this module
    from knapsack_optimization.generic_tools.do_solver import SolverDO


class Callback:
    """Hooks called by solvers during `solve()`.

    Every hook does nothing by default: subclasses override the ones they need.
    Only `on_step_end` can influence the solve, by returning True to stop it.

    Hooks order for a solve:
        on_solve_start, then on_step_end for each solution stored
        (interleaved with on_node_expanded / on_node_pruned for tree searches),
        then on_solve_end.

    """

    params: dict[str, Any]

    def set_params(self, params: dict[str, Any]) -> None:
        self.params = params

    def on_solve_start(self, solver: SolverDO) -> None:
        ...

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        """New solution stored in `res`, `step` counting from 1.

        Returns:
            True to ask the solver to stop and return what it has.

        """
        ...

    def on_node_expanded(self, node: Any, solver: SolverDO) -> None:
        ...

    def on_node_pruned(self, node: Any, solver: SolverDO) -> None:
        ...

    def on_solve_end(self, res: ResultStorage, solver: SolverDO) -> None:
        ...


class CallbackList(Callback):
    """Single callback forwarding each hook to several callbacks, in order.

    Solvers wrap the `callbacks` argument of `solve()` in it, so that they
    only deal with one object. Extra keyword arguments are shared with every
    wrapped callback through `set_params`.

    """

    def __init__(
        self,
        callbacks: Optional[Union[Callback, Iterable[Callback]]] = None,
        **params: Any,
    ):
        if callbacks is None:
            self.callbacks: list[Callback] = []
        elif isinstance(callbacks, Callback):
            self.callbacks = [callbacks]
        else:
            self.callbacks = list(callbacks)
        if params:
            self.set_params(params)

    def append(self, callback: Callback) -> None:
        self.callbacks.append(callback)

    def set_params(self, params: dict[str, Any]) -> None:
        super().set_params(params)
        for callback in self.callbacks:
            callback.set_params(params)

    def on_solve_start(self, solver: SolverDO) -> None:
        for callback in self.callbacks:
            callback.on_solve_start(solver=solver)

    def on_step_end(
        self, step: int, res: ResultStorage, solver: SolverDO
    ) -> Optional[bool]:
        # every callback sees the step, even after one of them asked to stop
        decisions = [
            callback.on_step_end(step=step, res=res, solver=solver)
            for callback in self.callbacks
        ]
        return any(decisions)

    def on_node_expanded(self, node: Any, solver: SolverDO) -> None:
        for callback in self.callbacks:
            callback.on_node_expanded(node=node, solver=solver)

    def on_node_pruned(self, node: Any, solver: SolverDO) -> None:
        for callback in self.callbacks:
            callback.on_node_pruned(node=node, solver=solver)

    def on_solve_end(self, res: ResultStorage, solver: SolverDO) -> None:
        for callback in self.callbacks:
            callback.on_solve_end(res=res, solver=solver)
