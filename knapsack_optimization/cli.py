"""Command-line interface for knapsack-optimization."""

#  Copyright (c) 2025 AIRBUS and its affiliates.
#  This source code is licensed under the MIT license found in the
#  LICENSE file in the root directory of this source tree.

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from knapsack_optimization.generic_tools.callbacks.loggers import SearchTreeLogger
from knapsack_optimization.generic_tools.exceptions import (
    BudgetExceeded,
    KnapsackOptimizationError,
)
from knapsack_optimization.knapsack.parser import parse_csv_file, parse_number
from knapsack_optimization.knapsack.problem import KnapsackProblem, KnapsackSolution
from knapsack_optimization.knapsack.solvers.bnb import BranchAndBoundKnapsackSolver
from knapsack_optimization.knapsack.solvers.dp import ExactDpKnapsackSolver
from knapsack_optimization.knapsack.solvers.fractional import (
    FractionalGreedyKnapsackSolver,
)
from knapsack_optimization.knapsack.solvers.greedy import (
    Greedy0KnapsackSolver,
    GreedyKKnapsackSolver,
)
from knapsack_optimization.subset_sum.problem import SubsetSumProblem
from knapsack_optimization.subset_sum.solvers.dp import DpSubsetSumSolver

logger = logging.getLogger(__name__)

LOGGING_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _load_problem(args: argparse.Namespace) -> KnapsackProblem:
    return parse_csv_file(
        args.items_csv,
        capacity=parse_number(args.weight_limit),
        flipped=args.flipped_csv,
    )


def _print_selection(problem: KnapsackProblem, solution: KnapsackSolution) -> None:
    ids = [problem.item_labels[i] for i in solution.get_taken_indexes()]
    print(f"chosen ids={ids}")
    print(f"total_weight={solution.weight}")
    print(f"total_profit={solution.value}")


def _frac_ks(args: argparse.Namespace) -> None:
    problem = _load_problem(args)
    res = FractionalGreedyKnapsackSolver(problem).solve()
    solution = res.get_best_solution()
    for position, fraction in enumerate(solution.list_fraction):
        if fraction:
            print(f"id={problem.item_labels[position]:<2} x={str(fraction):<3}")
    print(f"total_profit={solution.value}")


def _ks_dp(args: argparse.Namespace) -> None:
    problem = _load_problem(args)
    solver = ExactDpKnapsackSolver(problem)
    res = solver.solve()
    for i, row in enumerate(solver.table):
        print(f"i={i}: {row.tolist()}")
    _print_selection(problem, res.get_best_solution())


def _ks_bb(args: argparse.Namespace) -> None:
    problem = _load_problem(args)
    solver = BranchAndBoundKnapsackSolver(problem)
    res = solver.solve(
        callbacks=[SearchTreeLogger()],
        max_nodes=args.max_nodes,
        time_limit=args.time_limit,
        partial_result_on_budget=args.partial,
    )
    _print_selection(problem, res.get_best_solution())
    print(f"status={res.status_solver.value}")


def _ks_greedyk(args: argparse.Namespace) -> None:
    problem = _load_problem(args)
    res = GreedyKKnapsackSolver(problem).solve(k=args.k)
    _print_selection(problem, res.get_best_solution())


def _ks_ig(args: argparse.Namespace) -> None:
    problem = _load_problem(args)
    res = Greedy0KnapsackSolver(problem).solve()
    _print_selection(problem, res.get_best_solution())


def _subsum_row(args: argparse.Namespace) -> None:
    problem = SubsetSumProblem(list_numbers=args.numbers, target=args.sum)
    solver = DpSubsetSumSolver(problem)
    for i, row in enumerate(solver.reachable_sums()):
        print(f"i={i}: {row}")
    print(f"reachable={solver.is_reachable()}")


def _subsum_full(args: argparse.Namespace) -> None:
    problem = SubsetSumProblem(list_numbers=args.numbers, target=args.sum)
    solver = DpSubsetSumSolver(problem)
    res = solver.solve()
    for i, row in enumerate(solver.table):
        print(f"i={i}: {[int(cell) for cell in row]}")
    solution = res.get_best_solution()
    print(f"reachable={solver.is_reachable()}")
    print(f"best_sum={solution.value} numbers={solution.get_taken_indexes()}")


def _add_items_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "items_csv", help="path to a csv file with the items (id, weight, profit)"
    )
    parser.add_argument("weight_limit", help="maximum weight of the knapsack")
    parser.add_argument(
        "--flipped-csv",
        "-f",
        action="store_true",
        help="enable this flag if your csv is written from left to right",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="knapsack-optimization",
        description="Solve knapsack and subset sum instances.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Only log warnings and errors"
    )
    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
    )

    frac_parser = subparsers.add_parser(
        "frac-ks", help="Solve fractional knapsack with the greedy algorithm"
    )
    _add_items_arguments(frac_parser)
    frac_parser.set_defaults(func=_frac_ks)

    dp_parser = subparsers.add_parser(
        "ks-dp", help="Solve maximum knapsack with dynamic programming"
    )
    _add_items_arguments(dp_parser)
    dp_parser.set_defaults(func=_ks_dp)

    bb_parser = subparsers.add_parser(
        "ks-bb", help="Solve maximum knapsack with branch and bound"
    )
    _add_items_arguments(bb_parser)
    bb_parser.add_argument(
        "--max-nodes", type=int, default=None, help="maximum number of expanded nodes"
    )
    bb_parser.add_argument(
        "--time-limit", type=float, default=None, help="time limit in seconds"
    )
    bb_parser.add_argument(
        "--partial",
        action="store_true",
        help="print the best solution found when a budget runs out instead of failing",
    )
    bb_parser.set_defaults(func=_ks_bb)

    greedyk_parser = subparsers.add_parser(
        "ks-greedyk",
        help="Solve maximum knapsack with the greedy_k approximation. The result may not be optimal",
    )
    _add_items_arguments(greedyk_parser)
    greedyk_parser.add_argument("k", type=int, help="number of fixed items")
    greedyk_parser.set_defaults(func=_ks_greedyk)

    ig_parser = subparsers.add_parser(
        "ks-ig",
        help="Solve maximum knapsack with integer greedy. The result may not be optimal",
    )
    _add_items_arguments(ig_parser)
    ig_parser.set_defaults(func=_ks_ig)

    for name, func, help_message in [
        ("subsum-row", _subsum_row, "Solve subset sum and print reachable sums"),
        (
            "subsum-full",
            _subsum_full,
            "Solve subset sum and print the full table of reachable sums",
        ),
    ]:
        subsum_parser = subparsers.add_parser(name, help=help_message)
        subsum_parser.add_argument("sum", type=int, help="sum that should be reached")
        subsum_parser.add_argument(
            "numbers", type=int, nargs="*", help="numbers of the subset sum instance"
        )
        subsum_parser.set_defaults(func=func)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the ``knapsack-optimization`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.

    Returns: exit code, 1 if the instance could not be solved.

    """
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(format=LOGGING_FORMAT)
    logging.getLogger("knapsack_optimization").setLevel(level)

    try:
        args.func(args)
    except BudgetExceeded as e:
        logger.error(f"{e} Use --partial to print the best solution found.")
        return 1
    except (KnapsackOptimizationError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
