"""Command-line interface for Persamaan.

Examples:
    persamaan -e "x^2 - 5x + 6 = 0"
    persamaan -e "x + y = 3, x - y = 1" --find x,y
    persamaan -e "x^4 = 16" --format json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config
from .api import solve_equation, solve_system
from .logging_config import setup_logging
from .parser import format_number, format_superscript, split_top_level_commas
from .types import SolveResult


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary (SolveResult.to_dict())
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    typ = res.get("type")
    if typ == "identity_or_contradiction":
        print(res.get("result"))
        return
    if res.get("exhausted"):
        print("No solution found (every strategy was exhausted).")
        return
    if typ == "equation":
        var = (res.get("unknowns") or ["x"])[0]
        for exact, approx in zip(res.get("exact", []), res.get("approx", [])):
            line = f"{var} = {format_superscript(exact)}"
            if approx is not None and format_number(approx) != exact:
                line += f"  ≈ {format_number(approx)}"
            print(line)
        if res.get("strategy"):
            print(f"(solved by {res['strategy']} strategy)")
    elif typ == "system":
        for index, branch in enumerate(res.get("solutions", []), start=1):
            bindings = ", ".join(
                f"{name} = {format_superscript(value)}" for name, value in branch.items()
            )
            print(f"Solution {index}: {bindings}")


def run(expression: str, find: str | None = None) -> SolveResult:
    """Solve *expression*, treating a top-level comma list as a system."""
    if len(split_top_level_commas(expression)) > 1:
        return solve_system(expression, find)
    if find is not None and len(split_top_level_commas(find)) > 1:
        return solve_system(expression, find)
    return solve_equation(expression, find)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Persamaan CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for a failed solve, 2 for usage errors)
    """
    parser = argparse.ArgumentParser(prog="persamaan")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Equation or comma-separated system to solve",
        dest="eval_expr",
    )
    parser.add_argument(
        "-f",
        "--find",
        type=str,
        help="Unknown(s) to solve for, comma-separated and in elimination order",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--newton-precision",
        type=float,
        help="Stopping threshold for the Newton-Raphson fallback (default: 1e-5)",
    )
    parser.add_argument(
        "--newton-max-iterations",
        type=int,
        help="Iteration budget for the Newton-Raphson fallback (default: 100)",
    )
    parser.add_argument(
        "--no-numeric-fallback",
        action="store_true",
        help="Disable numeric root-finding fallback",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    if args.version:
        print(config.VERSION)
        return 0

    setup_logging(level=args.log_level, log_file=args.log_file)

    # Solver modules read these at call time
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)
    if args.newton_precision and args.newton_precision > 0:
        config.NEWTON_PRECISION = float(args.newton_precision)
    if args.newton_max_iterations and args.newton_max_iterations > 0:
        config.NEWTON_MAX_ITERATIONS = int(args.newton_max_iterations)
    if args.no_numeric_fallback:
        config.NUMERIC_FALLBACK_ENABLED = False

    if not args.eval_expr:
        parser.print_usage(sys.stderr)
        print("persamaan: error: an equation is required (-e)", file=sys.stderr)
        return 2

    result = run(args.eval_expr, args.find)
    print_result_pretty(result.to_dict(), args.format)
    return 0 if result.ok else 1
