"""Public API for Persamaan - returns structured objects without side effects.

Every function takes plain strings and returns a SolveResult; parse errors,
validation errors and numeric non-convergence are reported through
``ok=False`` and ``error_code`` instead of being raised.
"""

from __future__ import annotations

from typing import Iterable

import sympy as sp

from .logging_config import get_logger
from .parser import free_symbols_of, parse_equation, parse_system, parse_unknowns
from .solver import solve_system as _solve_system
from .solver import solve_with_strategy, verify_branch, verify_roots
from .types import (
    ConvergenceError,
    Equation,
    ParseError,
    SolveResult,
    SolverError,
    ValidationError,
)

logger = get_logger("api")


def _approx(value: sp.Expr) -> str | None:
    try:
        return str(sp.N(value))
    except (ValueError, TypeError, OverflowError, ArithmeticError):
        # Expected for some symbolic solutions
        return None


def _failure(result_type: str, error: Exception) -> SolveResult:
    code = getattr(error, "code", "SOLVER_ERROR")
    return SolveResult(ok=False, result_type=result_type, error=str(error), error_code=code)


def _identity_or_contradiction(equation: Equation) -> SolveResult:
    residual = sp.expand(equation.residual())
    holds = residual == 0 or residual.is_zero is True
    return SolveResult(
        ok=True,
        result_type="identity_or_contradiction",
        result="Identity" if holds else "Contradiction",
    )


def solve_equation(equation: str, find_var: str | None = None) -> SolveResult:
    """Solve a single equation.

    Args:
        equation: Equation string (e.g., "x+1=0", "x^2-1=0")
        find_var: Variable to solve for; may be omitted when the equation
            has exactly one symbol

    Returns:
        SolveResult with exact and approximate solutions

    Example:
        >>> from persamaan_pkg.api import solve_equation
        >>> solve_equation("x^2 - 5x + 6 = 0").exact
        ['3', '2']
    """
    try:
        parsed = parse_equation(equation)
        symbols = free_symbols_of([parsed])
        if find_var is None:
            if not symbols:
                return _identity_or_contradiction(parsed)
            if len(symbols) > 1:
                names = ", ".join(sym.name for sym in symbols)
                return SolveResult(
                    ok=False,
                    result_type="equation",
                    error=f"Equation has several variables ({names}); choose one to solve for.",
                    error_code="AMBIGUOUS_VARIABLE",
                )
            var = symbols[0]
        else:
            var = parse_unknowns([find_var], [parsed])[0]
        strategy, roots = solve_with_strategy(parsed, var)
    except (ValidationError, ParseError) as e:
        logger.warning("Rejected equation %r: %s", equation, e)
        return _failure("equation", e)
    except ConvergenceError as e:
        logger.warning("No convergence solving %r: %s", equation, e)
        return _failure("equation", e)
    except SolverError as e:
        logger.error("Solver error on %r", equation, exc_info=True)
        return _failure("equation", e)

    return SolveResult(
        ok=True,
        result_type="equation",
        exact=[str(root.rhs) for root in roots],
        approx=[_approx(root.rhs) for root in roots],
        strategy=strategy,
        exhausted=not roots,
        verified=verify_roots(parsed.residual(), var, roots),
        unknowns=[var.name],
    )


def solve_system(
    equations: str, unknowns: str | Iterable[str] | None = None
) -> SolveResult:
    """Solve a system of equations.

    Args:
        equations: Comma-separated equation strings (e.g., "x+y=3, x-y=1")
        unknowns: Ordered unknowns ("x, y" or ["x", "y"]); defaults to every
            symbol of the system sorted by name

    Returns:
        SolveResult whose system_solutions holds one {name: value} dict per branch
    """
    try:
        system = parse_system(equations)
        symbols = parse_unknowns(unknowns, system)
        branches = _solve_system(system, symbols)
    except (ValidationError, ParseError) as e:
        logger.warning("Rejected system %r: %s", equations, e)
        return _failure("system", e)
    except ConvergenceError as e:
        logger.warning("No convergence solving system %r: %s", equations, e)
        return _failure("system", e)
    except SolverError as e:
        logger.error("Solver error on system %r", equations, exc_info=True)
        return _failure("system", e)

    return SolveResult(
        ok=True,
        result_type="system",
        unknowns=[sym.name for sym in symbols],
        system_solutions=[
            {str(binding.lhs): str(binding.rhs) for binding in branch}
            for branch in branches
        ],
        exhausted=not branches,
        verified=[verify_branch(system, branch) for branch in branches],
    )
