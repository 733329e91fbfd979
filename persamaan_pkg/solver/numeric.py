"""Newton-Raphson fallback used when no closed form applies.

Both the search for a usable starting point and the refinement
loop are bounded; running out of either budget raises ConvergenceError.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import sympy as sp

from .. import config
from ..expression import derivative, evaluate_numeric
from ..logging_config import get_logger
from ..types import ConvergenceError, Equation, RootList

logger = get_logger("solver.numeric")


def _evaluate(expr: sp.Expr, var: sp.Symbol, value: complex) -> complex:
    point = value.real if value.imag == 0 else value
    try:
        result = np.complex128(evaluate_numeric(expr, var, point))
    except (TypeError, ValueError, ZeroDivisionError, OverflowError) as e:
        raise ConvergenceError(f"Cannot evaluate {expr} at {var} = {point}: {e}") from e
    if not np.isfinite(result):
        raise ConvergenceError(f"{expr} is not finite at {var} = {point}")
    return complex(result)


def _usable_start(expr: sp.Expr, slope_expr: sp.Expr, var: sp.Symbol, point: complex) -> bool:
    """A start needs a finite value and a finite, nonzero slope."""
    try:
        if _evaluate(slope_expr, var, point) == 0:
            return False
        _evaluate(expr, var, point)
    except ConvergenceError:
        logger.debug("Cannot start Newton at %s = %s", var, point)
        return False
    return True


def find_root(
    expr: Any,
    var: sp.Symbol,
    precision: float | None = None,
    max_iterations: int | None = None,
    max_start_search: int | None = None,
) -> complex:
    """Find one root of ``expr = 0`` by Newton-Raphson iteration.

    Args:
        expr: Expression in *var* only
        var: Symbol to solve for
        precision: Stop when successive iterates differ by less than this
            (default: config.NEWTON_PRECISION)
        max_iterations: Refinement budget (default: config.NEWTON_MAX_ITERATIONS)
        max_start_search: Number of integer starting points tried while no
            start has a finite, nonzero slope (default: config.NEWTON_MAX_START_SEARCH)

    Returns:
        Approximate root as a complex number

    Raises:
        ConvergenceError: If no usable starting point exists, a step hits a
            zero slope or non-finite value, or the budget runs out
    """
    if precision is None:
        precision = config.NEWTON_PRECISION
    if max_iterations is None:
        max_iterations = config.NEWTON_MAX_ITERATIONS
    if max_start_search is None:
        max_start_search = config.NEWTON_MAX_START_SEARCH

    expr = sp.sympify(expr)
    slope_expr = derivative(expr, var)

    current = complex(0)
    searched = 0
    while not _usable_start(expr, slope_expr, var, current):
        searched += 1
        if searched > max_start_search:
            raise ConvergenceError(
                f"No starting point in 0..{max_start_search} has a finite, nonzero "
                f"slope for {expr}",
                iterations=searched,
            )
        current += 1

    for iteration in range(1, max_iterations + 1):
        previous = current
        slope = _evaluate(slope_expr, var, previous)
        if slope == 0:
            raise ConvergenceError(
                f"Zero slope at {var} = {previous} after {iteration} iterations",
                iterations=iteration,
            )
        current = previous - _evaluate(expr, var, previous) / slope
        if not np.isfinite(current):
            raise ConvergenceError(
                f"Newton step diverged at iteration {iteration}", iterations=iteration
            )
        if abs(current - previous) < precision:
            logger.debug(
                "Newton converged to %s after %d iterations", current, iteration
            )
            return current

    raise ConvergenceError(
        f"Failed to converge within {max_iterations} iterations", iterations=max_iterations
    )


def _as_sympy_number(value: complex) -> sp.Expr:
    if abs(value.imag) <= config.NUMERIC_TOLERANCE:
        return sp.Float(value.real)
    return sp.Float(value.real) + sp.I * sp.Float(value.imag)


def solve_numeric(expr: Any, var: sp.Symbol, precision: float | None = None) -> RootList | None:
    """Last-resort strategy: one approximate root via find_root().

    Declines (returns None) when the fallback is disabled or when *expr*
    depends on symbols other than *var*, since nothing can be evaluated.

    Raises:
        ConvergenceError: Propagated from find_root()
    """
    if not config.NUMERIC_FALLBACK_ENABLED:
        logger.debug("Numeric fallback disabled; declining")
        return None
    expr = sp.sympify(expr)
    if expr.free_symbols - {var}:
        logger.debug("Numeric fallback declined, %s has other symbols", expr)
        return None
    try:
        root = find_root(expr, var, precision=precision)
    except ConvergenceError:
        logger.warning("Newton-Raphson failed for %s = 0 in %s", expr, var)
        raise
    return RootList([Equation(var, _as_sympy_number(root))])
