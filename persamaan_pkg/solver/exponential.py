"""Equations built around a single exponential term.

Four templates are tried, most specific first:

1. ``b*exp(a*x) + c``     ->  ``x = ln(-c/b)/a``
2. ``exp(a*x) + c``       ->  ``x = ln(-c)/a``
3. ``b*exp(a*x**2) + c``  ->  ``a*x**2 - ln(-c/b) = 0`` (polynomial solve)
4. ``exp(a*x**2) + c``    ->  ``a*x**2 - ln(-c) = 0`` (polynomial solve)
"""

from __future__ import annotations

from typing import Any

import sympy as sp

from ..expression import is_zero, ln, match, placeholders
from ..logging_config import get_logger
from ..types import Equation, RootList
from .polynomial import solve_polynomial

logger = get_logger("solver.exponential")


def _bound(expr: Any, template: sp.Expr, a: sp.Wild, b: sp.Wild, c: sp.Wild):
    """Return ``(a, b, c)`` for the first usable match, or None.

    ``b`` defaults to 1 for templates without a multiplier. Matches that
    bind ``a`` or ``b`` to zero, or make the logarithm argument zero, are
    rejected.
    """
    for binding in match(expr, template):
        a_value = binding.get(a)
        b_value = binding.get(b, sp.S.One)
        c_value = binding.get(c, sp.S.Zero)
        if a_value is None or is_zero(a_value) or is_zero(b_value):
            continue
        if is_zero(c_value):
            continue
        return a_value, b_value, c_value
    return None


def solve_exponential(expr: Any, var: sp.Symbol) -> RootList | None:
    """Solve ``expr = 0`` for *var* when it matches an exponential template.

    Args:
        expr: Residual expression (set to zero)
        var: Symbol to solve for

    Returns:
        List of ``var = value`` equations, or None if no template applies
    """
    a, b, c = placeholders(var)

    bound = _bound(expr, b * sp.exp(a * var) + c, a, b, c)
    if bound:
        a_value, b_value, c_value = bound
        logger.debug("Matched b*exp(a*%s) + c with a=%s b=%s c=%s", var, *bound)
        return RootList([Equation(var, ln(-c_value / b_value) / a_value)])

    bound = _bound(expr, sp.exp(a * var) + c, a, b, c)
    if bound:
        a_value, _, c_value = bound
        logger.debug("Matched exp(a*%s) + c with a=%s c=%s", var, a_value, c_value)
        return RootList([Equation(var, ln(-c_value) / a_value)])

    bound = _bound(expr, b * sp.exp(a * var**2) + c, a, b, c)
    if bound:
        a_value, b_value, c_value = bound
        logger.debug("Matched b*exp(a*%s**2) + c with a=%s b=%s c=%s", var, *bound)
        roots = solve_polynomial(a_value * var * var - ln(-c_value / b_value), var)
        if roots is not None:
            return roots

    bound = _bound(expr, sp.exp(a * var**2) + c, a, b, c)
    if bound:
        a_value, _, c_value = bound
        logger.debug("Matched exp(a*%s**2) + c with a=%s c=%s", var, a_value, c_value)
        roots = solve_polynomial(a_value * var * var - ln(-c_value), var)
        if roots is not None:
            return roots

    return None
