"""Closed-form roots for polynomials of degree 1 to 3.

The degree is found by differentiating: a residual whose second derivative
vanishes is linear, third derivative quadratic, fourth derivative cubic.
Anything else is declined so later strategies can try.
"""

from __future__ import annotations

from typing import Any

import sympy as sp

from ..expression import I, coefficient, derivative, is_zero, sqrt
from ..logging_config import get_logger
from ..types import Equation, RootList

logger = get_logger("solver.polynomial")


def _linear_roots(expr: sp.Expr, var: sp.Symbol) -> RootList:
    a = coefficient(expr, var, 1)
    b = coefficient(expr, var, 0)
    if is_zero(a):
        # Nonzero constant residual: a contradiction, no value of var works
        return RootList([])
    return RootList([Equation(var, -b / a)])


def _quadratic_roots(expr: sp.Expr, var: sp.Symbol) -> RootList:
    a = coefficient(expr, var, 2)
    b = coefficient(expr, var, 1)
    c = coefficient(expr, var, 0)
    discriminant = b * b - 4 * a * c
    return RootList(
        [
            Equation(var, (-b + sqrt(discriminant)) / (2 * a)),
            Equation(var, (-b - sqrt(discriminant)) / (2 * a)),
        ]
    )


def _cubic_roots(expr: sp.Expr, var: sp.Symbol) -> RootList:
    """Cardano's method on the monic form ``x**3 + a1*x**2 + a2*x + a3``."""
    monic = sp.expand(expr / coefficient(expr, var, 3))
    a1 = coefficient(monic, var, 2)
    a2 = coefficient(monic, var, 1)
    a3 = coefficient(monic, var, 0)

    q = (3 * a2 - a1 * a1) / 9
    r = (9 * a1 * a2 - 27 * a3 - 2 * a1 * a1 * a1) / 54
    third = sp.Rational(1, 3)

    # S1*S2 == -Q pairs the two cube roots
    if is_zero(q):
        s1 = (2 * r) ** third
        s2 = sp.S.Zero
    else:
        s1 = (r + sqrt(q * q * q + r * r)) ** third
        s2 = -q / s1

    shift = a1 / 3
    rotation = I * sqrt(3) * (s1 - s2) / 2
    return RootList(
        [
            Equation(var, s1 + s2 - shift),
            Equation(var, -(s1 + s2) / 2 - shift + rotation),
            Equation(var, -(s1 + s2) / 2 - shift - rotation),
        ]
    )


def solve_polynomial(expr: Any, var: sp.Symbol) -> RootList | None:
    """Solve ``expr = 0`` for *var* when *expr* is a polynomial of degree <= 3.

    Args:
        expr: Residual expression (set to zero)
        var: Symbol to solve for

    Returns:
        List of ``var = value`` equations, ``[var = var]`` when every value
        works, or None when the degree is above three or undetermined.
    """
    expr = sp.expand(sp.sympify(expr))
    if is_zero(expr):
        return RootList([Equation(var, var)])
    if is_zero(derivative(expr, var, 2)):
        logger.debug("Linear in %s: %s", var, expr)
        return _linear_roots(expr, var)
    if is_zero(derivative(expr, var, 3)):
        logger.debug("Quadratic in %s: %s", var, expr)
        return _quadratic_roots(expr, var)
    if is_zero(derivative(expr, var, 4)):
        logger.debug("Cubic in %s: %s", var, expr)
        return _cubic_roots(expr, var)
    return None
