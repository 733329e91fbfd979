"""Thin adapter over SymPy for the primitives the solvers rely on.

Solvers never touch SymPy internals directly beyond arithmetic; everything
else (differentiation, coefficient queries, substitution, numeric
evaluation, template matching) goes through the helpers below.
"""

from __future__ import annotations

from typing import Any

import sympy as sp

from .types import MatchBinding

E = sp.E
I = sp.I
sqrt = sp.sqrt


def ln(value: Any) -> sp.Expr:
    """Natural logarithm (base ``E``)."""
    return sp.log(value)


def is_zero(expr: Any) -> bool:
    """Return True when *expr* is identically zero after expansion.

    simplify() is deliberately avoided here; expansion plus SymPy's own
    zero test is enough for polynomial and exponential residuals.
    """
    expanded = sp.expand(sp.sympify(expr))
    return expanded == 0 or expanded.is_zero is True


def derivative(expr: Any, var: sp.Symbol, order: int = 1) -> sp.Expr:
    return sp.diff(sp.sympify(expr), var, order)


def depends_on(expr: Any, var: sp.Symbol) -> bool:
    """True if *expr* genuinely varies with *var* (nonzero first derivative)."""
    return not is_zero(derivative(expr, var))


def coefficient(expr: Any, var: sp.Symbol, power: int) -> sp.Expr:
    """Coefficient of ``var**power`` treating *expr* as a polynomial in *var*."""
    return sp.expand(sp.sympify(expr)).coeff(var, power)


def has_negative_power(expr: Any, var: sp.Symbol) -> bool:
    """True if some term of *expr* carries *var* to a negative integer power."""
    for term in sp.Add.make_args(sp.expand(sp.sympify(expr))):
        _, exponent = term.as_coeff_exponent(var)
        if exponent.is_integer and exponent.is_negative:
            return True
    return False


def substitute(expr: Any, var: sp.Symbol, value: Any) -> sp.Expr:
    return sp.sympify(expr).subs(var, value)


def evaluate_numeric(expr: Any, var: sp.Symbol, value: Any) -> complex:
    """Evaluate *expr* at ``var = value`` to a machine-precision complex number.

    Raises:
        TypeError: If the expression still contains other symbols.
    """
    result = sp.N(substitute(expr, var, value))
    if result.free_symbols:
        names = sorted(str(sym) for sym in result.free_symbols)
        raise TypeError(f"Cannot evaluate numerically, free symbols remain: {names}")
    return complex(result)


def placeholders(var: sp.Symbol, names: str = "a b c") -> tuple[sp.Wild, ...]:
    """Create template placeholders that can never bind to *var*."""
    return tuple(sp.Wild(name, exclude=[var]) for name in names.split())


def match(expr: Any, template: sp.Expr) -> list[MatchBinding]:
    """Unify *template* against *expr*.

    Returns a list with one binding per successful match (SymPy reports at
    most one), or an empty list.
    """
    binding = sp.expand(sp.sympify(expr)).match(template)
    if binding is None:
        return []
    return [binding]
