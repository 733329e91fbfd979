"""Check solutions by substituting them back and evaluating numerically."""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np
import sympy as sp

from .. import config
from ..types import Equation, SolutionRecord


def residual_magnitude(expr: sp.Expr) -> float | None:
    value = sp.N(expr)
    if value.free_symbols:
        return None
    try:
        return float(np.abs(np.complex128(complex(value))))
    except (TypeError, ValueError, OverflowError):
        return float("nan")


def verify_roots(
    expr: Any,
    var: sp.Symbol,
    roots: Iterable[Equation],
    tolerance: float | None = None,
) -> list[bool | None]:
    """Substitute each root into ``expr`` and test that it (nearly) vanishes.

    Returns:
        One entry per root: True/False, or None when the residual still
        contains symbols and cannot be judged numerically
    """
    if tolerance is None:
        tolerance = config.VERIFY_TOLERANCE
    expr = sp.sympify(expr)
    checks: list[bool | None] = []
    for root in roots:
        if root.lhs == root.rhs:
            # Universal binding, holds whenever expr is identically zero
            checks.append(None)
            continue
        magnitude = residual_magnitude(expr.subs(var, root.rhs))
        checks.append(None if magnitude is None else bool(magnitude < tolerance))
    return checks


def verify_branch(
    system: Iterable[Equation],
    branch: SolutionRecord,
    tolerance: float | None = None,
) -> bool | None:
    """Check every equation of *system* under the bindings of *branch*.

    Returns:
        True if every residual is within tolerance, False if any is not,
        None if some residual still depends on free variables or parameters
    """
    if tolerance is None:
        tolerance = config.VERIFY_TOLERANCE
    bindings = {binding.lhs: binding.rhs for binding in branch if binding.lhs != binding.rhs}
    undecided = False
    for equation in system:
        magnitude = residual_magnitude(
            sp.sympify(equation.residual()).subs(bindings, simultaneous=True)
        )
        if magnitude is None:
            undecided = True
        elif not magnitude < tolerance:
            return False
    return None if undecided else True
