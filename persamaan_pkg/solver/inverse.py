"""Clear negative powers of the unknown, then solve the resulting equation."""

from __future__ import annotations

from typing import Any

import sympy as sp

from ..expression import has_negative_power, is_zero
from ..logging_config import get_logger
from ..types import RootList

logger = get_logger("solver.inverse")


def solve_inverse(expr: Any, var: sp.Symbol) -> RootList | None:
    """Solve ``expr = 0`` when *var* appears in a denominator.

    The equation is multiplied through by *var* and handed back to the full
    single-equation solver. The multiplication introduces ``var = 0`` as a
    root, so every such binding is removed before returning.

    Returns:
        List of ``var = value`` equations, or None when *var* never appears
        with a negative power
    """
    if not has_negative_power(expr, var):
        return None

    from .dispatch import solve_equation

    cleared = sp.expand(var * sp.sympify(expr))
    logger.debug("Cleared denominator in %s: %s", var, cleared)
    roots = solve_equation(cleared, var)
    return RootList(
        [root for root in roots if not (root.lhs == var and is_zero(root.rhs))]
    )
