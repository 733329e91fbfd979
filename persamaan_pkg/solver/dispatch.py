from __future__ import annotations

from typing import Any, Callable, Optional

import sympy as sp

from ..logging_config import get_logger
from ..types import Equation, RootList
from .exponential import solve_exponential
from .inverse import solve_inverse
from .numeric import solve_numeric
from .polynomial import solve_polynomial

logger = get_logger("solver.dispatch")

Strategy = Callable[[sp.Expr, sp.Symbol], Optional[RootList]]

# Tried in order; the first strategy that does not decline wins.
STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("polynomial", solve_polynomial),
    ("exponential", solve_exponential),
    ("inverse", solve_inverse),
    ("numeric", solve_numeric),
)


def _residual(equation: Equation | Any) -> sp.Expr:
    if isinstance(equation, Equation):
        return sp.sympify(equation.residual())
    if isinstance(equation, sp.Equality):
        return equation.lhs - equation.rhs
    return sp.sympify(equation)


def solve_with_strategy(
    equation: Equation | Any, var: sp.Symbol
) -> tuple[str | None, RootList]:
    """Solve one equation for *var*, reporting which strategy answered.

    Args:
        equation: An Equation, a SymPy Eq, or a bare expression meaning ``expr = 0``
        var: Symbol to solve for

    Returns:
        ``(strategy_name, roots)``; ``(None, [])`` when every strategy declined

    Raises:
        ConvergenceError: If the numeric fallback was reached and failed
    """
    expr = _residual(equation)
    for name, strategy in STRATEGIES:
        roots = strategy(expr, var)
        if roots is not None:
            logger.debug("%s strategy solved %s = 0 for %s: %d root(s)", name, expr, var, len(roots))
            return name, roots
        logger.debug("%s strategy declined %s = 0", name, expr)
    return None, RootList([])


def solve_equation(equation: Equation | Any, var: sp.Symbol) -> RootList:
    """Solve one equation for *var*; empty list when every strategy declined."""
    _, roots = solve_with_strategy(equation, var)
    return roots
