"""Solve a conjunctive system of equations by substitution and elimination.

The first unknown is solved from every equation that depends on it; each
root is substituted into the remaining equations and the reduced system is
solved recursively for the remaining unknowns. Every resulting branch binds
each requested unknown exactly once, and branches are alternatives (OR),
never intersected.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import sympy as sp

from .. import config
from ..expression import depends_on
from ..logging_config import get_logger
from ..types import (
    ConvergenceError,
    Equation,
    EquationSystem,
    SolutionBranchList,
    SolutionRecord,
)
from .dispatch import solve_equation
from .verify import residual_magnitude

logger = get_logger("solver.system")


def _is_consistent(system: EquationSystem) -> bool:
    """Check equations left over once every unknown has been eliminated.

    A residual that is a number larger than VERIFY_TOLERANCE is a
    contradiction; numeric roots leave small nonzero residuals behind.
    Residuals that still contain symbols are conditions on parameters and
    are accepted.
    """
    for equation in system:
        residual = sp.expand(sp.sympify(equation.residual()))
        if not residual.is_number:
            continue
        magnitude = residual_magnitude(residual)
        if magnitude is not None and not magnitude < config.VERIFY_TOLERANCE:
            return False
    return True


def _back_substitute(value: sp.Expr, tail: SolutionRecord) -> sp.Expr:
    bindings = {binding.lhs: binding.rhs for binding in tail if binding.lhs != binding.rhs}
    if not bindings:
        return value
    return sp.sympify(value).subs(bindings, simultaneous=True)


def _branch_key(branch: SolutionRecord) -> tuple:
    return tuple((binding.lhs, sp.expand(binding.rhs)) for binding in branch)


def _append_branch(
    branches: SolutionBranchList, seen: set, branch: SolutionRecord
) -> None:
    key = _branch_key(branch)
    if key in seen:
        return
    seen.add(key)
    branches.append(branch)


def _solve(system: EquationSystem, unknowns: Sequence[sp.Symbol]) -> SolutionBranchList:
    if not system:
        return [SolutionRecord([Equation(var, var) for var in unknowns])]
    if not unknowns:
        return [SolutionRecord([])] if _is_consistent(system) else []

    var, rest = unknowns[0], list(unknowns[1:])
    branches: SolutionBranchList = []
    seen: set = set()
    constrained = False
    failure: ConvergenceError | None = None

    for index, equation in enumerate(system):
        residual = equation.residual()
        if not depends_on(residual, var):
            continue
        constrained = True
        others = system[:index] + system[index + 1 :]
        try:
            for root in solve_equation(residual, var):
                reduced = EquationSystem([other.subs(var, root.rhs) for other in others])
                for tail in _solve(reduced, rest):
                    value = _back_substitute(root.rhs, tail)
                    _append_branch(
                        branches, seen, SolutionRecord([Equation(var, value)] + tail)
                    )
        except ConvergenceError as e:
            logger.warning("Skipping %s while solving for %s: %s", equation, var, e)
            failure = e

    # Fatal only when no constraining equation produced a branch
    if failure is not None and not branches:
        raise failure

    if not constrained:
        logger.debug("%s is free in the current system", var)
        for tail in _solve(system, rest):
            _append_branch(branches, seen, SolutionRecord([Equation(var, var)] + tail))

    return branches


def solve_system(
    system: Iterable[Equation], unknowns: Iterable[sp.Symbol]
) -> SolutionBranchList:
    """Solve *system* for the ordered *unknowns*.

    Args:
        system: Equations that must all hold
        unknowns: Symbols to solve for, in elimination order

    Returns:
        List of alternative branches, each binding every unknown once.
        An empty list means no branch was found by any strategy; it is not
        a proof that the system has no solution.

    Raises:
        ConvergenceError: If a numeric fallback failed and no other
            equation produced a branch
    """
    system = EquationSystem(list(system))
    unknowns = list(unknowns)
    if not unknowns:
        return []
    branches = _solve(system, unknowns)
    logger.debug(
        "Solved %d equation(s) for %s: %d branch(es)",
        len(system),
        [str(var) for var in unknowns],
        len(branches),
    )
    return branches
