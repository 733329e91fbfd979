"""Type definitions, result dataclasses and exceptions.

The same ordered sequence of equations plays two roles: a conjunctive system
(all equations hold at once) and a solution record (one binding per solved
unknown). They are kept apart by distinct ``NewType`` aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, NewType

import sympy as sp


@dataclass(frozen=True)
class Equation:
    """An equation ``lhs = rhs``. Equality is structural, not solved."""

    lhs: sp.Expr
    rhs: sp.Expr

    def residual(self) -> sp.Expr:
        """Return ``lhs - rhs``, the expression that must vanish."""
        return self.lhs - self.rhs

    def subs(self, var: sp.Symbol, value: sp.Expr) -> Equation:
        return Equation(
            sp.sympify(self.lhs).subs(var, value),
            sp.sympify(self.rhs).subs(var, value),
        )

    def __str__(self) -> str:
        return f"{self.lhs} = {self.rhs}"


# Conjunction: every equation must hold simultaneously.
EquationSystem = NewType("EquationSystem", List[Equation])
# One branch: a single binding ``unknown = value`` per solved unknown.
SolutionRecord = NewType("SolutionRecord", List[Equation])
# Alternative bindings for one unknown, as produced by a single-equation solve.
RootList = NewType("RootList", List[Equation])

SolutionBranchList = List[SolutionRecord]
MatchBinding = Dict[sp.Wild, sp.Expr]


@dataclass
class SolveResult:
    """Result of solving an equation or a system."""

    ok: bool
    result_type: str  # "equation", "system", "identity_or_contradiction"
    error: str | None = None
    error_code: str | None = None
    # For equation type
    exact: list[str] | None = None
    approx: list[str | None] | None = None
    strategy: str | None = None
    # No strategy produced a binding; not a proof that none exists
    exhausted: bool = False
    verified: list[bool | None] | None = None
    # For identity_or_contradiction type
    result: str | None = None
    # For system type
    unknowns: list[str] | None = None
    system_solutions: list[dict[str, str]] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": self.result_type}
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.exact is not None:
            result_dict["exact"] = self.exact
        if self.approx is not None:
            result_dict["approx"] = self.approx
        if self.strategy is not None:
            result_dict["strategy"] = self.strategy
        if self.ok:
            result_dict["exhausted"] = self.exhausted
        if self.verified is not None:
            result_dict["verified"] = self.verified
        if self.result is not None:
            result_dict["result"] = self.result
        if self.unknowns is not None:
            result_dict["unknowns"] = self.unknowns
        if self.system_solutions is not None:
            result_dict["solutions"] = self.system_solutions
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return (
                f"SolveResult(ok=False, result_type={self.result_type!r}, "
                f"error={self.error!r}, error_code={self.error_code!r})"
            )
        parts = [f"ok={self.ok}", f"result_type={self.result_type!r}"]
        if self.exact is not None:
            parts.append(f"exact={self.exact!r}")
        if self.approx is not None:
            parts.append(f"approx={self.approx!r}")
        if self.strategy is not None:
            parts.append(f"strategy={self.strategy!r}")
        if self.exhausted:
            parts.append("exhausted=True")
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        if self.system_solutions is not None:
            parts.append(f"system_solutions={self.system_solutions!r}")
        return f"SolveResult({', '.join(parts)})"


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ParseError(Exception):
    """Raised when parsing fails."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class SolverError(Exception):
    """Raised when solving fails."""

    def __init__(
        self, message: str, code: str = "SOLVER_ERROR", transient: bool = False
    ):
        self.message = message
        self.code = code
        self.transient = transient
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ConvergenceError(SolverError):
    """Raised when the Newton-Raphson fallback cannot produce a root."""

    def __init__(self, message: str, iterations: int = 0):
        super().__init__(message, code="NO_CONVERGENCE")
        self.iterations = iterations
