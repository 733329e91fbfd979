"""Tests for Equation, SolveResult and the exception hierarchy."""

import sympy as sp

from persamaan_pkg.types import (
    ConvergenceError,
    Equation,
    ParseError,
    SolveResult,
    SolverError,
    ValidationError,
)

x, y = sp.symbols("x y")


class TestEquation:
    def test_residual(self):
        assert Equation(x**2, 4).residual() == x**2 - 4

    def test_structural_equality(self):
        assert Equation(x, 2) == Equation(x, sp.Integer(2))
        assert Equation(x, 2) != Equation(sp.Integer(2), x)

    def test_hashable(self):
        assert len({Equation(x, 1), Equation(x, 1), Equation(y, 1)}) == 2

    def test_subs(self):
        assert Equation(x + y, 3).subs(y, 1) == Equation(x + 1, 3)

    def test_str(self):
        assert str(Equation(x, y + 1)) == "x = y + 1"


class TestSolveResult:
    def test_success_dict_omits_unset_fields(self):
        res = SolveResult(ok=True, result_type="equation", exact=["1"], approx=["1.0"])
        assert res.to_dict() == {
            "ok": True,
            "type": "equation",
            "exact": ["1"],
            "approx": ["1.0"],
            "exhausted": False,
        }

    def test_failure_dict_has_no_exhausted_flag(self):
        res = SolveResult(ok=False, result_type="system", error="bad", error_code="X")
        assert "exhausted" not in res.to_dict()

    def test_repr(self):
        res = SolveResult(ok=True, result_type="equation", exact=[], exhausted=True)
        assert "exhausted=True" in repr(res)


class TestExceptions:
    def test_codes(self):
        assert ValidationError("m").code == "VALIDATION_ERROR"
        assert ParseError("m", "SYNTAX_ERROR").code == "SYNTAX_ERROR"
        assert SolverError("m").transient is False

    def test_convergence_error(self):
        err = ConvergenceError("no luck", iterations=7)
        assert isinstance(err, SolverError)
        assert err.code == "NO_CONVERGENCE"
        assert err.iterations == 7
        assert str(err) == "no luck"
