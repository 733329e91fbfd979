"""Test that API functions return typed dataclasses."""

from persamaan_pkg import config
from persamaan_pkg.api import solve_equation, solve_system
from persamaan_pkg.types import SolveResult


class TestSolveEquation:
    """solve_equation() results."""

    def test_solve_equation_returns_solve_result(self):
        result = solve_equation("x^2 - 5x + 6 = 0")
        assert isinstance(result, SolveResult)
        assert result.ok is True
        assert result.result_type == "equation"
        assert result.exact == ["3", "2"]
        assert result.strategy == "polynomial"
        assert result.verified == [True, True]
        assert result.unknowns == ["x"]
        assert result.exhausted is False

    def test_approximations(self):
        result = solve_equation("2*exp(x) = 6")
        assert result.strategy == "exponential"
        assert result.approx[0].startswith("1.0986")

    def test_ambiguous_variable(self):
        result = solve_equation("x + y = 3")
        assert result.ok is False
        assert result.error_code == "AMBIGUOUS_VARIABLE"

    def test_find_var(self):
        result = solve_equation("x + y = 3", find_var="x")
        assert result.ok is True
        assert result.exact == ["3 - y"]
        assert result.verified == [None]

    def test_invalid_find_var(self):
        result = solve_equation("x = 1", find_var="1x")
        assert result.ok is False
        assert result.error_code == "INVALID_VARIABLE"

    def test_identity(self):
        result = solve_equation("2 + 2 = 4")
        assert result.result_type == "identity_or_contradiction"
        assert result.result == "Identity"

    def test_contradiction(self):
        result = solve_equation("1 = 2")
        assert result.result == "Contradiction"

    def test_solve_equation_error_returns_solve_result(self):
        result = solve_equation("x = x = 1")  # Invalid format
        assert isinstance(result, SolveResult)
        assert result.ok is False
        assert result.error_code == "INVALID_FORMAT"

    def test_forbidden_input(self):
        result = solve_equation("__import__('os') = 1")
        assert result.ok is False
        assert result.error_code == "FORBIDDEN_TOKEN"

    def test_exhausted(self):
        result = solve_equation("exp(x) + x*y = 0", find_var="x")
        assert result.ok is True
        assert result.exhausted is True
        assert result.exact == []
        assert result.strategy is None

    def test_no_convergence(self, monkeypatch):
        monkeypatch.setattr(config, "NEWTON_MAX_ITERATIONS", 20)
        result = solve_equation("exp(x) + x^2 + 1 = 0")
        assert result.ok is False
        assert result.error_code == "NO_CONVERGENCE"

    def test_numeric_root_of_square_root(self):
        result = solve_equation("sqrt(x) = 2")
        assert result.ok is True
        assert result.strategy == "numeric"
        assert abs(float(result.approx[0]) - 4) < 1e-6
        assert result.verified == [True]

    def test_numeric_fallback(self):
        result = solve_equation("x^4 = 16")
        assert result.ok is True
        assert result.strategy == "numeric"
        assert result.verified == [True]


class TestSolveSystem:
    """solve_system() results."""

    def test_solve_system_returns_solve_result(self):
        result = solve_system("x + y = 3, x - y = 1")
        assert isinstance(result, SolveResult)
        assert result.ok is True
        assert result.result_type == "system"
        assert result.unknowns == ["x", "y"]
        assert result.system_solutions == [{"x": "2", "y": "1"}]
        assert result.verified == [True]

    def test_explicit_unknowns(self):
        result = solve_system("x = a + 1", ["x"])
        assert result.system_solutions == [{"x": "a + 1"}]

    def test_inconsistent_system(self):
        result = solve_system("x + y = 1, x + y = 2")
        assert result.ok is True
        assert result.exhausted is True
        assert result.system_solutions == []

    def test_parse_error(self):
        result = solve_system("x + = 1, y = 2")
        assert result.ok is False
        assert result.error_code == "SYNTAX_ERROR"


class TestToDict:
    def test_equation_dict(self):
        data = solve_equation("2x = 4").to_dict()
        assert data["ok"] is True
        assert data["type"] == "equation"
        assert data["exact"] == ["2"]
        assert data["exhausted"] is False

    def test_error_dict(self):
        data = solve_equation("x = x = 1").to_dict()
        assert data == {
            "ok": False,
            "type": "equation",
            "error": data["error"],
            "error_code": "INVALID_FORMAT",
        }

    def test_system_dict(self):
        data = solve_system("x = 1, y = 2").to_dict()
        assert data["solutions"] == [{"x": "1", "y": "2"}]
