"""Unit tests for the closed-form polynomial strategy."""

import sympy as sp

from persamaan_pkg.solver.polynomial import solve_polynomial
from persamaan_pkg.types import Equation

x, y = sp.symbols("x y")


def _numeric(roots):
    return [complex(sp.N(root.rhs)) for root in roots]


class TestDegreeZeroAndOne:
    """Identically zero and linear residuals."""

    def test_identically_zero_is_universal(self):
        """Every value satisfies 0 = 0."""
        assert solve_polynomial(sp.S.Zero, x) == [Equation(x, x)]

    def test_cancelling_terms_are_universal(self):
        """x*(x + 1) - x**2 - x expands to zero."""
        assert solve_polynomial(x * (x + 1) - x**2 - x, x) == [Equation(x, x)]

    def test_linear(self):
        """2x + 3 = 0 gives x = -3/2."""
        assert solve_polynomial(2 * x + 3, x) == [Equation(x, sp.Rational(-3, 2))]

    def test_linear_with_symbolic_coefficients(self):
        """a*x + b = 0 gives x = -b/a."""
        a, b = sp.symbols("a b")
        roots = solve_polynomial(a * x + b, x)
        assert len(roots) == 1
        assert sp.simplify(roots[0].rhs + b / a) == 0

    def test_nonzero_constant_has_no_roots(self):
        """5 = 0 is a contradiction: no bindings, but the strategy still answers."""
        assert solve_polynomial(sp.Integer(5), x) == []

    def test_other_variable_only(self):
        """y - 1 does not constrain x."""
        assert solve_polynomial(y - 1, x) == []


class TestQuadratic:
    """Degree-two residuals."""

    def test_two_real_roots(self):
        """x**2 - 5x + 6 = 0 has roots 2 and 3."""
        roots = solve_polynomial(x**2 - 5 * x + 6, x)
        assert sorted(int(root.rhs) for root in roots) == [2, 3]

    def test_complex_roots(self):
        """x**2 + 1 = 0 has roots I and -I."""
        roots = solve_polynomial(x**2 + 1, x)
        assert roots == [Equation(x, sp.I), Equation(x, -sp.I)]

    def test_double_root_is_repeated(self):
        """(x - 2)**2 = 0 yields 2 twice."""
        roots = solve_polynomial((x - 2) ** 2, x)
        assert [root.rhs for root in roots] == [2, 2]

    def test_symbolic_quadratic_roots_satisfy_equation(self):
        """x**2 - y = 0 gives +/- sqrt(y)."""
        roots = solve_polynomial(x**2 - y, x)
        assert len(roots) == 2
        for root in roots:
            assert sp.expand(root.rhs**2 - y) == 0


class TestCubic:
    """Degree-three residuals via Cardano's method."""

    def test_three_distinct_real_roots(self):
        """x**3 - 6x**2 + 11x - 6 = 0 has roots 1, 2 and 3."""
        values = _numeric(solve_polynomial(x**3 - 6 * x**2 + 11 * x - 6, x))
        assert len(values) == 3
        assert all(abs(value.imag) < 1e-9 for value in values)
        reals = sorted(value.real for value in values)
        for got, expected in zip(reals, [1, 2, 3]):
            assert abs(got - expected) < 1e-9

    def test_cube_roots_of_unity(self):
        """x**3 - 1 = 0 has the real root 1 and two complex conjugates."""
        roots = solve_polynomial(x**3 - 1, x)
        assert roots[0].rhs == 1
        values = _numeric(roots)
        assert abs(values[1] - values[2].conjugate()) < 1e-12
        for value in values:
            assert abs(value**3 - 1) < 1e-9

    def test_repeated_root_with_negative_radicand(self):
        """x**3 - 3x + 2 = (x - 1)**2 (x + 2) has roots 1, 1, -2."""
        values = _numeric(solve_polynomial(x**3 - 3 * x + 2, x))
        reals = sorted(round(value.real, 9) for value in values)
        assert reals == [-2.0, 1.0, 1.0]
        assert all(abs(value.imag) < 1e-9 for value in values)

    def test_non_monic_cubic(self):
        """2x**3 + 3x + 4 = 0: every root satisfies the equation."""
        expr = 2 * x**3 + 3 * x + 4
        for value in _numeric(solve_polynomial(expr, x)):
            assert abs(2 * value**3 + 3 * value + 4) < 1e-9


class TestDeclines:
    """Inputs the polynomial strategy must hand on."""

    def test_quartic_declines(self):
        assert solve_polynomial(x**4 - 16, x) is None

    def test_exponential_declines(self):
        assert solve_polynomial(sp.exp(x) - 2, x) is None

    def test_negative_power_declines(self):
        assert solve_polynomial(x + 1 / x - 2, x) is None
