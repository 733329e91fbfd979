"""Tests for substituting roots and branches back into their equations."""

import sympy as sp

from persamaan_pkg.solver.verify import verify_branch, verify_roots
from persamaan_pkg.types import Equation

x, y, a = sp.symbols("x y a")


class TestVerifyRoots:
    def test_exact_roots(self):
        roots = [Equation(x, 2), Equation(x, 3)]
        assert verify_roots(x**2 - 5 * x + 6, x, roots) == [True, True]

    def test_wrong_root(self):
        assert verify_roots(x**2 - 4, x, [Equation(x, 3)]) == [False]

    def test_approximate_root_within_tolerance(self):
        root = Equation(x, sp.Float(1.41421356237))
        assert verify_roots(x**2 - 2, x, [root]) == [True]

    def test_tolerance_override(self):
        root = Equation(x, sp.Float(1.4142))
        assert verify_roots(x**2 - 2, x, [root]) == [False]
        assert verify_roots(x**2 - 2, x, [root], tolerance=1e-3) == [True]

    def test_complex_root(self):
        assert verify_roots(x**2 + 1, x, [Equation(x, sp.I)]) == [True]

    def test_symbolic_root_is_undecided(self):
        """x = a satisfies x - a, but the residual is checked numerically."""
        assert verify_roots(x - a - 1, x, [Equation(x, a)]) == [None]

    def test_universal_binding_is_undecided(self):
        assert verify_roots(sp.Integer(0), x, [Equation(x, x)]) == [None]

    def test_empty_roots(self):
        assert verify_roots(x + 1, x, []) == []


class TestVerifyBranch:
    def test_consistent_branch(self):
        system = [Equation(x + y, 3), Equation(x - y, 1)]
        assert verify_branch(system, [Equation(x, 2), Equation(y, 1)]) is True

    def test_inconsistent_branch(self):
        system = [Equation(x + y, 3), Equation(x - y, 1)]
        assert verify_branch(system, [Equation(x, 1), Equation(y, 2)]) is False

    def test_free_variable_cancels(self):
        system = [Equation(x + y, 3)]
        assert verify_branch(system, [Equation(x, 3 - y), Equation(y, y)]) is True

    def test_free_variable_is_undecided(self):
        system = [Equation(x + y, 3), Equation(x, y)]
        assert verify_branch(system, [Equation(x, 3 - y), Equation(y, y)]) is None

    def test_false_wins_over_undecided(self):
        system = [Equation(x, 1), Equation(x + y, 5)]
        assert verify_branch(system, [Equation(x, 2), Equation(y, y)]) is False
