"""Persamaan package: strategy-based equation and system solving on SymPy."""

__all__ = [
    "config",
    "expression",
    "parser",
    "solver",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "solve_equation",
    "solve_system",
]
