"""Centralized configuration for Persamaan.

This module defines:
- Newton-Raphson fallback tuning (precision and iteration bounds)
- Numeric tolerances used when reporting and verifying roots
- Input validation limits (length, depth, node count)
- Cache sizes for parsing
- Allowed SymPy names and parser transformations

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with PERSAMAAN_)
"""

import importlib.metadata
import os
import re

import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    standard_transformations,
)

# Version is defined in pyproject.toml [project] section
try:
    VERSION = importlib.metadata.version("persamaan")
except importlib.metadata.PackageNotFoundError:
    VERSION = "1.0.0"

# Newton-Raphson fallback
NEWTON_PRECISION = float(
    os.getenv("PERSAMAAN_NEWTON_PRECISION", "1e-5")
)  # Stop once successive iterates differ by less than this
NEWTON_MAX_ITERATIONS = int(
    os.getenv("PERSAMAAN_NEWTON_MAX_ITERATIONS", "100")
)  # Refinement steps before giving up
NEWTON_MAX_START_SEARCH = int(
    os.getenv("PERSAMAAN_NEWTON_MAX_START_SEARCH", "100")
)  # Integer starting points tried while the slope is zero
NUMERIC_FALLBACK_ENABLED = (
    os.getenv("PERSAMAAN_NUMERIC_FALLBACK_ENABLED", "true").lower() == "true"
)

# Numeric tolerances
NUMERIC_TOLERANCE = float(
    os.getenv("PERSAMAAN_NUMERIC_TOLERANCE", "1e-8")
)  # Imaginary parts below this are dropped
VERIFY_TOLERANCE = float(
    os.getenv("PERSAMAAN_VERIFY_TOLERANCE", "1e-6")
)  # Residual magnitude accepted when verifying a root
OUTPUT_PRECISION = int(os.getenv("PERSAMAAN_OUTPUT_PRECISION", "6"))

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("PERSAMAAN_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("PERSAMAAN_MAX_EXPRESSION_DEPTH", "100")
)  # tree depth
MAX_EXPRESSION_NODES = int(
    os.getenv("PERSAMAAN_MAX_EXPRESSION_NODES", "5000")
)  # total nodes

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("PERSAMAAN_CACHE_SIZE_PARSE", "1024"))

ALLOWED_SYMPY_NAMES = {
    "pi": sp.pi,
    "E": sp.E,
    "I": sp.I,
    "sqrt": sp.sqrt,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
    "log": sp.log,
    "ln": sp.log,
    "exp": sp.exp,
    "Abs": sp.Abs,
    "abs": sp.Abs,  # lowercase alias for convenience
}

TRANSFORMATIONS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SQRT_UNICODE_REGEX = re.compile(r"√\s*\(")
