"""Input parsing and preprocessing module.

This module handles:
- Input sanitization and validation
- Expression preprocessing (exponent handling, Unicode symbols)
- SymPy expression parsing with expression-tree validation
- Splitting equation and system strings into Equation objects
- Result formatting for display
"""

from __future__ import annotations

import re
from functools import lru_cache
from tokenize import TokenError
from typing import Any, Iterable

import sympy as sp
from sympy import parse_expr

from . import config
from .config import (
    ALLOWED_SYMPY_NAMES,
    CACHE_SIZE_PARSE,
    MAX_EXPRESSION_DEPTH,
    MAX_EXPRESSION_NODES,
    MAX_INPUT_LENGTH,
    SQRT_UNICODE_REGEX,
    TRANSFORMATIONS,
    VAR_NAME_RE,
)
from .logging_config import get_logger
from .types import Equation, EquationSystem, ParseError, ValidationError

logger = get_logger("parser")

# Basic denylist to avoid dangerous tokens before SymPy parsing
FORBIDDEN_TOKENS = (
    "__",
    "import",
    "lambda",
    "eval",
    "exec",
    "open",
    "os.",
    "sys.",
    "subprocess",
    "builtins",
    "getattr",
    "setattr",
    "delattr",
    "compile",
    "globals",
    "locals",
)

_FROM_SUPERSCRIPT = {
    "⁰": "0",
    "¹": "1",
    "²": "2",
    "³": "3",
    "⁴": "4",
    "⁵": "5",
    "⁶": "6",
    "⁷": "7",
    "⁸": "8",
    "⁹": "9",
    "⁻": "-",
}
_SUPERSCRIPT_RUN = re.compile(f"([{''.join(_FROM_SUPERSCRIPT)}]+)")


def superscriptify(input_str: str) -> str:
    """Convert a numeric string to Unicode superscript characters ("-3" -> "⁻³")."""
    mapping = {digit: sup for sup, digit in _FROM_SUPERSCRIPT.items()}
    return "".join(mapping.get(char, char) for char in input_str)


def format_superscript(expr_str: str) -> str:
    """Replace Python power notation (**) with Unicode superscripts."""
    return re.sub(r"\*\*(\-?\d+)", lambda m: superscriptify(m.group(1)), expr_str)


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with the given number of significant digits.

    Complex values are rendered as ``re + im*I``; anything non-numeric is
    returned via str().
    """
    if precision is None:
        precision = config.OUTPUT_PRECISION
    fmt = "{:." + str(int(precision)) + "g}"
    try:
        number = complex(val)
    except (ValueError, TypeError, OverflowError):
        return str(val)
    if number.imag == 0:
        return fmt.format(number.real)
    sign = "+" if number.imag >= 0 else "-"
    return f"{fmt.format(number.real)} {sign} {fmt.format(abs(number.imag))}*I"


def is_balanced(input_str: str) -> tuple[bool, int | None]:
    """Check if parentheses/brackets are balanced. Returns (is_balanced, error_position)."""
    pairs = {"(": ")", "[": "]", "{": "}"}
    stack: list[tuple[str, int]] = []  # (char, position)
    for i, char in enumerate(input_str):
        if char in pairs:
            stack.append((char, i))
        elif char in pairs.values():
            if not stack:
                return False, i
            opening, _ = stack.pop()
            if pairs[opening] != char:
                return False, i
    if stack:
        return False, stack[0][1]  # Return position of first unmatched
    return True, None


def _validate_expression_tree(
    expr: Any, depth: int = 0, node_count: list[int] | None = None
) -> None:
    """Reject expression trees that are too large, too deep or use unknown functions."""
    if node_count is None:
        node_count = [0]
    node_count[0] += 1
    if node_count[0] > MAX_EXPRESSION_NODES:
        raise ValidationError(
            f"Expression too complex (>{MAX_EXPRESSION_NODES} nodes)", "TOO_COMPLEX"
        )
    if depth > MAX_EXPRESSION_DEPTH:
        raise ValidationError(
            f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)", "TOO_DEEP"
        )
    if isinstance(expr, (sp.Symbol, sp.Number, sp.NumberSymbol)):
        return
    if isinstance(expr, sp.Function):
        func_name = getattr(expr.func, "__name__", str(expr.func))
        if func_name not in ALLOWED_SYMPY_NAMES:
            logger.warning("Blocked forbidden function %s", func_name)
            raise ValidationError(
                f"Function '{func_name}' not allowed", "FORBIDDEN_FUNCTION"
            )
    if isinstance(expr, sp.Basic):
        for arg in expr.args:
            _validate_expression_tree(arg, depth + 1, node_count)
        return
    raise ValidationError(
        f"Expression type '{type(expr).__name__}' not allowed", "FORBIDDEN_TYPE"
    )


def preprocess(input_str: str) -> str:
    """Preprocess input string for parsing.

    Applies transformations:
    - Validates input length and forbidden tokens
    - Standardizes mathematical symbols (unicode variants to ASCII)
    - Converts exponents (^ to **, superscripts to **)
    - Converts Unicode square root (√) to sqrt(
    - Validates balanced parentheses/brackets

    Raises:
        ValidationError: If input is empty, too long, contains forbidden
            tokens, or has unbalanced parentheses/brackets
    """
    input_str = input_str.strip() if input_str else ""
    if not input_str:
        raise ValidationError("Input cannot be empty", "EMPTY_INPUT")
    if len(input_str) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long (>{MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )

    lowered = input_str.lower()
    for tok in FORBIDDEN_TOKENS:
        if tok in lowered:
            logger.warning(
                "Blocked input containing forbidden token %r (length %d)",
                tok,
                len(input_str),
            )
            raise ValidationError(
                f"Input contains forbidden token: {tok}", "FORBIDDEN_TOKEN"
            )

    processed_str = input_str.replace("−", "-").replace("–", "-")
    processed_str = processed_str.replace("π", "pi")
    processed_str = processed_str.replace("×", "*").replace("·", "*")
    processed_str = processed_str.replace("^", "**")
    processed_str = _SUPERSCRIPT_RUN.sub(
        lambda m: "**(" + "".join(_FROM_SUPERSCRIPT[c] for c in m.group(1)) + ")",
        processed_str,
    )
    processed_str = SQRT_UNICODE_REGEX.sub("sqrt(", processed_str)
    processed_str = re.sub(r"√\s*([A-Za-z0-9_.]+)", r"sqrt(\1)", processed_str)

    balanced, position = is_balanced(processed_str)
    if not balanced:
        raise ValidationError(
            f"Unbalanced parentheses or brackets near position {position}",
            "UNBALANCED_PARENS",
        )
    return processed_str


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_preprocessed(expr_str: str) -> sp.Expr:
    """Parse and validate a preprocessed expression string.

    Raises:
        ParseError: If SymPy cannot parse the string
        ValidationError: If the parsed tree is rejected
    """
    try:
        expr = parse_expr(
            expr_str,
            local_dict=dict(ALLOWED_SYMPY_NAMES),
            transformations=TRANSFORMATIONS,
            evaluate=True,
        )
    except (SyntaxError, TypeError, ValueError, AttributeError, TokenError) as e:
        raise ParseError(f"Could not parse '{expr_str}': {e}", "SYNTAX_ERROR") from e
    if not isinstance(expr, sp.Expr):
        raise ParseError(
            f"'{expr_str}' is not an algebraic expression", "NOT_AN_EXPRESSION"
        )
    _validate_expression_tree(expr)
    return expr


def parse_expression(text: str) -> sp.Expr:
    return parse_preprocessed(preprocess(text))


def parse_equation(text: str) -> Equation:
    """Parse ``"lhs = rhs"`` into an Equation.

    A string without ``=`` is read as ``expr = 0``; a lone ``==`` is accepted
    as a single ``=``.

    Raises:
        ValidationError: If the string holds more than one '=' (INVALID_FORMAT)
        ParseError: If either side cannot be parsed
    """
    text = (text or "").replace("==", "=")
    parts = text.split("=")
    if len(parts) > 2:
        raise ValidationError(
            "Invalid equation format: Expected exactly one '='. "
            "Use format like 'x+1=0' or 'x^2=4'.",
            "INVALID_FORMAT",
        )
    if len(parts) == 1:
        return Equation(parse_expression(parts[0]), sp.S.Zero)
    lhs_s, rhs_s = parts[0].strip(), parts[1].strip()
    if not lhs_s or not rhs_s:
        raise ValidationError(
            "Invalid equation format: both sides of '=' are required.",
            "INVALID_FORMAT",
        )
    return Equation(parse_expression(lhs_s), parse_expression(rhs_s))


def split_top_level_commas(input_str: str) -> list[str]:
    """Split string by commas that are not inside (), [], or {}."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in input_str:
        if char == "," and depth == 0:
            part = "".join(current).strip()
            if part:
                parts.append(part)
            current = []
            continue
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth = max(0, depth - 1)
        current.append(char)
    last = "".join(current).strip()
    if last:
        parts.append(last)
    return parts


def parse_system(text: str) -> EquationSystem:
    """Parse comma- or semicolon-separated equations into a system."""
    chunks = split_top_level_commas((text or "").replace(";", ","))
    if not chunks:
        raise ValidationError("No equations given", "NO_EQUATIONS")
    return EquationSystem([parse_equation(chunk) for chunk in chunks])


def free_symbols_of(system: Iterable[Equation]) -> list[sp.Symbol]:
    """All symbols in *system*, sorted by name."""
    symbols: set[sp.Symbol] = set()
    for equation in system:
        symbols |= sp.sympify(equation.lhs).free_symbols
        symbols |= sp.sympify(equation.rhs).free_symbols
    return sorted(symbols, key=lambda sym: sym.name)


def parse_unknowns(
    names: str | Iterable[str] | None, system: Iterable[Equation]
) -> list[sp.Symbol]:
    """Turn ``"x, y"`` (or a list of names) into symbols.

    With no names, every free symbol of *system* is used, sorted by name.

    Raises:
        ValidationError: If a name is not a valid identifier (INVALID_VARIABLE)
    """
    if names is None:
        return free_symbols_of(system)
    if isinstance(names, str):
        names = split_top_level_commas(names)
    unknowns = []
    for name in names:
        name = name.strip()
        if not VAR_NAME_RE.match(name):
            raise ValidationError(f"Invalid variable name: {name!r}", "INVALID_VARIABLE")
        unknowns.append(sp.Symbol(name))
    return unknowns

