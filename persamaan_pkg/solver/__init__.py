from .dispatch import STRATEGIES, solve_equation, solve_with_strategy
from .exponential import solve_exponential
from .inverse import solve_inverse
from .numeric import find_root, solve_numeric
from .polynomial import solve_polynomial
from .system import solve_system
from .verify import verify_branch, verify_roots

__all__ = [
    "solve_equation",
    "solve_system",
    "solve_with_strategy",
    "verify_roots",
    "verify_branch",
    "find_root",
    "STRATEGIES",
    "solve_polynomial",
    "solve_exponential",
    "solve_inverse",
    "solve_numeric",
]
