## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import wrap_int
from .errors import DivisionByZero


## ARITHMETIC
def op_add(b: int, a: int) -> int: return wrap_int(b + a)
def op_sub(b: int, a: int) -> int: return wrap_int(b - a)
def op_mul(b: int, a: int) -> int: return wrap_int(b * a)
def op_div(b: int, a: int) -> int:
    if a == 0: raise DivisionByZero("Division by zero.")
    # Truncate toward zero; Python's `//` floors instead.
    quotient = abs(b) // abs(a)
    return wrap_int(quotient if (b < 0) == (a < 0) else -quotient)
# STACK OPERATIONS
def op_dup(x: int) -> tuple[int, int]: return (x, x)
def op_drop(_: int) -> None: return None
def op_swap(b: int, a: int) -> tuple[int, int]: return (a, b)
def op_over(b: int, a: int) -> tuple[int, int, int]: return (b, a, b)
