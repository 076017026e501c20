## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import inspect
from typing import Callable, get_origin, get_args

from .errors import ForthError


def get_forth_name(py_name: str) -> str:
    """Map an operator function name like `op_add` to its Forth word name."""
    if not py_name.startswith("op_"):
        raise ForthError(f"Operator function `{py_name}` requires prefix `op_` by convention.", forth_token=py_name)
    return py_name[3:].replace('_', '-')


def get_stack_effects(*, fn: Callable, name: str = None) -> dict:
    """Parse the type annotations from Python to determine the stack effects in Forth.

    Arity (input): one or two positional parameters, each popped from the stack with
        the top of stack bound to the last parameter.

    Valency (output) conventions:
        0: nothing pushed, function returns None
        1: single output pushed
        >1: tuple of outputs pushed from left (deeper) to right (new top)
    """
    sig = inspect.signature(fn)
    op_name = name or getattr(fn, '__name__', '<unnamed>')

    params = list(sig.parameters.values())
    if any(p.kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD) for p in params):
        raise ForthError(f"Operation `{op_name}` must only take positional parameters.", forth_token=op_name)
    if len(params) not in (1, 2):
        raise ForthError(f"Operation `{op_name}` must take one or two operands, not {len(params)}.", forth_token=op_name)

    ret_ann = sig.return_annotation
    if ret_ann is inspect.Signature.empty:
        raise ForthError(f"Operation `{op_name}` must declare a return annotation.", forth_token=op_name)

    if ret_ann is None or ret_ann is type(None):
        valency = 0
    elif ret_ann is tuple or get_origin(ret_ann) is tuple:
        valency = len(get_args(ret_ann))
    else:
        valency = 1

    return {'arity': len(params), 'valency': valency}
