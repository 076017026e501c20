## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from . import operators
from .loader import get_forth_name
from .library import Library


def load_builtins_library():
    # Only these spellings are recognized in source text; canonical names are internal.
    aliases = {
        '+': 'add', '-': 'sub', '*': 'mul', '/': 'div',
        'dup': 'dup', 'drop': 'drop', 'swap': 'swap', 'over': 'over',
    }

    lib = Library(functions={}, aliases=aliases)

    # Functions (wrapped via Library helper)
    for k in dir(operators):
        if not k.startswith('op_'): continue
        lib.add_function(get_forth_name(k), getattr(operators, k))

    lib.ensure_consistent()
    return lib
