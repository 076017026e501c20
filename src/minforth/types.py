## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

class stack_list(list): pass


# Values on the stack and integer literals in bodies are signed 32-bit.
INT_MIN, INT_MAX = -2**31, 2**31 - 1


def wrap_int(value: int) -> int:
    """Wrap an arbitrary Python integer into the signed 32-bit range, two's complement."""
    return (value - INT_MIN) % 2**32 + INT_MIN


class Operation:
    FUNCTION = 1
    EXECUTE = 2
    DEFINE = 3
    END = 4

    __slots__ = ('type', 'ptr', 'name')

    def __init__(self, type, ptr, name):
        object.__setattr__(self, 'type', type)
        object.__setattr__(self, 'ptr', ptr)
        object.__setattr__(self, 'name', name)

    def __setattr__(self, key, value):
        raise AttributeError(f"Operation `{self.name}` is immutable.")

    def __hash__(self):
        return hash((self.type, self.ptr, self.name))

    def __eq__(self, other):
        return isinstance(other, Operation) and self.type == other.type and self.ptr == other.ptr

    def __repr__(self):
        return f"{self.name}"


# Definition delimiters carry no payload, so single shared instances suffice.
DEFINE = Operation(Operation.DEFINE, None, ':')
END = Operation(Operation.END, None, ';')

# Tokens are either plain `int` literals or `Operation` instances.
Token = int | Operation
