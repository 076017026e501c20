## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable
from dataclasses import dataclass, field

from .types import Operation
from .errors import StackUnderflow
from .loader import get_stack_effects


@dataclass
class Library:
    functions: dict[str, Callable[..., Any]]
    aliases: dict[str, str] = field(default_factory=dict)

    # Registration helpers
    def add_function(self, name: str, fn: Callable[..., Any]) -> None:
        fn, meta = _make_wrapper(fn, name)
        fn.__forth_meta__ = meta
        self.functions[name] = fn

    def ensure_consistent(self) -> None:
        for _, fn in list(self.functions.items()):
            assert hasattr(fn, '__forth_meta__')
        for spelling, name in self.aliases.items():
            assert name in self.functions, f"Alias `{spelling}` refers to missing operation `{name}`."

    def get_operation(self, spelling: str) -> Operation | None:
        """Resolve a builtin spelling like `+` or `dup` to an operation, only via the aliases table."""
        if (name := self.aliases.get(spelling)) is None:
            return None
        return Operation(Operation.FUNCTION, self.functions[name], str(spelling))


def _pop(stk: list, name: str) -> int:
    if not stk:
        raise StackUnderflow(f"`{name}` popped from an empty stack.")
    return stk.pop()


def _make_wrapper(fn: Callable[..., Any], name: str) -> Callable[..., Any]:
    meta = get_stack_effects(fn=fn, name=name)

    match meta['valency']:
        case 0:
            def push(base, _): pass
        case 1:
            def push(base, res): base.append(res)
        case _:
            def push(base, res): base.extend(res)

    # Operands leave the stack one by one, so a fault midway keeps the earlier pops.
    if meta['arity'] == 1:
        def w_1(stk: list):
            a = _pop(stk, name)
            push(stk, fn(a))
        return w_1, meta

    def w_2(stk: list):
        a = _pop(stk, name)
        b = _pop(stk, name)
        push(stk, fn(b, a))
    return w_2, meta

