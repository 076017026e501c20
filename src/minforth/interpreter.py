## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import string
import collections

from .types import Operation
from .errors import ForthError, InvalidWord, UnknownWord
from .parser import split_units, tokenize
from .library import Library
from .dictionary import Dictionary
from .formatting import show_program_and_stack


# Only ASCII letters fold, so other scripts keep their case in word names.
ASCII_LOWERCASE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class UnitReader:
    """Iterator over the units of one input, remembering the last one handed out for error reports."""

    def __init__(self, source: str):
        self._units = split_units(source)
        self.last = None

    def __iter__(self):
        return self

    def __next__(self):
        self.last = next(self._units)
        return self.last


def interpret_step(queue, stack: list, dictionary: Dictionary):
    op = queue.popleft()
    if not isinstance(op, Operation):
        stack.append(op)
        return

    match op.type:
        case Operation.FUNCTION:
            op.ptr(stack)
        case Operation.EXECUTE:
            if (body := dictionary.lookup_body_by_id(op.ptr)) is None:
                raise UnknownWord(f"Word `{op.name}` has no body with id {op.ptr}.", forth_token=op.name)
            queue.extendleft(reversed(body))
        case _:
            raise UnknownWord(f"Unexpected `{op.name}` outside of a definition.", forth_token=op.name)


def interpret(program, stack: list, dictionary: Dictionary, verbosity=0, stats=None):
    """Run tokens against the stack.  Custom words are expanded in place at the front of the
    queue when they are reached, so nested words never recurse in Python.

    Counters in `stats` are updated as steps run, so one dict shared over several calls gives a
    running step number in the trace and still holds the count reached when an error is raised.
    """
    queue = collections.deque(program)
    stats = {} if stats is None else stats

    def is_notable(op):
        return isinstance(op, Operation) and op.type == Operation.EXECUTE

    while queue:
        if is_notable(queue[0]):
            stats['expansions'] = stats.get('expansions', 0) + 1
            if verbosity == 1: trace_step(stats.get('steps', 0), queue, stack)
        if verbosity == 2: trace_step(stats.get('steps', 0), queue, stack)
        stats['steps'] = stats.get('steps', 0) + 1
        interpret_step(queue, stack, dictionary)
    return stack


def trace_step(step: int, queue, stack: list) -> None:
    print(f"\033[90m{step:>3} :\033[0m  ", end='')
    show_program_and_stack(queue, stack)


def compile_definition(units, dictionary: Dictionary, lib: Library | None = None) -> None:
    """Consume `name body... ;` from the units following a `:`, then store the word."""
    if (name := next(units, None)) is None:
        raise InvalidWord("Definition is missing a word name.", forth_token=':')

    body = []
    for unit in units:
        if (ref := dictionary.reference(unit)) is not None:
            body.append(ref)
            continue
        match tokenize(unit, lib):
            case None:
                raise InvalidWord(f"Unknown word `{unit}` in definition of `{name}`.", forth_token=str(unit))
            case Operation(type=Operation.DEFINE):
                raise InvalidWord(f"Nested definition inside `{name}`.", forth_token=str(unit))
            case Operation(type=Operation.END) as token:
                body.append(token)
                break
            case token:
                body.append(token)

    if not body or not (isinstance(body[-1], Operation) and body[-1].type == Operation.END):
        raise InvalidWord(f"Definition of `{name}` is not terminated by `;`.", forth_token=str(name))
    body.pop()

    dictionary.define(str(name), body)


def evaluate(source: str, stack: list, dictionary: Dictionary, lib: Library | None = None,
             filename=None, verbosity=0, stats=None) -> None:
    """Process one chunk of program text, unit by unit, until it is exhausted or the first error."""
    units = UnitReader(source.translate(ASCII_LOWERCASE))
    counters = {'steps': 0, 'expansions': 0}
    try:
        for unit in units:
            if (ref := dictionary.reference(unit)) is not None:
                interpret([ref], stack, dictionary, verbosity=verbosity, stats=counters)
                continue

            match tokenize(unit, lib):
                case None:
                    raise UnknownWord(f"Unknown word `{unit}`.", forth_token=str(unit))
                case Operation(type=Operation.DEFINE):
                    compile_definition(units, dictionary, lib)
                case token:
                    interpret([token], stack, dictionary, verbosity=verbosity, stats=counters)
    except ForthError as exc:
        if (last := units.last) is not None:
            exc.forth_token = exc.forth_token or str(last)
            exc.forth_meta = {'filename': filename, 'line': last.line, 'column': last.column}
        else:
            exc.forth_meta = {'filename': filename}
        exc.forth_stack = tuple(stack)
        raise
    finally:
        if stats is not None:
            stats['steps'] = stats.get('steps', 0) + counters['steps']

    if verbosity == 2 or (verbosity == 1 and counters['expansions'] > 0):
        trace_step(counters['steps'], (), stack)

