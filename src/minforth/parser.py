## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import sys
import functools

import lark
from .types import Token, DEFINE, END, INT_MIN, INT_MAX
from .library import Library
from .builtins import load_builtins_library


GRAMMAR = r"""start: UNIT*

// TOKENS
UNIT: /[^ \t\f\r\n]+/

// WHITESPACE
%import common.WS
%ignore WS
"""

INTEGER = re.compile(r'[+-]?[0-9]+')
DELIMITERS = {':': DEFINE, ';': END}


@functools.cache
def _get_parser() -> lark.Lark:
    return lark.Lark(GRAMMAR, start='start', parser="lalr", lexer="contextual", propagate_positions=True)


@functools.cache
def _get_builtins() -> Library:
    return load_builtins_library()


def split_units(source: str):
    """Yield every unit between ASCII whitespace in the source as a `lark.Token`, which is a `str`
    that also carries `line` and `column` positions.
    """
    yield from _get_parser().parse(source).children


def parse_integer(unit: str) -> int | None:
    if not INTEGER.fullmatch(unit):
        return None
    value = int(unit)
    return value if INT_MIN <= value <= INT_MAX else None


def tokenize(unit: str, lib: Library | None = None) -> Token | None:
    """Classify one unit as a delimiter, builtin operation or integer literal, otherwise `None`."""
    if (delimiter := DELIMITERS.get(unit)) is not None:
        return delimiter
    if (op := (lib or _get_builtins()).get_operation(unit)) is not None:
        return op
    return parse_integer(unit)


def format_source_context(source: str, filename, line, column, token_value: str) -> str:
    lines = source.splitlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column > 0 and column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+len(token_value)-1]}\033[0m" +
                    line_content[column+len(token_value)-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'


def print_source_context(exc, source: str, file=sys.stderr) -> None:
    meta = exc.forth_meta or {}
    if meta.get('line') is None: return
    print(format_source_context(source, meta.get('filename'), meta['line'], meta['column'], exc.forth_token or ''), file=file)
