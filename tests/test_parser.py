## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from minforth import parser
from minforth.types import Operation, DEFINE, END


def test_split_units_on_any_whitespace():
    units = list(parser.split_units("1  2\t+\n: foo ;"))
    assert units == ['1', '2', '+', ':', 'foo', ';']


def test_split_units_empty_source():
    assert list(parser.split_units("")) == []
    assert list(parser.split_units("   \n\t ")) == []


def test_split_units_tracks_line_and_column():
    units = list(parser.split_units("1 2\n  dup"))
    assert (units[2].line, units[2].column) == (2, 3)


def test_tokenize_delimiters():
    assert parser.tokenize(':') is DEFINE
    assert parser.tokenize(';') is END


@pytest.mark.parametrize("unit", ['+', '-', '*', '/', 'dup', 'drop', 'swap', 'over'])
def test_tokenize_builtin_operations(unit):
    op = parser.tokenize(unit)
    assert isinstance(op, Operation)
    assert op.type == Operation.FUNCTION
    assert op.name == unit


def test_tokenize_canonical_names_are_not_keywords():
    # Only the spellings are recognized, not the internal names behind them.
    assert parser.tokenize('add') is None
    assert parser.tokenize('div') is None


def test_tokenize_integers():
    assert parser.tokenize('42') == 42
    assert parser.tokenize('-7') == -7
    assert parser.tokenize('+5') == 5
    assert parser.tokenize('2147483647') == 2147483647
    assert parser.tokenize('-2147483648') == -2147483648


@pytest.mark.parametrize("unit", ['2147483648', '-2147483649', '1_000', '1.5', '0x10', '١٢', 'foo', '--1'])
def test_tokenize_rejects_non_integers(unit):
    assert parser.tokenize(unit) is None


def test_tokenize_is_case_sensitive_on_its_own():
    # Lowercasing happens once, in the evaluator, before units are tokenized.
    assert parser.tokenize('DUP') is None


def test_format_source_context_highlights_unit():
    text = parser.format_source_context("1 2 +\nfoo bar\n", "<test>", 2, 5, "bar")
    assert 'File "<test>", line 2' in text
    assert "bar" in text
    assert "1 2 +" in text
