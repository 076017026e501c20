## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

import minforth.api as F


def test_api_exports_runtime_and_errors():
    forth = F.Forth()
    forth.eval("2 3 +")
    assert forth.stack() == (5,)
    assert issubclass(F.StackUnderflow, F.ForthError)
    assert issubclass(F.UnknownWord, NameError)


def test_module_level_instance_keeps_state():
    F.eval(": api-seven 7 ;")
    F.eval("api-seven")
    assert F.stack()[-1] == 7
    assert 'api-seven' in F.words()


def test_module_level_errors_propagate():
    with pytest.raises(F.DivisionByZero):
        F.eval("1 0 /")
