## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘


class ForthError(Exception):
    def __init__(self, message: str = "", *, forth_token=None, forth_meta=None, forth_stack=None):
        """Base class for all Forth-raised errors."""
        super().__init__(message)
        self.forth_token: str = forth_token
        self.forth_meta: dict = forth_meta
        self.forth_stack: tuple = forth_stack

class DivisionByZero(ForthError, ZeroDivisionError):
    pass

class StackUnderflow(ForthError, IndexError):
    """Runtime fault from popping an empty value stack."""
    pass

class UnknownWord(ForthError, NameError):
    pass

class InvalidWord(ForthError, ValueError):
    """Malformed or illegal definition: missing name, nesting, numeric name, unterminated body."""
    pass
