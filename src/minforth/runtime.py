## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import stack_list
from .library import Library
from .dictionary import Dictionary
from .builtins import load_builtins_library
from .interpreter import evaluate


class Forth:
    """One interpreter instance: a value stack and a dictionary of user words, both private to it.

    Every call to `eval` continues from the state left by the previous one, including after an
    error; nothing is rolled back.
    """

    def __init__(self, library: Library | None = None):
        self.library = library or load_builtins_library()
        self.dictionary = Dictionary()
        self._stack = stack_list()

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def eval(self, source: str, filename: str | None = None, verbosity: int = 0, stats: dict | None = None) -> None:
        evaluate(source, self._stack, self.dictionary, self.library,
                 filename=filename, verbosity=verbosity, stats=stats)

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def stack(self) -> tuple[int, ...]:
        return tuple(self._stack)

    def words(self) -> list[str]:
        return self.dictionary.names()
