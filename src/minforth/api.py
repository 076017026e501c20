## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .errors import *
from .runtime import Forth

_RUNTIME = Forth()

def __getattr__(name):
    return getattr(_RUNTIME, name)
