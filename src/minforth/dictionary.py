## minforth — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field

from .types import Token, Operation
from .errors import InvalidWord, UnknownWord
from .parser import parse_integer


def shadow_name(name: str, word_id: int) -> str:
    """Input is split on whitespace, so a name containing a space can never be typed."""
    return f" {name}#{word_id}"


def is_shadow_name(name: str) -> bool:
    return name.startswith(' ')


@dataclass
class Dictionary:
    """User-defined words: an append-only store of bodies by id, and a replaceable index of names to ids.

    A body is never modified once stored.  Redefining a name moves its old binding to a shadow
    name and binds a fresh id, so bodies that already reference the old id keep their meaning.
    """
    word_ids: dict[str, int] = field(default_factory=dict)
    bodies: dict[int, tuple[Token, ...]] = field(default_factory=dict)

    def __len__(self):
        return len(self.bodies)

    def is_known(self, name: str) -> bool:
        return name in self.word_ids

    def lookup_body(self, name: str) -> tuple[Token, ...] | None:
        if (word_id := self.word_ids.get(name)) is None:
            return None
        return self.bodies.get(word_id)

    def lookup_body_by_id(self, word_id: int) -> tuple[Token, ...] | None:
        return self.bodies.get(word_id)

    def reference(self, name: str) -> Operation | None:
        """Opaque token that executes the body currently bound to `name`, for embedding in other bodies."""
        if (word_id := self.word_ids.get(name)) is None:
            return None
        return Operation(Operation.EXECUTE, word_id, str(name))

    def names(self) -> list[str]:
        return [name for name in self.word_ids if not is_shadow_name(name)]

    def shadow(self, name: str) -> None:
        if (word_id := self.word_ids.pop(name, None)) is None:
            raise UnknownWord(f"Cannot shadow `{name}`, it is not defined.", forth_token=name)
        self.word_ids[shadow_name(name, word_id)] = word_id

    def define(self, name: str, body) -> None:
        if self.is_known(name):
            self.shadow(name)
        if parse_integer(name) is not None:
            raise InvalidWord(f"Word name `{name}` is a number.", forth_token=name)

        # Ids count every body ever stored, so they stay unique across repeated redefinitions.
        word_id = len(self.bodies) + 1
        self.word_ids[name] = word_id
        self.bodies[word_id] = tuple(body)
