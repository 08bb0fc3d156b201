"""Edit scripts over index ranges, built on difflib."""

from __future__ import annotations

import enum
from difflib import SequenceMatcher
from typing import Callable, Hashable, NamedTuple, Sequence, TypeVar

T = TypeVar("T")


class Tag(enum.Enum):
    """Kind of an edit-script span."""

    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"


class Span(NamedTuple):
    """One step of an edit script.

    ``old``/``new`` are start indices and ``old_len``/``new_len`` the number
    of elements covered on each side. An INSERT covers no old elements and a
    DELETE no new ones.
    """

    tag: Tag
    old: int
    old_len: int
    new: int
    new_len: int

    @property
    def old_end(self) -> int:
        return self.old + self.old_len

    @property
    def new_end(self) -> int:
        return self.new + self.new_len

    def shifted(self, old_offset: int, new_offset: int) -> Span:
        """Return the span moved by the given offsets."""
        return self._replace(old=self.old + old_offset, new=self.new + new_offset)


def edit_script(
    old: Sequence[T],
    new: Sequence[T],
    key: Callable[[T], Hashable] | None = None,
) -> list[Span]:
    """Return the spans turning ``old`` into ``new``.

    Elements match when their ``key`` values are equal (the elements
    themselves when no key is given).
    """
    if key is not None:
        old = [key(item) for item in old]
        new = [key(item) for item in new]
    matcher = SequenceMatcher(None, old, new, autojunk=False)
    return [
        Span(Tag(tag), old_start, old_stop - old_start, new_start, new_stop - new_start)
        for tag, old_start, old_stop, new_start, new_stop in matcher.get_opcodes()
    ]
