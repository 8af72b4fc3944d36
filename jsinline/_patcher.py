from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable
from typing import Self
from typing import TypeVar

import rich.repr
from ordered_set import OrderedSet
from rich.text import Text

from ._nodes import Hole
from ._nodes import Node

T = TypeVar("T", bound=Node)


@dataclass(frozen=True)
class Patch:
    start: int
    end: int
    # "" for a removal
    text: str

    def __rich_repr__(self) -> rich.repr.Result:
        yield self.start
        yield self.end
        yield self.text


class Patcher:
    """
    append-only text edits against an immutable original string.

    offsets always refer to the original text, no matter how many edits came
    before. a removal wins over earlier overwrites it covers; overwriting
    removed text is an error.

    the patcher also remembers which tree nodes had their source removed, so
    that a later inline in the same file sees lists without them. the tree
    itself is never touched.
    """

    def __init__(self, original: str) -> None:
        self.original = original
        self.patches: list[Patch] = []
        self.removed: OrderedSet[Node] = OrderedSet(())

    def _check_range(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self.original):
            raise ValueError(f"invalid range [{start}, {end}) for text of length {len(self.original)}")

    def remove(self, start: int, end: int) -> Self:
        self._check_range(start, end)
        if start == end:
            return self
        logging.debug(f"remove [{start}, {end}): {self.original[start:end]!r}")
        self.patches.append(Patch(start, end, ""))
        return self

    def overwrite(self, start: int, end: int, content: str) -> Self:
        self._check_range(start, end)
        if start == end:
            raise ValueError(f"cannot overwrite an empty range at {start}")
        if self.overlaps_removal(start, end):
            # the new text would reappear in the middle of the removal
            raise ValueError(f"cannot overwrite [{start}, {end}): it overlaps removed text")
        logging.debug(f"overwrite [{start}, {end}): {self.original[start:end]!r} -> {content!r}")
        self.patches.append(Patch(start, end, content))
        return self

    def slice(self, start: int, end: int) -> str:
        """
        the current text of [start, end) of the original.

        edits made so far show through, so that inlining `b` in
        `const a = 1; const b = a + 2;` after `a` gives `1 + 2`.
        """
        self._check_range(start, end)
        return "".join(self._slots()[start:end])

    ############################################################################

    def mark_removed(self, node: Node) -> None:
        self.removed.add(node)

    def live(self, nodes: Iterable[T | Hole]) -> list[T]:
        return [x for x in nodes if not isinstance(x, Hole) and x not in self.removed]

    ############################################################################

    def has_changed(self) -> bool:
        return len(self.patches) > 0

    def overlaps_removal(self, start: int, end: int) -> bool:
        return any(p.text == "" and p.start < end and start < p.end for p in self.patches)

    def _slots(self) -> list[str]:
        # one slot per original character; a patch puts its text in its
        # first slot and empties the rest
        slots = list(self.original)
        for p in self.patches:
            slots[p.start] = p.text
            for i in range(p.start + 1, p.end):
                slots[i] = ""
        return slots

    def to_string(self) -> str:
        return "".join(self._slots())

    def __str__(self) -> str:
        return self.to_string()

    def __rich_repr__(self) -> rich.repr.Result:
        yield "patches", self.patches
        yield "removed", len(self.removed)

    def __rich__(self) -> Text:
        """the original text, with removals struck out and replacements shown inline"""
        ans = Text()
        pos = 0
        for p in sorted(self.patches, key=lambda p: p.start):
            if p.start < pos:
                continue
            ans.append(self.original[pos : p.start])
            ans.append(self.original[p.start : p.end], "js.removed")
            if p.text:
                ans.append(p.text, "js.replacement")
            pos = p.end
        ans.append(self.original[pos:])
        return ans
