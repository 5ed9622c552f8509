# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Persistent append-only sequence for fold accumulators.

`push()` returns a new chain that shares all earlier items with the old one,
so each fold step costs O(1) instead of copying the accumulated tuple.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, eq=False, repr=False)
class Chain(Generic[T]):
    """Immutable stack of items, read back in push order by `to_tuple()`."""

    head: T | None = None
    tail: Chain[T] | None = None
    size: int = 0

    def push(self, item: T) -> Chain[T]:
        return Chain(head=item, tail=self, size=self.size + 1)

    def __len__(self) -> int:
        return self.size

    def to_tuple(self) -> tuple[T, ...]:
        items: list[T] = []
        node: Chain[T] | None = self
        while node is not None and node.size:
            items.append(node.head)  # type: ignore[arg-type]
            node = node.tail
        items.reverse()
        return tuple(items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chain):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self) -> str:
        return f"Chain({list(self.to_tuple())!r})"
