"""Bounded LIFO stack that drops its oldest entry on overflow.

Used by History for both the undo and the redo record. No locking of its
own; the owner serializes access.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SizedStack(Generic[T]):
    """Stack with a fixed maximum length.

    Pushing onto a full stack silently evicts the bottom (oldest) item::

        stack = SizedStack(2)
        stack.push("a")
        stack.push("b")
        stack.push("c")      # "a" is dropped
        stack.pop()          # -> "c"
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be larger than 0, got {max_size}")
        self._max_size = max_size
        self._items: deque[T] = deque(maxlen=max_size)

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate oldest to newest."""
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"SizedStack(max_size={self._max_size}, count={self.count})"

    def push(self, item: T) -> None:
        if len(self._items) == self._max_size:
            logger.debug("Stack full (%d), evicting oldest item", self._max_size)
        self._items.append(item)

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from empty SizedStack")
        return self._items.pop()

    def peek(self) -> T:
        if not self._items:
            raise IndexError("peek at empty SizedStack")
        return self._items[-1]

    def try_peek(self) -> tuple[bool, T | None]:
        """Return ``(True, top)`` or ``(False, None)`` when empty. Never raises."""
        if not self._items:
            return False, None
        return True, self._items[-1]

    def clear(self) -> None:
        self._items.clear()
