"""A fixed-capacity stack of integers, with a small demonstration command."""

from __future__ import annotations

import sys
from collections.abc import Sequence

STACK_SIZE = 3


class StackFullError(IndexError):
    """Push onto a stack that is already at capacity."""


class StackEmptyError(IndexError):
    """Pop from a stack that holds no items."""


class BoundedStack:
    """A last-in, first-out stack that holds at most ``size`` items."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"stack size must be positive, got {size}")
        self.size = size
        self._items: list[int] = []

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"BoundedStack(size={self.size}, items={self._items!r})"

    def is_full(self) -> bool:
        return len(self._items) == self.size

    def is_empty(self) -> bool:
        return not self._items

    def push(self, item: int) -> None:
        """Push ``item``; raise :class:`StackFullError` if there is no room."""
        if self.is_full():
            raise StackFullError(f"stack is full ({self.size} items)")
        self._items.append(item)

    def pop(self) -> int:
        """Remove and return the top item; raise :class:`StackEmptyError` if none."""
        if self.is_empty():
            raise StackEmptyError("stack is empty")
        return self._items.pop()


def push_all(stack: BoundedStack, start: int) -> list[int]:
    """Push ``start``, ``start - 1``, ... until the stack is full.

    Returns the items pushed, in push order.
    """
    pushed: list[int] = []
    item = start
    while True:
        try:
            stack.push(item)
        except StackFullError:
            break
        pushed.append(item)
        item -= 1
    return pushed


def pop_all(stack: BoundedStack) -> list[int]:
    """Pop every item off the stack; return them in pop order."""
    popped: list[int] = []
    while True:
        try:
            popped.append(stack.pop())
        except StackEmptyError:
            break
    return popped


def _hex(item: int) -> str:
    return f"0x{item & 0xFFFFFFFF:4X}"


def _report_push(items: Sequence[int]) -> None:
    for index, item in enumerate(items):
        print(f"item[{index}] = {_hex(item)} pushed onto the stack")
    print(f"{len(items)} items pushed onto the stack.")


def _report_pop(items: Sequence[int]) -> None:
    for index, item in enumerate(items):
        print(f"item[{index}] = {_hex(item)} popped")
    print(f"{len(items)} items popped off the stack.")


def _demo(start: int) -> None:
    stack = BoundedStack(STACK_SIZE)
    _report_push(push_all(stack, start))
    _report_pop(pop_all(stack))


def main(argv: Sequence[str] | None = None) -> int:
    """Fill and drain two stacks, printing each item."""
    if argv is None:
        argv = sys.argv[1:]
    _demo(0xFF00)
    _demo(0xABCD)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())