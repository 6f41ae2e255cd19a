"""Intrusive doubly linked list."""

from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar


class ListNode:
    """Base for objects that live in a LinkedList; holds the link fields."""

    def __init__(self) -> None:
        self.prev: Optional[ListNode] = None
        self.next: Optional[ListNode] = None


N = TypeVar("N", bound=ListNode)


class LinkedList(Generic[N]):
    """Doubly linked list whose nodes carry their own prev/next links."""

    def __init__(self) -> None:
        self.head: Optional[N] = None
        self.tail: Optional[N] = None

    def append(self, node: N) -> None:
        """Link a node at the end of the list."""
        node.prev = self.tail
        node.next = None
        if self.tail is not None:
            self.tail.next = node
        else:
            self.head = node
        self.tail = node

    def remove(self, node: N) -> None:
        """Unlink a node that is in this list."""
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self.head = node.next
        if node.next is not None:
            node.next.prev = node.prev
        else:
            self.tail = node.prev

    def __iter__(self) -> Iterator[N]:
        node = self.head
        while node is not None:
            following = node.next
            yield node
            node = following