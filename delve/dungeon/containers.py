from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional

from ..errors import CapacityError, VerifierError

Verifier = Callable[[Any], bool]


class TypedContainer:
    """Ordered item list with an optional membership predicate and capacity.

    A capacity of -1 means unlimited. The verifier decides what *kind* of
    item belongs here; capacity is only enforced by add()/offer().
    """

    def __init__(self, verifier: Optional[Verifier] = None, capacity: int = -1):
        self.verifier = verifier
        self._limit = capacity if capacity >= 0 else -1
        self._items: List[Any] = []

    def can_fit(self, item: Any) -> bool:
        if self.verifier is not None and not self.verifier(item):
            return False
        return True

    @property
    def has_size_limit(self) -> bool:
        return self._limit >= 0

    @property
    def size_limit(self) -> int:
        return self._limit

    @property
    def full(self) -> bool:
        return self.has_size_limit and len(self._items) >= self._limit

    def set_size_limit(self, limit: int) -> int:
        """Swap in a new capacity and return the old one."""
        old = self._limit
        if limit == old:
            return old
        if limit < 0:
            self._limit = -1
        elif limit < len(self._items):
            raise CapacityError(
                f"Cannot limit container to {limit}; it already holds {len(self._items)}",
                limit=limit,
                size=len(self._items),
            )
        else:
            self._limit = limit
        return old

    def add(self, item: Any) -> None:
        if item is None:
            raise ValueError("Cannot store None in a container")
        if not self.can_fit(item):
            raise VerifierError(f"Item {item!r} rejected by container verifier", item=item)
        if self.full:
            raise CapacityError(
                f"Container full ({self._limit})", limit=self._limit, size=len(self._items)
            )
        self._items.append(item)

    def offer(self, item: Any) -> bool:
        if item is None:
            raise ValueError("Cannot store None in a container")
        if not self.can_fit(item) or self.full:
            return False
        self._items.append(item)
        return True

    def get_similar(self, predicate: Optional[Verifier]) -> List[Any]:
        if predicate is None:
            raise ValueError("get_similar needs a predicate")
        return [item for item in self._items if predicate(item)]

    def remove(self, item: Any) -> bool:
        try:
            self._items.remove(item)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._items))

    def __contains__(self, item: Any) -> bool:
        return item in self._items

    def __repr__(self) -> str:
        return f"TypedContainer(size={len(self._items)}, limit={self._limit})"


__all__ = ["TypedContainer", "Verifier"]
