"""Observable ordered container.

``ObservableList`` is the container the view model publishes its collections
through. Observers are plain callables receiving a ``CollectionChange``. The
engine replaces derived collections wholesale via ``renew`` (one ``reset``
notification) instead of patching them element by element.

Read-only instances reject every public mutation with
``ReadOnlyCollectionError``; their owner still refreshes them through
``renew`` / ``clear``, which bypass the guard.
"""

from __future__ import annotations

from collections.abc import MutableSequence
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Tuple, TypeVar, overload

T = TypeVar("T")

__all__ = [
    "ChangeAction",
    "CollectionChange",
    "ObservableList",
    "ReadOnlyCollectionError",
]


class ReadOnlyCollectionError(TypeError):
    """Raised when mutating a collection that only its owner may replace."""


class ChangeAction:
    RESET = "reset"
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"


@dataclass(frozen=True)
class CollectionChange:
    action: str
    items: Tuple[object, ...] = ()
    index: int = -1


Observer = Callable[[CollectionChange], None]


class ObservableList(MutableSequence, Generic[T]):
    def __init__(self, items: Iterable[T] | None = None, *, read_only: bool = False) -> None:
        self._items: List[T] = list(items) if items is not None else []
        self._observers: List[Observer] = []
        self._read_only = read_only

    # Observers ------------------------------------------------------
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a callable that removes it again."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self, change: CollectionChange) -> None:
        for observer in list(self._observers):
            observer(change)

    # Owner API ------------------------------------------------------
    def renew(self, items: Iterable[T]) -> None:
        """Replace the whole contents and emit a single reset notification."""
        self._items = list(items)
        self._notify(CollectionChange(ChangeAction.RESET, tuple(self._items)))

    def reset(self) -> None:
        """Empty the container (owner-side ``clear``)."""
        self.renew(())

    @property
    def read_only(self) -> bool:
        return self._read_only

    def snapshot(self) -> List[T]:
        return list(self._items)

    # Sequence protocol ----------------------------------------------
    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> List[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ObservableList({self._items!r})"

    # Mutations (client API) -----------------------------------------
    def _guard(self) -> None:
        if self._read_only:
            raise ReadOnlyCollectionError(
                "This collection is derived; mutate all_items and re-apply alterations instead"
            )

    def __setitem__(self, index, value) -> None:
        self._guard()
        self._items[index] = value
        if isinstance(index, slice):
            self._notify(CollectionChange(ChangeAction.RESET, tuple(self._items)))
        else:
            self._notify(CollectionChange(ChangeAction.REPLACE, (value,), index))

    def __delitem__(self, index) -> None:
        self._guard()
        removed = self._items[index]
        del self._items[index]
        if isinstance(index, slice):
            self._notify(CollectionChange(ChangeAction.REMOVE, tuple(removed)))
        else:
            self._notify(CollectionChange(ChangeAction.REMOVE, (removed,), index))

    def insert(self, index: int, value: T) -> None:
        self._guard()
        size = len(self._items)
        # list.insert clamps out-of-range indices; report where the item landed
        position = max(0, size + index) if index < 0 else min(index, size)
        self._items.insert(position, value)
        self._notify(CollectionChange(ChangeAction.ADD, (value,), position))

    def clear(self) -> None:
        self._guard()
        self.reset()
