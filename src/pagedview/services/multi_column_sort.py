"""Multi-column sorting utility.

Provides a stable multi-key sorting mechanism for the view model's sort stage.
The `MultiColumnSorter` accepts a list of records and can sort them according
to a priority list of `SortKey` entries. Sorting is stable and applies keys
from lowest precedence to highest (like Python's sorted with chained keys).

Missing values (``None``) never reach the comparison: they sort before every
other value ascending and after every other value descending.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")
KeyFunc = Callable[[T], object]
MultiSortFunc = Callable[[Iterable[T]], Iterable[T]]

__all__ = ["SortKey", "MultiColumnSorter", "none_first"]


def none_first(key: KeyFunc) -> Callable[[Any], Tuple[bool, object]]:
    def wrapped(item: Any) -> Tuple[bool, object]:
        value = key(item)
        return (value is not None, value)

    return wrapped


@dataclass(frozen=True)
class SortKey:
    key_func: KeyFunc
    ascending: bool = True


class MultiColumnSorter(Generic[T]):
    """Utility to apply multi-key sorting in a stable manner.

    Usage:
        sorter = MultiColumnSorter(rows)
        rows_sorted = sorter.sort([
            SortKey(lambda r: r.points, ascending=False),
            SortKey(lambda r: r.team_name, ascending=True),
        ])

    For the view model's ``multi_sort`` use ``as_multi_sort`` which hands out
    the same callable for the same keys, so re-applying it is a no-op. The
    callable is only cached while a caller still references it.
    """

    _cache: "weakref.WeakValueDictionary[Tuple[SortKey, ...], MultiSortFunc]" = (
        weakref.WeakValueDictionary()
    )

    def __init__(self, rows: Iterable[T]):
        self._rows: List[T] = list(rows)

    def sort(self, keys: Sequence[SortKey]) -> List[T]:
        # Apply from lowest precedence to highest for stability
        result = list(self._rows)
        for sk in reversed(keys):
            result.sort(key=none_first(sk.key_func), reverse=not sk.ascending)
        return result

    @staticmethod
    def single(rows: Iterable[T], key: KeyFunc, ascending: bool = True) -> List[T]:
        return sorted(rows, key=none_first(key), reverse=not ascending)

    @classmethod
    def as_multi_sort(cls, keys: Sequence[SortKey]) -> MultiSortFunc:
        frozen = tuple(keys)
        func = cls._cache.get(frozen)
        if func is None:

            def func(rows: Iterable[T]) -> List[T]:
                return cls(rows).sort(frozen)

            cls._cache[frozen] = func
        return func
