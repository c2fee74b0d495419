"""Alteration pipeline: search -> filter -> sort.

The pipeline keeps the last applied search query, predicate and sort
(sticky state) and replays all three stages over the full
record set on every ``apply``. Each stage only narrows or reorders the output
of the previous one.

State transitions (``set_*``) return whether the caller has to recompute;
``apply`` is a pure function of the state and the given records, apart from
reading each column's current sort direction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from ..columns import ColumnRegistry
from ..models import ColumnInfo, SortDirection
from .multi_column_sort import MultiColumnSorter
from .search import Matcher, partial_search

T = TypeVar("T")
Predicate = Callable[[T], bool]
MultiSortFunc = Callable[[Iterable[T]], Iterable[T]]

__all__ = ["PipelineState", "AlterationPipeline"]

_logger = logging.getLogger(__name__)


@dataclass
class PipelineState:
    """Sticky alteration state. ``last_sort_column`` and ``last_multi_sort`` are exclusive."""

    last_search_query: Optional[str] = None
    last_filter: Optional[Predicate] = None
    last_sort_column: Optional[str] = None
    last_multi_sort: Optional[MultiSortFunc] = None


class AlterationPipeline(Generic[T]):
    def __init__(self, columns: ColumnRegistry, matcher: Matcher | None = None):
        self._columns = columns
        self._matcher: Matcher = matcher or partial_search
        self.state = PipelineState()

    # State transitions ---------------------------------------------
    def set_search(self, query: str | None) -> bool:
        self.state.last_search_query = query
        return True

    def set_filter(self, predicate: Predicate | None) -> bool:
        if predicate is None:
            return False
        self.state.last_filter = predicate
        return True

    def clear_filter(self) -> bool:
        self.state.last_filter = None
        return True

    def set_sort(self, column_name: str) -> bool:
        previous = self._columns.get_display_column(self.state.last_sort_column)
        column = self._columns.get_display_column(column_name)
        # Only one column may carry a direction at a time
        if previous is not None and previous is not column:
            previous.sort_direction = SortDirection.NONE
        if column is None:
            _logger.warning("Sort requested for unknown column %r; sort stage skipped", column_name)
        else:
            column.sort_direction = column.sort_direction.next()
        self.state.last_sort_column = column_name
        self.state.last_multi_sort = None
        return True

    def set_multi_sort(self, multi_sort: MultiSortFunc | None) -> bool:
        if multi_sort is self.state.last_multi_sort:
            return False
        previous = self._columns.get_display_column(self.state.last_sort_column)
        if previous is not None:
            previous.sort_direction = SortDirection.NONE
        self.state.last_multi_sort = multi_sort
        self.state.last_sort_column = None
        return True

    # Replay ---------------------------------------------------------
    def apply(self, items: Iterable[T]) -> List[T]:
        working: List[T] = list(items)
        total = len(working)

        query = self.state.last_search_query
        if query is not None and query.strip():
            searchable = self._columns.searchable_columns
            working = [item for item in working if self._matches(query, item, searchable)]

        after_search = len(working)
        if self.state.last_filter is not None:
            working = [item for item in working if self.state.last_filter(item)]

        sort_column = self._columns.get_display_column(self.state.last_sort_column)
        if sort_column is not None:
            working = self._sort_by(working, sort_column)
        elif self.state.last_multi_sort is not None:
            working = list(self.state.last_multi_sort(working))

        _logger.debug(
            "Pipeline replay: %d records, %d after search, %d after filter",
            total,
            after_search,
            len(working),
        )
        return working

    def _matches(self, query: str, item: T, searchable: List[ColumnInfo]) -> bool:
        values = []
        for column in searchable:
            value = column.value(item)
            values.append(None if value is None else str(value))
        return self._matcher(query, values)

    @staticmethod
    def _sort_by(items: List[T], column: ColumnInfo) -> List[T]:
        direction = column.sort_direction
        if direction is SortDirection.NONE:
            return items
        if direction is SortDirection.ASCENDING:
            return MultiColumnSorter.single(items, column.value, ascending=True)
        if direction is SortDirection.DESCENDING:
            return MultiColumnSorter.single(items, column.value, ascending=False)
        raise AssertionError(f"Unhandled sort direction: {direction!r}")  # pragma: no cover
