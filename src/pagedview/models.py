"""Lightweight models shared by the pipeline, the view model and the Qt layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Tuple

__all__ = [
    "SortDirection",
    "ColumnInfo",
    "PageDataEvent",
    "PropertyChange",
]


class SortDirection(str, Enum):
    NONE = "none"
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def next(self) -> "SortDirection":
        """Return the direction a header click moves to.

        Cycle: NONE -> ASCENDING -> DESCENDING -> ASCENDING -> ...
        Once a column has been sorted it never goes back to NONE on its own.
        """
        if self is SortDirection.NONE:
            return SortDirection.ASCENDING
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        if self is SortDirection.DESCENDING:
            return SortDirection.ASCENDING
        raise AssertionError(f"Unknown sort direction: {self!r}")  # pragma: no cover


@dataclass
class ColumnInfo:
    """Descriptor for a single record property.

    Attributes
    ----------
    property_id:
        Attribute name (or mapping key) used to read the value from a record.
    display_index:
        Preferred position when the column is rendered; -1 when unspecified.
    localization_key:
        Catalog key used to resolve localized header texts.
    display_names:
        Every name the column answers to (one per locale, de-duplicated,
        in resolution order). Empty for columns that are never displayed.
    searchable:
        Whether the column takes part in free-text search.
    sort_direction:
        Current sort direction, toggled by the view model's ``sort``.
    accessor:
        Optional custom value getter overriding the default lookup.
    """

    property_id: str
    display_index: int = -1
    localization_key: str | None = None
    display_names: Tuple[str, ...] = ()
    searchable: bool = False
    sort_direction: SortDirection = SortDirection.NONE
    accessor: Optional[Callable[[Any], Any]] = field(default=None, repr=False, compare=False)

    @property
    def is_display_column(self) -> bool:
        return len(self.display_names) > 0

    def value(self, record: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(record)
        if isinstance(record, Mapping):
            return record.get(self.property_id)
        return getattr(record, self.property_id, None)


@dataclass(frozen=True)
class PageDataEvent:
    """Payload of the page / page size / page count events."""

    page: int
    page_size: int
    num_pages: int


@dataclass(frozen=True)
class PropertyChange:
    """Payload of ``DataEvent.PROPERTY_CHANGED`` for computed properties."""

    name: str
    old: Any
    new: Any
