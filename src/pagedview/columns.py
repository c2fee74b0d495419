"""Column registry and the builders that produce it.

The view model never inspects record types. It receives a ``ColumnRegistry``
built from explicit descriptors:

    registry = (
        ColumnBuilder()
        .column("name", display_index=0, localization_key="col.name", searchable=True)
        .column("points", display_index=1, display_names=("Pts",))
        .build()
    )

``columns_from_dataclass`` is a convenience provider for dataclass records
declaring their column metadata in ``field(metadata=...)``.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence

from . import i18n
from .models import ColumnInfo

__all__ = [
    "ColumnDefinitionError",
    "ColumnRegistry",
    "ColumnBuilder",
    "Localizer",
    "columns_from_dataclass",
]

Localizer = Callable[[Optional[str]], Iterable[str]]


class ColumnDefinitionError(ValueError):
    """Raised for malformed column metadata (missing or duplicate property ids)."""


class ColumnRegistry:
    """Ordered list of column descriptors with display-name lookup."""

    def __init__(self, columns: Iterable[ColumnInfo] = ()):
        self._columns: List[ColumnInfo] = list(columns)

    @property
    def columns(self) -> List[ColumnInfo]:
        return list(self._columns)

    @property
    def display_columns(self) -> List[ColumnInfo]:
        return [c for c in self._columns if c.is_display_column]

    @property
    def searchable_columns(self) -> List[ColumnInfo]:
        return [c for c in self._columns if c.searchable]

    def get_display_column(self, name: str | None) -> ColumnInfo | None:
        if name is None:
            return None
        for column in self._columns:
            if column.is_display_column and name in column.display_names:
                return column
        return None

    def __iter__(self) -> Iterator[ColumnInfo]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)


@dataclasses.dataclass
class _PendingColumn:
    property_id: str
    display_index: int
    localization_key: str | None
    display_names: Sequence[str]
    searchable: bool
    accessor: Optional[Callable[[Any], Any]]


class ColumnBuilder:
    def __init__(self) -> None:
        self._pending: List[_PendingColumn] = []

    def column(
        self,
        property_id: str,
        *,
        display_index: int = -1,
        localization_key: str | None = None,
        display_names: Sequence[str] = (),
        searchable: bool = False,
        accessor: Optional[Callable[[Any], Any]] = None,
    ) -> "ColumnBuilder":
        if not property_id:
            raise ColumnDefinitionError("Column property id must be a non-empty string")
        if any(p.property_id == property_id for p in self._pending):
            raise ColumnDefinitionError(f"Duplicate column property id: {property_id!r}")
        if isinstance(display_names, str):
            display_names = (display_names,)
        self._pending.append(
            _PendingColumn(
                property_id=property_id,
                display_index=display_index,
                localization_key=localization_key,
                display_names=tuple(display_names),
                searchable=searchable,
                accessor=accessor,
            )
        )
        return self

    def build(self, localizer: Localizer | None = None) -> ColumnRegistry:
        """Resolve display names and return the registry.

        Display names are the explicit names followed by every translation the
        localizer reports for the column's localization key (default: all
        locales registered in ``pagedview.i18n``).
        """
        resolve = localizer or i18n.all_values
        columns: List[ColumnInfo] = []
        for p in self._pending:
            names: List[str] = []
            localized = resolve(p.localization_key) if p.localization_key else ()
            for name in (*p.display_names, *localized):
                if name and name not in names:
                    names.append(name)
            columns.append(
                ColumnInfo(
                    property_id=p.property_id,
                    display_index=p.display_index,
                    localization_key=p.localization_key,
                    display_names=tuple(names),
                    searchable=p.searchable,
                    accessor=p.accessor,
                )
            )
        return ColumnRegistry(columns)


def columns_from_dataclass(cls: type) -> ColumnBuilder:
    """Build a ``ColumnBuilder`` from dataclass field metadata.

    Recognised metadata keys:
      - ``"column"``: dict with ``display_index``, ``localization_key`` and/or
        ``display_names``; fields without it are registered but not displayed.
      - ``"search"``: truthy when the field takes part in free-text search.
    """
    if not dataclasses.is_dataclass(cls):
        raise ColumnDefinitionError(f"{cls!r} is not a dataclass")
    builder = ColumnBuilder()
    for f in dataclasses.fields(cls):
        column_meta = dict(f.metadata.get("column") or {})
        builder.column(
            f.name,
            display_index=column_meta.get("display_index", -1),
            localization_key=column_meta.get("localization_key"),
            display_names=column_meta.get("display_names", ()),
            searchable=bool(f.metadata.get("search", False)),
        )
    return builder
