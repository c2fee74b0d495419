"""Page Table Model

QAbstractTableModel exposing the current page of a ``PagedDataViewModel``.

Columns are the view model's display columns, ordered by ``display_index``
(columns without an index keep registry order after the indexed ones). The
model resets itself whenever the view model replaces ``page_items``; header
clicks routed through ``sort`` go back to the view model so the sticky
single-column sort cycle stays in one place.
"""

from __future__ import annotations

from typing import Any, List

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, Qt

from . import i18n
from .models import ColumnInfo, SortDirection
from .services.observable import CollectionChange
from .viewmodels.paged_data_viewmodel import PagedDataViewModel

__all__ = ["PageTableModel"]


def _ordered_columns(columns: List[ColumnInfo]) -> List[ColumnInfo]:
    indexed = sorted((c for c in columns if c.display_index >= 0), key=lambda c: c.display_index)
    return indexed + [c for c in columns if c.display_index < 0]


class PageTableModel(QAbstractTableModel):
    def __init__(self, view_model: PagedDataViewModel, parent=None):
        super().__init__(parent)
        self._vm = view_model
        self._columns = _ordered_columns(view_model.display_column_infos)
        self._rows: List[Any] = list(view_model.page_items)
        self._unsubscribe = view_model.page_items.subscribe(self._on_page_items_changed)

    def detach(self) -> None:
        self._unsubscribe()

    # Required overrides
    def rowCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._columns)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if not index.isValid() or index.row() >= len(self._rows):
            return None
        record = self._rows[index.row()]
        if role == Qt.ItemDataRole.DisplayRole:
            value = self._columns[index.column()].value(record)
            return "" if value is None else str(value)
        if role == Qt.ItemDataRole.UserRole:
            return record
        return None

    def headerData(  # type: ignore[override]
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ):
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Vertical:
            if self._vm.page <= 0:
                return None
            # Absolute record number across pages
            return str((self._vm.page - 1) * self._vm.page_size + section + 1)
        if not 0 <= section < len(self._columns):
            return None
        return self.header_text(self._columns[section])

    def sort(self, column: int, order: Qt.SortOrder = Qt.SortOrder.AscendingOrder):  # type: ignore[override]
        # Direction follows the view model's cycle; ``order`` is only a view hint
        if not 0 <= column < len(self._columns):
            return
        self._vm.sort(self._columns[column].display_names[0])

    # Helpers
    @staticmethod
    def header_text(column: ColumnInfo) -> str:
        if column.localization_key:
            text = i18n.translate(column.localization_key)
            if text != column.localization_key:
                return text
        return column.display_names[0]

    def sort_indicator(self) -> tuple[int, Qt.SortOrder] | None:
        """Section and order a header view should display, if a column is sorted."""
        for section, column in enumerate(self._columns):
            if column.sort_direction is SortDirection.ASCENDING:
                return section, Qt.SortOrder.AscendingOrder
            if column.sort_direction is SortDirection.DESCENDING:
                return section, Qt.SortOrder.DescendingOrder
        return None

    # Internal -----------------------------------------------------
    def _on_page_items_changed(self, change: CollectionChange) -> None:
        self.beginResetModel()
        self._rows = list(self._vm.page_items)
        self.endResetModel()
