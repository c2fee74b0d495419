"""pagedview public API.

Curated, intentionally small surface: the view model, its column registry and
the notification types. The PyQt6 binding lives in ``pagedview.table_model``
and is not imported here so headless users never load Qt.
"""

from __future__ import annotations

from .columns import (  # noqa: F401
    ColumnBuilder,
    ColumnDefinitionError,
    ColumnRegistry,
    columns_from_dataclass,
)
from .models import ColumnInfo, PageDataEvent, PropertyChange, SortDirection  # noqa: F401
from .services.event_bus import DataEvent, Event, EventBus  # noqa: F401
from .services.multi_column_sort import MultiColumnSorter, SortKey  # noqa: F401
from .services.observable import ObservableList, ReadOnlyCollectionError  # noqa: F401
from .services.search import partial_search  # noqa: F401
from .settings import ViewSettings  # noqa: F401
from .viewmodels.paged_data_viewmodel import PagedDataViewModel  # noqa: F401

__version__ = "0.1.0"
