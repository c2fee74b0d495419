"""ViewModel for paged, searchable, sortable record tables.

``PagedDataViewModel`` owns the canonical record set (``all_items``) plus a
snapshot of the last data source (``original_collection``) and keeps two
derived collections up to date:

  all_items --search/filter/sort--> filtered_items --page/page_size--> page_items

Every alteration (``search``, ``filter``, ``sort``, ``multi_sort``) is sticky:
it is stored and the whole pipeline is replayed over ``all_items``. Editing
``all_items`` directly does NOT trigger a replay; call ``update_alterations``
(or any alteration) afterwards.

Notifications are published synchronously on the view model's ``EventBus``:
``PAGE_CHANGED``, ``PAGE_SIZE_CHANGED`` and ``NUM_PAGES_CHANGED`` carry a
``PageDataEvent``; ``PROPERTY_CHANGED`` carries a ``PropertyChange`` for
``page``, ``page_size``, ``num_pages`` and ``max_pages``.

Page counts: ``num_pages == -1`` means no valid page size is configured,
``num_pages == 0`` means the (valid) result is empty.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, List, Optional, TypeVar

from ..columns import ColumnDefinitionError, ColumnRegistry
from ..models import ColumnInfo, PageDataEvent, PropertyChange
from ..services.event_bus import DataEvent, EventBus, EventHandler, Subscription
from ..services.observable import ObservableList
from ..services.paginator import compute_num_pages, compute_page
from ..services.pipeline import AlterationPipeline, MultiSortFunc, PipelineState, Predicate
from ..services.search import Matcher
from ..settings import ViewSettings

T = TypeVar("T")

__all__ = ["PagedDataViewModel"]

_logger = logging.getLogger(__name__)


class PagedDataViewModel(Generic[T]):
    def __init__(
        self,
        columns: ColumnRegistry | Iterable[ColumnInfo],
        items: Optional[Iterable[T]] = None,
        page_size: Optional[int] = None,
        page: Optional[int] = None,
        *,
        matcher: Matcher | None = None,
        bus: EventBus | None = None,
        settings: ViewSettings | None = None,
    ):
        if columns is None:
            raise ColumnDefinitionError("A column registry is required")
        self._columns = columns if isinstance(columns, ColumnRegistry) else ColumnRegistry(columns)
        self._settings = settings or ViewSettings.instance
        self.bus = bus or EventBus()

        self.all_items: ObservableList[T] = ObservableList()
        self.original_collection: ObservableList[T] = ObservableList(read_only=True)
        self.filtered_items: ObservableList[T] = ObservableList(read_only=True)
        self.page_items: ObservableList[T] = ObservableList(read_only=True)

        self._page = 0
        self._page_size = 0
        self._pipeline: AlterationPipeline[T] = AlterationPipeline(self._columns, matcher)
        self._announced_num_pages = self.num_pages
        self._announced_max_pages = self.max_pages

        self.set_data_source(items)
        self.page_size = self._settings.default_page_size if page_size is None else page_size
        self.page = self._settings.default_page if page is None else page

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------
    @property
    def columns(self) -> ColumnRegistry:
        return self._columns

    @property
    def column_infos(self) -> List[ColumnInfo]:
        return self._columns.columns

    @property
    def display_column_infos(self) -> List[ColumnInfo]:
        return self._columns.display_columns

    def get_display_column(self, name: str) -> ColumnInfo | None:
        return self._columns.get_display_column(name)

    # ------------------------------------------------------------------
    # Page state
    # ------------------------------------------------------------------
    @property
    def page(self) -> int:
        return self._page

    @page.setter
    def page(self, value: int) -> None:
        if value == self._page:
            return
        old = self._page
        self._page = value
        self._update_page_data()
        self._property_changed("page", old, value)
        self.bus.publish(DataEvent.PAGE_CHANGED, self._page_data())

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        if value == self._page_size or value <= 0:
            return
        old_size, old_page = self._page_size, self._page
        self._page_size = value
        # Back to the first page whenever a page is displayed
        if self._page > 0:
            self._page = 1
        self._update_page_data()
        self._property_changed("page_size", old_size, value)
        self._property_changed("page", old_page, self._page)
        self._announce_num_pages()
        self._announce_max_pages()
        self.bus.publish(DataEvent.PAGE_SIZE_CHANGED, self._page_data())

    @property
    def num_pages(self) -> int:
        return compute_num_pages(len(self.filtered_items), self._page_size)

    @property
    def max_pages(self) -> int:
        return compute_num_pages(len(self.all_items), self._page_size)

    @property
    def has_valid_page_size(self) -> bool:
        return self._page_size > 0

    @property
    def pipeline_state(self) -> PipelineState:
        return self._pipeline.state

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def subscribe(
        self, event: str | DataEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        return self.bus.subscribe(event, handler, once=once)

    def notify_num_pages_changed(self) -> None:
        """Announce ``num_pages`` again, e.g. after editing ``all_items`` directly."""
        new = self.num_pages
        self.bus.publish(
            DataEvent.PROPERTY_CHANGED, PropertyChange("num_pages", self._announced_num_pages, new)
        )
        self._announced_num_pages = new
        self.bus.publish(DataEvent.NUM_PAGES_CHANGED, self._page_data())

    def _page_data(self) -> PageDataEvent:
        return PageDataEvent(page=self._page, page_size=self._page_size, num_pages=self.num_pages)

    def _property_changed(self, name: str, old: Any, new: Any) -> None:
        if old != new:
            self.bus.publish(DataEvent.PROPERTY_CHANGED, PropertyChange(name, old, new))

    def _announce_num_pages(self) -> None:
        new = self.num_pages
        self._property_changed("num_pages", self._announced_num_pages, new)
        self._announced_num_pages = new

    def _announce_max_pages(self) -> None:
        new = self.max_pages
        self._property_changed("max_pages", self._announced_max_pages, new)
        self._announced_max_pages = new

    # ------------------------------------------------------------------
    # Data source & alterations
    # ------------------------------------------------------------------
    def set_data_source(self, items: Optional[Iterable[T]]) -> None:
        baseline = self.num_pages
        # Copy first: ``items`` may be one of our own collections
        data = list(items) if items is not None else []
        self.page_items.reset()
        self.original_collection.reset()
        self.all_items.reset()
        self.filtered_items.reset()

        self.original_collection.renew(data)
        self.all_items.renew(data)
        _logger.info("Data source set: %d records", len(data))
        self._recompute(baseline)

    def update_alterations(self) -> None:
        """Replay the sticky search, filter and sort over ``all_items``."""
        self._recompute(self.num_pages)

    def search(self, query: str | None) -> None:
        self._pipeline.set_search(query)
        self.update_alterations()

    def filter(self, predicate: Predicate | None) -> None:
        if self._pipeline.set_filter(predicate):
            self.update_alterations()

    def clear_filter(self) -> None:
        self._pipeline.clear_filter()
        self.update_alterations()

    def sort(self, column_name: str) -> None:
        self._pipeline.set_sort(column_name)
        self.update_alterations()

    def multi_sort(self, multi_sort: MultiSortFunc | None) -> None:
        if self._pipeline.set_multi_sort(multi_sort):
            self.update_alterations()

    def _recompute(self, baseline_num_pages: int) -> None:
        self.filtered_items.renew(self._pipeline.apply(self.all_items))
        self._update_page_data()
        if self.num_pages != baseline_num_pages:
            self.notify_num_pages_changed()
        self._announce_max_pages()

    def _update_page_data(self) -> None:
        if self._page <= 0:
            self.page_items.reset()
        else:
            self.page_items.renew(compute_page(self.filtered_items, self._page, self._page_size))
