"""Page slicing helpers."""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

__all__ = ["INVALID_PAGE_COUNT", "compute_page", "compute_num_pages"]

# Reported page count while no positive page size is configured.
INVALID_PAGE_COUNT = -1


def compute_page(filtered: Sequence[T], page: int, page_size: int) -> List[T]:
    """Return the items shown on ``page`` (1-based); empty when ``page <= 0``."""
    if page <= 0 or page_size <= 0:
        return []
    start = page_size * (page - 1)
    return list(filtered[start : start + page_size])


def compute_num_pages(collection_size: int, page_size: int) -> int:
    if page_size <= 0:
        return INVALID_PAGE_COUNT
    num_pages, overflow = divmod(collection_size, page_size)
    if overflow:
        num_pages += 1
    return num_pages
