"""Runtime defaults for paged views.

Attributes are plain dataclass fields so tests and applications can build
their own instance; ``ViewSettings.instance`` is the shared default that the
view model falls back to. ``from_env`` applies ``PAGEDVIEW_*`` overrides.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import ClassVar, Mapping, Optional

__all__ = ["ViewSettings"]

_logger = logging.getLogger(__name__)

_ENV_FIELDS = {
    "PAGEDVIEW_PAGE_SIZE": "default_page_size",
    "PAGEDVIEW_PAGE": "default_page",
    "PAGEDVIEW_LOG_CAPACITY": "log_capacity",
}


@dataclass
class ViewSettings:
    """Defaults used when a view model is constructed without explicit values.

    Attributes:
        default_page_size: Records per page (25).
        default_page: Page shown after construction (1).
        log_capacity: Ring buffer size of ``LoggingService``.
    """

    instance: ClassVar["ViewSettings"]

    default_page_size: int = 25
    default_page: int = 1
    log_capacity: int = 200

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ViewSettings":
        if env is None:
            env = os.environ
        overrides = {}
        for var, attr in _ENV_FIELDS.items():
            raw = env.get(var)
            if raw is None or not raw.strip():
                continue
            try:
                overrides[attr] = int(raw)
            except ValueError:
                _logger.warning("Ignoring %s=%r: not an integer", var, raw)
        return replace(cls(), **overrides)


# Initialize default singleton
ViewSettings.instance = ViewSettings()
