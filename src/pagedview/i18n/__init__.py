"""Simple internationalization (i18n) infrastructure for column headers.

Goals:
 - Minimal translation registry with locale switch & fallback.
 - String interpolation via ``str.format`` with named placeholders.
 - ``all_values`` lists a key's text in every registered locale; column
   descriptors use it so that sorting by a header works in any language.

Design decisions / assumptions:
 - A *default locale* (``_DEFAULT_LOCALE``) always exists (``"en"``) and is consulted as fallback.
 - Missing key after fallback returns the key itself (easy to spot during audits) rather than raising.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

__all__ = [
    "register_catalog",
    "set_locale",
    "get_locale",
    "available_locales",
    "t",
    "translate",
    "all_values",
]

_DEFAULT_LOCALE = "en"
_current_locale = _DEFAULT_LOCALE

_catalogs: Dict[str, Dict[str, str]] = {_DEFAULT_LOCALE: {}}


def register_catalog(locale: str, catalog: Dict[str, str]) -> None:
    """Register or extend a catalog for a locale.

    Existing keys are updated (last registration wins). Empty catalogs allowed.
    """
    existing = _catalogs.setdefault(locale, {})
    existing.update(catalog)


def set_locale(locale: str) -> None:
    global _current_locale
    _current_locale = locale


def get_locale() -> str:
    return _current_locale


def available_locales() -> List[str]:
    """Registered locales, default locale first, then registration order."""
    return list(_catalogs.keys())


def _lookup(locale: str, key: str) -> Optional[str]:
    catalog = _catalogs.get(locale)
    if not catalog:
        return None
    return catalog.get(key)


def translate(key: str, **variables: Any) -> str:
    """Translate a key using the current locale with fallback.

    Variables are interpolated using ``str.format``. Missing variables raise ``KeyError``
    to surface programmer error.
    """
    text = _lookup(_current_locale, key)
    if text is None and _current_locale != _DEFAULT_LOCALE:
        text = _lookup(_DEFAULT_LOCALE, key)
    if text is None:
        text = key  # final fallback
    if not variables and not ("{" in text and "}" in text):
        return text
    try:
        return text.format(**variables)
    except KeyError as e:
        raise KeyError(f"Missing interpolation variable {e.args[0]!r} for key '{key}'") from e


# Short alias commonly used in UI code.
t = translate


def all_values(key: str | None) -> List[str]:
    """Return every distinct translation of ``key`` across registered locales.

    Order follows ``available_locales``. Unknown or empty keys yield ``[]``.
    """
    if not key:
        return []
    values: List[str] = []
    for locale in available_locales():
        text = _lookup(locale, key)
        if text is not None and text not in values:
            values.append(text)
    return values
