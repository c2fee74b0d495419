"""Default partial / fuzzy matcher used by the search stage.

The pipeline treats the matcher as an injected collaborator with the
signature ``matcher(query, values) -> bool`` where ``values`` holds the
stringified searchable properties of one record (``None`` for missing ones).

``partial_search`` splits the query on whitespace. A record matches when every
token is found, case-insensitively, in at least one value: either as a
substring or, failing that, as an in-order subsequence (so ``"brwn"`` still
finds ``"Brown"``).
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

__all__ = ["Matcher", "partial_search", "is_subsequence"]

Matcher = Callable[[str, Sequence[Optional[str]]], bool]


def is_subsequence(pattern: str, text: str) -> bool:
    """True when every character of *pattern* occurs in *text*, in order."""
    remaining = iter(text)
    return all(ch in remaining for ch in pattern)


def _token_matches(token: str, candidates: Sequence[str]) -> bool:
    if any(token in c for c in candidates):
        return True
    return any(is_subsequence(token, c) for c in candidates)


def partial_search(query: str, values: Sequence[Optional[str]]) -> bool:
    tokens = query.lower().split()
    if not tokens:
        return True
    candidates = [v.lower() for v in values if v is not None]
    if not candidates:
        return False
    return all(_token_matches(tok, candidates) for tok in tokens)
