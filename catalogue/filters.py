"""
Query and category filtering over a catalogue snapshot.
"""

from __future__ import annotations

import unicodedata
from typing import AbstractSet, Iterable, List, Sequence, Set, Tuple

from .models import CanonicalRecord
from .rules import ALL_CATEGORIES


def filter_records(
    records: Sequence[CanonicalRecord],
    query: str = "",
    selected: AbstractSet[str] = frozenset(),
) -> List[CanonicalRecord]:
    """
    Return the records matching both the free-text query and the category set.

    The query is trimmed and matched case-insensitively against
    "<title> <summary>". An empty category set matches every category;
    otherwise categories must match exactly. Catalogue order is kept.
    """
    q = (query or "").lower().strip()

    out: List[CanonicalRecord] = []
    for record in records:
        if q and q not in f"{record.title} {record.summary}".lower():
            continue
        if selected and record.category not in selected:
            continue
        out.append(record)
    return out


def _collation_key(value: str) -> Tuple[str, str]:
    # accent- and case-insensitive first, then lowercase before uppercase
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), value.swapcase()


def list_categories(records: Iterable[CanonicalRecord]) -> List[str]:
    """Distinct non-empty categories, in locale-style order."""
    return sorted({r.category for r in records if r.category}, key=_collation_key)


class CategorySelection:
    """
    Multi-select state for the category picker.

    "All categories" is exclusive: choosing it clears the others, choosing
    anything else clears it, and an empty choice falls back to it.
    """

    def __init__(self):
        self._chosen: Set[str] = {ALL_CATEGORIES}

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "CategorySelection":
        selection = cls()
        for label in labels:
            if label == ALL_CATEGORIES:
                selection.choose_all()
            elif label not in selection._chosen:
                selection.toggle(label)
        return selection

    @property
    def is_all(self) -> bool:
        return ALL_CATEGORIES in self._chosen

    def choose_all(self) -> None:
        self._chosen = {ALL_CATEGORIES}

    def toggle(self, category: str) -> None:
        if category == ALL_CATEGORIES:
            self.choose_all()
            return
        if category in self._chosen:
            self._chosen.discard(category)
        else:
            self._chosen.add(category)
        self._chosen.discard(ALL_CATEGORIES)
        if not self._chosen:
            self._chosen.add(ALL_CATEGORIES)

    def selected(self) -> frozenset:
        """Categories to filter on; empty while "All categories" is active."""
        if self.is_all:
            return frozenset()
        return frozenset(self._chosen)

    def summary(self) -> str:
        if self.is_all:
            return ALL_CATEGORIES
        return ", ".join(sorted(self._chosen, key=_collation_key))
