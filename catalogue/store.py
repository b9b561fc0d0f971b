"""
The catalogue store: one immutable snapshot, swapped wholesale on each load.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AbstractSet, Iterable, List, Optional, Tuple

from .filters import filter_records, list_categories
from .models import CanonicalRecord, LoadReport


@dataclass(frozen=True)
class CatalogueSnapshot:
    records: Tuple[CanonicalRecord, ...] = ()
    source: str = "empty"
    loaded_at: Optional[datetime] = None
    report: Optional[LoadReport] = field(default=None, compare=False)


class CatalogueStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot = CatalogueSnapshot()

    def snapshot(self) -> CatalogueSnapshot:
        return self._snapshot

    def replace(
        self,
        records: Iterable[CanonicalRecord],
        source: str,
        report: Optional[LoadReport] = None,
    ) -> CatalogueSnapshot:
        """Swap in a new catalogue. Readers see either the old or the new one."""
        snapshot = CatalogueSnapshot(
            records=tuple(records),
            source=source,
            loaded_at=datetime.now(timezone.utc),
            report=report,
        )
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def filter(self, query: str = "", selected: AbstractSet[str] = frozenset()) -> List[CanonicalRecord]:
        return filter_records(self._snapshot.records, query, selected)

    def categories(self) -> List[str]:
        return list_categories(self._snapshot.records)

    def __len__(self) -> int:
        return len(self._snapshot.records)
