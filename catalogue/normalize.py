"""
Record normalization.

Responsibilities:
- decode fetched/uploaded bytes to text
- case-insensitive header lookup
- resolve asset references against configured base paths
- map raw records to CanonicalRecord
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote

from charset_normalizer import from_bytes

from .config import Settings
from .models import CanonicalRecord
from .rules import (
    ABSOLUTE_URL,
    CATEGORY_HEADER,
    COST_HEADER,
    PDF_HEADER,
    SUMMARY_HEADER,
    THUMBNAIL_HEADER,
    TITLE_HEADER,
    URI_COMPONENT_SAFE,
)

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


def decode_csv_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode sheet bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A leading UTF-8 BOM is stripped (utf-8-sig).
    - If the detected encoding fails, try UTF-8, then decode with
      replacement characters so loading can continue.

    Returns (text, encoding_used).
    """
    if not raw:
        return "", "utf-8"

    if raw.startswith(UTF8_BOM):
        decode_used = "utf-8-sig"
    else:
        match = from_bytes(raw).best()
        decode_used = match.encoding if match is not None else "utf-8"

    try:
        return raw.decode(decode_used), decode_used
    except (UnicodeDecodeError, LookupError):
        pass

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        logger.warning("Could not decode sheet as %s or utf-8; replacing bad bytes", decode_used)
        return raw.decode("utf-8", errors="replace"), "utf-8"


class HeaderIndex:
    """
    Case-insensitive header lookup, built once per table.

    An exact header match wins; otherwise the first header whose
    case-folded form matches is used.
    """

    def __init__(self, headers: Iterable[str]):
        self._exact = set()
        self._folded: Dict[str, str] = {}
        for header in headers:
            self._exact.add(header)
            self._folded.setdefault(header.casefold(), header)

    def key_for(self, name: str) -> Optional[str]:
        if name in self._exact:
            return name
        return self._folded.get(name.casefold())

    def get(self, record: Dict[str, str], name: str) -> str:
        key = self.key_for(name)
        if key is None:
            return ""
        return record.get(key) or ""


def join_path(base: str, file: str) -> str:
    if not base:
        return file
    prefix = base if base.endswith("/") else base + "/"
    return prefix + quote(file, safe=URI_COMPONENT_SAFE)


def resolve_url(value: Optional[str], base: str) -> str:
    """Absolute http(s) URLs pass through; anything else is a filename under base."""
    v = (value or "").strip()
    if not v:
        return ""
    if ABSOLUTE_URL.match(v):
        return v
    return join_path(base, v)


def normalize_record(
    record: Dict[str, str],
    settings: Settings,
    index: Optional[HeaderIndex] = None,
) -> Optional[CanonicalRecord]:
    """Map one raw record to a CanonicalRecord, or None if it has no title."""
    if index is None:
        index = HeaderIndex(record.keys())

    def get(name: str) -> str:
        return index.get(record, name).strip()

    title = get(TITLE_HEADER)
    if not title:
        return None

    return CanonicalRecord(
        title=title,
        summary=get(SUMMARY_HEADER),
        cost_label=get(COST_HEADER),
        category=get(CATEGORY_HEADER),
        document_url=resolve_url(get(PDF_HEADER), settings.pdf_base_path),
        thumbnail_url=resolve_url(get(THUMBNAIL_HEADER), settings.thumb_base_path),
    )


def normalize_records(
    records: List[Dict[str, str]],
    settings: Settings,
    issues: Optional[list] = None,
) -> List[CanonicalRecord]:
    """
    Normalize materialized records, dropping those without a title.

    All records from one table share their headers, so a single
    HeaderIndex serves the whole batch.
    """
    if not records:
        return []

    index = HeaderIndex(records[0].keys())
    out: List[CanonicalRecord] = []
    for pos, record in enumerate(records):
        normalized = normalize_record(record, settings, index)
        if normalized is None:
            if issues is not None:
                issues.append({
                    "row": None,
                    "column": index.key_for(TITLE_HEADER),
                    "issue": "missing_title",
                    "value": str(pos + 1),
                    "action": "dropped",
                })
            continue
        out.append(normalized)

    logger.debug("Normalized %d of %d records", len(out), len(records))
    return out
