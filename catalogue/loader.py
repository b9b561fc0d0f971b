"""
Catalogue loading: fetch the published sheet, build records, fall back to
the demo set on any failure.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Tuple

import httpx

from .config import Settings
from .demo import demo_records
from .errors import CatalogueError, EmptyResultError, FetchError
from .models import CanonicalRecord, LoadReport
from .normalize import decode_csv_bytes, normalize_records
from .parser import materialize, parse
from .rules import CACHE_BUSTER_PARAM
from .store import CatalogueStore

logger = logging.getLogger(__name__)


def cache_busted(url: str, now: Optional[float] = None) -> str:
    stamp = int((time.time() if now is None else now) * 1000)
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{CACHE_BUSTER_PARAM}={stamp}"


async def fetch_csv(client: httpx.AsyncClient, url: str) -> Tuple[str, str]:
    """Fetch the sheet as text. Returns (text, encoding_used)."""
    try:
        res = await client.get(cache_busted(url), headers={"Cache-Control": "no-store"})
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(f"Failed to fetch CSV ({exc.__class__.__name__}: {exc})") from exc

    if not res.is_success:
        raise FetchError(f"Failed to fetch CSV ({res.status_code})")

    return decode_csv_bytes(res.content)


def build_catalogue(
    text: str,
    settings: Settings,
    source: str,
    encoding: Optional[str] = None,
) -> Tuple[List[CanonicalRecord], LoadReport]:
    """Parse, materialize and normalize CSV text. Raises EmptyResultError on zero records."""
    issues: list = []
    rows = parse(text)
    raw_records = materialize(rows, issues)
    records = normalize_records(raw_records, settings, issues)

    report = LoadReport(
        source=source,
        rows=max(len(rows) - 1, 0),
        records=len(records),
        encoding=encoding,
        warnings=issues,
    )
    if not records:
        raise EmptyResultError("No rows found after parsing.")
    return records, report


async def load_from_sheet(store: CatalogueStore, client: httpx.AsyncClient, settings: Settings) -> bool:
    if not settings.sheet_csv_url:
        return False
    try:
        text, encoding = await fetch_csv(client, settings.sheet_csv_url)
        records, report = build_catalogue(text, settings, "sheet", encoding)
    except CatalogueError as err:
        logger.warning("[Sheet] Falling back to demo data: %s", err)
        return False

    store.replace(records, "sheet", report)
    logger.info("Loaded %d records from sheet (%d warnings)", len(records), len(report.warnings))
    return True


def load_demo(store: CatalogueStore, settings: Settings) -> None:
    records = demo_records(settings)
    store.replace(records, "demo", LoadReport(source="demo", rows=len(records), records=len(records)))
    logger.info("Loaded %d demo records", len(records))


async def load_catalogue(store: CatalogueStore, client: httpx.AsyncClient, settings: Settings) -> bool:
    """
    Load the sheet. True when the sheet was used.

    On failure a previously loaded sheet or upload stays in place;
    otherwise the demo set is loaded so the store is never empty.
    """
    ok = await load_from_sheet(store, client, settings)
    if not ok and store.snapshot().source in ("empty", "demo"):
        load_demo(store, settings)
    return ok
