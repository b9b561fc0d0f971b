from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .rules import DEFAULT_FETCH_TIMEOUT, DEFAULT_PDF_BASE_PATH, DEFAULT_THUMB_BASE_PATH

# Ensure .env loaded for local dev (non-override)
load_dotenv()

ENV_PREFIX = "CATALOGUE_"


@dataclass(frozen=True)
class Settings:
    sheet_csv_url: str = ""
    pdf_base_path: str = DEFAULT_PDF_BASE_PATH
    thumb_base_path: str = DEFAULT_THUMB_BASE_PATH
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(ENV_PREFIX + name)
    if val is None:
        return default
    return val.strip()


def load_settings() -> Settings:
    """Resolve settings from CATALOGUE_* environment variables."""
    timeout_raw = _env("FETCH_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_FETCH_TIMEOUT
    except ValueError:
        raise ValueError(f"CATALOGUE_FETCH_TIMEOUT must be a number, got {timeout_raw!r}") from None

    return Settings(
        sheet_csv_url=_env("SHEET_CSV_URL", "") or "",
        pdf_base_path=_env("PDF_BASE_PATH", DEFAULT_PDF_BASE_PATH),
        thumb_base_path=_env("THUMB_BASE_PATH", DEFAULT_THUMB_BASE_PATH),
        fetch_timeout=timeout,
    )
