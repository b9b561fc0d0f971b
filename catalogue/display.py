"""
Presentation hints derived from a record. Nothing here changes the record.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from .models import CanonicalRecord, RecordView
from .rules import COST_FLAGGED, COST_UNAVAILABLE

PLACEHOLDER = "—"
FALLBACK_GLYPH = "•"


def format_lkr(amount: Optional[Union[int, float]]) -> str:
    if amount is None:
        return PLACEHOLDER
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return PLACEHOLDER
    if math.isnan(value) or math.isinf(value):
        return PLACEHOLDER
    return f"LKR {value:,.0f}"


def cost_tone(cost_label: str) -> str:
    """"red" for flagged costs, "neutral" when no costing exists, else "green"."""
    text = (cost_label or "").strip()
    if COST_FLAGGED.match(text):
        return "red"
    if COST_UNAVAILABLE.match(text):
        return "neutral"
    return "green"


def fallback_letter(category: str) -> str:
    text = (category or "").strip()
    if not text:
        return FALLBACK_GLYPH
    return text[0].upper()


def to_view(record: CanonicalRecord) -> RecordView:
    return RecordView(
        **record.model_dump(),
        cost_display=record.cost_label or PLACEHOLDER,
        cost_tone=cost_tone(record.cost_label),
        fallback_letter=fallback_letter(record.category),
    )
