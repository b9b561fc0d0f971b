"""
Bundled fallback catalogue, shown when the sheet cannot be loaded.
"""

from __future__ import annotations

from typing import List

from .config import Settings
from .display import format_lkr
from .models import CanonicalRecord
from .normalize import resolve_url

DEMO_ENTRIES = [
    {
        "title": "Targeted Nutrition Support for Estate Schoolchildren",
        "summary": "Scale an evidence-based school meal programme to reduce malnutrition in underserved estate areas.",
        "cost_lkr": 1250000000,
        "category": "Social Protection",
        "pdf": "nutrition-estates.pdf",
        "thumbnail": "nutrition-estates.jpg",
    },
    {
        "title": "Digital Customs Single Window (Phase I)",
        "summary": "Establish a single-window for trade facilitation to cut clearance time by up to 40%.",
        "cost_lkr": 850000000,
        "category": "Trade & Industry",
        "pdf": "customs-phase1.pdf",
        "thumbnail": "customs-phase1.jpg",
    },
    {
        "title": "Results-Based Road Maintenance Contracts",
        "summary": "Adopt performance-based maintenance to improve road quality and reduce lifecycle costs.",
        "cost_lkr": 4500000000,
        "category": "Infrastructure",
        "pdf": "roads-rb-contracts.pdf",
        "thumbnail": "roads-rb-contracts.jpg",
    },
]


def demo_records(settings: Settings) -> List[CanonicalRecord]:
    return [
        CanonicalRecord(
            title=entry["title"],
            summary=entry["summary"],
            cost_label=format_lkr(entry["cost_lkr"]),
            category=entry["category"],
            document_url=resolve_url(entry["pdf"], settings.pdf_base_path),
            thumbnail_url=resolve_url(entry["thumbnail"], settings.thumb_base_path),
        )
        for entry in DEMO_ENTRIES
    ]
