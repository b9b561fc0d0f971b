from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CanonicalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    summary: str = ""
    cost_label: str = Field(default="", examples=["LKR 850,000,000", "no costing available"])
    category: str = ""
    document_url: str = ""
    thumbnail_url: str = ""


class RecordView(CanonicalRecord):
    cost_display: str = "—"
    cost_tone: str = "green"
    fallback_letter: str = "•"


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class LoadReport(BaseModel):
    source: str
    rows: int = 0
    records: int = 0
    encoding: Optional[str] = None
    warnings: List[ReportItem] = Field(default_factory=list)


class CategoriesResponse(BaseModel):
    values: List[str]


class ReloadResponse(BaseModel):
    ok: bool
    source: str
    records: int


class HealthResponse(BaseModel):
    ok: bool = True
    source: str = "empty"
    records: int = 0
    loaded_at: Optional[datetime] = None
