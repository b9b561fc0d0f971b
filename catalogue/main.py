from __future__ import annotations

from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
from fastapi import FastAPI, UploadFile, File, HTTPException, Query, Request

from .config import Settings, load_settings
from .display import to_view
from .errors import EmptyResultError
from .filters import CategorySelection
from .loader import build_catalogue, load_catalogue
from .models import CategoriesResponse, HealthResponse, LoadReport, RecordView, ReloadResponse
from .normalize import decode_csv_bytes
from .store import CatalogueStore


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or load_settings()
    store = CatalogueStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with httpx.AsyncClient(transport=transport, timeout=settings.fetch_timeout) as client:
            app.state.http = client
            await load_catalogue(store, client, settings)
            yield

    app = FastAPI(
        title="sheet-catalogue",
        description="Searchable catalogue served from a published spreadsheet CSV",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    @app.get("/health", response_model=HealthResponse)
    def health():
        snap = store.snapshot()
        return {"ok": True, "source": snap.source, "records": len(snap.records), "loaded_at": snap.loaded_at}

    @app.get("/records", response_model=List[RecordView])
    def records(q: str = "", category: List[str] = Query(default=[])):
        selection = CategorySelection.from_labels(category)
        return [to_view(r) for r in store.filter(q, selection.selected())]

    @app.get("/categories", response_model=CategoriesResponse)
    def categories():
        return {"values": store.categories()}

    @app.post("/reload", response_model=ReloadResponse)
    async def reload(request: Request):
        ok = await load_catalogue(store, request.app.state.http, settings)
        snap = store.snapshot()
        return {"ok": ok, "source": snap.source, "records": len(snap.records)}

    @app.post("/upload", response_model=LoadReport)
    async def upload_csv(file: UploadFile = File(...)):
        if not (file.filename or "").lower().endswith(".csv"):
            raise HTTPException(status_code=422, detail="Only CSV files are supported")

        raw = await file.read()
        text, encoding = decode_csv_bytes(raw)
        try:
            built, report = build_catalogue(text, settings, "upload", encoding)
        except EmptyResultError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

        store.replace(built, "upload", report)
        return report

    return app


app = create_app()
