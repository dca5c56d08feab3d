"""FastAPI application serving token exports to a UI over HTTP."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import parse_export_config
from ..errors import BrandTokensError, CollectionsNotFoundError
from ..exporter import RecordingHost, TokenExporter
from ..models import ExportDocument
from ..source import VariableSource
from ..utils import GENERATOR_NAME


class ModeBindingModel(BaseModel):
    modeId: str
    primitiveModeId: str


class BrandModel(BaseModel):
    name: str
    light: Optional[ModeBindingModel] = None
    dark: Optional[ModeBindingModel] = None


class ExportRequest(BaseModel):
    tokenCollectionId: str
    primitiveCollectionId: str
    brands: List[BrandModel] = []
    lang: Optional[str] = None


class ModeModel(BaseModel):
    modeId: str
    name: str


class CollectionModel(BaseModel):
    id: str
    name: str
    modes: List[ModeModel]


class InitResponse(BaseModel):
    collections: List[CollectionModel]


class HealthResponse(BaseModel):
    status: str


def create_app(source_factory: Callable[[], VariableSource]) -> FastAPI:
    """Create the FastAPI application exposing collection listing and exports."""

    app = FastAPI(title=GENERATOR_NAME, version="1.0.0")

    async def get_source() -> VariableSource:
        return source_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/init", response_model=InitResponse)
    async def init(source: VariableSource = Depends(get_source)) -> InitResponse:
        exporter = TokenExporter(source, RecordingHost())
        collections = [CollectionModel(**item) for item in exporter.list_collections()]
        return InitResponse(collections=collections)

    @app.post("/export")
    async def export(
        payload: ExportRequest,
        source: VariableSource = Depends(get_source),
    ) -> Dict[str, Any]:
        config = parse_export_config(payload.model_dump(exclude_none=True))
        host = RecordingHost()

        def _run_export() -> Optional[ExportDocument]:
            TokenExporter(source, host).export_tokens(config)
            return host.last_document()

        loop = asyncio.get_running_loop()
        document = await loop.run_in_executor(None, _run_export)
        if document is None:  # pragma: no cover - export_tokens always posts a document
            raise BrandTokensError("Export produced no document")
        return document.to_dict()

    @app.exception_handler(CollectionsNotFoundError)
    async def collections_not_found_handler(
        _: Any, exc: CollectionsNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(BrandTokensError)
    async def export_error_handler(
        _: Any, exc: BrandTokensError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    source: VariableSource, host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app(lambda: source)
    uvicorn.run(app, host=host, port=port)
