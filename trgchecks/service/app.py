"""FastAPI application serving the guideline dashboard."""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from ..config import Config
from ..logging import get_logger
from ..models import CheckReport
from ..orchestrator import Orchestrator
from ..report import ReportRenderer, report_to_dict


class HealthResponse(BaseModel):
    status: str


class GuidelineCheckModel(BaseModel):
    guidelineName: str
    guidelineUrl: str
    passed: bool
    optional: bool
    errorDescription: str


class CheckedRepositoryModel(BaseModel):
    repoName: str
    repoUrl: str
    passedAllGuidelines: bool
    guidelineChecks: List[GuidelineCheckModel]


class DeclaredRepositoryModel(BaseModel):
    name: str
    usage: str
    url: str


class CheckedProductModel(BaseModel):
    name: str
    leadingRepo: str
    overallPassed: bool
    checkedRepositories: List[CheckedRepositoryModel]
    declaredRepositories: List[DeclaredRepositoryModel] = []
    openApiSpecs: List[str] = []


class RepositoryModel(BaseModel):
    name: str
    url: str


class ReportResponse(BaseModel):
    products: List[CheckedProductModel]
    unhandledRepositories: List[RepositoryModel]


class _ReportStore:
    """Keeps the most recent report; check runs are serialised."""

    def __init__(self) -> None:
        self.report: Optional[CheckReport] = None
        self.run_lock = threading.Lock()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator],
    renderer: ReportRenderer | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing check runs and the dashboard."""

    app = FastAPI(title="TRG Checks Dashboard", version="0.1.0")
    store = _ReportStore()
    html_renderer = renderer or ReportRenderer()
    logger = get_logger("service")

    def _latest() -> CheckReport:
        if store.report is None:
            raise HTTPException(status_code=404, detail="No check run has completed yet")
        return store.report

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/checks", response_model=ReportResponse)
    async def run_checks() -> dict[str, Any]:
        def _run() -> CheckReport:
            with store.run_lock:
                return orchestrator_factory().check_products()

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run)
        store.report = report
        logger.info(
            "Check run finished: %d products, %d unhandled",
            len(report.products),
            len(report.unhandled),
        )
        return report_to_dict(report)

    @app.get("/report", response_model=ReportResponse)
    async def latest_report() -> dict[str, Any]:
        return report_to_dict(_latest())

    @app.get("/", response_class=HTMLResponse)
    async def dashboard() -> HTMLResponse:
        return HTMLResponse(html_renderer.render_html(_latest()))

    return app


def run_service(
    config: Config, host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(lambda: Orchestrator.from_config(config))
    uvicorn.run(app, host=host, port=port)
