"""FastAPI application serving the interactive analysis page.

Routes:
    GET  /              Page for the caller's session
    GET  /result        Result region only, polled while it can still change
    POST /analyze       Store the snippet and category, trigger analysis
    POST /upload        Load a picked file into the snippet area
    POST /tab/{tab}     Switch the result view
    POST /copy          Copy the corrected code to the browser clipboard
    POST /api/analyze   Stateless JSON analysis
    GET  /health        Health report

Page routes answer with a 303 redirect back to ``/``. While a call is in
flight, or the copy acknowledgement shows, a page script polls ``/result``
and swaps only the result region; the snippet form is never re-rendered.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ConfigDict, Field

from .._version import __version__
from ..adapters.llm import create_analyzer
from ..adapters.llm.contract import AnalysisResponse, ErrorDetailResponse
from ..core.controller import InteractionController
from ..core.views import FindingsView, LoadingView
from ..models.analysis import AnalysisResult, FileCategory
from ..utils.errors import AnalysisError
from ..utils.health import HealthChecker
from ..utils.logging import LogEventNames, bind_session
from .sessions import BrowserClipboard, Session, SessionStore

if TYPE_CHECKING:
    from ..config.schema import AppConfig
    from ..interfaces.analyzer import CodeAnalyzer

log = structlog.get_logger()

SESSION_COOKIE = "devops_assistant_session"
TEMPLATES_DIR = Path(__file__).parent / "templates"


class AnalyzeRequestBody(BaseModel):
    """JSON body of POST /api/analyze."""

    model_config = ConfigDict(populate_by_name=True)

    code: str
    file_type: FileCategory = Field(FileCategory.default(), alias="fileType")


def result_to_wire(result: AnalysisResult) -> dict[str, Any]:
    """Serialize a result in the same camelCase shape the model returns."""
    payload = AnalysisResponse(
        is_valid=result.is_valid,
        errors=[
            ErrorDetailResponse(
                line_number=err.line_number,
                error=err.error,
                explanation=err.explanation,
            )
            for err in result.errors
        ],
        corrected_code=result.corrected_code,
        best_practices=list(result.best_practices),
    )
    return payload.model_dump(by_alias=True)


def create_app(config: AppConfig, analyzer: CodeAnalyzer | None = None) -> FastAPI:
    """Build the web application.

    Args:
        config: Application configuration
        analyzer: Analysis backend; built from ``config`` when omitted

    Returns:
        Configured FastAPI app
    """
    if analyzer is None:
        analyzer = create_analyzer(config)

    def new_controller(clipboard: BrowserClipboard) -> InteractionController:
        return InteractionController(
            analyzer,
            clipboard,
            category=config.ui.default_category,
            copy_feedback_seconds=config.ui.copy_feedback_seconds,
            max_source_chars=config.analysis.max_source_chars,
        )

    store = SessionStore(
        new_controller,
        ttl=config.server.session_ttl,
        max_sessions=config.server.max_sessions,
    )
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    health_checker = HealthChecker(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info(
            LogEventNames.APP_STARTED,
            version=__version__,
            provider=config.llm.provider,
            model=analyzer.model_name,
        )
        yield
        log.info(LogEventNames.APP_STOPPED)

    app = FastAPI(title="DevOps Assistant", version=__version__, lifespan=lifespan)
    app.state.config = config
    app.state.analyzer = analyzer
    app.state.sessions = store

    def session_for(request: Request) -> Session:
        session = store.resolve(request.cookies.get(SESSION_COOKIE))
        bind_session(session.session_id)
        return session

    def with_cookie(response: Response, session: Session) -> Response:
        response.set_cookie(
            SESSION_COOKIE,
            session.session_id,
            max_age=config.server.session_ttl,
            httponly=True,
            samesite="lax",
        )
        return response

    def back_to_page(session: Session) -> Response:
        return with_cookie(RedirectResponse("/", status_code=303), session)

    def result_context(session: Session) -> dict[str, Any]:
        view = session.controller.render()
        still_changing = isinstance(view, LoadingView) or (
            isinstance(view, FindingsView) and view.copied
        )
        return {
            "view": view,
            "view_kind": type(view).__name__,
            "poll_ms": config.ui.poll_interval_seconds * 1000 if still_changing else None,
        }

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> Response:
        session = session_for(request)
        controller = session.controller
        context = {
            **result_context(session),
            "categories": list(FileCategory),
            "category": controller.category,
            "source_text": controller.source_text,
            "is_loading": controller.is_loading,
            "clipboard_text": session.clipboard.take(),
            "user_name": config.ui.user_name,
            "version": __version__,
        }
        response = templates.TemplateResponse(request, "index.html", context)
        return with_cookie(response, session)

    @app.get("/result", response_class=HTMLResponse)
    async def result_region(request: Request) -> Response:
        session = session_for(request)
        response = templates.TemplateResponse(request, "_result.html", result_context(session))
        return with_cookie(response, session)

    @app.post("/analyze")
    async def analyze(
        request: Request,
        code: str = Form(""),
        file_type: str = Form(...),
    ) -> Response:
        session = session_for(request)
        controller = session.controller
        if controller.is_loading:
            # Keep the in-flight request's input untouched
            return back_to_page(session)
        try:
            controller.set_category(file_type)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=f"Unsupported file type: {file_type}") from e
        controller.set_source_text(code)
        controller.request_analysis()
        return back_to_page(session)

    @app.post("/upload")
    async def upload(
        request: Request,
        file: UploadFile = File(...),
        file_type: str | None = Form(None),
    ) -> Response:
        session = session_for(request)
        controller = session.controller
        if file_type:
            try:
                controller.set_category(file_type)
            except ValueError as e:
                raise HTTPException(
                    status_code=400, detail=f"Unsupported file type: {file_type}"
                ) from e
        controller.load_file(await file.read(), filename=file.filename)
        return back_to_page(session)

    @app.post("/tab/{tab}")
    async def select_tab(request: Request, tab: str) -> Response:
        session = session_for(request)
        try:
            session.controller.select_tab(tab)
        except ValueError as e:
            raise HTTPException(status_code=404, detail=f"Unknown tab: {tab}") from e
        return back_to_page(session)

    @app.post("/copy")
    async def copy(request: Request) -> Response:
        session = session_for(request)
        session.controller.copy_corrected_code()
        return back_to_page(session)

    @app.post("/api/analyze")
    async def analyze_api(body: AnalyzeRequestBody) -> JSONResponse:
        if not body.code.strip():
            raise HTTPException(status_code=400, detail="Code must not be blank")
        if len(body.code) > config.analysis.max_source_chars:
            raise HTTPException(status_code=413, detail="Code is too long to analyze")

        log.info(LogEventNames.ANALYSIS_REQUESTED, category=str(body.file_type), api=True)
        try:
            result = await analyzer.analyze(body.code, body.file_type)
        except AnalysisError as e:
            log.warning(LogEventNames.ANALYSIS_FAILED, error=str(e), api=True)
            raise HTTPException(status_code=502, detail=str(e)) from e

        return JSONResponse(result_to_wire(result))

    @app.get("/health")
    async def health() -> JSONResponse:
        report = await health_checker.run_all_checks()
        return JSONResponse(report.to_dict(), status_code=200 if report.healthy else 503)

    return app


__all__ = ["SESSION_COOKIE", "AnalyzeRequestBody", "create_app", "result_to_wire"]
