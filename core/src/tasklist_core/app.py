from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles

from tasklist_core import __version__
from tasklist_core.config import CoreConfig, load_core_config, resolve_configured_paths
from tasklist_core.errors import RenderError, StoreBusy, TaskOutOfRange
from tasklist_core.home import TasklistPaths, ensure_tasklist_layout, resolve_tasklist_home
from tasklist_core.render import Jinja2Renderer, Renderer
from tasklist_core.store import TaskStore
from tasklist_core.ui.router import STATIC_DIR as UI_STATIC_DIR
from tasklist_core.ui.router import router as ui_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_file_logging(paths: TasklistPaths, config: CoreConfig) -> None:
    log_path = paths.logs_dir / "core.log"
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.logging.max_size_mb * 1024 * 1024,
        backupCount=config.logging.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Configure root logger to capture all module logs
    root = logging.getLogger()
    root.setLevel(config.logging.level)
    # Avoid adding duplicate handlers if reloaded
    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        root.addHandler(file_handler)


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else str(err.get("msg")))
    return "Request validation failed: " + "; ".join(parts)


def create_app(
    *,
    store: TaskStore | None = None,
    renderer: Renderer | None = None,
) -> FastAPI:
    """Build the task list app.

    `store` and `renderer` may be injected (tests do); otherwise they are
    created at startup from the config under TASKLIST_HOME.
    """

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        home = resolve_tasklist_home()
        paths = ensure_tasklist_layout(home)
        config = load_core_config(paths)
        paths = resolve_configured_paths(paths, config)

        configure_file_logging(paths, config)

        logger.info("Tasklist Core starting up")
        logger.info(f"Logs directory: {paths.logs_dir}")

        app.state.tasklist_home = home
        app.state.tasklist_paths = paths
        app.state.tasklist_config = config

        if getattr(app.state, "task_store", None) is None:
            app.state.task_store = TaskStore(lock_timeout_s=config.store.lock_timeout_s)
        if getattr(app.state, "renderer", None) is None:
            app.state.renderer = Jinja2Renderer(template_globals={"title": config.ui.title})

        yield

        logger.info("Tasklist Core shutting down")

    app = FastAPI(title="Tasklist Core", version=__version__, lifespan=_lifespan)
    app.state.task_store = store
    app.state.renderer = renderer

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> PlainTextResponse:
        return PlainTextResponse(_validation_message(exc), status_code=422)

    @app.exception_handler(TaskOutOfRange)
    async def _out_of_range_handler(request: Request, exc: TaskOutOfRange) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=500)

    @app.exception_handler(RenderError)
    async def _render_error_handler(request: Request, exc: RenderError) -> PlainTextResponse:
        return PlainTextResponse(
            f"Failed to render template. Error: {exc.message}", status_code=500
        )

    @app.exception_handler(StoreBusy)
    async def _store_busy_handler(request: Request, exc: StoreBusy) -> PlainTextResponse:
        return PlainTextResponse(str(exc), status_code=503)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        # Avoid leaking internals; the traceback goes to the log.
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return PlainTextResponse("Internal server error", status_code=500)

    if UI_STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(UI_STATIC_DIR)), name="static")
    else:
        logger.warning(
            "UI static directory is missing (%s); /static will not be served",
            UI_STATIC_DIR,
        )
    app.include_router(ui_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app
