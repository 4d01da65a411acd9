"""
FastAPI application factory for the causes-of-death bar chart.

Usage:
    python -m api.app                          # Dev server on port 8000
    APP_DATA_SOURCE=/data/deaths.csv python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

The data file is loaded once, in the lifespan handler. A load or parse
failure aborts startup: the app never serves a partially rendered chart.

Logging: one line per request with a request ID; APP_LOG_FORMAT=json switches
to newline-delimited JSON.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from http import HTTPStatus
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorResponse
from api.routes import chart as chart_routes
from api.routes import frontend as frontend_routes
from chart.render import STATIC_DIR, TEMPLATES_DIR, register_filters
from chart.state import ChartState
from pipeline.loader import load_records
from utils.config import AppConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("causes_chart_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)

# ── Application metrics ───────────────────────────────────────────────────────
# In-memory counters; reset on process restart.
_app_start_time: float = time.time()
_metrics: dict = {
    "request_count": 0,
    "error_count": 0,
    "response_times_ms": [],  # capped at last 100 entries
}
_RESPONSE_TIME_WINDOW = 100


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the data file and build the chart state before serving."""
    if app.state.chart is None:
        cfg: AppConfig = app.state.config
        source = app.state.data_source
        _logger.info("Loading chart data from %s", source)
        records, report = load_records(source, cfg.parse, timeout=cfg.fetch_timeout)
        app.state.chart = ChartState(records, cfg.chart)
        app.state.load_report = report
    yield


def create_app(data_source: str | Path | None = None,
               chart_state: ChartState | None = None,
               config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        data_source: Override APP_DATA_SOURCE (path or URL).
        chart_state: Prebuilt state; skips loading entirely (useful for testing).
        config: Override the environment-derived AppConfig.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or _cfg

    app = FastAPI(
        title="Causes of Death Chart",
        summary="Sortable bar chart of deaths by underlying cause.",
        description=(
            "## Causes of Death Chart\n\n"
            "Loads a Statistics Netherlands export of deaths by underlying cause, "
            "keeps the rows between the first cause and the copyright footer, and "
            "serves them as an animated, sortable bar chart.\n\n"
            "### Key concepts\n"
            "- **Record**: one `(cause, amount)` pair; `line` is its stable id.\n"
            "- **Sort order**: `cause` (ascending) or `amount` (descending).\n"
            "- **Transition plan**: new bar positions with a per-rank delay.\n"
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "chart", "description": "Records, render model and sorting."},
            {"name": "meta", "description": "Health check and load metadata."},
        ],
    )
    app.state.config = cfg
    app.state.data_source = str(data_source) if data_source is not None else cfg.data_source
    app.state.chart = chart_state
    app.state.load_report = None

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request and record metrics."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        _metrics["request_count"] += 1
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        _metrics["response_times_ms"].append(duration_ms)
        if len(_metrics["response_times_ms"]) > _RESPONSE_TIME_WINDOW:
            _metrics["response_times_ms"] = (
                _metrics["response_times_ms"][-_RESPONSE_TIME_WINDOW:]
            )
        if response.status_code >= 500:
            _metrics["error_count"] += 1

        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, path, response.status_code, duration_ms, request_id,
            )
        return response

    # ── Security headers ──────────────────────────────────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "status_code": 500,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Bad request", detail=str(exc), status_code=400).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        body = ErrorResponse(
            error=HTTPStatus(exc.status_code).phrase,
            detail=str(exc.detail),
            status_code=exc.status_code,
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(),
                            headers=exc.headers)

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if chart data is loaded."""
        state: ChartState | None = app.state.chart
        if state is None:
            return JSONResponse(
                status_code=503,
                content={"status": "no_data", "source": app.state.data_source},
            )
        return {
            "status": "ok",
            "source": app.state.data_source,
            "records": len(state.records),
            "order": state.order.value,
            "generation": state.generation,
        }

    @app.get(
        "/health/detailed",
        tags=["meta"],
        summary="Detailed health metrics",
        response_description="Operational metrics and the data load report",
    )
    def health_detailed():
        """Return uptime, request counters and the load report.

        Counters reset on process restart.
        """
        rts = _metrics["response_times_ms"]
        avg_rt = round(sum(rts) / len(rts), 2) if rts else 0.0
        report = app.state.load_report
        state: ChartState | None = app.state.chart
        return {
            "status": "ok" if state is not None else "no_data",
            "uptime_seconds": round(time.time() - _app_start_time, 2),
            "request_count": _metrics["request_count"],
            "error_count": _metrics["error_count"],
            "avg_response_time_ms": avg_rt,
            "animating": state.is_animating() if state is not None else False,
            "load": report.to_dict() if report is not None else None,
        }

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(chart_routes.router, prefix="/api/v1")

    # ── Static files + Jinja2 templates ───────────────────────────────────────

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    if TEMPLATES_DIR.exists():
        templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
        register_filters(templates.env)
        frontend_routes.set_templates(templates)
        app.include_router(frontend_routes.router)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
