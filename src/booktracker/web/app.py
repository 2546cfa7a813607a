"""FastAPI web application for the book tracker."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import load_settings
from ..core.errorlog import ErrorLog, error_log_path
from ..core.store import ensure_catalog_file, load_catalog
from ..core.tracker import BookTracker
from ..logs import configure_logging

VERSION = "0.1.0"
MAX_BODY_BYTES = 10_000  # one operation string, never more

settings = load_settings()
configure_logging(settings.log_level)

log = structlog.get_logger()

app = FastAPI(title="Book Tracker", docs_url=None, redoc_url=None)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


def _catalog_error() -> JSONResponse | None:
    if not settings.has_catalog_extension(settings.catalog_path):
        return JSONResponse(
            {
                "error": f"Catalog file must end with {', '.join(settings.catalog_extensions)}, "
                f"got: {settings.catalog_path}"
            },
            status_code=400,
        )
    try:
        ensure_catalog_file(settings.catalog_path)
    except OSError as e:
        log.error("catalog_create_failed", path=str(settings.catalog_path), error=str(e))
        return JSONResponse({"error": f"Could not create catalog: {e}"}, status_code=500)
    return None


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION,
        "environment": settings.env,
        "catalog": str(settings.catalog_path),
    }


@app.get("/api/books")
async def list_books():
    error = _catalog_error()
    if error:
        return error
    try:
        result = load_catalog(settings.catalog_path)
    except (OSError, UnicodeDecodeError) as e:
        log.error("catalog_read_failed", path=str(settings.catalog_path), error=str(e))
        return JSONResponse({"error": f"Could not read catalog: {e}"}, status_code=500)

    error_log = ErrorLog(error_log_path(settings.catalog_path, settings.error_log_name))
    for line, failure in result.failures:
        error_log.log(line, failure)

    return {
        "books": [b.to_dict() for b in result.records],
        "rejected": len(result.failures),
        "warnings": error_log.warnings,
    }


@app.post("/api/operation")
async def run_operation(request: Request):
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_BODY_BYTES:
        return JSONResponse({"error": "Request too large."}, status_code=413)

    try:
        body = await request.json()
    except json.JSONDecodeError:
        return JSONResponse({"error": "Request body must be JSON."}, status_code=400)
    operation = body.get("operation") if isinstance(body, dict) else None
    if not isinstance(operation, str) or not operation.strip():
        return JSONResponse({"error": "An operation string is required."}, status_code=400)

    error = _catalog_error()
    if error:
        return error

    error_log = ErrorLog(error_log_path(settings.catalog_path, settings.error_log_name))
    summary = BookTracker(settings.catalog_path, error_log=error_log).run(operation)
    return summary.to_dict()


def main():
    uvicorn.run(
        "booktracker.web.app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.env == "dev",
    )
