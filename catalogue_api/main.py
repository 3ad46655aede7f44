"""
FastAPI application for the Pattern Catalogue API.

Exposes the registry, the contract verifier and the example runner over HTTP:
- list categories and registered entries
- verify one entry or a whole category against its contract
- run scripted interactions against fresh instances (ENABLE_RUN_API)

Every request gets a trace id (X-Request-ID) that is injected into log records,
and every verify/run call is written to the audit log.
"""
from contextvars import ContextVar
import logging
import time
from typing import Optional
import uuid

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalogue_api.routes import catalogue, health
from catalogue_api.settings import settings
from pattern_catalogue.errors import CatalogueError, CatalogueErrorTaxonomy
from pattern_catalogue.implementations import default_registry
from pattern_catalogue.registry import PatternRegistry
from pattern_catalogue.settings import settings as catalogue_settings

# Context var for trace_id (used in logging)
trace_id_ctx: ContextVar[str] = ContextVar('trace_id', default='-')


# Logging filter to inject trace_id into all log records
class TraceIdFilter(logging.Filter):
    def filter(self, record):
        record.trace_id = trace_id_ctx.get()
        return True


# Configure logging (audit lines go to stdout with everything else)
root_logger = logging.getLogger()
if not root_logger.handlers:
    logging.basicConfig(
        level=catalogue_settings.log_level,
        format='[%(trace_id)s] %(levelname)s %(name)s: %(message)s',
    )

for handler in logging.root.handlers:
    if not any(isinstance(f, TraceIdFilter) for f in handler.filters):
        handler.addFilter(TraceIdFilter())

logger = logging.getLogger(__name__)


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or request.headers.get("X-Request-ID") or str(uuid.uuid4())


def create_app(registry: Optional[PatternRegistry] = None) -> FastAPI:
    """
    Build the API around a registry.

    Args:
        registry: Registry to serve (default: a fresh registry holding the built-in catalogue)
    """
    app = FastAPI(
        title="Pattern Catalogue API",
        description="Register design-pattern implementations, verify them against behavioural contracts and run example scripts.",
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.registry = registry if registry is not None else default_registry()

    @app.get("/")
    def root():
        return {"name": "Pattern Catalogue API", "status": "running"}

    # Trace ID middleware (sets request.state.trace_id and adds response headers)
    @app.middleware("http")
    async def add_trace_id_middleware(request: Request, call_next):
        trace_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.trace_id = trace_id

        token = trace_id_ctx.set(trace_id)
        try:
            start = time.perf_counter()
            response = await call_next(request)
            process_time = time.perf_counter() - start

            response.headers["X-Request-ID"] = trace_id
            response.headers["X-Process-Time"] = str(process_time)
            return response
        finally:
            trace_id_ctx.reset(token)

    app.include_router(health.router)
    app.include_router(catalogue.router)
    if settings.enable_run_api:
        app.include_router(catalogue.run_router)

    # Catalogue errors (lookups, construction) take their status from the taxonomy
    @app.exception_handler(CatalogueError)
    async def catalogue_exception_handler(request: Request, exc: CatalogueError):
        status_code = CatalogueErrorTaxonomy.http_status(exc)
        logger.info("Request failed with %s: %s", exc.code, exc)
        return JSONResponse(
            status_code=status_code,
            content={
                "trace_id": _trace_id(request),
                "status": "error",
                "error": exc.to_dict(),
            },
        )

    # HTTPException handler (wraps all HTTPException into ErrorResponse format)
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict):
            err = exc.detail
        else:
            err = {"code": str(exc.detail), "message": str(exc.detail)}

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "trace_id": _trace_id(request),
                "status": "error",
                "error": err,
            },
        )

    # RequestValidationError handler (wraps 422 validation errors into ErrorResponse format)
    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "trace_id": _trace_id(request),
                "status": "error",
                "error": {
                    "code": "REQUEST_VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "detail": jsonable_encoder(exc.errors()),
                },
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "trace_id": _trace_id(request),
                "status": "error",
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred.",
                },
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "catalogue_api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
    )
