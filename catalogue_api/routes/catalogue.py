"""Catalogue endpoints: list categories and entries, verify entries, run scripts.

Lookups that fail raise CatalogueError subclasses; the application's exception
handler turns them into the standard error body with the taxonomy's HTTP status.
A failing verification is not an error: the report is returned with status 'failed'.

Every verify/run call writes one JSON line to the audit logger.
"""
from datetime import datetime
import json
import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from catalogue_api.schemas import (
    CategoriesResponse,
    CategoryEntriesResponse,
    CategoryInfo,
    EntryInfo,
    RunRequest,
    RunResponse,
    VerifyCategoryResponse,
    VerifyResponse,
    run_payload,
)
from pattern_catalogue.categories import PatternCategory
from pattern_catalogue.errors import CatalogueErrorTaxonomy
from pattern_catalogue.registry import PatternRegistry
from pattern_catalogue.runner import ExampleRunner
from pattern_catalogue.verifier import Verifier

router = APIRouter(tags=["catalogue"])
run_router = APIRouter(tags=["catalogue"])

audit_logger = logging.getLogger("audit")


def get_registry(request: Request) -> PatternRegistry:
    return request.app.state.registry


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or request.headers.get("X-Request-ID") or "-"


def _audit(
    request: Request,
    action: str,
    category: str,
    name: Optional[str],
    status_code: int,
    result: str,
    started: float,
    error_code: Optional[str] = None,
):
    log_entry = {
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "trace_id": _trace_id(request),
        "endpoint": request.url.path,
        "http_method": request.method,
        "action": action,
        "category": category,
        "entry": name,
        "http_status": status_code,
        "result": result,
        "error_code": error_code,
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }
    audit_logger.info(json.dumps(log_entry))


@router.get("/api/catalogue/categories", response_model=CategoriesResponse)
def list_categories(registry: PatternRegistry = Depends(get_registry)):
    """Every pattern category with its family, capabilities and entry count."""
    return CategoriesResponse(
        categories=[
            CategoryInfo(
                name=category.value,
                family=category.family,
                capabilities=list(category.capabilities),
                entries=len(registry.list(category)),
            )
            for category in PatternCategory
        ]
    )


@router.get("/api/catalogue/{category}", response_model=CategoryEntriesResponse)
def list_entries(category: str, registry: PatternRegistry = Depends(get_registry)):
    """Entries of one category in registration order, with their contract checks."""
    parsed = PatternCategory.parse(category)
    return CategoryEntriesResponse(
        category=parsed.value,
        family=parsed.family,
        entries=[
            EntryInfo(
                name=entry.name,
                description=entry.description,
                checks=list(entry.contract.descriptions),
            )
            for entry in registry.entries(parsed)
        ],
    )


@router.post("/api/catalogue/{category}/verify", response_model=VerifyCategoryResponse)
def verify_category(category: str, request: Request, registry: PatternRegistry = Depends(get_registry)):
    """Verify every entry of a category. An empty category yields an empty report list."""
    started = time.perf_counter()
    parsed = PatternCategory.parse(category)
    reports = Verifier(registry).verify_all(parsed)
    passed = all(report.passed for report in reports)

    _audit(request, "verify", parsed.value, None, 200, "passed" if passed else "failed", started)
    return VerifyCategoryResponse(
        trace_id=_trace_id(request),
        status="ok" if passed else "failed",
        category=parsed.value,
        reports=[report.to_dict() for report in reports],
    )


@router.post("/api/catalogue/{category}/{name}/verify", response_model=VerifyResponse)
def verify_entry(category: str, name: str, request: Request, registry: PatternRegistry = Depends(get_registry)):
    """Verify one entry against its contract."""
    started = time.perf_counter()
    report = Verifier(registry).verify(category, name)

    _audit(
        request, "verify", report.category.value, name, 200,
        "passed" if report.passed else "failed", started,
    )
    return VerifyResponse(
        trace_id=_trace_id(request),
        status="ok" if report.passed else "failed",
        report=report.to_dict(),
    )


@run_router.post("/api/catalogue/{category}/{name}/run", response_model=RunResponse)
def run_script(
    category: str,
    name: str,
    body: RunRequest,
    request: Request,
    registry: PatternRegistry = Depends(get_registry),
):
    """
    Run a script against a fresh instance of the entry.

    A step that fails stops the run; the response then carries the error, the
    index of the failed step and the outputs of the steps before it, with the
    HTTP status of the error code.
    """
    started = time.perf_counter()
    try:
        run = ExampleRunner(registry).run(category, name, body.steps)
    except ValueError as e:
        _audit(request, "run", category, name, 422, "invalid_script", started, "invalid_script")
        raise HTTPException(status_code=422, detail={"code": "invalid_script", "message": str(e)})

    payload = run_payload(run)
    payload["trace_id"] = _trace_id(request)
    if run.ok:
        _audit(request, "run", run.category.value, name, 200, "ok", started)
        return RunResponse(**payload)

    error_code = payload["error"]["code"]
    status_code = CatalogueErrorTaxonomy.classify(error_code)["http_status"]
    _audit(
        request, "run", run.category.value, name, status_code, "script_failed", started, error_code,
    )
    return JSONResponse(status_code=status_code, content=RunResponse(**payload).model_dump())
