"""
Pydantic schemas for the Pattern Catalogue API.
Defines request/response contracts. Script files read by the CLI are validated
with the same RunRequest model.
"""
from collections import abc
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="'ok' if healthy")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
    commit: str = Field(..., description="Git commit hash")
    timestamp: datetime = Field(..., description="Current time (ISO8601)")


class CategoryInfo(BaseModel):
    name: str = Field(..., description="Category name, e.g. 'object-pool'")
    family: str = Field(..., description="creational | behavioral | structural | architectural")
    capabilities: List[str] = Field(..., description="Operations an instance must expose")
    entries: int = Field(..., description="Number of registered entries")


class CategoriesResponse(BaseModel):
    categories: List[CategoryInfo]


class EntryInfo(BaseModel):
    name: str
    description: str = ""
    checks: List[str] = Field(..., description="Descriptions of the entry's contract checks, in order")


class CategoryEntriesResponse(BaseModel):
    category: str
    family: str
    entries: List[EntryInfo]


class CheckResultModel(BaseModel):
    description: str
    ok: bool
    detail: Optional[str] = None


class VerificationReportModel(BaseModel):
    """
    Outcome of verifying one entry.

    Construction of the instance is reported as the first check; when it fails
    every contract check is reported as skipped.
    """
    entry: str
    category: str
    passed: bool
    total_checks: int = Field(..., description="Construction plus contract checks")
    failed_checks: int
    pass_rate: float = Field(..., description="Fraction of checks that passed (0.0-1.0)")
    checks: List[CheckResultModel]


class VerifyResponse(BaseModel):
    trace_id: str
    status: str = Field(..., description="'ok' if every check passed, 'failed' otherwise")
    report: VerificationReportModel


class VerifyCategoryResponse(BaseModel):
    trace_id: str
    status: str = Field(..., description="'ok' if every entry passed, 'failed' otherwise")
    category: str
    reports: List[VerificationReportModel]


class RunRequest(BaseModel):
    """
    Script for the example runner.

    Each step is an operation name, a list [operation, *args] or an object
    {"operation": str, "args": [...], "kwargs": {...}}.
    """
    steps: List[Any] = Field(..., description="Ordered script steps")


class RunError(BaseModel):
    code: str
    type: Optional[str] = None
    message: str


class RunResponse(BaseModel):
    trace_id: str
    status: str = Field(..., description="'ok' or 'error'")
    entry: str
    category: str
    outputs: List[Any] = Field(..., description="Return value of every step that ran")
    failed_step: Optional[int] = None
    error: Optional[RunError] = None


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    trace_id: Optional[str] = None
    status: str = "error"
    error: ErrorDetail


def jsonable(value: Any) -> Any:
    """Convert script outputs to JSON-safe data; objects fall back to their repr."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, abc.Mapping):
        return {str(k): jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [jsonable(v) for v in value]
    return repr(value)


def run_payload(run: Any) -> Dict[str, Any]:
    """ScriptRun.to_dict() with JSON-safe outputs."""
    payload = run.to_dict()
    payload["outputs"] = jsonable(payload["outputs"])
    return payload
