"""Minimal HTTP client helpers for Pattern Catalogue CI gates.

- Uses stdlib only (urllib) to avoid extra deps in CI.
- Error bodies ({"trace_id", "status": "error", "error": {...}}) are surfaced in the
  raised RuntimeError.

Environment variables:
- CATALOGUE_API_BASE_URL (default: http://localhost:8000)
- CATALOGUE_API_TIMEOUT_S (default: 30)
"""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from typing import Any


def env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def base_url() -> str:
    raw = env("CATALOGUE_API_BASE_URL")
    if os.getenv("GITHUB_ACTIONS", "").lower() == "true" and raw is None:
        raise RuntimeError(
            "CATALOGUE_API_BASE_URL must be set in GitHub Actions; refusing to fall back to localhost."
        )
    return (raw or "http://localhost:8000").rstrip("/")


def _request(method: str, path: str, payload: dict[str, Any] | None, timeout_s: int | None) -> dict[str, Any]:
    url = base_url() + path
    body = json.dumps(payload).encode("utf-8") if payload is not None else None
    if timeout_s is None:
        timeout_s = int(env("CATALOGUE_API_TIMEOUT_S", "30"))

    req = urllib.request.Request(
        url=url,
        data=body,
        method=method,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout_s) as resp:
            raw = resp.read().decode("utf-8")
            return json.loads(raw) if raw else {}
    except urllib.error.HTTPError as e:
        raw = e.read().decode("utf-8") if getattr(e, "fp", None) else ""
        try:
            detail = json.loads(raw) if raw else {"raw": raw}
        except ValueError:
            detail = {"raw": raw}
        raise RuntimeError(f"HTTP {e.code} calling {url}: {detail}") from e
    except urllib.error.URLError as e:
        raise RuntimeError(f"Network error calling {url}: {e}") from e


def get_json(path: str, *, timeout_s: int | None = None) -> dict[str, Any]:
    return _request("GET", path, None, timeout_s)


def post_json(path: str, payload: dict[str, Any] | None = None, *, timeout_s: int | None = None) -> dict[str, Any]:
    return _request("POST", path, payload if payload is not None else {}, timeout_s)
