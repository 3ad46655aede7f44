"""Client-style smoke test for a running Pattern Catalogue API.

- Uses stdlib-only HTTP client in tools/ci/catalogue_http.py
- Exercises: /health + /api/catalogue/categories + verify for every category
  + one scripted run

Env vars:
- CATALOGUE_API_BASE_URL

Exit codes:
- 0: every category verified (status=ok) and the scripted run succeeded
- 1: error
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from tools.ci.catalogue_http import get_json, post_json


def main() -> int:
    health = get_json("/health")
    if health.get("status") != "ok":
        print(f"ERROR: health status != ok: {health}", file=sys.stderr)
        return 1

    categories = get_json("/api/catalogue/categories").get("categories") or []
    if not categories:
        print("ERROR: no categories returned", file=sys.stderr)
        return 1

    failures = []
    for category in categories:
        resp = post_json(f"/api/catalogue/{category['name']}/verify")
        if resp.get("status") != "ok":
            failed = [r.get("entry") for r in resp.get("reports") or [] if not r.get("passed")]
            failures.append({"category": category["name"], "entries": failed, "trace_id": resp.get("trace_id")})

    run = post_json(
        "/api/catalogue/state/traffic-light/run",
        {"steps": ["change", "change", "change"]},
    )
    expected = ["Changing light to green", "Changing light to yellow", "Changing light to red"]

    print(json.dumps(
        {
            "commit": health.get("commit"),
            "categories": len(categories),
            "failures": failures,
            "run_trace_id": run.get("trace_id"),
        },
        indent=2,
    ))

    if failures:
        print("ERROR: verification failed", file=sys.stderr)
        return 1
    if run.get("status") != "ok" or run.get("outputs") != expected:
        print(f"ERROR: unexpected run outputs: {run.get('outputs')}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
