"""Contract verifier.

Runs an entry's contract against instances built by the entry's factory and returns
a complete report. Verification is total: factory and check faults become failed
results; only registry lookups propagate.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional, Tuple

from .categories import PatternCategory
from .contract import Check, CheckOutcome, InstanceSource
from .registry import CategoryLike, PatternEntry, PatternRegistry

logger = logging.getLogger(__name__)

CONSTRUCTION = "construction"
SKIPPED_DETAIL = "skipped: construction failed"


@dataclass(frozen=True)
class CheckResult:
    description: str
    passed: bool
    detail: Optional[str] = None


@dataclass(frozen=True)
class VerificationReport:
    entry_name: str
    category: PatternCategory
    results: Tuple[CheckResult, ...]

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failed(self) -> Tuple[CheckResult, ...]:
        return tuple(r for r in self.results if not r.passed)

    @property
    def total_checks(self) -> int:
        return len(self.results)

    @property
    def failed_checks(self) -> int:
        return len(self.failed)

    @property
    def pass_rate(self) -> float:
        total = self.total_checks
        return 0.0 if total == 0 else (total - self.failed_checks) / total

    def result(self, description: str) -> CheckResult:
        for r in self.results:
            if r.description == description:
                return r
        raise KeyError(description)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry": self.entry_name,
            "category": self.category.value,
            "passed": self.passed,
            "total_checks": self.total_checks,
            "failed_checks": self.failed_checks,
            "pass_rate": self.pass_rate,
            "checks": [
                {"description": r.description, "ok": r.passed, "detail": r.detail}
                for r in self.results
            ],
        }


def _describe_fault(exc: BaseException) -> str:
    if isinstance(exc, AssertionError):
        return str(exc) or "assertion failed"
    return f"{type(exc).__name__}: {exc}"


class Verifier:
    """Verify registered entries against their contracts."""

    def __init__(self, registry: PatternRegistry):
        self.registry = registry

    def verify(self, category: CategoryLike, name: str) -> VerificationReport:
        """
        Verify one entry.

        Raises:
            NotFoundError: If the entry is not registered (lookups are not verification)
        """
        entry = self.registry.get(category, name)
        return self.verify_entry(entry)

    def verify_all(self, category: CategoryLike) -> List[VerificationReport]:
        """One report per entry of the category, in registration order."""
        return [self.verify_entry(entry) for entry in self.registry.entries(category)]

    def verify_entry(self, entry: PatternEntry) -> VerificationReport:
        results: List[CheckResult] = []

        try:
            primary = entry.instantiate()
        except Exception as e:
            logger.warning("Construction of %s/%s failed: %s", entry.category, entry.name, e)
            results.append(CheckResult(CONSTRUCTION, False, _describe_fault(e)))
            results.extend(
                CheckResult(c.description, False, SKIPPED_DETAIL) for c in entry.contract.checks
            )
            return VerificationReport(entry.name, entry.category, tuple(results))

        results.append(CheckResult(CONSTRUCTION, True))
        instances = InstanceSource(primary, entry.instantiate)

        # every check runs, even after a failure, so the report is complete
        for c in entry.contract.checks:
            results.append(self._run_check(entry, c, instances))

        report = VerificationReport(entry.name, entry.category, tuple(results))
        logger.info(
            "Verified %s/%s: %d/%d checks passed",
            entry.category,
            entry.name,
            report.total_checks - report.failed_checks,
            report.total_checks,
        )
        return report

    def _run_check(self, entry: PatternEntry, c: Check, instances: InstanceSource) -> CheckResult:
        try:
            outcome = CheckOutcome.coerce(c.run(instances))
        except Exception as e:
            if not isinstance(e, AssertionError):
                logger.warning(
                    "Check '%s' raised on %s/%s: %s", c.description, entry.category, entry.name, e
                )
            return CheckResult(c.description, False, _describe_fault(e))
        logger.debug(
            "Check '%s' on %s/%s: %s",
            c.description,
            entry.category,
            entry.name,
            "passed" if outcome.passed else "failed",
        )
        return CheckResult(c.description, outcome.passed, outcome.detail)
