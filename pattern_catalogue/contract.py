"""Behavioral contracts.

A Contract is an immutable, ordered set of Checks for one pattern category. A Check
runs against live instances supplied by an InstanceSource and reports an outcome;
it never touches state outside the instances it is given.

A check's `run` may return:
- a CheckOutcome
- a bool (True = passed)
- None (passed)
and may raise AssertionError to fail with the assertion message as detail.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Tuple, Union

from .categories import (
    BEHAVIORAL_GUARANTEES,
    PatternCategory,
    declared_category,
    missing_capabilities,
)
from .errors import ContractDefinitionError


@dataclass(frozen=True)
class CheckOutcome:
    passed: bool
    detail: Optional[str] = None

    @classmethod
    def ok(cls, detail: Optional[str] = None) -> "CheckOutcome":
        return cls(True, detail)

    @classmethod
    def fail(cls, detail: str) -> "CheckOutcome":
        return cls(False, detail)

    @classmethod
    def coerce(cls, value: Any) -> "CheckOutcome":
        if isinstance(value, CheckOutcome):
            return value
        if value is None:
            return cls(True)
        if isinstance(value, bool):
            return cls(value, None if value else "check returned False")
        raise TypeError(f"Check returned {type(value).__name__}, expected CheckOutcome, bool or None")


class InstanceSource:
    """Hands live instances to a check.

    `primary` is the instance built by the verifier's construction step; `fresh()`
    calls the entry's factory again.
    """

    def __init__(self, primary: Any, factory: Callable[[], Any]):
        self.primary = primary
        self._factory = factory
        self.fresh_count = 0

    def fresh(self) -> Any:
        self.fresh_count += 1
        return self._factory()


CheckFunction = Callable[[InstanceSource], Union[CheckOutcome, bool, None]]


@dataclass(frozen=True)
class Check:
    description: str
    run: CheckFunction

    def __post_init__(self):
        if not self.description or not str(self.description).strip():
            raise ContractDefinitionError("Check description must be a non-empty string")
        if not callable(self.run):
            raise ContractDefinitionError(f"Check '{self.description}' has a non-callable run")


def expect(condition: Any, detail: str) -> None:
    """Fail the running check with `detail` unless `condition` holds."""
    if not condition:
        raise AssertionError(detail)


def check(description: str) -> Callable[[CheckFunction], Check]:
    """Decorator turning a function into a Check."""

    def wrap(fn: CheckFunction) -> Check:
        return Check(description=description, run=fn)

    return wrap


@dataclass(frozen=True)
class Contract:
    category: PatternCategory
    checks: Tuple[Check, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # normalise while keeping the dataclass frozen
        object.__setattr__(self, "category", PatternCategory.parse(self.category))
        checks = tuple(self.checks)
        for item in checks:
            if not isinstance(item, Check):
                raise ContractDefinitionError(
                    f"Contract for '{self.category}' holds a non-Check item: {item!r}"
                )
        object.__setattr__(self, "checks", checks)
        if not checks and self.category in BEHAVIORAL_GUARANTEES:
            raise ContractDefinitionError(
                f"Contract for '{self.category}' must declare at least one check"
            )

    @property
    def descriptions(self) -> Tuple[str, ...]:
        return tuple(c.description for c in self.checks)

    def extended(self, *checks: Check) -> "Contract":
        return Contract(self.category, self.checks + tuple(checks))

    def __len__(self) -> int:
        return len(self.checks)

    def __iter__(self):
        return iter(self.checks)


def conformance_check(category: Union[PatternCategory, str]) -> Check:
    """Check that the instance declares `category` and exposes its capabilities."""
    category = PatternCategory.parse(category)

    def run(instances: InstanceSource) -> CheckOutcome:
        instance = instances.primary
        tag = declared_category(instance)
        if tag is not category:
            return CheckOutcome.fail(f"declared category {tag} != {category}")
        missing = missing_capabilities(category, instance)
        if missing:
            return CheckOutcome.fail(f"missing capabilities: {', '.join(missing)}")
        return CheckOutcome.ok()

    return Check(f"declares the {category} category and its capabilities", run)


def build_contract(category: Union[PatternCategory, str], checks: Iterable[Check]) -> Contract:
    """Contract led by the category's conformance check."""
    return Contract(category, (conformance_check(category),) + tuple(checks))
