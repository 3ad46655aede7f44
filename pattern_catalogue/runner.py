"""
Example Runner

Drive a freshly built pattern instance through a scripted interaction and capture
each step's return value, so an example's documented output can be asserted on as
data instead of read off a console. Each output is a deep copy taken when its
step returns, so later steps cannot rewrite it.

Partial results: when a step fails (unknown operation, or the operation itself
raises) the run stops and the outputs of the earlier steps are returned alongside
the error in the ScriptRun.
"""
from __future__ import annotations

from collections import abc
import copy
from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .categories import PatternCategory
from .errors import ConstructionError, UnknownOperationError
from .registry import CategoryLike, PatternRegistry

logger = logging.getLogger(__name__)

_MISSING = object()

# error code reported for operations that raise something other than a CatalogueError
OPERATION_FAILED = "operation_failed"


@dataclass(frozen=True)
class ScriptStep:
    operation: str
    args: Tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def parse(cls, raw: Any) -> "ScriptStep":
        """
        Accepts:
        - a ScriptStep
        - a mapping {"operation" | "op": str, "args": [...], "kwargs": {...}}
        - a bare operation name
        - a sequence (operation, *args)
        """
        if isinstance(raw, ScriptStep):
            return raw
        if isinstance(raw, str):
            return cls(raw)
        if isinstance(raw, abc.Mapping):
            operation = raw.get("operation", raw.get("op"))
            if not isinstance(operation, str):
                raise ValueError(f"Script step has no operation name: {raw!r}")
            args = raw.get("args") or ()
            if isinstance(args, (str, bytes, abc.Mapping)) or not isinstance(args, abc.Iterable):
                args = (args,)
            return cls(operation, tuple(args), dict(raw.get("kwargs") or {}))
        if isinstance(raw, (list, tuple)) and raw and isinstance(raw[0], str):
            return cls(raw[0], tuple(raw[1:]))
        raise ValueError(f"Cannot parse script step: {raw!r}")


@dataclass(frozen=True)
class ScriptRun:
    entry_name: str
    category: PatternCategory
    outputs: Tuple[Any, ...]
    error: Optional[BaseException] = None
    failed_step: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> "ScriptRun":
        if self.error is not None:
            raise self.error
        return self

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "entry": self.entry_name,
            "category": self.category.value,
            "status": "ok" if self.ok else "error",
            "outputs": list(self.outputs),
        }
        if self.error is not None:
            out["failed_step"] = self.failed_step
            out["error"] = {
                "code": getattr(self.error, "code", OPERATION_FAILED),
                "type": type(self.error).__name__,
                "message": str(self.error),
            }
        return out


def snapshot(value: Any) -> Any:
    """Copy a step output so later steps cannot change what was recorded.

    Values that cannot be deep-copied (locks, sockets, ...) are recorded as is.
    """
    try:
        return copy.deepcopy(value)
    except Exception as e:
        logger.debug("Recording %s output without a copy: %s", type(value).__name__, e)
        return value


def resolve_operation(instance: Any, step: ScriptStep, index: int, outputs: Iterable[Any] = ()):
    """Return a zero-argument callable performing the step, or raise UnknownOperationError."""
    name = step.operation
    if not name or name.startswith("_"):
        raise UnknownOperationError(index, name, outputs)
    target = getattr(instance, name, _MISSING)
    if target is _MISSING:
        raise UnknownOperationError(index, name, outputs)
    if callable(target):
        return lambda: target(*step.args, **dict(step.kwargs))
    # plain attribute read
    if step.args or step.kwargs:
        raise UnknownOperationError(index, name, outputs)
    return lambda: target


class ExampleRunner:
    """Apply scripts to fresh instances of registered entries."""

    def __init__(self, registry: PatternRegistry):
        self.registry = registry

    def run(self, category: CategoryLike, name: str, script: Iterable[Any]) -> ScriptRun:
        """
        Run a script against a fresh instance of (category, name).

        Raises:
            NotFoundError: If the entry is not registered
            ConstructionError: If the entry's factory fails
            ValueError: If a script step cannot be parsed
        """
        entry = self.registry.get(category, name)
        steps = [ScriptStep.parse(raw) for raw in script]

        try:
            instance = entry.instantiate()
        except Exception as e:
            raise ConstructionError(entry.category, entry.name, e) from e

        outputs: List[Any] = []
        for index, step in enumerate(steps):
            try:
                perform = resolve_operation(instance, step, index, outputs)
            except UnknownOperationError as e:
                logger.info("Script for %s/%s stopped: %s", entry.category, entry.name, e)
                return ScriptRun(entry.name, entry.category, tuple(outputs), e, index)
            try:
                outputs.append(snapshot(perform()))
            except Exception as e:
                logger.info(
                    "Script for %s/%s stopped at step %d (%s): %s",
                    entry.category,
                    entry.name,
                    index,
                    step.operation,
                    e,
                )
                return ScriptRun(entry.name, entry.category, tuple(outputs), e, index)

        return ScriptRun(entry.name, entry.category, tuple(outputs))
