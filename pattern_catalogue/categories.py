"""Pattern categories and their capability sets.

The category set is closed. Every category maps to the operation/attribute names an
instance must expose to count as an implementation of it; instances are checked
structurally against that table, never against a shared base class.
"""
from __future__ import annotations

from enum import Enum
import re
from typing import Dict, Tuple, Union

from .errors import UnknownCategoryError


class PatternCategory(str, Enum):
    # creational
    SINGLETON = "singleton"
    FACTORY = "factory"
    ABSTRACT_FACTORY = "abstract-factory"
    BUILDER = "builder"
    OBJECT_POOL = "object-pool"
    PROTOTYPE = "prototype"
    # behavioral
    OBSERVER = "observer"
    COMMAND = "command"
    ITERATOR = "iterator"
    MEDIATOR = "mediator"
    STATE = "state"
    STRATEGY = "strategy"
    VISITOR = "visitor"
    # structural
    ADAPTER = "adapter"
    BRIDGE = "bridge"
    COMPOSITE = "composite"
    DECORATOR = "decorator"
    FACADE = "facade"
    MODULE = "module"
    PROXY = "proxy"
    # architectural
    FLUX = "flux"
    MVC = "mvc"
    REDUX = "redux"

    def __str__(self) -> str:
        return self.value

    @property
    def family(self) -> str:
        return _FAMILIES[self]

    @property
    def capabilities(self) -> Tuple[str, ...]:
        return CAPABILITIES[self]

    @classmethod
    def parse(cls, value: Union["PatternCategory", str]) -> "PatternCategory":
        """Resolve a member from its value, name or CamelCase spelling.

        "object-pool", "object_pool", "OBJECT_POOL" and "ObjectPool" all resolve to
        OBJECT_POOL.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or not value.strip():
            raise UnknownCategoryError(value)

        raw = value.strip()
        # CamelCase -> kebab-case ("AbstractFactory" -> "abstract-factory")
        kebab = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", raw)
        key = kebab.replace("_", "-").replace(" ", "-").lower()
        try:
            return cls(key)
        except ValueError:
            raise UnknownCategoryError(value) from None


_FAMILIES: Dict[PatternCategory, str] = {
    PatternCategory.SINGLETON: "creational",
    PatternCategory.FACTORY: "creational",
    PatternCategory.ABSTRACT_FACTORY: "creational",
    PatternCategory.BUILDER: "creational",
    PatternCategory.OBJECT_POOL: "creational",
    PatternCategory.PROTOTYPE: "creational",
    PatternCategory.OBSERVER: "behavioral",
    PatternCategory.COMMAND: "behavioral",
    PatternCategory.ITERATOR: "behavioral",
    PatternCategory.MEDIATOR: "behavioral",
    PatternCategory.STATE: "behavioral",
    PatternCategory.STRATEGY: "behavioral",
    PatternCategory.VISITOR: "behavioral",
    PatternCategory.ADAPTER: "structural",
    PatternCategory.BRIDGE: "structural",
    PatternCategory.COMPOSITE: "structural",
    PatternCategory.DECORATOR: "structural",
    PatternCategory.FACADE: "structural",
    PatternCategory.MODULE: "structural",
    PatternCategory.PROXY: "structural",
    PatternCategory.FLUX: "architectural",
    PatternCategory.MVC: "architectural",
    PatternCategory.REDUX: "architectural",
}


# Operations (or attributes) each category's instances must expose.
CAPABILITIES: Dict[PatternCategory, Tuple[str, ...]] = {
    PatternCategory.SINGLETON: (),
    PatternCategory.FACTORY: ("create", "kinds"),
    PatternCategory.ABSTRACT_FACTORY: ("family", "products"),
    PatternCategory.BUILDER: ("build",),
    PatternCategory.OBJECT_POOL: ("acquire", "release", "max_size", "created", "available"),
    PatternCategory.PROTOTYPE: ("clone",),
    PatternCategory.OBSERVER: ("subscribe", "unsubscribe", "notify"),
    PatternCategory.COMMAND: ("set_command", "press_button"),
    PatternCategory.ITERATOR: ("has_next", "next", "__len__"),
    PatternCategory.MEDIATOR: ("register", "send"),
    PatternCategory.STATE: ("current_state", "change"),
    PatternCategory.STRATEGY: ("set_strategy", "execute"),
    PatternCategory.VISITOR: ("elements", "accept"),
    PatternCategory.ADAPTER: ("adaptee", "request"),
    PatternCategory.BRIDGE: ("implementation", "operation"),
    PatternCategory.COMPOSITE: ("add", "remove", "children", "operation"),
    PatternCategory.DECORATOR: ("base", "decorators", "evaluate"),
    PatternCategory.FACADE: ("operations", "calls"),
    PatternCategory.MODULE: ("public_members",),
    PatternCategory.PROXY: ("real_subject", "request"),
    PatternCategory.FLUX: ("register", "dispatch"),
    PatternCategory.MVC: ("model", "view", "update_view"),
    PatternCategory.REDUX: ("reducer", "initial_state", "actions", "dispatch", "get_state"),
}

# Categories whose contracts must carry at least one behavioral check.
BEHAVIORAL_GUARANTEES = frozenset(
    {
        PatternCategory.SINGLETON,
        PatternCategory.OBSERVER,
        PatternCategory.ITERATOR,
        PatternCategory.OBJECT_POOL,
    }
)


def declared_category(instance) -> Union[PatternCategory, None]:
    """Return the category tag an instance declares, if any."""
    tag = getattr(instance, "pattern_category", None)
    if tag is None:
        return None
    try:
        return PatternCategory.parse(tag)
    except UnknownCategoryError:
        return None


def missing_capabilities(category: PatternCategory, instance) -> Tuple[str, ...]:
    return tuple(op for op in CAPABILITIES[category] if not hasattr(instance, op))
