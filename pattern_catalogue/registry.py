"""Pattern Registry - named pattern implementations keyed by category and name.

Entries are created at registration time, never mutated, and removed only by
explicit unregistration. Every read and write goes through one re-entrant lock, so
a register/unregister read-modify-write never interleaves with a lookup when the
registry is shared by a threaded host.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from .categories import PatternCategory
from .contract import Contract
from .errors import ContractDefinitionError, DuplicateNameError, NotFoundError

logger = logging.getLogger(__name__)

CategoryLike = Union[PatternCategory, str]


@dataclass(frozen=True)
class PatternEntry:
    category: PatternCategory
    name: str
    factory: Callable[..., Any]
    contract: Contract
    config: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    description: str = ""

    def instantiate(self) -> Any:
        """Build an instance: factory(**config), or factory() when unconfigured."""
        if self.config:
            return self.factory(**dict(self.config))
        return self.factory()


class EntryNames:
    """Live view of the entry names of one category, in registration order.

    Each iteration reads the registry's current state.
    """

    def __init__(self, registry: "PatternRegistry", category: PatternCategory):
        self._registry = registry
        self.category = category

    def __iter__(self) -> Iterator[str]:
        return iter(self._registry._names(self.category))

    def __len__(self) -> int:
        return len(self._registry._names(self.category))

    def __contains__(self, name: object) -> bool:
        return name in self._registry._names(self.category)

    def __repr__(self) -> str:
        return f"EntryNames({self.category.value!r}, {list(self)!r})"


class PatternRegistry:
    """
    Registry of pattern implementations.

    Registration takes a factory and, optionally, a contract; without one the
    category's default contract is used.
    """

    def __init__(self):
        self._entries: Dict[PatternCategory, Dict[str, PatternEntry]] = {}
        self._lock = threading.RLock()

    def register(
        self,
        category: CategoryLike,
        name: str,
        factory: Callable[..., Any],
        contract: Optional[Contract] = None,
        *,
        config: Optional[Mapping[str, Any]] = None,
        description: str = "",
    ) -> None:
        """
        Register a pattern implementation.

        Args:
            category: Pattern category (member or parseable name)
            name: Entry name, unique within the category
            factory: Callable building an instance; called with **config when given
            contract: Contract to verify the entry against (default: category default)
            config: Keyword arguments for the factory
            description: Free-text description

        Raises:
            DuplicateNameError: If (category, name) is already registered
            ContractDefinitionError: If the contract belongs to another category
        """
        category = PatternCategory.parse(category)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Entry name must be a non-empty string")
        if not callable(factory):
            raise TypeError(f"Factory for '{category}/{name}' is not callable")

        if contract is None:
            from .contracts import default_contract

            contract = default_contract(category)
        elif contract.category is not category:
            raise ContractDefinitionError(
                f"Contract for '{contract.category}' cannot verify a '{category}' entry"
            )

        entry = PatternEntry(
            category=category,
            name=name,
            factory=factory,
            contract=contract,
            config=MappingProxyType(dict(config or {})),
            description=description,
        )

        with self._lock:
            bucket = self._entries.setdefault(category, {})
            if name in bucket:
                raise DuplicateNameError(category, name)
            bucket[name] = entry
        logger.debug("Registered pattern entry: %s/%s", category, name)

    def unregister(self, category: CategoryLike, name: str) -> None:
        """Remove an entry; absent entries are ignored."""
        category = PatternCategory.parse(category)
        with self._lock:
            bucket = self._entries.get(category)
            if not bucket or name not in bucket:
                return
            del bucket[name]
            if not bucket:
                del self._entries[category]
        logger.debug("Unregistered pattern entry: %s/%s", category, name)

    def get(self, category: CategoryLike, name: str) -> PatternEntry:
        category = PatternCategory.parse(category)
        with self._lock:
            entry = self._entries.get(category, {}).get(name)
        if entry is None:
            raise NotFoundError(category, name)
        return entry

    def list(self, category: CategoryLike) -> EntryNames:
        """Entry names of a category in registration order (live view)."""
        return EntryNames(self, PatternCategory.parse(category))

    def entries(self, category: CategoryLike) -> List[PatternEntry]:
        category = PatternCategory.parse(category)
        with self._lock:
            return list(self._entries.get(category, {}).values())

    def categories(self) -> List[PatternCategory]:
        """Categories currently holding entries, in declaration order."""
        with self._lock:
            return [c for c in PatternCategory if self._entries.get(c)]

    def _names(self, category: PatternCategory) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._entries.get(category, {}))

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        category, name = key
        try:
            self.get(category, name)
        except NotFoundError:
            return False
        return True

    def __len__(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._entries.values())
