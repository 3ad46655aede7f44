"""Recording stand-ins handed to pattern instances by the default checks.

A Probe answers any public method call, records it, and returns its own token.
Probes that share a log record the global order of calls across probes.
"""
from typing import Any, List, Optional, Tuple


class Probe:
    """Duck-typed collaborator: observer, command, colleague, leaf, view, strategy..."""

    def __init__(self, label: Any, log: Optional[List[Tuple[Any, str, tuple]]] = None):
        self.label = label
        self.name = str(label)
        self.token = f"probe:{label}"
        self.calls: List[Tuple[str, tuple]] = []
        self._log = log

    def __getattr__(self, method: str):
        # only reached for attributes not set on the instance
        if method.startswith("_"):
            raise AttributeError(method)

        def record(*args, **kwargs):
            self.calls.append((method, args))
            if self._log is not None:
                self._log.append((self.label, method, args))
            return self.token

        return record

    def count(self, method: Optional[str] = None) -> int:
        if method is None:
            return len(self.calls)
        return sum(1 for name, _ in self.calls if name == method)

    def __repr__(self) -> str:
        return f"Probe({self.label!r})"


def probes(count: int, log: Optional[list] = None) -> List[Probe]:
    return [Probe(i, log) for i in range(count)]
