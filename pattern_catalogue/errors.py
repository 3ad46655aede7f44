"""
Pattern Catalogue Error Taxonomy

Every error the catalogue surfaces to a caller is a CatalogueError with a stable
`code`. The taxonomy maps each code to:
- severity: 'high' | 'medium' | 'low'
- http_status: status used by the HTTP surface
- exit_code: process exit code used by the CLI (1 = failure, 2 = lookup/usage error)
- recovery: what the caller is expected to do about it

Faults raised inside checks or factories during verification are not part of the
taxonomy: the verifier turns them into failed-check data.
"""
from typing import Any, Optional, Sequence


class CatalogueError(Exception):
    """Base class for errors surfaced by the catalogue."""

    code = "catalogue_error"

    def to_dict(self) -> dict:
        return {"code": self.code, "message": str(self)}


class DuplicateNameError(CatalogueError):
    code = "duplicate_name"

    def __init__(self, category: Any, name: str):
        self.category = category
        self.name = name
        super().__init__(f"Entry '{name}' is already registered for category '{category}'")


class NotFoundError(CatalogueError, LookupError):
    code = "not_found"

    def __init__(self, category: Any, name: Optional[str] = None, message: Optional[str] = None):
        self.category = category
        self.name = name
        if message is None:
            if name is None:
                message = f"Nothing registered for category '{category}'"
            else:
                message = f"No entry '{name}' registered for category '{category}'"
        super().__init__(message)


class UnknownCategoryError(NotFoundError):
    code = "unknown_category"

    def __init__(self, category: Any):
        super().__init__(category, message=f"Unknown pattern category: {category!r}")


class ExhaustedIteratorError(CatalogueError):
    code = "exhausted_iterator"

    def __init__(self, produced: int):
        self.produced = produced
        super().__init__(f"Iterator exhausted after {produced} element(s)")


class UnknownOperationError(CatalogueError):
    """A script step names an operation the instance does not support."""

    code = "unknown_operation"

    def __init__(self, step_index: int, operation: str, outputs: Sequence[Any] = ()):
        self.step_index = step_index
        self.operation = operation
        # results of the steps that ran before this one
        self.outputs = tuple(outputs)
        super().__init__(f"Step {step_index}: unknown operation '{operation}'")


class ConstructionError(CatalogueError):
    code = "construction_failed"

    def __init__(self, category: Any, name: str, cause: BaseException):
        self.category = category
        self.name = name
        self.cause = cause
        super().__init__(
            f"Factory for '{category}/{name}' failed: {type(cause).__name__}: {cause}"
        )


class ContractDefinitionError(CatalogueError, ValueError):
    code = "invalid_contract"


class CatalogueErrorTaxonomy:
    """Map error codes to severity, transport status and recovery hints."""

    CATEGORIES = {
        'duplicate_name': {
            'severity': 'medium',
            'http_status': 409,
            'exit_code': 2,
            'recovery': 'Choose another name or unregister the existing entry first',
        },
        'not_found': {
            'severity': 'medium',
            'http_status': 404,
            'exit_code': 2,
            'recovery': 'Check the entry name against the registered entries of the category',
        },
        'unknown_category': {
            'severity': 'medium',
            'http_status': 404,
            'exit_code': 2,
            'recovery': 'Use one of the pattern category names (e.g. object-pool)',
        },
        'exhausted_iterator': {
            'severity': 'low',
            'http_status': 409,
            'exit_code': 1,
            'recovery': 'Guard next() with has_next(); do not retry',
        },
        'unknown_operation': {
            'severity': 'medium',
            'http_status': 400,
            'exit_code': 2,
            'recovery': 'Fix the script step; outputs of earlier steps are still returned',
        },
        'construction_failed': {
            'severity': 'high',
            'http_status': 422,
            'exit_code': 1,
            'recovery': 'Fix the entry factory or its configuration',
        },
        'operation_failed': {
            'severity': 'low',
            'http_status': 422,
            'exit_code': 1,
            'recovery': 'A script step raised; inspect the message and the partial outputs',
        },
        'invalid_script': {
            'severity': 'medium',
            'http_status': 422,
            'exit_code': 2,
            'recovery': 'Give every step an operation name: "op", ["op", *args] or {"operation": "op", "args": [...]}',
        },
        'invalid_contract': {
            'severity': 'high',
            'http_status': 400,
            'exit_code': 2,
            'recovery': 'Give the contract at least one check and the category of its entry',
        },
    }

    @classmethod
    def classify(cls, error_code: str) -> dict:
        """
        Retrieve category info for an error code.

        Args:
            error_code: One of the CATEGORIES keys

        Returns:
            Dict with severity, http_status, exit_code, recovery
        """
        if error_code in cls.CATEGORIES:
            return cls.CATEGORIES[error_code]
        return {
            'severity': 'unknown',
            'http_status': 500,
            'exit_code': 1,
            'recovery': 'See logs for details',
        }

    @classmethod
    def all_categories(cls) -> list:
        """Return list of all error codes."""
        return list(cls.CATEGORIES.keys())

    @classmethod
    def http_status(cls, error: BaseException) -> int:
        return cls.classify(getattr(error, "code", "")).get('http_status', 500)

    @classmethod
    def exit_code(cls, error: BaseException) -> int:
        return cls.classify(getattr(error, "code", "")).get('exit_code', 1)
