# Pattern Catalogue
# Register design-pattern implementations, verify them against behavioral
# contracts and drive them through scripted examples

from .categories import PatternCategory
from .contract import Check, CheckOutcome, Contract, build_contract, check, expect
from .errors import (
    CatalogueError,
    CatalogueErrorTaxonomy,
    ConstructionError,
    ContractDefinitionError,
    DuplicateNameError,
    ExhaustedIteratorError,
    NotFoundError,
    UnknownCategoryError,
    UnknownOperationError,
)
from .registry import PatternEntry, PatternRegistry
from .verifier import CheckResult, VerificationReport, Verifier
from .runner import ExampleRunner, ScriptRun, ScriptStep
from .contracts import default_contract
from .implementations import default_registry, register_defaults

__all__ = [
    'PatternCategory',
    'Check', 'CheckOutcome', 'Contract', 'build_contract', 'check', 'expect',
    'CatalogueError', 'CatalogueErrorTaxonomy', 'ConstructionError', 'ContractDefinitionError',
    'DuplicateNameError', 'ExhaustedIteratorError', 'NotFoundError', 'UnknownCategoryError',
    'UnknownOperationError',
    'PatternEntry', 'PatternRegistry',
    'CheckResult', 'VerificationReport', 'Verifier',
    'ExampleRunner', 'ScriptRun', 'ScriptStep',
    'default_contract', 'default_registry', 'register_defaults',
]
__version__ = '1.0.0'
