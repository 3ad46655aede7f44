"""Default contract for every pattern category."""
from typing import Dict, Union

from ..categories import PatternCategory
from ..contract import Contract
from . import architectural, behavioral, creational, structural

CONTRACTS: Dict[PatternCategory, Contract] = {
    **creational.CONTRACTS,
    **behavioral.CONTRACTS,
    **structural.CONTRACTS,
    **architectural.CONTRACTS,
}


def default_contract(category: Union[PatternCategory, str]) -> Contract:
    return CONTRACTS[PatternCategory.parse(category)]


__all__ = ["CONTRACTS", "default_contract"]
