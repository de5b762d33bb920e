"""Molecular constants table loaded from JSON.

Example:
    >>> from proa_elution.configs import get_molecular_constants
    >>> constants = get_molecular_constants()
    >>> constants.ligand("engineered_mild").binding_site_pka
    6.0
    >>> constants.gradient("mild").steps
    120
"""

from .loader import (
    CONSTANTS_PATH_ENV,
    LigandConstants,
    TargetConstants,
    BindingConstants,
    GradientProgram,
    MolecularConstants,
    load_molecular_constants,
    get_molecular_constants,
    clear_cache,
)

__all__ = [
    "CONSTANTS_PATH_ENV",
    "LigandConstants",
    "TargetConstants",
    "BindingConstants",
    "GradientProgram",
    "MolecularConstants",
    "load_molecular_constants",
    "get_molecular_constants",
    "clear_cache",
]
