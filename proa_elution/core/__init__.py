"""Core dataclasses and enumerations for the Protein A elution model.

Provides the fundamental data structures used throughout the package:
- LigandVariant, LigandFormat, TargetMolecule, ElutionStrategy: option tags
- ResidueProfile: residue counts of the expanded sequence
- SimulationParameters: process parameters for one run
- MetricsResult, ElutionPoint, PeakInfo, SimulationWarning, DerivedKPIs
- SimulationResult: complete output of one run

Example:
    >>> from proa_elution.core import SimulationParameters
    >>>
    >>> params = SimulationParameters(
    ...     ligand_variant="engineered_mild",
    ...     ligand_format="tetrameric",
    ...     target_molecule="human_igg4",
    ...     elution_strategy="mild",
    ...     gradient_time=45.0,
    ... )
"""

from .enums import (
    LigandVariant,
    LigandFormat,
    TargetMolecule,
    ElutionStrategy,
)

from .dataclasses import (
    TRACKED_RESIDUES,
    ResidueProfile,
    SimulationParameters,
    MetricsResult,
    ElutionPoint,
    PeakInfo,
    SimulationWarning,
    DerivedKPIs,
    SimulationResult,
)

__all__ = [
    "LigandVariant",
    "LigandFormat",
    "TargetMolecule",
    "ElutionStrategy",
    "TRACKED_RESIDUES",
    "ResidueProfile",
    "SimulationParameters",
    "MetricsResult",
    "ElutionPoint",
    "PeakInfo",
    "SimulationWarning",
    "DerivedKPIs",
    "SimulationResult",
]
