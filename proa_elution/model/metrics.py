"""Biophysical metrics derived from residue composition.

All metrics are weighted sums of residue counts with temperature corrections,
clamped to physically plausible ranges instead of raising for extreme inputs.
"""

import math

from ..configs import MolecularConstants, get_molecular_constants
from ..core.dataclasses import MetricsResult, ResidueProfile
from ..core.enums import LigandVariant, TargetMolecule

REFERENCE_TEMPERATURE = 25.0  # °C

STABILITY_BASE = 65.0
STABILITY_RANGE = (20.0, 98.0)
BINDING_CAPACITY_BASE = 75.0
BINDING_CAPACITY_MAX = 180.0
AGGREGATION_RANGE = (2.0, 45.0)
LEAKAGE_RANGE = (0.5, 15.0)
AFFINITY_RANGE = (1e6, 9.9e8)
BASE_SIGMA = 0.3  # pH units
MAX_EXPONENT = 50.0


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def calculate_alkaline_stability(profile: ResidueProfile, temperature: float) -> float:
    """Alkaline stability in % (unrounded, clamped to [20, 98]).

    Histidine protonation, aromatic packing and disulfides (at most four)
    stabilize; amides destabilize through deamidation; net positive charge
    stabilizes. Each °C above 25 costs 0.8 %.
    """
    stability_factors = {
        "histidine": profile.histidine * 3.5,
        "aromatic": profile.aromatic * 2.1,
        "disulfide": min(profile.cysteine / 2, 4) * 8.0,
        "amide": profile.amide * -1.2,
        "charge": profile.net_charge * 0.8,
    }
    base_stability = STABILITY_BASE + sum(stability_factors.values())
    return _clamp(
        base_stability + (temperature - REFERENCE_TEMPERATURE) * -0.8,
        *STABILITY_RANGE,
    )


def calculate_binding_capacity(
    profile: ResidueProfile,
    ligand_variant: LigandVariant | str,
) -> float:
    """Dynamic binding capacity in mg/mL.

    Only the upper bound of 180 is enforced; the sum of the non-negative
    factors cannot fall below the base anyway.
    """
    variant = LigandVariant.parse(ligand_variant)
    binding_factors = {
        "base": BINDING_CAPACITY_BASE,
        "histidine_binding": profile.histidine * 4.5,
        "aromatic_interactions": profile.aromatic * 3.2,
        "domain_multiplier": profile.domain_count * 15,
        "ligand_type_bonus": variant.binding_capacity_bonus,
    }
    return min(BINDING_CAPACITY_MAX, sum(binding_factors.values()))


def calculate_aggregation_risk(
    aggregation_tendency: float,
    alkaline_stability: float,
    temperature: float,
) -> float:
    """Aggregation risk in %, clamped to [2, 45]."""
    risk = (
        aggregation_tendency * 30
        + max(0.0, temperature - REFERENCE_TEMPERATURE) * 1.2
        + max(0.0, 70 - alkaline_stability) * 0.3
    )
    return _clamp(risk, *AGGREGATION_RANGE)


def calculate_ligand_leakage(
    profile: ResidueProfile,
    alkaline_stability: float,
    temperature: float,
) -> float:
    """Ligand leakage in µg/mL, clamped to [0.5, 15]."""
    leakage = (
        8
        - alkaline_stability / 12
        + profile.asparagine * 0.4
        + max(0.0, temperature - 30) * 0.3
    )
    return _clamp(leakage, *LEAKAGE_RANGE)


def calculate_binding_affinity(
    profile: ResidueProfile,
    target_molecule: TargetMolecule | str,
    temperature: float,
    constants: MolecularConstants | None = None,
) -> float:
    """Effective binding affinity in 1/M, clamped to [1e6, 9.9e8]."""
    constants = constants or get_molecular_constants()
    target = constants.target(target_molecule)
    binding = constants.binding

    histidine_contribution = profile.histidine * 1.5
    aromatic_contribution = profile.aromatic * 1.2
    # Exponent capped to stay finite; the cap already saturates the upper clamp
    exponent = -binding.temperature_factor * (temperature - REFERENCE_TEMPERATURE)
    temperature_factor = math.exp(min(exponent, MAX_EXPONENT))

    effective_affinity = (
        binding.base_affinity
        * (1 + histidine_contribution / 100)
        * (1 + aromatic_contribution / 100)
        * temperature_factor
        * target.stability
    )
    return _clamp(effective_affinity, *AFFINITY_RANGE)


def calculate_elution_sharpness(
    profile: ResidueProfile,
    ligand_variant: LigandVariant | str,
) -> float:
    """Sigma of the elution peak in pH units, rounded to 2 decimals.

    Zero histidines give a sigma of 0.
    """
    histidine_factor = min(2.0, profile.histidine * 0.1)
    ligand_factor = 0.8 if LigandVariant.parse(ligand_variant) is LigandVariant.ENGINEERED_MILD else 1.0
    return round(BASE_SIGMA * histidine_factor * ligand_factor, 2)


def compute_metrics(
    profile: ResidueProfile,
    ligand_variant: LigandVariant | str,
    target_molecule: TargetMolecule | str,
    temperature: float,
    constants: MolecularConstants | None = None,
) -> MetricsResult:
    """Derive all biophysical metrics for a residue profile.

    Parameters
    ----------
    profile : ResidueProfile
        Residue counts of the expanded sequence
    ligand_variant : LigandVariant or str
        Protein A variant (unknown tags fall back to wild type)
    target_molecule : TargetMolecule or str
        Antibody format
    temperature : float
        Operating temperature in °C
    constants : MolecularConstants, optional
        Constants table; defaults to the bundled table

    Returns
    -------
    MetricsResult
        Stability, capacity and aggregation rounded to 1 decimal, leakage
        to 2 decimals; affinity is not rounded

    Raises
    ------
    ValueError
        If the target molecule is unknown
    """
    constants = constants or get_molecular_constants()
    target = constants.target(target_molecule)

    alkaline_stability = calculate_alkaline_stability(profile, temperature)
    dynamic_binding_capacity = calculate_binding_capacity(profile, ligand_variant)
    aggregation_risk = calculate_aggregation_risk(
        target.aggregation_tendency, alkaline_stability, temperature
    )
    ligand_leakage = calculate_ligand_leakage(profile, alkaline_stability, temperature)

    return MetricsResult(
        alkaline_stability=round(alkaline_stability, 1),
        dynamic_binding_capacity=round(dynamic_binding_capacity, 1),
        aggregation_risk=round(aggregation_risk, 1),
        ligand_leakage=round(ligand_leakage, 2),
        binding_affinity=calculate_binding_affinity(
            profile, target_molecule, temperature, constants
        ),
        elution_sharpness=calculate_elution_sharpness(profile, ligand_variant),
    )
