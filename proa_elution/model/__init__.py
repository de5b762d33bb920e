"""Quantitative model: biophysical metrics and elution profile simulation.

Example:
    >>> from proa_elution.sequence import analyze_sequence
    >>> from proa_elution.model import compute_metrics, simulate_elution_profile, zero_noise
    >>>
    >>> profile = analyze_sequence(sequence, "dimeric")
    >>> metrics = compute_metrics(profile, "wild_type", "human_igg1", temperature=25.0)
    >>> points = simulate_elution_profile(profile, parameters, noise=zero_noise)
"""

from .metrics import (
    REFERENCE_TEMPERATURE,
    calculate_alkaline_stability,
    calculate_binding_capacity,
    calculate_aggregation_risk,
    calculate_ligand_leakage,
    calculate_binding_affinity,
    calculate_elution_sharpness,
    compute_metrics,
)

from .elution import (
    NoiseSource,
    ElutionProfileSimulator,
    calculate_optimal_elution_ph,
    calculate_max_intensity,
    protonation_fraction,
    simulate_elution_profile,
    elution_profile_to_df,
    uniform_noise,
    zero_noise,
)

__all__ = [
    "REFERENCE_TEMPERATURE",
    "calculate_alkaline_stability",
    "calculate_binding_capacity",
    "calculate_aggregation_risk",
    "calculate_ligand_leakage",
    "calculate_binding_affinity",
    "calculate_elution_sharpness",
    "compute_metrics",
    "NoiseSource",
    "ElutionProfileSimulator",
    "calculate_optimal_elution_ph",
    "calculate_max_intensity",
    "protonation_fraction",
    "simulate_elution_profile",
    "elution_profile_to_df",
    "uniform_noise",
    "zero_noise",
]
