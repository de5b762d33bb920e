"""Post-processing of a simulated elution profile.

- find_peak: maximum-intensity point and FWHM
- evaluate_warnings: advisory threshold checks
- derive_kpis: recovery yield, purity and productivity

Example:
    >>> from proa_elution.results import find_peak, evaluate_warnings, derive_kpis
    >>> peak = find_peak(points)
    >>> warnings = evaluate_warnings(metrics, peak, parameters)
    >>> kpis = derive_kpis(metrics, parameters)
"""

from .peak import find_peak

from .advisories import (
    AGGREGATION_RISK_LIMIT,
    HARSH_ELUTION_PH,
    LIGAND_LEAKAGE_LIMIT,
    BINDING_CAPACITY_MINIMUM,
    TEMPERATURE_LIMIT,
    evaluate_warnings,
)

from .kpis import (
    calculate_recovery_yield,
    calculate_purity,
    calculate_productivity,
    derive_kpis,
)

__all__ = [
    "find_peak",
    "AGGREGATION_RISK_LIMIT",
    "HARSH_ELUTION_PH",
    "LIGAND_LEAKAGE_LIMIT",
    "BINDING_CAPACITY_MINIMUM",
    "TEMPERATURE_LIMIT",
    "evaluate_warnings",
    "calculate_recovery_yield",
    "calculate_purity",
    "calculate_productivity",
    "derive_kpis",
]
