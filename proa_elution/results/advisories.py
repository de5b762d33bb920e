"""Advisory warnings for out-of-range predictions.

Each rule is an independent threshold check; several can fire at once and
none suppresses another. Warnings never block a simulation.
"""

from ..core.dataclasses import MetricsResult, PeakInfo, SimulationParameters, SimulationWarning

AGGREGATION_RISK_LIMIT = 25.0  # %
HARSH_ELUTION_PH = 3.2
LIGAND_LEAKAGE_LIMIT = 8.0  # µg/mL
BINDING_CAPACITY_MINIMUM = 60.0  # mg/mL
TEMPERATURE_LIMIT = 30.0  # °C


def _fmt(value: float) -> str:
    return f"{value:g}"


def evaluate_warnings(
    metrics: MetricsResult,
    peak: PeakInfo,
    parameters: SimulationParameters,
) -> list[SimulationWarning]:
    """Apply the threshold rules in fixed order.

    Parameters
    ----------
    metrics : MetricsResult
        Metrics of the run
    peak : PeakInfo
        Detected elution peak
    parameters : SimulationParameters
        Process parameters of the run

    Returns
    -------
    list[SimulationWarning]
        Zero or more warnings, ordered aggregation, elution pH, leakage,
        capacity, temperature
    """
    warnings = []

    if metrics.aggregation_risk > AGGREGATION_RISK_LIMIT:
        warnings.append(SimulationWarning(
            title="High Aggregation Risk",
            message=(
                f"Aggregation risk is {_fmt(metrics.aggregation_risk)}%. Consider using "
                "milder elution conditions or adding stabilizers."
            ),
        ))

    if peak.ph < HARSH_ELUTION_PH:
        warnings.append(SimulationWarning(
            title="Harsh Elution Conditions",
            message=(
                f"Elution pH of {_fmt(peak.ph)} may cause protein degradation. "
                "Consider engineered ligands for milder conditions."
            ),
        ))

    if metrics.ligand_leakage > LIGAND_LEAKAGE_LIMIT:
        warnings.append(SimulationWarning(
            title="High Ligand Leakage",
            message=(
                f"Predicted ligand leakage of {_fmt(metrics.ligand_leakage)} μg/mL exceeds "
                "recommended levels. Check ligand stability."
            ),
        ))

    if metrics.dynamic_binding_capacity < BINDING_CAPACITY_MINIMUM:
        warnings.append(SimulationWarning(
            title="Low Binding Capacity",
            message=(
                f"Binding capacity of {_fmt(metrics.dynamic_binding_capacity)} mg/mL is below "
                "typical ranges. Optimize ligand density."
            ),
        ))

    if parameters.temperature > TEMPERATURE_LIMIT:
        warnings.append(SimulationWarning(
            title="Elevated Temperature",
            message=(
                f"Operating temperature of {_fmt(parameters.temperature)}°C may reduce "
                "stability and increase aggregation."
            ),
        ))

    return warnings
