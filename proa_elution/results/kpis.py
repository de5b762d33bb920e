"""Process KPIs derived from the metrics."""

from ..core.dataclasses import DerivedKPIs, MetricsResult, SimulationParameters

RECOVERY_YIELD_RANGE = (70.0, 98.0)  # %
PURITY_RANGE = (85.0, 99.5)  # %


def calculate_recovery_yield(metrics: MetricsResult) -> float:
    """Recovery yield in %; aggregation losses reduce it."""
    return min(RECOVERY_YIELD_RANGE[1], max(RECOVERY_YIELD_RANGE[0], 90 - metrics.aggregation_risk * 0.5))


def calculate_purity(metrics: MetricsResult) -> float:
    """Product purity in %; leached ligand reduces it."""
    return min(PURITY_RANGE[1], max(PURITY_RANGE[0], 95 - metrics.ligand_leakage * 2))


def calculate_productivity(recovery_yield: float, parameters: SimulationParameters) -> float:
    """Productivity in mg/h over the gradient time."""
    return (
        parameters.target_concentration
        * parameters.column_volume
        * recovery_yield
        / 100
        / (parameters.gradient_time / 60)
    )


def derive_kpis(metrics: MetricsResult, parameters: SimulationParameters) -> DerivedKPIs:
    """Compute recovery yield, purity and productivity."""
    recovery_yield = calculate_recovery_yield(metrics)
    return DerivedKPIs(
        recovery_yield=recovery_yield,
        purity=calculate_purity(metrics),
        productivity=calculate_productivity(recovery_yield, parameters),
    )
