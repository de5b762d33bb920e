"""Chromatogram plotting functions.

Provides reusable plotting functions that work in both Jupyter notebooks
and Panel applications. All functions return HoloViews/hvplot objects.

Two levels of usage:

1. From a simulation result:
   >>> plot = plot_elution_profile(result)

2. Overlay the elution traces of several runs (e.g. strategy comparison):
   >>> plot = plot_strategy_overlay([("mild", result_1), ("traditional", result_2)])
"""

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import holoviews as hv

from ..model.elution import elution_profile_to_df

hv.extension("bokeh")

if TYPE_CHECKING:
    from ..core.dataclasses import PeakInfo, SimulationResult


TOOLS = ["hover", "pan", "wheel_zoom", "box_zoom", "reset", "save"]


# =============================================================================
# Helper Functions for Unit Conversion
# =============================================================================

def time_to_cv(
    time_minutes: np.ndarray,
    flow_rate_mL_min: float,
    column_volume_mL: float,
) -> np.ndarray:
    """Convert time array from minutes to column volumes.

    Parameters
    ----------
    time_minutes : np.ndarray
        Time array in minutes
    flow_rate_mL_min : float
        Flow rate in mL/min
    column_volume_mL : float
        Column volume in mL

    Returns
    -------
    np.ndarray
        Time array in column volumes (CV)
    """
    if column_volume_mL <= 0:
        raise ValueError(f"column_volume_mL must be positive, got {column_volume_mL}")
    # time (min) → volume (mL) → CV
    return np.asarray(time_minutes, dtype=float) * flow_rate_mL_min / column_volume_mL


def _profile_df(source: "SimulationResult | pd.DataFrame") -> pd.DataFrame:
    """Get an elution DataFrame from a result or a cached DataFrame."""
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = elution_profile_to_df(source.elution_profile)

    missing = {"time", "ph", "intensity", "binding_strength"} - set(df.columns)
    if missing:
        raise ValueError(f"Elution DataFrame is missing columns: {sorted(missing)}")
    return df


def _convert_x_axis(
    df: pd.DataFrame,
    x_axis: str,
    flow_rate_mL_min: float | None,
    column_volume_mL: float | None,
) -> str:
    """Convert the time column in place and return the x label."""
    if x_axis == "cv":
        if flow_rate_mL_min is None or column_volume_mL is None:
            raise ValueError(
                "flow_rate_mL_min and column_volume_mL are required when x_axis='cv'"
            )
        df["time"] = time_to_cv(df["time"].values, flow_rate_mL_min, column_volume_mL)
        return "Column Volumes (CV)"
    return "Time (minutes)"


# =============================================================================
# Elution Profile Plotting
# =============================================================================

def plot_elution_profile(
    source: "SimulationResult | pd.DataFrame",
    peak: "PeakInfo | None" = None,
    title: str | None = None,
    x_axis: str = "minutes",
    flow_rate_mL_min: float | None = None,
    column_volume_mL: float | None = None,
    show_binding: bool = True,
    width: int = 800,
    height: int = 400,
) -> hv.Overlay:
    """Plot the predicted chromatogram with pH gradient and binding strength.

    Elution intensity and binding strength (scaled to the maximum intensity)
    share the left axis; pH is drawn on a second y-axis.

    Parameters
    ----------
    source : SimulationResult or pd.DataFrame
        Result of a run, or a DataFrame from elution_profile_to_df()
    peak : PeakInfo, optional
        Peak to mark. Taken from the result if source is a SimulationResult.
    title : str, optional
        Plot title. Defaults to "Predicted Chromatogram - Peak at pH ..."
    x_axis : str, default="minutes"
        X-axis unit: "minutes" or "cv" (column volumes)
    flow_rate_mL_min : float, optional
        Flow rate in mL/min. Taken from the result parameters if omitted.
    column_volume_mL : float, optional
        Column volume in mL. Taken from the result parameters if omitted.
    show_binding : bool, default=True
        Whether to draw the binding strength curve
    width : int, default=800
        Plot width in pixels
    height : int, default=400
        Plot height in pixels

    Returns
    -------
    hv.Overlay
        HoloViews plot object

    Example
    -------
    >>> result = run_simulation(sequence, parameters)
    >>> plot_elution_profile(result, x_axis="cv")
    """
    df = _profile_df(source)

    if not isinstance(source, pd.DataFrame):
        peak = peak or source.peak_info
        flow_rate_mL_min = flow_rate_mL_min or source.parameters.flow_rate
        column_volume_mL = column_volume_mL or source.parameters.column_volume

    peak_time = peak.time if peak is not None else None
    xlabel = _convert_x_axis(df, x_axis, flow_rate_mL_min, column_volume_mL)
    if peak_time is not None and x_axis == "cv":
        peak_time = float(time_to_cv(peak_time, flow_rate_mL_min, column_volume_mL))

    if title is None:
        if peak is not None:
            title = f"Predicted Chromatogram - Peak at pH {peak.ph} ({peak.time} min)"
        else:
            title = "Predicted Chromatogram"

    max_intensity = float(df["intensity"].max()) if len(df) else 0.0
    signal = hv.Dimension("signal", label="Absorbance (mAU) / Binding Strength")
    time_dim = hv.Dimension("time", label=xlabel)

    elution_curve = hv.Curve(
        df[["time", "intensity"]].rename(columns={"intensity": "signal"}),
        kdims=[time_dim],
        vdims=[signal],
        label="Antibody Elution (A280 nm)",
    ).opts(line_width=3)

    plots = [elution_curve]

    if show_binding:
        scaled = df.assign(signal=df["binding_strength"] * max_intensity)
        binding_curve = hv.Curve(
            scaled[["time", "signal"]],
            kdims=[time_dim],
            vdims=[signal],
            label="Binding Strength",
        ).opts(line_dash="dotted", line_width=2)
        plots.append(binding_curve)

    ph_curve = hv.Curve(
        df[["time", "ph"]],
        kdims=[time_dim],
        vdims=[hv.Dimension("ph", label="pH")],
        label="pH Gradient",
    ).opts(line_dash="dashed", line_width=2, yaxis="right")
    plots.append(ph_curve)

    if peak_time is not None and peak is not None and peak.intensity > 0:
        peak_marker = hv.Scatter(
            [(peak_time, peak.intensity)],
            kdims=[time_dim],
            vdims=[signal],
            label="Peak",
        ).opts(size=10, marker="triangle")
        plots.append(peak_marker)

    overlay = hv.Overlay(plots).opts(
        title=title,
        width=width,
        height=height,
        multi_y=True,
        legend_position="top",
        show_legend=True,
        tools=TOOLS,
        active_tools=["wheel_zoom"],
    )

    return overlay


def plot_strategy_overlay(
    results: list[tuple[str, "SimulationResult"]],
    title: str = "Elution Profile Overlay",
    x_axis: str = "minutes",
    normalized: bool = False,
    width: int = 900,
    height: int = 450,
) -> hv.Overlay:
    """Overlay the elution intensity of several runs.

    Parameters
    ----------
    results : list of (label, SimulationResult)
        Runs to overlay
    title : str, default="Elution Profile Overlay"
        Plot title
    x_axis : str, default="minutes"
        X-axis unit: "minutes" or "cv"; CV conversion uses each run's
        flow rate and column volume
    normalized : bool, default=False
        If True, normalize each trace to its maximum
    width : int, default=900
        Plot width
    height : int, default=450
        Plot height

    Returns
    -------
    hv.Overlay
        HoloViews plot object
    """
    import hvplot.pandas  # noqa: F401

    if not results:
        raise ValueError("No results provided")

    plots = []
    xlabel = "Time (minutes)"
    for label, result in results:
        df = elution_profile_to_df(result.elution_profile)
        xlabel = _convert_x_axis(
            df, x_axis, result.parameters.flow_rate, result.parameters.column_volume
        )

        if normalized:
            max_val = df["intensity"].max()
            if max_val > 0:
                df["intensity"] = df["intensity"] / max_val

        plots.append(df.hvplot.line(x="time", y="intensity", label=label))

    overlay = plots[0]
    for p in plots[1:]:
        overlay = overlay * p

    ylabel = "Normalized Absorbance (-)" if normalized else "Absorbance (mAU)"

    overlay = overlay.opts(
        xlabel=xlabel,
        ylabel=ylabel,
        title=title,
        width=width,
        height=height,
        legend_position="right",
        tools=TOOLS,
        active_tools=["wheel_zoom"],
    )

    return overlay
