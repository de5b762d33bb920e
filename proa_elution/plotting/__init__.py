"""Plotting functions for Protein A elution results.

All functions return HoloViews objects for notebooks and Panel apps.

Example - Single chromatogram:
    >>> from proa_elution.plotting import plot_elution_profile
    >>> plot = plot_elution_profile(result)
    >>> plot  # Display in notebook

Example - Strategy comparison:
    >>> from proa_elution.plotting import plot_strategy_overlay
    >>> runs = runner.compare_strategies(sequence, parameters)
    >>> plot = plot_strategy_overlay(
    ...     [(s.value, r.result) for s, r in runs.items() if r.success]
    ... )
"""

from .chromatogram import (
    time_to_cv,
    plot_elution_profile,
    plot_strategy_overlay,
)

__all__ = [
    "time_to_cv",
    "plot_elution_profile",
    "plot_strategy_overlay",
]
