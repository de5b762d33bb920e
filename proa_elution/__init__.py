"""Protein A elution predictor - sequence-based chromatography estimates.

Predicts how an antibody elutes from a Protein A affinity column from the
ligand's amino-acid sequence and a handful of process parameters.

Example workflow:
    1. Paste the ligand sequence (one-letter code)
    2. Select ligand variant/format, target antibody and elution strategy
    3. Set concentration, column volume, flow rate, loading, temperature
       and gradient time
    4. Run the prediction
    5. Inspect metrics, warnings, KPIs and the predicted chromatogram

Quick start:
    from proa_elution import SimulationParameters, run_simulation
    params = SimulationParameters(
        ligand_format="tetrameric",
        target_molecule="human_igg1",
        elution_strategy="mild",
    )
    result = run_simulation(sequence, params)
    result.peak_info.ph

Batch runs and strategy comparison:
    from proa_elution import SimulationRunner

    runner = SimulationRunner(seed=42)
    runs = runner.compare_strategies(sequence, params)

Plotting and GUI (holoviews / panel):
    from proa_elution.plotting import plot_elution_profile
    from proa_elution.app import serve
"""

from .core import (
    # Options
    LigandVariant,
    LigandFormat,
    TargetMolecule,
    ElutionStrategy,
    # Data
    ResidueProfile,
    SimulationParameters,
    MetricsResult,
    ElutionPoint,
    PeakInfo,
    SimulationWarning,
    DerivedKPIs,
    SimulationResult,
)

from .configs import (
    MolecularConstants,
    load_molecular_constants,
    get_molecular_constants,
    clear_cache,
)

from .sequence import (
    InvalidSequenceError,
    SequenceAnalyzer,
    analyze_sequence,
    highlight_sequence,
)

from .model import (
    ElutionProfileSimulator,
    compute_metrics,
    simulate_elution_profile,
    elution_profile_to_df,
    uniform_noise,
    zero_noise,
)

from .results import (
    find_peak,
    evaluate_warnings,
    derive_kpis,
)

from .simulation import (
    run_simulation,
    SimulationJob,
    SimulationRunner,
    SimulationRunResult,
    ValidationResult,
    validate_and_report,
)

__version__ = "0.1.0"

__all__ = [
    # Options
    'LigandVariant',
    'LigandFormat',
    'TargetMolecule',
    'ElutionStrategy',
    # Data
    'ResidueProfile',
    'SimulationParameters',
    'MetricsResult',
    'ElutionPoint',
    'PeakInfo',
    'SimulationWarning',
    'DerivedKPIs',
    'SimulationResult',
    # Constants
    'MolecularConstants',
    'load_molecular_constants',
    'get_molecular_constants',
    'clear_cache',
    # Sequence
    'InvalidSequenceError',
    'SequenceAnalyzer',
    'analyze_sequence',
    'highlight_sequence',
    # Model
    'ElutionProfileSimulator',
    'compute_metrics',
    'simulate_elution_profile',
    'elution_profile_to_df',
    'uniform_noise',
    'zero_noise',
    # Results
    'find_peak',
    'evaluate_warnings',
    'derive_kpis',
    # Simulation
    'run_simulation',
    'SimulationJob',
    'SimulationRunner',
    'SimulationRunResult',
    'ValidationResult',
    'validate_and_report',
]
