"""Simulation pipeline and runner.

run_simulation() is the single atomic call of the model:

    sequence -> ResidueProfile -> MetricsResult + ElutionProfile
             -> PeakInfo -> warnings + KPIs

SimulationRunner wraps it for callers that want validation reports,
failure results instead of exceptions, and batches of runs.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable
import logging
import time

from ..configs import MolecularConstants, get_molecular_constants
from ..core.dataclasses import SimulationParameters, SimulationResult
from ..core.enums import ElutionStrategy, LigandFormat, LigandVariant
from ..model import ElutionProfileSimulator, NoiseSource, compute_metrics, uniform_noise
from ..results import derive_kpis, evaluate_warnings, find_peak
from ..sequence import analyze_sequence, normalize_sequence

logger = logging.getLogger(__name__)

STANDARD_RESIDUES = frozenset("ACDEFGHIKLMNPQRSTVWY")


def run_simulation(
    sequence: str,
    parameters: SimulationParameters,
    constants: MolecularConstants | None = None,
    noise: NoiseSource | None = None,
) -> SimulationResult:
    """Run the full prediction pipeline for one sequence.

    Parameters
    ----------
    sequence : str
        Ligand sequence in one-letter code
    parameters : SimulationParameters
        Process parameters
    constants : MolecularConstants, optional
        Constants table; defaults to the bundled table
    noise : NoiseSource, optional
        Intensity noise; defaults to uniform [-1, 1)

    Returns
    -------
    SimulationResult
        Complete result owned by the caller

    Raises
    ------
    InvalidSequenceError
        If the sequence is shorter than 10 residues; nothing else is computed
    """
    constants = constants or get_molecular_constants()

    residue_profile = analyze_sequence(sequence, parameters.ligand_format)
    metrics = compute_metrics(
        residue_profile,
        parameters.ligand_variant,
        parameters.target_molecule,
        parameters.temperature,
        constants,
    )
    simulator = ElutionProfileSimulator(constants=constants, noise=noise)
    elution_profile = simulator.simulate(residue_profile, parameters)
    peak_info = find_peak(elution_profile)

    return SimulationResult(
        sequence=normalize_sequence(sequence),
        parameters=parameters,
        residue_profile=residue_profile,
        metrics=metrics,
        elution_profile=elution_profile,
        peak_info=peak_info,
        warnings=evaluate_warnings(metrics, peak_info, parameters),
        kpis=derive_kpis(metrics, parameters),
    )


@dataclass
class SimulationJob:
    """One entry of a batch run."""
    name: str
    sequence: str
    parameters: SimulationParameters | dict[str, Any]


@dataclass
class SimulationRunResult:
    """Result of a single run, successful or not."""
    name: str
    success: bool
    result: SimulationResult | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    runtime_seconds: float = 0.0


@dataclass
class ValidationResult:
    """Result of validating a sequence and parameter set."""
    name: str
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _as_parameters(parameters: SimulationParameters | dict[str, Any]) -> SimulationParameters:
    if isinstance(parameters, SimulationParameters):
        return parameters
    return SimulationParameters.from_dict(parameters)


class SimulationRunner:
    """Runs Protein A elution simulations.

    Example:
        >>> runner = SimulationRunner(seed=42)
        >>> validation = runner.validate(sequence, {"target_molecule": "human_igg1"})
        >>> if validation.valid:
        ...     run = runner.run(sequence, {"target_molecule": "human_igg1"})
        ...     run.result.peak_info.ph
    """

    def __init__(
        self,
        constants: MolecularConstants | None = None,
        noise: NoiseSource | None = None,
        seed: int | None = None,
    ):
        """Initialize runner.

        Parameters
        ----------
        constants : MolecularConstants, optional
            Constants table shared by all runs
        noise : NoiseSource, optional
            Intensity noise shared by all runs. If None, every run draws
            uniform [-1, 1) noise from a fresh generator seeded with `seed`.
        seed : int, optional
            Seed for the default noise source
        """
        self.constants = constants or get_molecular_constants()
        self.noise = noise
        self.seed = seed

    def _noise_source(self) -> NoiseSource:
        """Noise for one run; seeded runs never share generator state."""
        if self.noise is not None:
            return self.noise
        return uniform_noise(self.seed)

    def validate(
        self,
        sequence: str,
        parameters: SimulationParameters | dict[str, Any],
        name: str = "unnamed",
    ) -> ValidationResult:
        """Validate a sequence and parameter set without simulating.

        Parameters
        ----------
        sequence : str
            Ligand sequence
        parameters : SimulationParameters or dict
            Process parameters; dict values are enum tags and numbers
        name : str
            Name of the run (for messages)

        Returns
        -------
        ValidationResult
            Validation result with errors/warnings
        """
        errors = []
        warnings = []

        try:
            analyze_sequence(sequence)
        except ValueError as e:
            errors.append(f"Sequence error: {e}")

        unknown = sorted(set(normalize_sequence(sequence)) - STANDARD_RESIDUES)
        if unknown:
            warnings.append(f"Non-standard residue letters ignored by the model: {', '.join(unknown)}")

        if isinstance(parameters, dict):
            variant = parameters.get("ligand_variant")
            if variant is not None and not isinstance(variant, LigandVariant) \
                    and variant not in {v.value for v in LigandVariant}:
                warnings.append(f"Unknown ligand variant '{variant}', wild_type constants are used")
            ligand_format = parameters.get("ligand_format")
            if ligand_format is not None and not isinstance(ligand_format, LigandFormat) \
                    and ligand_format not in {f.value for f in LigandFormat}:
                warnings.append(f"Unknown ligand format '{ligand_format}', treated as monomeric")

        try:
            params = _as_parameters(parameters)
            self.constants.target(params.target_molecule)
            self.constants.gradient(params.elution_strategy)
        except ValueError as e:
            errors.append(f"Parameter error: {e}")

        return ValidationResult(
            name=name,
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    def run(
        self,
        sequence: str,
        parameters: SimulationParameters | dict[str, Any],
        name: str = "unnamed",
    ) -> SimulationRunResult:
        """Run a simulation.

        Invalid input is reported in the returned errors instead of raised.

        Parameters
        ----------
        sequence : str
            Ligand sequence
        parameters : SimulationParameters or dict
            Process parameters
        name : str
            Name of the run

        Returns
        -------
        SimulationRunResult
            Run result with the SimulationResult on success
        """
        logger.info(f"Starting simulation: {name}")
        start_time = time.time()

        try:
            params = _as_parameters(parameters)
            result = run_simulation(
                sequence, params, constants=self.constants, noise=self._noise_source()
            )
        except ValueError as e:
            runtime = time.time() - start_time
            logger.error(f"Simulation {name} failed: {e}")
            return SimulationRunResult(
                name=name,
                success=False,
                errors=[f"Simulation error: {e}"],
                runtime_seconds=runtime,
            )

        runtime = time.time() - start_time
        logger.info(
            f"Simulation {name} completed in {runtime:.3f}s: peak at pH "
            f"{result.peak_info.ph} ({result.peak_info.time} min)"
        )
        return SimulationRunResult(
            name=name,
            success=True,
            result=result,
            warnings=[w.title for w in result.warnings],
            runtime_seconds=runtime,
        )

    def run_batch(
        self,
        jobs: list[SimulationJob],
        stop_on_error: bool = False,
        progress_callback: Callable | None = None,
    ) -> list[SimulationRunResult]:
        """Run multiple simulations sequentially.

        Parameters
        ----------
        jobs : list[SimulationJob]
            Runs to perform
        stop_on_error : bool, default=False
            If True, skip the remaining jobs after the first failure
        progress_callback : callable, optional
            Callback with signature:
            callback(current: int, total: int, result: SimulationRunResult)

        Returns
        -------
        list[SimulationRunResult]
            Results in same order as input jobs
        """
        total = len(jobs)
        results: list[SimulationRunResult] = []

        for i, job in enumerate(jobs):
            result = self.run(job.sequence, job.parameters, name=job.name)
            results.append(result)

            if progress_callback:
                progress_callback(i + 1, total, result)

            if not result.success and stop_on_error:
                for remaining in jobs[i + 1:]:
                    results.append(SimulationRunResult(
                        name=remaining.name,
                        success=False,
                        errors=["Simulation was skipped due to previous error."],
                    ))
                break

        return results

    def compare_strategies(
        self,
        sequence: str,
        parameters: SimulationParameters | dict[str, Any],
        strategies: list[ElutionStrategy] | None = None,
    ) -> dict[ElutionStrategy, SimulationRunResult]:
        """Run the same sequence and parameters with each elution strategy.

        Parameters
        ----------
        sequence : str
            Ligand sequence
        parameters : SimulationParameters or dict
            Base parameters; the elution strategy is overridden
        strategies : list[ElutionStrategy], optional
            Strategies to compare (default: all)

        Returns
        -------
        dict[ElutionStrategy, SimulationRunResult]
            One run result per strategy, in the given order
        """
        base = _as_parameters(parameters)
        strategies = strategies or list(ElutionStrategy)
        jobs = [
            SimulationJob(
                name=strategy.value,
                sequence=sequence,
                parameters=replace(base, elution_strategy=strategy),
            )
            for strategy in strategies
        ]
        return dict(zip(strategies, self.run_batch(jobs)))


def validate_and_report(
    sequence: str,
    parameters: SimulationParameters | dict[str, Any],
    name: str = "unnamed",
) -> tuple[bool, str]:
    """Convenience function to validate and get a formatted report.

    Returns
    -------
    tuple[bool, str]
        (is_valid, formatted_message)
    """
    runner = SimulationRunner()
    result = runner.validate(sequence, parameters, name)

    if result.valid:
        msg = f"✓ {name}: Configuration valid"
        if result.warnings:
            msg += f"\n  Warnings: {'; '.join(result.warnings)}"
        return True, msg
    else:
        msg = f"✗ {name}: Configuration invalid"
        for error in result.errors:
            msg += f"\n  Error: {error}"
        return False, msg
