"""pH-gradient elution profile simulation.

The binding model combines Henderson-Hasselbalch protonation of the ligand
histidines and of the antibody Fc region:

    frac(pKa, pH) = 10^(pKa - pH) / (1 + 10^(pKa - pH))
    repulsion     = 2 * frac(His pKa) * frac(Fc pKa)
    binding       = max(0, 1 - repulsion + hydrophobic)

Once binding drops below 0.5 the antibody is released with a Gaussian peak
centered at the optimal elution pH.

Example:
    >>> from proa_elution.model import ElutionProfileSimulator, zero_noise
    >>> simulator = ElutionProfileSimulator(noise=zero_noise)
    >>> profile = simulator.simulate(residue_profile, parameters)
    >>> profile[0].ph
    7.4
"""

from typing import Callable

import numpy as np
import pandas as pd

from ..configs import MolecularConstants, get_molecular_constants
from ..core.dataclasses import ElutionPoint, ResidueProfile, SimulationParameters
from ..core.enums import ElutionStrategy, LigandVariant, TargetMolecule
from .metrics import REFERENCE_TEMPERATURE, calculate_elution_sharpness

# Returns one noise sample per profile point
NoiseSource = Callable[[int], np.ndarray]

ELUTION_PH_RANGE = (2.8, 5.5)
MAX_PEAK_INTENSITY = 150.0
RELEASE_THRESHOLD = 0.5
TAILING_FRACTION = 0.1
TAILING_DECAY = 0.5  # pH units
TEMPERATURE_INTENSITY_FACTOR = 0.015  # per °C
TIME_DECIMALS = 2


def uniform_noise(seed: int | None = None) -> NoiseSource:
    """Build a uniform [-1, 1) noise source.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducible noise
    """
    rng = np.random.default_rng(seed)

    def _noise(n: int) -> np.ndarray:
        return rng.uniform(-1.0, 1.0, size=n)

    return _noise


def zero_noise(n: int) -> np.ndarray:
    """Noise source that adds nothing (deterministic profiles)."""
    return np.zeros(n)


def _time_decimals(step: float) -> int:
    """Decimals for rounding times so that consecutive steps stay distinct."""
    return max(TIME_DECIMALS, int(np.ceil(-np.log10(step))) + 1)


def protonation_fraction(pka: float, ph: np.ndarray | float) -> np.ndarray | float:
    """Protonated fraction of a group with the given pKa."""
    ratio = np.power(10.0, pka - np.asarray(ph, dtype=float))
    return ratio / (1.0 + ratio)


def calculate_optimal_elution_ph(
    profile: ResidueProfile,
    ligand_variant: LigandVariant | str,
    target_molecule: TargetMolecule | str,
    constants: MolecularConstants | None = None,
) -> float:
    """Predicted pH of the elution peak, clamped to [2.8, 5.5]."""
    constants = constants or get_molecular_constants()
    ligand = constants.ligand(ligand_variant)
    target = constants.target(target_molecule)

    base_elution_ph = ligand.binding_site_pka - 0.5
    histidine_adjustment = profile.histidine * 0.1
    target_adjustment = (target.fc_pka - 6.0) * 0.5

    return max(
        ELUTION_PH_RANGE[0],
        min(ELUTION_PH_RANGE[1], base_elution_ph - histidine_adjustment + target_adjustment),
    )


def calculate_max_intensity(profile: ResidueProfile, target_concentration: float) -> float:
    """Peak height scale in mAU, capped at 150."""
    return min(
        MAX_PEAK_INTENSITY,
        50 + profile.histidine * 8 + target_concentration * 10,
    )


class ElutionProfileSimulator:
    """Generates the discretized elution chromatogram.

    Parameters
    ----------
    constants : MolecularConstants, optional
        Constants table; defaults to the bundled table
    noise : NoiseSource, optional
        Additive intensity noise; defaults to uniform [-1, 1). Pass
        ``zero_noise`` for deterministic output.
    """

    def __init__(
        self,
        constants: MolecularConstants | None = None,
        noise: NoiseSource | None = None,
    ):
        self.constants = constants or get_molecular_constants()
        self.noise = noise or uniform_noise()

    def simulate(
        self,
        profile: ResidueProfile,
        parameters: SimulationParameters,
    ) -> list[ElutionPoint]:
        """Simulate the elution profile.

        Parameters
        ----------
        profile : ResidueProfile
            Residue counts of the expanded sequence
        parameters : SimulationParameters
            Process parameters

        Returns
        -------
        list[ElutionPoint]
            steps + 1 points with time from 0 to gradient_time and
            linearly decreasing pH
        """
        program = self.constants.gradient(parameters.elution_strategy)
        ligand = self.constants.ligand(parameters.ligand_variant)
        target = self.constants.target(parameters.target_molecule)

        elution_ph = calculate_optimal_elution_ph(
            profile, parameters.ligand_variant, parameters.target_molecule, self.constants
        )
        peak_width = calculate_elution_sharpness(profile, parameters.ligand_variant)
        max_intensity = calculate_max_intensity(profile, parameters.target_concentration)

        progress = np.arange(program.steps + 1) / program.steps
        ph = program.start_ph - progress * (program.start_ph - program.end_ph)
        time = progress * parameters.gradient_time
        time_decimals = _time_decimals(parameters.gradient_time / program.steps)

        binding_strength = self._binding_strength(profile, ph, ligand.histidine_pka, target.fc_pka)
        intensity = self._elution_intensity(
            ph,
            binding_strength,
            elution_ph=elution_ph,
            peak_width=peak_width,
            max_intensity=max_intensity,
            tailing=parameters.elution_strategy is ElutionStrategy.TRADITIONAL,
        )

        intensity = intensity * (
            1 + (parameters.temperature - REFERENCE_TEMPERATURE) * TEMPERATURE_INTENSITY_FACTOR
        )
        intensity = intensity + np.asarray(self.noise(len(ph)), dtype=float)
        intensity = np.maximum(0.0, intensity)

        return [
            ElutionPoint(
                time=round(float(t), time_decimals),
                ph=round(float(p), 2),
                intensity=round(float(i), 2),
                binding_strength=round(float(b), 3),
            )
            for t, p, i, b in zip(time, ph, intensity, binding_strength)
        ]

    @staticmethod
    def _binding_strength(
        profile: ResidueProfile,
        ph: np.ndarray,
        histidine_pka: float,
        fc_pka: float,
    ) -> np.ndarray:
        """Relative binding strength in [0, inf), 1 at neutral conditions."""
        if profile.histidine > 0:
            histidine_protonation = protonation_fraction(histidine_pka, ph)
        else:
            histidine_protonation = np.zeros_like(ph)
        fc_protonation = protonation_fraction(fc_pka, ph)

        electrostatic_repulsion = histidine_protonation * fc_protonation * 2.0
        hydrophobic_contribution = profile.aromatic * 0.03 * (1 - electrostatic_repulsion * 0.5)

        return np.maximum(0.0, 1 - electrostatic_repulsion + hydrophobic_contribution)

    @staticmethod
    def _elution_intensity(
        ph: np.ndarray,
        binding_strength: np.ndarray,
        elution_ph: float,
        peak_width: float,
        max_intensity: float,
        tailing: bool,
    ) -> np.ndarray:
        """Gaussian release peak where binding fell below the threshold."""
        deviation = ph - elution_ph
        if peak_width > 0:
            gaussian = np.exp(-(deviation ** 2) / (2 * peak_width ** 2))
        else:
            gaussian = np.zeros_like(ph)

        intensity = max_intensity * gaussian * (1 - binding_strength)
        if tailing:
            tail = max_intensity * TAILING_FRACTION * np.exp(-np.abs(deviation) / TAILING_DECAY)
            intensity = intensity + np.where(ph < elution_ph, tail, 0.0)

        released = binding_strength < RELEASE_THRESHOLD
        return np.where(released, intensity, 0.0)


def simulate_elution_profile(
    profile: ResidueProfile,
    parameters: SimulationParameters,
    constants: MolecularConstants | None = None,
    noise: NoiseSource | None = None,
) -> list[ElutionPoint]:
    """Convenience wrapper around ElutionProfileSimulator.simulate."""
    return ElutionProfileSimulator(constants=constants, noise=noise).simulate(profile, parameters)


def elution_profile_to_df(profile: list[ElutionPoint]) -> pd.DataFrame:
    """Convert an elution profile to a DataFrame.

    Columns: time (min), ph, intensity (mAU), binding_strength.
    """
    return pd.DataFrame(
        {
            "time": [p.time for p in profile],
            "ph": [p.ph for p in profile],
            "intensity": [p.intensity for p in profile],
            "binding_strength": [p.binding_strength for p in profile],
        },
        columns=["time", "ph", "intensity", "binding_strength"],
    )
