"""Loader for the molecular constants table.

The constants (ligand pKa values, antibody Fc properties, binding constants
and pH gradient programs) live in a JSON file so they can be reviewed and
substituted without touching the model code.

Usage:
    >>> from proa_elution.configs import get_molecular_constants
    >>> constants = get_molecular_constants()
    >>> constants.target("human_igg1").fc_pka
    6.1
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping
import json
import logging
import os

from ..core.enums import LigandVariant, TargetMolecule, ElutionStrategy

logger = logging.getLogger(__name__)

CONSTANTS_PATH_ENV = "PROA_CONSTANTS_PATH"


@dataclass(frozen=True)
class LigandConstants:
    """pKa values of a Protein A ligand variant.

    Attributes
    ----------
    histidine_pka : float
        pKa of the ligand histidines
    binding_site_pka : float
        pKa of the Fc binding site
    """
    histidine_pka: float
    binding_site_pka: float

    @classmethod
    def from_dict(cls, data: dict) -> "LigandConstants":
        """Create from dictionary (JSON)."""
        return cls(
            histidine_pka=float(data["histidine_pka"]),
            binding_site_pka=float(data["binding_site_pka"]),
        )


@dataclass(frozen=True)
class TargetConstants:
    """Properties of an antibody format.

    Attributes
    ----------
    fc_pka : float
        pKa of the Fc region
    stability : float
        Relative stability in [0, 1]
    aggregation_tendency : float
        Relative aggregation tendency in [0, 1]
    """
    fc_pka: float
    stability: float
    aggregation_tendency: float

    def __post_init__(self):
        """Validate fractions."""
        for name in ("stability", "aggregation_tendency"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

    @classmethod
    def from_dict(cls, data: dict) -> "TargetConstants":
        """Create from dictionary (JSON)."""
        return cls(
            fc_pka=float(data["fc_pka"]),
            stability=float(data["stability"]),
            aggregation_tendency=float(data["aggregation_tendency"]),
        )


@dataclass(frozen=True)
class BindingConstants:
    """Global binding constants."""
    base_affinity: float = 1e8  # 1/M
    temperature_factor: float = 0.02  # per °C deviation from 25 °C
    ionic_strength_factor: float = 0.1

    @classmethod
    def from_dict(cls, data: dict) -> "BindingConstants":
        """Create from dictionary (JSON)."""
        return cls(
            base_affinity=float(data.get("base_affinity", 1e8)),
            temperature_factor=float(data.get("temperature_factor", 0.02)),
            ionic_strength_factor=float(data.get("ionic_strength_factor", 0.1)),
        )


@dataclass(frozen=True)
class GradientProgram:
    """Linear pH descent used by an elution strategy.

    Attributes
    ----------
    start_ph : float
        pH at time 0
    end_ph : float
        pH at the end of the gradient
    steps : int
        Number of gradient steps (the profile has steps + 1 points)
    """
    start_ph: float
    end_ph: float
    steps: int

    def __post_init__(self):
        """Validate the program."""
        if self.steps < 1:
            raise ValueError(f"steps must be >= 1, got {self.steps}")
        if self.end_ph > self.start_ph:
            raise ValueError(
                f"end_ph {self.end_ph} must not exceed start_ph {self.start_ph}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "GradientProgram":
        """Create from dictionary (JSON)."""
        return cls(
            start_ph=float(data["start_ph"]),
            end_ph=float(data["end_ph"]),
            steps=int(data["steps"]),
        )


@dataclass(frozen=True)
class MolecularConstants:
    """Immutable constants table shared by all simulation runs.

    Pass an instance to the model functions to substitute constants,
    e.g. in tests.
    """
    ligand_variants: Mapping[LigandVariant, LigandConstants]
    target_molecules: Mapping[TargetMolecule, TargetConstants]
    binding: BindingConstants
    gradient_programs: Mapping[ElutionStrategy, GradientProgram]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MolecularConstants":
        """Create from dictionary (JSON).

        Raises
        ------
        ValueError
            If a key is not a known enum tag or a value is out of range
        """
        ligands = {
            LigandVariant(key): LigandConstants.from_dict(value)
            for key, value in data.get("ligand_variants", {}).items()
        }
        if LigandVariant.WILD_TYPE not in ligands:
            raise ValueError("Constants table must define the wild_type ligand")

        targets = {
            TargetMolecule(key): TargetConstants.from_dict(value)
            for key, value in data.get("target_molecules", {}).items()
        }
        programs = {
            ElutionStrategy(key): GradientProgram.from_dict(value)
            for key, value in data.get("gradient_programs", {}).items()
        }
        return cls(
            ligand_variants=MappingProxyType(ligands),
            target_molecules=MappingProxyType(targets),
            binding=BindingConstants.from_dict(data.get("binding", {})),
            gradient_programs=MappingProxyType(programs),
        )

    def ligand(self, variant: LigandVariant | str) -> LigandConstants:
        """Get ligand constants, falling back to wild type."""
        variant = LigandVariant.parse(variant)
        if variant not in self.ligand_variants:
            return self.ligand_variants[LigandVariant.WILD_TYPE]
        return self.ligand_variants[variant]

    def target(self, molecule: TargetMolecule | str) -> TargetConstants:
        """Get antibody constants.

        Raises
        ------
        ValueError
            If the molecule has no entry in the table
        """
        molecule = TargetMolecule.parse(molecule)
        if molecule not in self.target_molecules:
            available = [m.value for m in self.target_molecules]
            raise ValueError(
                f"No constants for target molecule: {molecule.value}. Available: {available}"
            )
        return self.target_molecules[molecule]

    def gradient(self, strategy: ElutionStrategy | str) -> GradientProgram:
        """Get the gradient program of an elution strategy.

        Raises
        ------
        ValueError
            If the strategy has no entry in the table
        """
        strategy = ElutionStrategy.parse(strategy)
        if strategy not in self.gradient_programs:
            available = [s.value for s in self.gradient_programs]
            raise ValueError(
                f"No gradient program for strategy: {strategy.value}. Available: {available}"
            )
        return self.gradient_programs[strategy]


# Module-level cache for the default table
_constants_cache: dict[str, MolecularConstants] = {}


def _get_configs_dir() -> Path:
    """Get the configs directory path."""
    return Path(__file__).parent


def _load_json_config(path: Path) -> dict:
    """Load a JSON config file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _resolve_constants_path(path: str | Path | None) -> Path:
    """Resolve the constants file from argument, environment variable, or package.

    Resolution order:
    1. Explicitly provided path (if not None)
    2. PROA_CONSTANTS_PATH environment variable
    3. Bundled molecular_constants.json
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONSTANTS_PATH_ENV)
    if env_path:
        if Path(env_path).exists():
            return Path(env_path)
        logger.warning(
            f"{CONSTANTS_PATH_ENV} points to a missing file ({env_path}), "
            f"using the bundled constants table"
        )

    return _get_configs_dir() / "molecular_constants.json"


def load_molecular_constants(path: str | Path | None = None) -> MolecularConstants:
    """Load a constants table from JSON (uncached).

    Parameters
    ----------
    path : str or Path, optional
        JSON file. If None, checks PROA_CONSTANTS_PATH, then falls back
        to the bundled table.

    Returns
    -------
    MolecularConstants
        Parsed constants table

    Raises
    ------
    ValueError
        If the file does not exist or contains invalid entries
    """
    config_path = _resolve_constants_path(path)
    if not config_path.exists():
        raise ValueError(f"Constants file not found: {config_path}")

    logger.debug(f"Loading molecular constants from {config_path}")
    return MolecularConstants.from_dict(_load_json_config(config_path))


def get_molecular_constants() -> MolecularConstants:
    """Get the process-wide default constants table (cached)."""
    if "default" not in _constants_cache:
        _constants_cache["default"] = load_molecular_constants()
    return _constants_cache["default"]


def clear_cache() -> None:
    """Clear the constants cache (useful for testing)."""
    _constants_cache.clear()
