"""Core dataclasses for the Protein A elution model.

These are the value objects passed between the pipeline stages:
- ResidueProfile: residue category counts of the format-expanded sequence
- SimulationParameters: process parameters for one simulation run
- MetricsResult: derived biophysical metrics
- ElutionPoint / PeakInfo: chromatogram points and the detected peak
- SimulationWarning: advisory message
- DerivedKPIs / SimulationResult: final outputs of a run

All result classes are frozen and support to_dict() for the presentation layer.
"""

from dataclasses import dataclass, field, asdict
from typing import Any
import math
import numbers

from .enums import LigandVariant, LigandFormat, TargetMolecule, ElutionStrategy


# Residue letters tracked by the model, keyed by ResidueProfile field name
TRACKED_RESIDUES: dict[str, str] = {
    "histidine": "H",
    "asparagine": "N",
    "glutamine": "Q",
    "tyrosine": "Y",
    "phenylalanine": "F",
    "cysteine": "C",
    "tryptophan": "W",
    "aspartic": "D",
    "glutamic": "E",
    "lysine": "K",
    "arginine": "R",
}


@dataclass(frozen=True)
class ResidueProfile:
    """Residue counts of the (format-expanded) ligand sequence.

    Attributes
    ----------
    histidine ... arginine : int
        Occurrences of each tracked residue in the expanded sequence
    total : int
        Length of the expanded sequence (raw length x domain_count)
    domain_count : int
        Number of Protein A domains (1, 2, 4 or 6)
    """
    histidine: int = 0
    asparagine: int = 0
    glutamine: int = 0
    tyrosine: int = 0
    phenylalanine: int = 0
    cysteine: int = 0
    tryptophan: int = 0
    aspartic: int = 0
    glutamic: int = 0
    lysine: int = 0
    arginine: int = 0
    total: int = 0
    domain_count: int = 1

    def __post_init__(self):
        """Validate counts."""
        for name in (*TRACKED_RESIDUES, "total"):
            if getattr(self, name) < 0:
                raise ValueError(f"Residue count '{name}' must be >= 0")
        if self.domain_count < 1:
            raise ValueError("domain_count must be >= 1")

    @property
    def aromatic(self) -> int:
        """Tyrosine + phenylalanine (tryptophan is not part of the model)."""
        return self.tyrosine + self.phenylalanine

    @property
    def amide(self) -> int:
        """Asparagine + glutamine (deamidation-prone residues)."""
        return self.asparagine + self.glutamine

    @property
    def net_charge(self) -> int:
        """Basic minus acidic residue count."""
        return self.lysine + self.arginine - self.aspartic - self.glutamic

    def display_summary(self) -> dict[str, int]:
        """Counts shown next to the highlighted sequence.

        The displayed aromatic count includes tryptophan.
        """
        return {
            "Histidine": self.histidine,
            "Asparagine": self.asparagine,
            "Glutamine": self.glutamine,
            "Aromatic": self.tyrosine + self.phenylalanine + self.tryptophan,
            "Cysteine": self.cysteine,
            "Total Length": self.total,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class SimulationParameters:
    """Process parameters for one simulation run.

    Enumerated fields accept either the enum member or its string tag.

    Attributes
    ----------
    ligand_variant : LigandVariant
        Protein A ligand variant (unknown tags fall back to wild type)
    ligand_format : LigandFormat
        Domain format of the ligand (unknown tags fall back to monomeric)
    target_molecule : TargetMolecule
        Antibody format being purified
    target_concentration : float
        Feed concentration in mg/mL
    column_volume : float
        Column volume in mL
    flow_rate : float
        Flow rate in mL/min
    loading_capacity : float
        Column loading in mg/mL resin
    temperature : float
        Operating temperature in °C
    elution_strategy : ElutionStrategy
        pH gradient strategy
    gradient_time : float
        Gradient duration in minutes

    Example
    -------
    >>> params = SimulationParameters(
    ...     ligand_variant="engineered_mild",
    ...     target_molecule="human_igg1",
    ...     elution_strategy="mild",
    ... )
    """
    ligand_variant: LigandVariant = LigandVariant.WILD_TYPE
    ligand_format: LigandFormat = LigandFormat.MONOMERIC
    target_molecule: TargetMolecule = TargetMolecule.HUMAN_IGG1
    target_concentration: float = 5.0
    column_volume: float = 10.0
    flow_rate: float = 1.0
    loading_capacity: float = 40.0
    temperature: float = 25.0
    elution_strategy: ElutionStrategy = ElutionStrategy.TRADITIONAL
    gradient_time: float = 60.0

    def __post_init__(self):
        """Coerce enum tags and validate numeric fields."""
        object.__setattr__(self, "ligand_variant", LigandVariant.parse(self.ligand_variant))
        object.__setattr__(self, "ligand_format", LigandFormat.parse(self.ligand_format))
        object.__setattr__(self, "target_molecule", TargetMolecule.parse(self.target_molecule))
        object.__setattr__(self, "elution_strategy", ElutionStrategy.parse(self.elution_strategy))

        for name in ("target_concentration", "column_volume", "flow_rate",
                     "loading_capacity", "temperature", "gradient_time"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
            object.__setattr__(self, name, float(value))

        for name in ("target_concentration", "column_volume", "flow_rate",
                     "loading_capacity", "gradient_time"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with enum tags as strings."""
        return {
            "ligand_variant": self.ligand_variant.value,
            "ligand_format": self.ligand_format.value,
            "target_molecule": self.target_molecule.value,
            "target_concentration": self.target_concentration,
            "column_volume": self.column_volume,
            "flow_rate": self.flow_rate,
            "loading_capacity": self.loading_capacity,
            "temperature": self.temperature,
            "elution_strategy": self.elution_strategy.value,
            "gradient_time": self.gradient_time,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimulationParameters":
        """Create from dictionary; missing keys use the defaults."""
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass(frozen=True)
class MetricsResult:
    """Biophysical metrics derived from the residue profile.

    Attributes
    ----------
    alkaline_stability : float
        Stability in %, clamped to [20, 98]
    dynamic_binding_capacity : float
        Capacity in mg/mL, only upper-clamped at 180
    aggregation_risk : float
        Risk in %, clamped to [2, 45]
    ligand_leakage : float
        Leakage in µg/mL, clamped to [0.5, 15]
    binding_affinity : float
        Affinity in 1/M, clamped to [1e6, 9.9e8]
    elution_sharpness : float
        Sigma of the elution peak in pH units
    """
    alkaline_stability: float
    dynamic_binding_capacity: float
    aggregation_risk: float
    ligand_leakage: float
    binding_affinity: float
    elution_sharpness: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class ElutionPoint:
    """One step of the pH gradient."""
    time: float
    ph: float
    intensity: float
    binding_strength: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class PeakInfo:
    """Elution point with maximum intensity, annotated with FWHM.

    binding_strength is None for the degenerate default peak.
    """
    time: float
    ph: float
    intensity: float
    peak_width: float
    binding_strength: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class SimulationWarning:
    """Advisory message; never blocks a simulation."""
    title: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class DerivedKPIs:
    """Process KPIs derived from metrics and parameters."""
    recovery_yield: float
    purity: float
    productivity: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)


@dataclass(frozen=True)
class SimulationResult:
    """Complete output of one simulation run.

    Owned by the caller; the pipeline keeps no reference to it.
    """
    sequence: str
    parameters: SimulationParameters
    residue_profile: ResidueProfile
    metrics: MetricsResult
    elution_profile: list[ElutionPoint] = field(default_factory=list)
    peak_info: PeakInfo | None = None
    warnings: list[SimulationWarning] = field(default_factory=list)
    kpis: DerivedKPIs | None = None

    @property
    def recovery_yield(self) -> float | None:
        return self.kpis.recovery_yield if self.kpis else None

    @property
    def purity(self) -> float | None:
        return self.kpis.purity if self.kpis else None

    @property
    def productivity(self) -> float | None:
        return self.kpis.productivity if self.kpis else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "sequence": self.sequence,
            "parameters": self.parameters.to_dict(),
            "residue_profile": self.residue_profile.to_dict(),
            "metrics": self.metrics.to_dict(),
            "elution_profile": [p.to_dict() for p in self.elution_profile],
            "peak_info": self.peak_info.to_dict() if self.peak_info else None,
            "warnings": [w.to_dict() for w in self.warnings],
            "recovery_yield": self.recovery_yield,
            "purity": self.purity,
            "productivity": self.productivity,
        }
