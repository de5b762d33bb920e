"""Enumerated process options.

Each option is a closed set of string tags as used by the input form.
Ligand variant and ligand format tolerate unknown tags and fall back to
documented defaults; target molecule and elution strategy do not.
"""

from enum import Enum
import logging

logger = logging.getLogger(__name__)


class LigandVariant(Enum):
    """Protein A ligand variant."""
    WILD_TYPE = "wild_type"
    ENGINEERED_MILD = "engineered_mild"
    ENGINEERED_HARSH = "engineered_harsh"

    @classmethod
    def parse(cls, value: "str | LigandVariant") -> "LigandVariant":
        """Parse a tag, falling back to wild type for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown ligand variant '{value}', using wild_type")
            return cls.WILD_TYPE

    @property
    def binding_capacity_bonus(self) -> float:
        """Additive dynamic binding capacity bonus in mg/mL."""
        return {
            LigandVariant.WILD_TYPE: 0.0,
            LigandVariant.ENGINEERED_MILD: 20.0,
            LigandVariant.ENGINEERED_HARSH: 10.0,
        }[self]


class LigandFormat(Enum):
    """Number of Protein A domains per ligand."""
    MONOMERIC = "monomeric"
    DIMERIC = "dimeric"
    TETRAMERIC = "tetrameric"
    MULTIMERIC = "multimeric"

    @classmethod
    def parse(cls, value: "str | LigandFormat") -> "LigandFormat":
        """Parse a tag, falling back to monomeric for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.warning(f"Unknown ligand format '{value}', using monomeric")
            return cls.MONOMERIC

    @property
    def domain_count(self) -> int:
        return _DOMAIN_COUNTS[self]


_DOMAIN_COUNTS = {
    LigandFormat.MONOMERIC: 1,
    LigandFormat.DIMERIC: 2,
    LigandFormat.TETRAMERIC: 4,
    LigandFormat.MULTIMERIC: 6,
}


class TargetMolecule(Enum):
    """Antibody or fragment format being purified."""
    HUMAN_IGG1 = "human_igg1"
    HUMAN_IGG2 = "human_igg2"
    HUMAN_IGG4 = "human_igg4"
    MOUSE_IGG1 = "mouse_igg1"
    FC_FUSION = "fc_fusion"
    FAB_FRAGMENT = "fab_fragment"
    BISPECIFIC = "bispecific"

    @classmethod
    def parse(cls, value: "str | TargetMolecule") -> "TargetMolecule":
        """Parse a tag.

        Raises
        ------
        ValueError
            If the tag is not a known target molecule
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            available = [m.value for m in cls]
            raise ValueError(
                f"Unknown target molecule: {value}. Available: {available}"
            ) from None


class ElutionStrategy(Enum):
    """pH gradient strategy used for elution."""
    TRADITIONAL = "traditional"
    MILD = "mild"
    STEP = "step"
    SALT_ASSISTED = "salt_assisted"
    COMPETITIVE = "competitive"

    @classmethod
    def parse(cls, value: "str | ElutionStrategy") -> "ElutionStrategy":
        """Parse a tag.

        Raises
        ------
        ValueError
            If the tag is not a known elution strategy
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            available = [s.value for s in cls]
            raise ValueError(
                f"Unknown elution strategy: {value}. Available: {available}"
            ) from None
