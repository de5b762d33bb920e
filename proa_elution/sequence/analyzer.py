"""Sequence analysis for Protein A ligands.

Normalizes a raw residue string, expands it by the ligand domain count and
counts the residue categories used by the model.
"""

import html
import re

from ..core.dataclasses import TRACKED_RESIDUES, ResidueProfile
from ..core.enums import LigandFormat

MIN_SEQUENCE_LENGTH = 10

# Residues highlighted in the sequence display, with their CSS class
HIGHLIGHT_CLASSES = {
    "H": "histidine",
    "N": "asparagine",
    "Q": "glutamine",
    "Y": "tyrosine",
    "F": "phenylalanine",
    "C": "cysteine",
}

_WHITESPACE = re.compile(r"\s")


class InvalidSequenceError(ValueError):
    """Sequence is missing or shorter than the minimum length."""


def normalize_sequence(raw_sequence: str | None) -> str:
    """Uppercase the sequence and strip all whitespace."""
    if not raw_sequence:
        return ""
    return _WHITESPACE.sub("", raw_sequence.upper())


def analyze_sequence(
    raw_sequence: str | None,
    ligand_format: LigandFormat | str = LigandFormat.MONOMERIC,
) -> ResidueProfile:
    """Count tracked residues of the format-expanded sequence.

    Multimeric formats repeat the sequence once per domain, so every
    residue count scales with the domain count.

    Parameters
    ----------
    raw_sequence : str
        Residue string in one-letter code; case and whitespace are ignored
    ligand_format : LigandFormat or str, default=monomeric
        Ligand format; unknown tags count as monomeric

    Returns
    -------
    ResidueProfile
        Counts of the expanded sequence

    Raises
    ------
    InvalidSequenceError
        If the normalized sequence has fewer than 10 residues
    """
    sequence = normalize_sequence(raw_sequence)
    if len(sequence) < MIN_SEQUENCE_LENGTH:
        raise InvalidSequenceError(
            f"Please enter a valid protein sequence (minimum {MIN_SEQUENCE_LENGTH} "
            f"residues), got {len(sequence)}"
        )

    domain_count = LigandFormat.parse(ligand_format).domain_count
    effective_sequence = sequence * domain_count

    counts = {
        name: effective_sequence.count(letter)
        for name, letter in TRACKED_RESIDUES.items()
    }
    return ResidueProfile(
        **counts,
        total=len(effective_sequence),
        domain_count=domain_count,
    )


def highlight_sequence(raw_sequence: str | None, domain_count: int = 1) -> str:
    """Build the HTML display of the raw (unexpanded) sequence.

    Highlighted residues are wrapped in ``<span class="...">`` tags; a
    domain indicator is appended for multimeric formats.
    """
    sequence = normalize_sequence(raw_sequence)
    parts = []
    for residue in sequence:
        css_class = HIGHLIGHT_CLASSES.get(residue)
        if css_class:
            parts.append(f'<span class="{css_class}">{residue}</span>')
        else:
            parts.append(html.escape(residue))

    markup = "".join(parts)
    if domain_count > 1:
        markup += (
            ' <span style="color: #6b7280; font-style: italic;">'
            f"×{domain_count} domains</span>"
        )
    return markup


class SequenceAnalyzer:
    """Analyzer bound to a ligand format.

    Example:
        >>> analyzer = SequenceAnalyzer("dimeric")
        >>> profile = analyzer.analyze("VDNKFNKEQQNAFYEILHLPNLNEEQRNAFIQSLKDDPSQSANLLAEAKKLNDAQAPK")
        >>> profile.domain_count
        2
    """

    def __init__(self, ligand_format: LigandFormat | str = LigandFormat.MONOMERIC):
        self.ligand_format = LigandFormat.parse(ligand_format)

    def analyze(self, raw_sequence: str | None) -> ResidueProfile:
        """Analyze a sequence with this analyzer's ligand format."""
        return analyze_sequence(raw_sequence, self.ligand_format)

    def highlight(self, raw_sequence: str | None) -> str:
        """HTML display of the raw sequence."""
        return highlight_sequence(raw_sequence, self.ligand_format.domain_count)
