"""Tests for the biophysical metrics."""

import math

import pytest

from proa_elution.core import ResidueProfile
from proa_elution.model import (
    calculate_aggregation_risk,
    calculate_alkaline_stability,
    calculate_binding_affinity,
    calculate_binding_capacity,
    calculate_elution_sharpness,
    calculate_ligand_leakage,
    compute_metrics,
)
from proa_elution.sequence import analyze_sequence


@pytest.fixture
def empty_profile():
    """Twenty residues, none of them tracked."""
    return ResidueProfile(total=20)


class TestPlainSequence:
    """A sequence without tracked residues at reference conditions."""

    def test_metrics(self, no_histidine):
        profile = analyze_sequence(no_histidine)
        metrics = compute_metrics(profile, "wild_type", "human_igg1", temperature=25.0)

        assert metrics.alkaline_stability == 65.0
        assert metrics.dynamic_binding_capacity == 90.0
        assert metrics.aggregation_risk == 10.5
        assert metrics.ligand_leakage == 2.58
        assert metrics.binding_affinity == pytest.approx(9e7)
        assert metrics.elution_sharpness == 0.0

    def test_target_changes_affinity_and_aggregation(self, empty_profile):
        igg1 = compute_metrics(empty_profile, "wild_type", "human_igg1", 25.0)
        bispecific = compute_metrics(empty_profile, "wild_type", "bispecific", 25.0)

        assert bispecific.binding_affinity == pytest.approx(7e7)
        assert bispecific.aggregation_risk > igg1.aggregation_risk


class TestClamping:

    @pytest.mark.parametrize("temperature", [-273.0, -50.0, 0.0, 25.0, 60.0, 200.0, 1000.0])
    def test_metrics_stay_in_range(self, temperature):
        profile = ResidueProfile(histidine=8, asparagine=12, tyrosine=4, cysteine=2, total=80)
        metrics = compute_metrics(profile, "engineered_harsh", "fc_fusion", temperature)

        assert 20 <= metrics.alkaline_stability <= 98
        assert metrics.dynamic_binding_capacity <= 180
        assert 2 <= metrics.aggregation_risk <= 45
        assert 0.5 <= metrics.ligand_leakage <= 15
        assert 1e6 <= metrics.binding_affinity <= 9.9e8

    def test_stability_extremes(self, empty_profile):
        assert calculate_alkaline_stability(empty_profile, -50.0) == 98.0
        assert calculate_alkaline_stability(empty_profile, 200.0) == 20.0

    def test_temperature_costs_stability(self, empty_profile):
        assert calculate_alkaline_stability(empty_profile, 30.0) == pytest.approx(61.0)

    def test_disulfide_contribution_is_capped(self):
        few = ResidueProfile(cysteine=8, total=20)
        many = ResidueProfile(cysteine=40, total=60)

        assert calculate_alkaline_stability(few, 25.0) == calculate_alkaline_stability(many, 25.0)

    def test_binding_capacity_upper_bound(self):
        profile = ResidueProfile(histidine=40, total=40)
        assert calculate_binding_capacity(profile, "wild_type") == 180.0

    def test_binding_capacity_has_no_lower_clamp(self, empty_profile):
        # 75 base + 15 per domain; below 90 is unreachable for valid profiles
        assert calculate_binding_capacity(empty_profile, "wild_type") == 90.0

    def test_aggregation_extremes(self):
        assert calculate_aggregation_risk(0.0, 98.0, 25.0) == 2.0
        assert calculate_aggregation_risk(0.7, 20.0, 200.0) == 45.0

    def test_leakage_extremes(self, empty_profile):
        assert calculate_ligand_leakage(empty_profile, 98.0, 25.0) == 0.5
        assert calculate_ligand_leakage(ResidueProfile(asparagine=60, total=60), 20.0, 25.0) == 15.0

    def test_affinity_extremes(self, empty_profile):
        assert calculate_binding_affinity(empty_profile, "human_igg1", -5000.0) == 9.9e8
        assert calculate_binding_affinity(empty_profile, "human_igg1", 1000.0) == 1e6

    def test_affinity_is_finite_for_extreme_cold(self, empty_profile):
        assert math.isfinite(calculate_binding_affinity(empty_profile, "human_igg1", -1e6))


class TestLigandVariant:

    @pytest.mark.parametrize("variant,expected", [
        ("wild_type", 90.0),
        ("engineered_mild", 110.0),
        ("engineered_harsh", 100.0),
        ("unknown_variant", 90.0),
    ])
    def test_capacity_bonus(self, empty_profile, variant, expected):
        assert calculate_binding_capacity(empty_profile, variant) == expected

    def test_domains_add_capacity(self, z_domain):
        mono = compute_metrics(analyze_sequence(z_domain, "monomeric"), "wild_type", "human_igg1", 25.0)
        tetra = compute_metrics(analyze_sequence(z_domain, "tetrameric"), "wild_type", "human_igg1", 25.0)

        assert tetra.dynamic_binding_capacity > mono.dynamic_binding_capacity


class TestElutionSharpness:

    @pytest.mark.parametrize("histidine,variant,expected", [
        (0, "wild_type", 0.0),
        (10, "wild_type", 0.3),
        (10, "engineered_mild", 0.24),
        (30, "wild_type", 0.6),
        (30, "engineered_harsh", 0.6),
    ])
    def test_sigma(self, histidine, variant, expected):
        profile = ResidueProfile(histidine=histidine, total=max(histidine, 10))
        assert calculate_elution_sharpness(profile, variant) == pytest.approx(expected)


class TestErrors:

    def test_unknown_target_raises(self, empty_profile):
        with pytest.raises(ValueError, match="Unknown target molecule"):
            compute_metrics(empty_profile, "wild_type", "llama_vhh", 25.0)
