"""Tests for option enums and SimulationParameters."""

import numpy as np
import pytest

from proa_elution.core import (
    ElutionStrategy,
    LigandFormat,
    LigandVariant,
    SimulationParameters,
    TargetMolecule,
)


class TestEnums:

    def test_variant_fallback(self, caplog):
        with caplog.at_level("WARNING"):
            assert LigandVariant.parse("mystery") is LigandVariant.WILD_TYPE
        assert "mystery" in caplog.text

    def test_format_fallback(self):
        assert LigandFormat.parse("octameric") is LigandFormat.MONOMERIC

    @pytest.mark.parametrize("ligand_format,domains", [
        (LigandFormat.MONOMERIC, 1),
        (LigandFormat.DIMERIC, 2),
        (LigandFormat.TETRAMERIC, 4),
        (LigandFormat.MULTIMERIC, 6),
    ])
    def test_domain_counts(self, ligand_format, domains):
        assert ligand_format.domain_count == domains

    def test_target_is_strict(self):
        with pytest.raises(ValueError, match="Available"):
            TargetMolecule.parse("llama_vhh")

    def test_strategy_is_strict(self):
        with pytest.raises(ValueError, match="Unknown elution strategy"):
            ElutionStrategy.parse("gravity")

    def test_parse_passes_members_through(self):
        assert ElutionStrategy.parse(ElutionStrategy.MILD) is ElutionStrategy.MILD


class TestSimulationParameters:

    def test_defaults(self):
        params = SimulationParameters()

        assert params.ligand_variant is LigandVariant.WILD_TYPE
        assert params.ligand_format is LigandFormat.MONOMERIC
        assert params.target_molecule is TargetMolecule.HUMAN_IGG1
        assert params.elution_strategy is ElutionStrategy.TRADITIONAL
        assert params.gradient_time == 60.0

    def test_tags_are_coerced(self):
        params = SimulationParameters(
            ligand_variant="engineered_mild",
            ligand_format="tetrameric",
            target_molecule="fc_fusion",
            elution_strategy="salt_assisted",
        )

        assert params.ligand_variant is LigandVariant.ENGINEERED_MILD
        assert params.ligand_format is LigandFormat.TETRAMERIC
        assert params.target_molecule is TargetMolecule.FC_FUSION
        assert params.elution_strategy is ElutionStrategy.SALT_ASSISTED

    def test_numbers_become_floats(self):
        params = SimulationParameters(column_volume=np.int64(20), gradient_time=30)

        assert params.column_volume == 20.0
        assert isinstance(params.column_volume, float)
        assert isinstance(params.gradient_time, float)

    def test_negative_temperature_allowed(self):
        assert SimulationParameters(temperature=-5.0).temperature == -5.0

    @pytest.mark.parametrize("field,value", [
        ("target_concentration", 0.0),
        ("column_volume", -1.0),
        ("flow_rate", 0),
        ("loading_capacity", -10.0),
        ("gradient_time", 0.0),
        ("temperature", float("inf")),
        ("flow_rate", float("nan")),
        ("column_volume", True),
        ("column_volume", "10"),
    ])
    def test_invalid_numbers(self, field, value):
        with pytest.raises(ValueError, match=field):
            SimulationParameters(**{field: value})

    def test_unknown_target_raises(self):
        with pytest.raises(ValueError):
            SimulationParameters(target_molecule="llama_vhh")

    def test_frozen(self):
        params = SimulationParameters()
        with pytest.raises(AttributeError):
            params.temperature = 30.0

    def test_dict_round_trip(self):
        params = SimulationParameters(ligand_format="dimeric", temperature=30.0)
        data = params.to_dict()

        assert data["ligand_format"] == "dimeric"
        assert SimulationParameters.from_dict(data) == params

    def test_from_dict_ignores_unknown_keys(self):
        params = SimulationParameters.from_dict({"temperature": 20.0, "operator": "someone"})
        assert params.temperature == 20.0
