"""Tests for the molecular constants loader."""

import json

import pytest

from proa_elution.configs import (
    CONSTANTS_PATH_ENV,
    MolecularConstants,
    clear_cache,
    get_molecular_constants,
    load_molecular_constants,
)
from proa_elution.core import ElutionStrategy, LigandVariant, TargetMolecule


class TestBundledTable:

    def test_covers_all_options(self):
        constants = get_molecular_constants()

        assert set(constants.ligand_variants) == set(LigandVariant)
        assert set(constants.target_molecules) == set(TargetMolecule)
        assert set(constants.gradient_programs) == set(ElutionStrategy)

    def test_values(self):
        constants = get_molecular_constants()

        assert constants.ligand("engineered_mild").binding_site_pka == 6.0
        assert constants.target("fab_fragment").fc_pka == 6.3
        assert constants.binding.base_affinity == 1e8
        assert constants.gradient("mild").steps == 120
        assert constants.gradient(ElutionStrategy.TRADITIONAL).end_ph == 2.5

    def test_unknown_ligand_falls_back_to_wild_type(self):
        constants = get_molecular_constants()
        assert constants.ligand("not_a_ligand") == constants.ligand(LigandVariant.WILD_TYPE)

    def test_unknown_target_raises(self):
        with pytest.raises(ValueError, match="Available"):
            get_molecular_constants().target("llama_vhh")

    def test_unknown_strategy_raises(self):
        with pytest.raises(ValueError, match="Unknown elution strategy"):
            get_molecular_constants().gradient("gravity")

    def test_table_is_read_only(self):
        constants = get_molecular_constants()
        with pytest.raises(TypeError):
            constants.target_molecules[TargetMolecule.HUMAN_IGG1] = None


class TestCache:

    def test_default_table_is_cached(self):
        assert get_molecular_constants() is get_molecular_constants()

    def test_clear_cache_reloads(self):
        first = get_molecular_constants()
        clear_cache()
        second = get_molecular_constants()

        assert first is not second
        assert first == second

    def test_environment_override(self, monkeypatch, constants_file):
        monkeypatch.setenv(CONSTANTS_PATH_ENV, str(constants_file))
        clear_cache()

        constants = get_molecular_constants()
        assert constants.gradient("traditional").steps == 40
        assert constants.binding.base_affinity == 1e7

    def test_missing_environment_file_falls_back_with_warning(self, monkeypatch, tmp_path, caplog):
        monkeypatch.setenv(CONSTANTS_PATH_ENV, str(tmp_path / "missing.json"))
        clear_cache()

        with caplog.at_level("WARNING", logger="proa_elution.configs.loader"):
            assert get_molecular_constants().gradient("traditional").steps == 150
        assert "missing.json" in caplog.text


class TestCustomTable:

    def test_load_explicit_path(self, constants_file):
        constants = load_molecular_constants(constants_file)

        assert isinstance(constants, MolecularConstants)
        assert list(constants.target_molecules) == [TargetMolecule.HUMAN_IGG1]

    def test_missing_entry_raises(self, constants_file):
        constants = load_molecular_constants(constants_file)

        with pytest.raises(ValueError, match="No constants for target molecule"):
            constants.target("fab_fragment")
        with pytest.raises(ValueError, match="No gradient program"):
            constants.gradient("mild")

    def test_missing_ligand_falls_back(self, constants_file):
        constants = load_molecular_constants(constants_file)
        assert constants.ligand("engineered_harsh").histidine_pka == 6.0

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_molecular_constants(tmp_path / "nope.json")

    def _write(self, tmp_path, data):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(data))
        return path

    def test_wild_type_required(self, tmp_path):
        path = self._write(tmp_path, {
            "ligand_variants": {"engineered_mild": {"histidine_pka": 6.2, "binding_site_pka": 6.0}},
        })
        with pytest.raises(ValueError, match="wild_type"):
            load_molecular_constants(path)

    def test_invalid_fraction_raises(self, tmp_path):
        path = self._write(tmp_path, {
            "ligand_variants": {"wild_type": {"histidine_pka": 6.0, "binding_site_pka": 5.8}},
            "target_molecules": {
                "human_igg1": {"fc_pka": 6.1, "stability": 1.5, "aggregation_tendency": 0.3},
            },
        })
        with pytest.raises(ValueError, match="stability"):
            load_molecular_constants(path)

    def test_rising_gradient_raises(self, tmp_path):
        path = self._write(tmp_path, {
            "ligand_variants": {"wild_type": {"histidine_pka": 6.0, "binding_site_pka": 5.8}},
            "gradient_programs": {"mild": {"start_ph": 3.0, "end_ph": 7.0, "steps": 10}},
        })
        with pytest.raises(ValueError, match="end_ph"):
            load_molecular_constants(path)
