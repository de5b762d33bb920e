"""Shared pytest fixtures and configuration.

This module provides common fixtures used across test modules:
- Sample ligand sequences
- Default parameters and deterministic (noise-free) simulators
- Isolation of the module-level constants cache
"""

import json

import pytest


# =============================================================================
# Sequence Fixtures
# =============================================================================

@pytest.fixture
def z_domain():
    """Z domain of Protein A (58 residues, one histidine)."""
    return "VDNKFNKEQQNAFYEILHLPNLNEEQRNAFIQSLKDDPSQSANLLAEAKKLNDAQAPK"


@pytest.fixture
def histidine_rich():
    """Ten histidines: strong pH response, sigma 0.3."""
    return "HHHHHHHHHH"


@pytest.fixture
def no_histidine():
    """Twenty alanines: no tracked residues at all."""
    return "A" * 20


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def default_parameters():
    """Default process parameters (wild type, IgG1, traditional, 25 °C)."""
    from proa_elution.core import SimulationParameters

    return SimulationParameters()


@pytest.fixture
def deterministic_runner():
    """SimulationRunner without intensity noise."""
    from proa_elution.model import zero_noise
    from proa_elution.simulation import SimulationRunner

    return SimulationRunner(noise=zero_noise)


@pytest.fixture
def constants_file(tmp_path):
    """Write a reduced constants table and return its path."""
    data = {
        "ligand_variants": {
            "wild_type": {"histidine_pka": 6.0, "binding_site_pka": 5.8},
        },
        "target_molecules": {
            "human_igg1": {"fc_pka": 6.1, "stability": 0.5, "aggregation_tendency": 0.3},
        },
        "binding": {"base_affinity": 1e7},
        "gradient_programs": {
            "traditional": {"start_ph": 7.0, "end_ph": 3.0, "steps": 40},
        },
    }
    path = tmp_path / "constants.json"
    path.write_text(json.dumps(data))
    return path


@pytest.fixture(autouse=True)
def _reset_constants_cache():
    """Keep the cached default constants table from leaking between tests."""
    from proa_elution.configs import clear_cache

    clear_cache()
    yield
    clear_cache()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "gui: marks tests that need holoviews/panel (deselect with '-m \"not gui\"')"
    )
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
