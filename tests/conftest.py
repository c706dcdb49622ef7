# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the immersion TCO test suite."""

from __future__ import annotations

import copy

import pytest

from immersion_tco.data.models import CalculationConfiguration, CalculationResults
from immersion_tco.engine import calculate

# Ten 15 kW racks against a 150 kW auto-sized immersion deployment.
BASELINE_CONFIG = {
    "air_cooling": {
        "input_method": "rack_count",
        "rack_count": 10,
        "power_per_rack_kw": 15,
    },
    "immersion_cooling": {
        "input_method": "auto_optimize",
        "target_power_kw": 150,
    },
    "financial": {
        "analysis_years": 5,
        "currency": "USD",
        "region": "US",
    },
}


@pytest.fixture()
def baseline_config() -> dict:
    """A fresh, mutable copy of the baseline configuration mapping."""
    return copy.deepcopy(BASELINE_CONFIG)


@pytest.fixture()
def baseline_configuration(baseline_config: dict) -> CalculationConfiguration:
    """The baseline configuration as a validated model."""
    return CalculationConfiguration.model_validate(baseline_config)


@pytest.fixture()
def baseline_results(baseline_configuration: CalculationConfiguration) -> CalculationResults:
    """Results of running the engine on the baseline configuration."""
    return calculate(baseline_configuration)


@pytest.fixture()
def manual_config(baseline_config: dict) -> dict:
    """Baseline with a hand-picked pair of tank groups instead of auto sizing."""
    baseline_config["immersion_cooling"] = {
        "input_method": "manual_config",
        "tank_configurations": [
            {"size": "23U", "quantity": 2, "power_density_kw_per_u": 2.0},
            {"size": "42U", "quantity": 1, "power_density_kw_per_u": 1.5},
        ],
    }
    return baseline_config
