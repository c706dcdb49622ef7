# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the advisory validator and hard configuration coercion."""

from __future__ import annotations

import math

import pytest

from immersion_tco.data.models import CalculationConfiguration
from immersion_tco.errors import ConfigurationShapeError
from immersion_tco.validation import (
    coerce_configuration,
    extract_validation_warnings,
    validate_configuration,
)


def _errors_mention(result, text: str) -> bool:
    return any(text in error for error in result.errors)


class TestValidateConfiguration:
    """Tests for validate_configuration."""

    def test_baseline_is_valid(self, baseline_config):
        result = validate_configuration(baseline_config)
        assert result.valid
        assert result.errors == []

    def test_accepts_model(self, baseline_configuration):
        assert validate_configuration(baseline_configuration).valid

    def test_manual_config_is_valid(self, manual_config):
        assert validate_configuration(manual_config).valid

    def test_missing_rack_fields(self):
        result = validate_configuration({"air_cooling": {"input_method": "rack_count"}})
        assert not result.valid
        assert _errors_mention(result, "rack count")

    def test_missing_sections(self):
        result = validate_configuration({})
        assert not result.valid
        assert len(result.errors) == 3

    @pytest.mark.parametrize("value", [None, 42, "config", ["a"]])
    def test_never_raises_on_garbage(self, value):
        result = validate_configuration(value)
        assert not result.valid

    def test_garbage_inside_sections(self):
        result = validate_configuration(
            {"air_cooling": "x", "immersion_cooling": 3, "financial": []}
        )
        assert not result.valid

    def test_zero_height_tank(self, manual_config):
        manual_config["immersion_cooling"]["tank_configurations"][0]["size"] = "0U"
        result = validate_configuration(manual_config)
        assert not result.valid
        assert _errors_mention(result, "size")

    def test_unknown_input_method(self, baseline_config):
        baseline_config["air_cooling"]["input_method"] = "magic"
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "input method")

    def test_total_power_method_requires_total(self, baseline_config):
        baseline_config["air_cooling"] = {"input_method": "total_power"}
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "total power")

    def test_rack_count_out_of_range(self, baseline_config):
        baseline_config["air_cooling"]["rack_count"] = 5000
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "rack count")

    def test_power_per_rack_out_of_range(self, baseline_config):
        baseline_config["air_cooling"]["power_per_rack_kw"] = 80
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "power per rack")

    def test_aggregate_power_limit(self, baseline_config):
        baseline_config["immersion_cooling"]["target_power_kw"] = 60000
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "exceeds the maximum")

    def test_bad_tank_size(self, manual_config):
        manual_config["immersion_cooling"]["tank_configurations"][0]["size"] = "23"
        result = validate_configuration(manual_config)
        assert _errors_mention(result, "size")

    def test_power_density_limit(self, manual_config):
        manual_config["immersion_cooling"]["tank_configurations"][0][
            "power_density_kw_per_u"
        ] = 9.0
        result = validate_configuration(manual_config)
        assert _errors_mention(result, "power density")

    def test_empty_tank_list(self, manual_config):
        manual_config["immersion_cooling"]["tank_configurations"] = []
        result = validate_configuration(manual_config)
        assert _errors_mention(result, "tank configurations are required")

    def test_too_many_tank_groups(self, manual_config):
        tank = {"size": "23U", "quantity": 1, "power_density_kw_per_u": 1.0}
        manual_config["immersion_cooling"]["tank_configurations"] = [tank] * 51
        result = validate_configuration(manual_config)
        assert _errors_mention(result, "cannot exceed 50")

    def test_analysis_years_range(self, baseline_config):
        baseline_config["financial"]["analysis_years"] = 15
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "Analysis years")

    def test_discount_rate_range(self, baseline_config):
        baseline_config["financial"]["discount_rate"] = 0.5
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "Discount rate")

    def test_nan_discount_rate(self, baseline_config):
        baseline_config["financial"]["discount_rate"] = math.nan
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "finite")

    def test_unknown_currency_and_region(self, baseline_config):
        baseline_config["financial"]["currency"] = "GBP"
        baseline_config["financial"]["region"] = "APAC"
        result = validate_configuration(baseline_config)
        assert _errors_mention(result, "Unsupported currency: GBP")
        assert _errors_mention(result, "Unsupported region: APAC")


class TestValidationWarnings:
    """Tests for extract_validation_warnings."""

    def test_no_warnings_for_baseline(self, baseline_config):
        assert extract_validation_warnings(baseline_config) == []

    def test_high_power_per_rack(self, baseline_config):
        baseline_config["air_cooling"]["power_per_rack_kw"] = 40
        fields = [w.field for w in extract_validation_warnings(baseline_config)]
        assert fields == ["air_cooling.power_per_rack_kw"]

    def test_high_discount_rate(self, baseline_config):
        baseline_config["financial"]["discount_rate"] = 0.2
        result = validate_configuration(baseline_config)
        assert result.valid
        assert [w.field for w in result.warnings] == ["financial.discount_rate"]

    def test_many_tank_groups(self, manual_config):
        tank = {"size": "23U", "quantity": 1, "power_density_kw_per_u": 1.0}
        manual_config["immersion_cooling"]["tank_configurations"] = [tank] * 11
        warnings = extract_validation_warnings(manual_config)
        assert warnings[0].field == "immersion_cooling.tank_configurations"
        assert warnings[0].suggestion


class TestCoerceConfiguration:
    """Tests for coerce_configuration."""

    def test_returns_model(self, baseline_config):
        assert isinstance(coerce_configuration(baseline_config), CalculationConfiguration)

    def test_passes_model_through(self, baseline_configuration):
        assert coerce_configuration(baseline_configuration) is baseline_configuration

    def test_errors_carry_field_paths(self, baseline_config):
        baseline_config["air_cooling"]["rack_count"] = "ten"
        with pytest.raises(ConfigurationShapeError) as exc_info:
            coerce_configuration(baseline_config)
        assert any(e.startswith("air_cooling.") for e in exc_info.value.errors)

    def test_non_mapping(self):
        with pytest.raises(ConfigurationShapeError, match="mapping"):
            coerce_configuration(None)

    def test_zero_height_tanks_rejected(self, manual_config):
        manual_config["immersion_cooling"]["tank_configurations"] = [
            {"size": "0U", "quantity": 3, "power_density_kw_per_u": 2.0},
        ]
        with pytest.raises(ConfigurationShapeError) as exc_info:
            coerce_configuration(manual_config)
        assert any("size" in e for e in exc_info.value.errors)
