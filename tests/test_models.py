"""Tests for core Pydantic data models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from immersion_tco.data.models import (
    AirCoolingConfig,
    CalculationConfiguration,
    CostBreakdown,
    Currency,
    FinancialConfig,
    ImmersionCoolingConfig,
    OperatingCosts,
    TankConfiguration,
)


class TestAirCoolingConfig:
    """Tests for the air-cooling input section."""

    def test_rack_count_method(self):
        cfg = AirCoolingConfig(input_method="rack_count", rack_count=10, power_per_rack_kw=15)
        assert cfg.rack_count == 10
        assert cfg.power_per_rack_kw == 15.0

    def test_rack_count_method_requires_power_per_rack(self):
        with pytest.raises(ValidationError, match="rack count"):
            AirCoolingConfig(input_method="rack_count", rack_count=10)

    def test_total_power_method_requires_total(self):
        with pytest.raises(ValidationError, match="total power"):
            AirCoolingConfig(input_method="total_power")

    def test_string_number_rejected(self):
        with pytest.raises(ValidationError):
            AirCoolingConfig(input_method="rack_count", rack_count=10, power_per_rack_kw="15")

    def test_negative_rack_count_rejected(self):
        with pytest.raises(ValidationError):
            AirCoolingConfig(input_method="rack_count", rack_count=-1, power_per_rack_kw=15)

    def test_efficiency_above_one_rejected(self):
        with pytest.raises(ValidationError):
            AirCoolingConfig(input_method="total_power", total_power_kw=100, hvac_efficiency=1.2)

    def test_frozen(self):
        cfg = AirCoolingConfig(input_method="total_power", total_power_kw=100)
        with pytest.raises(ValidationError):
            cfg.total_power_kw = 200


class TestTankConfiguration:
    """Tests for tank groups."""

    def test_height_units(self):
        tank = TankConfiguration(size="42U", quantity=1, power_density_kw_per_u=1.0)
        assert tank.height_units == 42

    def test_bad_size_format(self):
        with pytest.raises(ValidationError):
            TankConfiguration(size="23", quantity=1, power_density_kw_per_u=1.0)

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            TankConfiguration(size="23U", quantity=0, power_density_kw_per_u=1.0)

    @pytest.mark.parametrize("size", ["0U", "00U", "012U"])
    def test_zero_or_padded_height_rejected(self, size):
        with pytest.raises(ValidationError):
            TankConfiguration(size=size, quantity=1, power_density_kw_per_u=1.0)


class TestImmersionCoolingConfig:
    """Tests for the immersion-cooling input section."""

    def test_auto_optimize_requires_target(self):
        with pytest.raises(ValidationError, match="target power"):
            ImmersionCoolingConfig(input_method="auto_optimize")

    def test_manual_config_requires_tanks(self):
        with pytest.raises(ValidationError, match="tank configurations"):
            ImmersionCoolingConfig(input_method="manual_config", tank_configurations=[])


class TestFinancialConfig:
    """Tests for the financial section."""

    def test_defaults(self):
        fin = FinancialConfig()
        assert fin.analysis_years == 5
        assert fin.currency is Currency.USD
        assert fin.region is None

    def test_nan_discount_rate_rejected(self):
        with pytest.raises(ValidationError):
            FinancialConfig(discount_rate=math.nan)

    def test_infinite_energy_cost_rejected(self):
        with pytest.raises(ValidationError):
            FinancialConfig(energy_cost_kwh=math.inf)

    @pytest.mark.parametrize("years", [0, 11])
    def test_analysis_years_bounds(self, years):
        with pytest.raises(ValidationError):
            FinancialConfig(analysis_years=years)

    def test_unknown_region_rejected(self):
        with pytest.raises(ValidationError):
            FinancialConfig(region="APAC")


class TestCalculationConfiguration:
    """Tests for the top-level configuration."""

    def test_missing_section(self, baseline_config):
        del baseline_config["financial"]
        with pytest.raises(ValidationError):
            CalculationConfiguration.model_validate(baseline_config)

    def test_equal_content_compares_equal(self, baseline_config):
        a = CalculationConfiguration.model_validate(baseline_config)
        b = CalculationConfiguration.model_validate(baseline_config)
        assert a == b


class TestCostTotals:
    """Tests for the computed ``total`` fields."""

    def test_capex_total_without_coolant(self):
        cost = CostBreakdown(equipment=100.0, installation=20.0, infrastructure=30.0)
        assert cost.total == 150.0

    def test_capex_total_with_coolant(self):
        cost = CostBreakdown(equipment=100.0, installation=20.0, infrastructure=30.0, coolant=5.0)
        assert cost.total == 155.0

    def test_opex_total(self):
        costs = OperatingCosts(energy=10.0, maintenance=2.0, labor=3.0, coolant=0.0)
        assert costs.total == 15.0

    def test_total_serialised(self):
        cost = CostBreakdown(equipment=1.0, installation=1.0, infrastructure=1.0)
        assert cost.model_dump()["total"] == 3.0
