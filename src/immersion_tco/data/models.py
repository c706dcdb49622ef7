# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the TCO calculator.

This module defines the complete data contract used by all other modules:
the immutable calculation configuration, the per-method resolved system
parameters, and every record that makes up a ``CalculationResults``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, Field, computed_field, model_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Currency(str, Enum):
    """Currencies supported for reporting."""

    USD = "USD"
    EUR = "EUR"
    SAR = "SAR"
    AED = "AED"


class Region(str, Enum):
    """Regions with default energy, labor and grid-carbon figures."""

    US = "US"
    EU = "EU"
    ME = "ME"


class AirCoolingInputMethod(str, Enum):
    """How the air-cooled installation is described."""

    rack_count = "rack_count"
    total_power = "total_power"


class ImmersionCoolingInputMethod(str, Enum):
    """How the immersion-cooled installation is described."""

    auto_optimize = "auto_optimize"
    manual_config = "manual_config"


# ---------------------------------------------------------------------------
# Numeric field types
# ---------------------------------------------------------------------------

# Strict numbers: strings are rejected instead of coerced, NaN/inf refused.
PositiveFloat = Annotated[float, Field(strict=True, gt=0, allow_inf_nan=False)]
NonNegativeFloat = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
PositiveInt = Annotated[int, Field(strict=True, ge=1)]
Efficiency = Annotated[float, Field(strict=True, gt=0, le=1.0, allow_inf_nan=False)]
Rate = Annotated[float, Field(strict=True, gt=-1.0, allow_inf_nan=False)]


# ---------------------------------------------------------------------------
# Configuration models (input)
# ---------------------------------------------------------------------------

class AirCoolingConfig(BaseModel):
    """Air-cooling section of a calculation configuration."""

    model_config = {"frozen": True}

    input_method: AirCoolingInputMethod = Field(
        ..., description="Discriminator selecting rack-count or total-power input"
    )

    # rack_count method
    rack_count: Optional[PositiveInt] = Field(
        default=None, description="Number of 42U racks"
    )
    rack_type: Optional[str] = Field(default=None, description="Rack model label")
    power_per_rack_kw: Optional[PositiveFloat] = Field(
        default=None, description="IT power per rack in kW"
    )

    # total_power method
    total_power_kw: Optional[PositiveFloat] = Field(
        default=None, description="Total IT power in kW"
    )

    # Efficiency overrides
    hvac_efficiency: Optional[Efficiency] = Field(
        default=None, description="HVAC efficiency fraction (0-1]"
    )
    power_distribution_efficiency: Optional[Efficiency] = Field(
        default=None, description="Power distribution efficiency fraction (0-1]"
    )
    space_efficiency: Optional[Efficiency] = Field(
        default=None, description="Space utilisation fraction (0-1]"
    )

    @model_validator(mode="after")
    def _check_method_fields(self) -> AirCoolingConfig:
        if self.input_method is AirCoolingInputMethod.rack_count:
            if self.rack_count is None or self.power_per_rack_kw is None:
                raise ValueError(
                    "rack count and power per rack are required for the "
                    "rack_count input method"
                )
        elif self.total_power_kw is None:
            raise ValueError(
                "total power is required for the total_power input method"
            )
        return self


class TankConfiguration(BaseModel):
    """One immersion tank group: a (size, quantity, power density) triple."""

    model_config = {"frozen": True}

    size: str = Field(..., pattern=r"^[1-9]\d*U$", description="Tank height, e.g. '23U'")
    quantity: PositiveInt = Field(..., description="Number of tanks of this size")
    power_density_kw_per_u: PositiveFloat = Field(
        ..., description="IT power per rack unit in kW"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def height_units(self) -> int:
        """Tank height in rack units parsed from ``size``."""
        return int(self.size[:-1])


class ImmersionCoolingConfig(BaseModel):
    """Immersion-cooling section of a calculation configuration."""

    model_config = {"frozen": True}

    input_method: ImmersionCoolingInputMethod = Field(
        ..., description="Discriminator selecting auto-optimize or manual tanks"
    )

    # auto_optimize method
    target_power_kw: Optional[PositiveFloat] = Field(
        default=None, description="Target IT power in kW"
    )

    # manual_config method
    tank_configurations: Optional[tuple[TankConfiguration, ...]] = Field(
        default=None, description="Explicit tank groups"
    )

    coolant_type: Optional[str] = Field(default=None, description="Dielectric fluid label")
    pumping_efficiency: Optional[Efficiency] = Field(default=None)
    heat_exchanger_efficiency: Optional[Efficiency] = Field(default=None)

    @model_validator(mode="after")
    def _check_method_fields(self) -> ImmersionCoolingConfig:
        if self.input_method is ImmersionCoolingInputMethod.auto_optimize:
            if self.target_power_kw is None:
                raise ValueError(
                    "target power is required for the auto_optimize input method"
                )
        elif not self.tank_configurations:
            raise ValueError(
                "tank configurations are required for the manual_config input method"
            )
        return self


class FinancialConfig(BaseModel):
    """Financial assumptions for the analysis horizon."""

    model_config = {"frozen": True}

    analysis_years: int = Field(
        default=5, strict=True, ge=1, le=10, description="Analysis horizon in years"
    )
    discount_rate: Optional[Rate] = Field(default=None)
    energy_cost_kwh: Optional[NonNegativeFloat] = Field(default=None)
    energy_escalation_rate: Optional[Rate] = Field(default=None)
    maintenance_escalation_rate: Optional[Rate] = Field(default=None)
    currency: Currency = Field(default=Currency.USD)
    region: Optional[Region] = Field(default=None)

    custom_discount_rate: Optional[Rate] = Field(default=None)
    custom_energy_cost: Optional[NonNegativeFloat] = Field(default=None)
    custom_labor_cost: Optional[NonNegativeFloat] = Field(default=None)


class CalculationConfiguration(BaseModel):
    """Immutable, already-parsed input to the calculation engine."""

    model_config = {"frozen": True}

    air_cooling: AirCoolingConfig
    immersion_cooling: ImmersionCoolingConfig
    financial: FinancialConfig


class FinancialParameters(BaseModel):
    """Financial inputs after applying overrides and regional defaults."""

    model_config = {"frozen": True}

    analysis_years: int
    currency: Currency
    region: Region
    discount_rate: float
    energy_cost_per_kwh: float
    labor_cost_per_hour: float
    energy_escalation_rate: float
    maintenance_escalation_rate: float
    carbon_factor_kg_per_kwh: float


# ---------------------------------------------------------------------------
# Resolved system models
# ---------------------------------------------------------------------------

class ResolvedAirCooling(BaseModel):
    """Physical parameters derived from the air-cooling configuration."""

    total_racks: int = Field(..., ge=0)
    total_power_kw: float = Field(..., description="IT load in kW")
    power_per_rack_kw: float
    hvac_power_kw: float
    distribution_losses_kw: float
    total_facility_power_kw: float = Field(..., description="IT load plus overhead")
    pue: float = Field(..., ge=1.0)
    hvac_efficiency: float
    power_distribution_efficiency: float


class ResolvedTankGroup(BaseModel):
    """A tank group after sizing, with its share of IT power."""

    size: str
    height_units: int
    quantity: int
    power_kw: float


class ResolvedImmersionCooling(BaseModel):
    """Physical parameters derived from the immersion-cooling configuration."""

    total_tanks: int = Field(..., ge=0)
    total_power_kw: float = Field(..., description="IT load in kW")
    tank_groups: list[ResolvedTankGroup] = Field(default_factory=list)
    pump_power_kw: float
    heat_exchanger_power_kw: float
    total_facility_power_kw: float = Field(..., description="IT load plus overhead")
    pue: float = Field(..., ge=1.0)
    pumping_efficiency: float
    heat_exchanger_efficiency: float
    total_coolant_liters: float


# ---------------------------------------------------------------------------
# Cost models
# ---------------------------------------------------------------------------

class CostBreakdown(BaseModel):
    """Itemised capital cost for one cooling method."""

    model_config = {"frozen": True}

    equipment: float
    installation: float
    infrastructure: float
    coolant: Optional[float] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> float:
        """Sum of the present components."""
        total = self.equipment + self.installation + self.infrastructure
        if self.coolant is not None:
            total += self.coolant
        return total


class OperatingCosts(BaseModel):
    """Itemised operating cost for one cooling method in one year."""

    model_config = {"frozen": True}

    energy: float
    maintenance: float
    labor: float
    coolant: Optional[float] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> float:
        """Sum of the present components."""
        total = self.energy + self.maintenance + self.labor
        if self.coolant is not None:
            total += self.coolant
        return total


class CapexComparison(BaseModel):
    """Capital cost of both methods and the immersion savings."""

    model_config = {"frozen": True}

    air_cooling: CostBreakdown
    immersion_cooling: CostBreakdown
    savings: float
    savings_percent: float


class AnnualCosts(BaseModel):
    """Operating costs of both methods for one analysis year."""

    model_config = {"frozen": True}

    year: int = Field(..., ge=1)
    air_cooling: OperatingCosts
    immersion_cooling: OperatingCosts
    savings: float
    savings_percent: float


class TcoProgressionPoint(BaseModel):
    """Cumulative TCO of both methods at the end of a year."""

    model_config = {"frozen": True}

    year: int = Field(..., ge=1)
    air_cooling: float
    immersion_cooling: float
    savings: float = Field(..., description="Difference of cumulative totals")
    npv_savings: float = Field(..., description="Discounted OPEX savings of this year")


class MaintenanceScheduleEntry(BaseModel):
    """Maintenance spend for one year, including major overhauls."""

    model_config = {"frozen": True}

    year: int = Field(..., ge=1)
    air_cooling_maintenance: float
    immersion_cooling_maintenance: float
    major_overhauls: float


class CalculationBreakdown(BaseModel):
    """Detailed cost tables backing the summary."""

    model_config = {"frozen": True}

    capex: CapexComparison
    opex_annual: list[AnnualCosts]
    tco_cumulative: list[TcoProgressionPoint]
    maintenance_schedule: list[MaintenanceScheduleEntry]


# ---------------------------------------------------------------------------
# Efficiency and environmental models
# ---------------------------------------------------------------------------

class PUEAnalysis(BaseModel):
    """Power Usage Effectiveness comparison."""

    model_config = {"frozen": True}

    air_cooling: float = Field(..., ge=1.0)
    immersion_cooling: float = Field(..., ge=1.0)
    improvement_percent: float
    energy_savings_kwh_annual: float


class EnvironmentalImpact(BaseModel):
    """Annual environmental benefit of switching to immersion cooling."""

    model_config = {"frozen": True}

    carbon_savings_kg_co2_annual: float
    water_savings_gallons_annual: float
    energy_savings_kwh_annual: float
    carbon_footprint_reduction_percent: float


# ---------------------------------------------------------------------------
# Summary and chart models
# ---------------------------------------------------------------------------

class CalculationSummary(BaseModel):
    """Top-level financial and efficiency metrics.

    The ``_5yr`` suffixes are historical: the values cover the whole
    configured analysis horizon.
    """

    model_config = {"frozen": True}

    total_capex_savings: float
    total_opex_savings_5yr: float
    total_tco_savings_5yr: float

    roi_percent: float
    payback_months: float = Field(
        ..., ge=0, description="Capped at analysis_years * 12 when not reached"
    )
    npv_savings: float

    pue_air_cooling: float = Field(..., ge=1.0)
    pue_immersion_cooling: float = Field(..., ge=1.0)
    energy_efficiency_improvement: float

    cost_per_kw_air_cooling: float
    cost_per_kw_immersion_cooling: float
    cost_per_rack_air_cooling: float
    cost_per_rack_equivalent: float = Field(
        ..., description="Immersion CAPEX per air-cooling rack"
    )


class TcoChartPoint(BaseModel):
    model_config = {"frozen": True}

    year: int
    air_cooling: float
    immersion_cooling: float
    savings: float
    cumulative_savings: float


class PUEComparison(BaseModel):
    model_config = {"frozen": True}

    air_cooling: float
    immersion_cooling: float


class CostCategoryComparison(BaseModel):
    model_config = {"frozen": True}

    air_cooling: float
    immersion_cooling: float
    difference: float


class SensitivityScenario(BaseModel):
    """Outcome of one parameter value in a sensitivity sweep."""

    model_config = {"frozen": True}

    value: float
    tco_savings: float
    roi_percent: float


class SensitivitySeries(BaseModel):
    """All scenarios for one swept parameter."""

    model_config = {"frozen": True}

    parameter: str
    scenarios: list[SensitivityScenario] = Field(default_factory=list)


class ChartData(BaseModel):
    """Display-ready series for an external rendering layer."""

    model_config = {"frozen": True}

    tco_progression: list[TcoChartPoint]
    pue_comparison: PUEComparison
    cost_categories: dict[str, CostCategoryComparison]
    sensitivity_analysis: list[SensitivitySeries] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Results and validation
# ---------------------------------------------------------------------------

class CalculationResults(BaseModel):
    """Complete output of one ``calculate()`` call."""

    model_config = {"frozen": True}

    summary: CalculationSummary
    breakdown: CalculationBreakdown
    charts: ChartData
    environmental: EnvironmentalImpact
    pue_analysis: PUEAnalysis

    calculation_id: str = Field(..., description="Unique per call")
    calculated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
    calculation_version: str = Field(default="1.0")
    configuration_hash: str = Field(..., description="Stable hash of the input")


class ValidationWarning(BaseModel):
    """A non-blocking hint about a plausible but unusual input."""

    field: str
    message: str
    suggestion: Optional[str] = None


class ValidationResult(BaseModel):
    """Outcome of the advisory pre-flight validator."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)
