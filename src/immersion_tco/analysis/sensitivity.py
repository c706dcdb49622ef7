# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Sensitivity analysis over financial parameters.

Re-runs the engine across a symmetric range of values for one financial
parameter at a time and records how TCO savings and ROI respond.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Literal, Optional

import numpy as np
from pydantic import BaseModel, Field

from immersion_tco.data.defaults import resolve_financial_parameters
from immersion_tco.data.models import (
    CalculationConfiguration,
    SensitivityScenario,
    SensitivitySeries,
)
from immersion_tco.engine import calculate
from immersion_tco.validation import coerce_configuration

logger = logging.getLogger(__name__)

SensitivityParameterName = Literal[
    "energy_cost",
    "discount_rate",
    "energy_escalation_rate",
    "maintenance_escalation_rate",
]

# Financial field that overrides each parameter
_OVERRIDE_FIELDS: dict[str, str] = {
    "energy_cost": "custom_energy_cost",
    "discount_rate": "custom_discount_rate",
    "energy_escalation_rate": "energy_escalation_rate",
    "maintenance_escalation_rate": "maintenance_escalation_rate",
}

# Attribute of FinancialParameters holding the effective base value
_RESOLVED_FIELDS: dict[str, str] = {
    "energy_cost": "energy_cost_per_kwh",
    "discount_rate": "discount_rate",
    "energy_escalation_rate": "energy_escalation_rate",
    "maintenance_escalation_rate": "maintenance_escalation_rate",
}


class SensitivityParameter(BaseModel):
    """One parameter to sweep.

    ``variation_range`` is a percentage of the base value applied on both
    sides, so ``20`` sweeps from 80 % to 120 % of the base.
    """

    model_config = {"frozen": True}

    name: SensitivityParameterName
    base_value: Optional[float] = Field(
        default=None, allow_inf_nan=False,
        description="Centre of the sweep; defaults to the configuration's effective value",
    )
    variation_range: float = Field(default=20.0, gt=0, lt=100)
    steps: int = Field(default=5, ge=2)


def sweep_values(base_value: float, variation_range: float, steps: int) -> list[float]:
    """Evenly spaced values across ``base ± variation_range %``."""
    spread = abs(base_value) * variation_range / 100
    return [float(v) for v in np.linspace(base_value - spread, base_value + spread, steps)]


def _with_financial(
    config: CalculationConfiguration, field: str, value: float
) -> CalculationConfiguration:
    financial = config.financial.model_copy(update={field: value})
    return config.model_copy(update={"financial": financial})


def run_sensitivity_analysis(
    configuration: CalculationConfiguration | Mapping[str, Any],
    parameters: list[SensitivityParameter],
) -> list[SensitivitySeries]:
    """Return one ``SensitivitySeries`` per parameter, in input order."""
    config = coerce_configuration(configuration)
    resolved = resolve_financial_parameters(config.financial)

    series: list[SensitivitySeries] = []
    for parameter in parameters:
        base = parameter.base_value
        if base is None:
            base = getattr(resolved, _RESOLVED_FIELDS[parameter.name])

        values = sweep_values(base, parameter.variation_range, parameter.steps)
        logger.debug(
            "Sweeping %s over %d values around %.4f", parameter.name, len(values), base
        )

        scenarios: list[SensitivityScenario] = []
        for value in values:
            variant = _with_financial(config, _OVERRIDE_FIELDS[parameter.name], value)
            # model_copy skips validation
            variant = coerce_configuration(variant.model_dump())
            summary = calculate(variant).summary
            scenarios.append(
                SensitivityScenario(
                    value=value,
                    tco_savings=summary.total_tco_savings_5yr,
                    roi_percent=summary.roi_percent,
                )
            )

        series.append(SensitivitySeries(parameter=parameter.name, scenarios=scenarios))

    return series
