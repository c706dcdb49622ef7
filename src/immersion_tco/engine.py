# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Master calculation orchestrator.

Runs the full pipeline for one configuration:

    resolve systems -> CAPEX -> OPEX -> TCO progression -> PUE and
    environmental analysis -> summary -> chart series

and stamps the result with a fresh calculation id and a stable
configuration hash.  Each call is independent; no state is shared between
calls.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from immersion_tco.analysis.environmental import (
    analyze_environmental_impact,
    analyze_pue,
)
from immersion_tco.costs.capex import calculate_capex
from immersion_tco.costs.opex import project_opex
from immersion_tco.costs.progression import build_tco_progression
from immersion_tco.data.defaults import resolve_financial_parameters
from immersion_tco.data.models import (
    CalculationConfiguration,
    CalculationResults,
    FinancialParameters,
)
from immersion_tco.reporting.charts import build_chart_data
from immersion_tco.reporting.summary import build_breakdown, build_summary
from immersion_tco.systems.air import resolve_air_cooling
from immersion_tco.systems.immersion import resolve_immersion_cooling
from immersion_tco.validation import coerce_configuration

logger = logging.getLogger(__name__)

CALCULATION_VERSION = "1.0"

# Processing-time estimate, in milliseconds
_BASE_PROCESSING_MS = 100
_PER_TANK_GROUP_MS = 10
_PER_YEAR_MS = 20
_MAX_PROCESSING_MS = 5000


class CalculationEngine:
    """Runs the TCO pipeline for one configuration.

    Usage::

        engine = CalculationEngine(configuration)
        results = engine.calculate()

    The configuration is checked on construction; a malformed one raises
    :class:`~immersion_tco.errors.ConfigurationShapeError` before any
    arithmetic happens.
    """

    def __init__(self, configuration: CalculationConfiguration | Mapping[str, Any]) -> None:
        self.configuration = coerce_configuration(configuration)
        self.parameters: FinancialParameters = resolve_financial_parameters(
            self.configuration.financial
        )

    def calculate(self) -> CalculationResults:
        """Run every stage and assemble a ``CalculationResults``."""
        config = self.configuration
        params = self.parameters

        air = resolve_air_cooling(config.air_cooling)
        immersion = resolve_immersion_cooling(config.immersion_cooling)
        logger.debug(
            "Resolved systems: %d racks at PUE %.3f, %d tanks at PUE %.3f",
            air.total_racks, air.pue, immersion.total_tanks, immersion.pue,
        )

        capex = calculate_capex(air, immersion)
        opex_annual = project_opex(air, immersion, params)
        progression = build_tco_progression(capex, opex_annual, params.discount_rate)

        pue = analyze_pue(air, immersion)
        environmental = analyze_environmental_impact(pue, params.carbon_factor_kg_per_kwh)

        summary = build_summary(
            capex, opex_annual, progression, pue, air, immersion, params.analysis_years
        )
        breakdown = build_breakdown(capex, opex_annual, progression)
        charts = build_chart_data(breakdown, pue)

        results = CalculationResults(
            summary=summary,
            breakdown=breakdown,
            charts=charts,
            environmental=environmental,
            pue_analysis=pue,
            calculation_id=generate_calculation_id(),
            calculated_at=datetime.now(timezone.utc),
            calculation_version=CALCULATION_VERSION,
            configuration_hash=configuration_hash(config),
        )
        logger.debug(
            "Calculation %s complete: TCO savings %.2f over %d years",
            results.calculation_id, summary.total_tco_savings_5yr, params.analysis_years,
        )
        return results


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def calculate(
    configuration: CalculationConfiguration | Mapping[str, Any],
) -> CalculationResults:
    """Convenience wrapper: ``CalculationEngine(configuration).calculate()``."""
    return CalculationEngine(configuration).calculate()


def configuration_hash(configuration: CalculationConfiguration | Mapping[str, Any]) -> str:
    """Stable hash of a configuration's content.

    Two configurations that are equal field by field hash identically,
    regardless of how they were built.  Unset optional fields do not
    contribute.
    """
    config = coerce_configuration(configuration)
    canonical = json.dumps(
        config.model_dump(mode="json", exclude_none=True),
        sort_keys=True,
        separators=(",", ":"),
    )
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"hash_{digest[:16]}"


def generate_calculation_id() -> str:
    """Unique id of the form ``calc_<epoch ms>_<random>``."""
    return f"calc_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = config.get(name)
    return section if isinstance(section, Mapping) else {}


def estimate_processing_time(configuration: Any) -> int:
    """Rough processing-time estimate in milliseconds, for UI hints.

    Accepts a configuration model or a raw mapping. Missing or malformed
    sections fall back to a single-year, no-tank estimate.
    """
    if isinstance(configuration, CalculationConfiguration):
        tanks = configuration.immersion_cooling.tank_configurations or ()
        years = configuration.financial.analysis_years
    else:
        config = configuration if isinstance(configuration, Mapping) else {}
        tanks = _section(config, "immersion_cooling").get("tank_configurations")
        years = _section(config, "financial").get("analysis_years")
        if not isinstance(tanks, (list, tuple)):
            tanks = ()
        if not isinstance(years, int) or isinstance(years, bool) or years < 1:
            years = 1

    estimate = _BASE_PROCESSING_MS + len(tanks) * _PER_TANK_GROUP_MS + years * _PER_YEAR_MS
    return min(estimate, _MAX_PROCESSING_MS)
