# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the CAPEX, OPEX and TCO progression calculators."""

from __future__ import annotations

import logging

import pytest

from immersion_tco.costs.capex import calculate_capex, percent_of
from immersion_tco.costs.opex import (
    build_maintenance_schedule,
    coolant_top_up_due,
    escalate,
    project_opex,
)
from immersion_tco.costs.progression import (
    build_tco_progression,
    calculate_payback_months,
    calculate_roi_percent,
    discount_factor,
)
from immersion_tco.data.defaults import resolve_financial_parameters
from immersion_tco.data.models import CalculationConfiguration
from immersion_tco.systems.air import resolve_air_cooling
from immersion_tco.systems.immersion import resolve_immersion_cooling


@pytest.fixture()
def systems(baseline_configuration: CalculationConfiguration):
    air = resolve_air_cooling(baseline_configuration.air_cooling)
    imm = resolve_immersion_cooling(baseline_configuration.immersion_cooling)
    params = resolve_financial_parameters(baseline_configuration.financial)
    return air, imm, params


class TestCapex:
    """Tests for calculate_capex."""

    def test_air_components(self, systems):
        air, imm, _ = systems
        capex = calculate_capex(air, imm)
        # 10 racks plus three 30 kW HVAC units
        assert capex.air_cooling.equipment == pytest.approx(10 * 2500 + 3 * 25000)
        assert capex.air_cooling.installation == pytest.approx(10 * 1000 + 3 * 8000)
        assert capex.air_cooling.infrastructure == pytest.approx(air.total_facility_power_kw * 500)
        assert capex.air_cooling.coolant is None

    def test_immersion_components(self, systems):
        air, imm, _ = systems
        capex = calculate_capex(air, imm)
        assert capex.immersion_cooling.equipment == pytest.approx(
            4 * 35000 + 8000 * 4 / 10 + 5000 * 4 / 15
        )
        assert capex.immersion_cooling.installation == pytest.approx(4 * 35000 * 0.25)
        assert capex.immersion_cooling.coolant == pytest.approx(2300 * 25)
        assert capex.immersion_cooling.infrastructure == pytest.approx(153 * 200)

    def test_totals_sum_components(self, systems):
        air, imm, _ = systems
        capex = calculate_capex(air, imm)
        a, i = capex.air_cooling, capex.immersion_cooling
        assert a.total == pytest.approx(a.equipment + a.installation + a.infrastructure, rel=1e-6)
        assert i.total == pytest.approx(
            i.equipment + i.installation + i.infrastructure + i.coolant, rel=1e-6
        )

    def test_savings(self, systems):
        air, imm, _ = systems
        capex = calculate_capex(air, imm)
        assert capex.savings == pytest.approx(capex.air_cooling.total - capex.immersion_cooling.total)
        assert capex.savings < 0
        assert capex.savings_percent == pytest.approx(
            capex.savings / capex.air_cooling.total * 100
        )

    def test_percent_of_zero_whole(self):
        assert percent_of(5.0, 0.0) == 0.0


class TestOpex:
    """Tests for the yearly OPEX projection."""

    def test_escalate(self):
        assert escalate(100.0, 0.1, 1) == pytest.approx(100.0)
        assert escalate(100.0, 0.1, 3) == pytest.approx(121.0)

    def test_coolant_top_up_years(self):
        assert [coolant_top_up_due(y) for y in range(1, 5)] == [False, True, False, True]

    def test_length_matches_horizon(self, systems):
        air, imm, params = systems
        assert len(project_opex(air, imm, params)) == 5

    def test_first_year_values(self, systems):
        air, imm, params = systems
        year1 = project_opex(air, imm, params)[0]
        assert year1.air_cooling.energy == pytest.approx(air.total_facility_power_kw * 8760 * 0.12)
        assert year1.air_cooling.maintenance == pytest.approx(10 * 2500 * 0.08)
        assert year1.air_cooling.labor == pytest.approx(10 * 24 * 75)
        assert year1.immersion_cooling.energy == pytest.approx(153 * 8760 * 0.12)
        assert year1.immersion_cooling.maintenance == pytest.approx(4 * 35000 * 0.03)
        assert year1.immersion_cooling.labor == pytest.approx(4 * 8 * 75)
        assert year1.immersion_cooling.coolant == 0.0

    def test_coolant_top_up_in_year_two(self, systems):
        air, imm, params = systems
        year2 = project_opex(air, imm, params)[1]
        assert year2.immersion_cooling.coolant == pytest.approx(2300 * 25 * 0.1)

    def test_energy_escalates(self, systems):
        air, imm, params = systems
        opex = project_opex(air, imm, params)
        energies = [c.air_cooling.energy for c in opex]
        assert energies == sorted(energies)
        assert opex[1].air_cooling.energy == pytest.approx(opex[0].air_cooling.energy * 1.03)

    def test_savings_is_difference(self, systems):
        air, imm, params = systems
        for costs in project_opex(air, imm, params):
            assert costs.savings == pytest.approx(
                costs.air_cooling.total - costs.immersion_cooling.total
            )


class TestMaintenanceSchedule:
    """Tests for build_maintenance_schedule."""

    def test_overhaul_only_in_fifth_year(self, systems):
        air, imm, params = systems
        opex = project_opex(air, imm, params)
        schedule = build_maintenance_schedule(opex)
        assert [e.major_overhauls for e in schedule[:4]] == [0.0] * 4
        fifth = schedule[4]
        assert fifth.major_overhauls == pytest.approx(
            2 * (fifth.air_cooling_maintenance + fifth.immersion_cooling_maintenance)
        )


class TestProgression:
    """Tests for cumulative TCO, NPV, payback and ROI."""

    def test_discount_factor(self):
        assert discount_factor(0.1, 2) == pytest.approx(1 / 1.21)

    def test_cumulative_includes_capex(self, systems):
        air, imm, params = systems
        capex = calculate_capex(air, imm)
        opex = project_opex(air, imm, params)
        progression = build_tco_progression(capex, opex, params.discount_rate)
        assert progression[0].air_cooling == pytest.approx(
            capex.air_cooling.total + opex[0].air_cooling.total
        )
        assert progression[-1].savings == pytest.approx(
            capex.savings + sum(c.savings for c in opex)
        )

    def test_cumulative_is_monotonic(self, systems):
        air, imm, params = systems
        progression = build_tco_progression(
            calculate_capex(air, imm), project_opex(air, imm, params), params.discount_rate
        )
        for prev, cur in zip(progression, progression[1:]):
            assert cur.air_cooling >= prev.air_cooling
            assert cur.immersion_cooling >= prev.immersion_cooling

    def test_npv_discounts_yearly_savings(self, systems):
        air, imm, params = systems
        opex = project_opex(air, imm, params)
        progression = build_tco_progression(calculate_capex(air, imm), opex, 0.08)
        assert progression[1].npv_savings == pytest.approx(opex[1].savings / 1.08**2)

    def test_payback_zero_when_capex_saves(self):
        assert calculate_payback_months(100.0, [], 5) == 0.0

    def test_payback_interpolates(self, systems):
        air, imm, params = systems
        opex = project_opex(air, imm, params)
        months = calculate_payback_months(-opex[0].savings / 2, opex, 5)
        assert months == pytest.approx(6.0)

    def test_payback_capped_when_never_reached(self, systems, caplog):
        air, imm, params = systems
        opex = project_opex(air, imm, params)
        with caplog.at_level(logging.WARNING, logger="immersion_tco.costs.progression"):
            months = calculate_payback_months(-1e12, opex, 5)
        assert months == 60.0
        assert "No payback" in caplog.text

    def test_roi(self):
        assert calculate_roi_percent(50.0, 200.0) == pytest.approx(25.0)
        assert calculate_roi_percent(50.0, 0.0) == 0.0
