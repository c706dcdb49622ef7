# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the sensitivity analysis."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from immersion_tco.analysis.sensitivity import (
    SensitivityParameter,
    run_sensitivity_analysis,
    sweep_values,
)


class TestSweepValues:
    """Tests for sweep_values."""

    def test_symmetric_range(self):
        values = sweep_values(0.10, 20, 5)
        assert values == pytest.approx([0.08, 0.09, 0.10, 0.11, 0.12])

    def test_two_steps(self):
        assert sweep_values(100.0, 50, 2) == pytest.approx([50.0, 150.0])


class TestSensitivityParameter:
    """Tests for SensitivityParameter."""

    def test_defaults(self):
        param = SensitivityParameter(name="energy_cost")
        assert param.variation_range == 20.0
        assert param.steps == 5

    def test_unknown_name(self):
        with pytest.raises(ValidationError):
            SensitivityParameter(name="rack_count")

    def test_single_step_rejected(self):
        with pytest.raises(ValidationError):
            SensitivityParameter(name="energy_cost", steps=1)


class TestRunSensitivityAnalysis:
    """Tests for run_sensitivity_analysis."""

    def test_energy_cost_sweep(self, baseline_config):
        series = run_sensitivity_analysis(
            baseline_config, [SensitivityParameter(name="energy_cost", steps=3)]
        )
        assert len(series) == 1
        assert series[0].parameter == "energy_cost"
        values = [s.value for s in series[0].scenarios]
        # Regional US energy cost is the centre of the sweep
        assert values == pytest.approx([0.096, 0.12, 0.144])
        savings = [s.tco_savings for s in series[0].scenarios]
        assert savings == sorted(savings)

    def test_centre_matches_plain_run(self, baseline_config, baseline_results):
        series = run_sensitivity_analysis(
            baseline_config, [SensitivityParameter(name="discount_rate", steps=3)]
        )
        centre = series[0].scenarios[1]
        assert centre.value == pytest.approx(0.08)
        assert centre.tco_savings == pytest.approx(
            baseline_results.summary.total_tco_savings_5yr
        )

    def test_explicit_base_value(self, baseline_config):
        series = run_sensitivity_analysis(
            baseline_config,
            [SensitivityParameter(name="energy_escalation_rate", base_value=0.05, steps=2)],
        )
        assert [s.value for s in series[0].scenarios] == pytest.approx([0.04, 0.06])

    def test_multiple_parameters_in_order(self, baseline_config):
        params = [
            SensitivityParameter(name="maintenance_escalation_rate", steps=2),
            SensitivityParameter(name="energy_cost", steps=2),
        ]
        series = run_sensitivity_analysis(baseline_config, params)
        assert [s.parameter for s in series] == ["maintenance_escalation_rate", "energy_cost"]
