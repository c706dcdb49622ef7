# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Summary assembly, chart series and terminal output."""

from immersion_tco.reporting.charts import build_chart_data
from immersion_tco.reporting.summary import build_breakdown, build_summary
from immersion_tco.reporting.terminal import TerminalRenderer

__all__ = [
    "TerminalRenderer",
    "build_breakdown",
    "build_chart_data",
    "build_summary",
]
