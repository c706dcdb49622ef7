# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as bar charts and
sparklines in the terminal via the Rich library.
"""

from __future__ import annotations

_BLOCKS = " ▁▂▃▄▅▆▇█"


def horizontal_bar(
    label: str,
    value: float,
    max_value: float,
    caption: str,
    width: int = 30,
    color: str = "cyan",
) -> str:
    """Render one bar of a comparison chart.

    Returns a Rich-markup string like:
        Air cooling........... [red]████████████░░░░░░░░[/] $1,234,567.00
    """
    if max_value <= 0:
        return f"  {label:.<24} [dim]no data[/] {caption}"
    ratio = max(0.0, min(value / max_value, 1.0))
    filled = int(ratio * width)
    bar = "█" * filled + "░" * (width - filled)
    return f"  {label:.<24} [{color}]{bar}[/] {caption}"


def sparkline(values: list[float]) -> str:
    """Render a sparkline; each value maps to one of 9 block heights."""
    if not values:
        return ""

    min_v = min(values)
    max_v = max(values)
    range_v = max_v - min_v or 1

    return "".join(_BLOCKS[int((v - min_v) / range_v * 8)] for v in values)


def savings_marker(value: float) -> str:
    """Green for savings, red for an extra cost."""
    if value > 0:
        return "[green]▲[/]"
    if value < 0:
        return "[red]▼[/]"
    return "[dim]=[/]"
