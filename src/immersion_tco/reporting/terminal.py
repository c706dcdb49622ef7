"""Rich terminal report renderer.

Composes Rich tables, panels, and ASCII charts into the primary
user-facing terminal output for a TCO comparison.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from immersion_tco.currency import format_currency
from immersion_tco.data.models import (
    CalculationResults,
    Currency,
    SensitivitySeries,
    ValidationResult,
)
from immersion_tco.reporting.ascii_charts import horizontal_bar, savings_marker, sparkline


class TerminalRenderer:
    """Renders calculation results to the terminal using Rich."""

    def __init__(self, console: Console | None = None, currency: Currency = Currency.USD) -> None:
        self.console = console or Console()
        self.currency = currency

    def _money(self, amount: float) -> str:
        return format_currency(amount, self.currency)

    def render(self, results: CalculationResults, show_details: bool = True) -> None:
        """Render the full TCO report to the terminal."""
        self._render_header(results)
        self._render_summary(results)
        self._render_capex(results)
        if show_details:
            self._render_opex(results)
            self._render_tco(results)
            self._render_maintenance(results)
        self._render_environmental(results)
        self._render_footer(results)

    def render_validation(self, result: ValidationResult) -> None:
        """Render the outcome of the advisory validator."""
        self.console.print()
        if result.valid:
            self.console.print("  [green]Configuration is valid[/green]")
        else:
            self.console.print(f"  [red]Configuration has {len(result.errors)} error(s):[/red]")
            for error in result.errors:
                self.console.print(f"    [red]•[/red] {error}")

        for warning in result.warnings:
            line = f"    [yellow]![/yellow] {warning.field}: {warning.message}"
            if warning.suggestion:
                line += f" [dim]({warning.suggestion})[/dim]"
            self.console.print(line)

    def render_sensitivity(self, series: list[SensitivitySeries]) -> None:
        """Render a table of scenarios for each swept parameter."""
        for entry in series:
            self.console.print()
            self.console.print(Rule(f"[bold]SENSITIVITY: {entry.parameter}[/bold]"))

            table = Table(show_header=True, header_style="bold", padding=(0, 1))
            table.add_column("Value", justify="right", min_width=10)
            table.add_column("TCO Savings", justify="right", min_width=16)
            table.add_column("ROI", justify="right", min_width=8)

            for scenario in entry.scenarios:
                table.add_row(
                    f"{scenario.value:.4f}",
                    self._money(scenario.tco_savings),
                    f"{scenario.roi_percent:.1f}%",
                )
            self.console.print(table)

            trend = sparkline([s.tco_savings for s in entry.scenarios])
            self.console.print(f"  TCO savings trend: [cyan]{trend}[/cyan]")

    # ------------------------------------------------------------------
    # Private rendering methods
    # ------------------------------------------------------------------

    def _render_header(self, results: CalculationResults) -> None:
        header_text = Text()
        header_text.append("IMMERSION vs AIR COOLING", style="bold cyan")
        header_text.append(" | ", style="dim")
        header_text.append(f"{len(results.breakdown.opex_annual)}-year horizon")
        header_text.append(" | ", style="dim")
        header_text.append(self.currency.value)
        header_text.append(f" | {results.calculation_id}", style="dim")

        self.console.print()
        self.console.print(Panel(header_text, title="TCO Comparison"))

    def _render_summary(self, results: CalculationResults) -> None:
        summary = results.summary

        table = Table(show_header=False, padding=(0, 2), box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")

        table.add_row(
            "Total TCO savings",
            f"{savings_marker(summary.total_tco_savings_5yr)} "
            f"{self._money(summary.total_tco_savings_5yr)}",
        )
        table.add_row("CAPEX savings", self._money(summary.total_capex_savings))
        table.add_row("OPEX savings", self._money(summary.total_opex_savings_5yr))
        table.add_row("NPV of savings", self._money(summary.npv_savings))
        table.add_row("ROI", f"{summary.roi_percent:.1f}%")
        table.add_row("Payback", f"{summary.payback_months:.1f} months")
        table.add_row(
            "PUE (air / immersion)",
            f"{summary.pue_air_cooling:.3f} / {summary.pue_immersion_cooling:.3f}",
        )
        table.add_row("Efficiency improvement", f"{summary.energy_efficiency_improvement:.1f}%")

        self.console.print()
        self.console.print(Panel(table, title="[bold]SUMMARY[/bold]", border_style="cyan"))

    def _render_capex(self, results: CalculationResults) -> None:
        capex = results.breakdown.capex
        air_total = capex.air_cooling.total
        immersion_total = capex.immersion_cooling.total
        scale = max(air_total, immersion_total)

        self.console.print()
        self.console.print(Rule("[bold]CAPITAL EXPENDITURE[/bold]"))
        self.console.print(
            horizontal_bar("Air cooling", air_total, scale, self._money(air_total), color="red")
        )
        self.console.print(
            horizontal_bar(
                "Immersion cooling", immersion_total, scale,
                self._money(immersion_total), color="green",
            )
        )

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Category", style="bold", min_width=16)
        table.add_column("Air", justify="right", min_width=14)
        table.add_column("Immersion", justify="right", min_width=14)
        table.add_column("Difference", justify="right", min_width=14)

        for name, category in results.charts.cost_categories.items():
            table.add_row(
                name,
                self._money(category.air_cooling),
                self._money(category.immersion_cooling),
                f"{savings_marker(category.difference)} {self._money(category.difference)}",
            )
        self.console.print(table)

    def _render_opex(self, results: CalculationResults) -> None:
        self.console.print()
        self.console.print(Rule("[bold]ANNUAL OPERATING COSTS[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Year", justify="right", width=4)
        table.add_column("Air", justify="right", min_width=14)
        table.add_column("Immersion", justify="right", min_width=14)
        table.add_column("Savings", justify="right", min_width=14)
        table.add_column("%", justify="right", width=6)

        for costs in results.breakdown.opex_annual:
            table.add_row(
                str(costs.year),
                self._money(costs.air_cooling.total),
                self._money(costs.immersion_cooling.total),
                self._money(costs.savings),
                f"{costs.savings_percent:.1f}",
            )
        self.console.print(table)

    def _render_tco(self, results: CalculationResults) -> None:
        progression = results.breakdown.tco_cumulative

        self.console.print()
        self.console.print(Rule("[bold]CUMULATIVE TCO[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Year", justify="right", width=4)
        table.add_column("Air", justify="right", min_width=14)
        table.add_column("Immersion", justify="right", min_width=14)
        table.add_column("Savings", justify="right", min_width=14)
        table.add_column("NPV (year)", justify="right", min_width=14)

        for point in progression:
            table.add_row(
                str(point.year),
                self._money(point.air_cooling),
                self._money(point.immersion_cooling),
                self._money(point.savings),
                self._money(point.npv_savings),
            )
        self.console.print(table)
        self.console.print(
            f"  Savings trend: [cyan]{sparkline([p.savings for p in progression])}[/cyan]"
        )

    def _render_maintenance(self, results: CalculationResults) -> None:
        overhauls = [
            entry for entry in results.breakdown.maintenance_schedule
            if entry.major_overhauls > 0
        ]
        if not overhauls:
            return

        self.console.print()
        self.console.print("  [bold]Major overhauls:[/bold]")
        for entry in overhauls:
            self.console.print(
                f"    [dim]•[/dim] Year {entry.year}: {self._money(entry.major_overhauls)}"
            )

    def _render_environmental(self, results: CalculationResults) -> None:
        env = results.environmental

        table = Table(show_header=False, padding=(0, 2), box=None)
        table.add_column("Metric", style="bold")
        table.add_column("Value", justify="right")
        table.add_row("Energy saved", f"{env.energy_savings_kwh_annual:,.0f} kWh/year")
        table.add_row("CO2 avoided", f"{env.carbon_savings_kg_co2_annual:,.0f} kg/year")
        table.add_row("Water saved", f"{env.water_savings_gallons_annual:,.0f} gal/year")
        table.add_row("Footprint reduction", f"{env.carbon_footprint_reduction_percent:.1f}%")

        self.console.print()
        self.console.print(
            Panel(table, title="[bold]ENVIRONMENTAL IMPACT[/bold]", border_style="green")
        )

    def _render_footer(self, results: CalculationResults) -> None:
        """Render the report footer."""
        self.console.print()
        self.console.print(Rule(style="dim"))
        self.console.print(
            f"  [dim]Generated: {results.calculated_at.strftime('%Y-%m-%d %H:%M UTC')} | "
            f"{results.configuration_hash} | "
            f"calculation v{results.calculation_version}[/dim]"
        )
        self.console.print()
