# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for immersion-tco."""

from __future__ import annotations

import json
import logging

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from immersion_tco import __version__
from immersion_tco.analysis.sensitivity import SensitivityParameter, run_sensitivity_analysis
from immersion_tco.config import load_configuration, load_exchange_rates, load_raw_configuration
from immersion_tco.currency import convert_currency, format_currency
from immersion_tco.data.defaults import DEFAULT_EXCHANGE_RATES
from immersion_tco.data.models import (
    CalculationConfiguration,
    CalculationResults,
    Currency,
    Region,
)
from immersion_tco.data.presets import PRESETS, get_preset
from immersion_tco.engine import calculate as run_calculation
from immersion_tco.errors import ConfigurationShapeError, CurrencyConversionError
from immersion_tco.reporting.terminal import TerminalRenderer
from immersion_tco.validation import coerce_configuration, validate_configuration

PRESET_CHOICES = list(PRESETS.keys())
CURRENCY_CHOICES = [c.value for c in Currency]
REGION_CHOICES = [r.value for r in Region]
SENSITIVITY_CHOICES = [
    "energy_cost",
    "discount_rate",
    "energy_escalation_rate",
    "maintenance_escalation_rate",
]

DEFAULT_PRESET = "small_edge"


def _fail(console: Console, message: str) -> None:
    console.print(f"[red]{message}[/]")
    raise SystemExit(1)


def _resolve_configuration(
    config_path: str | None,
    preset: str | None,
    console: Console,
) -> CalculationConfiguration:
    """Load the configuration from a file or a preset."""
    if config_path and preset:
        _fail(console, "Use either --config or --preset, not both")

    try:
        if config_path:
            return load_configuration(config_path)
        return get_preset(preset or DEFAULT_PRESET).configuration
    except (ConfigurationShapeError, FileNotFoundError) as exc:
        _fail(console, str(exc))
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        _fail(console, f"Could not parse {config_path}: {exc}")


def _apply_overrides(
    configuration: CalculationConfiguration,
    region: str | None,
    years: int | None,
) -> CalculationConfiguration:
    """Return *configuration* with the financial region and horizon replaced."""
    update: dict[str, object] = {}
    if region:
        update["region"] = Region(region)
    if years is not None:
        update["analysis_years"] = years
    if not update:
        return configuration

    data = configuration.model_dump()
    data["financial"].update(update)
    return coerce_configuration(data)


@click.group()
@click.version_option(version=__version__)
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Log calculation steps")
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool) -> None:
    """immersion-tco: Immersion vs Air Cooling TCO Calculator

    Compare the total cost of ownership of an air-cooled installation
    with an equivalent immersion-cooled one:

    \b
      CAPEX:         equipment, installation, infrastructure, coolant
      OPEX:          energy, maintenance, labor over the analysis horizon
      Efficiency:    PUE, energy, carbon and water savings
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = Console(no_color=no_color)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@cli.command()
@click.option(
    "--config", "-c", "config_path", type=click.Path(), default=None,
    help="Configuration file (YAML or JSON)",
)
@click.option(
    "--preset", "-p",
    type=click.Choice(PRESET_CHOICES),
    default=None,
    help=f"Preset configuration (default: {DEFAULT_PRESET})",
)
@click.option(
    "--region", "-r", type=click.Choice(REGION_CHOICES), default=None,
    help="Override the financial region",
)
@click.option(
    "--years", "-y", type=click.IntRange(1, 10), default=None,
    help="Override the analysis horizon in years",
)
@click.option(
    "--export-json", type=click.Path(), default=None,
    help="Export raw results as JSON at this path",
)
@click.option("--show-details/--no-details", default=True, help="Show yearly cost tables")
@click.pass_context
def calculate(
    ctx: click.Context,
    config_path: str | None,
    preset: str | None,
    region: str | None,
    years: int | None,
    export_json: str | None,
    show_details: bool,
) -> None:
    """Run the TCO comparison and print the report."""
    console: Console = ctx.obj["console"]
    configuration = _resolve_configuration(config_path, preset, console)

    try:
        configuration = _apply_overrides(configuration, region, years)
        with console.status("[bold cyan]Calculating TCO..."):
            results = run_calculation(configuration)
    except ConfigurationShapeError as exc:
        _fail(console, str(exc))

    renderer = TerminalRenderer(console, currency=configuration.financial.currency)
    renderer.render(results, show_details=show_details)

    if export_json:
        _export_json(results, export_json, console)


@cli.command()
@click.option(
    "--config", "-c", "config_path", type=click.Path(), required=True,
    help="Configuration file (YAML or JSON)",
)
@click.pass_context
def validate(ctx: click.Context, config_path: str) -> None:
    """Check a configuration file against the business rules."""
    console: Console = ctx.obj["console"]

    try:
        raw = load_raw_configuration(config_path)
    except FileNotFoundError as exc:
        _fail(console, str(exc))
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        _fail(console, f"Could not parse {config_path}: {exc}")

    result = validate_configuration(raw)
    TerminalRenderer(console).render_validation(result)
    if not result.valid:
        raise SystemExit(1)


@cli.command()
@click.pass_context
def presets(ctx: click.Context) -> None:
    """List the built-in preset configurations."""
    console: Console = ctx.obj["console"]

    table = Table(show_header=True, header_style="bold", padding=(0, 1))
    table.add_column("Name", style="bold cyan")
    table.add_column("Category")
    table.add_column("Years", justify="right")
    table.add_column("Currency")
    table.add_column("Description")

    for name, preset in PRESETS.items():
        financial = preset.configuration.financial
        table.add_row(
            name,
            preset.category,
            str(financial.analysis_years),
            financial.currency.value,
            preset.description,
        )
    console.print(table)


@cli.command()
@click.argument("amount", type=float)
@click.argument("from_currency", type=click.Choice(CURRENCY_CHOICES, case_sensitive=False))
@click.argument("to_currency", type=click.Choice(CURRENCY_CHOICES, case_sensitive=False))
@click.option(
    "--rates", type=click.Path(), default=None,
    help="Exchange-rate file mapping FROM_TO to a rate",
)
@click.pass_context
def convert(
    ctx: click.Context,
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: str | None,
) -> None:
    """Convert AMOUNT between two supported currencies."""
    console: Console = ctx.obj["console"]
    source, target = Currency(from_currency.upper()), Currency(to_currency.upper())

    try:
        table = load_exchange_rates(rates) if rates else DEFAULT_EXCHANGE_RATES
        converted = convert_currency(amount, source, target, table)
    except (ConfigurationShapeError, FileNotFoundError, CurrencyConversionError) as exc:
        _fail(console, str(exc))

    console.print(
        f"  {format_currency(amount, source)} = [green]{format_currency(converted, target)}[/green]"
    )


@cli.command()
@click.option(
    "--config", "-c", "config_path", type=click.Path(), default=None,
    help="Configuration file (YAML or JSON)",
)
@click.option(
    "--preset", "-p",
    type=click.Choice(PRESET_CHOICES),
    default=None,
    help=f"Preset configuration (default: {DEFAULT_PRESET})",
)
@click.option(
    "--parameter", "-P", "parameter_names",
    type=click.Choice(SENSITIVITY_CHOICES), multiple=True, required=True,
    help="Financial parameter to sweep (repeatable)",
)
@click.option(
    "--range", "variation_range", type=click.FloatRange(0, 100, min_open=True, max_open=True),
    default=20.0, help="Variation around the base value, in percent",
)
@click.option("--steps", type=click.IntRange(min=2), default=5, help="Values per sweep")
@click.pass_context
def sensitivity(
    ctx: click.Context,
    config_path: str | None,
    preset: str | None,
    parameter_names: tuple[str, ...],
    variation_range: float,
    steps: int,
) -> None:
    """Sweep financial parameters and show how TCO savings respond."""
    console: Console = ctx.obj["console"]
    configuration = _resolve_configuration(config_path, preset, console)

    parameters = [
        SensitivityParameter(name=name, variation_range=variation_range, steps=steps)
        for name in parameter_names
    ]
    try:
        with console.status("[bold cyan]Running sensitivity analysis..."):
            series = run_sensitivity_analysis(configuration, parameters)
    except ConfigurationShapeError as exc:
        _fail(console, str(exc))

    renderer = TerminalRenderer(console, currency=configuration.financial.currency)
    renderer.render_sensitivity(series)


def _export_json(results: CalculationResults, path: str, console: Console) -> None:
    """Export to JSON."""
    with open(path, "w") as f:
        f.write(results.model_dump_json(indent=2))
    console.print(f"  [green]JSON report exported to:[/green] {path}")
