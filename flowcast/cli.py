"""
Command-Line Interface for Flowcast.

Purpose
-------
Runs month projections and period aggregations over recurring records
exported from the finance backend, without writing Python code.

Commands
--------
- project: Project recurring records over the next N months
- aggregate: Total contribution of recurring records to one period
- frequencies: Show how frequency labels are classified
- info: Display package and dependency versions

Example Usage
-------------
    # Project income for the next 6 months
    $ flowcast project -r ingresos.json -f frecuencias.json -m 6

    # Expected contribution to the current quarter
    $ flowcast aggregate -r ingresos.json -f frecuencias.json -p quarter

    # Save a projection for the dashboard
    $ flowcast project -r ingresos.json -m 12 -o out/projection.json
"""

from __future__ import annotations

import logging
import sys
from importlib import metadata
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Tuple

import click
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from .aggregation import aggregate_breakdown
from .config import AggregationConfig, AppSettings, ProjectionConfig
from .constants import MAX_HORIZON_MONTHS, PERIOD_KINDS
from .exceptions import FlowcastError
from .projection import monthly_totals, project_months
from .records import RecurringRecord
from .recurrence import FrequencyRule, FrequencyTable
from .summary import summarize
from .utils import format_currency, period_bounds, safe_sum

# Version
__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def _load_inputs(
    records_path: Path, frequencies_path: Optional[Path]
) -> Tuple[List[RecurringRecord], FrequencyTable]:
    """Load records and catalog, exiting with status 1 on bad input."""
    from .serialization import load_frequencies, load_records

    try:
        records = load_records(records_path)
        table = load_frequencies(frequencies_path) if frequencies_path else FrequencyTable()
    except FlowcastError as e:
        click.echo(f"Error loading input: {e}", err=True)
        sys.exit(1)
    logger.info("Loaded %d records and %d frequency definitions", len(records), len(table))
    return records, table


def _reference_date(reference: Optional[datetime]) -> date:
    return reference.date() if reference is not None else date.today()


@click.group()
@click.version_option(version=__version__, prog_name="flowcast")
@click.option("--quiet", "-q", is_flag=True, help="Plain output, no tables")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (default: FLOWCAST_LOG_LEVEL or WARNING)",
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, log_level: Optional[str]) -> None:
    """
    Flowcast - recurring cash-flow projection.

    Projects recurring incomes and expenses into future months and
    aggregates them into weeks, months, quarters or years.

    Use 'flowcast COMMAND --help' for command-specific help.
    """
    try:
        settings = AppSettings()
    except PydanticValidationError as e:
        click.echo(f"Invalid FLOWCAST_ settings: {e}", err=True)
        sys.exit(1)

    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = Console()


@main.command()
@click.option(
    "--records", "-r",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Recurring records file (JSON list or {'data': [...]})",
)
@click.option(
    "--frequencies", "-f",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Frequency catalog file (JSON)",
)
@click.option(
    "--months", "-m",
    type=click.IntRange(1, MAX_HORIZON_MONTHS),
    default=None,
    help=f"Months to project, 1-{MAX_HORIZON_MONTHS} (default: FLOWCAST_DEFAULT_HORIZON or 3)",
)
@click.option(
    "--reference",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date YYYY-MM-DD (default: today)",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the projection to this JSON file",
)
@click.pass_context
def project(
    ctx: click.Context,
    records: Path,
    frequencies: Optional[Path],
    months: Optional[int],
    reference: Optional[datetime],
    output: Optional[Path],
) -> None:
    """
    Project recurring records over the next months.

    The current month is considered realized; the projection starts the
    month after the reference date.

    Example:
        flowcast project -r ingresos.json -f frecuencias.json -m 6
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings = ctx.obj["settings"]

    config = ProjectionConfig(
        horizon_months=months or settings.default_horizon,
        reference=_reference_date(reference),
    )
    loaded, table = _load_inputs(records, frequencies)

    projection = project_months(
        loaded, table, config.horizon_months, reference=config.reference
    )
    summary = summarize(projection, config.horizon_months)
    totals = monthly_totals(projection)
    primary, secondary = settings.currency_primary, settings.currency_secondary

    if quiet:
        for key, row in totals.iterrows():
            click.echo(f"{key}: {row['amount_primary']:,.2f} {primary} ({int(row['count'])})")
        click.echo(f"Total: {summary.total_primary:,.2f} {primary}")
        click.echo(f"Monthly average: {summary.monthly_average:,.2f} {primary}")
    else:
        month_table = Table(title="Projected Cash Flow", show_header=True)
        month_table.add_column("Month", style="cyan")
        month_table.add_column("Occurrences", justify="right")
        month_table.add_column(f"Total {primary}", style="green", justify="right")
        month_table.add_column(f"Total {secondary}", justify="right")
        for key, row in totals.iterrows():
            month_table.add_row(
                key,
                f"{int(row['count'])}",
                format_currency(row["amount_primary"]),
                format_currency(row["amount_secondary"], symbol="US$"),
            )
        console.print(month_table)

        summary_table = Table(title="Summary", show_header=True)
        summary_table.add_column("Metric", style="cyan")
        summary_table.add_column("Value", style="green", justify="right")
        summary_table.add_row("Horizon", f"{config.horizon_months} months")
        summary_table.add_row("Occurrences", f"{summary.count}")
        summary_table.add_row(f"Total {primary}", format_currency(summary.total_primary))
        summary_table.add_row(f"Total {secondary}", format_currency(summary.total_secondary, symbol="US$"))
        summary_table.add_row("Monthly Average", format_currency(summary.monthly_average))
        console.print(summary_table)

    if output:
        from .serialization import save_projection

        save_projection(
            output, projection,
            reference=config.reference, horizon_months=config.horizon_months,
        )
        click.echo(f"Projection saved to {output}")


@main.command()
@click.option(
    "--records", "-r",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Recurring records file (JSON list or {'data': [...]})",
)
@click.option(
    "--frequencies", "-f",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Frequency catalog file (JSON)",
)
@click.option(
    "--period", "-p",
    type=click.Choice(list(PERIOD_KINDS)),
    default=None,
    help="Period kind (default: FLOWCAST_DEFAULT_PERIOD or month)",
)
@click.option(
    "--reference",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date YYYY-MM-DD selecting the period (default: today)",
)
@click.pass_context
def aggregate(
    ctx: click.Context,
    records: Path,
    frequencies: Optional[Path],
    period: Optional[str],
    reference: Optional[datetime],
) -> None:
    """
    Total expected contribution to one period.

    Weeks run Monday to Sunday; months, quarters and years follow the
    calendar.

    Example:
        flowcast aggregate -r ingresos.json -p quarter --reference 2025-08-03
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    settings = ctx.obj["settings"]

    config = AggregationConfig(
        period=period or settings.default_period,
        reference=_reference_date(reference),
    )
    loaded, table = _load_inputs(records, frequencies)

    breakdown = aggregate_breakdown(loaded, table, config.period, config.reference)
    total = safe_sum(breakdown.to_numpy())
    start, end = period_bounds(config.period, config.reference)
    primary = settings.currency_primary

    if quiet:
        click.echo(f"{config.period} {start.isoformat()}..{end.isoformat()}: {total:,.2f} {primary}")
        return

    descriptions = {r.id: r.description for r in loaded}
    result_table = Table(
        title=f"{config.period.capitalize()} {start.isoformat()} to {end.isoformat()}",
        show_header=True,
    )
    result_table.add_column("Record", style="cyan")
    result_table.add_column(f"Contribution {primary}", style="green", justify="right")
    for record_id, value in breakdown.items():
        result_table.add_row(descriptions.get(record_id, str(record_id)), format_currency(value))
    result_table.add_row("[bold]Total[/bold]", f"[bold]{format_currency(total)}[/bold]")
    console.print(result_table)


@main.command()
@click.option(
    "--frequencies", "-f",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Frequency catalog file (JSON); without it the built-in rules are shown",
)
@click.pass_context
def frequencies(ctx: click.Context, frequencies: Optional[Path]) -> None:
    """
    Show how frequency labels are classified.

    Example:
        flowcast frequencies -f frecuencias.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    if frequencies:
        from .serialization import load_frequencies

        try:
            table = load_frequencies(frequencies)
        except FlowcastError as e:
            click.echo(f"Error loading frequencies: {e}", err=True)
            sys.exit(1)
        rows = [(str(freq_id), label, table.rule_for_id(freq_id)) for freq_id, label in table.items()]
    else:
        rows = [("-", rule.value, rule) for rule in FrequencyRule]

    if quiet:
        for freq_id, label, rule in rows:
            click.echo(f"{freq_id}\t{label}\t{rule.value}")
        return

    out = Table(title="Frequency Rules", show_header=True)
    out.add_column("Id", justify="right")
    out.add_column("Label", style="cyan")
    out.add_column("Rule", style="green")
    for kind in PERIOD_KINDS:
        out.add_column(kind.capitalize(), justify="right")
    out.add_column("Per Month", justify="right")
    for freq_id, label, rule in rows:
        out.add_row(
            freq_id,
            label,
            rule.value,
            *[f"{rule.period_multiplier(kind):g}" for kind in PERIOD_KINDS],
            f"{rule.occurrences_per_month}",
        )
    console.print(out)


@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency versions.
    """
    console = ctx.obj["console"]

    info_lines = [
        f"Flowcast Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
    ]

    for name in ("numpy", "pandas", "pydantic", "pydantic-settings", "click", "rich"):
        info_lines.append(f"{name}: {metadata.version(name)}")

    if ctx.obj["quiet"]:
        for line in info_lines:
            click.echo(line)
    else:
        from rich.panel import Panel
        console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
