"""Typer CLI interface for LedgerBook."""

import json
import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer

from ledgerbook.exceptions import InvalidPeriodError, RecordSourceError
from ledgerbook.settings import LedgerSettings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="ledgerbook",
    help="LedgerBook - monthly account and cash balances replayed from a flat transaction log.",
)

_SOURCE_HELP = "Transaction log file (.csv sheet export or .json). Defaults to $LEDGERBOOK_SOURCE."


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that writes whole Decimals as integers and the rest as strings."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            if obj == obj.to_integral_value():
                return int(obj)
            return str(obj)
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """LedgerBook - monthly account and cash balances replayed from a flat transaction log."""
    settings = LedgerSettings.from_env()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _settings(ctx: typer.Context) -> LedgerSettings:
    if isinstance(ctx.obj, LedgerSettings):
        return ctx.obj
    return LedgerSettings.from_env()


def _fetch_rows(source: Path | None, settings: LedgerSettings, no_header: bool) -> list[dict]:
    """Read every raw row from the record source, exiting on retrieval failure."""
    from ledgerbook.ingestion import open_source

    path = source or settings.source
    if path is None:
        typer.echo("Error: no record source given. Use --source or set LEDGERBOOK_SOURCE.", err=True)
        raise typer.Exit(1)

    try:
        return open_source(path, has_header=not no_header).fetch_rows()
    except RecordSourceError as exc:
        # Retrieval failure is not the same as an empty period.
        typer.echo(f"Error: could not retrieve data. {exc}", err=True)
        raise typer.Exit(1) from exc


def _parse_day(value: str | None, option: str) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        typer.echo(f"Error: {option} must be YYYY-MM-DD, got '{value}'", err=True)
        raise typer.Exit(1) from exc


@app.command()
def balance(
    ctx: typer.Context,
    month: int = typer.Argument(..., help="Month to report (1-12)"),
    year: int = typer.Argument(..., help="Year to report"),
    source: Path | None = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
    no_header: bool = typer.Option(False, "--no-header", help="CSV has no header row (sheet column order)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Opening and closing account/cash balances for one month."""
    from ledgerbook.engines.aggregator import PeriodAggregator
    from ledgerbook.reports import PeriodSummaryGenerator

    settings = _settings(ctx)
    rows = _fetch_rows(source, settings, no_header)

    aggregator = PeriodAggregator(fuel_matcher=settings.fuel_matcher())
    try:
        result = aggregator.aggregate(month, year, rows)
    except InvalidPeriodError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if json_output:
        typer.echo(json.dumps(result.model_dump(by_alias=True), cls=_DecimalEncoder, indent=2))
        return

    if result.is_empty:
        typer.echo(f"No transactions recorded for {month:02d}/{year}.")
    typer.echo(PeriodSummaryGenerator().render(result))


@app.command()
def report(
    ctx: typer.Context,
    month: int | None = typer.Argument(None, help="Month (1-12); omit for a whole-year or all-time report"),
    year: int | None = typer.Argument(None, help="Year"),
    source: Path | None = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
    no_header: bool = typer.Option(False, "--no-header", help="CSV has no header row (sheet column order)"),
    report_type: str = typer.Option(
        "summary",
        "--type",
        "-t",
        help="Report type: summary, category, monthly, detailed",
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
) -> None:
    """Income/expense statistics report."""
    from ledgerbook.engines.statistics import StatisticsEngine
    from ledgerbook.models.enums import ReportType
    from ledgerbook.normalization.records import RecordNormalizer
    from ledgerbook.reports import LedgerReportGenerator

    try:
        rtype = ReportType(report_type.lower())
    except ValueError as exc:
        valid = ", ".join(t.value for t in ReportType)
        typer.echo(f"Error: unknown report type '{report_type}'. Choose from: {valid}", err=True)
        raise typer.Exit(1) from exc

    # A lone positional value is a year: `ledgerbook report 2025`.
    if month is not None and year is None:
        month, year = None, month

    settings = _settings(ctx)
    rows = _fetch_rows(source, settings, no_header)
    normalized = RecordNormalizer().normalize_all(rows)
    if normalized.rejected:
        logger.warning("Dropped %d record(s) that could not be normalized", len(normalized.rejected))

    try:
        ledger_report = StatisticsEngine().build_report(rtype, normalized.transactions, month=month, year=year)
    except InvalidPeriodError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    text = LedgerReportGenerator().render(ledger_report)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        typer.echo(f"Report written to {output}")
        return
    typer.echo(text)


@app.command()
def transactions(
    ctx: typer.Context,
    source: Path | None = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
    no_header: bool = typer.Option(False, "--no-header", help="CSV has no header row (sheet column order)"),
    txn_type: str | None = typer.Option(None, "--type", "-t", help="income or expense"),
    category: str | None = typer.Option(None, "--category", "-c", help="Exact category name"),
    start: str | None = typer.Option(None, "--start", help="First date to include (YYYY-MM-DD)"),
    end: str | None = typer.Option(None, "--end", help="Last date to include (YYYY-MM-DD)"),
    limit: int = typer.Option(20, "--limit", "-n", help="Show at most N transactions"),
) -> None:
    """List transactions, newest first."""
    from ledgerbook.engines.statistics import StatisticsEngine
    from ledgerbook.normalization.records import RecordNormalizer
    from ledgerbook.reports.formatting import money

    normalizer = RecordNormalizer()
    wanted_type = None
    if txn_type:
        if not normalizer.is_known_type(txn_type):
            typer.echo(f"Error: unknown transaction type '{txn_type}'. Use income or expense.", err=True)
            raise typer.Exit(1)
        wanted_type = normalizer.resolve_type(txn_type)
    start_day = _parse_day(start, "--start")
    end_day = _parse_day(end, "--end")

    settings = _settings(ctx)
    rows = _fetch_rows(source, settings, no_header)
    normalized = normalizer.normalize_all(rows)
    selected = StatisticsEngine().filter_transactions(
        normalized.transactions,
        txn_type=wanted_type,
        category=category,
        start=start_day,
        end=end_day,
    )

    if not selected:
        typer.echo("No matching transactions.")
        return

    for txn in selected[:limit]:
        line = (
            f"{txn.date.isoformat()}  {txn.type.value:<7} {txn.payment_channel.value:<7} "
            f"{money(txn.amount):>15}  {txn.category}"
        )
        if txn.description:
            line += f" - {txn.description}"
        typer.echo(line)
    if len(selected) > limit:
        typer.echo(f"... {len(selected) - limit} more")


@app.command()
def check(
    ctx: typer.Context,
    source: Path | None = typer.Option(None, "--source", "-s", help=_SOURCE_HELP),
    no_header: bool = typer.Option(False, "--no-header", help="CSV has no header row (sheet column order)"),
) -> None:
    """Report rows that were dropped or had their amount coerced to 0."""
    from ledgerbook.normalization.records import RecordNormalizer

    settings = _settings(ctx)
    rows = _fetch_rows(source, settings, no_header)
    normalized = RecordNormalizer().normalize_all(rows)
    coerced = normalized.coerced

    typer.echo(f"Rows read:        {len(rows)}")
    typer.echo(f"Admitted:         {len(normalized.transactions)}")
    typer.echo(f"Rejected:         {len(normalized.rejected)}")
    typer.echo(f"Amount coerced:   {len(coerced)}")

    if normalized.rejected:
        typer.echo("\nRejected rows:")
        for rejected in normalized.rejected:
            typer.echo(f"  - row {rejected.sequence + 1}: {rejected.reason}")

    if coerced:
        typer.echo("\nAmounts kept as 0:")
        for txn in coerced:
            typer.echo(f"  - row {txn.sequence + 1} ({txn.date.isoformat()}): amount '{txn.raw_amount}'")
