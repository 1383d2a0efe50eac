"""CLI for the neighborhood rent estimator."""

from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv
from typing import Optional

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

import typer
from rich.console import Console
from rich.table import Table

from .config import (
    get_display_options,
    get_estimation_settings,
    get_parameters_path,
    get_reference_city,
    load_config,
)
from .estimation import RentEstimator
from .export import EstimateRow, export_csv, export_json
from .filters import filter_parameters
from .formatting import format_currency, format_range, render_result
from .log import configure_logging
from .models import CONSERVATION_STATES, MISSING_REQUIRED_INPUT, PROPERTY_TYPES, RentRange
from .parsing import InvalidFieldError, attributes_from_form
from .sources import DataSourceUnavailable, FileParameterSource

app = typer.Typer(
    name="rent-estimate",
    help="Neighborhood rent estimator - rent range from area, type and market parameters",
)
console = Console()

_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config.yaml")
_VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logs")


def _run_id() -> str:
    """Generate run ID from timestamp."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _load(config_path: Optional[Path], verbose: bool) -> dict:
    configure_logging(verbose)
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _make_estimator(cfg: dict) -> RentEstimator:
    return RentEstimator(
        source=FileParameterSource(get_parameters_path(cfg)),
        settings=get_estimation_settings(cfg),
        reference_city=get_reference_city(cfg),
        config=cfg,
    )


def _display_breakdown(result: RentRange, display: dict) -> None:
    """Show base value and each applied adjustment."""
    table = Table(title="Estimate breakdown")
    table.add_column("Component", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_row("Base value", format_currency(result.base_value, **display))
    for name, amount in result.adjustments.items():
        style = "red" if amount < 0 else "green"
        table.add_row(name.replace("_", " "), f"[{style}]{format_currency(amount, **display)}[/{style}]")
    table.add_row("[bold]Estimated rent[/bold]", f"[bold]{format_currency(result.estimated_rent, **display)}[/bold]")
    console.print(table)


@app.command()
def estimate(
    property_type: Optional[str] = typer.Option(None, "--type", "-t", help="Property type (see 'types')"),
    neighborhood: Optional[str] = typer.Option(None, "--neighborhood", "-n", help="Neighborhood name"),
    city: Optional[str] = typer.Option(None, "--city", help="City (default: reference city from config)"),
    interior_area: Optional[str] = typer.Option(None, "--area", "-a", help="Interior area in m²"),
    exterior_area: Optional[str] = typer.Option(None, "--exterior-area", help="Exterior area in m² (residential houses)"),
    bedrooms: Optional[str] = typer.Option(None, "--bedrooms", help="Number of bedrooms"),
    suites: Optional[str] = typer.Option(None, "--suites", help="Number of suites"),
    parking_spots: Optional[str] = typer.Option(None, "--parking", help="Number of parking spots"),
    conservation_state: Optional[str] = typer.Option(None, "--conservation", help="excellent, good, regular or needs-renovation"),
    year_built: Optional[str] = typer.Option(None, "--year-built", help="Construction year"),
    has_pool: bool = typer.Option(False, "--pool", help="Building has a pool (apartments)"),
    has_gym: bool = typer.Option(False, "--gym", help="Building has a gym (apartments)"),
    strict: bool = typer.Option(False, "--strict", help="Reject malformed numbers instead of ignoring them"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    config_path: Optional[Path] = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Estimate the monthly rent range for one property."""
    cfg = _load(config_path, verbose)
    estimator = _make_estimator(cfg)
    fields = {
        "type": property_type,
        "neighborhood": neighborhood,
        "city": city,
        "interior_area": interior_area,
        "exterior_area": exterior_area,
        "bedrooms": bedrooms,
        "suites": suites,
        "parking_spots": parking_spots,
        "conservation_state": conservation_state,
        "year_built": year_built,
        "has_pool": has_pool,
        "has_gym": has_gym,
    }
    try:
        attrs = attributes_from_form(fields, city=estimator.reference_city, strict=strict)
    except InvalidFieldError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    result = estimator.estimate(attrs)
    if as_json:
        typer.echo(json.dumps({"property": attrs.to_dict(), "result": result.to_dict()}, indent=2, ensure_ascii=False))
        return

    display = get_display_options(cfg)
    if isinstance(result, RentRange):
        console.print(f"[bold green]Estimated rent: {format_range(result, **display)}[/bold green]")
        _display_breakdown(result, display)
    elif result.reason == MISSING_REQUIRED_INPUT:
        console.print(f"[dim]{result.message}[/dim]")
    else:
        console.print(f"[yellow]{render_result(result, **display)}[/yellow]")


@app.command()
def batch(
    input_path: Path = typer.Argument(..., help="CSV file with one property per row"),
    out_dir: Path = typer.Option(Path("output"), "--out-dir", "-o", help="Directory for CSV/JSON results"),
    strict: bool = typer.Option(False, "--strict", help="Reject malformed numbers instead of ignoring them"),
    config_path: Optional[Path] = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """Estimate every property in a CSV file and export the results."""
    cfg = _load(config_path, verbose)
    if not input_path.exists():
        console.print(f"[red]Input not found: {input_path}[/red]")
        raise typer.Exit(1)

    estimator = _make_estimator(cfg)
    rows: list[EstimateRow] = []
    with open(input_path, newline="", encoding="utf-8") as f:
        for i, record in enumerate(csv.DictReader(f), 1):
            row_id = (record.get("id") or "").strip() or str(i)
            try:
                attrs = attributes_from_form(record, city=estimator.reference_city, strict=strict)
            except InvalidFieldError as e:
                console.print(f"[yellow]Row {row_id} skipped: {e}[/yellow]")
                continue
            rows.append(EstimateRow(row_id=row_id, attributes=attrs, result=estimator.estimate(attrs)))

    if not rows:
        console.print("[yellow]No properties to estimate.[/yellow]")
        raise typer.Exit(1)

    run_id = _run_id()
    csv_path = out_dir / f"estimates_{run_id}.csv"
    json_path = out_dir / f"estimates_{run_id}.json"
    export_csv(rows, csv_path)
    export_json(rows, json_path)

    display = get_display_options(cfg)
    table = Table(title=f"Estimates (Run {run_id})")
    table.add_column("ID", style="dim")
    table.add_column("Type", style="cyan")
    table.add_column("Neighborhood")
    table.add_column("Area", justify="right")
    table.add_column("Rent range", justify="right")
    for r in rows:
        area = r.attributes.interior_area
        text = render_result(r.result, **display) or "[dim]incomplete[/dim]"
        if not r.result.ok and r.result.reason != MISSING_REQUIRED_INPUT:
            text = f"[yellow]{text}[/yellow]"
        table.add_row(
            r.row_id,
            r.attributes.property_type,
            r.attributes.neighborhood,
            f"{area:,.0f} m²" if area else "",
            text,
        )
    console.print(table)

    ok_count = sum(1 for r in rows if r.result.ok)
    console.print(f"[green]Estimated {ok_count}/{len(rows)} properties. Run ID: {run_id}[/green]")
    console.print(f"  CSV:  {csv_path}")
    console.print(f"  JSON: {json_path}")


@app.command()
def neighborhoods(
    city: Optional[str] = typer.Option(None, "--city", help="City (default: reference city)"),
    all_cities: bool = typer.Option(False, "--all", help="List every city in the catalogue"),
    property_type: Optional[str] = typer.Option(None, "--type", "-t", help="Only neighborhoods with this type"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Neighborhood name contains"),
    config_path: Optional[Path] = _CONFIG_OPTION,
    verbose: bool = _VERBOSE_OPTION,
) -> None:
    """List neighborhoods in the parameter catalogue."""
    cfg = _load(config_path, verbose)
    source = FileParameterSource(get_parameters_path(cfg))
    try:
        result = source.fetch()
    except DataSourceUnavailable as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    for err in result.errors:
        console.print(f"[yellow]Warning: {err}[/yellow]")

    target_city = None if all_cities else (city or get_reference_city(cfg))
    entries = filter_parameters(result.entries, city=target_city, property_type=property_type, query=query)
    if not entries:
        console.print("[yellow]No neighborhoods match.[/yellow]")
        return

    display = get_display_options(cfg)
    table = Table(title=f"Neighborhoods ({target_city or 'all cities'})")
    table.add_column("Neighborhood", style="cyan")
    table.add_column("City", style="dim")
    table.add_column("Type")
    table.add_column("Price/m²", justify="right")
    for entry in sorted(entries, key=lambda e: (e.city.lower(), e.neighborhood.lower())):
        for type_key, params in sorted(entry.types.items()):
            if property_type and type_key != property_type:
                continue
            table.add_row(
                entry.neighborhood,
                entry.city,
                type_key,
                format_currency(params.avg_price_per_sqm, **display),
            )
    console.print(table)


@app.command()
def types() -> None:
    """List property types and conservation states."""
    table = Table(title="Property types")
    table.add_column("Key", style="cyan")
    table.add_column("Description")
    for key, label in PROPERTY_TYPES.items():
        table.add_row(key, label)
    console.print(table)

    states = Table(title="Conservation states")
    states.add_column("Key", style="cyan")
    states.add_column("Description")
    for key, label in CONSERVATION_STATES.items():
        states.add_row(key, label)
    console.print(states)


if __name__ == "__main__":
    app()
