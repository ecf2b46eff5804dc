"""src/popyramid/cli.py"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich import print
from rich.table import Table

from popyramid.common.config import AppConfig, IngestSettings, default_config, load_config
from popyramid.common.logging import setup_logging
from popyramid.common.types import ParseResult, PopulationData
from popyramid.features.age_groups import aggregate_by_age_groups, parse_range_spec, preset_ranges
from popyramid.io.detect import detect_format
from popyramid.io.writers import write_csv
from popyramid.pipelines.parse_file import parse_population_file
from popyramid.reporting.export import write_compact_json
from popyramid.reporting.statistics import calculate_median_age, calculate_totals, max_value, nice_scale
from popyramid.reporting.tables import make_age_group_table
from popyramid.validation.checks import validate_age_groups

app = typer.Typer(help="Population pyramid data ingestion CLI")

DEFAULT_CONFIG = "configs/config.yaml"


def _setup(config_path: str) -> AppConfig:
    cfg = load_config(config_path) if Path(config_path).exists() else default_config()
    setup_logging(cfg)
    return cfg


def _parse_or_exit(file: Path, cfg: AppConfig) -> ParseResult:
    result = parse_population_file(file, settings=IngestSettings.from_config(cfg))
    if not result.success:
        print(f"[bold red]Error:[/bold red] {result.error.value}")
        raise typer.Exit(code=1)
    return result


def _select_year(result: ParseResult, year: Optional[int]) -> PopulationData:
    if year is None:
        return result.data
    if result.time_series_data is None:
        print("[bold red]Error:[/bold red] --year needs a time-series file")
        raise typer.Exit(code=1)
    try:
        return result.time_series_data.snapshot(year)
    except KeyError as e:
        print(f"[bold red]Error:[/bold red] {e.args[0]}")
        raise typer.Exit(code=1)


def _render_table(df: pd.DataFrame, title: str) -> Table:
    table = Table(title=title)
    for col in df.columns:
        table.add_column(str(col), justify="right")
    for row in df.itertuples(index=False):
        table.add_row(*[f"{v:,.2f}" if isinstance(v, float) else str(v) for v in row])
    return table


@app.command()
def detect(
    file: Path = typer.Argument(..., help="CSV / XLSX / XLS population file"),
    config_path: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
) -> None:
    """Print the detected data format of a file."""
    cfg = _setup(config_path)
    fmt = detect_format(file, IngestSettings.from_config(cfg))
    print(fmt.value)


@app.command()
def parse(
    file: Path = typer.Argument(..., help="CSV / XLSX / XLS population file"),
    year: Optional[int] = typer.Option(None, help="Year to show (time-series files)"),
    csv_out: Optional[Path] = typer.Option(None, help="Also write the age-group table to this CSV"),
    config_path: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
) -> None:
    """Parse a file and print totals, median age, axis scale and age groups."""
    cfg = _setup(config_path)
    result = _parse_or_exit(file, cfg)
    data = _select_year(result, year)

    totals = calculate_totals(data.age_groups)
    print(f"[bold]{data.title}[/bold]  format={result.detected_format.value}  date={data.date or '-'}")
    if result.time_series_data is not None:
        print(f"Years: {', '.join(str(y) for y in result.time_series_data.years)}")
    if data.has_gender_data is False:
        print("[yellow]No sex split in source; male/female are an even split of the total.[/yellow]")
    print(f"Male: {totals.male:,.0f}  Female: {totals.female:,.0f}  Total: {totals.total:,.0f}")
    print(f"Median age: {calculate_median_age(data.age_groups)}  Scale: {nice_scale(max_value(data.age_groups)):,.0f}")

    df = make_age_group_table(data)
    print(_render_table(df, "Age groups"))
    if csv_out is not None:
        write_csv(df, csv_out)
        print(f"[bold green]Wrote[/bold green] {csv_out}")


@app.command()
def aggregate(
    file: Path = typer.Argument(..., help="CSV / XLSX / XLS population file"),
    preset: Optional[str] = typer.Option(None, help="Preset name (three_generations, five_groups, decades, ...)"),
    ranges: Optional[str] = typer.Option(None, help='Ranges such as "0-19,20-64,65+"'),
    year: Optional[int] = typer.Option(None, help="Year to aggregate (time-series files)"),
    config_path: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
) -> None:
    """Regroup a file's age groups into custom ranges."""
    cfg = _setup(config_path)
    if (preset is None) == (ranges is None):
        print("[bold red]Error:[/bold red] pass exactly one of --preset or --ranges")
        raise typer.Exit(code=2)

    try:
        configs = preset_ranges(preset, cfg.presets) if preset else parse_range_spec(ranges or "")
    except (KeyError, ValueError) as e:
        print(f"[bold red]Error:[/bold red] {e.args[0]}")
        raise typer.Exit(code=2)

    check = validate_age_groups(configs, max_age=cfg.max_age)
    if not check.valid:
        print("[bold red]Invalid age groups:[/bold red]")
        for msg in check.messages:
            print(f"  - {msg}")
        raise typer.Exit(code=1)

    result = _parse_or_exit(file, cfg)
    data = _select_year(result, year)
    grouped = aggregate_by_age_groups(data, configs)

    print(f"Median age (ungrouped): {calculate_median_age(data.age_groups)}")
    print(_render_table(make_age_group_table(grouped), grouped.title))


@app.command()
def export(
    file: Path = typer.Argument(..., help="CSV / XLSX / XLS population file"),
    out: Path = typer.Argument(..., help="Output JSON path"),
    config_path: str = typer.Option(DEFAULT_CONFIG, help="Path to YAML config"),
) -> None:
    """Write the compact JSON representation of a parsed file."""
    cfg = _setup(config_path)
    result = _parse_or_exit(file, cfg)
    write_compact_json(out, result.data, result.time_series_data)
    print(f"[bold green]Export complete.[/bold green] {out}")


if __name__ == "__main__":
    app()
