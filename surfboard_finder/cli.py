"""
Surfboard Finder — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs into a ``UserQuery``.
  4. Load the catalog (falls back to the bundled sample set on feed errors).
  5. Rank / compare and print the result to stdout.

Install and run::

    pip install -e .
    surfboard-finder --help
    surfboard-finder validate-config
    surfboard-finder volume --weight 80 --ability intermediate
    surfboard-finder find --weight 80 --ability intermediate --wave mellow_point
    surfboard-finder find --sort volume_closest --shaper "Channel Islands" --view all
    surfboard-finder compare --id js-monsta-2024 --id pyzel-ghost
    surfboard-finder shapers
    surfboard-finder parse-csv boards.csv
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Optional

import typer

from surfboard_finder.taxonomy.board_taxonomy import Ability, SortMode, WaveType

app = typer.Typer(
    name="surfboard-finder",
    help="Surfboard Finder — rank boards for a rider's weight, wave, and ability.",
    add_completion=False,
)

_VIEWS = ("top", "all", "both")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from surfboard_finder.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from surfboard_finder.utils.logging import configure_logging
    configure_logging(config.logging)


def _build_query_or_exit(
    config,
    weight:  Optional[float],
    ability: Optional[Ability],
    wave:    Optional[WaveType],
    sort:    Optional[SortMode] = None,
    shapers: Optional[list[str]] = None,
):
    """Merge CLI inputs with config defaults into a validated UserQuery."""
    from pydantic import ValidationError

    from surfboard_finder.models.board import UserQuery

    try:
        return UserQuery(
            weight=weight if weight is not None else config.finder.default_weight,
            ability=ability or config.finder.default_ability,
            wave=wave or config.finder.default_wave,
            sort_mode=sort or config.finder.default_sort,
            brand_filter=frozenset(shapers or ()),
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid inputs: {exc.errors()[0]['msg']}", err=True)
        raise typer.Exit(code=1)


def _load_catalog(config, quiet: bool = False):
    """Load the configured catalog and print the source banner unless ``quiet``."""
    from surfboard_finder.ingestion.catalog_loader import load_catalog_sync
    from surfboard_finder.ingestion.catalog_source import source_from_config
    from surfboard_finder.reporting.formatters import format_source_banner

    source = source_from_config(config.catalog)
    result = load_catalog_sync(source, timeout=config.catalog.timeout_s)
    if not quiet:
        typer.echo(
            format_source_banner(result.warning, str(result.source_kind), len(result.boards)),
            err=True,
        )
    return result


def _scored_board_dict(sb) -> dict:
    payload = sb.board.model_dump(mode="json", by_alias=True)
    payload["score"] = sb.score
    return payload


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    from surfboard_finder.ingestion.catalog_source import source_from_config

    config = _load_config_or_exit(config_path)
    source = source_from_config(config.catalog)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog kind:     {config.catalog.kind}")
    typer.echo(f"  Catalog URL:      {source.resolve() or '(not set)'}")
    typer.echo(f"  Default weight:   {config.finder.default_weight:g}")
    typer.echo(f"  Default ability:  {config.finder.default_ability}")
    typer.echo(f"  Default wave:     {config.finder.default_wave}")
    typer.echo(f"  Default sort:     {config.finder.default_sort}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("volume")
def volume(
    weight: float = typer.Option(..., "--weight", "-w", help="Rider weight in kg."),
    ability: Ability = typer.Option(Ability.INTERMEDIATE, "--ability", "-a"),
) -> None:
    """Print the suggested board volume range for a rider."""
    from surfboard_finder.recommendations.scorer import heuristic_volume
    from surfboard_finder.reporting.formatters import format_volume_hint

    if not math.isfinite(weight) or weight <= 0:
        typer.echo("[ERROR] --weight must be a positive number.", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_volume_hint(heuristic_volume(weight, ability)))


@app.command("find")
def find(
    weight: Optional[float] = typer.Option(None, "--weight", "-w", help="Rider weight in kg."),
    ability: Optional[Ability] = typer.Option(None, "--ability", "-a"),
    wave: Optional[WaveType] = typer.Option(None, "--wave"),
    sort: Optional[SortMode] = typer.Option(None, "--sort", help="Order of the full match list."),
    shapers: Optional[list[str]] = typer.Option(
        None,
        "--shaper",
        help="Restrict to a shaper. Repeatable.",
    ),
    view: str = typer.Option("both", "--view", help="top, all, or both."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of tables."),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank the catalog for a rider and show matches and top picks per shaper.

    Inputs not given on the command line come from the ``[finder]`` config
    section.
    """
    from surfboard_finder.recommendations.ranker import rank_catalog
    from surfboard_finder.reporting.formatters import (
        format_matches_table,
        format_top_picks_table,
    )

    if view not in _VIEWS:
        typer.echo(f"[ERROR] --view must be one of {', '.join(_VIEWS)}.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    query = _build_query_or_exit(config, weight, ability, wave, sort, shapers)

    result = _load_catalog(config, quiet=as_json)
    ranked = rank_catalog(result.boards, query)

    if as_json:
        payload = {
            "query": query.model_dump(mode="json"),
            "volume_range": list(ranked.volume_range),
            "warning": result.warning,
            "all": [_scored_board_dict(sb) for sb in ranked.all],
            "top_per_brand": [
                {"brand": p.brand, "board": _scored_board_dict(p.board)}
                for p in ranked.top_per_brand
            ],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    if view in ("top", "both"):
        typer.echo(format_top_picks_table(ranked, query))
    if view in ("all", "both"):
        typer.echo(format_matches_table(ranked, query))


@app.command("compare")
def compare(
    board_ids: list[str] = typer.Option(
        ...,
        "--id",
        help="Board id to compare. Repeat up to four times.",
    ),
    weight: Optional[float] = typer.Option(None, "--weight", "-w", help="Rider weight in kg."),
    ability: Optional[Ability] = typer.Option(None, "--ability", "-a"),
    wave: Optional[WaveType] = typer.Option(None, "--wave"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Show up to four boards side by side with their match scores."""
    from surfboard_finder.recommendations.compare import MAX_COMPARE, build_comparison
    from surfboard_finder.reporting.formatters import format_comparison_table

    if len(board_ids) > MAX_COMPARE:
        typer.echo(f"[ERROR] At most {MAX_COMPARE} boards can be compared.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    query = _build_query_or_exit(config, weight, ability, wave)

    result = _load_catalog(config)
    comparison = build_comparison(result.boards, board_ids, query)

    missing = [i for i in board_ids if i not in {sb.id for sb in comparison.boards}]
    for board_id in missing:
        typer.echo(f"  [WARN] Unknown board id: {board_id}", err=True)

    typer.echo(format_comparison_table(comparison))


@app.command("shapers")
def shapers(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """List the shapers in the catalog (values accepted by ``find --shaper``)."""
    from surfboard_finder.reporting.formatters import format_shaper_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    result = _load_catalog(config)
    typer.echo(format_shaper_list(tuple(sorted({b.shaper for b in result.boards}))))


@app.command("parse-csv")
def parse_csv(
    csv_file: Path = typer.Argument(..., help="Local catalog CSV file."),
) -> None:
    """Parse a local catalog CSV and report the boards it yields.

    Useful for checking a spreadsheet export before publishing it as the feed.
    Short or invalid rows are dropped, exactly as during a live load.
    """
    from surfboard_finder.ingestion.catalog_csv import read_catalog_csv

    try:
        boards = read_catalog_csv(csv_file)
    except (FileNotFoundError, UnicodeDecodeError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Parsed {len(boards)} board(s) from {csv_file}")
    for b in boards:
        typer.echo(f"  {b.id} | {b.shaper} | {b.model} | {b.volume:g} L")

    if not boards:
        typer.echo("[WARN] No usable rows found.", err=True)
        raise typer.Exit(code=1)
    typer.echo("[OK] CSV valid.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
