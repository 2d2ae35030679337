"""
ASCII terminal formatters for CLI commands.

All formatters accept engine results (``RankedCatalog``, ``Comparison``)
and return plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Source banner
-------------
Every result output starts with a source banner so readers can tell whether
they are looking at the live feed or the bundled sample set::

  [LIVE] json_url feed, 42 boards
  [SAMPLE] Using sample data (json_url fetch failed)
"""

from __future__ import annotations

from typing import Optional

from surfboard_finder.models.board import UserQuery
from surfboard_finder.recommendations.compare import NO_SELECTION_MESSAGE, Comparison
from surfboard_finder.recommendations.ranker import (
    EMPTY_RESULTS_MESSAGE,
    RankedCatalog,
    ScoredBoard,
)
from surfboard_finder.taxonomy.board_taxonomy import (
    ABILITY_LABELS,
    SORT_MODE_LABELS,
    WAVE_TYPE_LABELS,
)


# ── Banners ───────────────────────────────────────────────────────────────────


def format_source_banner(
    warning:     Optional[str],
    source_kind: str,
    board_count: int,
) -> str:
    """Return a one-line catalog source indicator."""
    if warning:
        return f"  [SAMPLE] {warning}"
    return f"  [LIVE] {source_kind} feed, {board_count} boards"


def format_volume_hint(volume_range: tuple[float, float]) -> str:
    """``Suggested volume: 30.4–37.6 L``."""
    lo, hi = volume_range
    return f"Suggested volume: {lo:g}–{hi:g} L"


def format_query_summary(query: UserQuery) -> str:
    """One line describing the active inputs."""
    parts = [
        f"weight={query.weight:g}kg",
        f"ability={ABILITY_LABELS[query.ability]}",
        f"wave={WAVE_TYPE_LABELS[query.wave]}",
        f"sort={SORT_MODE_LABELS[query.sort_mode]}",
    ]
    if query.brand_filter:
        parts.append(f"shapers={', '.join(sorted(query.brand_filter))}")
    return "  " + " | ".join(parts)


# ── Result tables ─────────────────────────────────────────────────────────────


def _board_header() -> str:
    return (
        f"    {'#':>3}  {'Shaper':<18}  {'Model':<22}  {'Length':>7}  "
        f"{'Vol (L)':>7}  {'Score':>5}  {'':<9}"
    )


def _board_row(rank: int, sb: ScoredBoard) -> str:
    b = sb.board
    tag = "Sponsored" if b.sponsored else ""
    return (
        f"    {rank:>3}  {b.shaper[:18]:<18}  {b.model[:22]:<22}  {b.length:>7}  "
        f"{b.volume:>7g}  {round(sb.score):>5}  {tag:<9}"
    ).rstrip()


def format_matches_table(ranked: RankedCatalog, query: UserQuery) -> str:
    """Format the full match list in the query's sort order.

    Example::

        === All Matches (2) ===
          weight=80kg | ability=Intermediate | wave=Point Breaks | sort=Best match
          Suggested volume: 30.4–37.6 L

              #  Shaper              Model                   Length  Vol (L)  Score
            -------------------------------------------------------------------------
              1  Channel Islands     Happy Everyday          5'10"     30.3    121  Sponsored
    """
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== All Matches ({len(ranked.all)}) ===")
    lines.append(format_query_summary(query))
    lines.append(f"  {format_volume_hint(ranked.volume_range)}")

    if ranked.is_empty:
        lines.append("")
        lines.append(f"  {EMPTY_RESULTS_MESSAGE}")
        return "\n".join(lines)

    header = _board_header()
    lines.append("")
    lines.append(header.rstrip())
    lines.append("    " + "-" * (len(header) - 4))
    for rank, sb in enumerate(ranked.all, start=1):
        lines.append(_board_row(rank, sb))
    return "\n".join(lines)


def format_top_picks_table(ranked: RankedCatalog, query: UserQuery) -> str:
    """Format one top pick per shaper, best score first."""
    lines: list[str] = []
    lines.append("")
    lines.append(
        f"=== Top Picks by Shaper ({len(ranked.all)} matches · "
        f"{len(ranked.top_per_brand)} shapers) ==="
    )
    lines.append(format_query_summary(query))
    lines.append(f"  {format_volume_hint(ranked.volume_range)}")

    if not ranked.top_per_brand:
        lines.append("")
        lines.append(f"  {EMPTY_RESULTS_MESSAGE}")
        return "\n".join(lines)

    header = _board_header()
    lines.append("")
    lines.append(header.rstrip())
    lines.append("    " + "-" * (len(header) - 4))
    for rank, pick in enumerate(ranked.top_per_brand, start=1):
        lines.append(_board_row(rank, pick.board))
    return "\n".join(lines)


def format_comparison_table(comparison: Comparison) -> str:
    """Format a side-by-side spec table, one column per board."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Compare Boards ===")

    if comparison.is_empty:
        lines.append(f"  {NO_SELECTION_MESSAGE}")
        return "\n".join(lines)

    col_w = max(16, *(len(h) for h in comparison.headers))
    label_w = max(len(label) for label, _ in comparison.rows)

    lines.append(
        f"  {'Spec':<{label_w}}  " + "  ".join(f"{h:<{col_w}}" for h in comparison.headers)
    )
    lines.append("  " + "-" * (label_w + (col_w + 2) * len(comparison.headers)))
    for label, values in comparison.rows:
        lines.append(
            f"  {label:<{label_w}}  " + "  ".join(f"{v:<{col_w}}" for v in values)
        )
    return "\n".join(line.rstrip() for line in lines)


def format_shaper_list(shapers: tuple[str, ...]) -> str:
    """Bulleted list of shapers available for brand filtering."""
    if not shapers:
        return "  (catalog is empty)"
    return "\n".join(f"  - {s}" for s in shapers)
