"""
Recommendation ranker: scores a board catalog against one ``UserQuery`` and
derives the two result views.

Usage flow
----------
1. build_scored_boards(catalog, query)
   -> list[ScoredBoard]  (one per catalog board, catalog order)

2. filter_matches(scored, query)
   -> list[ScoredBoard]  (wave + ability + volume window + brand filter)

3. sort_matches(matches, query.sort_mode, target)
   -> list[ScoredBoard]  (stable sort; ties keep catalog order)

4. top_pick_per_brand(matches)
   -> list[TopPick]      (best-scoring board per shaper, score desc)

``rank_catalog()`` runs all four steps and returns a ``RankedCatalog``.
Every call rebuilds everything from the catalog; nothing is cached or
mutated, so repeated calls with the same inputs return equal results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from surfboard_finder.models.board import Board, UserQuery
from surfboard_finder.recommendations.scorer import (
    ScoreComponents,
    compute_score,
    heuristic_volume,
)
from surfboard_finder.taxonomy.board_taxonomy import SortMode

logger = logging.getLogger(__name__)

# Litres of slack either side of the heuristic range
VOLUME_WINDOW_SLACK = 6.0

EMPTY_RESULTS_MESSAGE = (
    "No matches yet. Try adjusting weight, wave type, ability, "
    "or clear shaper filters."
)


@dataclass(frozen=True)
class ScoredBoard:
    """A catalog board paired with its score for the current query.

    Attributes:
        board:      The underlying catalog Board.
        score:      Match score (``components.total``).
        components: Score breakdown.
    """

    board:      Board
    score:      float
    components: ScoreComponents

    @property
    def id(self) -> str:
        return self.board.id

    @property
    def shaper(self) -> str:
        return self.board.shaper


@dataclass(frozen=True)
class TopPick:
    """Highest-scoring match for one shaper."""

    brand: str
    board: ScoredBoard


@dataclass(frozen=True)
class RankedCatalog:
    """Result of one ranking pass.

    Attributes:
        all:           Filtered matches in the query's sort order.
        top_per_brand: One pick per shaper, best score first.
        volume_range:  Heuristic ``(min, max)`` volume for the query.
        target_volume: Midpoint of ``volume_range``.
        shapers:       Sorted distinct shapers across the whole catalog.
    """

    all:           tuple[ScoredBoard, ...]
    top_per_brand: tuple[TopPick, ...]
    volume_range:  tuple[float, float]
    target_volume: float
    shapers:       tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.all


def build_scored_boards(
    catalog: Iterable[Board],
    query:   UserQuery,
) -> list[ScoredBoard]:
    """Score every catalog board against ``query`` (catalog order kept)."""
    scored: list[ScoredBoard] = []
    for board in catalog:
        components = compute_score(board, query.weight, query.wave, query.ability)
        scored.append(ScoredBoard(board=board, score=components.total, components=components))
    return scored


def filter_matches(
    scored: Sequence[ScoredBoard],
    query:  UserQuery,
) -> list[ScoredBoard]:
    """Keep boards that suit the query's wave and ability, sit inside the
    volume window, and (when a brand filter is set) belong to a chosen shaper.
    """
    lo, hi = heuristic_volume(query.weight, query.ability)
    lo, hi = lo - VOLUME_WINDOW_SLACK, hi + VOLUME_WINDOW_SLACK

    matches = [
        sb for sb in scored
        if query.wave in sb.board.wave_types
        and query.ability in sb.board.abilities
        and lo <= sb.board.volume <= hi
    ]
    if query.brand_filter:
        matches = [sb for sb in matches if sb.board.shaper in query.brand_filter]
    return matches


def sort_matches(
    matches:   Sequence[ScoredBoard],
    sort_mode: SortMode,
    target:    float,
) -> list[ScoredBoard]:
    """Sort matches for display. Python's sort is stable, so ties keep input order."""
    if sort_mode == SortMode.VOLUME_CLOSEST:
        return sorted(matches, key=lambda sb: abs(sb.board.volume - target))
    if sort_mode == SortMode.SPONSORED_FIRST:
        return sorted(matches, key=lambda sb: not sb.board.sponsored)
    return sorted(matches, key=lambda sb: -sb.score)


def top_pick_per_brand(matches: Sequence[ScoredBoard]) -> list[TopPick]:
    """Return the best-scoring board per shaper, ordered by score descending.

    Always ranks by raw score, whatever sort mode produced ``matches``.
    Within a shaper, the first board reaching the maximum score wins.
    """
    best_by_brand: dict[str, ScoredBoard] = {}
    for sb in matches:
        existing = best_by_brand.get(sb.board.shaper)
        if existing is None or sb.score > existing.score:
            best_by_brand[sb.board.shaper] = sb

    picks = [TopPick(brand=brand, board=sb) for brand, sb in best_by_brand.items()]
    return sorted(picks, key=lambda p: -p.board.score)


def rank_catalog(catalog: Iterable[Board], query: UserQuery) -> RankedCatalog:
    """Score, filter, sort, and brand-group ``catalog`` for ``query``.

    Args:
        catalog: Boards to rank (any iterable; consumed once).
        query:   Validated shopper inputs.

    Returns:
        RankedCatalog. Empty catalogs and empty filter results produce empty
        views, never an error.
    """
    volume_range = heuristic_volume(query.weight, query.ability)
    target = (volume_range[0] + volume_range[1]) / 2

    scored  = build_scored_boards(catalog, query)
    matches = filter_matches(scored, query)
    ordered = sort_matches(matches, query.sort_mode, target)
    picks   = top_pick_per_brand(ordered)

    logger.debug(
        "Ranked %d boards: %d matches, %d shapers (sort=%s)",
        len(scored), len(ordered), len(picks), query.sort_mode,
    )

    return RankedCatalog(
        all=tuple(ordered),
        top_per_brand=tuple(picks),
        volume_range=volume_range,
        target_volume=target,
        shapers=tuple(sorted({sb.board.shaper for sb in scored})),
    )
