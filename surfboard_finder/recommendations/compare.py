"""
Side-by-side board comparison (up to ``MAX_COMPARE`` boards).

The compare selection is a tuple of board ids owned by the caller.
``toggle_compare`` returns a new selection; ``build_comparison`` resolves the
selection against the catalog and scores each board for the current query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from surfboard_finder.models.board import Board, UserQuery
from surfboard_finder.recommendations.ranker import ScoredBoard, build_scored_boards

MAX_COMPARE = 4

NO_SELECTION_MESSAGE = "No boards selected yet."

# (row label, value extractor) in display order
_SPEC_ROWS: list[tuple[str, Callable[[ScoredBoard], str]]] = [
    ("Length",       lambda sb: sb.board.length),
    ("Volume (L)",   lambda sb: f"{sb.board.volume:g}"),
    ("Tail",         lambda sb: sb.board.tail),
    ("Fin Setup",    lambda sb: sb.board.fins),
    ("Construction", lambda sb: sb.board.construction),
    ("Match score",  lambda sb: str(round(sb.score))),
]


@dataclass(frozen=True)
class Comparison:
    """Selected boards and their spec rows.

    Attributes:
        boards:  Scored boards in catalog order.
        headers: ``"<shaper> – <model>"`` column headers, one per board.
        rows:    ``(label, values)`` pairs; ``values`` aligns with ``boards``.
    """

    boards:  tuple[ScoredBoard, ...]
    headers: tuple[str, ...]
    rows:    tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def is_empty(self) -> bool:
        return not self.boards


def toggle_compare(selected: Sequence[str], board_id: str) -> tuple[str, ...]:
    """Add or remove ``board_id`` from the compare selection.

    Removing always succeeds. Adding is ignored once ``MAX_COMPARE`` ids are
    already selected.
    """
    if board_id in selected:
        return tuple(i for i in selected if i != board_id)
    if len(selected) < MAX_COMPARE:
        return (*selected, board_id)
    return tuple(selected)


def build_comparison(
    catalog:  Iterable[Board],
    selected: Sequence[str],
    query:    UserQuery,
) -> Comparison:
    """Resolve ``selected`` ids against ``catalog`` and build the spec table.

    Ids not present in the catalog are ignored.

    Raises:
        ValueError: If more than ``MAX_COMPARE`` ids are selected.
    """
    if len(selected) > MAX_COMPARE:
        raise ValueError(
            f"At most {MAX_COMPARE} boards can be compared, got {len(selected)}."
        )

    wanted = set(selected)
    boards = [b for b in catalog if b.id in wanted]
    scored = tuple(build_scored_boards(boards, query))

    headers = tuple(f"{sb.board.shaper} – {sb.board.model}" for sb in scored)
    rows = tuple(
        (label, tuple(extract(sb) for sb in scored))
        for label, extract in _SPEC_ROWS
    ) if scored else ()

    return Comparison(boards=scored, headers=headers, rows=rows)
