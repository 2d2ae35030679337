"""
CSV parser for board catalog feeds (e.g. a spreadsheet's shared CSV view).

Format — comma delimited, header row first.
Recognised columns (case-sensitive; any may be missing, missing → ""):
  id, shaper, model, waveTypes, abilities, recommendedWeightMin,
  recommendedWeightMax, length, volume, tail, fins, construction, img,
  sponsored

Multi-valued columns (waveTypes, abilities):
  whitespace removed, then split on ``|`` if present, otherwise on ``,``
  e.g.  "small_beach | mellow_point"  or  "\"beginner, intermediate\""

Numeric columns (volume, recommendedWeightMin/Max):
  decimal parse; missing or unparsable → 0

Boolean columns (sponsored):
  1/true/yes/y → True; anything else (including empty) → False

Quoting:
  a double quote toggles quoted mode; commas inside quotes are literal and
  the quote characters are dropped. Doubled quotes (``""``) are NOT
  un-escaped, so a literal quote inside a field cannot be represented.

Row-level problems never abort the parse:
  - rows with fewer fields than the header are dropped
  - rows that fail Board validation (unknown enum value, min weight above
    max weight) are dropped with a warning
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path

from pydantic import ValidationError

from surfboard_finder.models.board import Board, derive_board_id

logger = logging.getLogger(__name__)

CATALOG_CSV_COLUMNS = (
    "id", "shaper", "model", "waveTypes", "abilities",
    "recommendedWeightMin", "recommendedWeightMax", "length", "volume",
    "tail", "fins", "construction", "img", "sponsored",
)

_LINE_SPLIT_RE = re.compile(r"\r?\n|\r")
_WHITESPACE_RE = re.compile(r"\s+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_TRUTHY = frozenset({"1", "true", "yes", "y"})


def parse_catalog_csv(text: str) -> list[Board]:
    """Parse catalog CSV text into :class:`Board` objects.

    Args:
        text: Full CSV document.

    Returns:
        Boards in source order. A document with only a header (or nothing at
        all) yields an empty list.
    """
    lines = [line for line in _LINE_SPLIT_RE.split(text) if line]
    if not lines:
        return []

    header = [h.strip() for h in lines[0].split(",")]
    col_index = {name: i for i, name in reversed(list(enumerate(header)))}

    boards: list[Board] = []
    dropped_short = 0
    dropped_invalid = 0

    for row_no, line in enumerate(lines[1:], start=1):
        cols = split_csv_row(line)
        if len(cols) < len(header):
            dropped_short += 1
            logger.debug("Row %d: %d fields < %d header columns, dropped", row_no, len(cols), len(header))
            continue

        row = {name: cols[i] for name, i in col_index.items()}
        try:
            boards.append(_row_to_board(row, row_no))
        except ValidationError as exc:
            dropped_invalid += 1
            logger.warning("Row %d: invalid board dropped: %s", row_no, exc.errors()[0]["msg"])

    if dropped_short or dropped_invalid:
        logger.info(
            "Parsed %d boards (%d short rows, %d invalid rows dropped)",
            len(boards), dropped_short, dropped_invalid,
        )
    else:
        logger.info("Parsed %d boards", len(boards))
    return boards


def read_catalog_csv(path: Path) -> list[Board]:
    """Read a local catalog CSV file and parse it.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog CSV file not found: {path}")
    return parse_catalog_csv(path.read_text(encoding="utf-8-sig"))


def split_csv_row(line: str) -> list[str]:
    """Split one CSV line on commas outside double quotes, dropping the quotes."""
    out: list[str] = []
    cur: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
            continue
        if ch == "," and not in_quotes:
            out.append("".join(cur))
            cur = []
            continue
        cur.append(ch)
    out.append("".join(cur))
    return out


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_board(row: dict[str, str], row_no: int) -> Board:
    """Convert one row dict to a validated :class:`Board`.

    Raises:
        pydantic.ValidationError: On unknown enum values or an inverted
            weight range.
    """
    shaper = row.get("shaper", "")
    model = row.get("model", "")

    return Board(
        id=row.get("id", "") or derive_board_id(shaper, model or str(row_no)),
        shaper=shaper,
        model=model,
        wave_types=_parse_multi(row.get("waveTypes", "")),
        abilities=_parse_multi(row.get("abilities", "")),
        recommended_weight=(
            _parse_number(row.get("recommendedWeightMin", "")),
            _parse_number(row.get("recommendedWeightMax", "")),
        ),
        length=row.get("length", ""),
        volume=_parse_number(row.get("volume", "")),
        tail=row.get("tail", ""),
        fins=row.get("fins", ""),
        construction=row.get("construction", ""),
        img=row.get("img", ""),
        sponsored=row.get("sponsored", "").strip().lower() in _TRUTHY,
    )


def _parse_multi(raw: str) -> list[str]:
    """Split a multi-valued cell on ``|`` (preferred) or ``,``."""
    compact = _WHITESPACE_RE.sub("", raw)
    if not compact:
        return []
    sep = "|" if "|" in compact else ","
    return [v for v in compact.split(sep) if v]


def _parse_number(raw: str) -> float:
    """Parse a decimal number; empty, unparsable or non-finite → 0."""
    v = raw.strip()
    if not _DECIMAL_RE.fullmatch(v):
        return 0.0
    num = float(v)
    return num if math.isfinite(num) else 0.0
