"""
Tests for surfboard_finder/ingestion/catalog_csv.py.

What we test
------------
parse_catalog_csv():
  - Well-formed rows become Boards with all fields mapped.
  - Rows with fewer fields than the header are dropped.
  - Quoted fields keep embedded commas; the quotes are removed.
  - Multi-valued cells split on '|' when present, otherwise on ','.
  - sponsored accepts 1/true/yes/y (case-insensitive), anything else is False.
  - Missing or unparsable numbers default to 0.
  - Missing id is derived from shaper + model.
  - Rows with unknown enum values are dropped, other rows survive.
  - CRLF, CR and blank lines are tolerated.
  - Header-only / empty documents give [].
  - Boards written as plain rows parse back with every field equal.

split_csv_row():
  - Quote toggling and the no-unescape limitation of doubled quotes.

read_catalog_csv():
  - Reads a file (BOM tolerated); missing file -> FileNotFoundError.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from surfboard_finder.ingestion.catalog_csv import (
    CATALOG_CSV_COLUMNS,
    parse_catalog_csv,
    read_catalog_csv,
    split_csv_row,
)
from surfboard_finder.ingestion.fallback import FALLBACK_BOARDS
from surfboard_finder.taxonomy.board_taxonomy import Ability, WaveType

HEADER = ",".join(CATALOG_CSV_COLUMNS)

FULL_ROW = (
    'ci-happy,Channel Islands,Happy Everyday,small_beach|mellow_point,'
    '"beginner, intermediate",55,90,5\'10,30.3,Squash,Thruster,PU/PE,'
    'https://example.com/happy.jpg,TRUE'
)


def _csv(*rows: str, header: str = HEADER, newline: str = "\n") -> str:
    return newline.join([header, *rows])


# ── Field mapping ─────────────────────────────────────────────────────────────

class TestFieldMapping:
    def test_full_row(self):
        boards = parse_catalog_csv(_csv(FULL_ROW))
        assert len(boards) == 1
        b = boards[0]
        assert b.id == "ci-happy"
        assert b.shaper == "Channel Islands"
        assert b.model == "Happy Everyday"
        assert b.wave_types == (WaveType.SMALL_BEACH, WaveType.MELLOW_POINT)
        assert b.abilities == (Ability.BEGINNER, Ability.INTERMEDIATE)
        assert b.recommended_weight == (55.0, 90.0)
        assert b.length == "5'10"
        assert b.volume == pytest.approx(30.3)
        assert b.tail == "Squash"
        assert b.fins == "Thruster"
        assert b.construction == "PU/PE"
        assert b.img == "https://example.com/happy.jpg"
        assert b.sponsored is True

    def test_header_names_are_trimmed(self):
        header = " , ".join(CATALOG_CSV_COLUMNS)
        boards = parse_catalog_csv(_csv(FULL_ROW, header=header))
        assert boards[0].shaper == "Channel Islands"

    def test_column_order_does_not_matter(self):
        header = "model,shaper,volume,waveTypes,abilities"
        boards = parse_catalog_csv(_csv("Ghost,Pyzel,32.8,overhead,advanced", header=header))
        assert boards[0].shaper == "Pyzel"
        assert boards[0].model == "Ghost"
        assert boards[0].volume == pytest.approx(32.8)

    def test_missing_columns_default(self):
        header = "shaper,model"
        b = parse_catalog_csv(_csv("Pyzel,Ghost", header=header))[0]
        assert b.wave_types == ()
        assert b.abilities == ()
        assert b.recommended_weight == (0.0, 0.0)
        assert b.volume == 0.0
        assert b.sponsored is False


# ── Row handling ──────────────────────────────────────────────────────────────

class TestRowHandling:
    def test_short_row_dropped(self):
        short = "a,b,c,d,e,f,g,h,i,j"  # 10 fields < 14 header columns
        boards = parse_catalog_csv(_csv(short, FULL_ROW))
        assert [b.id for b in boards] == ["ci-happy"]

    def test_extra_fields_ignored(self):
        boards = parse_catalog_csv(_csv(FULL_ROW + ",extra,fields"))
        assert len(boards) == 1

    def test_unknown_enum_row_dropped(self, caplog):
        bad = FULL_ROW.replace("small_beach|mellow_point", "tidal_bore").replace(
            "ci-happy", "bad-row"
        )
        with caplog.at_level("WARNING"):
            boards = parse_catalog_csv(_csv(bad, FULL_ROW))
        assert [b.id for b in boards] == ["ci-happy"]
        assert "invalid board dropped" in caplog.text

    def test_inverted_weight_range_dropped(self):
        bad = FULL_ROW.replace(",55,90,", ",95,60,")
        assert parse_catalog_csv(_csv(bad)) == []

    @pytest.mark.parametrize("newline", ["\r\n", "\r", "\n"])
    def test_line_endings(self, newline):
        boards = parse_catalog_csv(_csv(FULL_ROW, FULL_ROW, newline=newline))
        assert len(boards) == 2

    def test_blank_lines_skipped(self):
        text = HEADER + "\n\n" + FULL_ROW + "\n\n"
        assert len(parse_catalog_csv(text)) == 1

    def test_header_only(self):
        assert parse_catalog_csv(HEADER) == []

    def test_empty_document(self):
        assert parse_catalog_csv("") == []


# ── Cell parsing ──────────────────────────────────────────────────────────────

class TestCellParsing:
    def _board(self, **cells: str):
        header = "shaper,model," + ",".join(cells)
        row = "S,M," + ",".join(f'"{v}"' for v in cells.values())
        return parse_catalog_csv(_csv(row, header=header))[0]

    def test_pipe_split_wins_over_comma(self):
        b = self._board(waveTypes="small_beach | mellow_point")
        assert b.wave_types == (WaveType.SMALL_BEACH, WaveType.MELLOW_POINT)

    def test_comma_split(self):
        b = self._board(abilities="intermediate, advanced")
        assert b.abilities == (Ability.INTERMEDIATE, Ability.ADVANCED)

    def test_empty_segments_dropped(self):
        b = self._board(abilities="beginner||advanced|")
        assert b.abilities == (Ability.BEGINNER, Ability.ADVANCED)

    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", "yes", "Y", " y "])
    def test_truthy_sponsored(self, raw):
        assert self._board(sponsored=raw).sponsored is True

    @pytest.mark.parametrize("raw", ["", "0", "false", "no", "sponsored"])
    def test_falsy_sponsored(self, raw):
        assert self._board(sponsored=raw).sponsored is False

    @pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", "1e999", "1_000", "3,5", "0x10"])
    def test_bad_numbers_default_to_zero(self, raw):
        assert self._board(volume=raw).volume == 0.0

    def test_decimal_number(self):
        assert self._board(volume=" 31.75 ").volume == pytest.approx(31.75)

    @pytest.mark.parametrize(
        "raw,expected",
        [("+32", 32.0), ("-1.5", -1.5), (".5", 0.5), ("30.", 30.0), ("3.2e1", 32.0)],
    )
    def test_decimal_forms(self, raw, expected):
        header = "shaper,model,recommendedWeightMin,recommendedWeightMax"
        board = parse_catalog_csv(_csv(f"S,M,{raw},100", header=header))[0]
        assert board.recommended_weight[0] == pytest.approx(expected)


# ── Id derivation ─────────────────────────────────────────────────────────────

class TestIdDerivation:
    def test_missing_id_derived(self):
        row = FULL_ROW.replace("ci-happy,", ",", 1)
        b = parse_catalog_csv(_csv(row))[0]
        assert b.id == "channel-islands-happy-everyday"

    def test_missing_model_uses_row_number(self):
        header = "shaper,model"
        boards = parse_catalog_csv(_csv("Pyzel,Ghost", "Firewire,", header=header))
        assert boards[1].id == "firewire-2"


# ── split_csv_row ─────────────────────────────────────────────────────────────

class TestSplitCsvRow:
    def test_plain(self):
        assert split_csv_row("a,b,,c") == ["a", "b", "", "c"]

    def test_quoted_comma(self):
        assert split_csv_row('a,"b, c",d') == ["a", "b, c", "d"]

    def test_doubled_quotes_not_unescaped(self):
        # "" toggles quoting twice and leaves nothing behind
        assert split_csv_row('a,"say ""hi""",b') == ["a", "say hi", "b"]

    def test_trailing_comma(self):
        assert split_csv_row("a,") == ["a", ""]


# ── read_catalog_csv ──────────────────────────────────────────────────────────

class TestReadCatalogCsv:
    def test_reads_file_with_bom(self, tmp_path: Path):
        path = tmp_path / "boards.csv"
        path.write_text("\ufeff" + _csv(FULL_ROW), encoding="utf-8")
        boards = read_catalog_csv(path)
        assert [b.id for b in boards] == ["ci-happy"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_catalog_csv(tmp_path / "nope.csv")


# ── Round trip ────────────────────────────────────────────────────────────────

def _board_to_row(board) -> str:
    cells = {
        "id": board.id,
        "shaper": board.shaper,
        "model": board.model,
        "waveTypes": "|".join(board.wave_types),
        "abilities": "|".join(board.abilities),
        "recommendedWeightMin": repr(board.recommended_weight[0]),
        "recommendedWeightMax": repr(board.recommended_weight[1]),
        "length": board.length,
        "volume": repr(board.volume),
        "tail": board.tail,
        "fins": board.fins,
        "construction": board.construction,
        "img": board.img,
        "sponsored": "true" if board.sponsored else "false",
    }
    return ",".join(cells[name] for name in CATALOG_CSV_COLUMNS)


class TestRoundTrip:
    def test_generated_csv_parses_back_field_for_field(self, make_board):
        # Quote characters toggle quoting, so they cannot appear in cells
        sources = [
            b.model_copy(update={"length": b.length.replace('"', "")})
            for b in FALLBACK_BOARDS
        ] + [
            make_board(id="plain", length="6'0", sponsored=False),
            make_board(
                id="multi",
                shaper="Firewire",
                model="Seaside and Beyond",
                wave_types=(WaveType.SMALL_BEACH, WaveType.OVERHEAD),
                abilities=(Ability.BEGINNER, Ability.INTERMEDIATE, Ability.ADVANCED),
                recommended_weight=(52.5, 101.25),
                length="5'6",
                volume=29.75,
                sponsored=True,
            ),
            make_board(id="untagged", wave_types=(), abilities=(), volume=0.0),
        ]
        text = "\n".join([HEADER, *(_board_to_row(b) for b in sources)])

        parsed = parse_catalog_csv(text)

        assert len(parsed) == len(sources)
        for got, want in zip(parsed, sources):
            assert got.model_dump() == want.model_dump()
