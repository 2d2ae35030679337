"""
Tests for surfboard_finder/taxonomy/board_taxonomy.py.

Verifies feed values, label coverage, and that enums compare equal to
their string values (feeds and CLI options pass plain strings).
"""

from __future__ import annotations

import pytest

from surfboard_finder.taxonomy.board_taxonomy import (
    ABILITY_LABELS,
    SORT_MODE_LABELS,
    WAVE_TYPE_LABELS,
    Ability,
    CatalogKind,
    SortMode,
    WaveType,
)


class TestFeedValues:
    def test_abilities(self):
        assert [a.value for a in Ability] == ["beginner", "intermediate", "advanced"]

    def test_wave_types(self):
        assert [w.value for w in WaveType] == [
            "small_beach", "mellow_point", "punchy_reef", "overhead",
        ]

    def test_sort_modes(self):
        assert {s.value for s in SortMode} == {"best", "volume_closest", "sponsored_first"}

    def test_catalog_kinds(self):
        assert {k.value for k in CatalogKind} == {"json_url", "csv_url"}

    def test_str_equality(self):
        assert WaveType.MELLOW_POINT == "mellow_point"
        assert f"{CatalogKind.CSV_URL}" == "csv_url"

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError):
            WaveType("tidal_bore")


class TestLabels:
    @pytest.mark.parametrize(
        "enum_cls,labels",
        [(Ability, ABILITY_LABELS), (WaveType, WAVE_TYPE_LABELS), (SortMode, SORT_MODE_LABELS)],
    )
    def test_every_member_labelled(self, enum_cls, labels):
        assert set(labels) == set(enum_cls)

    def test_display_labels(self):
        assert WAVE_TYPE_LABELS[WaveType.MELLOW_POINT] == "Point Breaks"
        assert ABILITY_LABELS[Ability.ADVANCED] == "Advanced"
