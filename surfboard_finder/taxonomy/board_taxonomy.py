"""
Board taxonomy for the surfboard recommendation engine.

Closed vocabularies shared by feeds, queries, and the CLI:
  - ``Ability``    — rider skill tier a board suits.
  - ``WaveType``   — surf-break category a board suits.
  - ``SortMode``   — ordering applied to the full match list.
  - ``CatalogKind``— which feed format the catalog is loaded from.

Feed values are the lowercase ``StrEnum`` values; display labels live in
``ABILITY_LABELS`` / ``WAVE_TYPE_LABELS`` / ``SORT_MODE_LABELS``.

This module has NO imports from any other ``surfboard_finder`` package.
"""

from enum import StrEnum


class Ability(StrEnum):
    """Rider skill tier."""

    BEGINNER = "beginner"
    """Learning to stand and trim; needs float and stability."""

    INTERMEDIATE = "intermediate"
    """Comfortable turning on open faces; trading float for response."""

    ADVANCED = "advanced"
    """Surfs critical sections; rides boards close to minimum volume."""


class WaveType(StrEnum):
    """Surf-break category a board is designed for."""

    SMALL_BEACH = "small_beach"
    """Weak, knee-to-chest beach breaks."""

    MELLOW_POINT = "mellow_point"
    """Long, forgiving point-break walls."""

    PUNCHY_REEF = "punchy_reef"
    """Powerful reef breaks with steep takeoffs."""

    OVERHEAD = "overhead"
    """Overhead and hollow surf."""


class SortMode(StrEnum):
    """Ordering applied to the full list of matches."""

    BEST = "best"
    """Match score, highest first."""

    VOLUME_CLOSEST = "volume_closest"
    """Distance from the target volume, nearest first."""

    SPONSORED_FIRST = "sponsored_first"
    """Sponsored boards ahead of the rest."""


class CatalogKind(StrEnum):
    """Feed format of the configured catalog source."""

    JSON_URL = "json_url"
    CSV_URL = "csv_url"


ABILITY_LABELS: dict[Ability, str] = {
    Ability.BEGINNER:     "Beginner",
    Ability.INTERMEDIATE: "Intermediate",
    Ability.ADVANCED:     "Advanced",
}

WAVE_TYPE_LABELS: dict[WaveType, str] = {
    WaveType.SMALL_BEACH:  "Small Beachies",
    WaveType.MELLOW_POINT: "Point Breaks",
    WaveType.PUNCHY_REEF:  "Punchy Reefs",
    WaveType.OVERHEAD:     "Overhead / Hollow",
}

SORT_MODE_LABELS: dict[SortMode, str] = {
    SortMode.BEST:            "Best match",
    SortMode.VOLUME_CLOSEST:  "Volume closest",
    SortMode.SPONSORED_FIRST: "Sponsored first",
}
