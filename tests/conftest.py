"""
Shared pytest fixtures for the Surfboard Finder test suite.

Provides:
  - ``make_board``: factory for valid ``Board`` objects with overridable fields.
  - ``sample_query``: the default 80 kg intermediate point-break query.
  - ``sample_catalog``: a small multi-shaper catalog.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

from surfboard_finder.models.board import Board, UserQuery
from surfboard_finder.taxonomy.board_taxonomy import Ability, SortMode, WaveType


def build_board(**overrides: Any) -> Board:
    """Return a valid Board; keyword overrides replace the defaults."""
    fields: dict[str, Any] = {
        "id": "test-board",
        "shaper": "Test Shapes",
        "model": "Test Model",
        "wave_types": (WaveType.MELLOW_POINT,),
        "abilities": (Ability.INTERMEDIATE,),
        "recommended_weight": (60.0, 95.0),
        "length": "6'0\"",
        "volume": 34.0,
        "tail": "Squash",
        "fins": "Thruster",
        "construction": "PU/PE",
        "img": "",
        "sponsored": False,
    }
    fields.update(overrides)
    return Board(**fields)


@pytest.fixture
def make_board() -> Callable[..., Board]:
    return build_board


@pytest.fixture
def sample_query() -> UserQuery:
    """80 kg intermediate rider on a point break; volume range 30.4–37.6 L."""
    return UserQuery(
        weight=80,
        ability=Ability.INTERMEDIATE,
        wave=WaveType.MELLOW_POINT,
        sort_mode=SortMode.BEST,
    )


@pytest.fixture
def sample_catalog() -> list[Board]:
    """Five matching boards across three shapers plus one non-matching board."""
    return [
        build_board(id="alpha-cruiser", shaper="Alpha", model="Cruiser", volume=36.0),
        build_board(id="alpha-groveler", shaper="Alpha", model="Groveler", volume=34.0),
        build_board(
            id="bravo-daily", shaper="Bravo", model="Daily", volume=31.0, sponsored=True,
        ),
        build_board(id="charlie-step", shaper="Charlie", model="Step", volume=40.0),
        build_board(id="bravo-fish", shaper="Bravo", model="Fish", volume=33.0),
        build_board(
            id="delta-gun",
            shaper="Delta",
            model="Gun",
            wave_types=(WaveType.OVERHEAD,),
            abilities=(Ability.ADVANCED,),
            volume=34.0,
        ),
    ]
