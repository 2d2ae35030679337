"""
Board scoring: volume heuristic and additive match score.

Volume heuristic
----------------
Recommended volume is a fraction of rider weight that shrinks as skill
grows::

    beginner      weight * 0.45 .. weight * 0.55
    intermediate  weight * 0.38 .. weight * 0.47
    advanced      weight * 0.30 .. weight * 0.40

Both bounds are rounded to one decimal, half away from zero. The target
volume is the midpoint of the rounded range.

Score formula (additive, base 100, no clamping)
-----------------------------------------------
    total = (
        100 - min(|volume - target|, 40) * 1.5   # volume closeness, floor 40
        + 10 if wave matches
        + 8  if ability matches
        ± 6  rider weight inside / outside the board's recommended range
        + 3  if sponsored
    )

Only the ordering of totals matters; a perfect sponsored board scores 127.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from surfboard_finder.models.board import Board
from surfboard_finder.taxonomy.board_taxonomy import Ability, WaveType

# Ability → (min, max) volume-per-kg fractions
_VOLUME_FRACTIONS: dict[Ability, tuple[float, float]] = {
    Ability.BEGINNER:     (0.45, 0.55),
    Ability.INTERMEDIATE: (0.38, 0.47),
    Ability.ADVANCED:     (0.30, 0.40),
}

VOLUME_DIFF_CAP    = 40.0
VOLUME_DIFF_WEIGHT = 1.5
WAVE_BONUS         = 10.0
ABILITY_BONUS      = 8.0
WEIGHT_ADJUSTMENT  = 6.0
SPONSORED_BONUS    = 3.0

# Floats at or above this magnitude have no fractional tenths left
_ROUNDING_LIMIT = 1e15


@dataclass(frozen=True)
class ScoreComponents:
    """All components of a board match score.

    Attributes:
        volume_points:     100 minus the capped, weighted volume distance.
        wave_bonus:        10 when the board suits the requested wave, else 0.
        ability_bonus:     8 when the board suits the rider's ability, else 0.
        weight_adjustment: +6 inside the recommended weight range, -6 outside.
        sponsored_bonus:   3 for sponsored boards, else 0.
        target_volume:     Midpoint of the heuristic volume range (litres).
        volume_diff:       Raw |volume - target| before capping.
    """

    volume_points:     float
    wave_bonus:        float
    ability_bonus:     float
    weight_adjustment: float
    sponsored_bonus:   float
    target_volume:     float
    volume_diff:       float

    @property
    def total(self) -> float:
        return (
            self.volume_points
            + self.wave_bonus
            + self.ability_bonus
            + self.weight_adjustment
            + self.sponsored_bonus
        )


def heuristic_volume(weight: float, ability: Ability) -> tuple[float, float]:
    """Return the recommended ``(min, max)`` volume in litres.

    No input checking: a non-positive weight gives a degenerate range.

    Example::

        heuristic_volume(80, Ability.INTERMEDIATE)  # → (30.4, 37.6)
    """
    lo, hi = _VOLUME_FRACTIONS[Ability(ability)]
    return _round1(weight * lo), _round1(weight * hi)


def target_volume(weight: float, ability: Ability) -> float:
    """Midpoint of :func:`heuristic_volume`."""
    lo, hi = heuristic_volume(weight, ability)
    return (lo + hi) / 2


def compute_score(
    board:   Board,
    weight:  float,
    wave:    WaveType,
    ability: Ability,
) -> ScoreComponents:
    """Compute every score component for one board against one rider.

    Args:
        board:   Catalog board.
        weight:  Rider weight (kg).
        wave:    Requested wave category.
        ability: Rider skill tier.

    Returns:
        ScoreComponents; ``.total`` is the match score.
    """
    target = target_volume(weight, ability)
    volume_diff = abs(board.volume - target)

    return ScoreComponents(
        volume_points=100.0 - min(volume_diff, VOLUME_DIFF_CAP) * VOLUME_DIFF_WEIGHT,
        wave_bonus=WAVE_BONUS if wave in board.wave_types else 0.0,
        ability_bonus=ABILITY_BONUS if ability in board.abilities else 0.0,
        weight_adjustment=(
            WEIGHT_ADJUSTMENT if board.suits_weight(weight) else -WEIGHT_ADJUSTMENT
        ),
        sponsored_bonus=SPONSORED_BONUS if board.sponsored else 0.0,
        target_volume=target,
        volume_diff=volume_diff,
    )


def score_board(
    board:   Board,
    weight:  float,
    wave:    WaveType,
    ability: Ability,
) -> float:
    """Return the match score of ``board`` for the given rider inputs."""
    return compute_score(board, weight, wave, ability).total


# ── Helper ────────────────────────────────────────────────────────────────────

def _round1(value: float) -> float:
    # Non-finite and very large values carry no tenths digit to round
    if not math.isfinite(value) or abs(value) >= _ROUNDING_LIMIT:
        return value
    # Decimal of the shortest repr so 12.25 rounds to 12.3, not 12.2
    return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
