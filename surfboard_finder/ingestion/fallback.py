"""
Bundled sample catalog used whenever the configured feed cannot be loaded.

The three boards cover every wave type and every ability tier so that the
finder still produces matches offline. Keep these records verbatim: demo and
test output depends on them.
"""

from __future__ import annotations

from surfboard_finder.models.board import Board

FALLBACK_RECORDS: list[dict] = [
    {
        "id": "js-monsta-2024",
        "shaper": "JS Industries",
        "model": "Monsta 2024",
        "waveTypes": ["small_beach", "mellow_point", "punchy_reef"],
        "abilities": ["intermediate", "advanced"],
        "recommendedWeight": [65, 95],
        "length": "6'0\"",
        "volume": 31.5,
        "tail": "Squash",
        "fins": "Thruster / 5-fin",
        "construction": "PU/PE",
        "img": "https://images.unsplash.com/photo-1544551763-7ef420b9b04c?q=80&w=1200&auto=format&fit=crop",
    },
    {
        "id": "ci-happy-everyday",
        "shaper": "Channel Islands",
        "model": "Happy Everyday",
        "waveTypes": ["small_beach", "mellow_point"],
        "abilities": ["beginner", "intermediate"],
        "recommendedWeight": [55, 90],
        "length": "5'10\"",
        "volume": 30.3,
        "tail": "Rounded Squash",
        "fins": "Thruster / Quad",
        "construction": "PU/PE / Spine-Tek",
        "img": "https://images.unsplash.com/photo-1540932239986-30128078f3c5?q=80&w=1200&auto=format&fit=crop",
        "sponsored": True,
    },
    {
        "id": "pyzel-ghost",
        "shaper": "Pyzel",
        "model": "Ghost",
        "waveTypes": ["punchy_reef", "overhead"],
        "abilities": ["intermediate", "advanced"],
        "recommendedWeight": [70, 105],
        "length": "6'2\"",
        "volume": 32.8,
        "tail": "Round",
        "fins": "Thruster",
        "construction": "PU/PE / Epoxy",
        "img": "https://images.unsplash.com/photo-1496545672447-f699b503d270?q=80&w=1200&auto=format&fit=crop",
    },
]

FALLBACK_BOARDS: tuple[Board, ...] = tuple(
    Board.model_validate(record) for record in FALLBACK_RECORDS
)
