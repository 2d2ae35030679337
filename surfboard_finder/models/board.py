"""
Board catalog and query models.

``Board`` is one catalog record as published by the feed. Field names follow
Python conventions; the feed's camelCase names (``waveTypes``,
``recommendedWeight``) are accepted as aliases so a JSON feed object can be
validated directly with ``Board.model_validate(obj)``.

``UserQuery`` is the validated shopper input. It is immutable: brand-filter
changes return a new query (``toggle_brand`` / ``clear_brands``) so derived
rankings are always rebuilt from scratch.

Enum values outside the taxonomy are rejected at validation time rather than
carried through to filters that could never match them.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from surfboard_finder.taxonomy.board_taxonomy import Ability, SortMode, WaveType

_WHITESPACE_RE = re.compile(r"\s+")


def derive_board_id(shaper: str, model: str) -> str:
    """Build a deterministic board id from brand and model.

    Example::

        derive_board_id("Channel Islands", "Happy Everyday")
        # → "channel-islands-happy-everyday"
    """
    return _WHITESPACE_RE.sub("-", f"{shaper}-{model}".lower())


class Board(BaseModel):
    """A surfboard model with its specifications and suitability tags.

    Attributes:
        id: Unique catalog key. Derived from ``shaper`` + ``model`` when the
            feed omits it.
        shaper: Brand / shaper name.
        model: Model name.
        wave_types: Wave categories the board suits (feed order kept).
        abilities: Skill tiers the board suits (feed order kept).
        recommended_weight: Manufacturer rider-weight range ``(min, max)``.
        length: Display length, e.g. ``6'0"``.
        volume: Volume in litres.
        tail: Tail shape label.
        fins: Fin setup label.
        construction: Construction label.
        img: Image reference; opaque to the engine.
        sponsored: ``True`` for paid placements.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    shaper: str
    model: str
    wave_types: tuple[WaveType, ...] = Field(default=(), alias="waveTypes")
    abilities: tuple[Ability, ...] = ()
    recommended_weight: tuple[float, float] = Field(alias="recommendedWeight")
    length: str = ""
    volume: float
    tail: str = ""
    fins: str = ""
    construction: str = ""
    img: str = ""
    sponsored: bool = False

    @field_validator("sponsored", mode="before")
    @classmethod
    def coerce_missing_sponsored(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("volume")
    @classmethod
    def validate_volume(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"volume must be >= 0, got {v}.")
        return v

    @field_validator("recommended_weight")
    @classmethod
    def validate_weight_range(cls, v: tuple[float, float]) -> tuple[float, float]:
        if v[0] > v[1]:
            raise ValueError(
                f"recommendedWeight min ({v[0]}) must be <= max ({v[1]})."
            )
        return v

    @model_validator(mode="before")
    @classmethod
    def fill_missing_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id"):
            shaper, model = data.get("shaper"), data.get("model")
            if isinstance(shaper, str) and isinstance(model, str):
                data = {**data, "id": derive_board_id(shaper, model)}
        return data

    def suits_weight(self, weight: float) -> bool:
        """Return ``True`` if ``weight`` lies inside ``recommended_weight`` (inclusive)."""
        lo, hi = self.recommended_weight
        return lo <= weight <= hi


class UserQuery(BaseModel):
    """Shopper inputs that drive one ranking pass.

    Attributes:
        weight: Rider weight in kilograms. Must be positive.
        ability: Rider skill tier.
        wave: Wave category the rider wants a board for.
        sort_mode: Ordering of the full match list.
        brand_filter: Shaper names to restrict to; empty means all shapers.
    """

    model_config = ConfigDict(frozen=True)

    weight: float
    ability: Ability
    wave: WaveType
    sort_mode: SortMode = SortMode.BEST
    brand_filter: frozenset[str] = frozenset()

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"weight must be a finite number, got {v}.")
        if v <= 0:
            raise ValueError(f"weight must be positive, got {v}.")
        return v

    def toggle_brand(self, shaper: str) -> "UserQuery":
        """Return a copy with ``shaper`` added to or removed from the brand filter."""
        if shaper in self.brand_filter:
            brands = self.brand_filter - {shaper}
        else:
            brands = self.brand_filter | {shaper}
        return self.model_copy(update={"brand_filter": frozenset(brands)})

    def clear_brands(self) -> "UserQuery":
        """Return a copy with no brand filter."""
        return self.model_copy(update={"brand_filter": frozenset()})

    def with_inputs(
        self,
        weight: Optional[float] = None,
        ability: Optional[Ability] = None,
        wave: Optional[WaveType] = None,
        sort_mode: Optional[SortMode] = None,
    ) -> "UserQuery":
        """Return a re-validated copy with any given inputs replaced."""
        data = self.model_dump()
        if weight is not None:
            data["weight"] = weight
        if ability is not None:
            data["ability"] = ability
        if wave is not None:
            data["wave"] = wave
        if sort_mode is not None:
            data["sort_mode"] = sort_mode
        return UserQuery(**data)
