"""Arena bounds and their resolution from loosely typed host input."""
from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from loguru import logger

from smooshrooms.types import InvalidBoundsError


@dataclass(frozen=True)
class Bounds:
    """Arena size in abstract units (pixels or otherwise)."""

    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidBoundsError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidBoundsError(f"{name} must be finite and positive, got {value!r}")


BoundsLike = Union[Bounds, Mapping[str, Any], tuple[float, float]]


def resolve_bounds(raw: BoundsLike | None, default: tuple[float, float]) -> Bounds:
    """Coerce host-provided bounds, falling back to ``default`` when unusable."""
    if isinstance(raw, Bounds):
        return raw
    if raw is not None:
        try:
            if isinstance(raw, Mapping):
                return Bounds(raw.get("width"), raw.get("height"))
            width, height = raw
            return Bounds(width, height)
        except (TypeError, ValueError) as exc:
            logger.warning("Invalid arena bounds {!r} ({}); using default {}", raw, exc, default)
    return Bounds(*default)
