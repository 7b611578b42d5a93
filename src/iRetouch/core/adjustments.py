"""Slider values driving the fine-tune stage of the edit pipeline."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Mapping

from ..errors import InvalidParameterError

# The order matches the pipeline so the same tuple drives rendering, the
# sidecar writer and any UI that lays the sliders out.
ADJUSTMENT_KEYS = (
    "brightness",
    "contrast",
    "saturation",
    "exposure",
    "temperature",
    "gamma",
    "clarity",
    "vignette",
)

ADJUSTMENT_RANGES: dict[str, tuple[float, float]] = {
    "brightness": (0.0, 200.0),
    "contrast": (0.0, 200.0),
    "saturation": (0.0, 200.0),
    "exposure": (0.0, 200.0),
    "temperature": (-100.0, 100.0),
    "gamma": (1.0, 220.0),
    "clarity": (0.0, 100.0),
    "vignette": (0.0, 100.0),
}

NEUTRAL_VALUES: dict[str, float] = {
    "brightness": 100.0,
    "contrast": 100.0,
    "saturation": 100.0,
    "exposure": 100.0,
    "temperature": 0.0,
    "gamma": 100.0,
    "clarity": 0.0,
    "vignette": 0.0,
}


def validate_value(key: str, value: Any) -> float:
    """Return *value* as ``float`` after checking it against the range of *key*."""

    if key not in ADJUSTMENT_RANGES:
        raise InvalidParameterError(f"Unknown adjustment {key!r}")
    if isinstance(value, bool):
        raise InvalidParameterError(f"{key} must be numeric, got {value!r}")
    try:
        numeric = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{key} must be numeric, got {value!r}") from exc
    if not math.isfinite(numeric):
        raise InvalidParameterError(f"{key} must be finite, got {value!r}")
    minimum, maximum = ADJUSTMENT_RANGES[key]
    if numeric < minimum or numeric > maximum:
        raise InvalidParameterError(
            f"{key}={numeric:g} is outside the supported range [{minimum:g}, {maximum:g}]"
        )
    return numeric


@dataclass(frozen=True)
class AdjustmentState:
    """Immutable bundle of the eight fine-tune sliders.

    Every instance is validated on construction, so an ``AdjustmentState`` that
    exists is always safe to hand to :func:`iRetouch.core.filters.run_pipeline`.
    """

    brightness: float = 100.0
    contrast: float = 100.0
    saturation: float = 100.0
    exposure: float = 100.0
    temperature: float = 0.0
    gamma: float = 100.0
    clarity: float = 0.0
    vignette: float = 0.0

    def __post_init__(self) -> None:
        for item in fields(self):
            object.__setattr__(self, item.name, validate_value(item.name, getattr(self, item.name)))

    def replace(self, **changes: Any) -> "AdjustmentState":
        """Return a validated copy with *changes* applied."""

        unknown = set(changes) - set(ADJUSTMENT_KEYS)
        if unknown:
            raise InvalidParameterError(f"Unknown adjustment(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    def is_neutral(self, key: str | None = None) -> bool:
        """Return ``True`` when *key* (or every slider) sits at its neutral value."""

        keys = ADJUSTMENT_KEYS if key is None else (key,)
        return all(getattr(self, name) == NEUTRAL_VALUES[name] for name in keys)

    def to_mapping(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "AdjustmentState":
        """Build a state from *values*, using neutral defaults for missing keys.

        Unknown keys are rejected so a typo in a sidecar never goes unnoticed.
        """

        unknown = set(values) - set(ADJUSTMENT_KEYS)
        if unknown:
            raise InvalidParameterError(f"Unknown adjustment(s): {', '.join(sorted(unknown))}")
        return cls(**{key: values.get(key, NEUTRAL_VALUES[key]) for key in ADJUSTMENT_KEYS})


__all__ = [
    "ADJUSTMENT_KEYS",
    "ADJUSTMENT_RANGES",
    "AdjustmentState",
    "NEUTRAL_VALUES",
    "validate_value",
]
