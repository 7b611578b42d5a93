"""Persist slider, preset and view transform values next to an image.

The sidecar only records *how* to rebuild the edit.  Crop selections are not
stored: a committed crop replaces the source pixels, so there is nothing to
replay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..config import BACKUP_DIR_NAME, SIDECAR_SUFFIX
from ..core.adjustments import AdjustmentState
from ..core.filters import FilterPreset, resolve_preset
from ..core.geometry import Transform
from ..errors import InvalidParameterError, SidecarInvalidError
from ..utils.jsonio import read_json, write_json

SIDECAR_VERSION = 1


@dataclass(frozen=True)
class SidecarData:
    adjustments: AdjustmentState = field(default_factory=AdjustmentState)
    active_filter: FilterPreset = FilterPreset.DEFAULT
    transform: Transform = field(default_factory=Transform)


def sidecar_path(image_path: Path) -> Path:
    """Return the sidecar location for *image_path* (``photo.jpg.iretouch.json``)."""

    return image_path.with_name(image_path.name + SIDECAR_SUFFIX)


def save_sidecar(image_path: Path, data: SidecarData, *, backup: bool = False) -> Path:
    """Write *data* beside *image_path*, returning the sidecar path."""

    path = sidecar_path(image_path)
    payload: dict[str, Any] = {
        "version": SIDECAR_VERSION,
        "adjustments": data.adjustments.to_mapping(),
        "filter": data.active_filter.value,
        "transform": {
            "rotation": data.transform.rotation_degrees,
            "scale": data.transform.scale,
        },
    }
    backup_dir = path.parent / BACKUP_DIR_NAME if backup else None
    write_json(path, payload, backup_dir=backup_dir)
    return path


def load_sidecar(image_path: Path) -> SidecarData:
    """Read the sidecar stored beside *image_path*.

    Raises
    ------
    SidecarInvalidError
        When the file is missing, unreadable, from an unknown version, or holds
        values outside the supported slider ranges.
    """

    path = sidecar_path(image_path)
    payload = read_json(path)
    version = payload.get("version")
    if version != SIDECAR_VERSION:
        raise SidecarInvalidError(f"Unsupported sidecar version {version!r} in {path}")

    adjustments = payload.get("adjustments", {})
    transform = payload.get("transform", {})
    if not isinstance(adjustments, dict) or not isinstance(transform, dict):
        raise SidecarInvalidError(f"Malformed sidecar sections in {path}")
    try:
        return SidecarData(
            adjustments=AdjustmentState.from_mapping(adjustments),
            active_filter=resolve_preset(payload.get("filter")),
            transform=Transform(transform.get("rotation", 0.0), transform.get("scale", 1.0)),
        )
    except (InvalidParameterError, TypeError, ValueError) as exc:
        raise SidecarInvalidError(f"Invalid sidecar values in {path}: {exc}") from exc


__all__ = ["SidecarData", "load_sidecar", "save_sidecar", "sidecar_path"]
