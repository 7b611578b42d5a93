"""Collaborator adapters: image decoding/encoding and sidecar persistence."""

from __future__ import annotations

from .image_io import decode_image, encode_image, export_image, render_transformed
from .sidecar import SidecarData, load_sidecar, save_sidecar, sidecar_path

__all__ = [
    "SidecarData",
    "decode_image",
    "encode_image",
    "export_image",
    "load_sidecar",
    "render_transformed",
    "save_sidecar",
    "sidecar_path",
]
