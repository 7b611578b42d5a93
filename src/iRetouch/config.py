"""Application-wide constants."""

from __future__ import annotations

SIDECAR_SUFFIX = ".iretouch.json"
"""Suffix appended to an image path to locate its adjustment sidecar."""

BACKUP_DIR_NAME = ".iretouch_backups"

DEFAULT_EXPORT_FORMAT = "PNG"

EXPORT_RESAMPLE = "bilinear"
"""Pillow resampling filter used when baking rotation and scale into exports."""

# Rec. 601 luma weights shared by saturation, sepia and the styled monochrome looks.
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

SEPIA_DEPTH = 20.0
SEPIA_INTENSITY = 0.7

PACKAGE_LOGGER_NAME = "iRetouch"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL_ENV = "IRETOUCH_LOG_LEVEL"
"""Environment variable overriding the package log level (``DEBUG``, ``WARNING`` ...)."""
