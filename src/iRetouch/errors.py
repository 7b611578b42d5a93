"""Custom exceptions for iRetouch."""

from __future__ import annotations


class IRetouchError(Exception):
    """Base error for the package."""


class InvalidParameterError(IRetouchError, ValueError):
    """An adjustment, preset name, or transform value was rejected.

    Raised before any pixel is touched so callers never observe a partially
    applied edit.
    """


class DegenerateCropError(IRetouchError):
    """The crop rectangle resolved to an empty region of the source image."""


class ImageDecodeError(IRetouchError):
    """The image decoder could not turn the supplied bytes into pixels."""


class SidecarInvalidError(IRetouchError):
    """The adjustment sidecar file is missing or malformed."""
