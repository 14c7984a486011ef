"""Exception types raised by the Bendscape collaborators.

The generation engine itself never raises for numeric input; these errors
belong to parameter parsing, export and preset storage.
"""
from __future__ import annotations


class BendscapeError(Exception):
    """Base class for all Bendscape errors."""


class ParameterError(BendscapeError, ValueError):
    """A parameter record could not be built from the given data."""


class ExportError(BendscapeError):
    """Serialising or parsing an export document failed."""


class PresetError(BendscapeError):
    """The preset store could not be written."""


__all__ = ["BendscapeError", "ParameterError", "ExportError", "PresetError"]
