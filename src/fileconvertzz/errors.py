from __future__ import annotations


class ConvertzzError(Exception):
    """Base class for errors that end a conversion request."""


class ValidationError(ConvertzzError):
    """Malformed or semantically invalid exclusion spec."""


class SelectionError(ConvertzzError):
    """The current selection does not fit the requested operation."""


class ConversionError(ConvertzzError):
    """An image or PDF library failed while running a job."""


class SettingsError(ConvertzzError):
    """A value in the settings file is out of range or unknown."""
