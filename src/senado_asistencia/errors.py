"""Exception and warning types raised while resolving periods and extracting attendance."""

from __future__ import annotations


class AsistenciaError(Exception):
    """Base class for every error raised by senado-asistencia."""


class InvalidArgument(AsistenciaError, TypeError):
    """A reference, senator or flag argument has the wrong type or shape."""


class PeriodNotFound(AsistenciaError, LookupError):
    """No legislative period (or year) matches the requested id, year or date."""


class FuturePeriod(AsistenciaError, ValueError):
    """The requested year or date lies after the current calendar year."""


class ExtractionError(AsistenciaError, ValueError):
    """A fetched page does not have the shape the extractors expect."""


class MalformedSessionText(ExtractionError):
    """A session row on the detail page cannot be parsed."""

    def __init__(self, text: str, reason: str = "unexpected session description") -> None:
        super().__init__(f"{reason}: {text!r}")
        self.text = text


class UnknownMonth(ExtractionError):
    """A Spanish month name is not one of the twelve known names."""

    def __init__(self, month: object) -> None:
        super().__init__(f"Cannot convert month {month!r}")
        self.month = month


class MalformedRow(ExtractionError):
    """A table row has a missing or non-numeric cell in a numeric column."""

    def __init__(self, field: str, value: str | None) -> None:
        super().__init__(f"Field {field!r} expected an integer, got {value!r}")
        self.field = field
        self.value = value


class MalformedHeading(ExtractionError):
    """The sala summary heading carries no session total."""


# ── Advisory warnings ────────────────────────────────────────────────────────


class AsistenciaWarning(UserWarning):
    """Base class for non-fatal notices issued through :mod:`warnings`."""


class AmbiguousPeriodWarning(AsistenciaWarning):
    """More than one period could answer a lookup; the first one was used."""


class SingleCommitteeTableWarning(AsistenciaWarning):
    """A committee page had one table, so official and other committees share rows."""
