"""Text-level parsing shared by the sala and comisiones extractors.

Integer cells go through an :class:`IntField`, which states per field whether
a missing or non-numeric value is an error or falls back to a default.
Session descriptions on the detail page look like::

    12 Sesión Ordinaria, miércoles 5 de marzo de 2014
    -3 Sesión Especial, martes 14 de enero de 2020
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from bs4 import BeautifulSoup, Tag

from .errors import MalformedRow, MalformedSessionText, UnknownMonth
from .models import SessionRecord

# ── Pre-compiled regex patterns ──────────────────────────────────────────────

# Leading integer, parseInt-style: "15", " 15 ", "15 sesiones".
_RE_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_RE_NUMBER_GROUP = re.compile(r"\d+")
# <sesion> <tipo>, <weekday> <day> de <month> de <year>
_RE_SESSION = re.compile(
    r"^\s*(?P<sesion>-?\d+) (?P<tipo>.+), .* (?P<day>\d+) de (?P<month>\w+) de (?P<year>\d+)",
    re.DOTALL,
)

# Month names as printed by senado.cl, matched case-insensitively.
MONTHS: dict[str, int] = {
    "enero": 1,
    "febrero": 2,
    "marzo": 3,
    "abril": 4,
    "mayo": 5,
    "junio": 6,
    "julio": 7,
    "agosto": 8,
    "septiembre": 9,
    "octubre": 10,
    "noviembre": 11,
    "diciembre": 12,
}

_REQUIRED = object()


@dataclass(frozen=True)
class IntField:
    """Integer column with an explicit missing-value policy.

    Without a ``default`` the field is required and bad input raises
    :class:`MalformedRow`; with one, bad input yields the default.
    """

    name: str
    default: object = _REQUIRED

    @property
    def required(self) -> bool:
        return self.default is _REQUIRED

    def parse(self, text: str | None) -> int:
        match = _RE_LEADING_INT.match(text) if text is not None else None
        if match:
            return int(match.group(1))
        if self.required:
            raise MalformedRow(self.name, text)
        return self.default  # type: ignore[return-value]


def month_to_number(name: str) -> int:
    """Convert a Spanish month name (any case) to 1-12."""
    if not isinstance(name, str):
        raise UnknownMonth(name)
    number = MONTHS.get(name.strip().lower())
    if number is None:
        raise UnknownMonth(name)
    return number


def last_number(text: str) -> int | None:
    """Return the last run of digits in *text*, or None when there is none."""
    groups = _RE_NUMBER_GROUP.findall(text)
    return int(groups[-1]) if groups else None


def parse_session_text(text: str, asiste: bool) -> SessionRecord:
    """Parse one session description from the sala detail page."""
    match = _RE_SESSION.match(text)
    if not match:
        raise MalformedSessionText(text)
    month = month_to_number(match.group("month"))
    try:
        fecha = date(int(match.group("year")), month, int(match.group("day")))
    except ValueError as exc:
        raise MalformedSessionText(text, reason=str(exc)) from exc
    return SessionRecord(
        sesion=int(match.group("sesion")),
        tipo=match.group("tipo"),
        fecha=fecha,
        asiste=asiste,
    )


# ── Table helpers ────────────────────────────────────────────────────────────


def top_level_tables(soup: BeautifulSoup) -> list[Tag]:
    """Tables in document order, ignoring tables nested inside other tables."""
    return [t for t in soup.find_all("table") if t.find_parent("table") is None]


def table_rows(table: Tag) -> list[Tag]:
    """Rows owned by *table* itself (directly or via thead/tbody/tfoot), not nested tables."""
    rows: list[Tag] = []
    for child in table.find_all(["tr", "thead", "tbody", "tfoot"], recursive=False):
        if child.name == "tr":
            rows.append(child)
        else:
            rows.extend(child.find_all("tr", recursive=False))
    return rows
