"""Committee ("comisiones") attendance scraper.

The committee page for a senator and calendar year holds two tables: the
first lists the committees the senator officially belongs to, the last lists
other committees attended as a substitute or guest.  Every count is required.
"""

from __future__ import annotations

import logging
import warnings

from bs4 import BeautifulSoup, Tag

from ..config import URL_ASISTENCIA_COMISIONES
from ..errors import InvalidArgument, SingleCommitteeTableWarning
from ..fetcher import DocumentFetcher, build_url
from ..models import CommitteeAttendance, OfficialCommittee, OtherCommittee, Senador
from ..parsing import IntField, table_rows, top_level_tables

LOGGER = logging.getLogger(__name__)

TOTAL = IntField("total")
ASISTE = IntField("asiste")
REEMPLAZANTE = IntField("reemplazante")
ASISTENTE = IntField("asistente")


def _cells(row: Tag) -> list[str | None]:
    """Text of the first three cells (td or th, by position), None for cells the row lacks."""
    texts: list[str | None] = [
        cell.get_text().strip() for cell in row.find_all(["td", "th"], recursive=False)
    ]
    return (texts + [None, None, None])[:3]


def _body_rows(table: Tag) -> list[Tag]:
    return table_rows(table)[1:]


def parse_official_rows(table: Tag) -> list[OfficialCommittee]:
    committees = []
    for row in _body_rows(table):
        nombre, total, asiste = _cells(row)
        committees.append(
            OfficialCommittee(
                nombre=nombre or "",
                total=TOTAL.parse(total),
                asiste=ASISTE.parse(asiste),
            )
        )
    return committees


def parse_other_rows(table: Tag) -> list[OtherCommittee]:
    committees = []
    for row in _body_rows(table):
        nombre, reemplazante, asistente = _cells(row)
        committees.append(
            OtherCommittee(
                nombre=nombre or "",
                reemplazante=REEMPLAZANTE.parse(reemplazante),
                asistente=ASISTENTE.parse(asistente),
            )
        )
    return committees


def parse_committee_page(
    soup: BeautifulSoup,
    senador: Senador,
    year: int,
    include_senador: bool = False,
) -> CommitteeAttendance:
    tables = top_level_tables(soup)
    result = CommitteeAttendance(periodo=year, senador=senador if include_senador else None)
    if not tables:
        LOGGER.warning("No committee tables for %s in %d.", senador.nombre, year)
        return result

    if len(tables) == 1:
        warnings.warn(
            SingleCommitteeTableWarning(
                f"Committee page for {senador.nombre} ({year}) has a single table; "
                "'oficiales' and 'otras' are both read from it."
            ),
            stacklevel=2,
        )

    result.oficiales = parse_official_rows(tables[0])
    result.otras = parse_other_rows(tables[-1])
    return result


async def fetch_committee_attendance(
    fetcher: DocumentFetcher,
    senador: Senador,
    year: int,
    include_senador: bool = False,
) -> CommitteeAttendance:
    """Fetch committee attendance for one senator and calendar year.

    *year* is the value returned by
    :func:`~senado_asistencia.periods.resolve_comisiones_period`.
    """
    senador = Senador.coerce(senador)
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidArgument(f"Committee period must be a year integer, got {year!r}")
    if not isinstance(include_senador, bool):
        raise InvalidArgument("include_senador must be a boolean")

    url = build_url(URL_ASISTENCIA_COMISIONES, year, senador.id)
    soup = await fetcher.fetch_document(url)
    result = parse_committee_page(soup, senador, year, include_senador)
    LOGGER.info(
        "Committee attendance for %s (%d): %d official, %d other",
        senador.nombre,
        year,
        len(result.oficiales),
        len(result.otras),
    )
    return result
