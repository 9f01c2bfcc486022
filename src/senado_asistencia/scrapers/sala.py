"""Plenary ("sala") attendance scraper.

Two pages per senator and legislatura:

* the summary page lists every senator with attended sessions and justified
  absences; its heading carries the number of sessions held;
* the detail page lists each session with a tick image when the senator
  attended.

The summary is always completed with the detail, in that order.
"""

from __future__ import annotations

import logging
import time

from bs4 import BeautifulSoup, Tag

from ..config import URL_ASISTENCIA_SALA, URL_ASISTENCIA_SALA_DETALLE
from ..errors import InvalidArgument, MalformedHeading, MalformedSessionText
from ..fetcher import DocumentFetcher, build_url
from ..models import AttendanceSummary, Inasistencias, Period, Senador, SessionRecord
from ..parsing import IntField, last_number, parse_session_text, table_rows, top_level_tables

LOGGER = logging.getLogger(__name__)

ASISTENCIA = IntField("asistencia")
JUSTIFICADAS = IntField("justificadas", default=0)

_HEADING_SELECTOR = "#main h2"
_NAME_CELL_SELECTOR = '#main table tr[align="left"]:not(:first-child) td:first-child'


# ── Summary page parsing ─────────────────────────────────────────────────────


def _total_sessions(soup: BeautifulSoup) -> int:
    """Number of sessions held, printed as the last number of the heading."""
    heading = "".join(h.get_text() for h in soup.select(_HEADING_SELECTOR))
    total = last_number(heading)
    if total is None:
        raise MalformedHeading(f"No session total in heading {heading.strip()!r}")
    return total


def _find_senator_row(soup: BeautifulSoup, nombre: str) -> Tag | None:
    for cell in soup.select(_NAME_CELL_SELECTOR):
        if cell.get_text() == nombre:
            return cell.parent
    return None


def _link_text(row: Tag, selector: str) -> str:
    return "".join(a.get_text() for a in row.select(selector)).strip()


def compute_inasistencias(total: int, asistencia: int, justificadas: int) -> Inasistencias:
    ausencias = total - asistencia
    return Inasistencias(
        total=ausencias,
        justificadas=justificadas,
        injustificadas=max(0, ausencias - justificadas),
    )


def parse_summary_page(
    soup: BeautifulSoup,
    senador: Senador,
    periodo: Period,
    include_senador: bool = False,
) -> AttendanceSummary:
    total = _total_sessions(soup)
    row = _find_senator_row(soup, senador.nombre)

    if row is None:
        LOGGER.warning(
            "Senator %r not listed for legislatura %d; counts left empty.",
            senador.nombre,
            periodo.legislatura,
        )
        asistencia = None
        inasistencias = Inasistencias(total=None, justificadas=None, injustificadas=None)
    else:
        asistencia = ASISTENCIA.parse(_link_text(row, "td a:not([id])"))
        justificadas = JUSTIFICADAS.parse(_link_text(row, "td a[id]"))
        inasistencias = compute_inasistencias(total, asistencia, justificadas)

    return AttendanceSummary(
        periodo=periodo,
        asistencia=asistencia,
        inasistencias=inasistencias,
        senador=senador if include_senador else None,
    )


# ── Detail page parsing ──────────────────────────────────────────────────────


def _parse_session_row(row: Tag) -> SessionRecord:
    cells = row.find_all("td", recursive=False)
    if not cells:
        raise MalformedSessionText(row.get_text(" ", strip=True), reason="row has no cells")
    text = "".join(a.get_text() for a in cells[-1].find_all("a"))
    asiste = cells[0].find("img") is not None
    return parse_session_text(text, asiste)


def parse_detail_page(soup: BeautifulSoup) -> list[SessionRecord]:
    """Parse every session row of the last table, skipping its header row."""
    tables = top_level_tables(soup)
    if not tables:
        return []
    rows = table_rows(tables[-1])[1:]
    return [_parse_session_row(row) for row in rows]


# ── Public API ───────────────────────────────────────────────────────────────


def _check_args(periodo: object, include_senador: object) -> None:
    if not isinstance(periodo, Period):
        raise InvalidArgument(f"Period must be a Period, got {type(periodo).__name__}")
    if not isinstance(include_senador, bool):
        raise InvalidArgument("include_senador must be a boolean")


async def fetch_sala_detail(
    fetcher: DocumentFetcher,
    summary: AttendanceSummary,
    senador: Senador,
    periodo: Period,
) -> AttendanceSummary:
    """Attach per-session detail to *summary* and return it."""
    if not isinstance(summary, AttendanceSummary):
        raise InvalidArgument(
            f"Summary must be an AttendanceSummary, got {type(summary).__name__}"
        )
    senador = Senador.coerce(senador)
    _check_args(periodo, False)

    url = build_url(URL_ASISTENCIA_SALA_DETALLE, periodo.legislatura, senador.id)
    soup = await fetcher.fetch_document(url)
    summary.detalle = parse_detail_page(soup)
    LOGGER.info(
        "  %s: %d sessions in detail for legislatura %d",
        senador.nombre,
        len(summary.detalle),
        periodo.legislatura,
    )
    return summary


async def fetch_sala_attendance(
    fetcher: DocumentFetcher,
    senador: Senador,
    periodo: Period,
    include_senador: bool = False,
) -> AttendanceSummary:
    """Fetch plenary attendance for one senator and legislatura, detail included.

    Args:
        fetcher: Document provider (see :class:`~senado_asistencia.fetcher.SenadoFetcher`).
        senador: Senator with ``id`` and ``nombre``; the name must match the
            summary table exactly.
        periodo: Resolved period (see :func:`~senado_asistencia.periods.resolve_sala_period`).
        include_senador: Embed the senator in the result.

    Returns:
        AttendanceSummary with counts, derived absences and session detail.
    """
    senador = Senador.coerce(senador)
    _check_args(periodo, include_senador)
    t0 = time.perf_counter()

    url = build_url(URL_ASISTENCIA_SALA, periodo.legislatura)
    soup = await fetcher.fetch_document(url)
    summary = parse_summary_page(soup, senador, periodo, include_senador)
    summary = await fetch_sala_detail(fetcher, summary, senador, periodo)

    LOGGER.info(
        "Sala attendance for %s (legislatura %d) in %.0fms",
        senador.nombre,
        periodo.legislatura,
        (time.perf_counter() - t0) * 1000,
    )
    return summary
