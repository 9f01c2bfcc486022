"""One-call entry points: resolve the caller's reference, then scrape.

Usage::

    import asyncio
    from senado_asistencia.api import get_asistencia_sala

    senador = {"id": 905, "nombre": "Allamand Z., Andrés"}
    result = asyncio.run(get_asistencia_sala(senador, 2015))
"""

from __future__ import annotations

from datetime import date

from .fetcher import DocumentFetcher, SenadoFetcher
from .models import AttendanceSummary, CommitteeAttendance, Senador
from .periods import resolve_comisiones_period, resolve_sala_period
from .scrapers.comisiones import fetch_committee_attendance
from .scrapers.sala import fetch_sala_attendance


async def get_asistencia_sala(
    senador: Senador,
    periodo: int | date,
    include_senador: bool = False,
    fetcher: DocumentFetcher | None = None,
) -> AttendanceSummary:
    """Plenary attendance for a legislatura id, year or date."""
    resolved = resolve_sala_period(periodo)
    if fetcher is not None:
        return await fetch_sala_attendance(fetcher, senador, resolved, include_senador)
    with SenadoFetcher() as own:
        return await fetch_sala_attendance(own, senador, resolved, include_senador)


async def get_asistencia_comisiones(
    senador: Senador,
    periodo: int | date,
    include_senador: bool = False,
    fetcher: DocumentFetcher | None = None,
) -> CommitteeAttendance:
    """Committee attendance for a legislatura id, year or date."""
    year = resolve_comisiones_period(periodo)
    if fetcher is not None:
        return await fetch_committee_attendance(fetcher, senador, year, include_senador)
    with SenadoFetcher() as own:
        return await fetch_committee_attendance(own, senador, year, include_senador)
