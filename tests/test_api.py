"""End-to-end tests for the resolve-then-scrape entry points and the CLI."""

from __future__ import annotations

import asyncio
import json
from datetime import date

import pytest

from senado_asistencia import cli
from senado_asistencia.api import get_asistencia_comisiones, get_asistencia_sala
from senado_asistencia.errors import FuturePeriod, PeriodNotFound
from senado_asistencia.models import Senador

from test_comisiones import COMMITTEE_PAGE
from test_sala import DETAIL_PAGE, SUMMARY_PAGE

PAGES = {
    "asistenciaSenadores": SUMMARY_PAGE,
    "detalleAsistencia": DETAIL_PAGE,
    "asistencia_por_senador": COMMITTEE_PAGE,
}


class TestGetAsistenciaSala:
    def test_by_legislatura(self, make_fetcher, senador: Senador) -> None:
        fetcher = make_fetcher(PAGES)
        result = asyncio.run(get_asistencia_sala(senador, 362, fetcher=fetcher))
        assert result.periodo.legislatura == 362
        assert result.asistencia == 15
        assert len(result.detalle) == 3

    def test_by_date(self, make_fetcher, senador: Senador) -> None:
        fetcher = make_fetcher(PAGES)
        result = asyncio.run(get_asistencia_sala(senador, date(2015, 6, 1), fetcher=fetcher))
        assert result.periodo.legislatura == 363
        assert "legiid=363" in fetcher.requested[0]

    def test_unknown_period_does_not_fetch(self, make_fetcher, senador: Senador) -> None:
        fetcher = make_fetcher(PAGES)
        with pytest.raises(PeriodNotFound):
            asyncio.run(get_asistencia_sala(senador, date(1990, 1, 1), fetcher=fetcher))
        assert fetcher.requested == []


class TestGetAsistenciaComisiones:
    def test_by_year(self, make_fetcher, senador: Senador) -> None:
        fetcher = make_fetcher(PAGES)
        result = asyncio.run(get_asistencia_comisiones(senador, 2015, True, fetcher=fetcher))
        assert result.periodo == 2015
        assert result.senador == senador

    def test_future_year(self, make_fetcher, senador: Senador) -> None:
        fetcher = make_fetcher(PAGES)
        with pytest.raises(FuturePeriod):
            asyncio.run(
                get_asistencia_comisiones(senador, date.today().year + 1, fetcher=fetcher)
            )
        assert fetcher.requested == []


# ── CLI ───────────────────────────────────────────────────────────────────────


@pytest.fixture
def offline_cli(monkeypatch: pytest.MonkeyPatch, make_fetcher):
    """Route the CLI's queries through the in-memory pages."""
    fetcher = make_fetcher(PAGES)

    async def sala(senador, periodo, include_senador=False):
        return await get_asistencia_sala(senador, periodo, include_senador, fetcher=fetcher)

    async def comisiones(senador, periodo, include_senador=False):
        return await get_asistencia_comisiones(senador, periodo, include_senador, fetcher=fetcher)

    monkeypatch.setattr(cli, "get_asistencia_sala", sala)
    monkeypatch.setattr(cli, "get_asistencia_comisiones", comisiones)
    return fetcher


class TestCli:
    def test_sala_json(self, offline_cli, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli.main(
            [
                "sala",
                "--senador-id",
                "905",
                "--nombre",
                "Allamand Z., Andrés",
                "--periodo",
                "362",
                "--incluir-senador",
                "--json",
            ]
        )
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["senador"] == {"id": "905", "nombre": "Allamand Z., Andrés"}
        assert data["asistencia"] == 15

    def test_comisiones_by_date(self, offline_cli, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli.main(
            [
                "comisiones",
                "--senador-id",
                "905",
                "--nombre",
                "Allamand Z., Andrés",
                "--fecha",
                "2015-06-01",
                "--json",
            ]
        )
        assert code == 0
        assert json.loads(capsys.readouterr().out)["periodo"] == 2015

    def test_table_output(self, offline_cli, capsys: pytest.CaptureFixture[str]) -> None:
        code = cli.main(
            ["sala", "--senador-id", "905", "--nombre", "Allamand Z., Andrés", "--periodo", "362"]
        )
        assert code == 0
        assert "Sesión Ordinaria" in capsys.readouterr().out

    def test_error_exit_code(self, offline_cli) -> None:
        code = cli.main(
            ["sala", "--senador-id", "905", "--nombre", "X", "--fecha", "1990-01-01"]
        )
        assert code == 1

    def test_reference_required(self) -> None:
        with pytest.raises(SystemExit):
            cli.main(["sala", "--senador-id", "905", "--nombre", "X"])
