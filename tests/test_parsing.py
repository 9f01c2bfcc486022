from __future__ import annotations

from datetime import date

import pytest

from senado_asistencia.errors import MalformedRow, MalformedSessionText, UnknownMonth
from senado_asistencia.parsing import (
    MONTHS,
    IntField,
    last_number,
    month_to_number,
    parse_session_text,
)


class TestIntField:
    def test_required_parses(self) -> None:
        assert IntField("total").parse(" 15 ") == 15

    def test_leading_digits_like_parseint(self) -> None:
        assert IntField("total").parse("15 sesiones") == 15

    def test_required_rejects_empty(self) -> None:
        with pytest.raises(MalformedRow) as excinfo:
            IntField("total").parse("")
        assert excinfo.value.field == "total"

    def test_required_rejects_none(self) -> None:
        with pytest.raises(MalformedRow):
            IntField("total").parse(None)

    def test_optional_defaults(self) -> None:
        field = IntField("justificadas", default=0)
        assert not field.required
        assert field.parse("") == 0
        assert field.parse("n/a") == 0
        assert field.parse("3") == 3


class TestMonthToNumber:
    def test_all_twelve_months(self) -> None:
        assert sorted(MONTHS.values()) == list(range(1, 13))

    @pytest.mark.parametrize("name", ["marzo", "Marzo", "MARZO"])
    def test_case_insensitive(self, name: str) -> None:
        assert month_to_number(name) == 3

    @pytest.mark.parametrize("name", ["March", "setiembre", "", "mar"])
    def test_unknown(self, name: str) -> None:
        with pytest.raises(UnknownMonth):
            month_to_number(name)

    def test_non_string(self) -> None:
        with pytest.raises(UnknownMonth):
            month_to_number(3)  # type: ignore[arg-type]


class TestLastNumber:
    def test_picks_last_group(self) -> None:
        assert last_number("Legislatura 362 - Total de sesiones: 87") == 87

    def test_no_digits(self) -> None:
        assert last_number("Asistencia") is None


class TestParseSessionText:
    def test_ordinary_session(self) -> None:
        record = parse_session_text("12 Sesión Ordinaria, miércoles 5 de marzo de 2014", True)
        assert record.sesion == 12
        assert record.tipo == "Sesión Ordinaria"
        assert record.fecha == date(2014, 3, 5)
        assert record.asiste is True

    def test_negative_special_session(self) -> None:
        record = parse_session_text("-3 Sesión Especial, martes 14 de enero de 2020", False)
        assert record.sesion == -3
        assert record.tipo == "Sesión Especial"
        assert record.fecha == date(2020, 1, 14)
        assert record.asiste is False

    def test_capitalized_month(self) -> None:
        record = parse_session_text("1 Sesión Ordinaria, martes 11 de Marzo de 2014", True)
        assert record.fecha == date(2014, 3, 11)

    def test_unknown_month(self) -> None:
        with pytest.raises(UnknownMonth):
            parse_session_text("12 Sesión Ordinaria, miércoles 5 de march de 2014", True)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "Sesión Ordinaria, miércoles 5 de marzo de 2014",
            "12 Sesión Ordinaria miércoles 5 de marzo de 2014",
            "12 Sesión Ordinaria, miércoles 5 marzo 2014",
        ],
    )
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedSessionText):
            parse_session_text(text, True)

    def test_trailing_annotation_ignored(self) -> None:
        record = parse_session_text(
            "12 Sesión Ordinaria, miércoles 5 de marzo de 2014 (suspendida)", False
        )
        assert record.sesion == 12
        assert record.tipo == "Sesión Ordinaria"
        assert record.fecha == date(2014, 3, 5)

    def test_impossible_date(self) -> None:
        with pytest.raises(MalformedSessionText):
            parse_session_text("12 Sesión Ordinaria, lunes 31 de febrero de 2014", True)
