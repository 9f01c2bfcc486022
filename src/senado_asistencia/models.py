from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from .errors import InvalidArgument


@dataclass(frozen=True)
class Period:
    legislatura: int  # e.g. 362 -- the site's internal period id
    desde: datetime
    hasta: datetime

    def __post_init__(self) -> None:
        if self.desde > self.hasta:
            raise ValueError(
                f"Period {self.legislatura}: desde {self.desde} is after hasta {self.hasta}"
            )

    def contains_year(self, year: int) -> bool:
        return self.desde.year <= year <= self.hasta.year

    def contains(self, moment: datetime) -> bool:
        return self.desde <= moment <= self.hasta

    def to_dict(self) -> dict[str, Any]:
        return {
            "legislatura": self.legislatura,
            "desde": self.desde.isoformat(),
            "hasta": self.hasta.isoformat(),
        }


@dataclass(frozen=True)
class Senador:
    id: str | int  # parlid on senado.cl
    nombre: str  # display name exactly as printed in the attendance tables

    @classmethod
    def coerce(cls, value: object) -> Senador:
        """Accept a Senador, a mapping or any object exposing ``id`` and ``nombre``."""
        if isinstance(value, Senador):
            return value
        if isinstance(value, Mapping):
            senador_id, nombre = value.get("id"), value.get("nombre")
        else:
            senador_id = getattr(value, "id", None)
            nombre = getattr(value, "nombre", None)
        if senador_id is None or not isinstance(nombre, str):
            raise InvalidArgument(f"Senator must expose 'id' and 'nombre', got {value!r}")
        return cls(id=senador_id, nombre=nombre)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "nombre": self.nombre}


@dataclass
class Inasistencias:
    total: int | None
    justificadas: int | None
    injustificadas: int | None  # never negative


@dataclass(frozen=True)
class SessionRecord:
    sesion: int  # negative numbers are special sessions
    tipo: str  # e.g. "Sesión Ordinaria"
    fecha: date
    asiste: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "sesion": self.sesion,
            "tipo": self.tipo,
            "fecha": self.fecha.isoformat(),
            "asiste": self.asiste,
        }


@dataclass
class AttendanceSummary:
    periodo: Period
    asistencia: int | None
    inasistencias: Inasistencias
    # Filled in place by the detail step, in page order.
    detalle: list[SessionRecord] = field(default_factory=list)
    senador: Senador | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.senador is not None:
            data["senador"] = self.senador.to_dict()
        data["periodo"] = self.periodo.to_dict()
        data["asistencia"] = self.asistencia
        data["inasistencias"] = {
            "total": self.inasistencias.total,
            "justificadas": self.inasistencias.justificadas,
            "injustificadas": self.inasistencias.injustificadas,
        }
        data["detalle"] = [s.to_dict() for s in self.detalle]
        return data


@dataclass(frozen=True)
class OfficialCommittee:
    nombre: str
    total: int  # sessions held
    asiste: int  # sessions attended


@dataclass(frozen=True)
class OtherCommittee:
    nombre: str
    reemplazante: int  # sessions attended as a substitute
    asistente: int  # sessions attended as a guest


@dataclass
class CommitteeAttendance:
    periodo: int  # calendar year
    oficiales: list[OfficialCommittee] = field(default_factory=list)
    otras: list[OtherCommittee] = field(default_factory=list)
    senador: Senador | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.senador is not None:
            data["senador"] = self.senador.to_dict()
        data["periodo"] = self.periodo
        data["oficiales"] = [
            {"nombre": c.nombre, "total": c.total, "asiste": c.asiste} for c in self.oficiales
        ]
        data["otras"] = [
            {"nombre": c.nombre, "reemplazante": c.reemplazante, "asistente": c.asistente}
            for c in self.otras
        ]
        return data
