"""Command-line shell around the attendance queries.

Usage::

    senado-asistencia sala --senador-id 905 --nombre "Allamand Z., Andrés" --periodo 362
    senado-asistencia comisiones --senador-id 905 --nombre "Allamand Z., Andrés" --fecha 2015-06-01
    senado-asistencia sala ... --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from datetime import date

import requests
from rich.console import Console
from rich.table import Table

from .api import get_asistencia_comisiones, get_asistencia_sala
from .errors import AsistenciaError
from .models import AttendanceSummary, CommitteeAttendance, Senador

LOGGER = logging.getLogger("senado_asistencia")

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="senado-asistencia",
        description="Senate attendance (sala and comisiones) for one senator.",
    )
    parser.add_argument("contexto", choices=["sala", "comisiones"])
    parser.add_argument("--senador-id", required=True, help="Senator id (parlid).")
    parser.add_argument(
        "--nombre",
        required=True,
        help="Senator name exactly as printed in the attendance table.",
    )
    ref = parser.add_mutually_exclusive_group(required=True)
    ref.add_argument(
        "--periodo",
        type=int,
        help="Legislatura id or calendar year.",
    )
    ref.add_argument(
        "--fecha",
        type=date.fromisoformat,
        help="Any date inside the period (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--incluir-senador",
        action="store_true",
        help="Embed the senator in the result.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of tables.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each request.")
    return parser


def _print_sala(result: AttendanceSummary) -> None:
    inas = result.inasistencias
    summary = Table(title=f"Sala - legislatura {result.periodo.legislatura}", show_lines=True)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Asistencia", str(result.asistencia))
    summary.add_row("Inasistencias", str(inas.total))
    summary.add_row("  justificadas", str(inas.justificadas))
    summary.add_row("  injustificadas", str(inas.injustificadas))
    console.print(summary)

    detail = Table(title="Detalle")
    detail.add_column("Sesión", justify="right")
    detail.add_column("Tipo")
    detail.add_column("Fecha")
    detail.add_column("Asiste")
    for s in result.detalle:
        detail.add_row(str(s.sesion), s.tipo, s.fecha.isoformat(), "sí" if s.asiste else "no")
    console.print(detail)


def _print_comisiones(result: CommitteeAttendance) -> None:
    oficiales = Table(title=f"Comisiones oficiales - {result.periodo}")
    oficiales.add_column("Comisión")
    oficiales.add_column("Total", justify="right")
    oficiales.add_column("Asiste", justify="right")
    for c in result.oficiales:
        oficiales.add_row(c.nombre, str(c.total), str(c.asiste))
    console.print(oficiales)

    otras = Table(title=f"Otras comisiones - {result.periodo}")
    otras.add_column("Comisión")
    otras.add_column("Reemplazante", justify="right")
    otras.add_column("Asistente", justify="right")
    for c in result.otras:
        otras.add_row(c.nombre, str(c.reemplazante), str(c.asistente))
    console.print(otras)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.captureWarnings(True)

    senador = Senador(id=args.senador_id, nombre=args.nombre)
    reference = args.periodo if args.periodo is not None else args.fecha
    query = get_asistencia_sala if args.contexto == "sala" else get_asistencia_comisiones

    try:
        result = asyncio.run(query(senador, reference, args.incluir_senador))
    except (AsistenciaError, requests.RequestException) as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif isinstance(result, AttendanceSummary):
        _print_sala(result)
    else:
        _print_comisiones(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
