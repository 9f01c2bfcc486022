"""Centralized configuration for senado-asistencia.

All settings live here so they can be overridden by environment variables or a
``.env`` file without touching source code.

URL templates use literal ``:periodo:`` and ``:senador-id:`` placeholders,
substituted by :func:`senado_asistencia.fetcher.build_url`.

Usage::

    from senado_asistencia.config import URL_ASISTENCIA_SALA, REQUEST_DELAY
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from current working directory
load_dotenv()

LOGGER = logging.getLogger(__name__)


def _env(key: str, fallback: str = "") -> str:
    """Read an env var, falling back to *fallback*."""
    return os.getenv(key, fallback)


# ── Base URLs ────────────────────────────────────────────────────────────────
BASE_URL: str = _env("SENADO_BASE_URL", "http://www.senado.cl/").rstrip("/") + "/"

URL_ASISTENCIA_SALA: str = _env(
    "SENADO_URL_ASISTENCIA_SALA",
    f"{BASE_URL}appsenado/index.php?mo=sesionessala&ac=asistenciaSenadores"
    "&camara=S&legiini=361&legiid=:periodo:",
)
URL_ASISTENCIA_SALA_DETALLE: str = _env(
    "SENADO_URL_ASISTENCIA_SALA_DETALLE",
    f"{BASE_URL}appsenado/index.php?mo=sesionessala&ac=detalleAsistencia"
    "&camara=S&legiini=361&legiid=:periodo:&parlid=:senador-id:",
)
URL_ASISTENCIA_COMISIONES: str = _env(
    "SENADO_URL_ASISTENCIA_COMISIONES",
    f"{BASE_URL}appsenado/index.php?mo=comisiones&ac=asistencia_por_senador"
    "&camara=S&periodo=:periodo:&parlid=:senador-id:",
)

# ── HTTP tuning ──────────────────────────────────────────────────────────────
TIMEOUT_SECONDS: int = int(_env("SENADO_TIMEOUT", "20"))
REQUEST_DELAY: float = float(_env("SENADO_REQUEST_DELAY", "0.5"))
MAX_RETRIES: int = int(_env("SENADO_MAX_RETRIES", "3"))
USER_AGENT: str = _env("SENADO_USER_AGENT", "senado-asistencia/0.1 (+https://www.senado.cl/)")

# ── Period table ─────────────────────────────────────────────────────────────
# Optional JSON file replacing the built-in legislatura table.
_periods_file = _env("SENADO_PERIODS_FILE").strip()
PERIODS_FILE: Path | None = Path(_periods_file) if _periods_file else None

# Integers below this are legislatura ids, not calendar years (committee lookups).
LEGISLATURA_THRESHOLD: int = int(_env("SENADO_LEGISLATURA_THRESHOLD", "2002"))

if PERIODS_FILE is not None and not PERIODS_FILE.exists():
    LOGGER.warning(
        "SENADO_PERIODS_FILE=%s does not exist; the built-in period table will be used.",
        PERIODS_FILE,
    )
