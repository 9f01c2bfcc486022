from __future__ import annotations

from datetime import datetime

import pytest
from bs4 import BeautifulSoup

from senado_asistencia.models import Period, Senador
from senado_asistencia.periods import build_periods

# ── Fake document provider ───────────────────────────────────────────────────


class FakeFetcher:
    """Serves in-memory HTML keyed by URL substring, recording every request."""

    def __init__(self, pages: dict[str, str]) -> None:
        self.pages = pages
        self.requested: list[str] = []

    async def fetch_document(self, url: str) -> BeautifulSoup:
        self.requested.append(url)
        for key, html in self.pages.items():
            if key in url:
                return BeautifulSoup(html, "html.parser")
        raise AssertionError(f"Unexpected URL {url}")


# ── Period fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def periods() -> tuple[Period, ...]:
    return build_periods(
        [
            (361, "2013-03-11", "2014-03-10"),
            (362, "2014-03-11", "2015-03-10"),
            (363, "2015-03-11", "2016-03-10"),
        ]
    )


@pytest.fixture
def period_362() -> Period:
    return Period(
        legislatura=362,
        desde=datetime(2014, 3, 11),
        hasta=datetime(2015, 3, 10, 23, 59, 59),
    )


# ── Senator fixtures ─────────────────────────────────────────────────────────


@pytest.fixture
def senador() -> Senador:
    return Senador(id=905, nombre="Allamand Z., Andrés")


@pytest.fixture
def make_fetcher() -> type[FakeFetcher]:
    return FakeFetcher
