"""Legislative period table and reference resolution.

A *reference* is what a caller uses to name a period: a legislatura id
(``362``), a calendar year (``2015``) or a date.  The sala pages are keyed by
legislatura, the committee pages by calendar year, so each context has its
own resolver.

The period table is always ordered by ``desde``.  Year lookups return the
first matching period in that order, so when two legislaturas share a year
(every March handover does) the older one wins and an
:class:`~senado_asistencia.errors.AmbiguousPeriodWarning` is issued.
"""

from __future__ import annotations

import json
import logging
import warnings
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from pathlib import Path

from .config import LEGISLATURA_THRESHOLD, PERIODS_FILE
from .errors import AmbiguousPeriodWarning, FuturePeriod, InvalidArgument, PeriodNotFound
from .models import Period

LOGGER = logging.getLogger(__name__)

# ── Built-in legislatura table ───────────────────────────────────────────────
# Each ordinary legislatura runs from March 11 to March 10 of the next year.
# (id, first day, last day)
_DEFAULT_PERIOD_ROWS: tuple[tuple[int, str, str], ...] = (
    (358, "2010-03-11", "2011-03-10"),
    (359, "2011-03-11", "2012-03-10"),
    (360, "2012-03-11", "2013-03-10"),
    (361, "2013-03-11", "2014-03-10"),
    (362, "2014-03-11", "2015-03-10"),
    (363, "2015-03-11", "2016-03-10"),
    (364, "2016-03-11", "2017-03-10"),
    (365, "2017-03-11", "2018-03-10"),
    (366, "2018-03-11", "2019-03-10"),
    (367, "2019-03-11", "2020-03-10"),
    (368, "2020-03-11", "2021-03-10"),
    (369, "2021-03-11", "2022-03-10"),
    (370, "2022-03-11", "2023-03-10"),
    (371, "2023-03-11", "2024-03-10"),
    (372, "2024-03-11", "2025-03-10"),
    (373, "2025-03-11", "2026-03-10"),
    (374, "2026-03-11", "2027-03-10"),
)


def _parse_bound(value: str, *, end_of_day: bool) -> datetime:
    """Parse an ISO date or datetime; bare dates cover the whole day."""
    if "T" in value or " " in value.strip():
        return datetime.fromisoformat(value.strip())
    day = date.fromisoformat(value.strip())
    return datetime.combine(day, time.max if end_of_day else time.min)


def build_periods(rows: Iterable[tuple[int, str, str]]) -> tuple[Period, ...]:
    """Build an ordered period table from ``(legislatura, desde, hasta)`` rows."""
    periods = [
        Period(
            legislatura=int(legislatura),
            desde=_parse_bound(desde, end_of_day=False),
            hasta=_parse_bound(hasta, end_of_day=True),
        )
        for legislatura, desde, hasta in rows
    ]
    periods.sort(key=lambda p: (p.desde, p.legislatura))
    return tuple(periods)


def load_periods_file(path: Path) -> tuple[Period, ...]:
    """Load a JSON list of ``{"legislatura", "desde", "hasta"}`` objects."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    periods = build_periods((d["legislatura"], d["desde"], d["hasta"]) for d in data)
    LOGGER.info("Loaded %d periods from %s", len(periods), path)
    return periods


def load_periods(path: Path | None = None) -> tuple[Period, ...]:
    """Return the period table from *path*, ``SENADO_PERIODS_FILE`` or the built-in rows."""
    path = path or PERIODS_FILE
    if path is not None and path.exists():
        return load_periods_file(path)
    return DEFAULT_PERIODS


DEFAULT_PERIODS: tuple[Period, ...] = build_periods(_DEFAULT_PERIOD_ROWS)
PERIODS: tuple[Period, ...] = load_periods()


# ── Resolution ───────────────────────────────────────────────────────────────


def _check_reference(reference: object) -> None:
    # bool is an int subclass but never a meaningful period.
    if isinstance(reference, bool) or not isinstance(reference, (int, date)):
        raise InvalidArgument(
            f"Period reference must be an integer or a date, got {type(reference).__name__}"
        )


def _as_datetime(reference: date) -> datetime:
    if isinstance(reference, datetime):
        # Table bounds are naive wall-clock times; keep the caller's wall clock.
        return reference.replace(tzinfo=None)
    return datetime.combine(reference, time.min)


def resolve_sala_period(
    reference: int | date,
    *,
    periods: Sequence[Period] | None = None,
) -> Period:
    """Map a legislatura id, a year or a date to one period for sala queries.

    Integers are first matched against legislatura ids; only when no id
    matches are they treated as calendar years.  Dates must fall inside
    ``[desde, hasta]``.
    """
    _check_reference(reference)
    table = PERIODS if periods is None else periods

    if isinstance(reference, int):
        for period in table:
            if period.legislatura == reference:
                return period

        candidates = [p for p in table if p.contains_year(reference)]
        if not candidates:
            raise PeriodNotFound(f"No period found for id or year {reference}")
        if len(candidates) > 1:
            warnings.warn(
                AmbiguousPeriodWarning(
                    f"Year {reference} spans legislaturas "
                    f"{', '.join(str(p.legislatura) for p in candidates)}; "
                    f"using {candidates[0].legislatura}. "
                    "Query by date or legislatura id to reach the others."
                ),
                stacklevel=2,
            )
        return candidates[0]

    moment = _as_datetime(reference)
    for period in table:
        if period.contains(moment):
            return period
    raise PeriodNotFound(f"No period contains {reference.isoformat()}")


def resolve_comisiones_period(
    reference: int | date,
    *,
    periods: Sequence[Period] | None = None,
    today: date | None = None,
) -> int:
    """Map a legislatura id, a year or a date to the calendar year used by committee pages."""
    _check_reference(reference)
    table = PERIODS if periods is None else periods
    current_year = (today or date.today()).year

    if isinstance(reference, int):
        if reference > current_year:
            raise FuturePeriod(f"Cannot query the future year {reference}")
        if reference >= LEGISLATURA_THRESHOLD:
            return reference

        period = next((p for p in table if p.legislatura == reference), None)
        if period is None:
            raise PeriodNotFound(f"No legislatura with id {reference}")
        warnings.warn(
            AmbiguousPeriodWarning(
                f"Committee attendance is queried by year; legislatura {reference} "
                f"({period.desde.year}-{period.hasta.year}) resolves to {period.hasta.year} only."
            ),
            stacklevel=2,
        )
        return period.hasta.year

    if reference.year > current_year:
        raise FuturePeriod(f"Cannot query the future date {reference.isoformat()}")
    return reference.year
