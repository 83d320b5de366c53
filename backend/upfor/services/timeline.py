"""Timeline materializer: sparse availability rows → dense day calendars.

Every requested user gets exactly ``window_length`` entries, ascending by
date, starting at ``window_start``. Missing days are filled with
``is_up=False`` so callers never special-case gaps. The fill is a single pass
over the returned rows into a fixed-length array indexed by day offset.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

import pytz
from sqlalchemy.orm import Session

from upfor.config import settings
from upfor.models.availability import AvailabilityDay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayEntry:
    date: datetime  # UTC midnight
    is_up: bool
    up_text: Optional[str]


def day_bucket_utc(moment: datetime) -> datetime:
    """Truncate an instant to midnight of its UTC calendar day."""
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    moment = moment.astimezone(pytz.utc)
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def window_start(now: Optional[datetime] = None) -> datetime:
    return day_bucket_utc(now or datetime.now(pytz.utc))


def fill_window(
    rows: Iterable,
    user_ids: Iterable[str],
    start: datetime,
    window_length: int,
) -> dict[str, list[DayEntry]]:
    """Pure fill step: rows need ``user_id``, ``date``, ``is_up`` and ``up_text``.

    Rows for users not requested or dates outside the window are ignored.
    """
    start = day_bucket_utc(start)
    first_day = start.date()
    slots: dict[str, list] = {uid: [None] * window_length for uid in user_ids}

    for row in rows:
        days = slots.get(row.user_id)
        if days is None:
            continue
        offset = (_as_date(row.date) - first_day).days
        if 0 <= offset < window_length:
            days[offset] = row

    result: dict[str, list[DayEntry]] = {}
    for uid, days in slots.items():
        entries = []
        for offset, row in enumerate(days):
            day = start + timedelta(days=offset)
            if row is None or not row.is_up:
                entries.append(DayEntry(date=day, is_up=False, up_text=None))
            else:
                entries.append(DayEntry(date=day, is_up=True, up_text=row.up_text))
        result[uid] = entries
    return result


def materialize(
    db: Session,
    user_ids: Iterable[str],
    start: Optional[datetime] = None,
    window_length: Optional[int] = None,
) -> dict[str, list[DayEntry]]:
    """Bulk-read availability for ``user_ids`` and return dense calendars."""
    user_ids = list(dict.fromkeys(user_ids))
    start = day_bucket_utc(start) if start else window_start()
    window_length = window_length or settings.AVAILABILITY_WINDOW_DAYS
    if not user_ids:
        return {}

    first_day = start.date()
    end_day = first_day + timedelta(days=window_length)
    rows = (
        db.query(AvailabilityDay)
        .filter(
            AvailabilityDay.user_id.in_(user_ids),
            AvailabilityDay.date >= first_day,
            AvailabilityDay.date < end_day,
        )
        .all()
    )
    logger.debug("Materializing %d users from %d rows starting %s", len(user_ids), len(rows), first_day)
    return fill_window(rows, user_ids, start, window_length)


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return day_bucket_utc(value).date()
    return value
