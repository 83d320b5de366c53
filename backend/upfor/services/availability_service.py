"""Availability service: a user's own 28-day willingness calendar.

Reads go through the timeline materializer. Writes are applied as one
all-or-nothing batch: the whole payload is validated before any row is
touched, and every per-day upsert shares a single commit.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from sqlalchemy.orm import Session

from upfor.config import settings
from upfor.errors import ValidationError
from upfor.models.availability import AvailabilityDay
from upfor.services.timeline import DayEntry, day_bucket_utc, materialize, window_start

logger = logging.getLogger(__name__)

MAX_UP_TEXT = 64


def get_availability(db: Session, user_id: str, now: Optional[datetime] = None) -> tuple[datetime, list[DayEntry]]:
    """Return ``(window_start, days)`` for the caller's own calendar."""
    start = window_start(now)
    days = materialize(db, [user_id], start, settings.AVAILABILITY_WINDOW_DAYS)[user_id]
    return start, days


def _normalize_batch(days: Iterable[Any]) -> dict:
    """Validate a batch and key it by UTC day. Items need date/is_up/up_text."""
    normalized = {}
    for item in days:
        day = day_bucket_utc(item.date).date()
        if day in normalized:
            raise ValidationError(f"Duplicate entry for {day.isoformat()}")

        up_text = None
        if item.is_up and item.up_text is not None:
            up_text = item.up_text.strip() or None
            if up_text and len(up_text) > MAX_UP_TEXT:
                raise ValidationError(f"upText must be at most {MAX_UP_TEXT} characters")
        normalized[day] = (bool(item.is_up), up_text)

    if not 1 <= len(normalized) <= settings.AVAILABILITY_WINDOW_DAYS:
        raise ValidationError(f"Between 1 and {settings.AVAILABILITY_WINDOW_DAYS} days are required")
    return normalized


def save_availability(db: Session, user_id: str, days: Iterable[Any]) -> int:
    """Upsert every day of the batch atomically. Returns the number of rows written."""
    batch = _normalize_batch(days)

    existing = {
        row.date: row
        for row in db.query(AvailabilityDay)
        .filter(AvailabilityDay.user_id == user_id, AvailabilityDay.date.in_(list(batch)))
        .all()
    }

    try:
        for day, (is_up, up_text) in batch.items():
            row = existing.get(day)
            if row is None:
                db.add(AvailabilityDay(user_id=user_id, date=day, is_up=is_up, up_text=up_text, version=1))
            else:
                row.is_up = is_up
                row.up_text = up_text
                row.version += 1
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Availability batch for user %s rolled back", user_id)
        raise

    logger.info("Saved %d availability days for user %s", len(batch), user_id)
    return len(batch)
