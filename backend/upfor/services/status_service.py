"""Status aggregator: one summary status per user, replaced wholesale."""
import logging
from datetime import datetime
from typing import Optional

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from upfor.errors import ConflictError, ValidationError
from upfor.models.user_status import StatusMode, UserStatus

logger = logging.getLogger(__name__)

MAX_TEXT = 64
UNCONDITIONAL_ATTEMPTS = 3


def normalize_summary(mode: StatusMode, text: Optional[str]) -> Optional[str]:
    """Return the text to store for ``mode``.

    SPECIFIC needs 1-64 characters after trimming. Any other mode stores no
    text, whatever the caller sent.
    """
    if mode != StatusMode.specific:
        return None
    trimmed = (text or "").strip()
    if not trimmed:
        raise ValidationError("text is required for SPECIFIC status")
    if len(trimmed) > MAX_TEXT:
        raise ValidationError(f"text must be at most {MAX_TEXT} characters")
    return trimmed


def get_summary(db: Session, user_id: str) -> UserStatus:
    status = db.query(UserStatus).filter(UserStatus.user_id == user_id).first()
    if status is None:
        # Never written: report the default without creating a row
        return UserStatus(user_id=user_id, mode=StatusMode.off, text=None, version=0)
    return status


def set_summary(
    db: Session,
    user_id: str,
    mode: StatusMode,
    text: Optional[str] = None,
    expected_version: Optional[int] = None,
) -> UserStatus:
    """Create or overwrite the user's status.

    When ``expected_version`` is given the write only succeeds if it still
    matches the stored version at UPDATE time. Without it the last write
    wins, and a write that collides with a concurrent one is re-applied.
    """
    stored_text = normalize_summary(mode, text)
    if expected_version is not None:
        return _write_summary(db, user_id, mode, stored_text, expected_version)

    for attempt in range(1, UNCONDITIONAL_ATTEMPTS + 1):
        try:
            return _write_summary(db, user_id, mode, stored_text, None)
        except ConflictError:
            if attempt == UNCONDITIONAL_ATTEMPTS:
                raise
            logger.info("Status for user %s changed underneath write, retrying", user_id)


def _write_summary(
    db: Session,
    user_id: str,
    mode: StatusMode,
    stored_text: Optional[str],
    expected_version: Optional[int],
) -> UserStatus:
    status = db.query(UserStatus).filter(UserStatus.user_id == user_id).first()
    current_version = status.version if status else 0

    if expected_version is not None and expected_version != current_version:
        raise ConflictError(
            f"Version mismatch: expected {current_version}, got {expected_version}. Re-fetch and retry."
        )

    if status is None:
        status = UserStatus(user_id=user_id, mode=mode, text=stored_text)
        db.add(status)
    else:
        status.mode = mode
        status.text = stored_text
        # always dirty, so every write bumps the version
        status.updated_at = datetime.now(pytz.utc)

    try:
        db.commit()
    except (StaleDataError, IntegrityError):
        db.rollback()
        logger.warning("Concurrent status write for user %s lost at version %d", user_id, current_version)
        raise ConflictError("Status was changed concurrently. Re-fetch and retry.")

    db.refresh(status)
    logger.info("Replaced status for user %s: %s (version %d)", user_id, mode.value, status.version)
    return status
