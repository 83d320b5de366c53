"""Core event service: creation, visibility-gated reads, responses, shouts.

Responsibilities:
- Creation invariants: instant start time, host auto-joined, co-host wins
  over plain invitation
- Read-time visibility: host, co-host or participant only
- Response transitions: only existing participants may respond
- Shouts: only callers who can see the event may post
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from sqlalchemy.orm import Session, selectinload

from upfor.config import settings
from upfor.errors import NotFoundError, ValidationError
from upfor.models.event import Event
from upfor.models.participant import EventParticipant, ParticipantStatus
from upfor.models.shout import ShoutMessage
from upfor.models.user import User
from upfor.services import participation
from upfor.services.visibility import can_view_event, event_visible_to

logger = logging.getLogger(__name__)

MAX_SHOUT = 500


def _utcnow() -> datetime:
    return datetime.now(pytz.utc)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _event_query(db: Session):
    return db.query(Event).options(
        selectinload(Event.host),
        selectinload(Event.participants).selectinload(EventParticipant.user),
        selectinload(Event.shouts).selectinload(ShoutMessage.user),
    )


def _check_users_exist(db: Session, user_ids: list[str]) -> None:
    if not user_ids:
        return
    found = {uid for (uid,) in db.query(User.user_id).filter(User.user_id.in_(user_ids)).all()}
    missing = [uid for uid in user_ids if uid not in found]
    if missing:
        raise ValidationError({"message": "Unknown user ids", "userIds": missing})


def create_event(
    db: Session,
    host_id: str,
    activity: str,
    is_instant: bool = False,
    start_time: Optional[datetime] = None,
    is_potential: bool = False,
    location: Optional[str] = None,
    notes: Optional[str] = None,
    image_url: Optional[str] = None,
    invitee_ids: Optional[list[str]] = None,
    cohost_ids: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> Event:
    """Create an event and its initial participant rows in one commit."""
    now = now or _utcnow()
    start = participation.resolve_start_time(is_instant, start_time, now)
    planned = participation.plan_participants(host_id, invitee_ids or [], cohost_ids or [])
    _check_users_exist(db, [p.user_id for p in planned if p.user_id != host_id])

    event = Event(
        host_id=host_id,
        activity=activity.strip(),
        start_time_utc=_to_utc(start),
        location=_clean(location),
        notes=_clean(notes),
        image_url=_clean(image_url),
        is_instant=bool(is_instant),
        is_potential=bool(is_potential),
    )
    db.add(event)
    db.flush()

    # Offsets keep creation order (host, co-hosts, guests) stable on read
    for index, p in enumerate(planned):
        db.add(EventParticipant(
            event_id=event.event_id,
            user_id=p.user_id,
            role=p.role,
            status=p.status,
            created_at=now + timedelta(microseconds=index),
        ))

    db.commit()
    logger.info(
        "Created event '%s' (%s) by host %s with %d participants",
        event.activity, event.event_id, host_id, len(planned),
    )
    return get_event(db, event.event_id, host_id)


def list_events(db: Session, user_id: str, now: Optional[datetime] = None) -> list[Event]:
    """Visible events starting no earlier than the trailing grace window."""
    cutoff = (now or _utcnow()) - timedelta(hours=settings.EVENT_LIST_GRACE_HOURS)
    return (
        _event_query(db)
        .filter(event_visible_to(user_id), Event.start_time_utc >= cutoff)
        .order_by(Event.start_time_utc)
        .limit(settings.EVENT_LIST_LIMIT)
        .all()
    )


def next_event(db: Session, user_id: str, now: Optional[datetime] = None) -> Optional[Event]:
    """The earliest visible event that has not started yet."""
    return (
        _event_query(db)
        .filter(event_visible_to(user_id), Event.start_time_utc >= (now or _utcnow()))
        .order_by(Event.start_time_utc)
        .first()
    )


def get_event(db: Session, event_id: str, user_id: str) -> Event:
    """Fetch one event. Hidden and absent events are both reported as not found."""
    event = _event_query(db).filter(Event.event_id == event_id).first()
    if event is None or not can_view_event(event, user_id):
        raise NotFoundError("Event not found")
    return event


def respond(db: Session, event_id: str, user_id: str, requested: ParticipantStatus) -> EventParticipant:
    """Replace the caller's participant status. Role is never touched."""
    participant = (
        db.query(EventParticipant)
        .filter(EventParticipant.event_id == event_id, EventParticipant.user_id == user_id)
        .first()
    )
    if participant is None:
        raise NotFoundError("You are not invited to this event")

    previous = participant.status
    participant.status = participation.transition(previous, requested)
    participant.responded_at = _utcnow()
    db.commit()
    db.refresh(participant)
    logger.info(
        "User %s responded %s -> %s on event %s",
        user_id, previous.value, participant.status.value, event_id,
    )
    return participant


def post_shout(db: Session, event_id: str, user_id: str, message: str) -> ShoutMessage:
    """Append a shout to an event the caller can see."""
    event = get_event(db, event_id, user_id)

    text = message.strip()
    if not 1 <= len(text) <= MAX_SHOUT:
        raise ValidationError(f"message must be 1-{MAX_SHOUT} characters")

    shout = ShoutMessage(event_id=event.event_id, user_id=user_id, message=text)
    db.add(shout)
    db.commit()
    logger.info("User %s shouted on event %s", user_id, event_id)
    return (
        db.query(ShoutMessage)
        .options(selectinload(ShoutMessage.user))
        .populate_existing()
        .filter(ShoutMessage.shout_id == shout.shout_id)
        .one()
    )
