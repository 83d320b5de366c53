"""Event API routes: delegates to event_service for invariant enforcement."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from upfor.database import get_db
from upfor.schemas.event import (
    EventCreate,
    EventDetailOut,
    EventEnvelope,
    EventListOut,
    EventOut,
    ParticipantEnvelope,
    ParticipantOut,
    RespondRequest,
    ShoutCreate,
    ShoutEnvelope,
    ShoutOut,
)
from upfor.security import get_current_user_id
from upfor.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventEnvelope, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Create an event; the caller becomes its JOINED host."""
    event = event_service.create_event(
        db=db,
        host_id=me,
        activity=payload.activity,
        is_instant=payload.is_instant,
        start_time=payload.start_time,
        is_potential=payload.is_potential,
        location=payload.location,
        notes=payload.notes,
        image_url=payload.image_url,
        invitee_ids=payload.invitee_ids,
        cohost_ids=payload.cohost_ids,
    )
    return EventEnvelope(event=EventDetailOut.model_validate(event))


@router.get("/", response_model=EventListOut)
def list_events(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Visible events starting since yesterday, soonest first."""
    events = event_service.list_events(db, me)
    return EventListOut(events=[EventOut.model_validate(e) for e in events])


@router.get("/next", response_model=EventEnvelope)
def next_event(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """The next upcoming visible event, or null."""
    event = event_service.next_event(db, me)
    return EventEnvelope(event=EventDetailOut.model_validate(event) if event else None)


@router.get("/{event_id}", response_model=EventEnvelope)
def get_event(event_id: str, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Fetch a single visible event with participants and shouts."""
    event = event_service.get_event(db, event_id, me)
    return EventEnvelope(event=EventDetailOut.model_validate(event))


@router.post("/{event_id}/respond", response_model=ParticipantEnvelope)
def respond(event_id: str, payload: RespondRequest, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Set the caller's response: INTERESTED, JOINED or DECLINED."""
    participant = event_service.respond(db, event_id, me, payload.status)
    return ParticipantEnvelope(participant=ParticipantOut.model_validate(participant))


@router.post("/{event_id}/shout", response_model=ShoutEnvelope, status_code=status.HTTP_201_CREATED)
def shout(event_id: str, payload: ShoutCreate, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Post a message on a visible event."""
    message = event_service.post_shout(db, event_id, me, payload.message)
    return ShoutEnvelope(shout=ShoutOut.model_validate(message))
