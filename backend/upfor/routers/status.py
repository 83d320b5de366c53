"""Own availability calendar and summary status routes."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from upfor.database import get_db
from upfor.schemas.status import (
    AvailabilityOut,
    AvailabilityUpdate,
    DayEntryOut,
    OkOut,
    StatusOut,
    SummaryOut,
    SummaryUpdate,
)
from upfor.security import get_current_user_id
from upfor.services import availability_service, status_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/availability", response_model=AvailabilityOut)
def get_availability(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """The caller's dense 28-day calendar starting today (UTC)."""
    start, days = availability_service.get_availability(db, me)
    return AvailabilityOut(start=start, days=[DayEntryOut.model_validate(d) for d in days])


@router.put("/availability", response_model=OkOut)
def put_availability(payload: AvailabilityUpdate, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Save 1-28 days of availability as one all-or-nothing batch."""
    availability_service.save_availability(db, me, payload.days)
    return OkOut()


@router.get("/summary", response_model=SummaryOut)
def get_summary(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    return SummaryOut(status=StatusOut.model_validate(status_service.get_summary(db, me)))


@router.put("/summary", response_model=SummaryOut)
def put_summary(payload: SummaryUpdate, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Replace the caller's summary status (OFF / GENERAL / SPECIFIC)."""
    status = status_service.set_summary(
        db,
        me,
        mode=payload.mode,
        text=payload.text,
        expected_version=payload.version,
    )
    return SummaryOut(status=StatusOut.model_validate(status))
