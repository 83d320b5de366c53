"""Friend calendar routes: dense availability for accepted friends only."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from upfor.database import get_db
from upfor.models.user import User
from upfor.schemas.calendar import FriendCalendarOut, FriendsCalendarOut
from upfor.schemas.status import DayEntryOut
from upfor.security import get_current_user_id
from upfor.services.timeline import materialize, window_start
from upfor.services.visibility import accepted_friend_ids, filter_visible_friends

logger = logging.getLogger(__name__)
router = APIRouter()


def parse_ids(raw: Optional[str]) -> list[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


@router.get("/friends", response_model=FriendsCalendarOut)
def friends_calendar(
    ids: Optional[str] = Query(None, description="Comma-separated friend ids"),
    me: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Calendars of the requested friends. Non-friend ids are silently omitted."""
    start = window_start()
    requested = parse_ids(ids)
    allowed = filter_visible_friends(requested, accepted_friend_ids(db, me)) if requested else []
    if not allowed:
        return FriendsCalendarOut(start=start, friends=[])

    friends = db.query(User).filter(User.user_id.in_(allowed)).order_by(User.name).all()
    calendars = materialize(db, [f.user_id for f in friends], start)
    logger.info("User %s read %d of %d requested friend calendars", me, len(friends), len(requested))

    return FriendsCalendarOut(
        start=start,
        friends=[
            FriendCalendarOut(
                id=f.user_id,
                name=f.name,
                avatar_url=f.avatar_url,
                days=[DayEntryOut.model_validate(d) for d in calendars[f.user_id]],
            )
            for f in friends
        ],
    )
