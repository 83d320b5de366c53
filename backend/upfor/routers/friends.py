"""Friendship workflow routes: request, accept, deny, list."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from upfor.database import get_db
from upfor.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from upfor.models.friendship import Friendship, FriendshipStatus, make_pair_key
from upfor.models.user import User
from upfor.schemas.friend import FriendRequestAction, FriendRequestCreate, FriendshipOut, ReceivedRequestOut
from upfor.schemas.status import OkOut
from upfor.schemas.user import UserOut, UserSummary
from upfor.security import get_current_user_id
from upfor.services.visibility import accepted_friend_ids

logger = logging.getLogger(__name__)
router = APIRouter()


def _find_pair(db: Session, a: str, b: str):
    return db.query(Friendship).filter(Friendship.pair_key == make_pair_key(a, b)).first()


def _recipient_request(db: Session, request_id: str, me: str) -> Friendship:
    request = db.query(Friendship).filter(Friendship.friendship_id == request_id).first()
    if not request:
        raise NotFoundError("Request not found")
    if request.user_b_id != me:
        raise ForbiddenError("Not your request")
    if request.status == FriendshipStatus.accepted:
        raise ConflictError("Already friends")
    return request


@router.get("/", response_model=list[UserOut])
def list_friends(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Accepted friends of the caller, ordered by name."""
    ids = accepted_friend_ids(db, me)
    if not ids:
        return []
    return db.query(User).filter(User.user_id.in_(ids)).order_by(User.name).all()


@router.get("/requests", response_model=list[ReceivedRequestOut])
def list_requests(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Pending requests addressed to the caller, newest first."""
    pending = (
        db.query(Friendship)
        .filter(Friendship.status == FriendshipStatus.pending, Friendship.user_b_id == me)
        .order_by(Friendship.created_at.desc())
        .all()
    )
    return [
        ReceivedRequestOut(id=f.friendship_id, sender=UserSummary.model_validate(f.user_a))
        for f in pending
    ]


@router.post("/request", response_model=FriendshipOut, status_code=status.HTTP_201_CREATED)
def send_request(payload: FriendRequestCreate, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Send a friend request. At most one row exists per unordered pair."""
    other = payload.user_id
    if other == me:
        raise ValidationError("Cannot friend yourself")
    if not db.query(User).filter(User.user_id == other).first():
        raise NotFoundError("User not found")

    existing = _find_pair(db, me, other)
    if existing:
        if existing.status == FriendshipStatus.accepted:
            raise ConflictError("Already friends")
        raise ConflictError("Friend request already pending")

    request = Friendship(user_a_id=me, user_b_id=other, status=FriendshipStatus.pending)
    db.add(request)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a request for the same pair
        db.rollback()
        logger.warning("Duplicate friend request between %s and %s rejected", me, other)
        raise ConflictError("Friend request already pending")
    db.refresh(request)
    logger.info("User %s sent friend request %s to %s", me, request.friendship_id, other)
    return request


@router.post("/accept", response_model=FriendshipOut)
def accept_request(payload: FriendRequestAction, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Accept a pending request addressed to the caller."""
    request = _recipient_request(db, payload.request_id, me)
    request.status = FriendshipStatus.accepted
    db.commit()
    db.refresh(request)
    logger.info("User %s accepted friend request %s", me, request.friendship_id)
    return request


@router.post("/deny", response_model=OkOut)
def deny_request(payload: FriendRequestAction, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Deny (delete) a pending request addressed to the caller."""
    request = _recipient_request(db, payload.request_id, me)
    db.delete(request)
    db.commit()
    logger.info("User %s denied friend request %s", me, payload.request_id)
    return OkOut()
