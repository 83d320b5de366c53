"""User registration and profile routes."""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from upfor.database import get_db
from upfor.errors import ConflictError, NotFoundError
from upfor.models.user import User
from upfor.models.user_status import StatusMode, UserStatus
from upfor.schemas.user import RegisterOut, UserCreate, UserOut, UserSummary, UserUpdate
from upfor.security import create_access_token, get_current_user_id

logger = logging.getLogger(__name__)
router = APIRouter()

SEARCH_MIN_CHARS = 3
SEARCH_LIMIT = 10


@router.post("/", response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a user with an OFF status and return an access token."""
    email = str(payload.email).lower()
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already in use")

    user = User(name=payload.name.strip(), email=email)
    db.add(user)
    db.flush()
    db.add(UserStatus(user_id=user.user_id, mode=StatusMode.off))
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.user_id, user.name)
    return RegisterOut(token=create_access_token(user.user_id), user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
def get_me(me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Fetch the caller's profile with current summary status."""
    user = db.query(User).filter(User.user_id == me).first()
    if not user:
        raise NotFoundError("User not found")
    return user


@router.patch("/me", response_model=UserOut)
def update_me(payload: UserUpdate, me: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    """Update profile fields (partial update)."""
    user = db.query(User).filter(User.user_id == me).first()
    if not user:
        raise NotFoundError("User not found")
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "use_custom_location" and value is None:
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated profile of user %s", me)
    return user


@router.get("/search", response_model=list[UserSummary])
def search_users(
    q: str = Query(""),
    me: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Live search by name or email, excluding the caller."""
    term = q.strip().lower()
    if len(term) < SEARCH_MIN_CHARS:
        return []
    pattern = f"%{term}%"
    return (
        db.query(User)
        .filter(
            or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern)),
            User.user_id != me,
        )
        .order_by(User.name)
        .limit(SEARCH_LIMIT)
        .all()
    )
