"""Visibility predicates: who may see a friend's calendar or an event.

Friend calendars: visible only across an ACCEPTED friendship, in either
direction. Requested ids without one are dropped silently, the caller's own
id included, so a caller cannot probe for non-friends.

Events: visible to the host, a co-host, or anyone holding a participant row
(any status, DECLINED included). ``can_view_event`` is the capability check
for a loaded event; ``event_visible_to`` is the same rule as a SQL clause for
list queries. Both live here so read paths cannot drift apart.
"""
from typing import Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from upfor.models.event import Event
from upfor.models.friendship import Friendship, FriendshipStatus
from upfor.models.participant import EventParticipant


def accepted_friend_ids(db: Session, user_id: str) -> set[str]:
    rows = (
        db.query(Friendship.user_a_id, Friendship.user_b_id)
        .filter(
            Friendship.status == FriendshipStatus.accepted,
            or_(Friendship.user_a_id == user_id, Friendship.user_b_id == user_id),
        )
        .all()
    )
    return {b if a == user_id else a for a, b in rows}


def filter_visible_friends(requested_ids: Iterable[str], friend_ids: set[str]) -> list[str]:
    """Keep requested ids that are accepted friends, in request order, de-duplicated."""
    return [uid for uid in dict.fromkeys(requested_ids) if uid in friend_ids]


def can_view_event(event: Event, user_id: str) -> bool:
    if event.host_id == user_id:
        return True
    if user_id in event.cohost_ids:
        return True
    return any(p.user_id == user_id for p in event.participants)


def event_visible_to(user_id: str):
    """SQL form of ``can_view_event`` for use in ``Query.filter``.

    Co-hosts always hold a participant row, so the participant test covers them.
    """
    return or_(
        Event.host_id == user_id,
        Event.participants.any(EventParticipant.user_id == user_id),
    )
