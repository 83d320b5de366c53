"""Participant lifecycle rules, independent of storage.

Roles are fixed at creation. HOST and COHOST start JOINED, GUEST starts
INVITED. Responses may move a participant between INTERESTED, JOINED and
DECLINED in any direction; INVITED is never a response target.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from upfor.errors import ValidationError
from upfor.models.participant import ParticipantRole, ParticipantStatus

RESPONSE_STATUSES = frozenset({
    ParticipantStatus.interested,
    ParticipantStatus.joined,
    ParticipantStatus.declined,
})


@dataclass(frozen=True)
class PlannedParticipant:
    user_id: str
    role: ParticipantRole
    status: ParticipantStatus


def transition(current: ParticipantStatus, requested: ParticipantStatus) -> ParticipantStatus:
    """Return the status after a response. Any prior status may be replaced."""
    if requested not in RESPONSE_STATUSES:
        raise ValidationError(f"Cannot respond with status {requested.value}")
    return requested


def plan_participants(
    host_id: str,
    invitee_ids: Iterable[str],
    cohost_ids: Iterable[str],
) -> list[PlannedParticipant]:
    """Build the initial participant rows for a new event.

    The host is always first. Ids present in both lists become co-hosts only,
    and the host's own id is dropped from both lists.
    """
    cohosts = [uid for uid in dict.fromkeys(cohost_ids) if uid and uid != host_id]
    cohost_set = set(cohosts)
    guests = [
        uid for uid in dict.fromkeys(invitee_ids)
        if uid and uid != host_id and uid not in cohost_set
    ]

    planned = [PlannedParticipant(host_id, ParticipantRole.host, ParticipantStatus.joined)]
    planned += [PlannedParticipant(uid, ParticipantRole.cohost, ParticipantStatus.joined) for uid in cohosts]
    planned += [PlannedParticipant(uid, ParticipantRole.guest, ParticipantStatus.invited) for uid in guests]
    return planned


def resolve_start_time(is_instant: bool, requested: Optional[datetime], now: datetime) -> datetime:
    """Instant events start at creation time; scheduled ones need a start time."""
    if is_instant:
        return now
    if requested is None:
        raise ValidationError("startTime is required unless the event is instant")
    return requested
