"""ORM models: importing this package registers every table with Base.metadata."""
from upfor.models.user import User  # noqa: F401
from upfor.models.friendship import Friendship  # noqa: F401
from upfor.models.user_status import UserStatus  # noqa: F401
from upfor.models.availability import AvailabilityDay  # noqa: F401
from upfor.models.event import Event  # noqa: F401
from upfor.models.participant import EventParticipant  # noqa: F401
from upfor.models.shout import ShoutMessage  # noqa: F401
