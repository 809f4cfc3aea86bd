from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from social_api.models.post_model import utcnow


NOTIFICATION_TYPES = ("follow", "comment", "reaction")


@dataclass
class Notification:
    id: int
    user_id: int  # recipient
    type: str
    source_user_id: int
    post_id: Optional[int] = None
    read: bool = False
    created_at: datetime = field(default_factory=utcnow)
