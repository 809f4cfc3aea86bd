from dataclasses import dataclass, field
from datetime import datetime

from social_api.models.post_model import utcnow


@dataclass
class Account:
    id: int
    username: str
    email: str
    password_hash: str
    bio: str = ""
    avatar: str = ""
    is_private: bool = False
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utcnow)
