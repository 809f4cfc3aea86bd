from dataclasses import dataclass, field
from datetime import datetime

from social_api.models.post_model import utcnow


@dataclass
class Comment:
    id: int
    post_id: int
    author_id: int
    content: str
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    is_deleted: bool = False
