from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow():
    return datetime.now(timezone.utc)


@dataclass
class Post:
    id: int
    author_id: int
    content: str
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    media_ids: list = field(default_factory=list)
    is_deleted: bool = False
