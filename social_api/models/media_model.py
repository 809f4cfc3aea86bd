from dataclasses import dataclass, field
from datetime import datetime

from social_api.models.post_model import utcnow


MEDIA_TYPES = ("image", "video")


@dataclass
class Media:
    id: int
    type: str  # "image" | "video"
    post_id: int
    location: str  # relative to MEDIA_UPLOAD_DIR
    mime_type: str = "application/octet-stream"
    created_at: datetime = field(default_factory=utcnow)
