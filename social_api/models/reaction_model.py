from dataclasses import dataclass, field
from datetime import datetime

from social_api.models.post_model import utcnow


@dataclass
class Reaction:
    post_id: int
    user_id: int
    reaction_type: str
    created_at: datetime = field(default_factory=utcnow)

    @property
    def key(self):
        return (self.post_id, self.user_id)
