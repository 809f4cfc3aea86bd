from social_api.db import db
from social_api.models.media_model import Media


def allocate_media_id():
    return db.media.allocate_id()


def add_media(media_id, media_type, post_id, location, mime_type):
    media = Media(
        id=media_id,
        type=media_type,
        post_id=post_id,
        location=location,
        mime_type=mime_type,
    )
    db.media.put(media.id, media)
    return media


def get_by_ids(media_ids):
    media = [db.media.get(media_id) for media_id in media_ids]
    return [item for item in media if item is not None]
