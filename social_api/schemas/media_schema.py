from social_api.extensions.extensions import ma
from social_api.services.media_service import build_media_url


class MediaResponseSchema(ma.Schema):
    media_id = ma.Int(attribute="id")
    type = ma.Str()
    post_id = ma.Int()
    mime_type = ma.Str()
    url = ma.Function(build_media_url)
