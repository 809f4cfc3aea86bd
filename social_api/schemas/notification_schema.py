from social_api.extensions.extensions import ma


class NotificationResponseSchema(ma.Schema):
    id = ma.Int()
    type = ma.Str()
    source_user_id = ma.Int()
    post_id = ma.Int(allow_none=True)
    read = ma.Bool()
    created_at = ma.DateTime()
