from social_api.extensions.extensions import ma


class PostResponseSchema(ma.Schema):
    post_id = ma.Int(attribute="id")
    user_id = ma.Int(attribute="author_id")
    content = ma.Str()
    created_at = ma.DateTime()
    updated_at = ma.DateTime()
    media_ids = ma.List(ma.Int())


class FeedItemSchema(ma.Schema):
    post_id = ma.Int()
    user_id = ma.Int()
    username = ma.Str()
    avatar = ma.Str()
    content = ma.Str()
    media_urls = ma.List(ma.Str())
    created_at = ma.DateTime()
    like_count = ma.Int()
    comment_count = ma.Int()
    is_liked = ma.Bool()
