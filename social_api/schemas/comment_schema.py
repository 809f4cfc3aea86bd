from social_api.extensions.extensions import ma
from social_api.repositories import account_repository


class CommentResponseSchema(ma.Schema):
    comment_id = ma.Int(attribute="id")
    post_id = ma.Int()
    user_id = ma.Int(attribute="author_id")
    username = ma.Method("get_username")
    content = ma.Str()
    created_at = ma.DateTime()
    updated_at = ma.DateTime()

    def get_username(self, comment):
        return account_repository.display_name(comment.author_id)
