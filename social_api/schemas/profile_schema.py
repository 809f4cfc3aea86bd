from social_api.extensions.extensions import ma
from social_api.repositories import post_repository
from social_api.repositories.follow_repository import count_followers, count_following


class UserSummarySchema(ma.Schema):
    user_id = ma.Int(attribute="id")
    username = ma.Str()
    avatar = ma.Str()


class ProfileResponseSchema(UserSummarySchema):
    bio = ma.Str()
    is_private = ma.Bool()
    created_at = ma.DateTime()
    followers_count = ma.Method("get_followers_count")
    following_count = ma.Method("get_following_count")
    posts_count = ma.Method("get_posts_count")

    def get_followers_count(self, account):
        return count_followers(account.id)

    def get_following_count(self, account):
        return count_following(account.id)

    def get_posts_count(self, account):
        return len(post_repository.get_by_author(account.id))


class FollowUserSchema(ma.Schema):
    user_id = ma.Int()
    username = ma.Str()
