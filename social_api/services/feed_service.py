from social_api.pagination import apply_feed_cursor
from social_api.repositories import account_repository, comment_repository
from social_api.repositories import post_repository, reaction_repository
from social_api.services.media_service import media_urls_for


def _serialize_feed_item(post, current_id):
    author = account_repository.get_by_id(post.author_id)
    return {
        "post_id": post.id,
        "user_id": post.author_id,
        "username": author.username if author else f"user{post.author_id}",
        "avatar": author.avatar if author else "",
        "content": post.content,
        "media_urls": media_urls_for(post.media_ids),
        "created_at": post.created_at,
        "like_count": reaction_repository.count_by_post(post.id),
        "comment_count": comment_repository.count_by_post(post.id),
        "is_liked": reaction_repository.get_reaction(post.id, current_id) is not None,
    }


def get_news_feed(current_id, before, limit):
    posts = post_repository.get_visible_posts()
    page, next_cursor = apply_feed_cursor(posts, before, limit)
    return {
        "feeds": [_serialize_feed_item(post, current_id) for post in page],
        "next_cursor": next_cursor,
    }
