import logging

from social_api.errors import BadRequestError
from social_api.pagination import paginate
from social_api.repositories import post_repository
from social_api.services.access import require_found, require_owner


logger = logging.getLogger(__name__)


def _validate_content(content):
    if not isinstance(content, str) or not content.strip():
        raise BadRequestError("Invalid data")
    return content.strip()


def _validate_media_ids(media_ids):
    if media_ids is None:
        return []
    if not isinstance(media_ids, list) or not all(
        isinstance(media_id, int) and not isinstance(media_id, bool)
        for media_id in media_ids
    ):
        raise BadRequestError("Invalid data")
    return media_ids


def create_post(author_id, content, media_ids=None):
    content = _validate_content(content)
    media_ids = _validate_media_ids(media_ids)

    post = post_repository.create_post(author_id, content, media_ids)
    logger.info("User %s created post %s", author_id, post.id)
    return post


def get_post(post_id):
    return require_found(post_repository.get_by_id(post_id), "Post not found")


def get_posts_by_user(user_id, offset, limit):
    posts = post_repository.get_by_author(user_id)
    return paginate(posts, offset, limit)


def update_post(user_id, post_id, content=None, media_ids=None):
    post = post_repository.get_by_id(post_id)
    require_owner(post, getattr(post, "author_id", None), user_id, "Post not found")

    if content is None and media_ids is None:
        raise BadRequestError("Invalid data")
    if content is not None:
        content = _validate_content(content)
    if media_ids is not None:
        media_ids = _validate_media_ids(media_ids)

    post_repository.update_post(post, content=content, media_ids=media_ids)
    logger.info("User %s updated post %s", user_id, post_id)
    return post


def delete_post(user_id, post_id):
    post = post_repository.get_by_id(post_id)
    require_owner(post, getattr(post, "author_id", None), user_id, "Post not found")

    post_repository.soft_delete(post_id)
    logger.info("User %s soft deleted post %s", user_id, post_id)
