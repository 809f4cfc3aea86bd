import logging

from social_api.errors import BadRequestError
from social_api.pagination import paginate
from social_api.repositories import comment_repository, post_repository
from social_api.services import notification_service
from social_api.services.access import require_found, require_owner


logger = logging.getLogger(__name__)


def _validate_content(content):
    if not isinstance(content, str) or not content.strip():
        raise BadRequestError("Invalid content")
    return content.strip()


def add_comment(author_id, post_id, content):
    content = _validate_content(content)
    post = require_found(post_repository.get_by_id(post_id), "Post not found")

    comment = comment_repository.create_comment(
        author_id=author_id,
        post_id=post_id,
        content=content,
    )
    logger.info("User %s commented %s on post %s", author_id, comment.id, post_id)

    notification_service.notify(post.author_id, "comment", author_id, post_id)
    return comment


def get_post_comments(post_id, offset, limit):
    require_found(post_repository.get_by_id(post_id), "Post not found")
    comments = comment_repository.get_comments_by_post(post_id)
    return paginate(comments, offset, limit)


def update_comment(user_id, comment_id, content):
    content = _validate_content(content)

    comment = comment_repository.get_by_id(comment_id)
    require_owner(
        comment, getattr(comment, "author_id", None), user_id, "Comment not found"
    )

    comment_repository.update_content(comment, content)
    logger.info("User %s updated comment %s", user_id, comment_id)
    return comment


def delete_comment(user_id, comment_id):
    comment = comment_repository.get_by_id(comment_id)
    require_owner(
        comment, getattr(comment, "author_id", None), user_id, "Comment not found"
    )

    comment_repository.soft_delete(comment_id)
    logger.info("User %s soft deleted comment %s", user_id, comment_id)
