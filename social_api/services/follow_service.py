import logging

from social_api.errors import BadRequestError, ForbiddenError
from social_api.pagination import paginate
from social_api.repositories import account_repository
from social_api.repositories.follow_repository import (
    create_follow,
    delete_follow,
    get_follower_ids,
    get_following_ids,
)
from social_api.services import notification_service


logger = logging.getLogger(__name__)


def _serialize_users(user_ids):
    return [
        {"user_id": user_id, "username": account_repository.display_name(user_id)}
        for user_id in user_ids
    ]


def follow(current_id: int, target_id: int):
    if current_id == target_id:
        raise BadRequestError("You cannot follow yourself")

    if not create_follow(current_id, target_id):
        raise BadRequestError("Already following")

    logger.info("User %s followed user %s", current_id, target_id)
    notification_service.notify(target_id, "follow", current_id)


def unfollow(current_id: int, target_id: int):
    if not delete_follow(current_id, target_id):
        raise ForbiddenError("Not following")

    logger.info("User %s unfollowed user %s", current_id, target_id)


def get_followers(user_id: int, offset: int, limit: int):
    page, total = paginate(get_follower_ids(user_id), offset, limit)
    return _serialize_users(page), total


def get_following(user_id: int, offset: int, limit: int):
    page, total = paginate(get_following_ids(user_id), offset, limit)
    return _serialize_users(page), total
