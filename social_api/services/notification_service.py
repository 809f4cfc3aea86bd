import logging

from social_api.errors import BadRequestError
from social_api.models.notification_model import NOTIFICATION_TYPES
from social_api.pagination import paginate
from social_api.repositories import notification_repository
from social_api.services.access import require_owner


logger = logging.getLogger(__name__)


def notify(recipient_id, notification_type, source_user_id, post_id=None):
    """Record a notification for ``recipient_id``; acting on oneself is silent."""
    if notification_type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {notification_type!r}")
    if recipient_id is None or recipient_id == source_user_id:
        return None

    notification = notification_repository.create_notification(
        user_id=recipient_id,
        notification_type=notification_type,
        source_user_id=source_user_id,
        post_id=post_id,
    )
    logger.debug(
        "Notified user %s of %s by user %s",
        recipient_id, notification_type, source_user_id,
    )
    return notification


def get_notifications(user_id, offset, limit):
    notifications = notification_repository.get_for_user(user_id)
    return paginate(notifications, offset, limit)


def mark_read(user_id, notification_id, read=True):
    if not isinstance(read, bool):
        raise BadRequestError("Invalid data")

    notification = notification_repository.get_by_id(notification_id)
    require_owner(
        notification,
        getattr(notification, "user_id", None),
        user_id,
        "Notification not found",
    )
    return notification_repository.set_read(notification, read)
