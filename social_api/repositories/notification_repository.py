from social_api.db import db
from social_api.models.notification_model import Notification


def create_notification(user_id, notification_type, source_user_id, post_id=None):
    notifications = db.notifications
    with notifications.lock:
        notification = Notification(
            id=notifications.allocate_id(),
            user_id=user_id,
            type=notification_type,
            source_user_id=source_user_id,
            post_id=post_id,
        )
        notifications.put(notification.id, notification)
    return notification


def get_by_id(notification_id):
    return db.notifications.get(notification_id)


def get_for_user(user_id):
    notifications = db.notifications.filter(
        lambda notification: notification.user_id == user_id
    )
    return sorted(notifications, key=lambda n: n.id, reverse=True)


def set_read(notification, read=True):
    with db.notifications.lock:
        notification.read = read
    return notification
