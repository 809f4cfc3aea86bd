from flask import Blueprint, request, jsonify

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.pagination import page_payload, parse_limit, parse_offset
from social_api.schemas.notification_schema import NotificationResponseSchema
from social_api.services import notification_service


notification_bp = Blueprint("notifications", __name__)


@notification_bp.route("/notifications", methods=["GET"])
def get_notifications():
    """
    ---
    get:
      tags: [notifications]
      summary: List the notifications of the current user, newest first
      parameters: [offset, limit]
      responses:
        200:
          description: A page of notifications
          content:
            application/json:
              schema: NotificationPage
    """
    offset = parse_offset()
    limit = parse_limit()

    notifications, total = notification_service.get_notifications(
        current_user_id(), offset, limit
    )
    return jsonify(page_payload(
        "notifications",
        NotificationResponseSchema(many=True).dump(notifications),
        total,
        offset,
        limit,
    )), 200


@notification_bp.route("/notifications/<notification_id>", methods=["PATCH"])
def mark_as_read(notification_id):
    """
    ---
    patch:
      tags: [notifications]
      summary: Mark a notification read, or unread when read is false
      parameters: [notification_id]
      requestBody:
        required: false
        content:
          application/json:
            schema:
              type: object
              properties:
                read: {type: boolean, default: true}
      responses:
        200:
          description: Notification updated
          content:
            application/json:
              schema: Message
        400: BadRequest
        403: Forbidden
        404: NotFound
    """
    try:
        notification_id = int(notification_id)
    except ValueError:
        return jsonify({"error": "Invalid notification ID"}), 400

    # the body is optional, an empty PATCH marks the notification read
    data = request.get_json(silent=True)
    read = data.get("read", True) if isinstance(data, dict) else True

    try:
        notification_service.mark_read(current_user_id(), notification_id, read)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Notification marked as read"}), 200
