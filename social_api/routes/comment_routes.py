from flask import Blueprint, request, jsonify

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.pagination import page_payload, parse_limit, parse_offset
from social_api.schemas.comment_schema import CommentResponseSchema
from social_api.services import comment_service


comment_bp = Blueprint("comments", __name__)


@comment_bp.route("/posts/<int:post_id>/comments", methods=["POST"])
def create_comment(post_id):
    """
    ---
    post:
      tags: [comments]
      summary: Comment on a post
      parameters: [post_id]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              properties:
                content: {type: string}
      responses:
        201:
          description: Comment created
          content:
            application/json:
              schema:
                type: object
                properties:
                  comment_id: {type: integer}
                  message: {type: string}
        400: BadRequest
        404: NotFound
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        comment = comment_service.add_comment(
            author_id=current_user_id(),
            post_id=post_id,
            content=data.get("content"),
        )
        return jsonify({
            "comment_id": comment.id,
            "message": "Comment created"
        }), 201

    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code


@comment_bp.route("/posts/<int:post_id>/comments", methods=["GET"])
def get_post_comments(post_id):
    """
    ---
    get:
      tags: [comments]
      summary: List the comments of a post, oldest first
      parameters: [post_id, offset, limit]
      responses:
        200:
          description: A page of comments
          content:
            application/json:
              schema: CommentPage
        404: NotFound
    """
    offset = parse_offset()
    limit = parse_limit()

    try:
        comments, total = comment_service.get_post_comments(post_id, offset, limit)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify(page_payload(
        "comments",
        CommentResponseSchema(many=True).dump(comments),
        total,
        offset,
        limit,
    )), 200


@comment_bp.route("/comments/<int:comment_id>", methods=["PUT"])
def update_comment(comment_id):
    """
    ---
    put:
      tags: [comments]
      summary: Edit one of your comments
      parameters: [comment_id]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              properties:
                content: {type: string}
      responses:
        200:
          description: Comment updated
          content:
            application/json:
              schema: Message
        400: BadRequest
        403: Forbidden
        404: NotFound
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        comment_service.update_comment(
            current_user_id(), comment_id, data.get("content")
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Comment updated"}), 200


@comment_bp.route("/comments/<int:comment_id>", methods=["DELETE"])
def delete_comment(comment_id):
    """
    ---
    delete:
      tags: [comments]
      summary: Soft delete one of your comments
      parameters: [comment_id]
      responses:
        200:
          description: Comment deleted
          content:
            application/json:
              schema: Message
        403: Forbidden
        404: NotFound
    """
    try:
        comment_service.delete_comment(current_user_id(), comment_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Comment soft deleted"}), 200
