from flask import Blueprint, request, jsonify

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.pagination import page_payload, parse_limit, parse_offset
from social_api.schemas.post_schema import PostResponseSchema
from social_api.services import post_service

post_bp = Blueprint("posts", __name__)

post_schema = PostResponseSchema()
posts_schema = PostResponseSchema(many=True)


def _list_user_posts(user_id):
    offset = parse_offset()
    limit = parse_limit()

    posts, total = post_service.get_posts_by_user(user_id, offset, limit)
    return jsonify(
        page_payload("posts", posts_schema.dump(posts), total, offset, limit)
    ), 200


@post_bp.route("/posts/<int:post_id>", methods=["GET"])
def get_post(post_id):
    """
    ---
    get:
      tags: [posts]
      summary: Fetch a post
      parameters: [post_id]
      responses:
        200:
          description: The post
          content:
            application/json:
              schema: Post
        404: NotFound
    """
    try:
        post = post_service.get_post(post_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify(post_schema.dump(post)), 200


@post_bp.route("/users/<int:user_id>/posts", methods=["GET"])
def get_user_posts(user_id):
    """
    ---
    get:
      tags: [posts]
      summary: List the posts of a user, newest first
      parameters: [user_id, offset, limit]
      responses:
        200:
          description: A page of posts
          content:
            application/json:
              schema: PostPage
    """
    return _list_user_posts(user_id)


@post_bp.route("/me/posts", methods=["GET"])
def get_own_posts():
    """
    ---
    get:
      tags: [posts]
      summary: List the posts of the current user, newest first
      parameters: [offset, limit]
      responses:
        200:
          description: A page of posts
          content:
            application/json:
              schema: PostPage
    """
    return _list_user_posts(current_user_id())


@post_bp.route("/posts", methods=["POST"])
def create_post():
    """
    ---
    post:
      tags: [posts]
      summary: Publish a post
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              required: [content]
              properties:
                content: {type: string}
                media_ids: {type: array, items: {type: integer}}
      responses:
        201:
          description: Post created
          content:
            application/json:
              schema:
                type: object
                properties:
                  post_id: {type: integer}
                  message: {type: string}
        400: BadRequest
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        post = post_service.create_post(
            current_user_id(),
            data.get("content"),
            data.get("media_ids"),
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({
        "message": "Post created",
        "post_id": post.id
    }), 201


@post_bp.route("/posts/<int:post_id>", methods=["PATCH"])
def update_post(post_id):
    """
    ---
    patch:
      tags: [posts]
      summary: Edit one of your posts
      parameters: [post_id]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              properties:
                content: {type: string}
                media_ids: {type: array, items: {type: integer}}
      responses:
        200:
          description: Post updated
          content:
            application/json:
              schema:
                type: object
                properties:
                  message: {type: string}
                  post:
                    $ref: "#/components/schemas/Post"
        400: BadRequest
        403: Forbidden
        404: NotFound
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        post = post_service.update_post(
            current_user_id(),
            post_id,
            content=data.get("content"),
            media_ids=data.get("media_ids"),
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({
        "message": "Post updated",
        "post": post_schema.dump(post),
    }), 200


@post_bp.route("/posts/<int:post_id>", methods=["DELETE"])
def delete_post(post_id):
    """
    ---
    delete:
      tags: [posts]
      summary: Soft delete one of your posts
      parameters: [post_id]
      responses:
        200:
          description: Post deleted
          content:
            application/json:
              schema: Message
        403: Forbidden
        404: NotFound
    """
    try:
        post_service.delete_post(current_user_id(), post_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Post soft deleted"}), 200
