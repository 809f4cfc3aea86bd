from flask import Blueprint, jsonify

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.pagination import page_payload, parse_limit, parse_offset
from social_api.schemas.profile_schema import FollowUserSchema
from social_api.services import follow_service


follow_bp = Blueprint("follows", __name__)

follow_users_schema = FollowUserSchema(many=True)


def _followers_response(user_id):
    offset = parse_offset()
    limit = parse_limit()
    users, total = follow_service.get_followers(user_id, offset, limit)
    return jsonify(
        page_payload("followers", follow_users_schema.dump(users), total, offset, limit)
    ), 200


def _following_response(user_id):
    offset = parse_offset()
    limit = parse_limit()
    users, total = follow_service.get_following(user_id, offset, limit)
    return jsonify(
        page_payload("following", follow_users_schema.dump(users), total, offset, limit)
    ), 200


@follow_bp.route("/me/followers", methods=["GET"])
def get_my_followers():
    """
    ---
    get:
      tags: [follows]
      summary: List the followers of the current user
      parameters: [offset, limit]
      responses:
        200:
          description: A page of followers
          content:
            application/json:
              schema: FollowerPage
    """
    return _followers_response(current_user_id())


@follow_bp.route("/me/following", methods=["GET"])
def get_my_following():
    """
    ---
    get:
      tags: [follows]
      summary: List the users the current user follows
      parameters: [offset, limit]
      responses:
        200:
          description: A page of followed users
          content:
            application/json:
              schema: FollowingPage
    """
    return _following_response(current_user_id())


@follow_bp.route("/users/<int:user_id>/followers", methods=["GET"])
def get_followers(user_id):
    """
    ---
    get:
      tags: [follows]
      summary: List the followers of a user
      parameters: [user_id, offset, limit]
      responses:
        200:
          description: A page of followers
          content:
            application/json:
              schema: FollowerPage
    """
    return _followers_response(user_id)


@follow_bp.route("/users/<int:user_id>/following", methods=["GET"])
def get_following(user_id):
    """
    ---
    get:
      tags: [follows]
      summary: List the users a user follows
      parameters: [user_id, offset, limit]
      responses:
        200:
          description: A page of followed users
          content:
            application/json:
              schema: FollowingPage
    """
    return _following_response(user_id)


@follow_bp.route("/users/<int:target_user_id>/follow", methods=["POST"])
def follow_user(target_user_id):
    """
    ---
    post:
      tags: [follows]
      summary: Follow a user
      parameters: [target_user_id]
      responses:
        201:
          description: Followed
          content:
            application/json:
              schema: Message
        400: BadRequest
    """
    try:
        follow_service.follow(current_user_id(), target_user_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Followed"}), 201


@follow_bp.route("/users/<int:target_user_id>/follow", methods=["DELETE"])
def unfollow_user(target_user_id):
    """
    ---
    delete:
      tags: [follows]
      summary: Stop following a user
      parameters: [target_user_id]
      responses:
        200:
          description: Unfollowed
          content:
            application/json:
              schema: Message
        403: Forbidden
    """
    try:
        follow_service.unfollow(current_user_id(), target_user_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Unfollowed"}), 200
