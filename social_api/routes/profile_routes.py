from flask import Blueprint, jsonify, request

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.pagination import page_payload, parse_limit, parse_offset
from social_api.schemas.profile_schema import ProfileResponseSchema, UserSummarySchema
from social_api.services import profile_service


profile_bp = Blueprint("profiles", __name__)


@profile_bp.route("/users/<user_id>", methods=["GET"])
def get_profile(user_id):
    """
    ---
    get:
      tags: [profiles]
      summary: Fetch a user profile; private profiles are visible to their owner only
      parameters: [user_id]
      responses:
        200:
          description: The profile
          content:
            application/json:
              schema: Profile
        400: BadRequest
        403: Forbidden
        404: NotFound
    """
    try:
        account = profile_service.get_profile(current_user_id(), user_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify(ProfileResponseSchema().dump(account)), 200


@profile_bp.route("/me", methods=["PATCH"])
def update_my_profile():
    """
    ---
    patch:
      tags: [profiles]
      summary: Update the profile of the current user
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              properties:
                username: {type: string}
                bio: {type: string}
                avatar: {type: string}
                is_private: {type: boolean}
      responses:
        200:
          description: Profile updated
          content:
            application/json:
              schema:
                type: object
                properties:
                  message: {type: string}
                  profile:
                    $ref: "#/components/schemas/Profile"
        400: BadRequest
        401: Unauthorized
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        account = profile_service.update_profile(
            current_user_id(),
            username=data.get("username"),
            bio=data.get("bio"),
            avatar=data.get("avatar"),
            is_private=data.get("is_private"),
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({
        "message": "Profile updated",
        "profile": ProfileResponseSchema().dump(account),
    }), 200


@profile_bp.route("/users", methods=["GET"])
def search_users():
    """
    ---
    get:
      tags: [profiles]
      summary: Search users by username
      parameters:
        - in: query
          name: search
          schema: {type: string}
        - in: query
          name: sort
          schema:
            type: string
            enum: [id, "-id", username, "-username", created_at, "-created_at"]
            default: id
        - offset
        - limit
      responses:
        200:
          description: A page of users
          content:
            application/json:
              schema: UserPage
        400: BadRequest
    """
    offset = parse_offset()
    limit = parse_limit()

    try:
        accounts, total = profile_service.search_users(
            request.args.get("search"),
            offset,
            limit,
            sort=request.args.get("sort"),
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify(page_payload(
        "users",
        UserSummarySchema(many=True).dump(accounts),
        total,
        offset,
        limit,
    )), 200
