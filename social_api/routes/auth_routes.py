from flask import Blueprint, request, jsonify

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.services import auth_service


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/auth/register", methods=["POST"])
def register():
    """Create an account and return a token for it.
    ---
    post:
      tags: [auth]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              required: [username, email, password]
              properties:
                username: {type: string}
                email: {type: string}
                password: {type: string}
      responses:
        201:
          description: Account created
          content:
            application/json:
              schema: Registered
        400: BadRequest
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        result = auth_service.register(
            data.get("username"),
            data.get("email"),
            data.get("password"),
        )
        return jsonify(result), 201
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code


@auth_bp.route("/auth/login", methods=["POST"])
def login():
    """Log in with a username or an email.
    ---
    post:
      tags: [auth]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              required: [login, password]
              properties:
                login: {type: string}
                password: {type: string}
      responses:
        200:
          description: Access token
          content:
            application/json:
              schema: Token
        400: BadRequest
        401: Unauthorized
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        tokens = auth_service.login(
            data.get("login"),
            data.get("password")
        )
        return jsonify(tokens), 200
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code


@auth_bp.route("/me/password", methods=["PUT"])
def change_password():
    """
    ---
    put:
      tags: [auth]
      summary: Change the password of the current user
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              properties:
                old_password: {type: string}
                new_password: {type: string}
      responses:
        200:
          description: Password updated
          content:
            application/json:
              schema: Message
        400: BadRequest
        401: Unauthorized
        403: Forbidden
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON body"}), 400

    try:
        auth_service.change_password(
            current_user_id(),
            data.get("old_password"),
            data.get("new_password"),
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Password updated"}), 200


@auth_bp.route("/me", methods=["DELETE"])
def delete_account():
    """
    ---
    delete:
      tags: [auth]
      summary: Soft delete the current account
      responses:
        200:
          description: Account deleted
          content:
            application/json:
              schema: Message
        401: Unauthorized
    """
    try:
        auth_service.delete_account(current_user_id())
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Account soft deleted"}), 200
