from flask import Blueprint, request, jsonify

from social_api.errors import ApiError
from social_api.extensions.identity import current_user_id
from social_api.services import reaction_service

reaction_bp = Blueprint("reactions", __name__)


@reaction_bp.route("/posts/<int:post_id>/reactions", methods=["GET"])
def get_reactions(post_id):
    """
    ---
    get:
      tags: [reactions]
      summary: Summarise the reactions to a post
      parameters: [post_id]
      responses:
        200:
          description: Reaction count, distinct types and reacting users
          content:
            application/json:
              schema: ReactionSummary
        404: NotFound
    """
    try:
        return jsonify(reaction_service.get_reactions(post_id)), 200
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code


@reaction_bp.route("/posts/<int:post_id>/reactions", methods=["POST"])
def react_to_post(post_id):
    """
    ---
    post:
      tags: [reactions]
      summary: React to a post; a new reaction replaces your previous one
      parameters: [post_id]
      requestBody:
        required: true
        content:
          application/json:
            schema:
              type: object
              properties:
                reaction_type: {type: string}
      responses:
        201:
          description: Reaction stored
          content:
            application/json:
              schema: Message
        400: BadRequest
        404: NotFound
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid reaction type"}), 400

    try:
        reaction_service.react(
            user_id=current_user_id(),
            post_id=post_id,
            reaction_type=data.get("reaction_type"),
        )
        return jsonify({"message": "Reaction added"}), 201

    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code


@reaction_bp.route("/posts/<int:post_id>/reactions", methods=["DELETE"])
def remove_reaction(post_id):
    """
    ---
    delete:
      tags: [reactions]
      summary: Remove your reaction from a post
      parameters: [post_id]
      responses:
        200:
          description: Reaction removed
          content:
            application/json:
              schema: Message
        404: NotFound
    """
    try:
        reaction_service.remove_reaction(current_user_id(), post_id)
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({"message": "Reaction removed"}), 200
