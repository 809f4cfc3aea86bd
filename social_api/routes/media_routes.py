from flask import Blueprint, current_app, jsonify, request, send_from_directory

from social_api.errors import ApiError
from social_api.schemas.media_schema import MediaResponseSchema
from social_api.services import media_service


media_bp = Blueprint("media", __name__)


@media_bp.route("/media", methods=["POST"])
def upload_media():
    """Upload an image or video and attach it to a post.
    ---
    post:
      tags: [media]
      requestBody:
        required: true
        content:
          multipart/form-data:
            schema:
              type: object
              required: [type, post_id, file]
              properties:
                type: {type: string, enum: [image, video]}
                post_id: {type: integer}
                file: {type: string, format: binary}
      responses:
        201:
          description: Media stored
          content:
            application/json:
              schema:
                type: object
                properties:
                  media_id: {type: integer}
                  message: {type: string}
                  media:
                    $ref: "#/components/schemas/Media"
        400: BadRequest
        404: NotFound
        413:
          description: File too large
    """
    try:
        media = media_service.upload_media(
            request.form.get("type"),
            request.form.get("post_id"),
            request.files.get("file"),
        )
    except ApiError as e:
        return jsonify({"error": e.message}), e.status_code

    return jsonify({
        "media_id": media.id,
        "message": "Media uploaded",
        "media": MediaResponseSchema().dump(media),
    }), 201


@media_bp.route("/uploads/<path:filename>", methods=["GET"])
def get_uploaded_file(filename):
    """
    ---
    get:
      tags: [media]
      summary: Download an uploaded file
      parameters: [filename]
      responses:
        200:
          description: File contents
        404: NotFound
    """
    return send_from_directory(current_app.config["MEDIA_UPLOAD_DIR"], filename)
