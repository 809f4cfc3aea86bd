import logging
import os

from flask import current_app
from werkzeug.utils import secure_filename

from social_api.errors import BadRequestError, MediaStorageError, NotFoundError
from social_api.models.media_model import MEDIA_TYPES
from social_api.repositories import media_repository, post_repository


logger = logging.getLogger(__name__)


def _parse_post_id(raw_post_id):
    try:
        post_id = int(raw_post_id)
    except (TypeError, ValueError):
        raise NotFoundError("Post not found")
    if post_id <= 0:
        raise NotFoundError("Post not found")
    return post_id


def _check_mimetype(media_type: str, mimetype: str):
    major = (mimetype or "").split("/", 1)[0].lower()
    if major in MEDIA_TYPES and major != media_type:
        raise BadRequestError("File does not match media type")


def _store_media_locally(file_storage, media_id: int) -> str:
    filename = secure_filename(getattr(file_storage, "filename", "") or "") or "upload"
    filename = f"{media_id}_{filename}"
    upload_dir = current_app.config["MEDIA_UPLOAD_DIR"]
    os.makedirs(upload_dir, exist_ok=True)

    try:
        file_storage.stream.seek(0)
    except (AttributeError, OSError):
        pass

    file_storage.save(os.path.join(upload_dir, filename))
    return filename


def upload_media(media_type, raw_post_id, file_storage):
    if media_type not in MEDIA_TYPES:
        raise BadRequestError("Invalid media type")

    post_id = _parse_post_id(raw_post_id)

    if file_storage is None or not getattr(file_storage, "filename", ""):
        raise BadRequestError("File is required")

    if post_repository.get_by_id(post_id) is None:
        raise NotFoundError("Post not found")

    mimetype = getattr(file_storage, "mimetype", None) or "application/octet-stream"
    _check_mimetype(media_type, mimetype)

    media_id = media_repository.allocate_media_id()
    try:
        location = _store_media_locally(file_storage, media_id)
    except OSError as e:
        logger.exception("Could not save media %s for post %s", media_id, post_id)
        raise MediaStorageError("Cannot save file") from e

    media = media_repository.add_media(
        media_id=media_id,
        media_type=media_type,
        post_id=post_id,
        location=location,
        mime_type=mimetype,
    )
    post_repository.attach_media(post_id, media.id)

    logger.info("Stored %s media %s for post %s", media_type, media.id, post_id)
    return media


def build_media_url(media) -> str:
    return f"/uploads/{media.location}"


def media_urls_for(media_ids):
    return [build_media_url(media) for media in media_repository.get_by_ids(media_ids)]
