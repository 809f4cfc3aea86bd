from social_api.errors import ForbiddenError, NotFoundError


def require_found(record, message):
    if record is None:
        raise NotFoundError(message)
    return record


def require_owner(record, owner_id, user_id, not_found_message):
    """Existence first, then ownership: a missing record is never Forbidden."""
    require_found(record, not_found_message)
    if owner_id != user_id:
        raise ForbiddenError("Forbidden")
    return record
