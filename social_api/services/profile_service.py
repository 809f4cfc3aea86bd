import logging

from social_api.db import DuplicateKeyError
from social_api.errors import BadRequestError, ForbiddenError, NotFoundError
from social_api.errors import UnauthorizedError
from social_api.pagination import paginate
from social_api.repositories import account_repository


logger = logging.getLogger(__name__)


SORT_KEYS = {
    "id": lambda account: account.id,
    "username": lambda account: account.username.lower(),
    "created_at": lambda account: account.created_at,
}


def _parse_user_id(raw_user_id):
    try:
        return int(raw_user_id)
    except (TypeError, ValueError):
        raise BadRequestError("Invalid user ID")


def get_current_account(user_id):
    account = account_repository.get_by_id(user_id)
    if account is None:
        raise UnauthorizedError("Unauthorized")
    return account


def get_profile(current_id, raw_user_id):
    user_id = _parse_user_id(raw_user_id)

    account = account_repository.get_by_id(user_id)
    if account is None:
        raise NotFoundError("User not found")

    if account.is_private and account.id != current_id:
        raise ForbiddenError("Private profile")

    return account


def update_profile(current_id, username=None, bio=None, avatar=None, is_private=None):
    account = get_current_account(current_id)

    changes = {}
    for name, value in (("username", username), ("bio", bio), ("avatar", avatar)):
        if value is None:
            continue
        if not isinstance(value, str):
            raise BadRequestError("Invalid data")
        # empty strings leave the field untouched
        if value.strip():
            changes[name] = value.strip()

    if is_private is not None:
        if not isinstance(is_private, bool):
            raise BadRequestError("Invalid data")
        changes["is_private"] = is_private

    if not changes:
        return account

    try:
        updated = account_repository.update_account(account, **changes)
    except DuplicateKeyError:
        raise BadRequestError("Username already exists")
    if updated is None:
        raise UnauthorizedError("Unauthorized")

    logger.info("User %s updated profile fields %s", current_id, sorted(changes))
    return updated


def search_users(search, offset, limit, sort=None):
    sort = (sort or "id").strip()
    descending = sort.startswith("-")
    sort_field = sort.lstrip("-")
    if sort_field not in SORT_KEYS:
        raise BadRequestError("Invalid sort field")

    query = (search or "").strip().lower()
    accounts = [
        account for account in account_repository.list_accounts()
        if not query or query in account.username.lower()
    ]
    accounts.sort(key=SORT_KEYS[sort_field], reverse=descending)

    return paginate(accounts, offset, limit)
