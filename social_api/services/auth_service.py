import logging

from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash

from social_api.db import DuplicateKeyError
from social_api.errors import BadRequestError, ForbiddenError, UnauthorizedError
from social_api.repositories import account_repository
from social_api.services.profile_service import get_current_account


logger = logging.getLogger(__name__)


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def _issue_token(account):
    return create_access_token(identity=str(account.id))


def register(username, email, password):
    if (
        not _require_non_empty_string(username)
        or not _require_non_empty_string(email)
        or not _require_non_empty_string(password)
    ):
        raise BadRequestError("Invalid data")

    username = username.strip()
    email = email.strip()

    if account_repository.get_by_username(username, include_deleted=True):
        raise BadRequestError("Username already exists")
    if account_repository.get_by_email(email, include_deleted=True):
        raise BadRequestError("Email already exists")

    try:
        account = account_repository.create_account(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
        )
    except DuplicateKeyError as e:
        if e.index == "email":
            raise BadRequestError("Email already exists")
        raise BadRequestError("Username already exists")

    logger.info("Registered user %s (%s)", account.id, username)
    return {
        "user_id": account.id,
        "token": _issue_token(account),
    }


def login(login_name, password):
    if not _require_non_empty_string(login_name) or not _require_non_empty_string(password):
        raise UnauthorizedError("Invalid credentials")

    account = account_repository.get_by_login(login_name)
    if not account or not check_password_hash(account.password_hash, password):
        logger.debug("Rejected login for %r", login_name)
        raise UnauthorizedError("Invalid credentials")

    return {"token": _issue_token(account)}


def change_password(current_id, old_password, new_password):
    account = get_current_account(current_id)

    if not isinstance(old_password, str) or not check_password_hash(
        account.password_hash, old_password
    ):
        raise ForbiddenError("Invalid old password")

    if not _require_non_empty_string(new_password):
        raise BadRequestError("Invalid data")

    updated = account_repository.update_account(
        account, password_hash=generate_password_hash(new_password)
    )
    if updated is None:
        raise UnauthorizedError("Unauthorized")
    logger.info("User %s changed password", current_id)


def delete_account(current_id):
    get_current_account(current_id)
    account_repository.soft_delete(current_id)
    logger.info("User %s soft deleted their account", current_id)
