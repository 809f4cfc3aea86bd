from dataclasses import replace

from social_api.db import db
from social_api.models.account_model import Account


def get_by_id(user_id, include_deleted=False):
    return db.accounts.get(user_id, include_deleted=include_deleted)


def get_by_username(username: str, include_deleted=False):
    return db.accounts.find_by(
        "username", (username or "").strip().lower(), include_deleted=include_deleted
    )


def get_by_email(email: str, include_deleted=False):
    return db.accounts.find_by(
        "email", (email or "").strip().lower(), include_deleted=include_deleted
    )


def get_by_login(login: str):
    return get_by_username(login) or get_by_email(login)


def create_account(username, email, password_hash):
    accounts = db.accounts
    with accounts.lock:
        account = Account(
            id=accounts.allocate_id(),
            username=username,
            email=email,
            password_hash=password_hash,
        )
        accounts.put(account.id, account)
    return account


def update_account(account, **changes):
    """Replace the stored account with an updated copy.

    The copy is taken from the stored record under the store lock, so
    concurrent updates are not lost. Returns ``None`` when the account was
    deleted in the meantime. Username and email indexes are rewritten in the
    same locked write; ``DuplicateKeyError`` is raised when the new username
    or email belongs to another account.
    """
    accounts = db.accounts
    with accounts.lock:
        stored = accounts.get(account.id)
        if stored is None:
            return None
        updated = replace(stored, **changes)
        return accounts.put(account.id, updated)


def list_accounts():
    return db.accounts.list()


def soft_delete(user_id):
    return db.accounts.delete(user_id)


def display_name(user_id) -> str:
    account = get_by_id(user_id)
    return account.username if account else f"user{user_id}"
