"""Current-user resolution.

Routes never read the acting user from a constant: they call
:func:`current_user_id`, which defers to the resolver installed on the app.
"""
from flask import current_app
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from social_api.errors import UnauthorizedError


EXTENSION_NAME = "social_api.identity"


def fixed_identity():
    return current_app.config["DEFAULT_USER_ID"]


def jwt_identity():
    """Identity from a bearer token, or the default user when none is sent."""
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as e:
        raise UnauthorizedError("Invalid token") from e

    identity = get_jwt_identity()
    if identity is None:
        return fixed_identity()

    try:
        return int(identity)
    except (TypeError, ValueError) as e:
        raise UnauthorizedError("Invalid token") from e


RESOLVERS = {
    "fixed": fixed_identity,
    "jwt": jwt_identity,
}


def init_app(app):
    name = app.config.get("IDENTITY_RESOLVER", "fixed")
    if name not in RESOLVERS:
        raise ValueError(f"Unknown identity resolver: {name}")
    set_identity_resolver(app, RESOLVERS[name])


def set_identity_resolver(app, resolver):
    app.extensions[EXTENSION_NAME] = resolver


def current_user_id() -> int:
    return current_app.extensions[EXTENSION_NAME]()
