"""OpenAPI description of the HTTP API.

Operations are read from the YAML block after ``---`` in each view
docstring. Component names used there (``Post``, ``NotFound``, ``post_id``
...) are registered by :func:`build_spec`.
"""
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from apispec_webframeworks.flask import FlaskPlugin

from social_api.schemas.comment_schema import CommentResponseSchema
from social_api.schemas.media_schema import MediaResponseSchema
from social_api.schemas.notification_schema import NotificationResponseSchema
from social_api.schemas.post_schema import FeedItemSchema, PostResponseSchema
from social_api.schemas.profile_schema import FollowUserSchema, ProfileResponseSchema
from social_api.schemas.profile_schema import UserSummarySchema


SCHEMAS = {
    "Post": PostResponseSchema,
    "FeedItem": FeedItemSchema,
    "Comment": CommentResponseSchema,
    "Media": MediaResponseSchema,
    "Notification": NotificationResponseSchema,
    "UserSummary": UserSummarySchema,
    "Profile": ProfileResponseSchema,
    "FollowUser": FollowUserSchema,
}

# page component -> (list key, item component)
PAGES = {
    "PostPage": ("posts", "Post"),
    "CommentPage": ("comments", "Comment"),
    "NotificationPage": ("notifications", "Notification"),
    "FollowerPage": ("followers", "FollowUser"),
    "FollowingPage": ("following", "FollowUser"),
    "UserPage": ("users", "UserSummary"),
}

PATH_PARAMETERS = {
    "post_id": "integer",
    "user_id": "integer",
    "target_user_id": "integer",
    "comment_id": "integer",
    "notification_id": "integer",
    "filename": "string",
}

ERROR_RESPONSES = {
    "BadRequest": "Invalid input",
    "Unauthorized": "No current account, or an invalid bearer token",
    "Forbidden": "The current user may not do this",
    "NotFound": "Resource not found",
}

# endpoints that are not part of the documented API
UNDOCUMENTED_BLUEPRINTS = ("docs",)


def _ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


def _object(**properties):
    return {"type": "object", "properties": properties}


def _register_components(spec):
    for name, schema in SCHEMAS.items():
        spec.components.schema(name, schema=schema)

    string = {"type": "string"}
    integer = {"type": "integer"}

    spec.components.schema("Error", _object(error=string))
    spec.components.schema("Message", _object(message=string))
    spec.components.schema("Token", _object(token=string))
    spec.components.schema("Registered", _object(user_id=integer, token=string))

    for name, (key, item) in PAGES.items():
        spec.components.schema(name, _object(**{
            key: {"type": "array", "items": _ref(item)},
            "total": integer,
            "offset": integer,
            "limit": integer,
        }))

    spec.components.schema("Feed", _object(
        feeds={"type": "array", "items": _ref("FeedItem")},
        next_cursor=string,
    ))
    spec.components.schema("ReactionSummary", _object(
        count=integer,
        types={"type": "array", "items": string},
        users={
            "type": "array",
            "items": _object(user_id=integer, username=string, reaction_type=string),
        },
        total=integer,
    ))

    for name, kind in PATH_PARAMETERS.items():
        spec.components.parameter(name, "path", {"schema": {"type": kind}})
    spec.components.parameter("offset", "query", {
        "schema": {"type": "integer", "minimum": 0, "default": 0},
    })
    spec.components.parameter("limit", "query", {
        "schema": {"type": "integer", "minimum": 1},
        "description": "Page size; invalid values fall back to the default",
    })

    for name, description in ERROR_RESPONSES.items():
        spec.components.response(name, {
            "description": description,
            "content": {"application/json": {"schema": _ref("Error")}},
        })


def build_spec(app) -> APISpec:
    """Collect every documented view of ``app`` into an :class:`APISpec`."""
    spec = APISpec(
        title=app.config["API_TITLE"],
        version=app.config["API_VERSION"],
        openapi_version=app.config["OPENAPI_VERSION"],
        plugins=[FlaskPlugin(), MarshmallowPlugin()],
    )
    _register_components(spec)

    for endpoint, view in app.view_functions.items():
        blueprint = endpoint.rpartition(".")[0]
        if endpoint == "static" or blueprint in UNDOCUMENTED_BLUEPRINTS:
            continue
        spec.path(view=view, app=app)

    return spec
