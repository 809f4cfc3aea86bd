from datetime import datetime, timezone

from flask import current_app, request


def paginate(items, offset: int, limit: int):
    """Return ``(page, total)`` for ``items[offset:offset + limit]``.

    ``total`` is always the size of the full collection, also when the
    offset points past its end.
    """
    items = list(items)
    total = len(items)
    offset = max(offset, 0)
    limit = max(limit, 0)

    if offset >= total:
        return [], total
    return items[offset:offset + limit], total


def _query_int(name: str):
    # type=int makes Flask return the default for non-numeric values
    return request.args.get(name, default=None, type=int)


def parse_offset() -> int:
    offset = _query_int("offset")
    if offset is None or offset < 0:
        return 0
    return offset


def parse_limit() -> int:
    default = current_app.config.get("DEFAULT_PAGE_LIMIT", 10)
    max_limit = current_app.config.get("MAX_PAGE_LIMIT", 100)

    limit = _query_int("limit")
    if limit is None or limit <= 0:
        return default
    if limit > max_limit:
        return max_limit
    return limit


def page_payload(key: str, page, total: int, offset: int, limit: int) -> dict:
    return {
        key: page,
        "total": total,
        "offset": offset,
        "limit": limit,
    }


def to_unix(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def parse_before_cursor():
    """Read the ``before`` feed cursor; absent or invalid means "now"."""
    before = _query_int("before")
    if before is None:
        return to_unix(datetime.now(timezone.utc)) + 1
    return before


def apply_feed_cursor(posts, before: int, limit: int):
    """Newest-first posts created strictly before ``before``.

    Returns ``(page, next_cursor)`` where ``next_cursor`` is the Unix time of
    the last returned post, or ``""`` when nothing was returned.
    """
    ordered = sorted(posts, key=lambda post: post.created_at, reverse=True)
    page = [
        post for post in ordered
        if to_unix(post.created_at) < before
    ][:max(limit, 0)]

    next_cursor = str(to_unix(page[-1].created_at)) if page else ""
    return page, next_cursor
