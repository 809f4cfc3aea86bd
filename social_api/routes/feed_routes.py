from flask import Blueprint, jsonify

from social_api.extensions.identity import current_user_id
from social_api.pagination import parse_before_cursor, parse_limit
from social_api.schemas.post_schema import FeedItemSchema
from social_api.services import feed_service


feed_bp = Blueprint("feeds", __name__)


@feed_bp.route("/feeds", methods=["GET"])
def get_news_feed():
    """Newest posts first, paged with a ``before`` Unix-time cursor.
    ---
    get:
      tags: [feeds]
      parameters:
        - in: query
          name: before
          schema: {type: integer}
          description: Only posts created strictly before this Unix time
        - limit
      responses:
        200:
          description: A page of feed items and the cursor of the next page
          content:
            application/json:
              schema: Feed
    """
    before = parse_before_cursor()
    limit = parse_limit()

    feed = feed_service.get_news_feed(current_user_id(), before, limit)
    return jsonify({
        "feeds": FeedItemSchema(many=True).dump(feed["feeds"]),
        "next_cursor": feed["next_cursor"],
    }), 200
