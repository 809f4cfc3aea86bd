import logging

from social_api.errors import BadRequestError, NotFoundError
from social_api.repositories import account_repository, post_repository
from social_api.repositories import reaction_repository
from social_api.services import notification_service
from social_api.services.access import require_found


logger = logging.getLogger(__name__)


def react(user_id: int, post_id: int, reaction_type):
    if not isinstance(reaction_type, str) or not reaction_type.strip():
        raise BadRequestError("Invalid reaction type")

    post = require_found(post_repository.get_by_id(post_id), "Post not found")
    reaction_type = reaction_type.strip()

    previous = reaction_repository.upsert_reaction(post_id, user_id, reaction_type)
    if previous == reaction_type:
        return

    logger.info(
        "User %s reacted %r to post %s (was %r)",
        user_id, reaction_type, post_id, previous,
    )
    if previous is None:
        notification_service.notify(post.author_id, "reaction", user_id, post_id)


def get_reactions(post_id: int):
    require_found(post_repository.get_by_id(post_id), "Post not found")

    reactions = sorted(
        reaction_repository.get_reactions_by_post(post_id),
        key=lambda reaction: reaction.created_at,
    )
    count = len(reactions)
    return {
        "count": count,
        "types": sorted({reaction.reaction_type for reaction in reactions}),
        "users": [
            {
                "user_id": reaction.user_id,
                "username": account_repository.display_name(reaction.user_id),
                "reaction_type": reaction.reaction_type,
            }
            for reaction in reactions
        ],
        "total": count,
    }


def remove_reaction(user_id: int, post_id: int):
    if not reaction_repository.delete_reaction(post_id, user_id):
        raise NotFoundError("Reaction not found")
    logger.info("User %s removed reaction from post %s", user_id, post_id)
