from social_api.db import db
from social_api.models.reaction_model import Reaction


def upsert_reaction(post_id, user_id, reaction_type):
    """Store the user's reaction on a post, replacing any previous one.

    Returns the reaction type it replaced, or None.
    """
    reactions = db.reactions
    key = (post_id, user_id)
    with reactions.lock:
        previous = reactions.get(key)
        reactions.put(
            key,
            Reaction(post_id=post_id, user_id=user_id, reaction_type=reaction_type),
        )
    return previous.reaction_type if previous else None


def get_reaction(post_id, user_id):
    return db.reactions.get((post_id, user_id))


def get_reactions_by_post(post_id):
    return db.reactions.filter(lambda reaction: reaction.post_id == post_id)


def count_by_post(post_id) -> int:
    return len(get_reactions_by_post(post_id))


def delete_reaction(post_id, user_id) -> bool:
    return db.reactions.delete((post_id, user_id))
