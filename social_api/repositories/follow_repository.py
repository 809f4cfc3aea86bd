from social_api.db import db


def is_following(follower_id: int, following_id: int) -> bool:
    return db.follows.is_following(follower_id, following_id)


def create_follow(follower_id: int, following_id: int) -> bool:
    return db.follows.add_edge(follower_id, following_id)


def delete_follow(follower_id: int, following_id: int) -> bool:
    return db.follows.remove_edge(follower_id, following_id)


def get_follower_ids(user_id: int):
    return db.follows.followers_of(user_id)


def get_following_ids(user_id: int):
    return db.follows.following_of(user_id)


def count_followers(user_id: int) -> int:
    return len(get_follower_ids(user_id))


def count_following(user_id: int) -> int:
    return len(get_following_ids(user_id))
