from social_api.db import db
from social_api.models.post_model import Post, utcnow


def create_post(author_id, content, media_ids=None, created_at=None):
    posts = db.posts
    with posts.lock:
        post = Post(
            id=posts.allocate_id(),
            author_id=author_id,
            content=content,
            media_ids=list(media_ids or []),
        )
        if created_at is not None:
            post.created_at = created_at
            post.updated_at = created_at
        posts.put(post.id, post)
    return post


def get_by_id(post_id):
    return db.posts.get(post_id)


def get_by_author(author_id):
    posts = db.posts.filter(lambda post: post.author_id == author_id)
    return sorted(posts, key=lambda post: post.created_at, reverse=True)


def get_visible_posts():
    return db.posts.list()


def update_post(post, content=None, media_ids=None):
    with db.posts.lock:
        if content is not None:
            post.content = content
        if media_ids is not None:
            post.media_ids = list(media_ids)
        post.updated_at = utcnow()
    return post


def attach_media(post_id, media_id):
    with db.posts.lock:
        post = db.posts.get(post_id)
        if post is None:
            return None
        post.media_ids.append(media_id)
        return post


def soft_delete(post_id):
    return db.posts.delete(post_id)
