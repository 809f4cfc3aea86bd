from social_api.db import db
from social_api.models.comment_model import Comment
from social_api.models.post_model import utcnow


def create_comment(author_id, post_id, content):
    comments = db.comments
    with comments.lock:
        comment = Comment(
            id=comments.allocate_id(),
            post_id=post_id,
            author_id=author_id,
            content=content,
        )
        comments.put(comment.id, comment)
    return comment


def get_by_id(comment_id):
    return db.comments.get(comment_id)


def get_comments_by_post(post_id):
    # insertion order is id order
    return db.comments.filter(lambda comment: comment.post_id == post_id)


def count_by_post(post_id) -> int:
    return len(get_comments_by_post(post_id))


def update_content(comment, content):
    with db.comments.lock:
        comment.content = content
        comment.updated_at = utcnow()
    return comment


def soft_delete(comment_id):
    return db.comments.delete(comment_id)
