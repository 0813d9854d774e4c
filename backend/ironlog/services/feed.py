from datetime import datetime, timezone

from ironlog.schemas.post import CommentRead, PostRecord
from ironlog.schemas.profile import ProfileRecord
from ironlog.services.gateway import Gateway


def toggle_like(gateway: Gateway, post_id: str, user_id: str) -> PostRecord | None:
    """Like the post, or take the like back if ``user_id`` already gave one."""
    post = gateway.get_post(post_id)
    if post is None:
        return None
    liked_by = list(post.liked_by)
    if user_id in liked_by:
        liked_by.remove(user_id)
        likes = max(0, post.likes - 1)
    else:
        liked_by.append(user_id)
        likes = post.likes + 1
    updated = post.model_copy(update={"liked_by": liked_by, "likes": likes})
    gateway.save_post(updated)
    return updated


def add_comment(
    gateway: Gateway,
    post_id: str,
    author: ProfileRecord,
    text: str,
    *,
    now: datetime | None = None,
) -> PostRecord | None:
    text = (text or "").strip()
    if not text:
        return None
    post = gateway.get_post(post_id)
    if post is None:
        return None
    comment = CommentRead(
        username=author.username,
        initials=author.initials,
        text=text,
        created_at=now or datetime.now(timezone.utc),
    )
    updated = post.model_copy(update={"comments": [*post.comments, comment]})
    gateway.save_post(updated)
    return updated
