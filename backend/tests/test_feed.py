from datetime import datetime, timezone

from ironlog.schemas.post import PostRecord
from ironlog.schemas.profile import ProfileRecord
from ironlog.services.feed import add_comment, toggle_like

ME = ProfileRecord(id="user_1", username="IRONUSER", initials="IR")
WHEN = datetime(2026, 10, 14, 19, 0, tzinfo=timezone.utc)


def seed_post(gateway, post_id="p1"):
    post = PostRecord(id=post_id, user_id="user_1", username="IRONUSER", initials="IR",
                      session_name="Push", total_volume=500, created_at=WHEN)
    assert gateway.append_post(post)
    return post


def test_like_then_unlike(gateway):
    seed_post(gateway)
    liked = toggle_like(gateway, "p1", "user_1")
    assert liked.likes == 1 and liked.liked_by == ["user_1"]
    assert gateway.get_post("p1").likes == 1

    unliked = toggle_like(gateway, "p1", "user_1")
    assert unliked.likes == 0 and unliked.liked_by == []
    assert gateway.get_post("p1").liked_by == []

def test_likes_from_different_users_add_up(gateway):
    seed_post(gateway)
    toggle_like(gateway, "p1", "user_1")
    post = toggle_like(gateway, "p1", "user_2")
    assert post.likes == 2

def test_like_missing_post(gateway):
    assert toggle_like(gateway, "nope", "user_1") is None

def test_comment_is_appended_and_stored(gateway):
    seed_post(gateway)
    post = add_comment(gateway, "p1", ME, "  nice lift  ", now=WHEN)
    assert [c.text for c in post.comments] == ["nice lift"]
    add_comment(gateway, "p1", ME, "again", now=WHEN)
    stored = gateway.get_post("p1")
    assert [c.text for c in stored.comments] == ["nice lift", "again"]
    assert stored.comments[0].initials == "IR"

def test_blank_comment_is_ignored(gateway):
    seed_post(gateway)
    assert add_comment(gateway, "p1", ME, "   ") is None
    assert gateway.get_post("p1").comments == []

def test_comment_on_missing_post(gateway):
    assert add_comment(gateway, "nope", ME, "hello") is None
