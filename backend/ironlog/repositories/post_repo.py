from __future__ import annotations
from sqlalchemy import select
from ironlog.models import Comment, Post
from ironlog.repositories.base import BaseRepository, Page
from ironlog.schemas.post import PostRecord

class PostRepository(BaseRepository[Post]):
    model = Post

    def list_recent(self, *, limit: int | None = None, offset: int = 0) -> Page[Post]:
        stmt = select(Post).order_by(Post.created_at.desc(), Post.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def create(self, record: PostRecord) -> Post:
        data = record.model_dump(mode="json", exclude={"comments"})
        data["created_at"] = record.created_at
        post = Post(**data)
        post.comments = [self._comment(c) for c in record.comments]
        return self.add_and_commit(post)

    def update_social(self, record: PostRecord) -> Post | None:
        """Write back likes and append comments the stored post does not have yet."""
        post = self.get(record.id)
        if not post:
            return None
        post.likes = record.likes
        post.liked_by = list(record.liked_by)
        for c in record.comments[len(post.comments):]:
            post.comments.append(self._comment(c))
        self.db.commit()
        self.db.refresh(post)
        return post

    @staticmethod
    def _comment(c) -> Comment:
        kwargs = {"username": c.username, "initials": c.initials, "text": c.text}
        if c.created_at is not None:
            kwargs["created_at"] = c.created_at
        return Comment(**kwargs)
