from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, Integer, Float, JSON
from ironlog.db import Base

class Post(Base):
    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    username: Mapped[str] = mapped_column(String(60), nullable=False)
    initials: Mapped[str] = mapped_column(String(4), nullable=False, server_default="")
    session_name: Mapped[str] = mapped_column(String(120), nullable=False)
    type: Mapped[str] = mapped_column(String(60), nullable=False, server_default="")
    total_volume: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exercise_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exercises: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    prs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    liked_by: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)

    comments = relationship(
        "Comment", back_populates="post", cascade="all, delete-orphan",
        order_by="Comment.id", lazy="selectin",
    )
