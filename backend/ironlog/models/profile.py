from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, func
from ironlog.db import Base

class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    username: Mapped[str] = mapped_column(String(60), nullable=False)
    initials: Mapped[str] = mapped_column(String(4), nullable=False, server_default="")
    bio: Mapped[str] = mapped_column(String(280), nullable=False, server_default="")
    joined_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
