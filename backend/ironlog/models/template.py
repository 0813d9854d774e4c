from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, JSON, DateTime, func
from ironlog.db import Base

class Template(Base):
    __tablename__ = "templates"
    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(60), nullable=False, server_default="")
    rest_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=90)
    exercises: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
