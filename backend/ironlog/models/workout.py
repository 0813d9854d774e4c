from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, Integer, Float, JSON
from ironlog.db import Base

class Workout(Base):
    __tablename__ = "workouts"

    id: Mapped[str] = mapped_column(String(40), primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    type: Mapped[str] = mapped_column(String(60), nullable=False, server_default="")
    date: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exercises: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    total_volume: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    effective_volume: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    total_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exercise_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    series_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rest_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    skipped_rest_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    companion_wait_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    prs: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
