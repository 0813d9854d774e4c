from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Float
from ironlog.db import Base

class PersonalRecord(Base):
    __tablename__ = "personal_records"
    # normalized exercise name
    exercise: Mapped[str] = mapped_column(String(120), primary_key=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
