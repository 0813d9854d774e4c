# ironlog/repositories/base.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")  # SQLAlchemy model type

@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    limit: int | None
    offset: int

def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, pk) -> T | None:
        return self.db.get(self.model, pk)

    def page_from_stmt(self, stmt, *, limit: int | None = None, offset: int = 0) -> Page[T]:
        if limit is not None:
            stmt = stmt.limit(limit)
        items = list(self.db.execute(stmt.offset(offset)).scalars().all())
        return Page(items=items, limit=limit, offset=offset)

    def add_and_commit(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity
