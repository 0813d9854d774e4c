from __future__ import annotations
from sqlalchemy import select
from ironlog.models import Workout
from ironlog.repositories.base import BaseRepository, Page
from ironlog.schemas.workout import WorkoutRecord

class WorkoutRepository(BaseRepository[Workout]):
    model = Workout

    def list_recent(self, *, limit: int | None = None, offset: int = 0) -> Page[Workout]:
        stmt = select(Workout).order_by(Workout.date.desc(), Workout.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def create(self, record: WorkoutRecord) -> Workout:
        data = record.model_dump(mode="json")
        data["date"] = record.date
        return self.add_and_commit(Workout(**data))
