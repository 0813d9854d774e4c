from __future__ import annotations
from sqlalchemy import select
from ironlog.models import PersonalRecord
from ironlog.repositories.base import BaseRepository

class PersonalRecordRepository(BaseRepository[PersonalRecord]):
    model = PersonalRecord

    def table(self) -> dict[str, float]:
        rows = self.db.execute(select(PersonalRecord)).scalars().all()
        return {r.exercise: r.weight for r in rows}

    def replace(self, prs: dict[str, float]) -> None:
        """Make the stored table equal to ``prs`` in one commit."""
        existing = {r.exercise: r for r in self.db.execute(select(PersonalRecord)).scalars().all()}
        for key, row in existing.items():
            if key not in prs:
                self.db.delete(row)
        for key, weight in prs.items():
            if key in existing:
                existing[key].weight = float(weight)
            else:
                self.db.add(PersonalRecord(exercise=key, weight=float(weight)))
        self.db.commit()
