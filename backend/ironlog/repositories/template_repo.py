from __future__ import annotations
from sqlalchemy import select
from ironlog.models import Template
from ironlog.repositories.base import BaseRepository
from ironlog.schemas.template import TemplateRecord

class TemplateRepository(BaseRepository[Template]):
    model = Template

    def list(self) -> list[Template]:
        stmt = select(Template).order_by(Template.name.asc())
        return list(self.db.execute(stmt).scalars().all())

    def upsert(self, record: TemplateRecord) -> Template:
        data = record.model_dump(mode="json")
        tpl = self.get(record.id)
        if tpl is None:
            return self.add_and_commit(Template(**data))
        for key, value in data.items():
            setattr(tpl, key, value)
        self.db.commit()
        self.db.refresh(tpl)
        return tpl

    def delete(self, template_id: str) -> bool:
        tpl = self.get(template_id)
        if not tpl:
            return False
        self.db.delete(tpl)
        self.db.commit()
        return True
