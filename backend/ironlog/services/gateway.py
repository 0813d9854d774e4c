from typing import Protocol

from ironlog.schemas.post import PostRecord
from ironlog.schemas.profile import ProfileRecord
from ironlog.schemas.template import TemplateRecord
from ironlog.schemas.workout import WorkoutRecord


class Gateway(Protocol):
    """
    Storage boundary the session core reads from and writes to.

    Reads never raise: unreadable storage comes back as empty/default values.
    Writes return False when they could not be applied.
    """

    def get_user_profile(self) -> ProfileRecord: ...

    def get_workout_history(self, *, limit: int | None = None, offset: int = 0) -> list[WorkoutRecord]: ...

    def get_workout(self, workout_id: str) -> WorkoutRecord | None: ...

    def get_pr_table(self) -> dict[str, float]: ...

    def get_templates(self) -> list[TemplateRecord]: ...

    def get_template(self, template_id: str) -> TemplateRecord | None: ...

    def get_posts(self, *, limit: int | None = None, offset: int = 0) -> list[PostRecord]: ...

    def get_post(self, post_id: str) -> PostRecord | None: ...

    def append_workout(self, workout: WorkoutRecord) -> bool: ...

    def append_post(self, post: PostRecord) -> bool: ...

    def save_post(self, post: PostRecord) -> bool: ...

    def save_pr_table(self, prs: dict[str, float]) -> bool: ...

    def upsert_template(self, template: TemplateRecord) -> bool: ...

    def delete_template(self, template_id: str) -> bool: ...
