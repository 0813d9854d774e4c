"""
SQLAlchemy-backed persistence gateway.

Each call runs in its own short-lived session. Storage errors never reach the
session core: reads fall back to empty values and writes report False.
"""
from __future__ import annotations
import logging
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ironlog.models import Post, Template, Workout
from ironlog.repositories.base import as_utc
from ironlog.repositories.post_repo import PostRepository
from ironlog.repositories.pr_repo import PersonalRecordRepository
from ironlog.repositories.profile_repo import ProfileRepository, initials_for
from ironlog.repositories.template_repo import TemplateRepository
from ironlog.repositories.workout_repo import WorkoutRepository
from ironlog.schemas.post import CommentRead, PostRecord
from ironlog.schemas.profile import ProfileRecord
from ironlog.schemas.template import TemplateRecord
from ironlog.schemas.workout import WorkoutRecord
from ironlog.settings import Settings, get_settings

log = logging.getLogger(__name__)


def workout_to_record(row: Workout) -> WorkoutRecord:
    record = WorkoutRecord.model_validate(row)
    return record.model_copy(update={"date": as_utc(row.date)})


def post_to_record(row: Post) -> PostRecord:
    return PostRecord(
        id=row.id,
        user_id=row.user_id,
        username=row.username,
        initials=row.initials,
        session_name=row.session_name,
        type=row.type,
        total_volume=row.total_volume,
        total_sets=row.total_sets,
        duration=row.duration,
        exercise_count=row.exercise_count,
        exercises=row.exercises or [],
        prs=row.prs or [],
        likes=row.likes,
        liked_by=list(row.liked_by or []),
        comments=[
            CommentRead(username=c.username, initials=c.initials, text=c.text,
                        created_at=as_utc(c.created_at))
            for c in row.comments
        ],
        created_at=as_utc(row.created_at),
    )


def template_to_record(row: Template) -> TemplateRecord:
    return TemplateRecord.model_validate(row)


class SqlGateway:
    def __init__(self, session_factory: Callable[[], Session], settings: Settings | None = None):
        self._session_factory = session_factory
        self._settings = settings or get_settings()

    def _default_profile(self) -> ProfileRecord:
        s = self._settings
        return ProfileRecord(id=s.USER_ID, username=s.USERNAME,
                             initials=initials_for(s.USERNAME), bio=s.USER_BIO)

    # READS
    def get_user_profile(self) -> ProfileRecord:
        s = self._settings
        try:
            with self._session_factory() as db:
                row = ProfileRepository(db).get_or_create(s.USER_ID, username=s.USERNAME, bio=s.USER_BIO)
                return ProfileRecord.model_validate(row).model_copy(
                    update={"joined_at": as_utc(row.joined_at)}
                )
        except SQLAlchemyError:
            log.warning("profile unreadable, using defaults", exc_info=True)
            return self._default_profile()

    def get_workout_history(self, *, limit: int | None = None, offset: int = 0) -> list[WorkoutRecord]:
        try:
            with self._session_factory() as db:
                page = WorkoutRepository(db).list_recent(limit=limit, offset=offset)
                return [workout_to_record(w) for w in page.items]
        except SQLAlchemyError:
            log.warning("workout history unreadable", exc_info=True)
            return []

    def get_workout(self, workout_id: str) -> WorkoutRecord | None:
        try:
            with self._session_factory() as db:
                row = WorkoutRepository(db).get(workout_id)
                return workout_to_record(row) if row else None
        except SQLAlchemyError:
            log.warning("workout %s unreadable", workout_id, exc_info=True)
            return None

    def get_pr_table(self) -> dict[str, float]:
        try:
            with self._session_factory() as db:
                return PersonalRecordRepository(db).table()
        except SQLAlchemyError:
            log.warning("PR table unreadable", exc_info=True)
            return {}

    def get_templates(self) -> list[TemplateRecord]:
        try:
            with self._session_factory() as db:
                return [template_to_record(t) for t in TemplateRepository(db).list()]
        except SQLAlchemyError:
            log.warning("templates unreadable", exc_info=True)
            return []

    def get_template(self, template_id: str) -> TemplateRecord | None:
        try:
            with self._session_factory() as db:
                row = TemplateRepository(db).get(template_id)
                return template_to_record(row) if row else None
        except SQLAlchemyError:
            log.warning("template %s unreadable", template_id, exc_info=True)
            return None

    def get_posts(self, *, limit: int | None = None, offset: int = 0) -> list[PostRecord]:
        try:
            with self._session_factory() as db:
                page = PostRepository(db).list_recent(limit=limit, offset=offset)
                return [post_to_record(p) for p in page.items]
        except SQLAlchemyError:
            log.warning("posts unreadable", exc_info=True)
            return []

    def get_post(self, post_id: str) -> PostRecord | None:
        try:
            with self._session_factory() as db:
                row = PostRepository(db).get(post_id)
                return post_to_record(row) if row else None
        except SQLAlchemyError:
            log.warning("post %s unreadable", post_id, exc_info=True)
            return None

    # WRITES
    def _write(self, what: str, fn) -> bool:
        try:
            with self._session_factory() as db:
                try:
                    fn(db)
                except SQLAlchemyError:
                    db.rollback()
                    raise
            return True
        except SQLAlchemyError:
            log.warning("could not write %s", what, exc_info=True)
            return False

    def append_workout(self, workout: WorkoutRecord) -> bool:
        return self._write(f"workout {workout.id}", lambda db: WorkoutRepository(db).create(workout))

    def append_post(self, post: PostRecord) -> bool:
        return self._write(f"post {post.id}", lambda db: PostRepository(db).create(post))

    def save_post(self, post: PostRecord) -> bool:
        return self._write(f"post {post.id}", lambda db: PostRepository(db).update_social(post))

    def save_pr_table(self, prs: dict[str, float]) -> bool:
        return self._write("PR table", lambda db: PersonalRecordRepository(db).replace(prs))

    def upsert_template(self, template: TemplateRecord) -> bool:
        return self._write(f"template {template.id}", lambda db: TemplateRepository(db).upsert(template))

    def delete_template(self, template_id: str) -> bool:
        return self._write(f"template {template_id}", lambda db: TemplateRepository(db).delete(template_id))
