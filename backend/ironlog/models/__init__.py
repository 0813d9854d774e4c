from ironlog.models.profile import Profile
from ironlog.models.workout import Workout
from ironlog.models.post import Post
from ironlog.models.comment import Comment
from ironlog.models.personal_record import PersonalRecord
from ironlog.models.template import Template

__all__ = ["Profile", "Workout", "Post", "Comment", "PersonalRecord", "Template"]
