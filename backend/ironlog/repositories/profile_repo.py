from __future__ import annotations
from ironlog.models import Profile
from ironlog.repositories.base import BaseRepository

def initials_for(username: str) -> str:
    parts = [p for p in username.replace("_", " ").split() if p]
    if len(parts) >= 2:
        return (parts[0][0] + parts[1][0]).upper()
    return username[:2].upper()

class ProfileRepository(BaseRepository[Profile]):
    model = Profile

    def get_or_create(self, user_id: str, *, username: str, bio: str = "") -> Profile:
        profile = self.get(user_id)
        if profile:
            return profile
        return self.add_and_commit(
            Profile(id=user_id, username=username, initials=initials_for(username), bio=bio)
        )
