from datetime import datetime
from pydantic import BaseModel

class ProfileRecord(BaseModel):
    id: str
    username: str
    initials: str = ""
    bio: str = ""
    joined_at: datetime | None = None

    model_config = {"from_attributes": True}
