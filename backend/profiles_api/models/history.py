from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone

class HistoryEntry(SQLModel, table=True):
    """One field transition on a profile. Rows are only ever inserted."""

    __tablename__ = "user_histories"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")

    changed_field: str = Field(max_length=50)
    old_value: Optional[str] = None
    new_value: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), sa_type=DateTime(timezone=True))
