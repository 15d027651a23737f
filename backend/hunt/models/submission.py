from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hunt.core.db import Base


# range of the team_id column on every supported backend
TEAM_ID_MIN = -(2**31)
TEAM_ID_MAX = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Submission(Base):
    """A team's first correct answer. Incorrect attempts are never stored."""

    __tablename__ = "submissions"
    __table_args__ = (UniqueConstraint("team_id", name="uq_submissions_team_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_id: Mapped[int] = mapped_column(Integer, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # assigned in Python so ordering keeps sub-second resolution on every backend
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False, index=True
    )
