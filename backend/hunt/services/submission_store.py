import logging
from dataclasses import dataclass

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hunt.models import Submission

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The database could not complete an operation."""


@dataclass(frozen=True)
class Inserted:
    submission: Submission


@dataclass(frozen=True)
class DuplicateConflict:
    team_id: int


InsertResult = Inserted | DuplicateConflict


class SubmissionStore:
    """Persistence for correct submissions, one row per team.

    The UNIQUE constraint on ``team_id`` is the authoritative duplicate guard.
    A violation on insert is returned as ``DuplicateConflict``; every other
    database failure is raised as ``StorageError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_correct(self, team_id: int) -> Submission | None:
        stmt = select(Submission).where(
            Submission.team_id == team_id, Submission.is_correct.is_(True)
        )
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise StorageError("failed to look up submission") from e

    def insert_correct(self, team_id: int, answer: str) -> InsertResult:
        sub = Submission(team_id=team_id, answer=answer, is_correct=True)
        self.db.add(sub)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Duplicate correct submission rejected by storage for team %s", team_id)
            return DuplicateConflict(team_id=team_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("failed to insert submission") from e
        return Inserted(submission=sub)

    def count_correct_before(self, sub: Submission) -> int:
        """Number of correct rows ordered strictly before ``sub``."""
        stmt = select(func.count(Submission.id)).where(
            Submission.is_correct.is_(True),
            or_(
                Submission.created_at < sub.created_at,
                and_(Submission.created_at == sub.created_at, Submission.id < sub.id),
            ),
        )
        try:
            return self.db.scalar(stmt) or 0
        except SQLAlchemyError as e:
            raise StorageError("failed to count submissions") from e

    def list_all(self) -> list[Submission]:
        stmt = select(Submission).order_by(Submission.created_at.asc(), Submission.id.asc())
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise StorageError("failed to list submissions") from e

    def reset(self) -> int:
        try:
            result = self.db.execute(delete(Submission))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError("failed to reset submissions") from e
        return result.rowcount
