import logging
from collections.abc import Collection
from dataclasses import dataclass

from hunt.core.config import Settings
from hunt.models.submission import TEAM_ID_MAX, TEAM_ID_MIN
from hunt.schemas.submission import SubmissionOutcome
from hunt.services.submission_store import DuplicateConflict, SubmissionStore

logger = logging.getLogger(__name__)

MESSAGES = {
    SubmissionOutcome.INVALID_PAYLOAD: "Invalid payload",
    SubmissionOutcome.ALREADY_ANSWERED: "You have already answered correctly. Good luck in next rounds!",
    SubmissionOutcome.INVALID_TEAM: "Invalid teamId",
    SubmissionOutcome.INCORRECT_ANSWER: "Incorrect answer, please try again.",
    SubmissionOutcome.SELECTED: "Congratulations! You have been selected for the next rounds.",
    SubmissionOutcome.SLOTS_FILLED: "Good job! Your answer is correct but selection slots are filled.",
}

STATUS_CODES = {
    SubmissionOutcome.INVALID_PAYLOAD: 400,
    SubmissionOutcome.ALREADY_ANSWERED: 409,
    SubmissionOutcome.INVALID_TEAM: 400,
    SubmissionOutcome.INCORRECT_ANSWER: 200,
    SubmissionOutcome.SELECTED: 200,
    SubmissionOutcome.SLOTS_FILLED: 200,
}


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    message: str

    @classmethod
    def of(cls, outcome: SubmissionOutcome) -> "SubmissionResult":
        return cls(outcome=outcome, message=MESSAGES[outcome])

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.outcome]


def is_on_roster(team_id: int, roster: Collection[int]) -> bool:
    return team_id in roster


def answers_match(submitted: str, expected: str) -> bool:
    return submitted.strip().casefold() == expected.strip().casefold()


class QualificationEngine:
    """Decides the outcome of one submission attempt.

    Order of checks: payload shape, existing correct answer, roster, answer.
    Only a correct answer from an eligible team writes to the store, and the
    team is selected when fewer than ``qualification_slots`` correct rows
    precede its own.
    """

    def __init__(self, settings: Settings, store: SubmissionStore):
        self.settings = settings
        self.store = store

    def submit(self, team_id, answer) -> SubmissionResult:
        # bool is an int subclass
        if not isinstance(team_id, int) or isinstance(team_id, bool) or not isinstance(answer, str):
            return SubmissionResult.of(SubmissionOutcome.INVALID_PAYLOAD)

        # no row can exist for an id the column cannot hold
        storable = TEAM_ID_MIN <= team_id <= TEAM_ID_MAX

        # fast path only; the UNIQUE constraint decides races
        if storable and self.store.find_correct(team_id) is not None:
            return SubmissionResult.of(SubmissionOutcome.ALREADY_ANSWERED)

        if not storable or not is_on_roster(team_id, self.settings.team_ids):
            return SubmissionResult.of(SubmissionOutcome.INVALID_TEAM)

        if not answers_match(answer, self.settings.answer):
            return SubmissionResult.of(SubmissionOutcome.INCORRECT_ANSWER)

        result = self.store.insert_correct(team_id, answer)
        if isinstance(result, DuplicateConflict):
            return SubmissionResult.of(SubmissionOutcome.ALREADY_ANSWERED)

        prior = self.store.count_correct_before(result.submission)
        if prior < self.settings.qualification_slots:
            logger.info("Team %s selected (rank %d)", team_id, prior + 1)
            return SubmissionResult.of(SubmissionOutcome.SELECTED)

        logger.info("Team %s answered correctly after slots filled (rank %d)", team_id, prior + 1)
        return SubmissionResult.of(SubmissionOutcome.SLOTS_FILLED)
