from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class SubmissionOutcome(str, Enum):
    INVALID_PAYLOAD = "invalid_payload"
    ALREADY_ANSWERED = "already_answered"
    INVALID_TEAM = "invalid_team"
    INCORRECT_ANSWER = "incorrect_answer"
    SELECTED = "selected"
    SLOTS_FILLED = "slots_filled"


class SubmissionIn(BaseModel):
    team_id: StrictInt = Field(alias="teamId")
    answer: StrictStr


class SubmissionResultOut(BaseModel):
    outcome: SubmissionOutcome
    message: str


class SubmissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    team_id: int = Field(serialization_alias="teamId")
    answer: str
    is_correct: bool = Field(serialization_alias="isCorrect")
    created_at: datetime = Field(serialization_alias="createdAt")


class ResetOut(BaseModel):
    message: str
    deleted: int
