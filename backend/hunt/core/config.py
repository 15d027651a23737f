from functools import lru_cache
from typing import Annotated

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from hunt.models.submission import TEAM_ID_MAX, TEAM_ID_MIN


class Settings(BaseSettings):
    """Process-wide configuration, loaded once at startup and never mutated."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    database_url: str = "sqlite:///./hunt.db"
    answer: str = Field(validation_alias=AliasChoices("answer", "ANSWER", "ANS"))
    admin_secret: str
    team_ids: Annotated[frozenset[int], NoDecode]
    qualification_slots: int = Field(default=4, ge=1)
    cors_origins: Annotated[tuple[str, ...], NoDecode] = ("http://localhost:5173",)
    log_level: str = "INFO"

    @field_validator("answer", "admin_secret")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("team_ids", mode="before")
    @classmethod
    def _parse_team_ids(cls, v):
        # "1,2,3" or "[1, 2, 3]" from the environment, any iterable otherwise
        if isinstance(v, str):
            v = [part for part in v.strip().strip("[]").split(",") if part.strip()]
        ids = frozenset(int(part) for part in v)
        if any(not TEAM_ID_MIN <= i <= TEAM_ID_MAX for i in ids):
            raise ValueError("team ids must fit a 32-bit integer")
        if not ids:
            raise ValueError("roster must contain at least one team id")
        return ids

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_origins(cls, v):
        if isinstance(v, str):
            return tuple(o.strip() for o in v.split(",") if o.strip())
        return tuple(v)


@lru_cache
def get_settings() -> Settings:
    return Settings()
