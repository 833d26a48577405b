"""
Bootstrap report models.
"""
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from vnf_schema.exceptions import SchemaVerificationError


class UserAction(str, Enum):
    """What the initializer did with the application user."""
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


class InitReport(BaseModel):
    """Outcome of one initializer run."""
    database: str = Field(..., description="Target database name")
    purpose: str = Field(default="", description="What the database holds")
    user: str = Field(..., description="Application user name")
    user_action: UserAction = Field(default=UserAction.SKIPPED)
    collections_created: list[str] = Field(default=[])
    collections_existing: list[str] = Field(default=[])
    indexes: dict[str, list[str]] = Field(
        default={}, description="Index names declared per collection"
    )
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()


class VerificationReport(BaseModel):
    """Outcome of verifying an initialized database."""
    database: str
    collections: list[str] = Field(default=[], description="Collections found")
    problems: list[str] = Field(default=[])
    history_query_index: str | None = Field(
        None, description="Index chosen by the planner for history-by-file queries"
    )

    @property
    def ok(self) -> bool:
        return not self.problems

    def raise_for_problems(self) -> None:
        if self.problems:
            raise SchemaVerificationError(self.database, self.problems)
