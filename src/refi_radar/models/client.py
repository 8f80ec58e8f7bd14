"""Client record and pipeline stage models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PipelineStage(str, Enum):
    """Position of a client in the sales funnel."""

    NEW = "new"
    PROSPECT = "prospect"
    CONTACTED = "contacted"
    NURTURE = "nurture"
    QUALIFIED = "qualified"
    APPLICATION = "application"
    PROCESSING = "processing"
    CLOSING = "closing"
    CLOSED = "closed"
    LOST = "lost"

    @classmethod
    def parse(cls, value: "str | PipelineStage | None") -> Optional["PipelineStage"]:
        """Case-insensitive lookup. Empty -> None; unknown -> ValueError."""
        if value is None or isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if not key:
            return None
        try:
            return cls(key)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown pipeline stage: {value!r} (expected one of: {allowed})") from None


class ClientRecord(BaseModel):
    """Client as fetched by the data layer. Read-only input to scoring and insights."""

    id: str
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    loan_amount: float = Field(default=0.0, ge=0)
    target_rate: float = Field(..., description="Rate the client wants, percent (e.g. 6.25)")
    current_rate: Optional[float] = Field(default=None, description="Rate on file, percent")
    term_years: Optional[int] = Field(default=None, gt=0, description="Defaults to the scoring config term")
    loan_type: str = "conventional"

    current_stage: Optional[PipelineStage] = None
    last_contact: Optional[datetime] = None
    status: str = "active"
    notes: Optional[str] = None

    @field_validator("current_stage", mode="before")
    @classmethod
    def _parse_stage(cls, value):
        return PipelineStage.parse(value)

    @property
    def display_name(self) -> str:
        """name, else 'first last', else 'Unknown Client'."""
        if self.name:
            return self.name
        joined = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return joined or "Unknown Client"
