"""Monitored mortgage model."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class MortgageRecord(BaseModel):
    """A client's existing mortgage under rate monitoring."""

    id: str
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    loan_amount: float = Field(..., ge=0)
    current_rate: float
    target_rate: float
    term_years: int = Field(default=30, gt=0)
    lender: Optional[str] = None
    start_date: Optional[date] = None
    refi_eligible_date: Optional[date] = None

    last_contact: Optional[datetime] = None
    last_ai_call: Optional[datetime] = None
    total_ai_calls: int = 0

    market_rate: Optional[float] = Field(
        default=None,
        description="Benchmark rate for this loan; overrides the engine-wide market rate",
    )
    notes: Optional[str] = None
