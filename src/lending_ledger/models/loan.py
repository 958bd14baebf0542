"""
Loan record model for the lending ledger.

A LoanRecord is the audit-trail entry for one borrow-to-return interval.
It is appended once when a principal borrows a copy and finalized exactly
once, when the same principal returns it. Records are never removed or
reordered.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LoanRecord(BaseModel):
    """One borrow of one copy, open until ``ended_at`` is set."""

    principal: str = Field(
        ...,
        description="Principal holding the loan",
        min_length=1,
    )

    item_name: str = Field(
        ...,
        description="Display name of the borrowed item",
        min_length=1,
    )

    item_id: str | None = Field(
        None,
        description="Identifier of the borrowed item",
    )

    started_at: datetime = Field(
        ...,
        description="When the loan began",
    )

    ended_at: datetime | None = Field(
        None,
        description="When the loan was returned; unset while active",
    )

    @model_validator(mode="after")
    def validate_interval(self) -> "LoanRecord":
        """A loan cannot end before it started."""
        if self.ended_at is not None and self.ended_at < self.started_at:
            raise ValueError("Loan end cannot be before loan start")
        return self

    @property
    def is_open(self) -> bool:
        """Check if the loan is still active."""
        return self.ended_at is None

    def close(self, ended_at: datetime) -> None:
        """
        Finalize the loan.

        Raises:
            ValueError: If the record was already finalized
        """
        if not self.is_open:
            raise ValueError("Loan record already finalized")
        self.ended_at = ended_at

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "principal": "alice",
                "item_name": "Dune",
                "item_id": "item_3f1c0a9b8e7d6c5b4a39281706f5e4d3",
                "started_at": "2026-01-05T10:30:00Z",
                "ended_at": None,
            }
        },
    )
