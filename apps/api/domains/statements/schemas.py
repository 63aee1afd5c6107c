"""Pydantic schemas for the statements domain."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from packages.ingestion_engine.models import TRANSACTION_TYPES, UNKNOWN, Transaction


class ProcessStatementRequest(BaseModel):
    file_path: str = Field(..., min_length=1)


class TransactionIn(BaseModel):
    """A parsed transaction sent back by the frontend for storage."""

    posting_date: str
    transaction_date: str
    description: str
    money_in: Optional[float] = Field(default=None, ge=0)
    money_out: Optional[float] = Field(default=None, ge=0)
    balance: float = 0.0
    category: Optional[str] = None
    transaction_type: str = UNKNOWN

    @field_validator("transaction_type")
    @classmethod
    def known_type(cls, value: str) -> str:
        if value.lower() == UNKNOWN.lower():
            return UNKNOWN
        if value not in TRANSACTION_TYPES:
            raise ValueError(f"transaction_type must be one of {', '.join(TRANSACTION_TYPES)}")
        return value

    def to_transaction(self) -> Transaction:
        return Transaction(**self.model_dump())


class StoreStatementRequest(BaseModel):
    user_id: str
    file_path: str
    start_date: str
    end_date: str
    transactions: list[TransactionIn] = Field(default_factory=list)
