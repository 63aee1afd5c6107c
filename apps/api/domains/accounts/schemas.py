"""Pydantic schemas for the accounts domain."""

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class StoreDocumentRequest(BaseModel):
    user_id: str
    file_path: str = Field(..., min_length=1)
