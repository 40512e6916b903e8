"""
Pydantic schemas for the words endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

WORD_MAX_LENGTH = 255


class WordCreate(BaseModel):
    # Optional here so the service can answer the documented 400 message.
    word: str | None = Field(default=None, max_length=WORD_MAX_LENGTH)
    definition: str | None = None


class WordUpdate(BaseModel):
    word: str | None = Field(default=None, min_length=1, max_length=WORD_MAX_LENGTH)
    definition: str | None = Field(default=None, min_length=1)


class WordEntry(BaseModel):
    id: int
    word: str
    definition: str
    created_at: datetime
    updated_at: datetime
    created_by: int | None = None


class SuccessResponse(BaseModel):
    success: bool = True
