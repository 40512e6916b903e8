"""
Words business logic.

Scope:
- presence checks on client input
- absence (no row / no affected row) mapped to NotFoundError
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from core.errors import InvalidInputError, NotFoundError

from . import schemas
from .repository import WordRepository

logger = logging.getLogger(__name__)

WORD_NOT_FOUND = "Word not found"
WORD_FIELDS_REQUIRED = "Word and definition required"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_int(raw: str | None, default: int) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return default
    return value if value >= 1 else default


class WordService:
    def __init__(self, repository: WordRepository) -> None:
        self.repository = repository

    async def list_words(self, *, page: str | None = None, limit: str | None = None) -> list[dict[str, Any]]:
        # TODO: pass page/limit to the repository once the list endpoint is paginated.
        page_number = _positive_int(page, DEFAULT_PAGE)
        page_size = _positive_int(limit, DEFAULT_LIMIT)
        logger.debug("list_words page=%s limit=%s pagination=off", page_number, page_size)
        return await self.repository.list_all()

    async def search_words(self, term: str | None) -> list[dict[str, Any]]:
        if not term:
            raise InvalidInputError("Search term required")
        return await self.repository.search(term)

    async def get_word(self, word_id: int) -> dict[str, Any]:
        row = await self.repository.get_by_id(word_id)
        if row is None:
            raise NotFoundError(WORD_NOT_FOUND)
        return row

    async def create_word(self, body: Any) -> dict[str, Any]:
        try:
            payload = schemas.WordCreate.model_validate(body if isinstance(body, dict) else {})
        except ValidationError as exc:
            raise InvalidInputError(WORD_FIELDS_REQUIRED) from exc
        if not payload.word or not payload.definition:
            raise InvalidInputError(WORD_FIELDS_REQUIRED)

        row = await self.repository.create(word=payload.word, definition=payload.definition)
        logger.info("word_created id=%s word=%r", row["id"], row["word"])
        return row

    async def update_word(self, word_id: int, payload: schemas.WordUpdate | None) -> None:
        fields = payload.model_dump(exclude_unset=True, exclude_none=True) if payload is not None else {}
        if not await self.repository.update(word_id, fields):
            raise NotFoundError(WORD_NOT_FOUND)
        logger.info("word_updated id=%s fields=%s", word_id, sorted(fields))

    async def delete_word(self, word_id: int) -> None:
        if not await self.repository.delete(word_id):
            raise NotFoundError(WORD_NOT_FOUND)
        logger.info("word_deleted id=%s", word_id)
