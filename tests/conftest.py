from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.errors import ConflictError
from main import app
from words import dependencies


class InMemoryWordRepository:
    """
    Stand-in for WordRepository backed by a dict, with the same unique-word rule.
    """

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1

    def _ensure_unique(self, word: str, *, exclude_id: int | None = None) -> None:
        for row in self.rows.values():
            if row["word"] == word and row["id"] != exclude_id:
                raise ConflictError(f"Word '{word}' already exists")

    async def list_all(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self.rows.values()]

    async def search(self, term: str) -> list[dict[str, Any]]:
        return [dict(r) for r in self.rows.values() if term in r["word"]]

    async def get_by_id(self, word_id: int) -> dict[str, Any] | None:
        row = self.rows.get(word_id)
        return dict(row) if row is not None else None

    async def create(self, *, word: str, definition: str) -> dict[str, Any]:
        self._ensure_unique(word)
        now = datetime.now(timezone.utc)
        row = {
            "id": self._next_id,
            "word": word,
            "definition": definition,
            "created_at": now,
            "updated_at": now,
            "created_by": None,
        }
        self.rows[row["id"]] = row
        self._next_id += 1
        return dict(row)

    async def update(self, word_id: int, fields: dict[str, Any]) -> bool:
        row = self.rows.get(word_id)
        if row is None:
            return False
        if "word" in fields:
            self._ensure_unique(fields["word"], exclude_id=word_id)
        row.update({k: v for k, v in fields.items() if k in ("word", "definition")})
        row["updated_at"] = datetime.now(timezone.utc)
        return True

    async def delete(self, word_id: int) -> bool:
        return self.rows.pop(word_id, None) is not None


@pytest.fixture
def repository() -> InMemoryWordRepository:
    return InMemoryWordRepository()


@pytest.fixture
def client(repository: InMemoryWordRepository):
    app.dependency_overrides[dependencies.get_word_repository] = lambda: repository
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
