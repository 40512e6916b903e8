"""
Words persistence (raw SQL).
This module is where words-related SQL lives.
"""

from __future__ import annotations

from typing import Any

from core.db import Database
from core.errors import ConflictError

WORD_COLUMNS = "id, word, definition, created_at, updated_at, created_by"

# Columns a client may change through update(); anything else is ignored.
MUTABLE_COLUMNS = ("word", "definition")


def like_substring(term: str) -> str:
    """
    Build a LIKE pattern matching `term` literally anywhere in the value.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class WordRepository:
    def __init__(self, database: Database) -> None:
        self.db = database

    async def list_all(self) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            f"""
            SELECT {WORD_COLUMNS}
            FROM words
            ORDER BY id
            """
        )

    async def search(self, term: str) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            f"""
            SELECT {WORD_COLUMNS}
            FROM words
            WHERE word LIKE $1 ESCAPE '\\'
            ORDER BY id
            """,
            like_substring(term),
        )

    async def get_by_id(self, word_id: int) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"""
            SELECT {WORD_COLUMNS}
            FROM words
            WHERE id = $1
            """,
            word_id,
        )

    async def create(self, *, word: str, definition: str) -> dict[str, Any]:
        """
        Insert a word and return the stored row (id and timestamps included).
        """
        try:
            row = await self.db.fetch_one(
                f"""
                INSERT INTO words (word, definition)
                VALUES ($1, $2)
                RETURNING {WORD_COLUMNS}
                """,
                word,
                definition,
            )
        except ConflictError as exc:
            raise ConflictError(f"Word '{word}' already exists") from exc
        if row is None:
            raise RuntimeError("Failed to insert word.")
        return row

    async def update(self, word_id: int, fields: dict[str, Any]) -> bool:
        """
        Apply a sparse update. Returns True when a row was affected.
        """
        assignments: list[str] = []
        args: list[Any] = [word_id]
        for column in MUTABLE_COLUMNS:
            if column in fields:
                args.append(fields[column])
                assignments.append(f"{column} = ${len(args)}")
        assignments.append("updated_at = now()")

        try:
            row = await self.db.fetch_one(
                f"""
                UPDATE words
                SET {", ".join(assignments)}
                WHERE id = $1
                RETURNING id
                """,
                *args,
            )
        except ConflictError as exc:
            raise ConflictError(f"Word '{fields.get('word')}' already exists") from exc
        return row is not None

    async def delete(self, word_id: int) -> bool:
        row = await self.db.fetch_one(
            """
            DELETE FROM words
            WHERE id = $1
            RETURNING id
            """,
            word_id,
        )
        return row is not None
