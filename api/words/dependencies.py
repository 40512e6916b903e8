"""
Dependencies wiring the words feature to the process-wide Database.
"""

from __future__ import annotations

from fastapi import Depends, Request

from core.db import Database

from .repository import WordRepository
from .service import WordService


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_word_repository(database: Database = Depends(get_database)) -> WordRepository:
    return WordRepository(database)


def get_word_service(repository: WordRepository = Depends(get_word_repository)) -> WordService:
    return WordService(repository)
