"""
Words API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status

from . import dependencies, schemas
from .service import WordService

router = APIRouter(prefix="/words")


async def _json_body(request: Request) -> Any:
    # Missing or non-JSON bodies count as empty, like an absent payload.
    try:
        return await request.json()
    except ValueError:
        return None


@router.get("", response_model=list[schemas.WordEntry])
async def list_words(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    service: WordService = Depends(dependencies.get_word_service),
) -> list[dict]:
    return await service.list_words(page=page, limit=limit)


@router.get("/search", response_model=list[schemas.WordEntry])
async def search_words(
    q: str | None = Query(default=None),
    service: WordService = Depends(dependencies.get_word_service),
) -> list[dict]:
    return await service.search_words(q)


@router.get("/{word_id}", response_model=schemas.WordEntry)
async def get_word(
    word_id: int,
    service: WordService = Depends(dependencies.get_word_service),
) -> dict:
    return await service.get_word(word_id)


@router.post("", response_model=schemas.WordEntry, status_code=status.HTTP_201_CREATED)
async def create_word(
    request: Request,
    service: WordService = Depends(dependencies.get_word_service),
) -> dict:
    return await service.create_word(await _json_body(request))


@router.put("/{word_id}", response_model=schemas.SuccessResponse)
async def update_word(
    word_id: int,
    payload: schemas.WordUpdate | None = None,
    service: WordService = Depends(dependencies.get_word_service),
) -> schemas.SuccessResponse:
    await service.update_word(word_id, payload)
    return schemas.SuccessResponse()


@router.delete("/{word_id}", response_model=schemas.SuccessResponse)
async def delete_word(
    word_id: int,
    service: WordService = Depends(dependencies.get_word_service),
) -> schemas.SuccessResponse:
    await service.delete_word(word_id)
    return schemas.SuccessResponse()
