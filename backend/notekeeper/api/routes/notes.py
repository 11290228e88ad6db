"""Note endpoints, scoped to the authenticated user."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.config import Settings, get_settings
from notekeeper.core.dependencies import authenticate_request, get_db, require_path_owner
from notekeeper.core.security import Identity
from notekeeper.schemas.note import NoteListResponse, NoteRead, NoteResponse, NoteWrite
from notekeeper.schemas.response import OKResponse
from notekeeper.services import notes as note_service

logger = logging.getLogger(__name__)

# Largest value a SQLite INTEGER column can hold.
MAX_DB_INT = 2**63 - 1

NoteId = Annotated[int, Path(gt=0, le=MAX_DB_INT)]

router = APIRouter(
    prefix="/users/{user_id}/notes",
    tags=["notes"],
    dependencies=[Depends(authenticate_request)],
)


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def page_params(settings: Settings, limit: str | None, offset: str | None) -> tuple[int, int]:
    """Lenient paging: unusable values fall back to the defaults."""

    parsed_limit = _parse_int(limit)
    if parsed_limit is None or parsed_limit <= 0:
        parsed_limit = settings.default_page_size
    parsed_offset = _parse_int(offset)
    if parsed_offset is None or not 0 <= parsed_offset <= MAX_DB_INT:
        parsed_offset = 0
    return min(parsed_limit, settings.max_page_size), parsed_offset


@router.post("", response_model=OKResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteWrite,
    identity: Identity = Depends(require_path_owner),
    session: AsyncSession = Depends(get_db),
) -> OKResponse:
    note = await note_service.create_note(session, identity.user_id, payload.title, payload.content)
    await session.commit()
    logger.info("note %d created by user %d", note.id, identity.user_id)
    return OKResponse()


@router.get("", response_model=NoteListResponse)
async def list_notes(
    limit: str | None = None,
    offset: str | None = None,
    sort: str | None = None,
    identity: Identity = Depends(require_path_owner),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> NoteListResponse:
    page_limit, page_offset = page_params(settings, limit, offset)
    notes = await note_service.list_notes(
        session, identity.user_id, page_limit, page_offset, note_service.parse_sort(sort)
    )
    logger.info("delivered %d notes to user %d", len(notes), identity.user_id)
    return NoteListResponse(notes=[NoteRead.model_validate(note) for note in notes])


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: NoteId,
    identity: Identity = Depends(require_path_owner),
    session: AsyncSession = Depends(get_db),
) -> NoteResponse:
    note = await note_service.get_note(session, identity.user_id, note_id)
    return NoteResponse(note=NoteRead.model_validate(note))


@router.put("/{note_id}", response_model=OKResponse)
async def update_note(
    note_id: NoteId,
    payload: NoteWrite,
    identity: Identity = Depends(require_path_owner),
    session: AsyncSession = Depends(get_db),
) -> OKResponse:
    await note_service.update_note(session, note_id, identity.user_id, payload.title, payload.content)
    await session.commit()
    logger.info("note %d updated by user %d", note_id, identity.user_id)
    return OKResponse()


@router.delete("/{note_id}", response_model=OKResponse)
async def delete_note(
    note_id: NoteId,
    identity: Identity = Depends(require_path_owner),
    session: AsyncSession = Depends(get_db),
) -> OKResponse:
    await note_service.delete_note(session, note_id, identity.user_id)
    await session.commit()
    logger.info("note %d deleted by user %d", note_id, identity.user_id)
    return OKResponse()
