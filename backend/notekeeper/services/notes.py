"""Note repository with per-note ownership checks."""
from __future__ import annotations

import enum

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.errors import NoteForbiddenError, NoteNotFoundError
from notekeeper.db.base import utcnow
from notekeeper.models.note import Note


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


def parse_sort(value: str | None) -> SortDirection:
    """Anything but ``asc`` sorts newest first."""

    if value is not None and value.strip().lower() == SortDirection.ASC.value:
        return SortDirection.ASC
    return SortDirection.DESC


async def create_note(session: AsyncSession, owner_id: int, title: str, content: str) -> Note:
    now = utcnow()
    note = Note(owner_id=owner_id, title=title, content=content, created_at=now, updated_at=now)
    session.add(note)
    await session.flush()
    return note


async def get_note(session: AsyncSession, owner_id: int, note_id: int) -> Note:
    result = await session.execute(
        select(Note).where(Note.id == note_id).execution_options(populate_existing=True)
    )
    note = result.scalar_one_or_none()
    if note is None:
        raise NoteNotFoundError(note_id)
    if note.owner_id != owner_id:
        raise NoteForbiddenError(note_id, owner_id)
    return note


async def list_notes(
    session: AsyncSession,
    owner_id: int,
    limit: int,
    offset: int,
    sort: SortDirection = SortDirection.DESC,
) -> list[Note]:
    if sort is SortDirection.ASC:
        ordering = (Note.created_at.asc(), Note.id.asc())
    else:
        ordering = (Note.created_at.desc(), Note.id.desc())

    result = await session.execute(
        select(Note)
        .where(Note.owner_id == owner_id)
        .order_by(*ordering)
        .limit(limit)
        .offset(offset)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def update_note(session: AsyncSession, note_id: int, acting_user_id: int, title: str, content: str) -> None:
    # The owner predicate is part of the UPDATE itself, so the check and the
    # write cannot be separated by a concurrent delete.
    result = await session.execute(
        update(Note)
        .where(Note.id == note_id, Note.owner_id == acting_user_id)
        .values(title=title, content=content, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await _raise_missing_or_forbidden(session, note_id, acting_user_id)


async def delete_note(session: AsyncSession, note_id: int, acting_user_id: int) -> None:
    result = await session.execute(
        delete(Note)
        .where(Note.id == note_id, Note.owner_id == acting_user_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await _raise_missing_or_forbidden(session, note_id, acting_user_id)


async def _raise_missing_or_forbidden(session: AsyncSession, note_id: int, acting_user_id: int) -> None:
    """Explain why a conditional write touched no rows."""

    owner_id = await session.scalar(select(Note.owner_id).where(Note.id == note_id))
    if owner_id is None:
        raise NoteNotFoundError(note_id)
    raise NoteForbiddenError(note_id, acting_user_id)
