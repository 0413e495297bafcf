"""SQL-backed skill store (SQLAlchemy async)."""

from __future__ import annotations

import logging
from datetime import timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from skillbuilder.errors import NotFoundError, StorageError
from skillbuilder.models.skill import Skill
from skillbuilder.schemas.skill import SkillRecord
from skillbuilder.storage.base import SkillStore

logger = logging.getLogger(__name__)


def _to_record(row: Skill) -> SkillRecord:
    created_at = row.created_at
    # SQLite drops tzinfo; everything is written as UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return SkillRecord(
        id=row.id,
        name=row.name,
        description=row.description,
        category=row.category,
        content=row.content,
        prompt=row.prompt,
        created_at=created_at,
        published=row.published,
    )


class SqlSkillStore(SkillStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def put(self, record: SkillRecord, *, create: bool = False) -> None:
        try:
            async with self.session_factory() as db:
                row = await db.get(Skill, record.id)
                if row is None:
                    row = Skill(id=record.id)
                    db.add(row)
                elif create:
                    raise StorageError("Skill id collision. Please try again.")
                for field in ("name", "description", "category", "content", "prompt", "created_at", "published"):
                    setattr(row, field, getattr(record, field))
                await db.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to write skill %s: %s", record.id, exc)
            raise StorageError() from exc

    async def get(self, skill_id: str) -> SkillRecord:
        try:
            async with self.session_factory() as db:
                row = await db.get(Skill, skill_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to read skill %s: %s", skill_id, exc)
            raise StorageError("Failed to load skill.") from exc
        if row is None:
            raise NotFoundError()
        return _to_record(row)

    async def list(self) -> list[SkillRecord]:
        try:
            async with self.session_factory() as db:
                result = await db.execute(select(Skill).order_by(Skill.created_at))
                rows = list(result.scalars().all())
        except SQLAlchemyError as exc:
            logger.error("Failed to list skills: %s", exc)
            raise StorageError("Failed to load skills.") from exc
        return [_to_record(row) for row in rows]
