"""Abstract base class for skill persistence.

Swap the flat-file library for another store by implementing this interface.
"""

from abc import ABC, abstractmethod
from typing import Any

import pydantic

from skillbuilder.errors import ValidationError
from skillbuilder.schemas.skill import SkillRecord


class SkillStore(ABC):
    """Contract that any skill store must satisfy."""

    @abstractmethod
    async def put(self, record: SkillRecord, *, create: bool = False) -> None:
        """Write a record keyed by its id, replacing any existing one.

        With ``create=True`` an existing record with the same id is an error
        instead of being overwritten.
        """

    @abstractmethod
    async def get(self, skill_id: str) -> SkillRecord:
        """Return the record or raise ``NotFoundError``."""

    @abstractmethod
    async def list(self) -> list[SkillRecord]:
        """Return every stored record, oldest first."""

    async def update(self, skill_id: str, patch: dict[str, Any]) -> SkillRecord:
        """Shallow-merge ``patch`` over the stored record, keeping its id."""
        current = await self.get(skill_id)
        merged = {**current.to_json_dict(), **patch, "id": current.id}
        try:
            updated = SkillRecord.model_validate(merged)
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid skill fields: {_first_error(exc)}") from exc
        await self.put(updated)
        return updated


def _first_error(exc: pydantic.ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"])
    return f"{loc}: {err['msg']}"
