"""Skill request/response schemas."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SkillRecord(BaseModel):
    """A stored skill artifact. Serialised with camelCase keys (``createdAt``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = Field(..., pattern=r"^[a-z0-9\-]+$", max_length=50)
    description: str = Field("", max_length=200)
    category: str | None = None
    content: str
    prompt: str = ""
    created_at: datetime = Field(default_factory=_utcnow)
    published: bool = True

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class SkillSummary(BaseModel):
    id: str
    name: str
    description: str
    category: str


class SkillUpdate(BaseModel):
    """Fields a caller may patch. Anything else in the body is ignored."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    content: str | None = None
    published: bool | None = None


class GenerateRequest(BaseModel):
    # type is checked by prepare_prompt
    prompt: Any = None


class ExportRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1, max_length=500)


class SkillEnvelope(BaseModel):
    skill: SkillRecord


class SkillListResponse(BaseModel):
    skills: list[SkillSummary]
