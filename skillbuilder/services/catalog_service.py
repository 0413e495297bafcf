"""Catalog service — listing, lookup, publishing and export over a SkillStore."""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Iterable

from skillbuilder.errors import ValidationError
from skillbuilder.schemas.skill import SkillRecord, SkillSummary, SkillUpdate
from skillbuilder.storage.base import SkillStore
from skillbuilder.utils.markdown import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    normalize_category,
    normalize_description,
    normalize_name,
)

logger = logging.getLogger(__name__)


def summarize(record: SkillRecord) -> SkillSummary:
    return SkillSummary(
        id=record.id,
        name=record.name,
        description=record.description,
        category=record.category or DEFAULT_CATEGORY,
    )


async def list_published(store: SkillStore) -> list[SkillSummary]:
    return [summarize(r) for r in await store.list() if r.published]


def filter_skills(
    skills: Iterable[SkillSummary],
    q: str | None = None,
    category: str | None = None,
) -> list[SkillSummary]:
    """Case-insensitive substring search on name/description plus exact category."""
    needle = (q or "").strip().lower()
    result = []
    for skill in skills:
        if category and skill.category != category:
            continue
        if needle and needle not in skill.name.lower() and needle not in skill.description.lower():
            continue
        result.append(skill)
    return result


async def get_by_id(store: SkillStore, skill_id: str) -> SkillRecord:
    return await store.get(skill_id)


async def get_raw_content(store: SkillStore, skill_id: str) -> str:
    record = await store.get(skill_id)
    return record.content


async def publish(store: SkillStore, skill_id: str) -> SkillRecord:
    return await store.update(skill_id, {"published": True})


async def unpublish(store: SkillStore, skill_id: str) -> SkillRecord:
    return await store.update(skill_id, {"published": False})


def _clean_patch(data: SkillUpdate) -> dict:
    patch = data.model_dump(exclude_unset=True, exclude_none=True)

    if "name" in patch:
        patch["name"] = normalize_name(patch["name"])
        if not patch["name"]:
            raise ValidationError("Skill name cannot be empty.")
    if "description" in patch:
        patch["description"] = normalize_description(patch["description"])
    if "category" in patch:
        category = normalize_category(patch["category"])
        if category is None:
            raise ValidationError(f"Category must be one of: {', '.join(CATEGORIES)}.")
        patch["category"] = category
    return patch


async def update(store: SkillStore, skill_id: str, data: SkillUpdate) -> SkillRecord:
    """Merge the allowed fields of ``data`` over the stored record.

    ``id``, ``prompt`` and ``createdAt`` can't be patched.
    """
    patch = _clean_patch(data)
    if not patch:
        return await store.get(skill_id)
    return await store.update(skill_id, patch)


async def export_zip(store: SkillStore, skill_ids: list[str]) -> bytes:
    """Bundle the selected skills as ``<name>/SKILL.md`` entries of a zip."""
    records = [await store.get(skill_id) for skill_id in dict.fromkeys(skill_ids)]

    buf = io.BytesIO()
    used: set[str] = set()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for record in records:
            folder = record.name
            if folder in used:
                folder = f"{record.name}-{record.id}"
            used.add(folder)
            zf.writestr(f"{folder}/SKILL.md", record.content)

    logger.info("Exported %d skills", len(records))
    return buf.getvalue()
