"""Skill catalog endpoints."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, Response

from skillbuilder.dependencies import get_store
from skillbuilder.schemas.skill import (
    ExportRequest,
    SkillEnvelope,
    SkillListResponse,
    SkillUpdate,
)
from skillbuilder.services import catalog_service
from skillbuilder.storage.base import SkillStore

router = APIRouter()


@router.get("", response_model=SkillListResponse)
async def list_skills(
    q: str | None = Query(None, max_length=200, description="Search name and description"),
    category: str | None = None,
    store: SkillStore = Depends(get_store),
):
    skills = await catalog_service.list_published(store)
    return {"skills": catalog_service.filter_skills(skills, q=q, category=category)}


@router.post("/export")
async def export_skills(data: ExportRequest, store: SkillStore = Depends(get_store)):
    """Download the selected skills as a zip of ``<name>/SKILL.md`` files."""
    payload = await catalog_service.export_zip(store, data.ids)
    return Response(
        content=payload,
        media_type="application/zip",
        headers={"Content-Disposition": 'attachment; filename="skills.zip"'},
    )


@router.get("/{skill_id}", response_model=SkillEnvelope)
async def get_skill(skill_id: str, store: SkillStore = Depends(get_store)):
    return {"skill": await catalog_service.get_by_id(store, skill_id)}


@router.get("/{skill_id}/raw", response_class=PlainTextResponse)
async def get_skill_raw(skill_id: str, store: SkillStore = Depends(get_store)):
    """Raw SKILL.md, for ``curl … > ~/.claude/skills/<name>/SKILL.md``."""
    return PlainTextResponse(await catalog_service.get_raw_content(store, skill_id))


@router.put("/{skill_id}", response_model=SkillEnvelope)
async def update_skill(skill_id: str, data: SkillUpdate, store: SkillStore = Depends(get_store)):
    return {"skill": await catalog_service.update(store, skill_id, data)}


@router.post("/{skill_id}/publish", response_model=SkillEnvelope)
async def publish_skill(skill_id: str, store: SkillStore = Depends(get_store)):
    return {"skill": await catalog_service.publish(store, skill_id)}


@router.post("/{skill_id}/unpublish", response_model=SkillEnvelope)
async def unpublish_skill(skill_id: str, store: SkillStore = Depends(get_store)):
    return {"skill": await catalog_service.unpublish(store, skill_id)}
