"""Skill generation endpoint."""

from fastapi import APIRouter, Depends, Header

from skillbuilder.adapters.base import GenerationClient
from skillbuilder.config import Settings
from skillbuilder.dependencies import generate_rate_limit, get_generation_client, get_settings, get_store
from skillbuilder.schemas.skill import GenerateRequest, SkillEnvelope
from skillbuilder.services import generation_service
from skillbuilder.storage.base import SkillStore

router = APIRouter()


@router.post("", response_model=SkillEnvelope, dependencies=[Depends(generate_rate_limit)])
async def generate(
    data: GenerateRequest,
    x_api_key: str | None = Header(None),
    store: SkillStore = Depends(get_store),
    client: GenerationClient = Depends(get_generation_client),
    cfg: Settings = Depends(get_settings),
):
    """Generate a SKILL.md from a description and add it to the library.

    Send ``X-API-Key`` to use your own Anthropic key instead of the server's.
    """
    skill = await generation_service.generate_skill(
        store,
        client,
        data.prompt,
        api_key=x_api_key or None,
        max_length=cfg.max_prompt_length,
        min_length=cfg.min_prompt_length,
    )
    return {"skill": skill}
