"""FastAPI dependency providers — everything lives on ``app.state``."""

from fastapi import Request

from skillbuilder.adapters.base import GenerationClient
from skillbuilder.config import Settings
from skillbuilder.storage.base import SkillStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> SkillStore:
    return request.app.state.store


def get_generation_client(request: Request) -> GenerationClient:
    return request.app.state.generation_client


async def general_rate_limit(request: Request) -> None:
    await request.app.state.general_limiter(request)


async def generate_rate_limit(request: Request) -> None:
    await request.app.state.generate_limiter(request)
