"""Shared fixtures: an app wired to a temp library and a fake generation client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from skillbuilder.adapters.base import GenerationClient
from skillbuilder.config import Settings
from skillbuilder.main import create_app
from skillbuilder.storage.file_store import FileSkillStore

SKILL_MD = """---
name: git-commit-writer
description: Writes conventional commit messages
category: Dev
---

# Git Commit Writer

## Overview
Turns staged diffs into conventional commit messages.

## Activation
When the user asks for a commit message.

## Instructions
1. Run `git diff --staged`.
2. Summarise the change as `type(scope): subject`.

## Examples
feat(auth): add token refresh
"""


class FakeGenerationClient(GenerationClient):
    def __init__(self, content: str = SKILL_MD, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    async def generate(self, prompt: str, api_key: str | None = None) -> str:
        self.calls.append((prompt, api_key))
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        library_dir=tmp_path / "library",
        rate_limit_requests=1000,
        generate_limit_requests=1000,
    )


@pytest.fixture
def store(settings) -> FileSkillStore:
    return FileSkillStore(settings.library_dir)


@pytest.fixture
def fake_client() -> FakeGenerationClient:
    return FakeGenerationClient()


@pytest.fixture
def app(settings, store, fake_client):
    return create_app(settings, store=store, generation_client=fake_client)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
