"""Anthropic Messages API client that turns a request into a SKILL.md."""

from __future__ import annotations

import logging
from collections.abc import Callable

import anthropic
from anthropic import AsyncAnthropic

from skillbuilder.adapters.base import GenerationClient
from skillbuilder.errors import (
    ConfigurationError,
    GenerationFailedError,
    InvalidCredentialError,
    UpstreamRateLimitError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "sk-ant-"

SYSTEM_PROMPT = """You are an expert in Claude Code Skills. Generate a SKILL.md based on the user request.

IMPORTANT: Reply ONLY with the SKILL.md content, no explanations before or after.

Format:
---
name: skill-name-kebab-case
description: Short description (1 sentence) when the skill activates
category: Dev|Docs|Testing|Security|DevOps|Data
---

# Skill Name

## Overview
Short description of what the skill does.

## Activation
When this skill automatically activates (e.g., "When the user asks for X...")

## Instructions
Detailed step-by-step instructions for what Claude should do.

## Examples
Concrete examples for input/output.

CATEGORIES (choose ONE):
- Dev: Code generation, debugging, refactoring, git workflows
- Docs: Documentation, README, API docs, comments
- Testing: Unit tests, integration tests, test coverage
- Security: Security audits, vulnerability scanning, auth
- DevOps: Docker, CI/CD, deployment, infrastructure
- Data: Database schemas, data modeling, migrations"""

USER_TEMPLATE = "Create a Claude Code skill for the following requirement:\n\n{prompt}"


def is_valid_api_key(api_key: str | None) -> bool:
    return bool(api_key) and api_key.startswith(API_KEY_PREFIX)


class AnthropicGenerationClient(GenerationClient):
    """Single-shot Messages API call. No retries: one request per generation."""

    def __init__(
        self,
        default_api_key: str | None = None,
        *,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 2048,
        timeout: float = 60.0,
        client_factory: Callable[[str], AsyncAnthropic] | None = None,
    ) -> None:
        self.default_api_key = default_api_key or None
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._client_factory = client_factory or self._make_client
        self._default_client: AsyncAnthropic | None = None

    def _make_client(self, api_key: str) -> AsyncAnthropic:
        return AsyncAnthropic(api_key=api_key, max_retries=0, timeout=self.timeout)

    def _client_for(self, api_key: str | None) -> tuple[AsyncAnthropic, bool]:
        """Return (client, owned) — owned clients are closed after the call."""
        if api_key is not None:
            if not is_valid_api_key(api_key):
                raise InvalidCredentialError("Invalid API key format")
            return self._client_factory(api_key), True

        if not self.default_api_key:
            raise ConfigurationError("Anthropic client not initialized. Check API key.")
        if self._default_client is None:
            self._default_client = self._client_factory(self.default_api_key)
        return self._default_client, False

    async def generate(self, prompt: str, api_key: str | None = None) -> str:
        client, owned = self._client_for(api_key)
        try:
            message = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": USER_TEMPLATE.format(prompt=prompt)}],
            )
        except anthropic.AuthenticationError as exc:
            raise InvalidCredentialError() from exc
        except anthropic.RateLimitError as exc:
            raise UpstreamRateLimitError() from exc
        except anthropic.APIConnectionError as exc:
            # includes APITimeoutError
            logger.warning("Anthropic API unreachable: %s", exc)
            raise UpstreamUnavailableError() from exc
        except anthropic.APIStatusError as exc:
            logger.warning("Anthropic API returned %s", exc.status_code)
            if exc.status_code >= 500:
                raise UpstreamUnavailableError() from exc
            raise GenerationFailedError("Failed to generate skill. Please try again.") from exc
        except anthropic.APIError as exc:
            logger.warning("Anthropic API error: %s", exc)
            raise GenerationFailedError("Failed to generate skill. Please try again.") from exc
        finally:
            if owned:
                await client.close()

        content = getattr(message, "content", None) or []
        text = getattr(content[0], "text", None) if content else None
        if not text:
            raise GenerationFailedError("Invalid response from Claude API")
        return text

    async def aclose(self) -> None:
        if self._default_client is not None:
            await self._default_client.close()
            self._default_client = None
