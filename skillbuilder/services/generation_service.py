"""Generation service — prompt in, stored skill out."""

from __future__ import annotations

import logging
import time

from skillbuilder.adapters.base import GenerationClient
from skillbuilder.errors import GenerationFailedError, StorageError, ValidationError
from skillbuilder.schemas.skill import SkillRecord
from skillbuilder.storage.base import SkillStore
from skillbuilder.utils.markdown import (
    extract_field,
    fallback_name,
    normalize_category,
    normalize_description,
    normalize_name,
    random_token,
)
from skillbuilder.utils.sanitize import MAX_INPUT_LENGTH, sanitize_input

logger = logging.getLogger(__name__)

ID_LENGTH = 10
MIN_CONTENT_LENGTH = 50


def prepare_prompt(raw_prompt: object, *, max_length: int = MAX_INPUT_LENGTH, min_length: int = 10) -> str:
    """Sanitise the user's request, rejecting anything too short to act on."""
    if not raw_prompt or not isinstance(raw_prompt, str):
        raise ValidationError("Prompt is required.")

    prompt = sanitize_input(raw_prompt, max_length)
    if len(prompt) < min_length:
        raise ValidationError(
            f"Please describe your skill in more detail (at least {min_length} characters)."
        )
    return prompt


def build_record(content: str, prompt: str) -> SkillRecord:
    name = normalize_name(extract_field(content, "name") or "") or fallback_name()
    description = normalize_description(extract_field(content, "description") or "")
    category = normalize_category(extract_field(content, "category"))

    return SkillRecord(
        id=random_token(ID_LENGTH),
        name=name,
        description=description,
        category=category,
        content=content,
        prompt=prompt,
        published=True,
    )


async def generate_skill(
    store: SkillStore,
    client: GenerationClient,
    raw_prompt: object,
    api_key: str | None = None,
    *,
    max_length: int = MAX_INPUT_LENGTH,
    min_length: int = 10,
) -> SkillRecord:
    prompt = prepare_prompt(raw_prompt, max_length=max_length, min_length=min_length)

    started = time.monotonic()
    logger.info("Generating skill (%d chars, byok=%s)", len(prompt), api_key is not None)
    content = await client.generate(prompt, api_key=api_key)

    if not content or len(content) < MIN_CONTENT_LENGTH:
        raise GenerationFailedError()

    record = build_record(content, prompt)
    try:
        await store.put(record, create=True)
    except StorageError:
        logger.error(
            "Discarding generated skill %r (%d chars) after storage failure",
            record.name,
            len(content),
        )
        raise

    logger.info("Stored skill %s (%s) in %.1fs", record.id, record.name, time.monotonic() - started)
    return record
