"""Domain errors.

Every error carries the HTTP status it maps to and a message that is safe to
show to the end user. Internal detail (paths, upstream bodies) stays in the
logs.
"""

from __future__ import annotations


class SkillbuilderError(Exception):
    status_code: int = 500
    default_message: str = "An unexpected error occurred. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SkillbuilderError):
    status_code = 400
    default_message = "Invalid request."


class ConfigurationError(SkillbuilderError):
    status_code = 503
    default_message = "Skill generation is not configured on this server."


class InvalidCredentialError(SkillbuilderError):
    # Upstream 401 is surfaced as 503 so callers can't probe upstream auth.
    status_code = 503
    default_message = "Invalid API key"


class UpstreamRateLimitError(SkillbuilderError):
    status_code = 503
    default_message = "API rate limit exceeded. Please try again later."


class UpstreamUnavailableError(SkillbuilderError):
    status_code = 503
    default_message = "Claude API is temporarily unavailable"


class GenerationFailedError(SkillbuilderError):
    status_code = 500
    default_message = "Generated skill was invalid. Please try again."


class NotFoundError(SkillbuilderError):
    status_code = 404
    default_message = "Skill not found."


class StorageError(SkillbuilderError):
    status_code = 500
    default_message = "Failed to save skill. Please try again."


class RateLimitExceededError(SkillbuilderError):
    status_code = 429
    default_message = "Too many requests, please try again later."

    def __init__(self, message: str | None = None, retry_after: int = 0) -> None:
        super().__init__(message)
        self.retry_after = retry_after
