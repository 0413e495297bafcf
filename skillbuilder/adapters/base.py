"""Abstract base class for skill generation backends.

Swap Anthropic for another model provider by implementing this interface.
"""

from abc import ABC, abstractmethod


class GenerationClient(ABC):
    """Contract that any generation backend must satisfy."""

    @abstractmethod
    async def generate(self, prompt: str, api_key: str | None = None) -> str:
        """Generate SKILL.md text for an already sanitised prompt.

        ``api_key`` is a caller-supplied (BYOK) credential that takes the place
        of the server's default for this one call.
        """

    async def aclose(self) -> None:
        """Release any pooled connections."""
