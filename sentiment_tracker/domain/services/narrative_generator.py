from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union


class NarrativeGenerator(Protocol):
    """External generative-text service. Treated as unreliable."""

    async def generate(self, prompt: str) -> str:
        """Return free text for `prompt`.

        Raises ExternalServiceError when the service fails or answers with
        nothing usable.
        """
        ...


@dataclass(frozen=True)
class AINarrative:
    """Narrative written by the external service."""

    text: str

    @property
    def source(self) -> str:
        return "ai"


@dataclass(frozen=True)
class FallbackNarrative:
    """Narrative synthesized from the computed numbers."""

    text: str
    reason: str = ""

    @property
    def source(self) -> str:
        return "algorithmic"


NarrativeResult = Union[AINarrative, FallbackNarrative]
