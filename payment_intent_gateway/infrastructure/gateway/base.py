"""Inference gateway contract - an opaque prompt-in, text-out oracle"""

import abc
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GatewayResult:
    """Raw text returned by one gateway call, plus call metadata"""

    text: str
    model: str
    provider: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    latency_ms: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.text or not self.text.strip()


class InferenceGateway(abc.ABC):
    """Anything that can turn a prompt into free text"""

    name: str = "base"

    @abc.abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout_seconds: float = 10.0,
    ) -> GatewayResult:
        """
        Send *prompt* and return the oracle's text.

        Raises:
            InferenceGatewayError: On timeout, HTTP errors, or an unreadable body
        """
