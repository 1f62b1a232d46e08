"""OpenAI-compatible chat-completions gateway"""

import time
from typing import Optional

import httpx

from payment_intent_gateway.config import settings
from payment_intent_gateway.domain.exceptions import InferenceGatewayError
from payment_intent_gateway.infrastructure.gateway.base import GatewayResult, InferenceGateway


class OpenAIGateway(InferenceGateway):
    """Client for an OpenAI-compatible /chat/completions endpoint"""

    name = "openai"

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or settings.inference_api_base).rstrip("/")
        self.model = model or settings.inference_model
        self._transport = transport

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout_seconds: float = 10.0,
    ) -> GatewayResult:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=timeout_seconds, transport=self._transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "model": self.model,
                        "messages": messages,
                        "temperature": temperature,
                        "max_tokens": max_tokens,
                    },
                )
                response.raise_for_status()
                data = response.json()

                choices = data.get("choices") or []
                content = choices[0].get("message", {}).get("content") if choices else None
                if content is not None and not isinstance(content, str):
                    raise TypeError(f"message content is {type(content).__name__}, expected text")

                usage = data.get("usage")
                if not isinstance(usage, dict):
                    usage = {}

                return GatewayResult(
                    text=content or "",
                    model=str(data.get("model") or self.model),
                    provider=self.name,
                    prompt_tokens=usage.get("prompt_tokens", 0),
                    completion_tokens=usage.get("completion_tokens", 0),
                    latency_ms=round((time.monotonic() - t0) * 1000, 2),
                )

            except httpx.TimeoutException as e:
                raise InferenceGatewayError(f"Inference gateway timeout after {timeout_seconds}s") from e
            except httpx.HTTPStatusError as e:
                raise InferenceGatewayError(f"Inference gateway error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise InferenceGatewayError(f"Inference gateway unreachable: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError, AttributeError) as e:
                raise InferenceGatewayError(f"Invalid response body from inference gateway: {e}") from e
