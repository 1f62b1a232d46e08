"""Offline gateway - deterministic canned answers for local runs without an API key"""

import json
import re
from typing import Optional

from payment_intent_gateway.infrastructure.gateway.base import GatewayResult, InferenceGateway

_AMOUNT_RE = re.compile(r"([€£])\s?(\d+(?:[.,]\d{1,2})?)")
_QUOTED_INPUT_RE = re.compile(r'^Instruction: "(.*)"$', re.MULTILINE)


class OfflineGateway(InferenceGateway):
    """
    Stand-in oracle used when no real provider is configured.

    Recognises the two prompts by their system prompt and answers with a
    well-formed JSON payload built from a currency-symbol amount, if any.
    """

    name = "offline"

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout_seconds: float = 10.0,
    ) -> GatewayResult:
        if system_prompt and "fraud" in system_prompt.lower():
            payload = {
                "riskLevel": "medium",
                "score": 50,
                "flags": ["Offline analysis - no inference provider configured"],
                "recommendation": "Review manually",
            }
        else:
            payload = self._extraction_payload(prompt)

        text = json.dumps(payload)
        return GatewayResult(
            text=text,
            model="offline-v1",
            provider=self.name,
            prompt_tokens=len(prompt.split()),
            completion_tokens=len(text.split()),
        )

    @staticmethod
    def _extraction_payload(prompt: str) -> dict:
        quoted = _QUOTED_INPUT_RE.search(prompt)
        user_input = quoted.group(1) if quoted else prompt

        amount = None
        currency = None
        match = _AMOUNT_RE.search(user_input)
        if match:
            amount = float(match.group(2).replace(",", "."))
            currency = "EUR" if match.group(1) == "€" else "GBP"

        payment_type = {"EUR": "SEPA", "GBP": "FasterPayments"}.get(currency, "Unknown")
        return {
            "recipientName": None,
            "amount": amount,
            "currency": currency,
            "reference": None,
            "confidence": 0.2 if amount is not None else 0.0,
            "suggestedPaymentType": payment_type,
            "iban": None,
            "reasoning": "Offline heuristic extraction",
        }
