"""Risk scoring - fraud and social-engineering assessment of a payment instruction"""

import asyncio
import logging
import math
from typing import Any, List, Optional

from payment_intent_gateway.config import settings
from payment_intent_gateway.domain.exceptions import InferenceGatewayError
from payment_intent_gateway.domain.models import (
    FraudAssessment,
    PaymentIntent,
    risk_level_for_score,
)
from payment_intent_gateway.infrastructure.gateway.base import InferenceGateway
from payment_intent_gateway.infrastructure.observability.metrics import gateway_latency_histogram
from payment_intent_gateway.utils.json_tools import extract_json_object

logger = logging.getLogger(__name__)

DEFAULT_SCORE = 50

SCORING_SYSTEM_PROMPT = "You are a fraud detection specialist. Always respond with valid JSON."

SCORING_PROMPT = """Analyze this payment for fraud risk:
Input: "{user_input}"
Parsed: {intent_json}

Check for:
- Unusually high amounts
- Suspicious language patterns
- Urgent payment requests
- Missing critical information
- Social engineering indicators

Respond in JSON:
{{
  "riskLevel": "low|medium|high",
  "score": 0-100,
  "flags": ["array of specific risk factors found"],
  "recommendation": "brief recommendation"
}}"""


class UnparseableAssessment(ValueError):
    """Oracle answered, but not with a usable assessment"""


def build_scoring_prompt(user_input: str, intent: PaymentIntent) -> str:
    return SCORING_PROMPT.format(
        user_input=user_input,
        intent_json=intent.model_dump_json(by_alias=True, exclude_none=True),
    )


def _coerce_score(value: Any) -> int:
    if value is None:
        return DEFAULT_SCORE
    if isinstance(value, bool):
        raise UnparseableAssessment(f"score is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise UnparseableAssessment(f"score is not numeric: {value!r}") from e
    if not math.isfinite(number):
        raise UnparseableAssessment(f"score is not finite: {value!r}")

    score = int(round(number))
    if not 0 <= score <= 100:
        logger.warning("Risk score %s outside 0-100, clamping", score)
        score = min(max(score, 0), 100)
    return score


def _coerce_flags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(flag) for flag in value if flag is not None]
    raise UnparseableAssessment(f"flags is not a list: {type(value).__name__}")


def parse_assessment(text: str) -> FraudAssessment:
    """
    Parse oracle output into a FraudAssessment.

    The band is always derived from the score; the oracle's own riskLevel is
    advisory and is overridden when it disagrees.

    Raises:
        UnparseableAssessment: If no usable assessment can be read
    """
    payload = extract_json_object(text)
    if payload is None:
        raise UnparseableAssessment("No JSON object in scoring response")

    score = _coerce_score(payload.get("score"))
    flags = _coerce_flags(payload.get("flags"))
    risk_level = risk_level_for_score(score)

    advisory = payload.get("riskLevel")
    if advisory is not None and advisory != risk_level.value:
        logger.warning(
            "Advisory risk level overridden by score band",
            extra={"advisory_risk_level": advisory, "risk_level": risk_level.value, "risk_score": score},
        )

    recommendation = payload.get("recommendation")
    return FraudAssessment(
        risk_level=risk_level,
        score=score,
        flags=flags,
        recommendation=str(recommendation) if recommendation is not None else None,
    )


class RiskScorer:
    """Scores instructions through the inference gateway, degrading instead of failing"""

    def __init__(
        self,
        gateway: InferenceGateway,
        timeout_seconds: float | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        self.gateway = gateway
        self.timeout_seconds = settings.gateway_timeout_seconds if timeout_seconds is None else timeout_seconds
        self.temperature = settings.scoring_temperature if temperature is None else temperature
        self.max_tokens = settings.scoring_max_tokens if max_tokens is None else max_tokens

    async def assess(self, user_input: str, intent: PaymentIntent) -> FraudAssessment:
        """Return the oracle's assessment, or a fallback assessment if it cannot be had."""
        prompt = build_scoring_prompt(user_input, intent)

        text: Optional[str] = None
        try:
            with gateway_latency_histogram.labels(call_site="scoring").time():
                result = await asyncio.wait_for(
                    self.gateway.generate(
                        prompt,
                        system_prompt=SCORING_SYSTEM_PROMPT,
                        temperature=self.temperature,
                        max_tokens=self.max_tokens,
                        timeout_seconds=self.timeout_seconds,
                    ),
                    timeout=self.timeout_seconds,
                )
            if not result.is_empty:
                text = result.text
        except asyncio.TimeoutError:
            logger.warning("Risk scoring timed out after %ss", self.timeout_seconds)
        except InferenceGatewayError as e:
            logger.warning("Risk scoring gateway failure: %s", e)

        if text is None:
            logger.warning("Risk analysis unavailable, using fallback assessment", extra={"scoring_degraded": "unavailable"})
            return FraudAssessment.unavailable()

        try:
            return parse_assessment(text)
        except UnparseableAssessment as e:
            logger.warning(
                "Risk analysis error, using fallback assessment: %s",
                e,
                extra={"scoring_degraded": "analysis_error", "response_excerpt": text[:200]},
            )
            return FraudAssessment.analysis_error()
