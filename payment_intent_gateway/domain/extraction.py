"""Intent extraction - turns a free-text instruction into a validated PaymentIntent"""

import asyncio
import logging

from pydantic import ValidationError

from payment_intent_gateway.config import settings
from payment_intent_gateway.domain.exceptions import (
    ExtractionError,
    ExtractionFailureReason,
    InferenceGatewayError,
)
from payment_intent_gateway.domain.models import PaymentIntent
from payment_intent_gateway.infrastructure.gateway.base import InferenceGateway
from payment_intent_gateway.infrastructure.observability.metrics import gateway_latency_histogram
from payment_intent_gateway.utils.json_tools import extract_json_object

logger = logging.getLogger(__name__)

EXTRACTION_SYSTEM_PROMPT = "You are a payment processing expert. Always respond with valid JSON."

EXTRACTION_PROMPT = """Analyze this payment instruction and extract structured data.
Instruction: "{user_input}"

Extract the following information and respond in JSON format:
{{
  "recipientName": "extracted name or null",
  "amount": "extracted amount as number or null",
  "currency": "extracted currency (EUR, GBP, etc.) or null",
  "reference": "extracted payment reference or suggested reference",
  "confidence": "confidence score 0-1",
  "suggestedPaymentType": "SEPA for EUR transactions, FasterPayments for GBP, Unknown otherwise",
  "iban": "if IBAN detected or null",
  "reasoning": "brief explanation of extraction"
}}

Rules:
- If amount contains currency symbol, extract both
- For names like "John", suggest full reference like "Payment to John"
- SEPA for EUR/European banks, FasterPayments for UK banks
- Be conservative with confidence scores"""


def build_extraction_prompt(user_input: str) -> str:
    return EXTRACTION_PROMPT.format(user_input=user_input)


def parse_intent(text: str) -> PaymentIntent:
    """
    Parse oracle output into a PaymentIntent.

    Raises:
        ExtractionError: MalformedResponse when no JSON object is found or
            the object does not validate (e.g. negative amount)
    """
    payload = extract_json_object(text)
    if payload is None:
        raise ExtractionError(
            ExtractionFailureReason.MALFORMED_RESPONSE,
            "No JSON object in extraction response",
        )

    try:
        return PaymentIntent.model_validate(payload)
    except ValidationError as e:
        raise ExtractionError(
            ExtractionFailureReason.MALFORMED_RESPONSE,
            f"Extraction response does not match schema: {e.error_count()} error(s)",
        ) from e


class IntentExtractor:
    """Calls the inference gateway once per instruction and validates its answer"""

    def __init__(
        self,
        gateway: InferenceGateway,
        timeout_seconds: float | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        self.gateway = gateway
        self.timeout_seconds = settings.gateway_timeout_seconds if timeout_seconds is None else timeout_seconds
        self.temperature = settings.extraction_temperature if temperature is None else temperature
        self.max_tokens = settings.extraction_max_tokens if max_tokens is None else max_tokens

    async def extract(self, user_input: str) -> PaymentIntent:
        """
        Extract a PaymentIntent from *user_input*.

        No retries: a single empty or malformed response fails the call.

        Raises:
            ValueError: If *user_input* is empty
            ExtractionError: NoResponse on empty content, gateway error or
                timeout; MalformedResponse on unparseable content
        """
        if not user_input or not user_input.strip():
            raise ValueError("user_input must be a non-empty string")

        prompt = build_extraction_prompt(user_input)

        try:
            with gateway_latency_histogram.labels(call_site="extraction").time():
                result = await asyncio.wait_for(
                    self.gateway.generate(
                        prompt,
                        system_prompt=EXTRACTION_SYSTEM_PROMPT,
                        temperature=self.temperature,
                        max_tokens=self.max_tokens,
                        timeout_seconds=self.timeout_seconds,
                    ),
                    timeout=self.timeout_seconds,
                )
        except asyncio.TimeoutError as e:
            raise ExtractionError(
                ExtractionFailureReason.NO_RESPONSE,
                f"Inference gateway timeout after {self.timeout_seconds}s",
            ) from e
        except InferenceGatewayError as e:
            raise ExtractionError(ExtractionFailureReason.NO_RESPONSE, str(e)) from e

        if result.is_empty:
            raise ExtractionError(ExtractionFailureReason.NO_RESPONSE, "No AI response received")

        try:
            return parse_intent(result.text)
        except ExtractionError:
            logger.warning(
                "Failed to parse extraction response",
                extra={"provider": result.provider, "response_excerpt": result.text[:200]},
            )
            raise
