"""Pipeline orchestration - extract, assess, format"""

import logging
from datetime import datetime
from typing import Callable

from payment_intent_gateway.domain.exceptions import (
    ExtractionError,
    PipelineError,
    PipelineFailureReason,
)
from payment_intent_gateway.domain.extraction import IntentExtractor
from payment_intent_gateway.domain.formatting import format_payment
from payment_intent_gateway.domain.models import PipelineResult
from payment_intent_gateway.domain.risk import RiskScorer
from payment_intent_gateway.infrastructure.gateway.base import InferenceGateway
from payment_intent_gateway.infrastructure.observability.metrics import (
    record_extraction_failure,
    record_pipeline_success,
)
from payment_intent_gateway.utils.date_utils import utc_now

logger = logging.getLogger(__name__)


class PaymentPipeline:
    """Sequences IntentExtractor -> RiskScorer -> format_payment for one instruction"""

    def __init__(
        self,
        extractor: IntentExtractor,
        scorer: RiskScorer,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.extractor = extractor
        self.scorer = scorer
        self.clock = clock

    @classmethod
    def from_gateway(cls, gateway: InferenceGateway, timeout_seconds: float | None = None) -> "PaymentPipeline":
        """Build a pipeline whose two call sites share one gateway"""
        return cls(
            extractor=IntentExtractor(gateway, timeout_seconds=timeout_seconds),
            scorer=RiskScorer(gateway, timeout_seconds=timeout_seconds),
        )

    async def process(self, user_input: str) -> PipelineResult:
        """
        Process one payment instruction.

        Flow:
        1. Extract a PaymentIntent (failure aborts the run)
        2. Assess fraud risk against the intent (degrades, never fails)
        3. Format for the suggested scheme (never fails)

        Raises:
            PipelineError: ExtractionFailed, chained from the ExtractionError
        """
        try:
            intent = await self.extractor.extract(user_input)
        except ExtractionError as e:
            record_extraction_failure(e.reason.value)
            logger.error(
                "Intent extraction failed: %s",
                e,
                extra={"step": "extraction", "reason": e.reason.value},
            )
            raise PipelineError(PipelineFailureReason.EXTRACTION_FAILED, str(e)) from e

        assessment = await self.scorer.assess(user_input, intent)

        now = self.clock()
        formatted = format_payment(intent, now)

        record_pipeline_success(
            assessment.risk_level.value,
            assessment.degraded.value if assessment.degraded else None,
            formatted.payment_type,
        )

        return PipelineResult(
            original_input=user_input,
            intent=intent,
            fraud_assessment=assessment,
            formatted_payment=formatted,
            processing_timestamp=now,
        )
