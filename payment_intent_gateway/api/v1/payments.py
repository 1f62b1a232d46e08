"""POST /v1/process-payment - natural-language payment instruction endpoint"""

import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from payment_intent_gateway.api.dependencies import get_pipeline, get_request_id
from payment_intent_gateway.api.v1.schemas import (
    PROCESSING_FAILED_MESSAGE,
    ErrorResponse,
    ProcessPaymentRequest,
    ProcessPaymentResponse,
)
from payment_intent_gateway.domain.exceptions import PipelineError
from payment_intent_gateway.domain.pipeline import PaymentPipeline
from payment_intent_gateway.infrastructure.observability.logging import log_pipeline_result

router = APIRouter()


@router.post(
    "/process-payment",
    response_model=ProcessPaymentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def process_payment(
    request_body: ProcessPaymentRequest,
    request: Request,
    pipeline: PaymentPipeline = Depends(get_pipeline),
):
    """
    Turn a free-text instruction into a scheme-formatted payment with a risk assessment.

    Flow:
    1. Extract payment intent via the inference gateway
    2. Score fraud risk (falls back to a neutral assessment on failure)
    3. Format as SEPA / Faster Payments, or leave unformatted
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = await pipeline.process(request_body.user_input)

    except PipelineError as e:
        logging.error(f"Payment processing error: {e}", extra={"request_id": request_id, "reason": e.reason.value})
        return JSONResponse(status_code=500, content={"error": PROCESSING_FAILED_MESSAGE})

    except Exception as e:
        logging.exception(f"Unexpected error: {e}", extra={"request_id": request_id})
        return JSONResponse(status_code=500, content={"error": PROCESSING_FAILED_MESSAGE})

    duration_ms = (time.time() - start_time) * 1000
    assessment = result.fraud_assessment
    log_pipeline_result(
        request_id,
        assessment.risk_level.value,
        assessment.score,
        assessment.degraded.value if assessment.degraded else None,
        result.formatted_payment.payment_type,
        duration_ms,
    )

    return ProcessPaymentResponse(data=result)
