"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from payment_intent_gateway.domain.models import PipelineResult

INVALID_INSTRUCTION_MESSAGE = "Invalid payment instruction"
PROCESSING_FAILED_MESSAGE = "Failed to process payment intent"


class ProcessPaymentRequest(BaseModel):
    """Request body for POST /v1/process-payment"""

    model_config = ConfigDict(populate_by_name=True)

    user_input: StrictStr = Field(..., alias="userInput", min_length=1, description="Free-text payment instruction")

    @field_validator("user_input")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("userInput must not be blank")
        return v


class ProcessPaymentResponse(BaseModel):
    """Response for POST /v1/process-payment"""

    success: bool = True
    data: PipelineResult


class ErrorResponse(BaseModel):
    """Error body for client and server failures"""

    error: str
