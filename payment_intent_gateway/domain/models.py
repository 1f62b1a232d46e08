"""Domain models - immutable pydantic records exchanged between pipeline stages"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_CURRENCY = "EUR"
FASTER_PAYMENTS_CURRENCY = "GBP"
FASTER_PAYMENTS_REFERENCE_LIMIT = 18

# Score bands: [0, 30) low, [30, 70) medium, [70, 100] high
MEDIUM_RISK_THRESHOLD = 30
HIGH_RISK_THRESHOLD = 70


class PaymentType(str, Enum):
    SEPA = "SEPA"
    FASTER_PAYMENTS = "FasterPayments"
    UNKNOWN = "Unknown"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ScoringDegraded(str, Enum):
    """Why a fallback assessment was substituted for the oracle's answer"""

    UNAVAILABLE = "unavailable"
    ANALYSIS_ERROR = "analysis_error"


def risk_level_for_score(score: int) -> RiskLevel:
    """Map a 0-100 risk score to its band. Single source of truth for banding."""
    if score < MEDIUM_RISK_THRESHOLD:
        return RiskLevel.LOW
    elif score < HIGH_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.HIGH


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PaymentIntent(_Record):
    """Structured payment request extracted from free text"""

    recipient_name: Optional[str] = None
    iban: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    currency: str = DEFAULT_CURRENCY
    reference: Optional[str] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    suggested_payment_type: PaymentType = PaymentType.UNKNOWN
    reasoning: Optional[str] = None

    @field_validator("currency", mode="before")
    @classmethod
    def default_currency(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CURRENCY
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("confidence", mode="before")
    @classmethod
    def default_confidence(cls, v):
        return 0.0 if v is None else v

    @field_validator("suggested_payment_type", mode="before")
    @classmethod
    def normalize_payment_type(cls, v):
        # Anything outside the enum is treated as undeterminable
        if isinstance(v, PaymentType):
            return v
        for payment_type in PaymentType:
            if v == payment_type.value:
                return payment_type
        return PaymentType.UNKNOWN


class FraudAssessment(_Record):
    """Risk evaluation of a single instruction"""

    risk_level: RiskLevel
    score: int = Field(ge=0, le=100)
    flags: List[str] = Field(default_factory=list)
    recommendation: Optional[str] = None
    degraded: Optional[ScoringDegraded] = None

    @model_validator(mode="after")
    def level_matches_score(self) -> "FraudAssessment":
        expected = risk_level_for_score(self.score)
        if self.risk_level != expected:
            raise ValueError(
                f"risk level {self.risk_level.value!r} disagrees with score {self.score} "
                f"(expected {expected.value!r})"
            )
        return self

    @classmethod
    def unavailable(cls) -> "FraudAssessment":
        return cls(
            risk_level=RiskLevel.MEDIUM,
            score=50,
            flags=["Analysis unavailable"],
            degraded=ScoringDegraded.UNAVAILABLE,
        )

    @classmethod
    def analysis_error(cls) -> "FraudAssessment":
        return cls(
            risk_level=RiskLevel.MEDIUM,
            score=50,
            flags=["Analysis error"],
            degraded=ScoringDegraded.ANALYSIS_ERROR,
        )


class SEPAPayment(_Record):
    payment_type: Literal["SEPA"] = "SEPA"
    creditor_name: Optional[str] = None
    creditor_iban: Optional[str] = Field(default=None, alias="creditorIBAN")
    amount: Optional[float] = None
    currency: str = DEFAULT_CURRENCY
    remittance_information: Optional[str] = None
    execution_date: date


class FasterPaymentsPayment(_Record):
    payment_type: Literal["FasterPayments"] = "FasterPayments"
    payee_name: Optional[str] = None
    payee_account_number: Optional[str] = None
    sort_code: Optional[str] = None
    amount: Optional[float] = None
    currency: Literal["GBP"] = FASTER_PAYMENTS_CURRENCY
    reference: Optional[str] = Field(default=None, max_length=FASTER_PAYMENTS_REFERENCE_LIMIT)
    payment_date_time: datetime


class Unformatted(_Record):
    payment_type: Literal["Unformatted"] = "Unformatted"
    reason: str = "Payment scheme could not be determined"


FormattedPayment = Annotated[
    Union[SEPAPayment, FasterPaymentsPayment, Unformatted],
    Field(discriminator="payment_type"),
]


class PipelineResult(_Record):
    """Aggregate returned to the caller for one processed instruction"""

    original_input: str
    intent: PaymentIntent
    fraud_assessment: FraudAssessment
    formatted_payment: FormattedPayment
    processing_timestamp: datetime
