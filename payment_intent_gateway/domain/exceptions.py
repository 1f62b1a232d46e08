"""Domain-specific exceptions"""

from enum import Enum


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InferenceGatewayError(DomainException):
    """Inference gateway timed out, returned an error status or an unreadable body"""

    pass


class ExtractionFailureReason(str, Enum):
    NO_RESPONSE = "NoResponse"
    MALFORMED_RESPONSE = "MalformedResponse"


class PipelineFailureReason(str, Enum):
    EXTRACTION_FAILED = "ExtractionFailed"


class ExtractionError(DomainException):
    """Gateway output could not be turned into a PaymentIntent"""

    def __init__(self, reason: ExtractionFailureReason, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)


class PipelineError(DomainException):
    """Pipeline aborted; no partial result is produced"""

    def __init__(self, reason: PipelineFailureReason, message: str = ""):
        self.reason = reason
        super().__init__(message or reason.value)
