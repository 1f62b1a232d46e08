"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Request

from payment_intent_gateway.domain.pipeline import PaymentPipeline
from payment_intent_gateway.infrastructure.gateway.base import InferenceGateway
from payment_intent_gateway.infrastructure.gateway.factory import build_gateway


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache
def get_gateway() -> InferenceGateway:
    """Provide the configured inference gateway, built once per process"""
    return build_gateway()


def get_pipeline() -> PaymentPipeline:
    """Provide a payment pipeline wired to the configured inference gateway"""
    return PaymentPipeline.from_gateway(get_gateway())
