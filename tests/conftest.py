"""Pytest fixtures for testing"""

import json
from collections import deque
from datetime import datetime, timezone
from typing import Optional, Union

import pytest
from fastapi.testclient import TestClient

from payment_intent_gateway.api.dependencies import get_pipeline
from payment_intent_gateway.api.main import create_app
from payment_intent_gateway.domain.exceptions import InferenceGatewayError
from payment_intent_gateway.domain.extraction import IntentExtractor
from payment_intent_gateway.domain.pipeline import PaymentPipeline
from payment_intent_gateway.domain.risk import RiskScorer
from payment_intent_gateway.infrastructure.gateway.base import GatewayResult, InferenceGateway

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0, tzinfo=timezone.utc)

Scripted = Union[str, dict, Exception]


class ScriptedGateway(InferenceGateway):
    """Gateway that replays queued responses and records every prompt it receives"""

    name = "scripted"

    def __init__(self, *responses: Scripted):
        self.responses = deque(responses)
        self.calls: list[dict] = []

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 500,
        timeout_seconds: float = 10.0,
    ) -> GatewayResult:
        self.calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "timeout_seconds": timeout_seconds,
            }
        )
        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        text = json.dumps(response) if isinstance(response, dict) else response
        return GatewayResult(text=text, model="scripted-v1", provider=self.name)


def build_pipeline(*responses: Scripted) -> tuple[PaymentPipeline, ScriptedGateway]:
    gateway = ScriptedGateway(*responses)
    pipeline = PaymentPipeline(
        extractor=IntentExtractor(gateway, timeout_seconds=1.0),
        scorer=RiskScorer(gateway, timeout_seconds=1.0),
        clock=lambda: FIXED_NOW,
    )
    return pipeline, gateway


@pytest.fixture
def dinner_extraction() -> dict:
    """Extraction response for 'Pay John €50 for dinner tonight'"""
    return {
        "recipientName": "John",
        "amount": 50,
        "currency": "EUR",
        "reference": "dinner",
        "confidence": 0.9,
        "suggestedPaymentType": "SEPA",
    }


@pytest.fixture
def low_risk_response() -> dict:
    return {"riskLevel": "low", "score": 10, "flags": []}


@pytest.fixture
def gateway_failure() -> InferenceGatewayError:
    return InferenceGatewayError("Inference gateway error: 503")


@pytest.fixture
def make_client():
    """Create FastAPI test client whose pipeline replays the given responses"""

    def _make(*responses: Scripted) -> tuple[TestClient, ScriptedGateway]:
        app = create_app()
        pipeline, gateway = build_pipeline(*responses)
        app.dependency_overrides[get_pipeline] = lambda: pipeline
        return TestClient(app), gateway

    return _make


@pytest.fixture
def client() -> TestClient:
    """Test client with no scripted responses, for endpoints that never reach the gateway"""
    app = create_app()
    app.dependency_overrides[get_pipeline] = lambda: build_pipeline()[0]
    return TestClient(app)


@pytest.fixture
def pipeline_factory():
    """Build a pipeline (and its scripted gateway) from queued responses"""
    return build_pipeline


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
