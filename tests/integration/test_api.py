"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "payment_pipeline_total" in response.text


def test_process_payment_sepa(make_client, dinner_extraction, low_risk_response):
    """Test POST /v1/process-payment with a SEPA instruction"""
    client, gateway = make_client(dinner_extraction, low_risk_response)

    response = client.post("/v1/process-payment", json={"userInput": "Pay John €50 for dinner tonight"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    data = body["data"]
    assert data["originalInput"] == "Pay John €50 for dinner tonight"
    assert data["intent"]["recipientName"] == "John"
    assert data["intent"]["suggestedPaymentType"] == "SEPA"
    assert data["fraudAssessment"]["riskLevel"] == "low"
    assert data["fraudAssessment"]["score"] == 10
    assert data["fraudAssessment"]["flags"] == []
    assert data["formattedPayment"]["paymentType"] == "SEPA"
    assert data["formattedPayment"]["creditorName"] == "John"
    assert data["formattedPayment"]["creditorIBAN"] is None
    assert data["formattedPayment"]["amount"] == 50
    assert data["formattedPayment"]["currency"] == "EUR"
    assert data["formattedPayment"]["remittanceInformation"] == "dinner"
    assert data["formattedPayment"]["executionDate"] == "2026-10-17"
    assert data["processingTimestamp"].startswith("2026-10-17T09:30:00")
    assert len(gateway.calls) == 2


def test_process_payment_faster_payments(make_client, low_risk_response):
    """Test POST /v1/process-payment with a UK instruction"""
    client, _ = make_client(
        {
            "recipientName": "Landlord Ltd",
            "iban": "GB29NWBK60161331926819",
            "amount": 120,
            "currency": "GBP",
            "reference": "rent payment for March apartment",
            "confidence": 0.8,
            "suggestedPaymentType": "FasterPayments",
        },
        low_risk_response,
    )

    response = client.post("/v1/process-payment", json={"userInput": "Pay my landlord £120 rent"})

    assert response.status_code == 200
    payment = response.json()["data"]["formattedPayment"]
    assert payment["paymentType"] == "FasterPayments"
    assert payment["payeeAccountNumber"] == "31926819"
    assert payment["sortCode"] == "601613"
    assert payment["reference"] == "rent payment for M"
    assert payment["currency"] == "GBP"
    assert payment["paymentDateTime"].startswith("2026-10-17T09:30:00")


def test_process_payment_scoring_degraded(make_client, dinner_extraction):
    """Scoring failure still returns a result with the fallback assessment"""
    client, _ = make_client(dinner_extraction, "")

    response = client.post("/v1/process-payment", json={"userInput": "Pay John €50 for dinner tonight"})

    assert response.status_code == 200
    assessment = response.json()["data"]["fraudAssessment"]
    assert assessment["riskLevel"] == "medium"
    assert assessment["score"] == 50
    assert assessment["flags"] == ["Analysis unavailable"]
    assert assessment["degraded"] == "unavailable"


def test_process_payment_extraction_failure(make_client):
    """Extraction failure returns 500 with no partial result"""
    client, gateway = make_client("")

    response = client.post("/v1/process-payment", json={"userInput": "Pay John €50 for dinner tonight"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to process payment intent"}
    assert len(gateway.calls) == 1


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"userInput": ""},
        {"userInput": 42},
        {"userInput": None},
        {"message": "Pay John"},
    ],
)
def test_process_payment_invalid_request(client: TestClient, body):
    """Missing, empty or non-string instructions are rejected"""
    response = client.post("/v1/process-payment", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid payment instruction"}


def test_request_id_header(client: TestClient):
    response = client.get("/health")
    assert response.headers["X-Request-ID"]

    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_process_payment_blank_instruction(make_client):
    """Whitespace-only instructions never reach the gateway"""
    client, gateway = make_client()

    response = client.post("/v1/process-payment", json={"userInput": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid payment instruction"}
    assert gateway.calls == []
