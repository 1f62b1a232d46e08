"""Prometheus metrics for pipeline outcomes, risk distribution, and gateway latency"""

from prometheus_client import Counter, Histogram

# Pipeline metrics
pipeline_counter = Counter(
    "payment_pipeline_total",
    "Total payment instructions processed",
    ["outcome"],  # success | extraction_failed
)

extraction_failure_counter = Counter(
    "payment_extraction_failures_total",
    "Failed intent extractions",
    ["reason"],  # NoResponse | MalformedResponse
)

scoring_degraded_counter = Counter(
    "payment_scoring_degraded_total",
    "Risk assessments replaced by a fallback",
    ["reason"],  # unavailable | analysis_error
)

risk_level_counter = Counter(
    "payment_risk_level_total",
    "Risk assessments by band",
    ["risk_level"],  # low | medium | high
)

formatted_payment_counter = Counter(
    "payment_formatted_total",
    "Formatted payments by scheme",
    ["scheme"],  # SEPA | FasterPayments | Unformatted
)

# Inference gateway metrics
gateway_latency_histogram = Histogram(
    "inference_gateway_latency_seconds",
    "Inference gateway response time",
    ["call_site"],  # extraction | scoring
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_pipeline_success(risk_level: str, scoring_degraded: str | None, scheme: str) -> None:
    """Record metrics for a completed pipeline run"""
    pipeline_counter.labels(outcome="success").inc()
    risk_level_counter.labels(risk_level=risk_level).inc()
    formatted_payment_counter.labels(scheme=scheme).inc()
    if scoring_degraded:
        scoring_degraded_counter.labels(reason=scoring_degraded).inc()


def record_extraction_failure(reason: str) -> None:
    """Record an aborted pipeline run"""
    pipeline_counter.labels(outcome="extraction_failed").inc()
    extraction_failure_counter.labels(reason=reason).inc()
