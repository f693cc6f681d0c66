"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Gauge, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "notaire_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "notaire_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ============================================================
# Ledger Metrics
# ============================================================

mints_total = Counter(
    "notaire_mints_total",
    "Asset mint attempts",
    ["status"],
)

transfers_total = Counter(
    "notaire_transfers_total",
    "Asset transfer attempts",
    ["status"],
)

# ============================================================
# Anchoring Metrics
# ============================================================

anchor_steps_total = Counter(
    "notaire_anchor_steps_total",
    "Optional anchoring step outcomes",
    ["step", "outcome"],
)

backend_requests_total = Counter(
    "notaire_backend_requests_total",
    "Total requests to optional backends",
    ["service", "operation"],
)

backend_errors_total = Counter(
    "notaire_backend_errors_total",
    "Total optional backend errors",
    ["service", "error_type"],
)

backend_request_duration_seconds = Histogram(
    "notaire_backend_request_duration_seconds",
    "Optional backend request duration in seconds",
    ["service", "operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

circuit_breaker_state = Gauge(
    "notaire_circuit_breaker_state",
    "Circuit breaker state (0=closed, 1=open, 2=half_open)",
    ["service"],
)

# ============================================================
# OTP Metrics
# ============================================================

otp_issued_total = Counter(
    "notaire_otp_issued_total",
    "OTP codes issued",
    ["delivered"],
)

otp_verifications_total = Counter(
    "notaire_otp_verifications_total",
    "OTP verification outcomes",
    ["status"],
)
