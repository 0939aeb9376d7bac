"""Prometheus metrics configuration."""

from prometheus_client import Counter, Histogram, Info

# Service info
SERVICE_INFO = Info("fieldops", "Field operations API service information")

# Request metrics
HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# Identity provider metrics
IDENTITY_VERIFICATIONS_TOTAL = Counter(
    "identity_verifications_total",
    "Bearer token verifications by outcome",
    ["outcome"],  # verified / rejected / unavailable
)

IDENTITY_PROVIDER_DURATION_SECONDS = Histogram(
    "identity_provider_duration_seconds",
    "Identity provider call latency in seconds (all attempts)",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# Business metrics
SUBMISSIONS_CREATED_TOTAL = Counter(
    "submissions_created_total",
    "Visit reports created",
    ["service_type"],
)

USERS_PROVISIONED_TOTAL = Counter(
    "users_provisioned_total",
    "Local users created on first sight",
)


def set_service_info(version: str, environment: str) -> None:
    """Set service information metric."""
    SERVICE_INFO.info({"version": version, "environment": environment})


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record HTTP request metrics."""
    HTTP_REQUESTS_TOTAL.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()
    HTTP_REQUEST_DURATION_SECONDS.labels(
        method=method,
        endpoint=endpoint,
    ).observe(duration_seconds)


def record_identity_verification(outcome: str, duration_seconds: float | None = None) -> None:
    """Record the outcome of one bearer token verification."""
    IDENTITY_VERIFICATIONS_TOTAL.labels(outcome=outcome).inc()
    if duration_seconds is not None:
        IDENTITY_PROVIDER_DURATION_SECONDS.observe(duration_seconds)


def record_submission_created(service_type: str) -> None:
    SUBMISSIONS_CREATED_TOTAL.labels(service_type=service_type).inc()


def record_user_provisioned() -> None:
    USERS_PROVISIONED_TOTAL.inc()
