"""Telemetry infrastructure (logging, metrics)."""

from fieldops.infrastructure.telemetry.logging import (
    ContextLogger,
    clear_request_context,
    configure_logging,
    get_logger,
    request_id_var,
    set_request_context,
    user_id_var,
)
from fieldops.infrastructure.telemetry.metrics import (
    record_http_request,
    record_identity_verification,
    record_submission_created,
    record_user_provisioned,
    set_service_info,
)

__all__ = [
    # Logging
    "ContextLogger",
    "configure_logging",
    "get_logger",
    "set_request_context",
    "clear_request_context",
    "request_id_var",
    "user_id_var",
    # Metrics
    "set_service_info",
    "record_http_request",
    "record_identity_verification",
    "record_submission_created",
    "record_user_provisioned",
]
