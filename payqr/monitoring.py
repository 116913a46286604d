"""Monitoring helpers and Prometheus metrics exporters."""
from __future__ import annotations

from typing import TYPE_CHECKING, Final, Iterable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

if TYPE_CHECKING:
    from .validators import ValidationIssue

_HTTP_REQUEST_TOTAL: Final = Counter(
    "payqr_http_requests_total",
    "Total HTTP requests",
    labelnames=("method", "route", "status"),
)
_HTTP_REQUEST_LATENCY: Final = Histogram(
    "payqr_http_request_duration_seconds",
    "Latency of HTTP requests",
    labelnames=("method", "route"),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1),
)
_SERVICE_ERRORS_TOTAL: Final = Counter(
    "payqr_service_errors_total",
    "Service-level errors by code",
    labelnames=("code", "route"),
)
_PAYLOADS_TOTAL: Final = Counter(
    "payqr_payloads_generated_total",
    "Payloads generated by kind",
    labelnames=("kind",),
)
_VALIDATION_ISSUES_TOTAL: Final = Counter(
    "payqr_validation_issues_total",
    "Validation issues reported by level",
    labelnames=("level",),
)


def observe_request(method: str, route: str, status_code: int, duration_ms: float) -> None:
    _HTTP_REQUEST_TOTAL.labels(method=method, route=route, status=str(status_code)).inc()
    _HTTP_REQUEST_LATENCY.labels(method=method, route=route).observe(duration_ms / 1000)


def record_service_error(code: str, route: str) -> None:
    _SERVICE_ERRORS_TOTAL.labels(code=code, route=route).inc()


def record_payload_generated(kind: str) -> None:
    _PAYLOADS_TOTAL.labels(kind=kind).inc()


def record_validation_issues(issues: Iterable["ValidationIssue"]) -> None:
    for issue in issues:
        _VALIDATION_ISSUES_TOTAL.labels(level=issue.level).inc()


def metrics_payload() -> tuple[bytes, str]:
    """Return Prometheus exposition payload and content type."""

    return generate_latest(), CONTENT_TYPE_LATEST
