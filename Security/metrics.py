"""
SECURITY METRICS
================
Prometheus-backed counters for token, cipher and record events.
"""

from __future__ import annotations

import os

from prometheus_client import Counter, Gauge


_TOKENS_ISSUED = None
_AUTH_FAILURES = None
_CIPHER_FAILURES = None
_RECORD_OPERATIONS = None
_ENCRYPTION_ENABLED = None


def _enabled() -> bool:
    return os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"


def _init_metrics() -> None:
    global _TOKENS_ISSUED, _AUTH_FAILURES, _CIPHER_FAILURES, _RECORD_OPERATIONS, _ENCRYPTION_ENABLED
    if _TOKENS_ISSUED is not None or not _enabled():
        return
    _TOKENS_ISSUED = Counter(
        "record_service_tokens_issued_total",
        "Count of bearer tokens issued",
    )
    _AUTH_FAILURES = Counter(
        "record_service_auth_failures_total",
        "Count of rejected authentication attempts",
        ["kind"],
    )
    _CIPHER_FAILURES = Counter(
        "record_service_cipher_failures_total",
        "Count of field encryption/decryption failures",
        ["kind"],
    )
    _RECORD_OPERATIONS = Counter(
        "record_service_record_operations_total",
        "Count of record operations passed through the record gate",
        ["operation"],
    )
    _ENCRYPTION_ENABLED = Gauge(
        "record_service_encryption_enabled",
        "Whether field encryption at rest is enabled (1/0)",
    )


def increment_tokens_issued() -> None:
    _init_metrics()
    if _TOKENS_ISSUED is None:
        return
    _TOKENS_ISSUED.inc()


def increment_auth_failure(kind: str) -> None:
    _init_metrics()
    if _AUTH_FAILURES is None:
        return
    _AUTH_FAILURES.labels(kind=kind).inc()


def increment_cipher_failure(kind: str) -> None:
    _init_metrics()
    if _CIPHER_FAILURES is None:
        return
    _CIPHER_FAILURES.labels(kind=kind).inc()


def increment_record_operation(operation: str) -> None:
    _init_metrics()
    if _RECORD_OPERATIONS is None:
        return
    _RECORD_OPERATIONS.labels(operation=operation).inc()


def set_encryption_enabled(enabled: bool) -> None:
    _init_metrics()
    if _ENCRYPTION_ENABLED is None:
        return
    _ENCRYPTION_ENABLED.set(1 if enabled else 0)


def metrics_enabled() -> bool:
    return _enabled()
