"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at the /metrics endpoint.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Booking lifecycle
booking_attempts = Counter(
    "eventra_booking_attempts_total",
    "Booking creation attempts",
    ["result"],  # created, capacity_exceeded, duplicate, not_found
)

booking_latency = Histogram(
    "eventra_booking_latency_seconds",
    "Time spent creating a booking",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

payments_processed = Counter(
    "eventra_payments_total",
    "Payments applied to bookings",
    ["result"],  # accepted, rejected
)

booking_cancellations = Counter(
    "eventra_booking_cancellations_total",
    "Bookings cancelled",
)

check_ins = Counter(
    "eventra_check_ins_total",
    "Check-ins recorded",
    ["kind"],  # booking, attendee
)

# Registrations (RSVP flow)
registrations = Counter(
    "eventra_registrations_total",
    "Event registration attempts",
    ["result"],  # registered, full, duplicate, cancelled
)

# Cache
cache_operations = Counter(
    "eventra_cache_operations_total",
    "Cache operations",
    ["operation", "result"],  # get/set/invalidate, hit/miss/ok/error
)


def metrics_endpoint() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_booking_attempt(result: str) -> None:
    booking_attempts.labels(result=result).inc()


def record_payment(accepted: bool) -> None:
    payments_processed.labels(result="accepted" if accepted else "rejected").inc()


def record_check_in(kind: str) -> None:
    check_ins.labels(kind=kind).inc()


def record_registration(result: str) -> None:
    registrations.labels(result=result).inc()


def record_cache_operation(operation: str, result: str) -> None:
    cache_operations.labels(operation=operation, result=result).inc()
