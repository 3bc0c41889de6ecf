"""Prometheus metrics for approval rates, trust tiers and bank verification"""

from prometheus_client import Counter, Histogram

# Application metrics
application_counter = Counter(
    "trustrail_application_total",
    "Total payment applications scored",
    ["status", "payment_type"],  # approved | under_review | declined
)

trust_tier_counter = Counter(
    "trustrail_trust_tier_total",
    "Scored applications by trust tier",
    ["tier"],
)

trust_score_histogram = Histogram(
    "trustrail_trust_score",
    "Distribution of computed trust scores",
    buckets=[20, 40, 60, 70, 80, 90, 100],
)

notification_counter = Counter(
    "trustrail_notifications_total",
    "Notifications created for businesses",
    ["type"],
)

# Bank API metrics
bank_latency_histogram = Histogram(
    "bank_verification_latency_seconds",
    "Bank account verification response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

bank_verification_failures_counter = Counter(
    "bank_verification_failures_total",
    "Failed bank verification calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_application(status: str, payment_type: str, tier: str, trust_score: int) -> None:
    """Record scoring metrics for monitoring approval rates and tier distribution"""
    application_counter.labels(status=status, payment_type=payment_type).inc()
    trust_tier_counter.labels(tier=tier).inc()
    trust_score_histogram.observe(trust_score)


def record_notification(notification_type: str) -> None:
    notification_counter.labels(type=notification_type).inc()
