"""Prometheus metrics for monitoring quotes, refunds, host penalties and webhook performance"""

from typing import Optional
from prometheus_client import Counter, Histogram

# Quote metrics
quote_counter = Counter(
    "mukhymat_quote_total",
    "Total booking quotes calculated",
)

quote_amount_bucket_counter = Counter(
    "mukhymat_quote_amount_bucket",
    "Quoted booking totals by bucket",
    ["bucket"],  # 0-50, 50-200, 200-500, 500+
)

# Cancellation metrics
cancellation_counter = Counter(
    "mukhymat_cancellation_total",
    "Total cancellations calculated",
    ["initiated_by", "policy"],  # guest | host; flexible | moderate | strict | none
)

refund_percentage_counter = Counter(
    "mukhymat_refund_percentage_total",
    "Guest refunds issued by refund percentage",
    ["percentage"],
)

host_penalty_counter = Counter(
    "mukhymat_host_penalty_total",
    "Host penalties issued by penalty percentage",
    ["percentage"],
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Payout ledger webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_quote(total: float) -> None:
    """Record quote metrics for monitoring booking value distribution"""
    quote_counter.inc()

    if total < 50:
        bucket = "0-50"
    elif total < 200:
        bucket = "50-200"
    elif total < 500:
        bucket = "200-500"
    else:
        bucket = "500+"

    quote_amount_bucket_counter.labels(bucket=bucket).inc()


def record_cancellation(
    initiated_by: str,
    policy: Optional[str],
    refund_percentage: int,
    penalty_percentage: Optional[int] = None,
) -> None:
    """Record cancellation metrics for monitoring refund and penalty rates"""
    cancellation_counter.labels(initiated_by=initiated_by, policy=policy or "none").inc()
    refund_percentage_counter.labels(percentage=str(refund_percentage)).inc()

    if penalty_percentage is not None:
        host_penalty_counter.labels(percentage=str(penalty_percentage)).inc()
