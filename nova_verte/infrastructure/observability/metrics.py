"""Prometheus metrics for simulation volume, exports and storage health"""

from decimal import Decimal

from prometheus_client import Counter, Histogram

# Simulation metrics
simulation_counter = Counter(
    "nova_verte_simulation_total",
    "Total simulations requested",
    ["outcome"],  # success | validation_error
)

gross_amount_bucket_counter = Counter(
    "nova_verte_gross_amount_bucket",
    "Successful simulations by gross amount",
    ["bucket"],  # <R$1k, R$1k-R$10k, R$10k-R$100k, R$100k+
)

# Export metrics
export_counter = Counter(
    "nova_verte_export_total",
    "PDF exports",
    ["outcome"],  # success | no_result | failure
)

export_latency_histogram = Histogram(
    "nova_verte_export_seconds",
    "PDF render time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Storage metrics
persistence_failures_counter = Counter(
    "persistence_failures_total",
    "Failed state store operations",
    ["operation"],  # save | load | clear
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_simulation(success: bool, gross_total: Decimal | None = None) -> None:
    """Record simulation outcome and, on success, the size of the operation"""
    simulation_counter.labels(outcome="success" if success else "validation_error").inc()

    if not success or gross_total is None:
        return

    if gross_total < 1_000:
        bucket = "<R$1k"
    elif gross_total < 10_000:
        bucket = "R$1k-R$10k"
    elif gross_total < 100_000:
        bucket = "R$10k-R$100k"
    else:
        bucket = "R$100k+"

    gross_amount_bucket_counter.labels(bucket=bucket).inc()
