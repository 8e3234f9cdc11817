"""Prometheus metrics for simulation volume, yields, and persistence health"""

from typing import Iterable
from prometheus_client import Counter, Histogram

# Simulation metrics
simulation_counter = Counter(
    "net_yield_simulation_total",
    "Total yield simulations computed",
    ["mode", "saved"],  # baseline | data_driven, true | false
)

monthly_return_histogram = Histogram(
    "net_yield_monthly_return_pct",
    "Baseline monthly net return as a percentage of purchase price",
    buckets=[0.0, 0.1, 0.25, 0.5, 0.75, 1.0, 1.5, 2.0, 5.0],
)

validation_failures_counter = Counter(
    "net_yield_validation_failures_total",
    "Rejected input fields by error code",
    ["code"],
)

# Persistence metrics
persistence_failures_counter = Counter(
    "net_yield_persistence_failures_total",
    "Failed simulation writes or reads",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_simulation(data_driven: bool, monthly_net_return_pct: float, saved: bool) -> None:
    """Record simulation volume by mode and the distribution of baseline returns"""
    mode = "data_driven" if data_driven else "baseline"
    simulation_counter.labels(mode=mode, saved=str(saved).lower()).inc()
    monthly_return_histogram.observe(monthly_net_return_pct)


def record_validation_failures(codes: Iterable[str]) -> None:
    for code in codes:
        validation_failures_counter.labels(code=code).inc()
