"""Prometheus metrics for monitoring plan generation volume, failures and latency"""

from prometheus_client import Counter, Histogram

# Plan metrics
plans_generated_counter = Counter(
    "card_planner_plans_generated_total",
    "Total payment plans generated",
    ["strategy"],  # snowball | avalanche | utilization
)

constraint_violation_counter = Counter(
    "card_planner_constraint_violations_total",
    "Plan requests rejected because minimums exceed available cash",
)

solver_timeout_counter = Counter(
    "card_planner_solver_timeouts_total",
    "Plan requests that exceeded the solver time budget",
)

plan_generation_histogram = Histogram(
    "card_planner_plan_generation_seconds",
    "Time from solver submission to a finished plan",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_plan(strategy: str, duration_seconds: float) -> None:
    """Record a successfully generated plan"""
    plans_generated_counter.labels(strategy=strategy).inc()
    plan_generation_histogram.observe(duration_seconds)
