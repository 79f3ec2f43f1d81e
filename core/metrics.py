"""
Prometheus metrics for the license tracker.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Gauge, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License key metrics
license_verifications_total = Counter(
    "license_verifications_total",
    "Total license key verifications",
    ["status"],
)

heartbeats_total = Counter(
    "heartbeats_total",
    "Total heartbeats received",
    ["status"],
)

license_keys_created_total = Counter(
    "license_keys_created_total",
    "Total license keys created",
)

license_keys_toggled_total = Counter(
    "license_keys_toggled_total",
    "Total license key activation toggles",
    ["status"],
)

# Current state metrics
license_keys_online = Gauge(
    "license_keys_online",
    "License keys with a heartbeat inside the online window at last stats read",
)

# Authorization metrics
admin_auth_failures_total = Counter(
    "admin_auth_failures_total",
    "Total rejected administrative requests",
)

# Access log metrics
access_log_write_failures_total = Counter(
    "access_log_write_failures_total",
    "Access log appends that failed and were dropped",
)

access_log_pruned_total = Counter(
    "access_log_pruned_total",
    "Access log events deleted by retention",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
