# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "launchlist_requests_total",
    "Total HTTP requests to the waitlist service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "launchlist_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "launchlist_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
SIGNUPS_TOTAL = Counter(
    "waitlist_signups_total",
    "Signup submissions by outcome",
    ["outcome"],
)
ADMIN_LOGIN_ATTEMPTS = Counter(
    "admin_login_attempts_total",
    "Admin login attempts by result",
    ["result"],
)
DASHBOARD_BUILD = Histogram(
    "dashboard_build_seconds",
    "Time taken to compute one dashboard snapshot",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)
