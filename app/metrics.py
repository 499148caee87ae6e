"""Prometheus metrics for served requests, labelled by route template."""

from prometheus_client import Counter, Histogram
from starlette.requests import Request

UNMATCHED_ROUTE = "unmatched"

REQUESTS = Counter(
    "world_api_requests_total",
    "Requests served by the World API",
    ["method", "route", "status_code"],
)
REQUEST_SECONDS = Histogram(
    "world_api_request_duration_seconds",
    "Time spent serving World API requests",
    ["route"],
)


def route_template(request: Request) -> str:
    """Return the matched route path (e.g. ``/api/v1/cities``).

    Requests that matched no route share one label so unknown paths
    cannot grow the label set.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def observe_request(request: Request, status_code: int, duration_s: float):
    route = route_template(request)
    REQUESTS.labels(
        method=request.method, route=route, status_code=status_code
    ).inc()
    REQUEST_SECONDS.labels(route=route).observe(duration_s)
