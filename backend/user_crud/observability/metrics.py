"""Prometheus instruments for the users API, all under the ``user_crud`` namespace."""
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

NAMESPACE = "user_crud"

# Label for requests no route claimed; keeps 404 scans from minting new series.
UNMATCHED_ROUTE = "<unmatched>"

router = APIRouter()

HTTP_REQUESTS = Counter(
    "http_requests",
    "Requests served, by route template, method and status code.",
    ["route", "method", "status"],
    namespace=NAMESPACE,
)
HTTP_REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "Time spent serving a request, by route template.",
    ["route", "method"],
    namespace=NAMESPACE,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 30.0),
)
USER_OPERATIONS = Counter(
    "user_operations",
    "Data access operations on the users table, by outcome.",
    ["operation", "outcome"],
    namespace=NAMESPACE,
)


def observe_request(route: str, method: str, status_code: int, duration_s: float) -> None:
    HTTP_REQUESTS.labels(route=route, method=method, status=str(status_code)).inc()
    HTTP_REQUEST_DURATION.labels(route=route, method=method).observe(duration_s)


def count_operation(operation: str, outcome: str) -> None:
    USER_OPERATIONS.labels(operation=operation, outcome=outcome).inc()


@router.get("/metrics", include_in_schema=False)
def metrics_endpoint() -> PlainTextResponse:
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
