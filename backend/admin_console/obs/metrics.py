"""Central registry for Prometheus metrics used across the console API."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Summary

REQUEST_COUNTER = Counter(
	"admin_console_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"admin_console_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

ENTITY_MUTATIONS = Counter(
	"admin_console_entity_mutations_total",
	"Successful writes by entity and operation",
	["entity", "operation"],
)

STORAGE_ERRORS = Counter(
	"admin_console_storage_errors_total",
	"Database failures translated for API callers",
	["kind"],
)

POSTGRES_UP = Gauge("admin_console_postgres_up", "Postgres availability (1=up,0=down)")
POSTGRES_LATENCY = Summary("admin_console_postgres_latency_seconds", "Postgres ping latency (seconds)")


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_entity_mutation(entity: str, operation: str) -> None:
	ENTITY_MUTATIONS.labels(entity=entity, operation=operation).inc()


def inc_storage_error(kind: str) -> None:
	STORAGE_ERRORS.labels(kind=kind).inc()


def mark_postgres(ok: bool, *, latency_seconds: float | None = None) -> None:
	POSTGRES_UP.set(1 if ok else 0)
	if latency_seconds is not None:
		POSTGRES_LATENCY.observe(latency_seconds)
