"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Summary


REQUEST_COUNTER = Counter(
	"gamehost_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"gamehost_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

SCORE_SUBMISSIONS = Counter(
	"gamehost_score_submissions_total",
	"Score submissions by outcome",
	["result"],
)

STATE_WRITES = Counter(
	"gamehost_state_writes_total",
	"Stored state writes by source",
	["source"],
)

POSTS_CREATED = Counter(
	"gamehost_posts_created_total",
	"Posts created through lifecycle hooks",
	["trigger", "result"],
)

REDIS_UP = Gauge("gamehost_redis_up", "Redis availability (1=up,0=down)")
REDIS_LATENCY = Summary("gamehost_redis_latency_seconds", "Redis ping latency (seconds)")


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_score_submission(result: str) -> None:
	SCORE_SUBMISSIONS.labels(result=result).inc()


def inc_state_write(source: str) -> None:
	STATE_WRITES.labels(source=source).inc()


def inc_post_created(trigger: str, result: str = "ok") -> None:
	POSTS_CREATED.labels(trigger=trigger, result=result).inc()


def mark_redis(ok: bool, *, latency_seconds: float | None = None) -> None:
	REDIS_UP.set(1 if ok else 0)
	if latency_seconds is not None:
		REDIS_LATENCY.observe(latency_seconds)
