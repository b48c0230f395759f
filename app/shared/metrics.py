# app/shared/metrics.py
import time
from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest


class RequestMetrics:
    # one registry per app so repeated create_app() calls (tests) don't collide
    def __init__(self):
        self.registry = CollectorRegistry()
        self.requests = Counter(
            "http_requests_total", "Number of HTTP requests",
            ["method", "path"], registry=self.registry,
        )
        self.duration = Histogram(
            "http_request_duration_seconds", "Duration of HTTP requests",
            ["method", "path"], registry=self.registry,
        )

    def observe(self, method: str, path: str, seconds: float):
        self.requests.labels(method=method, path=path).inc()
        self.duration.labels(method=method, path=path).observe(seconds)

    def render(self) -> Response:
        return Response(content=generate_latest(self.registry), media_type=CONTENT_TYPE_LATEST)


def route_path(request: Request) -> str:
    """Route template (e.g. /events_for_day) if matched, else the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def install_metrics(app: FastAPI) -> RequestMetrics:
    metrics = RequestMetrics()
    app.state.metrics = metrics

    @app.middleware("http")
    async def _metrics_mw(request: Request, call_next):
        start = time.perf_counter()
        try:
            return await call_next(request)
        finally:
            metrics.observe(request.method, route_path(request), time.perf_counter() - start)

    @app.get("/metrics", tags=["Health"], include_in_schema=False)
    def prometheus_metrics():
        return metrics.render()

    return metrics
