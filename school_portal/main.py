import time
import logging
import structlog
from fastapi import FastAPI, Request
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .application.collections import PortalRepository
from .application.sync import PollingSync
from .application.use_cases.dashboard import compute_dashboard_metrics
from .infrastructure.db import engine
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds,
    poll_ticks_total,
    attendance_compliance_percent,
    active_live_classes,
)
from .infrastructure.store import build_store
from .interfaces.http.routers import (
    auth as auth_router,
    users as users_router,
    school as school_router,
    chat as chat_router,
    attendance as attendance_router,
    fees as fees_router,
    results as results_router,
    homework as homework_router,
    live_classes as live_classes_router,
    notices as notices_router,
    dashboard as dashboard_router,
)
from .config import settings

# Настройка структурированного логирования
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="School Portal Service", version="0.1.0")

# хранилище создаётся один раз и передаётся через зависимость get_store
app.state.store = build_store()
app.state.limiter = auth_router.limiter
app.state.dashboard_metrics = None
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.middleware("http")
async def add_charset_header(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    response = await call_next(request)

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    # Метрики
    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    # Логирование
    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


def _publish_metrics(snapshot):
    poll_ticks_total.labels(view="dashboard").inc()
    app.state.dashboard_metrics = snapshot
    attendance_compliance_percent.set(float(snapshot.compliance))
    active_live_classes.set(snapshot.active_live_classes)


@app.on_event("startup")
async def on_startup():
    logger.info("Starting school portal service", version="0.1.0", store=settings.STORE_BACKEND)
    if settings.STORE_BACKEND == "sql":
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ready")

    repo = PortalRepository(app.state.store)
    app.state.dashboard_sync = PollingSync(
        name="dashboard",
        read=lambda: compute_dashboard_metrics(repo),
        on_snapshot=_publish_metrics,
        interval=settings.METRICS_POLL_SECONDS,
    )
    app.state.dashboard_sync.start().add_done_callback(_report_poller_exit)


def _report_poller_exit(task):
    if not task.cancelled() and task.exception() is not None:
        logger.error("dashboard_poller_failed", error=str(task.exception()))


@app.on_event("shutdown")
async def on_shutdown():
    sync = getattr(app.state, "dashboard_sync", None)
    # упавший опрос уже залогирован в _report_poller_exit
    if sync is not None and sync.running:
        await sync.stop()
    app.state.dashboard_metrics = None
    logger.info("School portal service stopped")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


for module in (auth_router, users_router, school_router, chat_router, attendance_router,
               fees_router, results_router, homework_router, live_classes_router,
               notices_router, dashboard_router):
    app.include_router(module.router)
