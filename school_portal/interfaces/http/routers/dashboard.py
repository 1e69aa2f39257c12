import structlog
from fastapi import APIRouter, Depends, Request

from ....application.collections import PortalRepository
from ....application.use_cases.dashboard import compute_dashboard_metrics
from ..authz import require_admin
from ..deps import get_repository
from ..schemas import DashboardOut

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"], dependencies=[Depends(require_admin)])
logger = structlog.get_logger()

@router.get("/metrics", response_model=DashboardOut)
def dashboard_metrics(request: Request, repo: PortalRepository = Depends(get_repository)):
    # снимок действителен, только пока фоновый опрос жив
    sync = getattr(request.app.state, "dashboard_sync", None)
    snapshot = getattr(request.app.state, "dashboard_metrics", None)
    if sync is not None and not sync.running and snapshot is not None:
        logger.warning("dashboard_poller_stopped", ticks=sync.ticks)
    if sync is None or not sync.running or snapshot is None:
        return compute_dashboard_metrics(repo)
    return snapshot
