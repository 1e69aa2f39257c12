import asyncio
from unittest.mock import MagicMock, patch

from school_portal.application.dto import DashboardMetrics
from school_portal.application.sync import PollingSync
from school_portal.application.use_cases.dashboard import compute_dashboard_metrics
from school_portal.infrastructure.metrics import attendance_compliance_percent
from school_portal.main import app, _publish_metrics, _report_poller_exit


def test_metrics_on_seed_data(repo):
    metrics = compute_dashboard_metrics(repo)
    assert metrics.compliance == "0.0"
    assert metrics.student_count == 8
    assert metrics.active_live_classes == 1
    assert metrics.notice_count == 1


def test_dashboard_endpoint_counts_present_and_late(client, login):
    """Тест: LATE учитывается как присутствие"""
    teacher = login("TCH-001")
    client.post("/api/attendance", headers=teacher, json={"student_id": "s1", "class_id": "CLASS-001", "status": "PRESENT"})
    client.post("/api/attendance", headers=teacher, json={"student_id": "s2", "class_id": "CLASS-002", "status": "LATE"})
    client.post("/api/attendance", headers=teacher, json={"student_id": "s3", "class_id": "CLASS-003", "status": "ABSENT"})

    response = client.get("/api/dashboard/metrics", headers=login("ADM-001"))
    assert response.status_code == 200
    data = response.json()
    assert data["present_count"] == 2
    assert data["compliance"] == "25.0"


def test_dashboard_admin_only(client, login):
    assert client.get("/api/dashboard/metrics", headers=login("TCH-001")).status_code == 403
    assert client.get("/api/dashboard/metrics").status_code in (401, 403)


def test_published_snapshot_is_served(client, login):
    snapshot = DashboardMetrics(compliance="62.5", present_count=5, student_count=8,
                                active_live_classes=3, notice_count=2)
    app.state.dashboard_sync = MagicMock(running=True)
    _publish_metrics(snapshot)
    try:
        data = client.get("/api/dashboard/metrics", headers=login("ADM-001")).json()
        assert data["compliance"] == "62.5"
        assert data["active_live_classes"] == 3
        assert attendance_compliance_percent._value.get() == 62.5
    finally:
        app.state.dashboard_metrics = None
        del app.state.dashboard_sync


def test_stale_snapshot_ignored_after_poller_died(client, login):
    """Тест: если опрос упал, метрики считаются заново, а не берутся из старого снимка"""
    app.state.dashboard_sync = PollingSync("dashboard", read=lambda: None, on_snapshot=print, interval=5)
    app.state.dashboard_metrics = DashboardMetrics(compliance="0.0", present_count=0, student_count=99,
                                                   active_live_classes=0, notice_count=0)
    try:
        data = client.get("/api/dashboard/metrics", headers=login("ADM-001")).json()
    finally:
        app.state.dashboard_metrics = None
        del app.state.dashboard_sync
    assert data["student_count"] == 8


@patch("school_portal.main.logger")
def test_failed_poller_is_logged(mock_logger):
    def broken():
        raise RuntimeError("store unavailable")

    async def scenario():
        sync = PollingSync("dashboard", read=broken, on_snapshot=print, interval=5)
        task = sync.start()
        await asyncio.wait({task})
        return sync, task

    sync, task = asyncio.run(scenario())
    assert sync.running is False
    _report_poller_exit(task)
    mock_logger.error.assert_called_once_with("dashboard_poller_failed", error="store unavailable")


def test_health_and_prometheus(client):
    assert client.get("/health").json() == {"status": "ok"}
    client.get("/api/auth/health")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "http_requests_total" in response.text
