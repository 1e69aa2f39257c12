from prometheus_client import Counter, Histogram, Gauge, generate_latest
from fastapi import Response

# Метрики для HTTP запросов
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

messages_sent_total = Counter('messages_sent_total', 'Chat messages sent')
attendance_marked_total = Counter('attendance_marked_total', 'Attendance marks', ['status'])

# Опрос хранилища
poll_ticks_total = Counter('poll_ticks_total', 'Store polling ticks', ['view'])

attendance_compliance_percent = Gauge('attendance_compliance_percent', 'Present or late marks per student, percent')
active_live_classes = Gauge('active_live_classes', 'Active live class sessions')


def metrics_endpoint():
    """Endpoint для Prometheus метрик"""
    return Response(content=generate_latest(), media_type="text/plain")
