import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# Хранилище в памяти: настройки читаются при импорте приложения
os.environ.setdefault("STORE_BACKEND", "memory")

from fastapi.testclient import TestClient
from school_portal.application.collections import PortalRepository
from school_portal.infrastructure.store import MemoryCollectionStore
from school_portal.interfaces.http.deps import get_store
from school_portal.interfaces.http.routers.auth import limiter
from school_portal.main import app

# Отключаем rate limiting в тестах
limiter.enabled = False


@pytest.fixture
def store():
    """Чистое хранилище на каждый тест: коллекции отдают seed"""
    return MemoryCollectionStore()


@pytest.fixture
def repo(store):
    return PortalRepository(store)


@pytest.fixture
def client(store):
    """Фикстура для тестового клиента"""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    # Очищаем после теста
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def login(client):
    """Логин по UID, возвращает заголовки с токеном"""
    def _login(uid: str) -> dict:
        response = client.post("/api/auth/login", json={"uid": uid})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


def token_of(headers: dict) -> str:
    return headers["Authorization"].split()[1]
