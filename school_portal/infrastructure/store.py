import json
from typing import Any, Callable, Optional

import redis
import structlog
from sqlalchemy.orm import Session

from ..application.collections import IKeyValueStore
from ..config import settings
from .models import CollectionORM

logger = structlog.get_logger()

_redis_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True
        )
    return _redis_client


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


class MemoryCollectionStore(IKeyValueStore):
    """Хранит JSON-строки, чтобы читатели получали копии, а не общие объекты."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = _dumps(value)


class RedisCollectionStore(IKeyValueStore):
    def __init__(self, client: redis.Redis, namespace: str = "portal"):
        self.client = client
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Any | None:
        raw = self.client.get(self._key(key))
        return json.loads(raw) if raw else None

    def set(self, key: str, value: Any) -> None:
        self.client.set(self._key(key), _dumps(value))


class SqlCollectionStore(IKeyValueStore):
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Any | None:
        db = self.session_factory()
        try:
            row = db.get(CollectionORM, key)
            return json.loads(row.payload) if row else None
        finally:
            db.close()

    def set(self, key: str, value: Any) -> None:
        db = self.session_factory()
        try:
            # перезапись целиком, последний писатель выигрывает
            db.merge(CollectionORM(key=key, payload=_dumps(value)))
            db.commit()
        finally:
            db.close()


def build_store(backend: str | None = None) -> IKeyValueStore:
    backend = (backend or settings.STORE_BACKEND).lower()
    if backend == "memory":
        store = MemoryCollectionStore()
    elif backend == "redis":
        store = RedisCollectionStore(get_redis())
    elif backend == "sql":
        from .db import SessionLocal
        store = SqlCollectionStore(SessionLocal)
    else:
        raise ValueError(f"Unknown STORE_BACKEND: {backend}")
    logger.info("Collection store ready", backend=backend)
    return store
