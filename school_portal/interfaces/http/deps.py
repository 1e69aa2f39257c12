from fastapi import Depends
from starlette.requests import HTTPConnection

from ...application.collections import IKeyValueStore, PortalRepository
from ...application.use_cases.results import IRemarksWriter
from ...infrastructure.remarks import GeminiRemarksWriter


def get_store(conn: HTTPConnection) -> IKeyValueStore:
    return conn.app.state.store

def get_repository(store: IKeyValueStore = Depends(get_store)) -> PortalRepository:
    return PortalRepository(store)

def get_remarks_writer() -> IRemarksWriter:
    return GeminiRemarksWriter()
