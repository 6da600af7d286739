"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import List

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from nova_verte.api.v1.schemas import Notice
from nova_verte.config import settings
from nova_verte.domain.session import Clock, SimulatorSession
from nova_verte.infrastructure.database.repositories import SqlKeyValueStore
from nova_verte.infrastructure.database.session import get_db
from nova_verte.infrastructure.export.pdf import DocumentExporter, PdfExporter
from nova_verte.infrastructure.storage.bridge import PersistenceBridge


class NoticeCollector:
    """Notifier that keeps notices for the response body"""

    def __init__(self) -> None:
        self.notices: List[Notice] = []

    def __call__(self, level: str, message: str) -> None:
        self.notices.append(Notice(level=level, message=message))


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session_id(request: Request) -> str:
    """Client session, used as the storage namespace"""
    return request.headers.get(settings.session_header) or settings.default_session_id


def get_clock() -> Clock:
    """Source of 'today'"""
    return date.today


def get_notices() -> NoticeCollector:
    return NoticeCollector()


def get_persistence_bridge(
    db: Session = Depends(get_db),
    session_id: str = Depends(get_session_id),
) -> PersistenceBridge:
    """Provide the state bridge for the calling client"""
    return PersistenceBridge(SqlKeyValueStore(db, namespace=session_id))


def get_simulator(
    bridge: PersistenceBridge = Depends(get_persistence_bridge),
    clock: Clock = Depends(get_clock),
    notices: NoticeCollector = Depends(get_notices),
) -> SimulatorSession:
    """Restore the caller's simulator, seeding defaults on first use"""
    return SimulatorSession.restore(bridge, clock=clock, notifier=notices)


def get_exporter() -> DocumentExporter:
    """Provide PDF exporter instance"""
    return PdfExporter()
