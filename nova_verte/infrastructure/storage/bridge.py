"""
Persistence bridge between the simulator session and a key-value store.

The snapshot is stored as one JSON record under a fixed key. Storage
problems never reach the user: they are logged and counted, and a record
that cannot be read back is treated as missing.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import SQLAlchemyError

from nova_verte.config import settings
from nova_verte.domain.models import (
    DEFAULT_MONTHLY_RATE,
    CalculationLine,
    CalculationResult,
    SessionSnapshot,
    Title,
)
from nova_verte.infrastructure.observability.metrics import persistence_failures_counter
from nova_verte.infrastructure.storage.key_value import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (SQLAlchemyError, OSError)


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TitleRecord(_Record):
    id: str
    face_value: str = Field("", alias="faceValue")
    due_date: str = Field("", alias="dueDate")


class LineRecord(_Record):
    title: str
    days: int
    face_value: Decimal = Field(alias="faceValue")
    discount: Decimal
    net_value: Decimal = Field(alias="netValue")


class ResultRecord(_Record):
    gross_total: Decimal = Field(alias="grossTotal")
    discount_total: Decimal = Field(alias="discountTotal")
    fees_total: Decimal = Field(alias="feesTotal")
    net_amount: Decimal = Field(alias="netAmount")
    lines: List[LineRecord] = Field(default_factory=list)


class StateRecord(_Record):
    """Stored shape: {titles, monthlyRate, result, resultVisible}"""

    titles: List[TitleRecord] = Field(default_factory=list)
    monthly_rate: str = Field(DEFAULT_MONTHLY_RATE, alias="monthlyRate")
    result: Optional[ResultRecord] = None
    result_visible: bool = Field(False, alias="resultVisible")


def snapshot_to_record(snapshot: SessionSnapshot) -> StateRecord:
    result = None
    if snapshot.result is not None:
        result = ResultRecord(
            gross_total=snapshot.result.gross_total,
            discount_total=snapshot.result.discount_total,
            fees_total=snapshot.result.fees_total,
            net_amount=snapshot.result.net_amount,
            lines=[
                LineRecord(
                    title=line.title,
                    days=line.days,
                    face_value=line.face_value,
                    discount=line.discount,
                    net_value=line.net_value,
                )
                for line in snapshot.result.lines
            ],
        )

    return StateRecord(
        titles=[TitleRecord(id=t.id, face_value=t.face_value, due_date=t.due_date) for t in snapshot.titles],
        monthly_rate=snapshot.monthly_rate,
        result=result,
        result_visible=snapshot.result_visible,
    )


def record_to_snapshot(record: StateRecord) -> SessionSnapshot:
    result = None
    if record.result is not None:
        result = CalculationResult(
            gross_total=record.result.gross_total,
            discount_total=record.result.discount_total,
            fees_total=record.result.fees_total,
            net_amount=record.result.net_amount,
            lines=[
                CalculationLine(
                    title=line.title,
                    days=line.days,
                    face_value=line.face_value,
                    discount=line.discount,
                    net_value=line.net_value,
                )
                for line in record.result.lines
            ],
        )

    return SessionSnapshot(
        titles=[Title(id=t.id, face_value=t.face_value, due_date=t.due_date) for t in record.titles],
        monthly_rate=record.monthly_rate or DEFAULT_MONTHLY_RATE,
        result=result,
        result_visible=record.result_visible,
    )


class PersistenceBridge:
    """Save/load/clear the session snapshot under one fixed key"""

    def __init__(self, store: KeyValueStore, key: str | None = None):
        self.store = store
        self.key = key or settings.state_key

    def save(self, snapshot: SessionSnapshot) -> None:
        try:
            payload = snapshot_to_record(snapshot).model_dump_json(by_alias=True)
            self.store.set(self.key, payload)
        except STORAGE_ERRORS as e:
            persistence_failures_counter.labels(operation="save").inc()
            logger.error(f"Failed to save simulator state: {e}", extra={"state_key": self.key})

    def load(self) -> Optional[SessionSnapshot]:
        """Stored snapshot, or None when missing or unreadable"""
        try:
            payload = self.store.get(self.key)
            if payload is None:
                return None
            return record_to_snapshot(StateRecord.model_validate_json(payload))
        except (*STORAGE_ERRORS, ValueError) as e:
            # pydantic.ValidationError is a ValueError
            persistence_failures_counter.labels(operation="load").inc()
            logger.error(f"Failed to load simulator state: {e}", extra={"state_key": self.key})
            return None

    def clear(self) -> None:
        try:
            self.store.delete(self.key)
        except STORAGE_ERRORS as e:
            persistence_failures_counter.labels(operation="clear").inc()
            logger.error(f"Failed to clear simulator state: {e}", extra={"state_key": self.key})
