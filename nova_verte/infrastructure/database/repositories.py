"""Data access layer for simulator state"""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from nova_verte.infrastructure.database.models import SimulatorState
from nova_verte.infrastructure.storage.key_value import KeyValueStore


class SqlKeyValueStore(KeyValueStore):
    """Key-value store on the simulator_state table, scoped to one client session"""

    def __init__(self, db: Session, namespace: str):
        self.db = db
        self.namespace = namespace

    def _row(self, key: str) -> Optional[SimulatorState]:
        return (
            self.db.query(SimulatorState)
            .filter(SimulatorState.namespace == self.namespace, SimulatorState.key == key)
            .first()
        )

    def get(self, key: str) -> Optional[str]:
        row = self._row(key)
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite, committed immediately"""
        try:
            row = self._row(key)
            if row is None:
                self.db.add(SimulatorState(namespace=self.namespace, key=key, value=value))
            else:
                row.value = value
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def delete(self, key: str) -> None:
        try:
            (
                self.db.query(SimulatorState)
                .filter(SimulatorState.namespace == self.namespace, SimulatorState.key == key)
                .delete()
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
