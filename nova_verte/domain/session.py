"""Simulator session - owns the title list, rate and last result for one user"""

import logging
import uuid
from datetime import date
from typing import Callable, Optional, Protocol

from nova_verte.domain.currency import parse_rate
from nova_verte.domain.discount import calculate_discount
from nova_verte.domain.exceptions import NoResultError, TitleNotFoundError
from nova_verte.domain.models import (
    CalculationResult,
    OperationParameters,
    SessionSnapshot,
    Title,
)
from nova_verte.domain.report import SimulationReport, build_report

logger = logging.getLogger(__name__)

Clock = Callable[[], date]
Notifier = Callable[[str, str], None]  # (level, message)

EDITABLE_FIELDS = {"faceValue": "face_value", "dueDate": "due_date"}


class SnapshotStore(Protocol):
    """Persistence port: never raises, load() returns None when nothing usable is stored"""

    def save(self, snapshot: SessionSnapshot) -> None: ...

    def load(self) -> Optional[SessionSnapshot]: ...

    def clear(self) -> None: ...


def _log_notice(level: str, message: str) -> None:
    logger.info(message, extra={"notice_level": level})


class SimulatorSession:
    """
    Controller for the simulator state.

    Every mutation writes the full snapshot back to the store. Calculation
    failures raise before any state is touched, so a previous result stays
    visible.
    """

    def __init__(
        self,
        store: SnapshotStore,
        snapshot: SessionSnapshot | None = None,
        clock: Clock = date.today,
        notifier: Notifier | None = None,
    ):
        self.store = store
        self.snapshot = snapshot or SessionSnapshot()
        self.clock = clock
        self.notify = notifier or _log_notice

    @classmethod
    def restore(
        cls,
        store: SnapshotStore,
        clock: Clock = date.today,
        notifier: Notifier | None = None,
    ) -> "SimulatorSession":
        """Resume from the stored snapshot, or start with one empty title dated today"""
        snapshot = store.load()
        if snapshot is not None:
            return cls(store, snapshot, clock, notifier)

        session = cls(store, SessionSnapshot(), clock, notifier)
        session.snapshot.titles.append(session._new_title())
        session._persist()
        return session

    def _new_title(self) -> Title:
        return Title(id=uuid.uuid4().hex, face_value="", due_date=self.clock().isoformat())

    def _persist(self) -> None:
        self.store.save(self.snapshot)

    def _find(self, title_id: str) -> Title:
        for title in self.snapshot.titles:
            if title.id == title_id:
                return title
        raise TitleNotFoundError(f"Title {title_id} not found")

    def add(self) -> Title:
        title = self._new_title()
        self.snapshot.titles.append(title)
        self._persist()
        self.notify("success", "Duplicata adicionada com sucesso!")
        return title

    def remove(self, title_id: str) -> None:
        title = self._find(title_id)
        self.snapshot.titles.remove(title)
        self._persist()
        self.notify("success", "Duplicata removida com sucesso!")

    def update(self, title_id: str, field: str, value: str) -> Title:
        """Replace faceValue or dueDate on one title"""
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown title field: {field}")

        title = self._find(title_id)
        setattr(title, EDITABLE_FIELDS[field], value)
        self._persist()
        return title

    def set_rate(self, monthly_rate: str) -> None:
        self.snapshot.monthly_rate = monthly_rate
        self._persist()

    def calculate(self) -> CalculationResult:
        result = calculate_discount(self.snapshot.titles, self.snapshot.monthly_rate, self.clock())

        self.snapshot.result = result
        self.snapshot.result_visible = True
        self._persist()
        self.notify("success", "Cálculo realizado com sucesso!")
        return result

    def reset(self) -> None:
        """Back to defaults: old record dropped, then one empty title, no result, 5.00% rate stored"""
        self.snapshot = SessionSnapshot()
        self.store.clear()

        self.snapshot.titles.append(self._new_title())
        self._persist()
        self.notify("success", "Dados limpos com sucesso!")

    def report(self) -> SimulationReport:
        """Formatted view of the last result"""
        result = self.snapshot.result
        if result is None:
            raise NoResultError()

        # Count comes from the result so the header always matches the table;
        # the rate is the one the discount was computed with
        parameters = OperationParameters(
            monthly_rate=f"{parse_rate(self.snapshot.monthly_rate):.2f}",
            title_count=len(result.lines),
        )
        return build_report(result, parameters, self.clock())
