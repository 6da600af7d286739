"""/v1/simulator - title list, rate, calculation and reset"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from nova_verte.api.dependencies import (
    NoticeCollector,
    get_notices,
    get_request_id,
    get_session_id,
    get_simulator,
)
from nova_verte.api.v1.schemas import FeeScheduleResponse, RateRequest, SimulatorResponse, TitleUpdateRequest
from nova_verte.domain.discount import FEES
from nova_verte.domain.exceptions import TitleNotFoundError, ValidationError
from nova_verte.domain.models import DEFAULT_MONTHLY_RATE
from nova_verte.domain.session import SimulatorSession
from nova_verte.infrastructure.observability.logging import log_simulation
from nova_verte.infrastructure.observability.metrics import record_simulation

router = APIRouter()


def _respond(simulator: SimulatorSession, notices: NoticeCollector) -> SimulatorResponse:
    return SimulatorResponse.from_snapshot(simulator.snapshot, notices.notices)


@router.get("/simulator", response_model=SimulatorResponse)
def get_state(
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
):
    """Current simulator state; a first visit starts with one empty title dated today"""
    return _respond(simulator, notices)


@router.get("/simulator/fees", response_model=FeeScheduleResponse)
def get_fee_schedule():
    """Fixed costs shown next to the rate input"""
    return FeeScheduleResponse(
        inclusion_fee=FEES.inclusion_fee,
        wire_fee=FEES.wire_fee,
        registration_fee=FEES.registration_fee,
        default_monthly_rate=DEFAULT_MONTHLY_RATE,
    )


@router.post("/simulator/titles", response_model=SimulatorResponse, status_code=201)
def add_title(
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
):
    simulator.add()
    return _respond(simulator, notices)


@router.patch("/simulator/titles/{title_id}", response_model=SimulatorResponse)
def update_title(
    title_id: str,
    request_body: TitleUpdateRequest,
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
):
    """Replace the face value or the due date of one title"""
    try:
        simulator.update(title_id, request_body.field, request_body.value)
    except TitleNotFoundError:
        raise HTTPException(status_code=404, detail="Title not found")
    return _respond(simulator, notices)


@router.delete("/simulator/titles/{title_id}", response_model=SimulatorResponse)
def remove_title(
    title_id: str,
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
):
    try:
        simulator.remove(title_id)
    except TitleNotFoundError:
        raise HTTPException(status_code=404, detail="Title not found")
    return _respond(simulator, notices)


@router.put("/simulator/rate", response_model=SimulatorResponse)
def set_rate(
    request_body: RateRequest,
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
):
    simulator.set_rate(request_body.monthly_rate)
    return _respond(simulator, notices)


@router.post("/simulator/calculate", response_model=SimulatorResponse)
def calculate(
    request: Request,
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
    session_id: str = Depends(get_session_id),
):
    """
    Run the discount simulation on the stored titles.

    Flow:
    1. Validate every title (first failure aborts with 422, prior result kept)
    2. Compute per-title discount and fee totals
    3. Persist the new result and mark it visible
    """
    start_time = time.time()
    request_id = get_request_id(request)
    title_count = len(simulator.snapshot.titles)

    try:
        result = simulator.calculate()
    except ValidationError as e:
        record_simulation(False)
        logging.warning(f"Simulation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        record_simulation(False)
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_simulation(True, result.gross_total)
    log_simulation(request_id, session_id, title_count, "success", duration_ms)

    return _respond(simulator, notices)


@router.post("/simulator/reset", response_model=SimulatorResponse)
def reset(
    simulator: SimulatorSession = Depends(get_simulator),
    notices: NoticeCollector = Depends(get_notices),
):
    """Drop titles and result, back to one empty title and the default rate"""
    simulator.reset()
    return _respond(simulator, notices)
