"""GET /v1/simulator/report - formatted quote as JSON or PDF"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import Response

from nova_verte.api.dependencies import NoticeCollector, get_exporter, get_notices, get_request_id, get_simulator
from nova_verte.api.v1.schemas import ReportResponse
from nova_verte.domain.exceptions import ExportError, NoResultError
from nova_verte.domain.report import build_layout, export_filename
from nova_verte.domain.session import SimulatorSession
from nova_verte.infrastructure.export.pdf import DocumentExporter
from nova_verte.infrastructure.observability.metrics import export_counter, export_latency_histogram

router = APIRouter()

NOTICES_HEADER = "X-Notices"


@router.get("/simulator/report", response_model=ReportResponse)
def get_report(request: Request, simulator: SimulatorSession = Depends(get_simulator)):
    """On-screen report for the last calculation"""
    try:
        report = simulator.report()
    except NoResultError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")
    return ReportResponse.from_domain(report)


@router.get("/simulator/report.pdf")
def download_report(
    request: Request,
    simulator: SimulatorSession = Depends(get_simulator),
    exporter: DocumentExporter = Depends(get_exporter),
    notices: NoticeCollector = Depends(get_notices),
):
    """
    Render the last calculation as an A4 PDF download.

    The progress and success notices travel in the X-Notices header,
    separated by " | ".

    Returns:
        409 when nothing was calculated yet, 500 when rendering fails
    """
    request_id = get_request_id(request)

    try:
        report = simulator.report()
    except NoResultError as e:
        export_counter.labels(outcome="no_result").inc()
        raise HTTPException(status_code=409, detail=str(e))

    simulator.notify("info", "Gerando PDF...")
    try:
        with export_latency_histogram.time():
            content = exporter.render(build_layout(report))
    except ExportError as e:
        export_counter.labels(outcome="failure").inc()
        logging.error(f"Export failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        export_counter.labels(outcome="failure").inc()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    export_counter.labels(outcome="success").inc()
    simulator.notify("success", "PDF gerado com sucesso!")
    filename = export_filename(simulator.clock())
    return Response(
        content=content,
        media_type=exporter.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            NOTICES_HEADER: " | ".join(notice.message for notice in notices.notices),
        },
    )
