"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from nova_verte.domain.models import CalculationResult, SessionSnapshot, Title
from nova_verte.domain.report import SimulationReport


class CamelModel(BaseModel):
    """Snake-case in Python, camelCase on the wire"""

    model_config = ConfigDict(populate_by_name=True)


class Notice(BaseModel):
    """User-facing confirmation or warning (rendered as a toast)"""

    level: str
    message: str


class TitleSchema(CamelModel):
    id: str
    face_value: str = Field(alias="faceValue")
    due_date: str = Field(alias="dueDate")

    @classmethod
    def from_domain(cls, title: Title) -> "TitleSchema":
        return cls(id=title.id, face_value=title.face_value, due_date=title.due_date)


class LineSchema(CamelModel):
    title: str
    days: int
    face_value: Decimal = Field(alias="faceValue")
    discount: Decimal
    net_value: Decimal = Field(alias="netValue")


class ResultSchema(CamelModel):
    gross_total: Decimal = Field(alias="grossTotal")
    discount_total: Decimal = Field(alias="discountTotal")
    fees_total: Decimal = Field(alias="feesTotal")
    net_amount: Decimal = Field(alias="netAmount")
    lines: List[LineSchema]

    @classmethod
    def from_domain(cls, result: CalculationResult) -> "ResultSchema":
        return cls(
            gross_total=result.gross_total,
            discount_total=result.discount_total,
            fees_total=result.fees_total,
            net_amount=result.net_amount,
            lines=[
                LineSchema(
                    title=line.title,
                    days=line.days,
                    face_value=line.face_value,
                    discount=line.discount,
                    net_value=line.net_value,
                )
                for line in result.lines
            ],
        )


class SimulatorResponse(CamelModel):
    """Full simulator state plus notices produced by the request"""

    titles: List[TitleSchema]
    monthly_rate: str = Field(alias="monthlyRate")
    result: Optional[ResultSchema] = None
    result_visible: bool = Field(alias="resultVisible")
    notices: List[Notice] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot, notices: List[Notice]) -> "SimulatorResponse":
        return cls(
            titles=[TitleSchema.from_domain(t) for t in snapshot.titles],
            monthly_rate=snapshot.monthly_rate,
            result=ResultSchema.from_domain(snapshot.result) if snapshot.result else None,
            result_visible=snapshot.result_visible,
            notices=notices,
        )


class TitleUpdateRequest(BaseModel):
    """Body for PATCH /v1/simulator/titles/{title_id}"""

    field: Literal["faceValue", "dueDate"]
    value: str = Field("", max_length=64)


class RateRequest(CamelModel):
    """Body for PUT /v1/simulator/rate"""

    monthly_rate: str = Field(..., alias="monthlyRate", max_length=16)


class FeeScheduleResponse(CamelModel):
    inclusion_fee: Decimal = Field(alias="inclusionFee")
    wire_fee: Decimal = Field(alias="wireFee")
    registration_fee: Decimal = Field(alias="registrationFee")
    default_monthly_rate: str = Field(alias="defaultMonthlyRate")


class ReportLineSchema(CamelModel):
    title: str
    days: str
    face_value: str = Field(alias="faceValue")
    discount: str
    net_value: str = Field(alias="netValue")


class ReportResponse(CamelModel):
    """Formatted quote, same literals as the PDF"""

    simulation_date: str = Field(alias="simulationDate")
    monthly_rate: str = Field(alias="monthlyRate")
    title_count: int = Field(alias="titleCount")
    lines: List[ReportLineSchema]
    gross_total: str = Field(alias="grossTotal")
    discount_total: str = Field(alias="discountTotal")
    fees_total: str = Field(alias="feesTotal")
    wire_fee: str = Field(alias="wireFee")
    expenses_total: str = Field(alias="expensesTotal")
    net_amount: str = Field(alias="netAmount")
    disclaimer: List[str]

    @classmethod
    def from_domain(cls, report: SimulationReport) -> "ReportResponse":
        return cls(
            simulation_date=report.simulation_date,
            monthly_rate=report.monthly_rate,
            title_count=report.title_count,
            lines=[
                ReportLineSchema(
                    title=line.title,
                    days=line.days,
                    face_value=line.face_value,
                    discount=line.discount,
                    net_value=line.net_value,
                )
                for line in report.lines
            ],
            gross_total=report.gross_total,
            discount_total=report.discount_total,
            fees_total=report.fees_total,
            wire_fee=report.wire_fee,
            expenses_total=report.expenses_total,
            net_amount=report.net_amount,
            disclaimer=list(report.disclaimer),
        )
