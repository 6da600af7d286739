"""Report projection shared by the on-screen view and the PDF exporter"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple

from nova_verte.domain.currency import format_brl, format_rate
from nova_verte.domain.discount import FEES
from nova_verte.domain.models import CalculationResult, FeeSchedule, OperationParameters
from nova_verte.utils.date_utils import format_br_date

COMPANY_NAME = "NOVA VERTE"
COMPANY_TAGLINE = "Soluções Financeiras"
REPORT_TITLE = "Simulação de Operação Financeira"
DISCLAIMER_LINES = (
    "Este documento foi gerado automaticamente pelo sistema Nova Verte",
    "Para dúvidas, entre em contato conosco",
)
TABLE_HEADER = ("Título", "Dias", "Valor Face", "Deságio", "Valor Líquido")


@dataclass
class ReportLine:
    """One formatted table row"""

    title: str
    days: str
    face_value: str
    discount: str
    net_value: str

    def as_row(self) -> Tuple[str, str, str, str, str]:
        return (self.title, self.days, self.face_value, self.discount, self.net_value)


@dataclass
class SimulationReport:
    """Every literal value a rendered quote must show"""

    simulation_date: str
    monthly_rate: str
    title_count: int
    lines: List[ReportLine]
    gross_total: str
    discount_total: str
    fees_total: str
    wire_fee: str
    expenses_total: str
    net_amount: str
    disclaimer: Tuple[str, ...] = DISCLAIMER_LINES


@dataclass
class LayoutBlock:
    """
    Single layout instruction for a document exporter.

    kind is one of: "heading", "subheading", "paragraph", "key_value",
    "table", "rule", "spacer". Exporters decide how each kind looks.
    """

    kind: str
    text: str = ""
    rows: List[Tuple[str, ...]] = field(default_factory=list)


def build_report(
    result: CalculationResult,
    parameters: OperationParameters,
    simulation_date: date,
    fees: FeeSchedule = FEES,
) -> SimulationReport:
    """Format a calculation result for display"""
    expenses_total = result.discount_total + result.fees_total + fees.wire_fee

    return SimulationReport(
        simulation_date=format_br_date(simulation_date),
        monthly_rate=format_rate(parameters.monthly_rate),
        title_count=parameters.title_count,
        lines=[
            ReportLine(
                title=line.title,
                days=str(line.days),
                face_value=format_brl(line.face_value),
                discount=format_brl(line.discount),
                net_value=format_brl(line.net_value),
            )
            for line in result.lines
        ],
        gross_total=format_brl(result.gross_total),
        discount_total=format_brl(result.discount_total),
        fees_total=format_brl(result.fees_total),
        wire_fee=format_brl(fees.wire_fee),
        expenses_total=format_brl(expenses_total),
        net_amount=format_brl(result.net_amount),
    )


def build_layout(report: SimulationReport) -> List[LayoutBlock]:
    """
    Lay the report out as an ordered list of blocks.

    Sections: header, operation settings, per-title table, financial summary,
    cost breakdown, footer disclaimer.
    """
    blocks = [
        LayoutBlock("heading", COMPANY_NAME),
        LayoutBlock("paragraph", COMPANY_TAGLINE),
        LayoutBlock("heading", REPORT_TITLE),
        LayoutBlock("paragraph", f"Data da Simulação: {report.simulation_date}"),
        LayoutBlock("rule"),
        LayoutBlock("subheading", "Configurações da Operação"),
        LayoutBlock(
            "key_value",
            rows=[
                ("Taxa a.m.:", report.monthly_rate),
                ("Total de Títulos:", str(report.title_count)),
            ],
        ),
        LayoutBlock("subheading", "Detalhamento dos Títulos"),
        LayoutBlock("table", rows=[TABLE_HEADER] + [line.as_row() for line in report.lines]),
        LayoutBlock("subheading", "Resumo Financeiro"),
        LayoutBlock(
            "key_value",
            rows=[
                ("Receitas - Total Bruto:", report.gross_total),
                ("Despesas - Total Despesas:", report.expenses_total),
            ],
        ),
        LayoutBlock("subheading", "Detalhamento dos Custos"),
        LayoutBlock(
            "key_value",
            rows=[
                ("Deságio Total:", report.discount_total),
                ("Tarifas:", report.fees_total),
                ("TED:", report.wire_fee),
            ],
        ),
        LayoutBlock("subheading", "Resultado Final"),
        LayoutBlock("key_value", rows=[("Valor Líquido a Receber:", report.net_amount)]),
        LayoutBlock("spacer"),
        LayoutBlock("rule"),
    ]
    blocks.extend(LayoutBlock("paragraph", line) for line in report.disclaimer)
    return blocks


def export_filename(simulation_date: date) -> str:
    return f"simulacao-nova-verte-{simulation_date.isoformat()}.pdf"
