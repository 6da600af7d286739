"""Unit tests for report projection and PDF export"""

import pytest
from nova_verte.domain.discount import calculate_discount
from nova_verte.domain.exceptions import ExportError
from nova_verte.domain.models import OperationParameters
from nova_verte.domain.report import (
    TABLE_HEADER,
    LayoutBlock,
    ReportLine,
    build_layout,
    build_report,
    export_filename,
)
from nova_verte.infrastructure.export.pdf import PdfExporter


@pytest.fixture
def report(make_title, today):
    titles = [make_title("R$ 1.000,00"), make_title("R$ 1.000,00")]
    result = calculate_discount(titles, "5.00", today)
    return build_report(result, OperationParameters(monthly_rate="5.00", title_count=2), today)


def test_build_report_formats_every_value(report):
    assert report.simulation_date == "10/01/2025"
    assert report.monthly_rate == "5,00%"
    assert report.title_count == 2
    assert report.lines[0] == ReportLine("Título 1", "3", "R$ 1.000,00", "R$ 5,00", "R$ 995,00")
    assert report.lines[1].title == "Título 2"
    assert report.gross_total == "R$ 2.000,00"
    assert report.discount_total == "R$ 10,00"
    assert report.fees_total == "R$ 44,60"
    assert report.wire_fee == "R$ 7,00"
    assert report.expenses_total == "R$ 61,60"  # 10.00 + 44.60 + 7.00
    assert report.net_amount == "R$ 1.938,40"


def test_layout_carries_report_content(report):
    blocks = build_layout(report)

    tables = [b for b in blocks if b.kind == "table"]
    assert len(tables) == 1
    assert tables[0].rows[0] == TABLE_HEADER
    assert tables[0].rows[1:] == [line.as_row() for line in report.lines]

    key_values = dict(row for b in blocks if b.kind == "key_value" for row in b.rows)
    assert key_values["Taxa a.m.:"] == "5,00%"
    assert key_values["Total de Títulos:"] == "2"
    assert key_values["Tarifas:"] == "R$ 44,60"
    assert key_values["TED:"] == "R$ 7,00"
    assert key_values["Valor Líquido a Receber:"] == "R$ 1.938,40"

    texts = [b.text for b in blocks]
    assert "Data da Simulação: 10/01/2025" in texts
    assert texts[-1] == "Para dúvidas, entre em contato conosco"


def test_export_filename(today):
    assert export_filename(today) == "simulacao-nova-verte-2025-01-10.pdf"


def test_pdf_exporter_renders_document(report):
    content = PdfExporter().render(build_layout(report))

    assert content.startswith(b"%PDF")
    assert len(content) > 1000


def test_pdf_exporter_paginates_long_reports(make_title, today):
    titles = [make_title("R$ 100,00", days=i) for i in range(120)]
    result = calculate_discount(titles, "5.00", today)
    report = build_report(result, OperationParameters("5.00", len(titles)), today)

    content = PdfExporter().render(build_layout(report))

    # One "/Type /Pages" tree node plus more than one "/Type /Page"
    assert content.count(b"/Type /Page") > 2


def test_pdf_exporter_wraps_failures():
    with pytest.raises(ExportError, match="Erro ao gerar PDF"):
        PdfExporter().render([LayoutBlock("hologram")])
