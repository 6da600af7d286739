"""PDF rendering of simulation reports with reportlab"""

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from nova_verte.domain.exceptions import ExportError
from nova_verte.domain.report import LayoutBlock

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

TEXT_COLOR = colors.HexColor("#1f2937")
MUTED_COLOR = colors.HexColor("#6b7280")
BORDER_COLOR = colors.HexColor("#d1d5db")
HEADER_FILL = colors.HexColor("#f3f4f6")
STRIPE_FILL = colors.HexColor("#f9fafb")


class DocumentExporter(ABC):
    """Turns layout blocks into a downloadable document"""

    media_type: str

    @abstractmethod
    def render(self, blocks: List[LayoutBlock]) -> bytes:
        pass


class PdfExporter(DocumentExporter):
    """A4 portrait PDF, paginated by reportlab"""

    media_type = PDF_MEDIA_TYPE

    def __init__(self, margin_mm: float = 25):
        self.margin = margin_mm * mm
        styles = getSampleStyleSheet()
        self.styles = {
            "heading": ParagraphStyle(
                name="NvHeading", parent=styles["Title"], fontSize=20, textColor=TEXT_COLOR, alignment=TA_CENTER
            ),
            "subheading": ParagraphStyle(
                name="NvSubheading", parent=styles["Heading3"], fontSize=13, textColor=TEXT_COLOR, spaceBefore=10
            ),
            "paragraph": ParagraphStyle(
                name="NvParagraph", parent=styles["Normal"], fontSize=10, textColor=MUTED_COLOR, alignment=TA_CENTER
            ),
        }

    def _table(self, rows, header: bool) -> Table:
        table = Table([list(row) for row in rows], hAlign="LEFT")
        commands = [
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("TEXTCOLOR", (0, 0), (-1, -1), TEXT_COLOR),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
        ]
        if header:
            commands += [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("GRID", (0, 0), (-1, -1), 0.5, BORDER_COLOR),
                ("ALIGN", (1, 0), (1, -1), "CENTER"),
                ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
            ]
            commands += [
                ("BACKGROUND", (0, i), (-1, i), STRIPE_FILL) for i in range(2, len(rows), 2)
            ]
        else:
            commands += [
                ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ]
        table.setStyle(TableStyle(commands))
        return table

    def _flowables(self, blocks: List[LayoutBlock]) -> list:
        elements = []
        for block in blocks:
            if block.kind in self.styles:
                elements.append(Paragraph(escape(block.text), self.styles[block.kind]))
            elif block.kind == "table":
                elements.append(self._table(block.rows, header=True))
            elif block.kind == "key_value":
                elements.append(self._table(block.rows, header=False))
            elif block.kind == "rule":
                elements.append(HRFlowable(width="100%", color=BORDER_COLOR, spaceBefore=6, spaceAfter=6))
            elif block.kind == "spacer":
                elements.append(Spacer(1, 8 * mm))
            else:
                raise ValueError(f"Unknown layout block: {block.kind}")
        return elements

    def render(self, blocks: List[LayoutBlock]) -> bytes:
        """
        Build the whole document in memory.

        Raises:
            ExportError: on any rendering failure, no bytes are returned
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.margin,
            rightMargin=self.margin,
            topMargin=self.margin,
            bottomMargin=self.margin,
            title="Simulação de Operação Financeira",
        )
        try:
            doc.build(self._flowables(blocks))
        except Exception as e:
            logger.error(f"PDF rendering failed: {e}")
            raise ExportError() from e
        return buffer.getvalue()
