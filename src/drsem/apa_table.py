import io
import re
from dataclasses import dataclass, field
from typing import List, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

DEFAULT_TABLE_TEXT = """Latent Variable, Cronbach Alpha, CR, AVE
Leadership, 0.85, 0.88, 0.62
Infrastructure, 0.78, 0.81, 0.54
Quality, 0.91, 0.93, 0.70"""

DEFAULT_TABLE_NUMBER = "Table 1"
DEFAULT_TABLE_TITLE = "Reliability and Validity Analysis"
DEFAULT_TABLE_NOTE = "Note. CR = Composite Reliability; AVE = Average Variance Extracted."


@dataclass
class ApaTable:
    number: str
    title: str
    header: List[str]
    rows: List[List[str]]
    note: str = ""
    hidden_columns: List[str] = field(default_factory=list)

    def visible(self) -> "ApaTable":
        keep = [index for index, name in enumerate(self.header) if name not in self.hidden_columns]
        return ApaTable(
            number=self.number,
            title=self.title,
            header=[self.header[index] for index in keep],
            rows=[[row[index] for index in keep if index < len(row)] for row in self.rows],
            note=self.note,
        )


def parse_table_text(text: str) -> List[List[str]]:
    rows = []
    for line in (text or "").strip().splitlines():
        if not line.strip():
            continue
        rows.append([cell.strip() for cell in line.split(",")])
    return rows


def build_apa_table(
    text: str,
    number: str = DEFAULT_TABLE_NUMBER,
    title: str = DEFAULT_TABLE_TITLE,
    note: str = DEFAULT_TABLE_NOTE,
    hidden_columns: Sequence[str] = (),
) -> ApaTable:
    rows = parse_table_text(text)
    return ApaTable(
        number=number,
        title=title,
        header=rows[0] if rows else [],
        rows=rows[1:],
        note=note,
        hidden_columns=list(hidden_columns),
    )


def toggle_column(hidden_columns: Sequence[str], column: str) -> List[str]:
    if column in hidden_columns:
        return [name for name in hidden_columns if name != column]
    return list(hidden_columns) + [column]


def table_to_markdown(table: ApaTable) -> str:
    shown = table.visible()
    width = len(shown.header)
    lines = [f"**{shown.number}**  ", f"*{shown.title}*", ""]
    lines.append(_markdown_row(shown.header))
    lines.append(f"| {' | '.join('---' for _ in shown.header)} |")
    for row in shown.rows:
        lines.append(_markdown_row(_pad(row, width)))
    lines.append("")
    lines.append(f"*{shown.note}*")
    return "\n".join(lines)


def table_to_pdf(table: ApaTable) -> bytes:
    shown = table.visible()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{shown.number} {shown.title}".strip(),
    )
    number_style = ParagraphStyle("ApaNumber", fontName="Times-Bold", fontSize=12, leading=15)
    title_style = ParagraphStyle("ApaTitle", fontName="Times-Italic", fontSize=12, leading=15, spaceAfter=6)
    note_style = ParagraphStyle("ApaNote", fontName="Times-Italic", fontSize=10, leading=13, spaceBefore=6)

    story = [
        Paragraph(escape(shown.number), number_style),
        Paragraph(escape(shown.title), title_style),
    ]
    if shown.header:
        data = [shown.header] + [_pad(row, len(shown.header)) for row in shown.rows]
        grid = Table(data, hAlign="LEFT", repeatRows=1)
        style = [
            ("FONTNAME", (0, 0), (-1, -1), "Times-Roman"),
            ("FONTNAME", (0, 0), (-1, 0), "Times-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("LINEABOVE", (0, 0), (-1, 0), 1, colors.black),
            ("LINEBELOW", (0, 0), (-1, 0), 1.5, colors.black),
            ("LINEBELOW", (0, -1), (-1, -1), 1, colors.black),
        ]
        grid.setStyle(TableStyle(style))
        story.append(grid)
    story.append(Spacer(1, 2 * mm))
    if shown.note:
        story.append(Paragraph(escape(shown.note), note_style))

    doc.build(story)
    return buffer.getvalue()


def pdf_filename(number: str) -> str:
    base = re.sub(r"\s", "_", number.strip()) or "Table"
    return f"{base}_APA.pdf"


def _pad(row: List[str], width: int) -> List[str]:
    return list(row[:width]) + [""] * max(0, width - len(row))


def _markdown_row(cells: Sequence[str]) -> str:
    escaped = [cell.replace("|", "\\|") for cell in cells]
    return "| " + " | ".join(escaped) + " |"
