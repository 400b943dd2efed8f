import io
from typing import Any, Dict, List
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

SENDER_NAMES = {"user": "You", "ai": "Dr.SEM"}


def transcript_to_markdown(messages: List[Dict[str, Any]], title: str = "Dr.SEM Consultation") -> str:
    lines = [f"# {title}", ""]
    for message in messages:
        sender = SENDER_NAMES.get(message.get("sender", "ai"), "Dr.SEM")
        lines.append(f"## {sender} ({message.get('timestamp', '')})")
        lines.append("")
        lines.append(str(message.get("text", "")).strip())
        for attachment in message.get("attachments") or []:
            lines.append(f"\n_Attachment: {attachment.get('content', '')}_")
        for heading, key in (
            ("Important Questions", "suggested_questions"),
            ("Related Questions", "related_questions"),
        ):
            questions = message.get(key) or []
            if questions:
                lines.append("")
                lines.append(f"**{heading}**")
                lines.extend(f"- {question}" for question in questions)
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def transcript_to_pdf(messages: List[Dict[str, Any]], title: str = "Dr.SEM Consultation") -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=18 * mm,
        rightMargin=18 * mm,
        topMargin=18 * mm,
        bottomMargin=18 * mm,
        title=title,
    )
    styles = getSampleStyleSheet()
    story = [Paragraph(escape(title), styles["Heading1"]), Spacer(1, 4 * mm)]
    for message in messages:
        sender = SENDER_NAMES.get(message.get("sender", "ai"), "Dr.SEM")
        story.append(Paragraph(f"<b>{escape(sender)}</b> <font size=8>{escape(str(message.get('timestamp', '')))}</font>", styles["Normal"]))
        for paragraph in str(message.get("text", "")).split("\n\n"):
            if paragraph.strip():
                story.append(Paragraph(escape(paragraph.strip()).replace("\n", "<br/>"), styles["BodyText"]))
        for question in (message.get("suggested_questions") or []) + (message.get("related_questions") or []):
            story.append(Paragraph(f"&bull; {escape(question)}", styles["Italic"]))
        story.append(Spacer(1, 3 * mm))
    doc.build(story)
    return buffer.getvalue()
