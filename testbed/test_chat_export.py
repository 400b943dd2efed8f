from src.drsem.chat_export import transcript_to_markdown, transcript_to_pdf

MESSAGES = [
    {"id": "m1", "text": "Hello, I am Dr.SEM.", "sender": "ai", "timestamp": "2026-01-01T00:00:00Z"},
    {
        "id": "m2",
        "text": "What is AVE?",
        "sender": "user",
        "timestamp": "2026-01-01T00:01:00Z",
        "attachments": [{"type": "file", "content": "loadings.csv"}],
    },
    {
        "id": "m3",
        "text": "AVE is the mean of squared loadings.",
        "sender": "ai",
        "timestamp": "2026-01-01T00:01:05Z",
        "suggested_questions": ["What is CR?"],
        "related_questions": [],
    },
]


def test_markdown_transcript_lists_speakers_and_questions():
    markdown = transcript_to_markdown(MESSAGES)

    assert markdown.startswith("# Dr.SEM Consultation\n")
    assert "## You (2026-01-01T00:01:00Z)" in markdown
    assert "_Attachment: loadings.csv_" in markdown
    assert "**Important Questions**\n- What is CR?" in markdown
    assert "**Related Questions**" not in markdown


def test_pdf_transcript_is_a_pdf():
    assert transcript_to_pdf(MESSAGES).startswith(b"%PDF")
