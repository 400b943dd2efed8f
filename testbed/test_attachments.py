import base64

import pytest

from src.drsem.attachments import (
    EmptyAttachmentError,
    UnsupportedAttachmentError,
    read_attachment,
)


def test_image_is_base64_encoded_with_given_mime():
    attachment = read_attachment("figure.PNG", b"\x89PNG data", "image/png")
    assert attachment["name"] == "figure.PNG"
    assert attachment["mime_type"] == "image/png"
    assert base64.b64decode(attachment["data"]) == b"\x89PNG data"


def test_mime_type_is_guessed_when_missing():
    assert read_attachment("scores.csv", b"a,b\n1,2")["mime_type"] == "text/csv"
    assert read_attachment("paper.pdf", b"%PDF-1.4")["mime_type"] == "application/pdf"


def test_unsupported_and_empty_files_are_rejected():
    with pytest.raises(UnsupportedAttachmentError):
        read_attachment("model.sav", b"data")
    with pytest.raises(EmptyAttachmentError):
        read_attachment("notes.txt", b"")
