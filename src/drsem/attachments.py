import base64
import mimetypes
from pathlib import Path
from typing import Dict, Optional

SUPPORTED_ATTACHMENT_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".webp",
    ".pdf",
    ".csv",
    ".txt",
}

UPLOAD_TYPES = sorted(ext.lstrip(".") for ext in SUPPORTED_ATTACHMENT_EXTENSIONS)


class AttachmentError(ValueError):
    pass


class UnsupportedAttachmentError(AttachmentError):
    pass


class EmptyAttachmentError(AttachmentError):
    pass


def read_attachment(
    filename: str, content_bytes: bytes, mime_type: Optional[str] = None
) -> Dict[str, str]:
    name = (filename or "").strip()
    extension = Path(name).suffix.lower()
    if extension not in SUPPORTED_ATTACHMENT_EXTENSIONS:
        raise UnsupportedAttachmentError(
            f"Unsupported attachment type: {extension or '(no extension)'}"
        )
    if not content_bytes:
        raise EmptyAttachmentError("Attachment is empty.")

    resolved_mime = (mime_type or "").strip() or mimetypes.guess_type(name)[0] or "application/octet-stream"
    return {
        "name": name,
        "mime_type": resolved_mime,
        "data": base64.b64encode(content_bytes).decode("ascii"),
    }
