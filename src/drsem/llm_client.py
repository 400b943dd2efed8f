import json
import logging
import os
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

from .prompts import DR_SEM_SYSTEM_PROMPT, RESPONSE_SCHEMA

logger = logging.getLogger(__name__)

HistoryTurn = Dict[str, str]

DEFAULT_MODEL = "gemini-2.5-flash"
API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class MissingApiKeyError(RuntimeError):
    pass


class LLMRequestError(RuntimeError):
    pass


class GeminiJSONClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: int = 60,
    ) -> None:
        self.api_key = api_key or os.getenv("GEMINI_API_KEY", "") or os.getenv("API_KEY", "")
        self.model = model or os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        self.timeout_seconds = timeout_seconds

    def is_enabled(self) -> bool:
        return bool(self.api_key)

    def send_message(
        self,
        history: List[HistoryTurn],
        message: str,
        attachment: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        if not self.is_enabled():
            raise MissingApiKeyError("API Key is missing. Please select an API key.")

        payload = build_request_payload(history, message, attachment)
        url = f"{API_BASE_URL}/{urllib.parse.quote(self.model)}:generateContent"
        request = urllib.request.Request(
            url=url,
            data=json.dumps(payload).encode("utf-8"),
            method="POST",
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
                raw = response.read().decode("utf-8")
        except urllib.error.HTTPError as exc:
            details = exc.read().decode("utf-8", errors="replace")
            logger.error("Gemini API returned HTTP %s", exc.code)
            raise LLMRequestError(f"Gemini API error: {details}") from exc
        except urllib.error.URLError as exc:
            logger.error("Gemini API unreachable: %s", exc)
            raise LLMRequestError(f"Network error: {exc}") from exc
        except OSError as exc:
            logger.error("Gemini API request failed: %s", exc)
            raise LLMRequestError(f"Request failed: {exc}") from exc

        try:
            response_data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("Gemini API returned a non-JSON body")
            raise LLMRequestError("Gemini API returned an unreadable response.") from exc
        return parse_structured_reply(_extract_text(response_data))


def build_request_payload(
    history: List[HistoryTurn],
    message: str,
    attachment: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    contents: List[Dict[str, Any]] = []
    for turn in history:
        role = "user" if turn.get("role") == "user" else "model"
        contents.append({"role": role, "parts": [{"text": str(turn.get("text", ""))}]})

    parts: List[Dict[str, Any]] = []
    if attachment:
        parts.append(
            {
                "inline_data": {
                    "mime_type": attachment["mime_type"],
                    "data": strip_data_url(attachment["data"]),
                }
            }
        )
    parts.append({"text": message})
    contents.append({"role": "user", "parts": parts})

    return {
        "system_instruction": {"parts": [{"text": DR_SEM_SYSTEM_PROMPT}]},
        "contents": contents,
        "generationConfig": {
            "temperature": 0.7,
            "responseMimeType": "application/json",
            "responseSchema": RESPONSE_SCHEMA,
        },
    }


def parse_structured_reply(text: str) -> Dict[str, Any]:
    raw = (text or "").strip()
    if not raw:
        return {"answer": "", "suggested_questions": [], "related_questions": []}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Model reply was not JSON, falling back to raw text")
        return {"answer": raw, "suggested_questions": [], "related_questions": []}
    if not isinstance(parsed, dict):
        return {"answer": raw, "suggested_questions": [], "related_questions": []}

    return {
        "answer": str(parsed.get("answer") or raw),
        "suggested_questions": _string_list(parsed.get("suggestedQuestions")),
        "related_questions": _string_list(parsed.get("relatedQuestions")),
    }


def strip_data_url(data: str) -> str:
    if data.startswith("data:") and "," in data:
        return data.split(",", 1)[1]
    return data


def _extract_text(response: Dict[str, Any]) -> str:
    candidates = response.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]
