import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .llm_client import MissingApiKeyError
from .prompts import build_topic_prompt
from .translations import get_strings, normalize_language

logger = logging.getLogger(__name__)

Message = Dict[str, Any]

CONNECTION_ERROR_MESSAGE = "Error connecting to Dr.SEM. Please check your API Key settings."

KEY_ERROR_PATTERNS = ("api_key", "api key", "requested entity was not found")

TOOL_KEYWORDS = [
    ("fit_checker", ("cfi", "rmsea", "fit index")),
    ("apa_table", ("apa table", "ตาราง")),
    ("jamovi", ("jamovi", "syntax", "code")),
]


class ChatSession:
    def __init__(self, client: Any, store: Any = None, language: str = "th") -> None:
        self.client = client
        self.store = store
        self.language = normalize_language(language)
        self.busy = False
        self.api_key_missing = False
        self.suggested_tool: Optional[str] = None
        self.messages: List[Message] = []
        if store is not None:
            self.messages = list(store.load("messages", []) or [])
        if not self.messages:
            self.messages = [self._greeting()]

    def check_api_key(self) -> bool:
        self.api_key_missing = not self.client.is_enabled()
        return not self.api_key_missing

    def send(self, text: str, attachment: Optional[Dict[str, str]] = None) -> Optional[Message]:
        """Run one request/response turn and return the AI message it appended.

        Returns ``None`` without touching the transcript when the input is empty
        or a request is already outstanding.
        """
        text = (text or "").strip()
        if (not text and not attachment) or self.busy:
            return None

        history = to_history(self.messages)
        user_message = new_message(text, "user")
        if attachment:
            user_message["attachments"] = [{"type": "file", "content": attachment.get("name", "")}]
        self._append(user_message)

        self.busy = True
        self.suggested_tool = None
        try:
            reply = self.client.send_message(history, text, attachment)
        except Exception as exc:
            logger.error("Chat request failed: %s", exc)
            if is_key_error(exc):
                self.api_key_missing = True
            return self._append(new_message(CONNECTION_ERROR_MESSAGE, "ai"))
        finally:
            self.busy = False

        answer = str(reply.get("answer") or "System Error")
        ai_message = new_message(answer, "ai")
        ai_message["suggested_questions"] = list(reply.get("suggested_questions") or [])
        ai_message["related_questions"] = list(reply.get("related_questions") or [])
        self.suggested_tool = suggest_tool(answer)
        return self._append(ai_message)

    def ask_topic(self, topic: str) -> Optional[Message]:
        return self.send(build_topic_prompt(topic))

    def clear(self, confirm: Callable[[str], bool]) -> bool:
        if not confirm("Are you sure you want to clear the chat history?"):
            return False
        self.messages = [self._greeting()]
        self.suggested_tool = None
        self._save()
        return True

    def set_language(self, language: str) -> None:
        self.language = normalize_language(language)

    def _greeting(self) -> Message:
        return new_message(get_strings(self.language)["greeting"], "ai")

    def _append(self, message: Message) -> Message:
        self.messages.append(message)
        self._save()
        return message

    def _save(self) -> None:
        if self.store is not None:
            self.store.save("messages", self.messages)


def new_message(text: str, sender: str) -> Message:
    return {
        "id": f"m_{uuid.uuid4().hex[:12]}",
        "text": text,
        "sender": sender,
        "timestamp": _now_utc_iso(),
    }


def to_history(messages: List[Message]) -> List[Dict[str, str]]:
    return [
        {"role": "user" if message.get("sender") == "user" else "model", "text": message.get("text", "")}
        for message in messages
    ]


def suggest_tool(answer: str) -> Optional[str]:
    lowered = (answer or "").lower()
    for tool, keywords in TOOL_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return tool
    return None


def is_key_error(exc: Exception) -> bool:
    if isinstance(exc, MissingApiKeyError):
        return True
    text = str(exc).lower()
    return any(pattern in text for pattern in KEY_ERROR_PATTERNS)


def _now_utc_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat().replace("+00:00", "Z")
