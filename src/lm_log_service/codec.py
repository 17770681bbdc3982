"""Canonical text encodings shared by the HTTP payloads and the row store.

Timestamps use one fixed form, ``YYYY-MM-DDTHH:MM:SS.ffffff``: a naive instant
with exactly six fractional digits and no timezone suffix. Anything else,
including otherwise valid ISO-8601 with an offset, is rejected on decode.

Transcripts are stored as a JSON array of ``{"role", "content"}`` objects in
conversation order.
"""

import json
import re
from collections.abc import Iterable
from datetime import datetime

from lm_log_service.errors import InvalidTimestamp, TranscriptDecodeError
from lm_log_service.schemas.prompt import PromptMessage, decode_role

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"

_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{6}")


def encode_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        raise InvalidTimestamp(value.isoformat(), "timezone-aware values are not accepted")
    return value.isoformat(timespec="microseconds")


def decode_timestamp(text: object) -> datetime:
    if not isinstance(text, str):
        raise InvalidTimestamp(text, "expected a string")
    if not _TIMESTAMP_RE.fullmatch(text):
        raise InvalidTimestamp(text)
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise InvalidTimestamp(text, str(exc)) from exc


def decode_optional_timestamp(text: object) -> datetime | None:
    """Like ``decode_timestamp`` but maps absence (``None``) to ``None``.

    An empty string is not absence and still fails.
    """
    if text is None:
        return None
    return decode_timestamp(text)


def coerce_timestamp(value: object) -> datetime:
    """Accept an in-memory ``datetime`` or its canonical text form."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            raise InvalidTimestamp(value.isoformat(), "timezone-aware values are not accepted")
        return value
    return decode_timestamp(value)


def encode_transcript(messages: Iterable[PromptMessage]) -> str:
    return json.dumps(
        [{"role": m.role.value, "content": m.content} for m in messages],
        ensure_ascii=False,
    )


def decode_transcript(text: str) -> list[PromptMessage]:
    try:
        raw = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise TranscriptDecodeError(f"Transcript is not valid JSON: {exc}") from exc
    if not isinstance(raw, list):
        raise TranscriptDecodeError(f"Transcript must be a JSON array, got {type(raw).__name__}")

    messages: list[PromptMessage] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or "role" not in item or "content" not in item:
            raise TranscriptDecodeError(f"Transcript entry {index} must have role and content")
        content = item["content"]
        if not isinstance(content, str):
            raise TranscriptDecodeError(f"Transcript entry {index} content must be a string")
        messages.append(PromptMessage(role=decode_role(item["role"]), content=content))
    return messages
