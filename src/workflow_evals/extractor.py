"""Tool-call sequence extraction from chat transcripts."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from workflow_evals.errors import TranscriptLoadError
from workflow_evals.models import ChatRequest

logger = logging.getLogger(__name__)

SEQUENCE_SEPARATOR = ","

# Server prefix added by the client, e.g. "mcp_github_create_issue"
_NAMESPACE_PREFIX = re.compile(r"^mcp_[^_]*_")

NOTE_KEYWORDS = ("error", "failed", "issue")


def load_transcript(path: Path) -> dict[str, Any]:
    """Read a transcript file into a JSON object.

    Raises:
        TranscriptLoadError: If the file is unreadable, not JSON, or not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise TranscriptLoadError(path, str(e)) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TranscriptLoadError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise TranscriptLoadError(path, f"expected a JSON object, got {type(data).__name__}")
    return data


def normalize_tool_name(name: str) -> str:
    """Strip the MCP server prefix from a tool name."""
    return _NAMESPACE_PREFIX.sub("", name, count=1)


def extract_tool_sequence(document: dict[str, Any]) -> tuple[str, ...]:
    """Return the ordered tool names called in a transcript.

    Each request is validated on its own, so a request that does not match
    the export schema is skipped without losing the calls of the others.
    A transcript with no usable requests yields an empty sequence.
    """
    requests = document.get("requests") or []
    if not isinstance(requests, list):
        logger.debug(f"Transcript requests is a {type(requests).__name__}, not a list")
        return ()

    sequence: list[str] = []
    for index, raw_request in enumerate(requests):
        try:
            request = ChatRequest.model_validate(raw_request)
        except ValidationError as e:
            logger.debug(f"Skipping request {index}, does not match export schema: {e}")
            continue
        if request.result is None or request.result.metadata is None:
            continue
        sequence.extend(
            normalize_tool_name(call.name)
            for tool_round in request.result.metadata.tool_call_rounds
            for call in tool_round.tool_calls
            if call.name
        )
    return tuple(sequence)


def serialize_sequence(sequence: Iterable[str]) -> str:
    """Join tool names with the fixed separator."""
    return SEQUENCE_SEPARATOR.join(sequence)


def parse_sequence(text: str) -> tuple[str, ...]:
    """Split a serialized sequence back into tool names."""
    if not text:
        return ()
    return tuple(text.split(SEQUENCE_SEPARATOR))


def extract_notes(document: dict[str, Any], max_length: int = 100) -> str:
    """Pick the first response text of the first request that mentions a problem.

    Matching is a case-insensitive substring search for NOTE_KEYWORDS.
    Newlines are flattened and the text is cut to max_length characters.
    """
    requests = document.get("requests")
    if not isinstance(requests, list) or not requests or not isinstance(requests[0], dict):
        return ""
    parts = requests[0].get("response")
    if not isinstance(parts, list):
        return ""

    for part in parts:
        if not isinstance(part, dict):
            continue
        value = part.get("value")
        if not isinstance(value, str):
            continue
        lowered = value.lower()
        if any(keyword in lowered for keyword in NOTE_KEYWORDS):
            flattened = value.replace("\r\n", " ").replace("\n", " ")
            return flattened[:max_length]
    return ""
