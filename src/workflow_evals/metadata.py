"""Metadata resolution for transcripts.

Model, task and instructions variant can come from the transcript content
or from the file name. Each field is resolved independently with the
precedence: content, then file name, then the default sentinel.

File names follow the convention ``model_instructionsVariant_task[...].json``,
for example ``gpt5mini_with_instructions_pr_review_v1.json``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from workflow_evals.models import TranscriptMetadata
from workflow_evals.tools import PENDING_REVIEW_WORKFLOW, InstructionsVariant, Task

logger = logging.getLogger(__name__)

# Checked in order, first match wins
_TASK_PATTERNS: tuple[tuple[re.Pattern[str], Task], ...] = (
    (re.compile(r"simple_pr_comment|simple_comment", re.IGNORECASE), Task.SIMPLE_PR_COMMENT),
    (re.compile(r"issue_linking|issue_link", re.IGNORECASE), Task.ISSUE_LINKING),
    (re.compile(r"pr_review", re.IGNORECASE), Task.PR_REVIEW),
)

_VARIANT_PATTERNS: tuple[tuple[re.Pattern[str], InstructionsVariant], ...] = (
    (re.compile(r"without_instructions|no_instructions", re.IGNORECASE),
     InstructionsVariant.WITHOUT_INSTRUCTIONS),
    (re.compile(r"with_instructions", re.IGNORECASE), InstructionsVariant.WITH_INSTRUCTIONS),
)

# Tool names in workflow order, separated by anything
_WORKFLOW_MENTION = re.compile(".*?".join(re.escape(name) for name in PENDING_REVIEW_WORKFLOW),
                               re.DOTALL)


@dataclass(frozen=True)
class PartialMetadata:
    """Metadata recovered by one strategy; None means not recoverable."""

    model: str | None = None
    task: Task | None = None
    instructions_variant: InstructionsVariant | None = None


def metadata_from_filename(path: Path) -> PartialMetadata:
    """Recover metadata from a transcript's file name."""
    stem = path.stem
    model = stem.split("_", 1)[0] or None

    task = next((t for pattern, t in _TASK_PATTERNS if pattern.search(stem)), None)
    variant = next((v for pattern, v in _VARIANT_PATTERNS if pattern.search(stem)), None)
    return PartialMetadata(model=model, task=task, instructions_variant=variant)


def _find_instruction_texts(node: Any) -> list[str]:
    """Collect string values stored under keys that mention instructions."""
    texts: list[str] = []
    if isinstance(node, dict):
        for key, value in node.items():
            if isinstance(value, str):
                if "instructions" in str(key).lower():
                    texts.append(value)
            else:
                texts.extend(_find_instruction_texts(value))
    elif isinstance(node, list):
        for item in node:
            texts.extend(_find_instruction_texts(item))
    return texts


def _model_from_content(document: dict[str, Any]) -> str | None:
    requests = document.get("requests")
    if isinstance(requests, list):
        for request in requests:
            if isinstance(request, dict):
                model_id = request.get("modelId")
                if isinstance(model_id, str) and model_id.strip():
                    return model_id.strip()
    model = document.get("model")
    if isinstance(model, str) and model.strip():
        return model.strip()
    return None


def metadata_from_content(
    document: dict[str, Any],
    instructions_marker: str = "pending review",
) -> PartialMetadata:
    """Recover metadata embedded in a transcript document.

    The variant is WITH_INSTRUCTIONS when any instructions text lists the
    pending-review tools in workflow order or contains the marker phrase.
    Instructions text without either means WITHOUT_INSTRUCTIONS. The task
    cannot be recovered from content.
    """
    variant: InstructionsVariant | None = None
    texts = _find_instruction_texts(document)
    if texts:
        marker = instructions_marker.lower()
        instructed = any(
            _WORKFLOW_MENTION.search(text) or (marker and marker in text.lower())
            for text in texts
        )
        variant = (
            InstructionsVariant.WITH_INSTRUCTIONS
            if instructed
            else InstructionsVariant.WITHOUT_INSTRUCTIONS
        )

    return PartialMetadata(model=_model_from_content(document), instructions_variant=variant)


def _first(*values: Any) -> Any:
    return next(value for value in values if value is not None)


def resolve_metadata(
    path: Path,
    document: dict[str, Any] | None = None,
    instructions_marker: str = "pending review",
) -> TranscriptMetadata:
    """Resolve model, task and variant for a transcript."""
    from_content = (
        metadata_from_content(document, instructions_marker) if document else PartialMetadata()
    )
    from_name = metadata_from_filename(path)

    metadata = TranscriptMetadata(
        model=_first(from_content.model, from_name.model, "unknown"),
        task=_first(from_content.task, from_name.task, Task.UNKNOWN),
        instructions_variant=_first(
            from_content.instructions_variant,
            from_name.instructions_variant,
            InstructionsVariant.UNKNOWN,
        ),
    )
    logger.debug(f"Resolved metadata for {path.name}: {metadata}")
    return metadata
