"""Evaluation result recording.

Results are written as CSV (one header line plus one row per transcript)
or as JSONL (one JSON object per line).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from workflow_evals.config import OutputFormat
from workflow_evals.extractor import serialize_sequence
from workflow_evals.models import EvaluationResult

logger = logging.getLogger(__name__)

RESULT_COLUMNS = (
    "model",
    "instructions_variant",
    "task",
    "success",
    "tool_sequence",
    "error_type",
    "notes",
    "create_pending_count",
    "add_comment_count",
    "submit_pending_count",
    "create_and_submit_count",
)

# Free-text columns that are quoted even when they hold no separator
_ALWAYS_QUOTED = frozenset({"tool_sequence", "notes"})


def result_to_row(result: EvaluationResult) -> dict[str, Any]:
    """Flatten a result into column values."""
    return {
        "model": result.model,
        "instructions_variant": result.instructions_variant.value,
        "task": result.task.value,
        "success": "true" if result.success else "false",
        "tool_sequence": serialize_sequence(result.tool_sequence),
        "error_type": result.error_type.value,
        "notes": result.notes,
        "create_pending_count": result.create_pending_count,
        "add_comment_count": result.add_comment_count,
        "submit_pending_count": result.submit_pending_count,
        "create_and_submit_count": result.create_and_submit_count,
    }


def _csv_field(value: Any, force_quote: bool = False) -> str:
    text = str(value)
    if force_quote or any(c in text for c in ',"\r\n'):
        return '"' + text.replace('"', '""') + '"'
    return text


def format_csv_row(result: EvaluationResult) -> str:
    """Render one result as a CSV line, without the line terminator."""
    row = result_to_row(result)
    return ",".join(_csv_field(row[col], col in _ALWAYS_QUOTED) for col in RESULT_COLUMNS)


class ResultRecorder:
    """Writes evaluation results to a CSV or JSONL file.

    The file is truncated and a CSV header written on start(); each call
    to write() appends one record.
    """

    def __init__(self, path: Path, fmt: OutputFormat | None = None) -> None:
        self.path = path
        self.format = fmt or OutputFormat.for_path(path)
        self.count = 0

    def start(self) -> None:
        """Create or truncate the output file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            if self.format == OutputFormat.CSV:
                f.write(",".join(RESULT_COLUMNS) + "\n")
        self.count = 0

    def write(self, result: EvaluationResult) -> None:
        """Append a single result."""
        if self.format == OutputFormat.JSONL:
            row = result_to_row(result)
            row["success"] = result.success
            row["tool_sequence"] = list(result.tool_sequence)
            row["source"] = result.source
            line = json.dumps(row)
        else:
            line = format_csv_row(result)
        with open(self.path, "a", encoding="utf-8", newline="") as f:
            f.write(line + "\n")
        self.count += 1

    def write_all(self, results: Iterable[EvaluationResult]) -> int:
        """Start a fresh file and write every result, returning the count."""
        self.start()
        for result in results:
            self.write(result)
        logger.info(f"Wrote {self.count} results to {self.path}")
        return self.count
