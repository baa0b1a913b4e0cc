"""Readers for recorded evaluation results."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from workflow_evals.config import OutputFormat
from workflow_evals.extractor import parse_sequence
from workflow_evals.models import EvaluationResult
from workflow_evals.tools import ErrorPattern, InstructionsVariant, Task

logger = logging.getLogger(__name__)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def row_to_result(row: dict[str, Any]) -> EvaluationResult:
    """Build a result from a CSV row or JSON object.

    Raises:
        KeyError: If a required column is missing.
        ValueError: If a count or error type is invalid.
    """
    sequence = row["tool_sequence"]
    if isinstance(sequence, str):
        sequence = parse_sequence(sequence)

    return EvaluationResult(
        model=row["model"],
        instructions_variant=InstructionsVariant.from_str(row["instructions_variant"]),
        task=Task.from_str(row["task"]),
        success=_parse_bool(row["success"]),
        tool_sequence=tuple(sequence),
        error_type=ErrorPattern(row["error_type"]),
        notes=row.get("notes") or "",
        create_pending_count=int(row.get("create_pending_count") or 0),
        add_comment_count=int(row.get("add_comment_count") or 0),
        submit_pending_count=int(row.get("submit_pending_count") or 0),
        create_and_submit_count=int(row.get("create_and_submit_count") or 0),
        source=row.get("source") or "",
    )


def _read_csv(path: Path) -> list[EvaluationResult]:
    results: list[EvaluationResult] = []
    with open(path, encoding="utf-8", newline="") as f:
        for line_num, row in enumerate(csv.DictReader(f), 2):
            try:
                results.append(row_to_result(row))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed row at line {line_num}: {e}")
    return results


def _read_jsonl(path: Path) -> list[EvaluationResult]:
    results: list[EvaluationResult] = []
    for line_num, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            results.append(row_to_result(json.loads(line)))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            logger.warning(f"Skipping malformed record at line {line_num}: {e}")
    return results


def load_results(path: Path) -> list[EvaluationResult]:
    """Load evaluation results from a CSV or JSONL file.

    Returns an empty list if the file doesn't exist.
    """
    if not path.exists():
        logger.debug(f"No evaluation results found at {path}")
        return []

    if OutputFormat.for_path(path) == OutputFormat.JSONL:
        return _read_jsonl(path)
    return _read_csv(path)
