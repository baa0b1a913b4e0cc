"""Transcript evaluation.

Each transcript is evaluated independently: load, resolve metadata,
extract the tool sequence and notes, classify. Batches preserve the
file enumeration order in their results regardless of worker count.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from workflow_evals.classifier import classify
from workflow_evals.config import EvalConfig
from workflow_evals.errors import ConfigurationError, TranscriptLoadError
from workflow_evals.extractor import extract_notes, extract_tool_sequence, load_transcript
from workflow_evals.metadata import resolve_metadata
from workflow_evals.models import EvaluationResult

logger = logging.getLogger(__name__)

TRANSCRIPT_GLOB = "*.json"


def evaluate_transcript(path: Path, config: EvalConfig) -> EvaluationResult:
    """Evaluate a single transcript file.

    An unreadable or malformed transcript is evaluated as one that made
    no tool calls, so it still produces a result.
    """
    document: dict[str, Any] = {}
    try:
        document = load_transcript(path)
    except TranscriptLoadError as e:
        logger.warning(f"{e}; evaluating as an empty transcript")

    metadata = resolve_metadata(path, document, config.instructions_marker)
    sequence = extract_tool_sequence(document)
    notes = extract_notes(document, config.notes_max_length)

    result = classify(sequence, metadata, notes=notes, source=path.name)
    logger.info(
        f"Evaluated {path.name}: task={result.task.value} "
        f"variant={result.instructions_variant.value} success={result.success} "
        f"error_type={result.error_type.value}"
    )
    return result


def find_transcripts(directory: Path) -> list[Path]:
    """List transcript files in a directory, sorted by name.

    Raises:
        ConfigurationError: If the directory does not exist.
    """
    if not directory.is_dir():
        raise ConfigurationError(f"Transcript directory not found: {directory}")
    return sorted(p for p in directory.glob(TRANSCRIPT_GLOB) if p.is_file())


def _evaluate_isolated(path: Path, config: EvalConfig) -> EvaluationResult | None:
    try:
        return evaluate_transcript(path, config)
    except Exception:
        logger.exception(f"Skipping {path.name}: evaluation failed")
        return None


def evaluate_paths(paths: Iterable[Path], config: EvalConfig) -> list[EvaluationResult]:
    """Evaluate transcripts, returning results in input order.

    A transcript that fails unexpectedly is logged and left out; the rest
    of the batch is still evaluated.
    """
    paths = list(paths)
    if config.workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            outcomes = list(executor.map(lambda p: _evaluate_isolated(p, config), paths))
    else:
        outcomes = [_evaluate_isolated(p, config) for p in paths]

    results = [r for r in outcomes if r is not None]
    skipped = len(paths) - len(results)
    if skipped:
        logger.warning(f"{skipped} of {len(paths)} transcripts could not be evaluated")
    return results


def evaluate_directory(directory: Path, config: EvalConfig) -> list[EvaluationResult]:
    """Evaluate every transcript in a directory."""
    paths = find_transcripts(directory)
    logger.info(f"Starting evaluation of {len(paths)} transcripts in: {directory}")
    return evaluate_paths(paths, config)
