"""Shared pytest fixtures for workflow evaluation tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from workflow_evals.config import EvalConfig


def build_transcript(
    rounds: list[list[str]],
    model_id: str | None = None,
    response_texts: list[str] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a chat export document with one request and the given tool-call rounds."""
    request: dict[str, Any] = {
        "response": [{"value": text} for text in (response_texts or [])],
        "result": {
            "metadata": {
                "toolCallRounds": [
                    {"toolCalls": [{"name": name, "arguments": "{}"} for name in names]}
                    for names in rounds
                ],
            },
        },
    }
    if model_id is not None:
        request["modelId"] = model_id
    return {"requests": [request], **extra}


@pytest.fixture
def eval_config(tmp_path: Path) -> EvalConfig:
    """Evaluation config pointing at a temporary directory."""
    return EvalConfig(
        transcript_dir=tmp_path / "transcripts",
        output_file=tmp_path / "results.csv",
    )


@pytest.fixture
def transcript_dir(tmp_path: Path) -> Path:
    """Empty transcript directory."""
    directory = tmp_path / "transcripts"
    directory.mkdir()
    return directory


@pytest.fixture
def write_transcript(transcript_dir: Path) -> Callable[[str, Any], Path]:
    """Return a callable that writes a transcript document into transcript_dir."""

    def _write(filename: str, document: Any) -> Path:
        path = transcript_dir / filename
        if isinstance(document, str):
            path.write_text(document)
        else:
            path.write_text(json.dumps(document))
        return path

    return _write


@pytest.fixture
def make_transcript() -> Callable[..., dict[str, Any]]:
    """Return the transcript document builder."""
    return build_transcript
