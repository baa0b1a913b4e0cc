"""Tests for transcript and batch evaluation."""

import logging
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from workflow_evals.config import EvalConfig
from workflow_evals.errors import ConfigurationError
from workflow_evals.evaluator import (
    evaluate_directory,
    evaluate_paths,
    evaluate_transcript,
    find_transcripts,
)
from workflow_evals.tools import ErrorPattern, InstructionsVariant, Task

REVIEW_ROUNDS = [
    ["mcp_github_get_pull_request"],
    ["mcp_github_create_pending_pull_request_review"],
    ["mcp_github_add_comment_to_pending_review", "mcp_github_add_comment_to_pending_review"],
    ["mcp_github_submit_pending_pull_request_review"],
]


class TestEvaluateTranscript:
    """Tests for evaluate_transcript."""

    def test_full_review_transcript(
        self,
        eval_config: EvalConfig,
        write_transcript: Callable,
        make_transcript: Callable,
    ) -> None:
        """A complete instructed review passes with no error pattern."""
        path = write_transcript(
            "gpt5mini_with_instructions_pr_review.json",
            make_transcript(REVIEW_ROUNDS, response_texts=["Found an issue on line 4"]),
        )

        result = evaluate_transcript(path, eval_config)

        assert result.model == "gpt5mini"
        assert result.task == Task.PR_REVIEW
        assert result.instructions_variant == InstructionsVariant.WITH_INSTRUCTIONS
        assert result.success is True
        assert result.error_type == ErrorPattern.NONE
        assert result.tool_sequence[0] == "get_pull_request"
        assert result.add_comment_count == 2
        assert result.notes == "Found an issue on line 4"
        assert result.source == path.name

    def test_malformed_transcript_still_produces_result(
        self,
        eval_config: EvalConfig,
        write_transcript: Callable,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Broken JSON is evaluated as an empty transcript."""
        path = write_transcript("claude_NO_instructions_pr_review.json", "{broken")

        with caplog.at_level(logging.WARNING):
            result = evaluate_transcript(path, eval_config)

        assert result.model == "claude"
        assert result.instructions_variant == InstructionsVariant.WITHOUT_INSTRUCTIONS
        assert result.success is False
        assert result.error_type == ErrorPattern.NONE
        assert result.tool_sequence == ()
        assert "evaluating as an empty transcript" in caplog.text

    def test_notes_respect_configured_length(
        self,
        tmp_path: Path,
        write_transcript: Callable,
        make_transcript: Callable,
    ) -> None:
        """notes_max_length bounds the notes column."""
        config = EvalConfig(output_file=tmp_path / "r.csv", notes_max_length=5)
        path = write_transcript("m.json", make_transcript([], response_texts=["error: boom"]))

        assert evaluate_transcript(path, config).notes == "error"


class TestBatchEvaluation:
    """Tests for directory and path batches."""

    def _write_batch(self, write_transcript: Callable, make_transcript: Callable) -> list[Path]:
        return [
            write_transcript(
                "c_with_instructions_pr_review.json",
                make_transcript([["mcp_github_create_and_submit_pull_request_review"]]),
            ),
            write_transcript(
                "a_with_instructions_pr_review.json", make_transcript(REVIEW_ROUNDS)
            ),
            write_transcript("b_NO_instructions_issue_link.json", "not json at all"),
        ]

    @pytest.mark.parametrize("workers", [1, 4])
    def test_results_follow_file_order(
        self,
        workers: int,
        tmp_path: Path,
        transcript_dir: Path,
        write_transcript: Callable,
        make_transcript: Callable,
    ) -> None:
        """Results come back sorted by file name regardless of worker count."""
        self._write_batch(write_transcript, make_transcript)
        config = EvalConfig(output_file=tmp_path / "r.csv", workers=workers)

        results = evaluate_directory(transcript_dir, config)

        assert [r.model for r in results] == ["a", "b", "c"]
        assert [r.success for r in results] == [True, False, False]
        assert results[2].error_type == ErrorPattern.IMMEDIATE_SUBMIT
        assert results[1].task == Task.ISSUE_LINKING

    def test_only_json_files_are_evaluated(
        self, transcript_dir: Path, write_transcript: Callable
    ) -> None:
        """Other files and subdirectories are ignored."""
        write_transcript("a.json", {})
        (transcript_dir / "notes.txt").write_text("x")
        (transcript_dir / "nested.json").mkdir()

        assert [p.name for p in find_transcripts(transcript_dir)] == ["a.json"]

    def test_missing_directory_raises(self, tmp_path: Path, eval_config: EvalConfig) -> None:
        """A missing transcript directory is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            evaluate_directory(tmp_path / "nope", eval_config)

    def test_unexpected_failure_skips_only_that_transcript(
        self,
        eval_config: EvalConfig,
        write_transcript: Callable,
        make_transcript: Callable,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """One transcript blowing up does not abort the batch."""
        paths = self._write_batch(write_transcript, make_transcript)
        original = evaluate_transcript

        def _flaky(path: Path, config: EvalConfig):
            if path.name.startswith("a_"):
                raise RuntimeError("boom")
            return original(path, config)

        with patch("workflow_evals.evaluator.evaluate_transcript", side_effect=_flaky):
            with caplog.at_level(logging.WARNING):
                results = evaluate_paths(sorted(paths), eval_config)

        assert [r.model for r in results] == ["b", "c"]
        assert "Skipping a_with_instructions_pr_review.json" in caplog.text
        assert "1 of 3 transcripts could not be evaluated" in caplog.text

    def test_empty_directory(self, transcript_dir: Path, eval_config: EvalConfig) -> None:
        """No transcripts, no results."""
        assert evaluate_directory(transcript_dir, eval_config) == []
