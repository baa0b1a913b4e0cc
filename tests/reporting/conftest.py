"""Pytest fixtures for reporting tests."""

import pytest

from workflow_evals.models import EvaluationResult
from workflow_evals.tools import ErrorPattern, InstructionsVariant, Task


@pytest.fixture
def sample_results() -> list[EvaluationResult]:
    """A small batch covering both variants and several error types."""
    return [
        EvaluationResult(
            model="gpt5mini",
            instructions_variant=InstructionsVariant.WITH_INSTRUCTIONS,
            task=Task.PR_REVIEW,
            success=True,
            tool_sequence=(
                "create_pending_pull_request_review",
                "add_comment_to_pending_review",
                "submit_pending_pull_request_review",
            ),
            error_type=ErrorPattern.NONE,
            create_pending_count=1,
            add_comment_count=1,
            submit_pending_count=1,
            source="gpt5mini_with_instructions_pr_review.json",
        ),
        EvaluationResult(
            model="gpt5mini",
            instructions_variant=InstructionsVariant.WITHOUT_INSTRUCTIONS,
            task=Task.PR_REVIEW,
            success=True,
            tool_sequence=("create_and_submit_pull_request_review",),
            error_type=ErrorPattern.IMMEDIATE_SUBMIT,
            notes='Review failed: "nit", see line 3',
            create_and_submit_count=1,
        ),
        EvaluationResult(
            model="claude",
            instructions_variant=InstructionsVariant.WITH_INSTRUCTIONS,
            task=Task.PR_REVIEW,
            success=False,
            tool_sequence=("create_and_submit_pull_request_review",),
            error_type=ErrorPattern.IMMEDIATE_SUBMIT,
            create_and_submit_count=1,
        ),
        EvaluationResult(
            model="claude",
            instructions_variant=InstructionsVariant.WITH_INSTRUCTIONS,
            task=Task.ISSUE_LINKING,
            success=False,
            tool_sequence=(),
            error_type=ErrorPattern.NONE,
        ),
    ]
