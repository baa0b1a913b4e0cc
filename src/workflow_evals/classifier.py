"""Workflow classification of tool-call sequences.

Three independent checks run against the same sequence:

- success: did the agent use the tools the task's workflow requires
- counts: how often each review tool was called
- error pattern: the highest-priority known deviation, if any

All functions are pure and total over any sequence, task and variant.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from workflow_evals.models import EvaluationResult, TranscriptMetadata
from workflow_evals.tools import (
    ADD_COMMENT_TO_PENDING_REVIEW,
    COUNTED_TOOLS,
    CREATE_AND_SUBMIT_REVIEW,
    CREATE_ISSUE,
    CREATE_PENDING_REVIEW,
    CREATE_PULL_REQUEST,
    PENDING_REVIEW_WORKFLOW,
    REVIEW_TOOLS,
    SUBMIT_PENDING_REVIEW,
    ErrorPattern,
    InstructionsVariant,
    Task,
)

SuccessRule = Callable[[frozenset[str], InstructionsVariant], bool]


def _review_rule(tools: frozenset[str], variant: InstructionsVariant) -> bool:
    # Instructed agents must use the granular pending-review workflow;
    # otherwise any review tool counts as a review.
    if variant == InstructionsVariant.WITH_INSTRUCTIONS:
        return tools.issuperset(PENDING_REVIEW_WORKFLOW)
    return not tools.isdisjoint(REVIEW_TOOLS)


def _simple_comment_rule(tools: frozenset[str], variant: InstructionsVariant) -> bool:
    return CREATE_AND_SUBMIT_REVIEW in tools


def _issue_linking_rule(tools: frozenset[str], variant: InstructionsVariant) -> bool:
    return CREATE_ISSUE in tools and CREATE_PULL_REQUEST in tools


SUCCESS_RULES: dict[Task, SuccessRule] = {
    Task.PR_REVIEW: _review_rule,
    Task.SIMPLE_PR_COMMENT: _simple_comment_rule,
    Task.ISSUE_LINKING: _issue_linking_rule,
    Task.UNKNOWN: _review_rule,
}


def check_success(
    sequence: Sequence[str],
    task: Task,
    variant: InstructionsVariant,
) -> bool:
    """Decide whether a sequence completes the expected workflow for a task.

    Only presence matters here; call order is judged by detect_error_pattern.
    Tasks without a rule of their own use the PR review rule.
    """
    rule = SUCCESS_RULES.get(task, _review_rule)
    return rule(frozenset(sequence), variant)


def count_occurrences(sequence: Sequence[str], tool_name: str) -> int:
    """Count exact-name calls to a tool."""
    return sum(1 for name in sequence if name == tool_name)


def tool_counts(sequence: Sequence[str]) -> dict[str, int]:
    """Count calls to each of the reported review tools, keyed by result field."""
    return {field: count_occurrences(sequence, tool) for field, tool in COUNTED_TOOLS.items()}


def _first_index(sequence: Sequence[str], tool_name: str) -> int | None:
    try:
        return sequence.index(tool_name)
    except ValueError:
        return None


def _is_immediate_submit(sequence: Sequence[str]) -> bool:
    return CREATE_AND_SUBMIT_REVIEW in sequence and CREATE_PENDING_REVIEW not in sequence


def _is_missing_line_comments(sequence: Sequence[str]) -> bool:
    return CREATE_PENDING_REVIEW in sequence and ADD_COMMENT_TO_PENDING_REVIEW not in sequence


def _is_wrong_order(sequence: Sequence[str]) -> bool:
    submit_at = _first_index(sequence, SUBMIT_PENDING_REVIEW)
    create_at = _first_index(sequence, CREATE_PENDING_REVIEW)
    if submit_at is None or create_at is None:
        return False
    return submit_at < create_at


# Evaluated top-down, first match wins
ERROR_PATTERN_CHECKS: tuple[tuple[Callable[[Sequence[str]], bool], ErrorPattern], ...] = (
    (_is_immediate_submit, ErrorPattern.IMMEDIATE_SUBMIT),
    (_is_missing_line_comments, ErrorPattern.MISSING_LINE_COMMENTS),
    (_is_wrong_order, ErrorPattern.WRONG_ORDER),
)


def detect_error_pattern(sequence: Sequence[str]) -> ErrorPattern:
    """Return the highest-priority error pattern the sequence exhibits."""
    for predicate, pattern in ERROR_PATTERN_CHECKS:
        if predicate(sequence):
            return pattern
    return ErrorPattern.NONE


def classify(
    sequence: Sequence[str],
    metadata: TranscriptMetadata,
    notes: str = "",
    source: str = "",
) -> EvaluationResult:
    """Run all checks on a sequence and merge them into one result."""
    sequence = tuple(sequence)
    return EvaluationResult(
        model=metadata.model,
        instructions_variant=metadata.instructions_variant,
        task=metadata.task,
        success=check_success(sequence, metadata.task, metadata.instructions_variant),
        tool_sequence=sequence,
        error_type=detect_error_pattern(sequence),
        notes=notes,
        source=source,
        **tool_counts(sequence),
    )
