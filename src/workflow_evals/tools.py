"""Tool names and enumerations used when classifying transcripts."""

from enum import Enum

# GitHub MCP tool names, as they appear once the server prefix is stripped
CREATE_PENDING_REVIEW = "create_pending_pull_request_review"
ADD_COMMENT_TO_PENDING_REVIEW = "add_comment_to_pending_review"
SUBMIT_PENDING_REVIEW = "submit_pending_pull_request_review"
CREATE_AND_SUBMIT_REVIEW = "create_and_submit_pull_request_review"
CREATE_ISSUE = "create_issue"
CREATE_PULL_REQUEST = "create_pull_request"

# The granular review workflow, in the order the agent is expected to call it
PENDING_REVIEW_WORKFLOW = (
    CREATE_PENDING_REVIEW,
    ADD_COMMENT_TO_PENDING_REVIEW,
    SUBMIT_PENDING_REVIEW,
)

REVIEW_TOOLS = frozenset({*PENDING_REVIEW_WORKFLOW, CREATE_AND_SUBMIT_REVIEW})

# Tools whose occurrences are always reported, keyed by result column
COUNTED_TOOLS = {
    "create_pending_count": CREATE_PENDING_REVIEW,
    "add_comment_count": ADD_COMMENT_TO_PENDING_REVIEW,
    "submit_pending_count": SUBMIT_PENDING_REVIEW,
    "create_and_submit_count": CREATE_AND_SUBMIT_REVIEW,
}


class Task(str, Enum):
    """Task the agent was asked to perform."""

    PR_REVIEW = "pr_review"
    SIMPLE_PR_COMMENT = "simple_pr_comment"
    ISSUE_LINKING = "issue_linking"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, value: str | None) -> "Task":
        """Parse a task label, falling back to UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.lower())
        except ValueError:
            return cls.UNKNOWN


class InstructionsVariant(str, Enum):
    """Whether the agent received explicit workflow instructions."""

    WITH_INSTRUCTIONS = "with_instructions"
    WITHOUT_INSTRUCTIONS = "without_instructions"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, value: str | None) -> "InstructionsVariant":
        """Parse a variant label, accepting the legacy NO_instructions spelling."""
        if not value:
            return cls.UNKNOWN
        normalized = value.lower()
        if normalized == "no_instructions":
            return cls.WITHOUT_INSTRUCTIONS
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


class ErrorPattern(str, Enum):
    """Known ways an agent deviates from the expected review workflow."""

    IMMEDIATE_SUBMIT = "immediate_submit"
    MISSING_LINE_COMMENTS = "missing_line_comments"
    WRONG_ORDER = "wrong_order"
    NONE = "none"
