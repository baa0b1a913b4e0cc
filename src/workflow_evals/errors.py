"""Exceptions raised by the workflow evaluator."""

from pathlib import Path


class WorkflowEvalError(Exception):
    """Base exception for workflow evaluation errors."""


class ConfigurationError(WorkflowEvalError):
    """Raised when evaluation settings or inputs are unusable."""


class TranscriptLoadError(WorkflowEvalError):
    """Raised when a transcript file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load transcript {path.name}: {reason}")
