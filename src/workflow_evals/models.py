"""Data models for transcripts and evaluation results.

Transcript models mirror the VS Code chat export format and only describe
the fields the evaluator reads; everything else is ignored. Result records
are plain frozen dataclasses, one per evaluated transcript.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from workflow_evals.tools import ErrorPattern, InstructionsVariant, Task


class _ExportModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ToolCallEntry(_ExportModel):
    """A single tool invocation inside a tool-call round."""

    name: str | None = Field(None, description="Raw tool name, possibly server-prefixed")

    @field_validator("name", mode="before")
    @classmethod
    def non_string_name_as_missing(cls, v: Any) -> str | None:
        return v if isinstance(v, str) else None


class ToolCallRound(_ExportModel):
    """One model turn that issued zero or more tool calls."""

    tool_calls: list[ToolCallEntry] = Field(
        default_factory=list, alias="toolCalls", description="Tool calls in this round"
    )

    @field_validator("tool_calls", mode="before")
    @classmethod
    def null_calls_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class ResultMetadata(_ExportModel):
    """Metadata attached to a request result."""

    tool_call_rounds: list[ToolCallRound] = Field(
        default_factory=list, alias="toolCallRounds", description="Tool-call rounds in order"
    )

    @field_validator("tool_call_rounds", mode="before")
    @classmethod
    def null_rounds_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class RequestResult(_ExportModel):
    """Result block of a chat request."""

    metadata: ResultMetadata | None = None


class ChatRequest(_ExportModel):
    """A user request and the agent's handling of it."""

    result: RequestResult | None = Field(None, description="Absent for cancelled requests")


@dataclass(frozen=True)
class TranscriptMetadata:
    """The facts about a transcript that select the classification rules."""

    model: str = "unknown"
    task: Task = Task.UNKNOWN
    instructions_variant: InstructionsVariant = InstructionsVariant.UNKNOWN


@dataclass(frozen=True)
class EvaluationResult:
    """Evaluation outcome for a single transcript, one output row."""

    model: str
    instructions_variant: InstructionsVariant
    task: Task
    success: bool
    tool_sequence: tuple[str, ...]
    error_type: ErrorPattern
    notes: str = ""
    create_pending_count: int = 0
    add_comment_count: int = 0
    submit_pending_count: int = 0
    create_and_submit_count: int = 0
    source: str = ""
