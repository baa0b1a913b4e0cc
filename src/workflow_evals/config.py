"""Configuration for the workflow evaluator."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Logging verbosity."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class OutputFormat(str, Enum):
    """File format for evaluation results."""

    CSV = "csv"
    JSONL = "jsonl"

    @classmethod
    def for_path(cls, path: Path) -> OutputFormat:
        """Infer the format from a file suffix, defaulting to CSV."""
        if path.suffix.lower() in (".jsonl", ".ndjson"):
            return cls.JSONL
        return cls.CSV


class EvalConfig(BaseSettings):
    """Configuration for transcript evaluation runs.

    Loaded from environment variables with WORKFLOW_EVAL_ prefix
    or from a .env.eval file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_EVAL_",
        env_file=".env.eval",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Input / output
    transcript_dir: Path = Field(
        default=Path("."),
        description="Directory containing *.json chat transcripts",
    )
    output_file: Path = Field(
        default=Path("evaluation_results.csv"),
        description="Where evaluation results are written",
    )
    output_format: OutputFormat | None = Field(
        default=None,
        description="Result file format (default: inferred from output_file suffix)",
    )

    # Extraction settings
    notes_max_length: int = Field(
        default=100,
        ge=0,
        le=1000,
        description="Maximum number of characters kept in the notes column",
    )
    instructions_marker: str = Field(
        default="pending review",
        description="Phrase in the server instructions that marks a with_instructions run",
    )

    # Execution settings
    workers: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of transcripts evaluated concurrently",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )

    @property
    def resolved_output_format(self) -> OutputFormat:
        """Output format, inferred from the output file when not set."""
        return self.output_format or OutputFormat.for_path(self.output_file)
