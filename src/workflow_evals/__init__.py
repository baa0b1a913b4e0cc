"""Workflow evaluation for GitHub MCP agent transcripts."""

__version__ = "0.1.0"
