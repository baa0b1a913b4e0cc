"""Terminal and markdown table formatting for evaluation reports."""

from __future__ import annotations


def truncate(text: str, width: int) -> str:
    """Truncate text to width, adding ellipsis if needed."""
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def percent(part: int, total: int) -> int:
    """Integer percentage, rounded down; 0 when total is 0."""
    if total <= 0:
        return 0
    return part * 100 // total


def rate_label(part: int, total: int) -> str:
    """Format a ratio as 'part/total (pct%)'."""
    return f"{part}/{total} ({percent(part, total)}%)"


def _pad(text: str, width: int, align: str) -> str:
    if align == "r":
        return text.rjust(width)
    if align == "c":
        return text.center(width)
    return text.ljust(width)


def format_table(
    headers: list[str],
    rows: list[list[str]],
    alignments: list[str] | None = None,
    fmt: str = "terminal",
) -> str:
    """Render a fixed-width table.

    Args:
        headers: Column header strings.
        rows: List of row data (each row is a list of strings).
        alignments: Per-column alignment ('l', 'r', 'c'). Defaults to left.
        fmt: 'terminal' for ASCII borders, 'markdown' for GFM table.
    """
    if not headers:
        return ""

    num_cols = len(headers)
    if alignments is None:
        alignments = ["l"] * num_cols

    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[:num_cols]):
            col_widths[i] = max(col_widths[i], len(cell))

    def _line(cells: list[str]) -> str:
        padded = [
            _pad(cells[i] if i < len(cells) else "", col_widths[i], alignments[i])
            for i in range(num_cols)
        ]
        return "| " + " | ".join(padded) + " |"

    header_line = _line(headers)
    data_lines = [_line(row) for row in rows]

    if fmt == "markdown":
        sep_parts = []
        for width, align in zip(col_widths, alignments):
            if align == "r":
                sep_parts.append("-" * (width - 1) + ":")
            elif align == "c":
                sep_parts.append(":" + "-" * (width - 2) + ":")
            else:
                sep_parts.append("-" * width)
        sep_line = "| " + " | ".join(sep_parts) + " |"
        return "\n".join([header_line, sep_line, *data_lines])

    border = "+-" + "-+-".join("-" * w for w in col_widths) + "-+"
    return "\n".join([border, header_line, border, *data_lines, border])


def with_title(title: str, body: str, fmt: str = "terminal") -> str:
    """Prefix a report body with a title line."""
    if fmt == "markdown":
        return f"## {title}\n\n{body}"
    return f"{title}\n\n{body}"
