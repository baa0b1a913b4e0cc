"""Recording and reporting of evaluation results."""

from workflow_evals.reporting.comparison import model_comparison_report
from workflow_evals.reporting.reader import load_results
from workflow_evals.reporting.recorder import RESULT_COLUMNS, ResultRecorder
from workflow_evals.reporting.summary import format_summary, summarize

__all__ = [
    "RESULT_COLUMNS",
    "ResultRecorder",
    "format_summary",
    "load_results",
    "model_comparison_report",
    "summarize",
]
