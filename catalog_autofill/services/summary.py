from __future__ import annotations

from ..models.processing_result import AutofillSummary

"""SUMMARY line rendering for autofill runs."""

__all__ = [
    "render_summary_line",
]


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(summary: AutofillSummary) -> str:
    """Render the SUMMARY line of an autofill run.

    Format:
    SUMMARY products={total} success={success} failed={failed} fields={fields} elapsed_sec={elapsed}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> render_summary_line(AutofillSummary(start_time=start, end_time=end))
        'SUMMARY products=0 success=0 failed=0 fields=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY products={summary.total} "
        f"success={summary.success} "
        f"failed={summary.failed} "
        f"fields={summary.filled_fields} "
        f"elapsed_sec={_format_seconds(summary.elapsed_seconds)}"
    )
