"""Rendering of scan results."""

from typing import Dict, Iterable

from .scanner import LineVerdict, ScanSummary


def format_line(verdict: LineVerdict) -> str:
    status = "ok" if verdict.reported_ok else "nok"
    return f"Line {verdict.lineno:05d}: {status}"


def render_lines(verdicts: Iterable[LineVerdict]) -> str:
    return "\n".join(format_line(verdict) for verdict in verdicts)


def summary_payload(summary: ScanSummary) -> Dict[str, object]:
    """Return a JSON-ready description of ``summary``."""
    return {
        "source": summary.source,
        "ok": summary.ok,
        "lines": summary.lines,
        "failed": summary.failed,
        "first_failure": summary.first_failure,
        "stopped_early": summary.stopped_early,
        "elapsed_seconds": round(summary.elapsed, 6),
        "invalid_lines": [verdict.lineno for verdict in summary.verdicts if not verdict.ok],
    }
