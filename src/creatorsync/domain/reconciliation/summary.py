"""Plain-text summaries of group and run results."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .outcome import SyncOutcome
    from .sequencer import GroupResult, RunResult

RULE = "-" * 60


def _count_lines(outcome: SyncOutcome) -> list[str]:
    return [
        f"  Total:     {outcome.total}",
        f"  Success:   {outcome.success} (created)",
        f"  Updated:   {outcome.updated}",
        f"  Unchanged: {outcome.unchanged}",
        f"  Skipped:   {outcome.skipped} (no external id)",
        f"  Failed:    {outcome.failed}",
    ]


def format_group_summary(result: GroupResult) -> str:
    lines = [RULE, f"Group summary: {result.label}", *_count_lines(result.outcome), RULE]
    return "\n".join(lines)


def format_run_summary(result: RunResult) -> str:
    lines = [
        RULE,
        "Overall summary",
        f"  Groups processed: {len(result.groups)}",
        *_count_lines(result.totals),
    ]
    lines.extend(
        f"  ! {failure.record.category} / {failure.record.group} / "
        f"{failure.record.display_name}: {failure.failure} ({failure.detail})"
        for failure in result.failures
    )
    if result.interrupted:
        lines.append("  Run was stopped before completion")
    lines.append(RULE)
    return "\n".join(lines)
