"""Rich renderers for CLI outputs."""

from __future__ import annotations

from typing import Any

from rich.panel import Panel
from rich.table import Table

from nps_dashboard.cli.io import console
from nps_dashboard.cli.utils import format_percentage


def _nps_style(score: int) -> str:
    if score >= 50:
        return "green"
    if score >= 0:
        return "yellow"
    return "red"


def render_summary(summary: dict[str, Any]) -> None:
    """Display the summary card for the full collection."""

    total = summary.get("total_responses", 0)
    if not total:
        console.print(Panel("No feedback loaded.", title="NPS Summary"))
        return

    score = int(summary.get("nps_score", 0))
    breakdown = summary.get("breakdown") or {}
    lines = [
        f"[bold]Total responses:[/] {total}",
        f"[bold]NPS:[/] [{_nps_style(score)}]{score}[/]",
        "",
        f"Promoters:  {breakdown.get('promoters', 0)} "
        f"({format_percentage(breakdown.get('promoter_percentage', 0.0))})",
        f"Passives:   {breakdown.get('passives', 0)} "
        f"({format_percentage(breakdown.get('passive_percentage', 0.0))})",
        f"Detractors: {breakdown.get('detractors', 0)} "
        f"({format_percentage(breakdown.get('detractor_percentage', 0.0))})",
    ]
    rejected = summary.get("rejected_rows", 0)
    if rejected:
        lines.append(f"\n[yellow]{rejected} row(s) rejected while reading the export.[/]")
    console.print(Panel("\n".join(lines), title="NPS Summary"))

    distribution = summary.get("score_distribution") or {}
    if distribution:
        table = Table(title="Score Distribution")
        table.add_column("Score", justify="right")
        table.add_column("Responses", justify="right")
        for value, count in distribution.items():
            table.add_row(str(value), str(count))
        console.print(table)


def render_filtered(result: dict[str, Any], *, limit: int = 0) -> None:
    """Display the filtered report list with its statistics."""

    records = result.get("records") or []
    criteria = result.get("criteria") or {}
    matched = result.get("matched", len(records))
    total = result.get("total_responses", 0)

    if not records:
        console.print(Panel("No feedback matches the selected filters.", title="Filtered Feedback"))
    else:
        shown = records if limit <= 0 else records[:limit]
        table = Table(title=f"Filtered Feedback ({matched} of {total})")
        table.add_column("Created", no_wrap=True)
        table.add_column("User")
        table.add_column("Role")
        table.add_column("Score", justify="right")
        table.add_column("Reason")
        for record in shown:
            table.add_row(
                str(record.get("created_at", "")),
                str(record.get("user_id", "")),
                str(record.get("role", "")),
                str(record.get("score", "")),
                str(record.get("reason", "")),
            )
        console.print(table)
        if len(shown) < len(records):
            console.print(f"[dim]{len(records) - len(shown)} more row(s) not shown.[/]")

    filtered = result.get("filtered") or {}
    lines = [
        f"[bold]Period:[/] {criteria.get('period', 'all')}",
        f"[bold]Roles:[/] {', '.join(criteria.get('roles') or []) or 'any'}",
        f"[bold]Scores:[/] {', '.join(str(s) for s in criteria.get('scores') or []) or 'any'}",
        f"[bold]Filtered NPS:[/] {filtered.get('nps_score', 0)}",
        f"[bold]Overall NPS:[/] {result.get('nps_score', 0)}",
    ]
    if criteria.get("period") == "custom":
        lines.insert(
            1,
            f"[bold]Range:[/] {criteria.get('start_date') or '?'} to {criteria.get('end_date') or '?'}",
        )
    skipped = result.get("skipped_records", 0)
    if skipped:
        lines.append(f"[yellow]{skipped} record(s) skipped: unreadable timestamp.[/]")
    console.print(Panel("\n".join(lines), title="Filters"))


def render_breakdown(breakdown: dict[str, Any]) -> None:
    """Display the per-role engagement table."""

    roles = breakdown.get("roles") or {}
    if not roles:
        console.print(Panel("No responses to break down.", title="Engagement by Role"))
        return

    scope = breakdown.get("scope", "all")
    table = Table(title=f"Engagement by Role ({scope})")
    table.add_column("Role")
    table.add_column("Responses", justify="right")
    table.add_column("Promoters", justify="right")
    table.add_column("Passives", justify="right")
    table.add_column("Detractors", justify="right")
    table.add_column("NPS", justify="right")
    for role, item in roles.items():
        score = int(item.get("nps_score", 0))
        table.add_row(
            role or "(none)",
            str(item.get("total", 0)),
            str(item.get("promoters", 0)),
            str(item.get("passives", 0)),
            str(item.get("detractors", 0)),
            f"[{_nps_style(score)}]{score}[/]",
        )
    console.print(table)


__all__ = ["render_breakdown", "render_filtered", "render_summary"]
