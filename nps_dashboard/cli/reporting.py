"""Utilities for assembling CLI reports."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional


def build_report_payload(
    summary: Dict[str, Any],
    filtered: Optional[Dict[str, Any]] = None,
    breakdown: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Combine workflow outputs into one report payload."""

    return {
        "summary": summary,
        "filtered": filtered,
        "breakdown": breakdown,
    }


def render_report_markdown(payload: Dict[str, Any]) -> str:
    """Render a markdown report from a report payload."""

    sections: list[str] = ["# NPS Feedback Report"]

    summary_body = _render_summary(payload.get("summary") or {})
    if summary_body:
        sections.append(summary_body)

    filtered_body = _render_filtered(payload.get("filtered") or {})
    if filtered_body:
        sections.append(filtered_body)

    breakdown_body = _render_breakdown(payload.get("breakdown") or {})
    if breakdown_body:
        sections.append(breakdown_body)

    sections.append("## Appendix\n\n```json\n" + json.dumps(payload, indent=2) + "\n```")
    return "\n\n".join(sections)


def _render_summary(summary: Dict[str, Any]) -> Optional[str]:
    if not summary:
        return None
    breakdown = summary.get("breakdown") or {}
    rows = ["| Group | Responses | Share |", "| --- | ---: | ---: |"]
    for label, key in (("Promoters", "promoter"), ("Passives", "passive"), ("Detractors", "detractor")):
        count = breakdown.get(f"{key}s", 0)
        share = breakdown.get(f"{key}_percentage", 0.0)
        rows.append(f"| {label} | {count} | {share:.2f}% |")
    md = [
        "## Summary",
        f"**Total responses:** {summary.get('total_responses', 0)}",
        f"**NPS:** {summary.get('nps_score', 0)}",
        "\n".join(rows),
    ]
    return "\n\n".join(md)


def _render_filtered(filtered: Dict[str, Any]) -> Optional[str]:
    if not filtered:
        return None
    criteria = filtered.get("criteria") or {}
    md = ["## Filtered Feedback"]
    md.append(
        f"**Period:** {criteria.get('period', 'all')} | "
        f"**Roles:** {', '.join(criteria.get('roles') or []) or 'any'} | "
        f"**Scores:** {', '.join(str(s) for s in criteria.get('scores') or []) or 'any'}"
    )
    md.append(
        f"**Matched:** {filtered.get('matched', 0)} of {filtered.get('total_responses', 0)} "
        f"(filtered NPS {(filtered.get('filtered') or {}).get('nps_score', 0)})"
    )
    skipped = filtered.get("skipped_records", 0)
    if skipped:
        md.append(f"**Skipped (unreadable timestamp):** {skipped}")
    records = filtered.get("records") or []
    if records:
        rows = ["| Created | User | Role | Score | Reason |", "| --- | --- | --- | ---: | --- |"]
        for record in records:
            reason = str(record.get("reason", "")).replace("|", "\\|").replace("\n", " ")
            rows.append(
                f"| {record.get('created_at', '')} | {record.get('user_id', '')} | "
                f"{record.get('role', '')} | {record.get('score', '')} | {reason} |"
            )
        md.append("\n".join(rows))
    return "\n\n".join(md)


def _render_breakdown(breakdown: Dict[str, Any]) -> Optional[str]:
    roles = breakdown.get("roles") or {}
    if not roles:
        return None
    rows = [
        "| Role | Responses | Promoters | Passives | Detractors | NPS |",
        "| --- | ---: | ---: | ---: | ---: | ---: |",
    ]
    for role, item in roles.items():
        rows.append(
            f"| {role or '(none)'} | {item.get('total', 0)} | {item.get('promoters', 0)} | "
            f"{item.get('passives', 0)} | {item.get('detractors', 0)} | {item.get('nps_score', 0)} |"
        )
    return "## Engagement by Role\n\n" + "\n".join(rows)


__all__ = ["build_report_payload", "render_report_markdown"]
