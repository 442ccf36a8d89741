"""Shared notification formatting helpers.

Keeping formatting here prevents drift between adapters and keeps messages
consistent regardless of delivery channel.
"""

from __future__ import annotations

import html
from typing import Iterable, List, Sequence

from core.models import Listing, Notification, ReportSnapshot

COLUMNS = (("Apartment", "name"), ("Sq.Ft", "size"), ("Rent", "price"))
GUTTER = "  | "
RULE_CHAR = "-"

TITLES = {
    "added": "🚨 New Apartments Available! 🚨",
    "removed": "Apartments No Longer Listed",
    "report": "📊 Process Report 📊",
}
UNAVAILABLE_TEXT = "No apartments are currently available."


def _column_widths(rows: Sequence[Sequence[str]]) -> List[int]:
    widths = []
    for index, (header, _) in enumerate(COLUMNS):
        widths.append(max([len(header)] + [len(row[index]) for row in rows]))
    return widths


def _render_row(cells: Iterable[str], widths: Sequence[int]) -> str:
    return GUTTER.join(cell.ljust(width) for cell, width in zip(cells, widths))


def render_table(listings: Sequence[Listing]) -> List[str]:
    """Render listings as aligned text lines.

    The header, every rule and every row have the same length. No listings
    means no lines, and callers leave the section out.
    """

    if not listings:
        return []

    rows = [tuple(str(getattr(listing, attr)) for _, attr in COLUMNS) for listing in listings]
    widths = _column_widths(rows)
    header = _render_row((name for name, _ in COLUMNS), widths)
    rule = RULE_CHAR * len(header)

    lines = [header]
    for row in rows:
        lines.append(rule)
        lines.append(_render_row(row, widths))
    return lines


def format_uptime(seconds: float) -> str:
    hours, remainder = divmod(int(max(seconds, 0)), 3600)
    minutes = remainder // 60
    return f"{hours}h {minutes:02d}m"


def _report_lines(report: ReportSnapshot) -> List[str]:
    return [
        f"Running Time: {format_uptime(report.uptime_seconds)}",
        f"Checks Performed: {report.polls}",
        f"Changed This Check: {'yes' if report.changed else 'no'}",
        f"Unique Errors Encountered: {report.distinct_errors}",
    ]


def _format_html(notification: Notification) -> str:
    """Create the HTML body used by the Bot API adapter."""

    kind = notification.kind
    if kind == "unavailable":
        return html.escape(UNAVAILABLE_TEXT)
    if kind == "error":
        return html.escape(notification.error_message or "")
    if kind == "report":
        lines = [f"<b>{TITLES['report']}</b>"]
        lines.extend(html.escape(line) for line in _report_lines(notification.report))
        return "\n".join(lines)

    table = render_table(notification.listings)
    if not table:
        return ""
    # The header row is emphasized inside the preformatted block.
    body = [f"<b>{html.escape(table[0])}</b>"] + [html.escape(line) for line in table[1:]]
    return f"<b>{TITLES[kind]}</b>\n\n<pre>" + "\n".join(body) + "</pre>"


def _format_markdown(notification: Notification) -> str:
    """Create the Markdown body used by Saved Messages."""

    def escape_md(value: str) -> str:
        for ch in r"*[`":
            value = value.replace(ch, f"\\{ch}")
        return value

    kind = notification.kind
    if kind == "unavailable":
        return UNAVAILABLE_TEXT
    if kind == "error":
        return escape_md(notification.error_message or "")
    if kind == "report":
        lines = [f"**{TITLES['report']}**"]
        lines.extend(escape_md(line) for line in _report_lines(notification.report))
        return "\n".join(lines)

    table = render_table(notification.listings)
    if not table:
        return ""
    # Code blocks are verbatim, so the table itself is not escaped.
    return f"**{TITLES[kind]}**\n\n```\n" + "\n".join(table) + "\n```"


def format_notification(notification: Notification, mode: str) -> str:
    """Return the notification formatted for the requested mode."""

    if notification.kind not in {"added", "removed", "unavailable", "error", "report"}:
        raise ValueError(f"Unsupported notification kind: {notification.kind}")
    if mode == "markdown":
        return _format_markdown(notification)
    if mode == "html":
        return _format_html(notification)
    raise ValueError(f"Unsupported notification format: {mode}")
