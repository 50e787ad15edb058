# -*- coding: utf-8 -*-
from __future__ import annotations

import html
from datetime import datetime, timezone
from typing import Any, Dict, List

from packcheck.models import Finding, Summary, ValidationResult


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _esc(s: Any) -> str:
    return html.escape("" if s is None else str(s))


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def _group_findings(findings: List[Finding]) -> Dict[str, List[Finding]]:
    groups: Dict[str, List[Finding]] = {"ERROR": [], "WARNING": [], "INFO": []}
    for f in findings:
        lvl = (f.level or "INFO").upper()
        groups.setdefault(lvl, []).append(f)
    return groups


def build_report_text(tool_name: str, summary: Summary) -> str:
    lines: List[str] = [f"{tool_name} - Validation Summary", "=" * 60]

    for err in summary.errors:
        lines.append(f"ERROR: {err}")

    for r in summary.per_pack:
        status = "OK" if r.valid else f"FAILED ({_plural(len(r.errors), 'error')})"
        lines.append("")
        lines.append(f"[{status}] {r.pack_name}")
        for e in r.errors:
            lines.append(f"    error:   {e}")
        for w in r.warnings:
            lines.append(f"    warning: {w}")

    lines.append("")
    if summary.overall_valid:
        lines.append("All required checks passed.")
    else:
        lines.append("Some packs have errors that must be fixed.")
    lines.append(
        f"{_plural(summary.total_errors, 'error')}, {_plural(summary.total_warnings, 'warning')}"
    )
    return "\n".join(lines) + "\n"


_CSS = """
    body { font-family: -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin: 24px; }
    .card { border: 1px solid #ddd; border-radius: 10px; padding: 14px; margin: 12px 0; }
    table { width: 100%; border-collapse: collapse; }
    th, td { border-bottom: 1px solid #eee; padding: 6px; text-align: left; font-size: 13px; }
    .pill { padding: 2px 8px; border-radius: 999px; font-size: 12px; font-weight: 700; }
    .ERROR, .INVALID { background: #ffe9e9; color: #8a0000; }
    .WARNING { background: #fff4d6; color: #7a5200; }
    .INFO { background: #e9f3ff; color: #003a7a; }
    .VALID { background: #e6f7e6; color: #0a5a0a; }
    code { background: #f6f6f6; padding: 1px 4px; }
    .small { font-size: 12px; color: #555; }
"""


def _pill(label: str) -> str:
    # label doubles as the CSS class
    return f'<span class="pill {_esc(label)}">{_esc(label)}</span>'


def _checks_table(r: ValidationResult) -> str:
    rows = []
    for check in r.checks:
        ordered = []
        for items in _group_findings(list(check.findings)).values():
            ordered.extend(items)
        for f in ordered:
            rel = f" <code>{_esc(f.relpath)}</code>" if f.relpath else ""
            rows.append(
                f"<tr><td>{_esc(check.name)}</td><td>{_pill(f.level.upper())}</td>"
                f"<td><code>{_esc(f.code)}</code></td><td>{_esc(f.message)}{rel}</td></tr>"
            )
    if not rows:
        return "<p class='small'>No findings.</p>"
    return (
        "<table><thead><tr><th>Check</th><th>Level</th><th>Code</th><th>Message</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody></table>"
    )


def _pack_card(r: ValidationResult) -> str:
    optional = [c.name for c in r.checks if not c.required]
    note = f" - advisory: {', '.join(optional)}" if optional else ""
    return (
        f'<div class="card">'
        f"<h2>{_esc(r.pack_name)} {_pill('VALID' if r.valid else 'INVALID')}</h2>"
        f"<p class='small'>{len(r.errors)} error(s), {len(r.warnings)} warning(s){_esc(note)}</p>"
        f"{_checks_table(r)}"
        f"</div>"
    )


def build_report_html(
    tool_name: str,
    tool_version: str,
    profile: str,
    packs_dir: str,
    summary: Summary,
) -> str:
    run_errors = "".join(f"<li>{_esc(e)}</li>" for e in summary.errors)
    run_errors_html = f"<ul>{run_errors}</ul>" if run_errors else ""
    packs_html = "".join(_pack_card(r) for r in summary.per_pack) or (
        "<p class='small'>No packs validated.</p>"
    )
    overall = "All required checks passed." if summary.overall_valid else "Some packs have errors that must be fixed."

    html_out = f"""
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>{_esc(tool_name)} Report</title>
  <style>{_CSS}</style>
</head>
<body>
  <h1>{_esc(tool_name)} - Pack Validation Report</h1>
  <p class="small">Generated {_esc(_utc_now())} (UTC) - Tool version {_esc(tool_version)}</p>

  <div class="card">
    <h2>Validation Summary</h2>
    <p>Profile: <b>{_esc(profile)}</b> - Packs dir: <code>{_esc(packs_dir)}</code></p>
    <p>{_esc(overall)}</p>
    <p class="small">
      {summary.total_errors} error(s),
      {summary.total_warnings} warning(s),
      {len(summary.per_pack)} pack(s)
    </p>
    {run_errors_html}
  </div>

  {packs_html}

</body>
</html>
"""
    return html_out
