from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

from packcheck.models import Finding, Summary, ValidationResult


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _finding_dict(f: Finding) -> Dict[str, Any]:
    return {
        "level": f.level,
        "code": f.code,
        "message": f.message,
        "relpath": f.relpath,
    }


def _pack_dict(r: ValidationResult) -> Dict[str, Any]:
    return {
        "pack": r.pack_name,
        "valid": r.valid,
        "errors": list(r.errors),
        "warnings": list(r.warnings),
        "checks": [
            {
                "name": c.name,
                "passed": c.passed,
                "required": c.required,
                "findings": [_finding_dict(f) for f in c.findings],
            }
            for c in r.checks
        ],
    }


def build_summary_dict(
    tool_name: str,
    tool_version: str,
    profile: str,
    packs_dir: str,
    summary: Summary,
    include_timestamp: bool = True,
) -> Dict[str, Any]:
    results_out: List[Dict[str, Any]] = [_pack_dict(r) for r in summary.per_pack]

    doc: Dict[str, Any] = {
        "tool": tool_name,
        "version": tool_version,
        "profile": profile,
        "packs_dir": packs_dir,
        "overall_valid": summary.overall_valid,
        "total_errors": summary.total_errors,
        "total_warnings": summary.total_warnings,
        "run_errors": list(summary.errors),
        "results": results_out,
    }
    if include_timestamp:
        doc["timestamp_utc"] = _utc_now_iso()
    return doc


def dumps_summary(doc: Dict[str, Any]) -> str:
    return json.dumps(doc, indent=2, ensure_ascii=False)
