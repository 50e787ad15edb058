from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from packcheck.core import probe
from packcheck.core.profiles import TextRule, ValidationProfile
from packcheck.models import CheckOutcome, Finding


# Opening "---" line, optional body, closing "---" line
_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def has_frontmatter(content: str) -> bool:
    return _FRONTMATTER_RE.match(content) is not None


def missing_markers(content: str, markers: Sequence[str]) -> List[str]:
    """
    Markers are plain substrings: a label or heading counts as present if it
    appears anywhere in the text, prose included.
    """
    return [m for m in markers if m not in content]


def match_text_rules(content: str, rules: Sequence[TextRule]) -> List[TextRule]:
    hits: List[TextRule] = []
    for rule in rules:
        if not re.search(rule.pattern, content):
            continue
        if rule.unless and rule.unless in content:
            continue
        hits.append(rule)
    return hits


def check_required_files(pack_root: Path, profile: ValidationProfile) -> CheckOutcome:
    findings: List[Finding] = []

    for name in profile.required_files:
        if not probe.is_file(pack_root / name):
            findings.append(
                Finding("ERROR", "REQ_FILE_MISSING", f"Missing {name}", name)
            )

    for name in profile.recommended_files:
        if not probe.is_file(pack_root / name):
            findings.append(
                Finding(
                    "WARNING",
                    "RECOMMENDED_FILE_MISSING",
                    f"{name} not found (optional but recommended)",
                    name,
                )
            )

    passed = not any(f.level == "ERROR" for f in findings)
    return CheckOutcome("required_files", passed, tuple(findings))


def _section_findings(name: str, content: str, sections: Sequence[str]) -> List[Finding]:
    return [
        Finding("WARNING", "SECTION_MISSING", f"{name}: Missing section: {s}", name)
        for s in missing_markers(content, sections)
    ]


def check_readme(pack_root: Path, profile: ValidationProfile) -> CheckOutcome:
    """
    The readme is optional: its absence is reported by the required-files
    check, and nothing here can fail the pack.
    """
    name = profile.readme_file
    path = pack_root / name
    if not probe.exists(path):
        return CheckOutcome("readme", True, (), required=False)

    content = probe.read_text(path)
    if content is None:
        finding = Finding("WARNING", "FILE_UNREADABLE", f"Cannot read {name}", name)
        return CheckOutcome("readme", True, (finding,), required=False)

    findings = _section_findings(name, content, profile.readme_sections)
    return CheckOutcome("readme", True, tuple(findings), required=False)


def check_install_guide(pack_root: Path, profile: ValidationProfile) -> CheckOutcome:
    name = profile.install_file
    path = pack_root / name
    if not probe.exists(path):
        finding = Finding("ERROR", "INSTALL_MISSING", f"{name} not found", name)
        return CheckOutcome("install_guide", False, (finding,))

    content = probe.read_text(path)
    if content is None:
        finding = Finding("ERROR", "FILE_UNREADABLE", f"Cannot read {name}", name)
        return CheckOutcome("install_guide", False, (finding,))

    # Missing sections are advisory; only absence fails this check
    findings = _section_findings(name, content, profile.install_sections)
    for rule in match_text_rules(content, profile.install_hints):
        findings.append(Finding("WARNING", rule.code, f"{name}: {rule.message}", name))

    return CheckOutcome("install_guide", True, tuple(findings))


def _has_heading(content: str) -> bool:
    return "##" in content or content.find("#") > 0


def check_verify_guide(pack_root: Path, profile: ValidationProfile) -> CheckOutcome:
    """
    Three independent predicates over the verification guide:
      - mentions a test/verify token (case-insensitive)
      - has step headings
      - has a shell fenced code block
    Only the first two decide pass/fail; a missing example is a warning.
    """
    name = profile.verify_file
    path = pack_root / name
    if not probe.exists(path):
        finding = Finding("ERROR", "VERIFY_MISSING", f"{name} not found", name)
        return CheckOutcome("verify_guide", False, (finding,))

    content = probe.read_text(path)
    if content is None:
        finding = Finding("ERROR", "FILE_UNREADABLE", f"Cannot read {name}", name)
        return CheckOutcome("verify_guide", False, (finding,))

    lowered = content.lower()
    has_tests = any(t.lower() in lowered for t in profile.verify_tokens)
    has_steps = _has_heading(content)
    has_examples = any(fence in content for fence in profile.verify_fences)

    findings: List[Finding] = []
    if not has_tests:
        findings.append(
            Finding("WARNING", "VERIFY_NO_TESTS", f"{name}: No verification tests found", name)
        )
    if not has_steps:
        findings.append(
            Finding(
                "WARNING",
                "VERIFY_NO_STEPS",
                f"{name}: No step-by-step verification found",
                name,
            )
        )
    if not has_examples:
        findings.append(
            Finding("WARNING", "VERIFY_NO_EXAMPLES", f"{name}: No shell examples found", name)
        )

    return CheckOutcome("verify_guide", has_tests and has_steps, tuple(findings))


def check_frontmatter(
    content: Optional[str],
    required_fields: Sequence[str],
    relpath: str,
) -> List[Finding]:
    """
    Validate one metadata file. Returns ERROR findings; empty means valid.
    """
    if content is None:
        return [Finding("ERROR", "FILE_UNREADABLE", f"Cannot read {relpath}", relpath)]

    if not has_frontmatter(content):
        return [
            Finding(
                "ERROR",
                "FRONTMATTER_MISSING",
                f"{relpath}: missing YAML frontmatter",
                relpath,
            )
        ]

    return [
        Finding("ERROR", "FIELD_MISSING", f"{relpath}: missing field: {label}", relpath)
        for label in missing_markers(content, required_fields)
    ]


def scan_compatibility(content: str, rules: Sequence[TextRule], relpath: str) -> List[Finding]:
    return [
        Finding("WARNING", rule.code, f"{relpath}: {rule.message}", relpath)
        for rule in match_text_rules(content, rules)
    ]
