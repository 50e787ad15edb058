from __future__ import annotations

import logging
from typing import List

from packcheck.core import checkers, probe
from packcheck.core.profiles import ValidationProfile
from packcheck.core.walker import dispatch_content, scan_tree
from packcheck.models import CheckOutcome, Finding, Pack, ValidationResult

logger = logging.getLogger(__name__)


def check_structure(pack: Pack, profile: ValidationProfile) -> CheckOutcome:
    findings: List[Finding] = []
    root_name = profile.content_root
    content_root = pack.root / root_name

    if not probe.is_dir(content_root):
        findings.append(
            Finding("ERROR", "CONTENT_ROOT_MISSING", f"{root_name}/ directory not found", root_name + "/")
        )
        return CheckOutcome("structure", False, tuple(findings))

    found = [k for k in profile.content_kinds if probe.is_dir(content_root / k)]
    for kind in found:
        findings.append(
            Finding("INFO", "CONTENT_KIND_PRESENT", f"{root_name}/{kind}/ exists", f"{root_name}/{kind}/")
        )

    if not found:
        kinds = ", ".join(profile.content_kinds)
        findings.append(
            Finding(
                "ERROR",
                "CONTENT_ROOT_EMPTY",
                f"{root_name}/ directory is empty (no {kinds})",
                root_name + "/",
            )
        )

    if profile.installer_script:
        script = content_root / profile.installer_script
        if probe.is_file(script):
            text = probe.read_text(script)
            if text is not None and profile.installer_shebang not in text:
                findings.append(
                    Finding(
                        "WARNING",
                        "INSTALLER_NO_SHEBANG",
                        f"{profile.installer_script} missing shebang ({profile.installer_shebang})",
                        f"{root_name}/{profile.installer_script}",
                    )
                )

    return CheckOutcome("structure", bool(found), tuple(findings))


def check_content(pack: Pack, profile: ValidationProfile) -> CheckOutcome:
    dispatch = {
        rule.kind: rule
        for rule in profile.kind_rules
        if rule.kind in profile.content_kinds
    }
    findings = dispatch_content(
        pack.root / profile.content_root,
        dispatch,
        checkers.check_frontmatter,
        base=pack.root,
    )
    passed = not any(f.level == "ERROR" for f in findings)
    return CheckOutcome("content", passed, tuple(findings))


def check_compatibility(pack: Pack, profile: ValidationProfile) -> CheckOutcome:
    """
    Findings are worded as warnings, yet by default any hit fails the pack.
    Set compatibility_gates_validity to false in the profile to make the
    scan advisory.
    """
    findings: List[Finding] = []
    for f in scan_tree(pack.root / profile.content_root, base=pack.root, suffixes=profile.scan_suffixes):
        text = probe.read_text(f.path)
        if text is None:
            continue
        findings.extend(checkers.scan_compatibility(text, profile.compat_rules, f.relpath))

    return CheckOutcome(
        "compatibility",
        not findings,
        tuple(findings),
        required=profile.compatibility_gates_validity,
    )


def _not_found(pack: Pack) -> ValidationResult:
    finding = Finding("ERROR", "PACK_NOT_FOUND", f"Pack not found: {pack.root}", None)
    outcome = CheckOutcome("pack_root", False, (finding,))
    return ValidationResult(
        pack_name=pack.name,
        valid=False,
        errors=outcome.errors,
        warnings=(),
        checks=(outcome,),
    )


def validate_pack(pack: Pack, profile: ValidationProfile) -> ValidationResult:
    """
    Run every check for one pack, in order. A failing check never stops the
    later ones, so the result lists every problem at once.
    """
    logger.info("Validating pack: %s", pack.name)
    if not pack.exists:
        logger.info("Pack not found: %s", pack.root)
        return _not_found(pack)

    checks = [
        checkers.check_required_files(pack.root, profile),
        check_structure(pack, profile),
        check_content(pack, profile),
        checkers.check_install_guide(pack.root, profile),
        checkers.check_verify_guide(pack.root, profile),
        checkers.check_readme(pack.root, profile),
        check_compatibility(pack, profile),
    ]

    for c in checks:
        logger.debug(
            "%s/%s: passed=%s errors=%d warnings=%d",
            pack.name, c.name, c.passed, len(c.errors), len(c.warnings),
        )

    valid = all(c.passed for c in checks if c.required)
    result = ValidationResult(
        pack_name=pack.name,
        valid=valid,
        errors=tuple(e for c in checks for e in c.errors),
        warnings=tuple(w for c in checks for w in c.warnings),
        checks=tuple(checks),
    )
    logger.info(
        "Pack %s: %s (%d error(s), %d warning(s))",
        pack.name, "valid" if valid else "INVALID", len(result.errors), len(result.warnings),
    )
    return result
