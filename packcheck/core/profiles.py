from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml


@dataclass(frozen=True)
class TextRule:
    code: str
    pattern: str                   # regex searched in file text
    message: str
    unless: Optional[str] = None   # literal that, when present, silences the rule


@dataclass(frozen=True)
class KindRule:
    kind: str                          # sub-directory name under the content root
    member: str                        # "dir" (definition file inside) or "file"
    required_fields: Tuple[str, ...]
    definition_file: str = ""          # for member == "dir"
    suffix: str = ".md"                # for member == "file"


@dataclass(frozen=True)
class ValidationProfile:
    name: str
    required_files: Tuple[str, ...]
    recommended_files: Tuple[str, ...]
    content_root: str
    content_kinds: Tuple[str, ...]
    readme_file: str
    readme_sections: Tuple[str, ...]
    install_file: str
    install_sections: Tuple[str, ...]
    install_hints: Tuple[TextRule, ...]
    verify_file: str
    verify_tokens: Tuple[str, ...]
    verify_fences: Tuple[str, ...]
    kind_rules: Tuple[KindRule, ...]
    compat_rules: Tuple[TextRule, ...]
    compatibility_gates_validity: bool = True
    # Empty scans every readable text file, install scripts included.
    # Use (".md",) to limit the scan to documentation.
    scan_suffixes: Tuple[str, ...] = ()
    installer_script: str = "install.ts"
    installer_shebang: str = "#!/usr/bin/env bun"


def default_profile() -> ValidationProfile:
    return ValidationProfile(
        name="PAI v2",
        required_files=("INSTALL.md", "VERIFY.md"),
        recommended_files=("README.md",),
        content_root="src",
        content_kinds=("skills", "agents", "tools", "commands"),
        readme_file="README.md",
        readme_sections=("# ", "## Overview", "## What This Pack Provides"),
        install_file="INSTALL.md",
        install_sections=(
            "# Installation:",
            "## Prerequisites",
            "## Installation Steps",
            "## Post-Installation",
        ),
        install_hints=(
            TextRule(
                code="INSTALL_NO_WINDOWS_BUN",
                pattern=r"bun\.sh",
                message="May lack Windows Bun install instructions",
                unless="bun.sh/install.ps1",
            ),
        ),
        verify_file="VERIFY.md",
        verify_tokens=("test", "verify"),
        verify_fences=("```powershell", "```bash", "```sh", "```shell"),
        kind_rules=(
            KindRule(
                kind="skills",
                member="dir",
                definition_file="SKILL.md",
                required_fields=("name:", "description:", "version:"),
            ),
            KindRule(
                kind="agents",
                member="file",
                suffix=".md",
                required_fields=("name:", "description:", "instruction:"),
            ),
        ),
        compat_rules=(
            TextRule(
                code="COMPAT_HARDCODED_PATH",
                pattern=r"C:\\Users\\[^\s]+\\\.claude",
                message="Hard-coded Windows path (use $PAI_DIR or $env:USERPROFILE\\.claude)",
            ),
            TextRule(
                code="COMPAT_BASH_COMMAND",
                pattern=r"chmod",
                message="Bash commands present (chmod)",
                unless="PowerShell",
            ),
        ),
        compatibility_gates_validity=True,
    )


def to_json_dict(profile: ValidationProfile) -> Dict[str, Any]:
    return asdict(profile)


def _strs(value: Any, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if value is None:
        return default
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Expected a list of strings, got: {value!r}")
    return tuple(str(x) for x in value)


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Expected true or false, got: {value!r}")
    return value


def _text_rules(value: Any, default: Tuple[TextRule, ...]) -> Tuple[TextRule, ...]:
    if value is None:
        return default
    rules: List[TextRule] = []
    for r in value:
        if not isinstance(r, dict) or "pattern" not in r:
            raise ValueError(f"Text rule needs at least a 'pattern': {r!r}")
        pattern = str(r["pattern"])
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid rule pattern {pattern!r}: {e}") from e
        unless = r.get("unless")
        rules.append(
            TextRule(
                code=str(r.get("code") or "CUSTOM_RULE"),
                pattern=pattern,
                message=str(r.get("message") or pattern),
                unless=None if unless is None else str(unless),
            )
        )
    return tuple(rules)


def _kind_rules(value: Any, default: Tuple[KindRule, ...]) -> Tuple[KindRule, ...]:
    if value is None:
        return default
    rules: List[KindRule] = []
    for r in value:
        if not isinstance(r, dict) or "kind" not in r:
            raise ValueError(f"Kind rule needs a 'kind': {r!r}")
        member = str(r.get("member") or "file")
        if member not in ("dir", "file"):
            raise ValueError(f"Kind rule member must be 'dir' or 'file': {member!r}")
        definition_file = str(r.get("definition_file") or "")
        if member == "dir" and not definition_file:
            raise ValueError(f"Kind rule '{r['kind']}' with member 'dir' needs a definition_file")
        rules.append(
            KindRule(
                kind=str(r["kind"]),
                member=member,
                required_fields=_strs(r.get("required_fields"), ()),
                definition_file=definition_file,
                suffix=str(r.get("suffix") or ".md"),
            )
        )
    return tuple(rules)


def from_json_dict(d: Dict[str, Any]) -> ValidationProfile:
    """
    Build a profile from a plain dict (JSON or YAML document).
    Keys that are absent keep the default profile's value.
    """
    if not isinstance(d, dict):
        raise ValueError("Profile document must be a mapping")

    base = default_profile()

    return ValidationProfile(
        name=str(d.get("name") or "Custom"),
        required_files=_strs(d.get("required_files"), base.required_files),
        recommended_files=_strs(d.get("recommended_files"), base.recommended_files),
        content_root=str(d.get("content_root") or base.content_root).strip("/\\"),
        content_kinds=_strs(d.get("content_kinds"), base.content_kinds),
        readme_file=str(d.get("readme_file") or base.readme_file),
        readme_sections=_strs(d.get("readme_sections"), base.readme_sections),
        install_file=str(d.get("install_file") or base.install_file),
        install_sections=_strs(d.get("install_sections"), base.install_sections),
        install_hints=_text_rules(d.get("install_hints"), base.install_hints),
        verify_file=str(d.get("verify_file") or base.verify_file),
        verify_tokens=_strs(d.get("verify_tokens"), base.verify_tokens),
        verify_fences=_strs(d.get("verify_fences"), base.verify_fences),
        kind_rules=_kind_rules(d.get("kind_rules"), base.kind_rules),
        compat_rules=_text_rules(d.get("compat_rules"), base.compat_rules),
        compatibility_gates_validity=_flag(
            d.get("compatibility_gates_validity"), base.compatibility_gates_validity
        ),
        scan_suffixes=tuple(
            s.lower() for s in _strs(d.get("scan_suffixes"), base.scan_suffixes)
        ),
        installer_script=str(d.get("installer_script", base.installer_script) or ""),
        installer_shebang=str(d.get("installer_shebang") or base.installer_shebang),
    )


def load_profile(path: Path) -> ValidationProfile:
    """
    Load a profile from a .json, .yaml or .yml file.
    """
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            d = yaml.safe_load(text) or {}
        else:
            d = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Cannot parse profile {path}: {e}") from e
    return from_json_dict(d)


def dump_profile_json(profile: ValidationProfile) -> str:
    return json.dumps(to_json_dict(profile), indent=2)
