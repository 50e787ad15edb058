from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Finding:
    level: str  # INFO | WARNING | ERROR
    code: str   # stable short identifier (e.g. REQ_FILE_MISSING)
    message: str
    relpath: Optional[str] = None  # relative to pack root when applicable


def _messages(findings: Tuple[Finding, ...], level: str) -> Tuple[str, ...]:
    return tuple(f.message for f in findings if f.level.upper() == level)


@dataclass(frozen=True)
class CheckOutcome:
    name: str
    passed: bool
    findings: Tuple[Finding, ...] = ()
    required: bool = True  # optional checks never gate pack validity

    def __post_init__(self) -> None:
        if self.passed and self.errors:
            raise ValueError(f"Check '{self.name}' cannot pass while carrying errors")

    @property
    def errors(self) -> Tuple[str, ...]:
        return _messages(self.findings, "ERROR")

    @property
    def warnings(self) -> Tuple[str, ...]:
        return _messages(self.findings, "WARNING")


@dataclass(frozen=True)
class Pack:
    name: str
    root: Path

    @property
    def exists(self) -> bool:
        return self.root.is_dir()


@dataclass(frozen=True)
class ValidationResult:
    pack_name: str
    valid: bool
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    checks: Tuple[CheckOutcome, ...] = ()

    @property
    def findings(self) -> List[Finding]:
        return [f for c in self.checks for f in c.findings]


@dataclass(frozen=True)
class Summary:
    overall_valid: bool
    total_errors: int
    total_warnings: int
    per_pack: Tuple[ValidationResult, ...] = ()
    errors: Tuple[str, ...] = ()  # run-level, e.g. packs dir missing
