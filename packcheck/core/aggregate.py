from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from packcheck.core import probe
from packcheck.core.profiles import ValidationProfile
from packcheck.core.validator import validate_pack
from packcheck.models import Pack, Summary, ValidationResult

logger = logging.getLogger(__name__)


def resolve_pack(packs_dir: Path, name: str) -> Pack:
    return Pack(name=name, root=packs_dir / name)


def discover_packs(packs_dir: Path) -> List[Pack]:
    """
    Every non-hidden immediate sub-directory of packs_dir, in listing order.
    """
    return [
        Pack(name=p.name, root=p)
        for p in probe.list_dir(packs_dir)
        if probe.is_dir(p) and not p.name.startswith(".")
    ]


def summarize(results: Sequence[ValidationResult], run_errors: Sequence[str] = ()) -> Summary:
    return Summary(
        overall_valid=not run_errors and all(r.valid for r in results),
        total_errors=len(run_errors) + sum(len(r.errors) for r in results),
        total_warnings=sum(len(r.warnings) for r in results),
        per_pack=tuple(results),
        errors=tuple(run_errors),
    )


def validate_one(packs_dir: Path, name: str, profile: ValidationProfile) -> Summary:
    return summarize([validate_pack(resolve_pack(packs_dir, name), profile)])


def validate_all(packs_dir: Path, profile: ValidationProfile) -> Summary:
    if not probe.is_dir(packs_dir):
        logger.error("Packs directory not found: %s", packs_dir)
        return summarize([], [f"Packs directory not found: {packs_dir}"])

    packs = discover_packs(packs_dir)
    logger.info("Found %d pack(s) to validate in %s", len(packs), packs_dir)
    return summarize([validate_pack(p, profile) for p in packs])


def exit_code(summary: Summary) -> int:
    return 0 if summary.overall_valid else 1
