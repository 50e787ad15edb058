from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from packcheck.core import probe
from packcheck.core.profiles import KindRule
from packcheck.models import Finding

logger = logging.getLogger(__name__)

# (file content or None, required fields, relpath) -> ERROR findings
ItemChecker = Callable[[Optional[str], Sequence[str], str], List[Finding]]


@dataclass(frozen=True)
class ScanFile:
    path: Path
    relpath: str        # relative to the walk's base, forward slashes
    name: str
    ext: str            # normalized (lower, with dot) or ""


def _relpath(path: Path, base: Path) -> str:
    return str(path.relative_to(base)).replace("\\", "/")


# -------------------------
# Strategy 1: shallow per-kind dispatch
# -------------------------
def _kind_targets(kind_dir: Path, rule: KindRule) -> Iterator[Path]:
    for entry in probe.list_dir(kind_dir):
        if rule.member == "dir":
            if probe.is_dir(entry):
                yield entry / rule.definition_file
        elif probe.is_file(entry) and entry.name.lower().endswith(rule.suffix.lower()):
            yield entry


def dispatch_content(
    content_root: Path,
    dispatch: Dict[str, KindRule],
    checker: ItemChecker,
    base: Optional[Path] = None,
) -> List[Finding]:
    """
    Apply each recognized kind's checker to the immediate members of
    <content_root>/<kind>/. Kinds that are absent, unknown sub-directories
    and members of the wrong type are skipped without comment.
    """
    base = base or content_root
    findings: List[Finding] = []

    for kind_dir in probe.list_dir(content_root):
        rule = dispatch.get(kind_dir.name)
        if rule is None or not probe.is_dir(kind_dir):
            continue

        for target in _kind_targets(kind_dir, rule):
            rel = _relpath(target, base)
            if not probe.is_file(target):
                findings.append(
                    Finding("ERROR", "DEFINITION_MISSING", f"{rel} not found", rel)
                )
                continue

            item_findings = checker(probe.read_text(target), rule.required_fields, rel)
            logger.debug("%s: %d problem(s)", rel, len(item_findings))
            findings.extend(item_findings)

    return findings


# -------------------------
# Strategy 2: full-subtree scan
# -------------------------
def scan_tree(
    root: Path,
    base: Optional[Path] = None,
    suffixes: Sequence[str] = (),
    ignore_hidden: bool = False,
) -> List[ScanFile]:
    """
    Recursively list every file under root, ignoring content-kind boundaries.
    An empty suffix list keeps every file.
    """
    base = base or root
    if not probe.is_dir(root):
        return []

    wanted = {s.lower() for s in suffixes}
    files: List[ScanFile] = []

    for dirpath, dirnames, filenames in os.walk(root):
        # Filter dirnames in-place so os.walk doesn't descend
        dirnames[:] = sorted(d for d in dirnames if not (ignore_hidden and d.startswith(".")))

        for fn in sorted(filenames):
            if ignore_hidden and fn.startswith("."):
                continue
            full = Path(dirpath) / fn
            ext = full.suffix.lower()
            if wanted and ext not in wanted:
                continue
            files.append(ScanFile(path=full, relpath=_relpath(full, base), name=fn, ext=ext))

    logger.debug("Scanned %s: %d file(s)", root, len(files))
    return files
