"""
Command-line entry point.

Usage:
  packcheck <pack-name>        # validate one pack under the packs dir
  packcheck --all              # validate every pack under the packs dir
  packcheck                    # show usage

Exit status is 0 when every validated pack is valid, 1 otherwise.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from packcheck.config import APP_NAME, APP_VERSION, DEFAULT_PACKS_DIR
from packcheck.core.aggregate import exit_code, validate_all, validate_one
from packcheck.core.manifest import build_summary_dict, dumps_summary
from packcheck.core.profiles import ValidationProfile, default_profile, dump_profile_json, load_profile
from packcheck.core.reporting import build_report_html, build_report_text
from packcheck.models import Summary

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Validate that packs meet the required layout and content format.",
    )
    parser.add_argument("pack", nargs="?", help="Name of a pack under the packs dir")
    parser.add_argument("--all", action="store_true", help="Validate every pack under the packs dir")
    parser.add_argument(
        "--packs-dir",
        type=Path,
        default=DEFAULT_PACKS_DIR,
        help=f"Directory holding the packs (default: {DEFAULT_PACKS_DIR})",
    )
    parser.add_argument("--profile", type=Path, help="Validation profile (.json, .yaml or .yml)")
    parser.add_argument(
        "--format",
        choices=("text", "json", "html"),
        default="text",
        help="Report format written to stdout (default: text)",
    )
    parser.add_argument(
        "--dump-profile",
        action="store_true",
        help="Print the active validation profile as JSON and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def render(fmt: str, summary: Summary, profile: ValidationProfile, packs_dir: Path) -> str:
    if fmt == "json":
        doc = build_summary_dict(APP_NAME, APP_VERSION, profile.name, str(packs_dir), summary)
        return dumps_summary(doc) + "\n"
    if fmt == "html":
        return build_report_html(APP_NAME, APP_VERSION, profile.name, str(packs_dir), summary)
    return build_report_text(APP_NAME, summary)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        profile = load_profile(args.profile) if args.profile else default_profile()
    except (OSError, ValueError) as e:
        logger.error("Cannot load profile: %s", e)
        return 2

    if args.dump_profile:
        sys.stdout.write(dump_profile_json(profile) + "\n")
        return 0

    if not args.all and not args.pack:
        parser.print_help()
        return 0

    try:
        if args.all:
            summary = validate_all(args.packs_dir, profile)
        else:
            summary = validate_one(args.packs_dir, args.pack, profile)
        sys.stdout.write(render(args.format, summary, profile, args.packs_dir))
    except Exception:
        logger.exception("Validation run failed")
        return 1

    return exit_code(summary)


if __name__ == "__main__":
    raise SystemExit(main())
