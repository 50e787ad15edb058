from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def exists(path: Path) -> bool:
    return path.exists()


def is_dir(path: Path) -> bool:
    return path.is_dir()


def is_file(path: Path) -> bool:
    return path.is_file()


def read_text(path: Path) -> Optional[str]:
    """
    Read a UTF-8 text file.
    Missing, unreadable and binary files all come back as None.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s: %s", path, e)
        return None


def list_dir(path: Path) -> List[Path]:
    # sorted so repeated runs see entries in the same order
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.debug("Cannot list %s: %s", path, e)
        return []
