from __future__ import annotations

from pathlib import Path

APP_NAME = "packcheck"
APP_VERSION = "0.3.0"

# Packs are looked up as <packs dir>/<pack name>
DEFAULT_PACKS_DIR = Path("Packs")
