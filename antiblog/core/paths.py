#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants and configuration defaults for the Antiblog engine.

Profiles live outside the project tree, one file per site:

    ~/.antiblog/
    ├── <profile>.json   # runtime configuration (JSON or YAML)
    └── logs/            # rotating operation and error logs

The directory can be relocated with the ANTIBLOG_HOME environment
variable; the default profile name is read from ANTIBLOG_PROFILE.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path

# ----- Profile directory -----
PROFILE_ENV = "ANTIBLOG_PROFILE"
HOME_ENV = "ANTIBLOG_HOME"

PROFILE_DIR: Path = Path(os.environ.get(HOME_ENV, "~/.antiblog")).expanduser()

# ---- Logs ----
LOG_DIR = PROFILE_DIR / "logs"


def profile_path(name: str, profile_dir: Path = PROFILE_DIR) -> Path:
    """
    Resolve the configuration file of a named profile.

    Args:
        name: Profile name (file stem)
        profile_dir: Directory holding profile files

    Returns:
        Path to ``<profile_dir>/<name>.json``
    """
    return Path(profile_dir).expanduser() / f"{name}.json"
