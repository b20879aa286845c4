from __future__ import annotations

"""Centralized path utilities for the project.

These provide absolute `Path` objects to key directories and files so the
UI, the CLI and the tests resolve the same locations.
"""

from pathlib import Path


# The `src` directory is one level below the project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Canonical locations used throughout the project
LOGS_DIR = PROJECT_ROOT / "logs"
SETTINGS_FILE = PROJECT_ROOT / "visitor_entry.yaml"
UI_APP_PATH = PROJECT_ROOT / "ui" / "app.py"
