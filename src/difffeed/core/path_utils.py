"""
Path utilities for DiffFeed.

Provides scan-root validation shared by the snapshot differ and the CLI,
and the relative path normalization used to keep snapshots comparable
across runs and platforms.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class PathValidationResult:
    """Result of path validation.

    Attributes:
        valid: True if the path can be scanned.
        error_message: Human-readable error message if validation failed.
    """
    valid: bool
    error_message: Optional[str] = None


def validate_scan_root(path: str | Path) -> PathValidationResult:
    """
    Validate that a path is suitable as a scan root.

    Performs the following checks:
    1. Path exists
    2. Path is a directory

    Args:
        path: Path to validate (string or Path object).

    Returns:
        PathValidationResult with valid=True if all checks pass,
        or valid=False with an appropriate error message.
    """
    try:
        p = Path(path) if isinstance(path, str) else path

        if not p.exists():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' does not exist"
            )

        if not p.is_dir():
            return PathValidationResult(
                valid=False,
                error_message=f"Path '{path}' is not a directory"
            )

        return PathValidationResult(valid=True)

    except (OSError, ValueError) as e:
        return PathValidationResult(
            valid=False,
            error_message=f"Invalid path '{path}': {e}"
        )


def to_relative_posix(path: str, root: str) -> str:
    """
    Express ``path`` relative to ``root`` with forward slashes.

    Snapshots are stored and compared in this form so the same tree yields
    the same strings on every platform.
    """
    relative = os.path.relpath(path, root)
    if os.sep != "/":
        relative = relative.replace(os.sep, "/")
    return relative
