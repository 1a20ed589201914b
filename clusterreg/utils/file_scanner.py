"""File scanner — list candidate manifest files in a directory."""

from __future__ import annotations

from pathlib import Path

from clusterreg.errors import DirectoryUnreadable


def list_manifest_files(directory: str | Path) -> list[Path]:
    """List the regular files directly under ``directory``.

    Subdirectories are not descended into. Results are sorted by name so
    repeated scans of an unchanged directory see the same order.

    Raises:
        DirectoryUnreadable: if the directory is missing or cannot be listed.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryUnreadable(str(root), "not a directory")

    try:
        entries = list(root.iterdir())
    except OSError as e:
        raise DirectoryUnreadable(str(root), str(e)) from e

    return sorted((p for p in entries if p.is_file()), key=lambda p: p.name)
