"""Tests for the manifest file scanner."""

import tempfile
from pathlib import Path

import pytest

from clusterreg.errors import DirectoryUnreadable
from clusterreg.utils.file_scanner import list_manifest_files


def test_lists_regular_files_sorted():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "b.yaml").write_text("kind: Cluster")
        (root / "a.yaml").write_text("kind: Cluster")
        (root / "notes.txt").write_text("anything")

        files = list_manifest_files(root)
        assert [f.name for f in files] == ["a.yaml", "b.yaml", "notes.txt"]


def test_skips_subdirectories():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "sub").mkdir()
        (root / "sub" / "c.yaml").write_text("kind: Cluster")
        (root / "top.yaml").write_text("kind: Cluster")

        files = list_manifest_files(tmpdir)
        assert [f.name for f in files] == ["top.yaml"]


def test_missing_directory():
    with pytest.raises(DirectoryUnreadable):
        list_manifest_files("/nonexistent/path")


def test_file_is_not_a_directory():
    with tempfile.NamedTemporaryFile() as f:
        with pytest.raises(DirectoryUnreadable) as exc_info:
            list_manifest_files(f.name)
        assert "not a directory" in str(exc_info.value)
