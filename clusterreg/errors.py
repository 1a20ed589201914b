"""Errors and failure records for cluster registry loading.

Exceptions are raised only for conditions the caller must handle directly
(an unlistable directory, a lookup miss, an undecodable YAML stream).
Everything that can go wrong with a single file or document is reported as
a ``LoadFailure`` instead, so one bad manifest never hides the good ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FailureKind(Enum):
    MALFORMED_DOCUMENT = "malformed_document"  # YAML does not decode
    UNEXPECTED_KIND = "unexpected_kind"
    MISSING_IDENTITY = "missing_identity"  # metadata.name absent or empty
    MALFORMED_SPEC = "malformed_spec"  # serverEndpoints has the wrong shape
    MISSING_ANNOTATION = "missing_annotation"
    MALFORMED_ANNOTATION = "malformed_annotation"  # strict mode only
    DUPLICATE_PILOT = "duplicate_pilot"
    UNREADABLE_FILE = "unreadable_file"


@dataclass(frozen=True)
class LoadFailure:
    """A single manifest that was skipped, and why."""

    kind: FailureKind
    message: str
    source: str = ""  # File the document came from
    document_index: int | None = None  # Position within the file's YAML stream
    offset: int | None = None  # Character offset of a decode error
    name: str = ""  # Cluster name, when it could be read

    def __str__(self) -> str:
        where = self.source or "<buffer>"
        if self.document_index is not None:
            where = f"{where}[{self.document_index}]"
        return f"{where}: {self.kind.value}: {self.message}"


class ClusterRegistryError(Exception):
    """Base class for cluster registry errors."""


class DirectoryUnreadable(ClusterRegistryError):
    """The manifest directory is missing or cannot be listed."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Cannot read cluster directory: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedDocument(ClusterRegistryError):
    """A YAML document in a manifest buffer could not be decoded."""

    def __init__(self, message: str, document_index: int, offset: int | None = None):
        self.document_index = document_index
        self.offset = offset
        super().__init__(message)


class NotFound(ClusterRegistryError, LookupError):
    """No cluster with the requested name exists in the store."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cluster not found: {name}")
