"""Registry loader — build a ClusterStore from a directory of manifests.

Every regular file directly under the directory is read as a stream of
YAML documents. Documents that fail to decode or validate are skipped and
reported; only a directory that cannot be listed stops the load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from clusterreg.config import Settings
from clusterreg.errors import FailureKind, LoadFailure
from clusterreg.manifest.conversion import parse_clusters
from clusterreg.registry.models import ClusterRecord
from clusterreg.registry.store import ClusterStore
from clusterreg.utils.file_scanner import list_manifest_files

logger = logging.getLogger(__name__)


class RegistryLoader:
    """Loads cluster manifests from a directory into a ClusterStore."""

    def __init__(self, strict_annotations: bool | None = None):
        if strict_annotations is None:
            strict_annotations = Settings.from_env().strict_annotations
        self.strict_annotations = strict_annotations

    def load(self, directory: str | Path) -> tuple[ClusterStore, list[LoadFailure]]:
        """Load every cluster manifest in ``directory``.

        Returns:
            The store built from every valid manifest, and the failures for
            everything that was skipped.

        Raises:
            DirectoryUnreadable: if the directory is missing or unlistable.
        """
        files = list_manifest_files(directory)
        accepted: dict[str, tuple[ClusterRecord, str]] = {}
        failures: list[LoadFailure] = []

        for path in files:
            try:
                data = path.read_bytes()
            except OSError as e:
                failure = LoadFailure(
                    kind=FailureKind.UNREADABLE_FILE,
                    message=f"Cannot read file: {e}",
                    source=str(path),
                )
                logger.warning("Skipping %s", failure)
                failures.append(failure)
                continue

            records, file_failures = parse_clusters(
                data, source=str(path), strict_annotations=self.strict_annotations
            )
            failures.extend(file_failures)
            for record in records:
                if record.name in accepted:
                    logger.warning(
                        "Cluster '%s' redefined in %s, replacing earlier definition", record.name, path
                    )
                accepted[record.name] = (record, str(path))

        kept, pilot_failures = _single_pilot(accepted.values())
        for failure in pilot_failures:
            logger.warning("Skipping %s", failure)
        failures.extend(pilot_failures)

        store = ClusterStore(kept)
        pilot = store.pilot_record()
        logger.info(
            "Loaded %d cluster(s) from %s (pilot: %s, skipped: %d)",
            len(store),
            directory,
            pilot.name if pilot else "none",
            len(failures),
        )
        return store, failures


def _single_pilot(
    entries: Iterable[tuple[ClusterRecord, str]]
) -> tuple[list[ClusterRecord], list[LoadFailure]]:
    """Keep the first pilot-flagged record and reject any later one.

    Runs on the final records, after repeated names have been replaced,
    so a pilot that was redefined as a regular cluster no longer counts.
    """
    kept: list[ClusterRecord] = []
    failures: list[LoadFailure] = []
    pilot: ClusterRecord | None = None
    for record, source in entries:
        if record.is_pilot_config_store:
            if pilot is not None:
                failures.append(
                    LoadFailure(
                        kind=FailureKind.DUPLICATE_PILOT,
                        message=(
                            f"Cluster '{record.name}' is marked as the pilot config store "
                            f"but '{pilot.name}' already is"
                        ),
                        source=source,
                        name=record.name,
                    )
                )
                continue
            pilot = record
        kept.append(record)
    return kept, failures


def read_clusters(directory: str | Path | None = None) -> ClusterStore:
    """Load a ClusterStore, logging every skipped manifest.

    ``directory`` defaults to ``CLUSTERREG_DIR``.

    Raises:
        DirectoryUnreadable: if the directory is missing or unlistable.
    """
    settings = Settings.from_env()
    if directory is None:
        directory = settings.cluster_dir
    if not directory:
        raise ValueError("No cluster directory given and CLUSTERREG_DIR is not set")
    store, _ = RegistryLoader(strict_annotations=settings.strict_annotations).load(directory)
    return store
