"""Cluster store — an immutable, queryable index of cluster records."""

from __future__ import annotations

from typing import Iterable, Iterator

from clusterreg.errors import NotFound
from clusterreg.registry.models import ClusterRecord


class ClusterStore:
    """All valid clusters from one load, in decode order.

    The pilot cluster is found once at construction: the first record with
    ``is_pilot_config_store`` set. The store does not check that only one
    record carries the flag; the loader rejects extra pilots before they
    get here.
    """

    def __init__(self, records: Iterable[ClusterRecord] = ()):
        self._records: tuple[ClusterRecord, ...] = tuple(records)
        self._pilot_index: int | None = None
        for i, record in enumerate(self._records):
            if record.is_pilot_config_store:
                self._pilot_index = i
                break

    def all_records(self) -> tuple[ClusterRecord, ...]:
        """List all clusters in the store."""
        return self._records

    def pilot_record(self) -> ClusterRecord | None:
        """Get the cluster backing the control plane's config store, if any."""
        if self._pilot_index is None:
            return None
        return self._records[self._pilot_index]

    def pilot_kubeconfig(self) -> str:
        """Get the pilot cluster's kubeconfig path, or "" without a pilot."""
        pilot = self.pilot_record()
        return pilot.access_config_file if pilot else ""

    def pilot_clusters(self) -> list[ClusterRecord]:
        pilot = self.pilot_record()
        return [pilot] if pilot else []

    def get(self, name: str) -> ClusterRecord:
        """Get a cluster by name.

        Raises:
            NotFound: if no cluster has that name.
        """
        record = self.find(name)
        if record is None:
            raise NotFound(name)
        return record

    def find(self, name: str) -> ClusterRecord | None:
        for record in self._records:
            if record.name == name:
                return record
        return None

    def names(self) -> list[str]:
        return [r.name for r in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ClusterRecord]:
        return iter(self._records)

    def __contains__(self, name: object) -> bool:
        return any(r.name == name for r in self._records)

    def __repr__(self) -> str:
        pilot = self.pilot_record()
        return f"ClusterStore(clusters={self.names()!r}, pilot={pilot.name if pilot else None!r})"
