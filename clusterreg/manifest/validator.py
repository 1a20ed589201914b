"""Validator — structural checks for a single Cluster document.

Checks run in order and stop at the first failure:
- the document declares ``kind: Cluster``
- ``metadata.name`` is a non-empty string
- ``spec.kubernetesApiEndpoints.serverEndpoints`` is a list of
  ``{serverAddress, clientCIDR}`` mappings (possibly empty)

Annotation contents are not checked here; see ``conversion``.
"""

from __future__ import annotations

from typing import Any

from clusterreg.errors import FailureKind, LoadFailure
from clusterreg.manifest import CLUSTER_KIND
from clusterreg.registry.models import ServerEndpoint

ENDPOINT_FIELDS = ("serverAddress", "clientCIDR")


def validate_cluster(doc: Any) -> list[LoadFailure]:
    """Validate one decoded YAML document as a Cluster manifest.

    Returns:
        List of failures. Empty list means valid.
    """
    if not isinstance(doc, dict) or doc.get("kind") != CLUSTER_KIND:
        kind = doc.get("kind") if isinstance(doc, dict) else type(doc).__name__
        return [
            LoadFailure(
                kind=FailureKind.UNEXPECTED_KIND,
                message=f"Expected kind '{CLUSTER_KIND}', got '{kind}'",
                name=cluster_name(doc),
            )
        ]

    name = cluster_name(doc)
    if not name:
        return [
            LoadFailure(
                kind=FailureKind.MISSING_IDENTITY,
                message="Cluster is missing 'metadata.name'",
            )
        ]

    try:
        server_endpoints(doc)
    except ValueError as e:
        return [LoadFailure(kind=FailureKind.MALFORMED_SPEC, message=str(e), name=name)]

    return []


def scalar_string(value: Any) -> str | None:
    """Coerce a YAML scalar to the string a string-typed field holds.

    ``123`` becomes "123" and ``true`` becomes "true"; null becomes "".
    Mappings and lists are not scalars and give None.
    """
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def cluster_name(doc: Any) -> str:
    """Return ``metadata.name`` as a string, or "" if absent or not a scalar."""
    if not isinstance(doc, dict):
        return ""
    metadata = doc.get("metadata")
    if not isinstance(metadata, dict):
        return ""
    return scalar_string(metadata.get("name")) or ""


def server_endpoints(doc: dict) -> tuple[ServerEndpoint, ...]:
    """Decode ``spec.kubernetesApiEndpoints.serverEndpoints``.

    Field names inside an endpoint are matched case-insensitively, so
    ``clientCidr`` is read as ``clientCIDR``.

    Raises:
        ValueError: if the substructure is missing or has the wrong shape.
    """
    spec = doc.get("spec")
    if not isinstance(spec, dict):
        raise ValueError("Cluster is missing 'spec'")
    api_endpoints = spec.get("kubernetesApiEndpoints")
    if not isinstance(api_endpoints, dict):
        raise ValueError("spec is missing 'kubernetesApiEndpoints'")
    if "serverEndpoints" not in api_endpoints:
        raise ValueError("spec.kubernetesApiEndpoints is missing 'serverEndpoints'")

    items = api_endpoints["serverEndpoints"]
    if items is None:
        return ()
    if not isinstance(items, list):
        raise ValueError(
            f"spec.kubernetesApiEndpoints.serverEndpoints: expected a list, "
            f"got {type(items).__name__}"
        )

    endpoints = []
    for i, item in enumerate(items):
        path = f"spec.kubernetesApiEndpoints.serverEndpoints[{i}]"
        if not isinstance(item, dict):
            raise ValueError(f"{path}: expected a mapping, got {type(item).__name__}")
        folded = {str(k).lower(): v for k, v in item.items()}
        values = {}
        for field_name in ENDPOINT_FIELDS:
            value = folded.get(field_name.lower())
            text = scalar_string(value)
            if text is None:
                raise ValueError(f"{path}.{field_name}: expected a string, got {type(value).__name__}")
            values[field_name] = text
        endpoints.append(
            ServerEndpoint(server_address=values["serverAddress"], client_cidr=values["clientCIDR"])
        )
    return tuple(endpoints)
