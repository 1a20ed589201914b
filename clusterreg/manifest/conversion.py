"""Conversion — build ClusterRecords from decoded Cluster documents."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from clusterreg.errors import FailureKind, LoadFailure, MalformedDocument
from clusterreg.manifest.decoder import decode_all
from clusterreg.manifest.validator import (
    cluster_name,
    scalar_string,
    server_endpoints,
    validate_cluster,
)
from clusterreg.registry.models import (
    ANNOTATION_ACCESS_CONFIG_FILE,
    ANNOTATION_PILOT_CFG_STORE,
    ANNOTATION_PILOT_ENDPOINT,
    ANNOTATION_PLATFORM,
    ClusterAnnotations,
    ClusterRecord,
)

logger = logging.getLogger(__name__)

# Boolean literals accepted for the pilot config store flag
TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: str) -> bool:
    """Parse a boolean literal.

    Raises:
        ValueError: if ``value`` is not one of the accepted literals.
    """
    if value in TRUE_LITERALS:
        return True
    if value in FALSE_LITERALS:
        return False
    raise ValueError(f"invalid boolean literal '{value}'")


def annotation_value(value: Any) -> str:
    """Coerce a YAML scalar into the string stored in an annotation."""
    text = scalar_string(value)
    return str(value) if text is None else text


def decode_annotations(annotations: Any, strict: bool = False) -> ClusterAnnotations:
    """Read the known annotation keys out of ``metadata.annotations``.

    An absent pilot-config-store flag is ``False``. An unparsable one is
    ``False`` as well unless ``strict`` is set, in which case it raises.

    Raises:
        ValueError: in strict mode, for an unparsable pilot-config-store flag.
    """
    if not isinstance(annotations, dict):
        annotations = {}

    raw_flag = annotation_value(annotations.get(ANNOTATION_PILOT_CFG_STORE))
    flag = False
    if raw_flag:
        try:
            flag = parse_bool(raw_flag)
        except ValueError as e:
            if strict:
                raise ValueError(f"{ANNOTATION_PILOT_CFG_STORE}: {e}") from e
            logger.warning(
                "Ignoring unparsable %s value %r, treating as false",
                ANNOTATION_PILOT_CFG_STORE,
                raw_flag,
            )

    return ClusterAnnotations(
        pilot_endpoint=annotation_value(annotations.get(ANNOTATION_PILOT_ENDPOINT)),
        platform=annotation_value(annotations.get(ANNOTATION_PLATFORM)),
        access_config_file=annotation_value(annotations.get(ANNOTATION_ACCESS_CONFIG_FILE)),
        pilot_config_store=flag,
        pilot_config_store_raw=raw_flag,
    )


def document_to_record(
    doc: Any, strict_annotations: bool = False
) -> tuple[ClusterRecord | None, list[LoadFailure]]:
    """Validate one document and convert it into a ClusterRecord.

    Returns:
        ``(record, [])`` on success, ``(None, failures)`` if the document
        was rejected.
    """
    failures = validate_cluster(doc)
    if failures:
        return None, failures

    name = cluster_name(doc)
    metadata = doc["metadata"]
    try:
        annotations = decode_annotations(metadata.get("annotations"), strict=strict_annotations)
    except ValueError as e:
        return None, [LoadFailure(kind=FailureKind.MALFORMED_ANNOTATION, message=str(e), name=name)]

    missing = annotations.missing_required
    if missing:
        return None, [
            LoadFailure(
                kind=FailureKind.MISSING_ANNOTATION,
                message=f"Cluster '{name}' is missing annotation(s): {', '.join(missing)}",
                name=name,
            )
        ]

    api_version = doc.get("apiVersion")
    record = ClusterRecord(
        name=name,
        platform=annotations.platform,
        pilot_endpoint=annotations.pilot_endpoint,
        access_config_file=annotations.access_config_file,
        is_pilot_config_store=annotations.pilot_config_store,
        server_endpoints=server_endpoints(doc),
        api_version=api_version if isinstance(api_version, str) else "",
    )
    return record, []


def parse_clusters(
    data: bytes | str, source: str = "", strict_annotations: bool = False
) -> tuple[list[ClusterRecord], list[LoadFailure]]:
    """Decode a buffer of Cluster manifests into records.

    Rejected documents are reported and skipped. If the buffer is not valid
    YAML, no records are returned for it.
    """
    try:
        docs = decode_all(data)
    except MalformedDocument as e:
        failure = LoadFailure(
            kind=FailureKind.MALFORMED_DOCUMENT,
            message=str(e),
            source=source,
            document_index=e.document_index,
            offset=e.offset,
        )
        logger.warning("Skipping %s", failure)
        return [], [failure]

    records: list[ClusterRecord] = []
    failures: list[LoadFailure] = []
    for index, doc in enumerate(docs):
        record, doc_failures = document_to_record(doc, strict_annotations=strict_annotations)
        if record is None:
            for failure in doc_failures:
                failure = replace(failure, source=source, document_index=index)
                logger.warning("Skipping %s", failure)
                failures.append(failure)
            continue
        logger.debug("Decoded cluster '%s' from %s", record.name, source or "<buffer>")
        records.append(record)

    return records, failures
