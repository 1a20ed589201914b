"""Tests for Cluster document to record conversion."""

import pytest
import yaml

from clusterreg.errors import FailureKind
from clusterreg.manifest.conversion import (
    decode_annotations,
    document_to_record,
    parse_bool,
    parse_clusters,
)
from clusterreg.registry.models import ANNOTATION_PILOT_CFG_STORE, ANNOTATION_PLATFORM
from tests.manifests import CLUSTERS, assert_matches, render_cluster

BAD_KIND = """---

apiVersion: clusterregistry.k8s.io/v1alpha1
kind: BlusterZ
metadata:
  name: clusterFoo
  annotations:
    config.istio.io/pilotEndpoint: "1.1.1.1:9080"
    config.istio.io/platform: "k8s"
    config.istio.io/pilotCfgStore: true
    config.istio.io/accessConfigFile: Foo-config
spec:
  kubernetesApiEndpoints:
    serverEndpoints:
      - clientCidr: "0.0.0.0/0"
        serverAddress: "192.168.1.1"
"""

NO_NAME = """---

apiVersion: clusterregistry.k8s.io/v1alpha1
kind: Cluster
metadata:
  annotations:
    config.istio.io/pilotEndpoint: "1.1.1.1:9080"
    config.istio.io/platform: "k8s"
    config.istio.io/pilotCfgStore: true
    config.istio.io/accessConfigFile: c1-config
spec:
  kubernetesApiEndpoints:
    serverEndpoints:
      - clientCidr: "0.0.0.0/0"
        serverAddress: "192.168.1.1"
"""


def _doc(cluster: dict, **kwargs) -> dict:
    return yaml.safe_load(render_cluster(cluster, **kwargs))


def test_parse_bool_literals():
    for literal in ("1", "t", "T", "TRUE", "true", "True"):
        assert parse_bool(literal) is True
    for literal in ("0", "f", "F", "FALSE", "false", "False"):
        assert parse_bool(literal) is False
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_document_to_record():
    record, failures = document_to_record(_doc(CLUSTERS[0]))
    assert failures == []
    assert_matches(CLUSTERS[0], record)
    assert record.api_version == "clusterregistry.k8s.io/v1alpha1"
    assert record.kubeconfig == "A_kubeconfig"
    assert record.pilot_address() == ("2.2.2.2", "9080")


def test_absent_pilot_flag_is_false():
    record, _ = document_to_record(_doc(CLUSTERS[1]))
    assert record.is_pilot_config_store is False


def test_explicit_false_pilot_flag():
    record, _ = document_to_record(_doc(CLUSTERS[0], pilot_flag="false"))
    assert record.is_pilot_config_store is False


def test_quoted_pilot_flag():
    record, _ = document_to_record(_doc(CLUSTERS[1], pilot_flag='"True"'))
    assert record.is_pilot_config_store is True


def test_unparsable_pilot_flag_lenient():
    record, failures = document_to_record(_doc(CLUSTERS[0], pilot_flag='"maybe"'))
    assert failures == []
    assert record.is_pilot_config_store is False


def test_unparsable_pilot_flag_strict():
    record, failures = document_to_record(
        _doc(CLUSTERS[0], pilot_flag='"maybe"'), strict_annotations=True
    )
    assert record is None
    assert failures[0].kind == FailureKind.MALFORMED_ANNOTATION
    assert failures[0].name == "clusA"
    assert ANNOTATION_PILOT_CFG_STORE in failures[0].message


def test_valid_pilot_flag_strict():
    record, failures = document_to_record(_doc(CLUSTERS[0]), strict_annotations=True)
    assert failures == []
    assert record.is_pilot_config_store is True


def test_missing_required_annotation():
    doc = _doc(CLUSTERS[1])
    del doc["metadata"]["annotations"][ANNOTATION_PLATFORM]
    record, failures = document_to_record(doc)
    assert record is None
    assert failures[0].kind == FailureKind.MISSING_ANNOTATION
    assert ANNOTATION_PLATFORM in failures[0].message


def test_missing_annotations_block():
    doc = _doc(CLUSTERS[1])
    del doc["metadata"]["annotations"]
    record, failures = document_to_record(doc)
    assert record is None
    assert failures[0].kind == FailureKind.MISSING_ANNOTATION


def test_scalar_annotations_are_stringified():
    annotations = decode_annotations({ANNOTATION_PILOT_CFG_STORE: True, ANNOTATION_PLATFORM: 8})
    assert annotations.pilot_config_store is True
    assert annotations.pilot_config_store_raw == "true"
    assert annotations.platform == "8"


def test_parse_clusters_template():
    text = "".join(render_cluster(c) for c in CLUSTERS)
    records, failures = parse_clusters(text.encode())
    assert failures == []
    assert len(records) == len(CLUSTERS)
    for cluster, record in zip(CLUSTERS, records):
        assert_matches(cluster, record)


@pytest.mark.parametrize(
    "text, kind",
    [(BAD_KIND, FailureKind.UNEXPECTED_KIND), (NO_NAME, FailureKind.MISSING_IDENTITY)],
)
def test_parse_clusters_fail(text, kind):
    records, failures = parse_clusters(text, source="bad.yaml")
    assert records == []
    assert len(failures) == 1
    assert failures[0].kind == kind
    assert failures[0].source == "bad.yaml"
    assert failures[0].document_index == 0


def test_bad_document_does_not_hide_siblings():
    text = render_cluster(CLUSTERS[0]) + BAD_KIND + render_cluster(CLUSTERS[1])
    records, failures = parse_clusters(text)
    assert [r.name for r in records] == ["clusA", "clusB"]
    assert len(failures) == 1
    assert failures[0].document_index == 1


def test_malformed_yaml_drops_whole_buffer():
    text = render_cluster(CLUSTERS[0]) + "---\nkind: [unclosed\n"
    records, failures = parse_clusters(text, source="broken.yaml")
    assert records == []
    assert len(failures) == 1
    assert failures[0].kind == FailureKind.MALFORMED_DOCUMENT
    assert failures[0].document_index == 1
    assert "broken.yaml" in str(failures[0])


def test_numeric_name_parsed():
    records, failures = parse_clusters(render_cluster(dict(CLUSTERS[1], name="123")))
    assert failures == []
    assert [r.name for r in records] == ["123"]
