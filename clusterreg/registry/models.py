"""Registry data models — cluster records, endpoints, and annotation metadata."""

from __future__ import annotations

from dataclasses import dataclass, field

# Annotation keys carried in metadata.annotations of a Cluster manifest
ANNOTATION_PILOT_ENDPOINT = "config.istio.io/pilotEndpoint"
ANNOTATION_PLATFORM = "config.istio.io/platform"
ANNOTATION_PILOT_CFG_STORE = "config.istio.io/pilotCfgStore"
ANNOTATION_ACCESS_CONFIG_FILE = "config.istio.io/accessConfigFile"

PLATFORM_KUBERNETES = "k8s"


@dataclass(frozen=True)
class ServerEndpoint:
    """An API server address and the client network allowed to reach it."""

    server_address: str
    client_cidr: str


@dataclass(frozen=True)
class ClusterAnnotations:
    """The annotation-encoded metadata of a cluster, decoded once.

    ``pilot_config_store_raw`` keeps the original string so callers can tell
    an explicit ``false`` from an absent or unparsable flag.
    """

    pilot_endpoint: str = ""
    platform: str = ""
    access_config_file: str = ""
    pilot_config_store: bool = False
    pilot_config_store_raw: str = ""

    @property
    def missing_required(self) -> list[str]:
        required = {
            ANNOTATION_PILOT_ENDPOINT: self.pilot_endpoint,
            ANNOTATION_PLATFORM: self.platform,
            ANNOTATION_ACCESS_CONFIG_FILE: self.access_config_file,
        }
        return [key for key, value in required.items() if not value]


@dataclass(frozen=True)
class ClusterRecord:
    """A single discovered cluster."""

    # Identity
    name: str

    # Annotation metadata
    platform: str
    pilot_endpoint: str  # host:port of the control plane for this cluster
    access_config_file: str  # kubeconfig used to reach the cluster's API
    is_pilot_config_store: bool = False

    # Spec
    server_endpoints: tuple[ServerEndpoint, ...] = field(default_factory=tuple)

    api_version: str = ""

    @property
    def kubeconfig(self) -> str:
        return self.access_config_file

    def pilot_address(self) -> tuple[str, str]:
        """Split ``pilot_endpoint`` into (host, port); port is "" if absent."""
        host, sep, port = self.pilot_endpoint.rpartition(":")
        if not sep:
            return self.pilot_endpoint, ""
        return host, port
