"""clusterreg — discover remote cluster manifests and build a cluster registry.

Reads cluster-registry ``Cluster`` manifests from a directory, validates them,
and exposes the result as an immutable ``ClusterStore`` that knows which
cluster backs the control plane's configuration store.
"""

__version__ = "0.1.0"
