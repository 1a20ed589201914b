"""Registry — the in-memory index of discovered clusters.

The registry provides:
- Records: one typed ``ClusterRecord`` per valid manifest
- Store: an immutable ``ClusterStore`` with pilot-cluster lookups
- Loader: directory scanning that builds a store and reports skipped manifests
"""
