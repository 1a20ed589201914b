"""Manifest handling — decode YAML streams and turn Cluster documents into records.

Three steps, each usable on its own:
1. Decoder — split a byte buffer into generic YAML documents
2. Validator — check kind, identity and endpoint shape of one document
3. Conversion — read the annotations and build a ``ClusterRecord``
"""

CLUSTER_KIND = "Cluster"
