"""Package manifests."""

from .query import (
    INTEGRATIONS_MODULE,
    MANIFEST_FILE,
    QueryResult,
    SkippedPackage,
    check_integrations_root,
    flatten_keys,
    load_manifest,
    query_manifest,
)

__all__ = [
    "INTEGRATIONS_MODULE",
    "MANIFEST_FILE",
    "QueryResult",
    "SkippedPackage",
    "check_integrations_root",
    "flatten_keys",
    "load_manifest",
    "query_manifest",
]
