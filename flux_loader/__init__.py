"""
flux-loader reads a tree of kubernetes manifests into a set of resources.

Every YAML file under the given paths is split into its documents and each
document becomes a `resource.Resource` keyed by its identity. Helm chart
directories are skipped, and a resource defined in two places is an error.
"""

__all__ = [
    "loader",
    "splitter",
    "resource",
    "values",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
