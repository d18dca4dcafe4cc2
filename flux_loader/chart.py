"""Detection of helm chart directories.

A chart directory holds templates rather than plain manifests, so its contents
must not be read as resources.
"""

from pathlib import Path

__all__ = [
    "CHART_FILE",
    "VALUES_FILE",
    "looks_like_chart",
]

# The two mandatory parts of a chart, see
# https://helm.sh/docs/topics/charts/#the-chart-file-structure
CHART_FILE = "Chart.yaml"
VALUES_FILE = "values.yaml"


def looks_like_chart(path: Path) -> bool:
    """Return true if the directory `path` looks like it contains a helm chart."""
    return (path / CHART_FILE).exists() and (path / VALUES_FILE).exists()
