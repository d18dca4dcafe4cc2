"""Tests for values library."""

from typing import Any

import pytest
import yaml

from flux_loader.exceptions import InvalidValuesException
from flux_loader.values import ChartParam, collect_values, render_values


def test_no_params() -> None:
    """Test no parameters produce empty values."""
    assert collect_values(None) == {}
    assert collect_values([]) == {}
    assert render_values([]) == "{}\n"


def test_nested_names() -> None:
    """Test dotted names produce nested values."""
    values = collect_values(
        [
            ChartParam("image.repository", "ghcr.io/stefanprodan/podinfo"),
            ChartParam("image.tag", "6.3.5"),
            ChartParam("replicaCount", "2"),
        ]
    )
    assert values == {
        "image": {
            "repository": "ghcr.io/stefanprodan/podinfo",
            "tag": "6.3.5",
        },
        "replicaCount": "2",
    }


def test_whitespace_is_stripped() -> None:
    """Test surrounding whitespace and newlines are removed."""
    values = collect_values([ChartParam("  service.type\n", "\n ClusterIP  \n")])
    assert values == {"service": {"type": "ClusterIP"}}


def test_empty_name_is_skipped() -> None:
    """Test a parameter without a name is ignored."""
    assert collect_values([ChartParam(" \n", "value")]) == {}


@pytest.mark.parametrize(
    ("params", "expected"),
    [
        (
            [ChartParam("a.b", "1"), ChartParam("a.b", "2")],
            {"a": {"b": "2"}},
        ),
        (
            [ChartParam("a.b", "1"), ChartParam("a", "flat")],
            {"a": "flat"},
        ),
        (
            [ChartParam("a", "flat"), ChartParam("a.b", "1")],
            {"a": {"b": "1"}},
        ),
        (
            [ChartParam("a.list", '["x", "y"]'), ChartParam("a.list", '["z"]')],
            {"a": {"list": ["z"]}},
        ),
    ],
    ids=["overwrite", "scalar-replaces-map", "map-replaces-scalar", "list-replaced"],
)
def test_merge_order(params: list[ChartParam], expected: dict[str, Any]) -> None:
    """Test later parameters take precedence."""
    assert collect_values(params) == expected


def test_list_value() -> None:
    """Test a bracketed value is read as a JSON list."""
    values = collect_values([ChartParam("args", '["--port", 9898, true]')])
    assert values == {"args": ["--port", 9898, True]}


def test_invalid_list_value() -> None:
    """Test a bracketed value that is not JSON is rejected."""
    with pytest.raises(InvalidValuesException, match="args"):
        collect_values([ChartParam("args", "[not json]")])


def test_render_values() -> None:
    """Test values are rendered as a YAML document."""
    content = render_values(
        [ChartParam("image.tag", "6.3.5"), ChartParam("ports", "[80, 443]")]
    )
    assert yaml.safe_load(content) == {"image": {"tag": "6.3.5"}, "ports": [80, 443]}


def test_chart_param_from_str() -> None:
    """Test parsing a name=value parameter."""
    assert ChartParam.from_str("a.b=c=d") == ChartParam(name="a.b", value="c=d")
    with pytest.raises(InvalidValuesException, match="name=value"):
        ChartParam.from_str("a.b")
