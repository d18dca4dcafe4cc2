"""Tests for the format library."""

from flux_loader.tool.format import (
    JsonFormatter,
    PrintFormatter,
    YamlFormatter,
    format_columns,
)


def test_format_columns_empty() -> None:
    """Tests with no rows."""
    assert list(format_columns([], [])) == []


def test_format_columns_empty_rows() -> None:
    """Tests with only headers."""
    assert list(format_columns(["a", "b", "c"], [])) == ["a    b    c"]


def test_format_columns_rows() -> None:
    """Tests format with normal rows"""
    assert list(
        format_columns(
            ["name", "namespace"], [["podinfo", "podinfo"], ["metallb", "network"]]
        )
    ) == [
        "name       namespace",
        "podinfo    podinfo",
        "metallb    network",
    ]


def test_print_formatter_empty() -> None:
    """Print formatting with empty data."""
    formatter = PrintFormatter(["name"])
    assert list(formatter.format([])) == []


def test_print_formatter_keys() -> None:
    """Print formatting with column names."""
    formatter = PrintFormatter(keys=["name", "kind"])
    assert list(
        formatter.format(
            [
                {"name": "podinfo", "kind": "Namespace", "source": "a.yaml"},
                {"name": "foo", "kind": "ConfigMap", "source": "b.yaml"},
            ],
        )
    ) == [
        "NAME       KIND",
        "podinfo    Namespace",
        "foo        ConfigMap",
    ]


def test_yaml_formatter() -> None:
    """Yaml formatting prints a document per object."""
    formatter = YamlFormatter()
    assert list(
        formatter.format(
            [
                {"name": "podinfo", "namespace": "podinfo"},
                {"name": "metallb", "namespace": "network"},
            ]
        )
    ) == [
        "---",
        "name: podinfo",
        "namespace: podinfo",
        "---",
        "name: metallb",
        "namespace: network",
    ]


def test_json_formatter() -> None:
    """Json formatting prints a list."""
    formatter = JsonFormatter()
    assert list(formatter.format([{"name": "podinfo"}])) == [
        "[",
        "    {",
        '        "name": "podinfo"',
        "    }",
        "]",
    ]
