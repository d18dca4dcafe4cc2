"""Exceptions related to flux-loader."""

from collections.abc import Mapping
from typing import Any

__all__ = [
    "LoaderException",
    "InputException",
    "ScanException",
    "TraversalException",
    "ReadException",
    "DuplicateResourceError",
    "InvalidValuesException",
]


class LoaderException(Exception):
    """Generic base exception used for this library.

    When raised while loading, `resources` holds whatever was accumulated
    before the failure. It is diagnostic only and may be incomplete.
    """

    resources: Mapping[str, Any] | None = None


class InputException(LoaderException):
    """Raised when a document in an input file is not formatted as expected."""


class ScanException(LoaderException):
    """Raised when a multi-document stream could not be split into documents."""


class TraversalException(LoaderException):
    """Raised when walking a root path for manifests fails."""


class ReadException(LoaderException):
    """Raised when a selected manifest file could not be read."""


class DuplicateResourceError(LoaderException):
    """Raised when the same resource is defined more than once."""

    def __init__(self, identifier: str, first_source: str, second_source: str) -> None:
        super().__init__(
            f"resource '{identifier}' defined more than once "
            f"(in {first_source} and {second_source})"
        )
        self.identifier = identifier
        self.first_source = first_source
        self.second_source = second_source


class InvalidValuesException(LoaderException):
    """Raised for a chart value override that cannot be parsed."""
