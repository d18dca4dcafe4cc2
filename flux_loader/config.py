"""Configuration objects for flux-loader."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .chart import looks_like_chart

YAML_EXTENSIONS = (".yaml", ".yml")


class DuplicatePolicy(str, Enum):
    """How to treat a resource defined twice in the same file."""

    OVERWRITE = "overwrite"
    """The later definition replaces the earlier one."""

    ERROR = "error"
    """Fail the same way as for definitions in two different files."""


@dataclass
class ParseOptions:
    """Configuration for parsing a multi-document file."""

    duplicates_in_file: DuplicatePolicy = DuplicatePolicy.OVERWRITE

    initial_buffer_size: int = 4096
    """Initial size of the buffer used to split documents."""

    max_token_size: int = 1024 * 1024
    """Largest single document that may be read."""


@dataclass
class LoadOptions:
    """Configuration for loading resources from a tree of files."""

    parse: ParseOptions = field(default_factory=ParseOptions)

    extensions: tuple[str, ...] = YAML_EXTENSIONS
    """File extensions that are read as manifests."""

    skip_dir: Callable[[Path], bool] = looks_like_chart
    """Predicate for directories whose whole subtree is not scanned."""
