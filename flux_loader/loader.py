"""Library for loading resources from a tree of local manifest files.

Resources are keyed by the identity found in the file content, rather than by
the file name or directory structure, and every resource must be defined in
exactly one place.

Example usage:

```python
from pathlib import Path

from flux_loader import loader


resources = await loader.load(Path("."), Path("clusters/prod"))
for key, resource in resources.items():
    print(f"Found {key} in {resource.source}")
```

Directories that look like a helm chart are skipped entirely, since their
contents are templates rather than manifests.
"""

import logging
import os
from pathlib import Path

import aiofiles
from aiofiles.os import scandir, stat
from aiofiles.ospath import isdir

from .config import DuplicatePolicy, LoadOptions, ParseOptions
from .context import trace_context
from .exceptions import (
    DuplicateResourceError,
    LoaderException,
    ReadException,
    ScanException,
    TraversalException,
)
from .resource import Resource, ResourceSet, decode_document
from .splitter import split_documents

__all__ = [
    "load",
    "parse_multidoc",
]

_LOGGER = logging.getLogger(__name__)


def parse_multidoc(
    content: bytes, source: str, options: ParseOptions | None = None
) -> dict[str, Resource]:
    """Return the resources defined in a multi-document YAML file.

    Empty and comment only documents are skipped. Defining the same resource
    twice in the file is handled according to `options.duplicates_in_file`.
    """
    if options is None:
        options = ParseOptions()
    resources: dict[str, Resource] = {}
    chunks = split_documents(
        content,
        initial_buffer_size=options.initial_buffer_size,
        max_token_size=options.max_token_size,
    )
    try:
        for chunk in chunks:
            if (resource := decode_document(source, chunk)) is None:
                continue
            key = str(resource.identifier)
            if key in resources:
                if options.duplicates_in_file == DuplicatePolicy.ERROR:
                    raise DuplicateResourceError(key, source, source)
                _LOGGER.warning(
                    "Resource '%s' defined more than once in %s, using the last one",
                    key,
                    source,
                )
            resources[key] = resource
    except ScanException as err:
        scan_err = ScanException(f"Unable to scan multidoc from '{source}': {err}")
        scan_err.resources = resources
        raise scan_err from err
    _LOGGER.debug("Parsed %d resources from %s", len(resources), source)
    return resources


async def _load_file(
    base: Path, path: Path, resources: ResourceSet, options: LoadOptions
) -> None:
    """Parse a single manifest file and add its resources."""
    try:
        async with aiofiles.open(path, mode="rb") as manifest_file:
            content = await manifest_file.read()
    except OSError as err:
        raise ReadException(f"Unable to read file at '{path}': {err}") from err
    source = os.path.relpath(path, base)
    with trace_context(f"Parse '{source}'"):
        docs = parse_multidoc(content, source, options.parse)
    resources.update(docs)


async def _load_dir(
    base: Path, path: Path, resources: ResourceSet, options: LoadOptions
) -> None:
    """Walk a directory depth first, loading every manifest file found."""
    try:
        if options.skip_dir(path):
            _LOGGER.debug("Skipping chart directory %s", path)
            return
        with await scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as err:
        raise TraversalException(
            f"Unable to walk '{path}' for manifests: {err}"
        ) from err
    for entry in entries:
        child = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            await _load_dir(base, child, resources, options)
        elif child.suffix in options.extensions:
            await _load_file(base, child, resources, options)


async def _load_root(
    base: Path, root: Path, resources: ResourceSet, options: LoadOptions
) -> None:
    try:
        await stat(root)
    except OSError as err:
        raise TraversalException(
            f"Unable to walk '{root}' for manifests: {err}"
        ) from err
    if await isdir(root):
        await _load_dir(base, root, resources, options)
    elif root.suffix in options.extensions:
        await _load_file(base, root, resources, options)
    else:
        _LOGGER.debug("Ignoring non-manifest file %s", root)


async def load(
    base: Path | str,
    root: Path | str,
    *more: Path | str,
    options: LoadOptions | None = None,
) -> ResourceSet:
    """Load the resources from one or more directories or files.

    The `source` of each resource is its file path relative to `base`. Roots
    are loaded in the order given. On failure the raised `LoaderException`
    holds the resources loaded so far.
    """
    if options is None:
        options = LoadOptions()
    base_path = Path(base)
    resources = ResourceSet()
    for root_path in [Path(root), *(Path(path) for path in more)]:
        with trace_context(f"Load '{root_path}'"):
            try:
                await _load_root(base_path, root_path, resources, options)
            except LoaderException as err:
                err.resources = resources
                raise
    _LOGGER.debug("Loaded %d resources", len(resources))
    return resources
