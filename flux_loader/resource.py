"""Representation of the resources defined in a set of manifests.

A `Resource` is a single decoded kubernetes object along with the file it was
read from. Resources are indexed by the string form of their `ResourceId` in a
`ResourceSet`, which refuses to hold two different definitions of the same
resource.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.codecs.yaml import yaml_encode
from mashumaro.config import BaseConfig
import yaml

from .exceptions import DuplicateResourceError, InputException

__all__ = [
    "ResourceId",
    "Resource",
    "ResourceSet",
    "decode_document",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True, order=True)
class ResourceId:
    """Identifier for a kubernetes resource."""

    api_version: str
    kind: str
    namespace: str
    name: str

    @property
    def namespaced_name(self) -> str:
        return f"{self.namespace}/{self.name}"

    def __str__(self) -> str:
        """Return the version, kind and namespaced name concatenated as an id."""
        return f"{self.api_version}/{self.kind}/{self.namespaced_name}"


@dataclass
class Resource(DataClassDictMixin):
    """A kubernetes object read from a manifest file."""

    kind: str
    """The kind of the object."""

    api_version: str
    """The apiVersion of the object."""

    name: str
    """The name of the object."""

    namespace: str
    """The namespace of the object."""

    source: str
    """The file the object was read from, relative to the base directory."""

    contents: dict[str, Any] | None = field(
        metadata={"serialize": "omit"}, default=None
    )
    """Contents of the raw document."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any], source: str) -> "Resource":
        """Parse a Resource from a raw kubernetes object."""
        if not (kind := doc.get("kind")):
            raise InputException(f"Invalid object missing kind: {doc}")
        if not (api_version := doc.get("apiVersion")):
            raise InputException(f"Invalid object missing apiVersion: {doc}")
        if not isinstance(metadata := doc.get("metadata"), dict):
            raise InputException(f"Invalid object missing metadata: {doc}")
        if not (name := metadata.get("name")):
            raise InputException(f"Invalid object missing metadata.name: {doc}")
        return cls(
            kind=str(kind),
            api_version=str(api_version),
            name=str(name),
            namespace=str(metadata.get("namespace") or DEFAULT_NAMESPACE),
            source=source,
            contents=doc,
        )

    @property
    def identifier(self) -> ResourceId:
        """Identifier of the resource, independent of the file it came from."""
        return ResourceId(
            api_version=self.api_version,
            kind=self.kind,
            namespace=self.namespace,
            name=self.name,
        )

    def yaml(self) -> str:
        """Return a YAML string representation of the resource."""
        return yaml_encode(self, self.__class__)  # type: ignore[return-value]

    class Config(BaseConfig):
        omit_none = True


def decode_document(source: str, chunk: bytes) -> Resource | None:
    """Decode a single YAML document into a Resource.

    Returns None when the document is empty or only holds comments.
    """
    try:
        doc = yaml.load(chunk, Loader=yaml.SafeLoader)
    except yaml.YAMLError as err:
        raise InputException(
            f"Unable to parse YAML doc from '{source}': {err}"
        ) from err
    if doc is None:
        return None
    if not isinstance(doc, dict):
        raise InputException(
            f"Expected YAML doc from '{source}' to be a mapping, "
            f"found {type(doc).__name__}"
        )
    try:
        return Resource.parse_doc(doc, source)
    except InputException as err:
        raise InputException(f"Invalid YAML doc from '{source}': {err}") from err


class ResourceSet(Mapping[str, Resource]):
    """A mapping of resource identifier to the one Resource that defines it."""

    def __init__(self) -> None:
        """Initialize ResourceSet."""
        self._resources: dict[str, Resource] = {}

    def add(self, resource: Resource) -> None:
        """Add a resource, failing if its identifier is already defined."""
        key = str(resource.identifier)
        if (existing := self._resources.get(key)) is not None:
            raise DuplicateResourceError(key, existing.source, resource.source)
        self._resources[key] = resource

    def update(self, resources: Mapping[str, Resource]) -> None:
        """Add every resource from `resources`."""
        for resource in resources.values():
            self.add(resource)

    def __getitem__(self, key: str) -> Resource:
        return self._resources[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __repr__(self) -> str:
        return f"ResourceSet({sorted(self._resources)})"
