"""Library for splitting a multi-document YAML byte stream into documents.

Documents are delimited by a line that starts with `---`. The boundary between
two documents can only be decided once the whole separator line has been seen,
so splitting works on a buffer that grows as more of the stream is read:

```python
with open("manifests.yaml", "rb") as stream:
    for chunk in DocumentScanner(stream):
        print(chunk)
```

A chunk is the raw bytes of a single document. It may be empty or contain only
comments, and it is up to the caller to decide what to do with those.
"""

from collections.abc import Iterator
import io
import logging
from typing import BinaryIO, NamedTuple

from .exceptions import ScanException

__all__ = [
    "YAML_SEPARATOR",
    "SplitResult",
    "NO_TOKEN",
    "split_yaml_document",
    "YamlDocumentSplitter",
    "DocumentScanner",
    "split_documents",
]

_LOGGER = logging.getLogger(__name__)

YAML_SEPARATOR = b"\n---"

# Matches the default of the kubernetes yaml decoder.
START_BUFFER_SIZE = 4096
MAX_TOKEN_SIZE = 1024 * 1024


class SplitResult(NamedTuple):
    """Outcome of a single split attempt."""

    advance: int
    """Number of bytes of the buffer consumed."""

    token: bytes | None
    """The document found, or None if more data is needed or the stream is done."""


NO_TOKEN = SplitResult(0, None)


class YamlDocumentSplitter:
    """Incremental splitter for a YAML stream held in a growing buffer.

    The buffer passed to `split` must keep its prefix between calls until a
    token is returned, only appending newly read bytes. The splitter remembers
    how far it got so a retry with a larger buffer does not search the same
    bytes again.
    """

    def __init__(self) -> None:
        """Initialize YamlDocumentSplitter."""
        self._offset = 0
        self._line_offset = 0

    def _token(self, advance: int, token: bytes | bytearray) -> SplitResult:
        self._offset = 0
        self._line_offset = 0
        return SplitResult(advance, bytes(token))

    def split(self, data: bytes | bytearray, at_eof: bool) -> SplitResult:
        """Find the next document in `data`.

        Returns a token and the number of bytes to consume when a document
        boundary is found. Returns `NO_TOKEN` when more data is needed, or when
        `data` is empty and `at_eof` is set.
        """
        if at_eof and not data:
            return NO_TOKEN
        sep = len(YAML_SEPARATOR)
        if (start := data.find(YAML_SEPARATOR, self._offset)) >= 0:
            i = start + sep
            if i == len(data):
                if at_eof:
                    return self._token(len(data), data[:start])
                # A later read may continue the separator line
                self._offset = start
                return NO_TOKEN
            if (j := data.find(b"\n", max(i, self._line_offset))) >= 0:
                return self._token(j + 1, data[:start])
            if at_eof:
                # Separator line without a trailing newline ends the stream
                return self._token(len(data), data[:start])
            self._offset = start
            self._line_offset = len(data)
            return NO_TOKEN
        if at_eof:
            return self._token(len(data), data)
        # A separator may straddle the end of the buffer
        self._offset = max(0, len(data) - sep + 1)
        return NO_TOKEN


def split_yaml_document(data: bytes | bytearray, at_eof: bool) -> SplitResult:
    """Split the first document from `data` without any retained state."""
    return YamlDocumentSplitter().split(data, at_eof)


class DocumentScanner:
    """Iterate over the documents of a binary stream.

    The working buffer starts at `initial_buffer_size` bytes and doubles when a
    single document does not fit, up to `max_token_size`.
    """

    def __init__(
        self,
        stream: BinaryIO,
        initial_buffer_size: int = START_BUFFER_SIZE,
        max_token_size: int = MAX_TOKEN_SIZE,
    ) -> None:
        """Initialize DocumentScanner."""
        if initial_buffer_size <= 0 or max_token_size <= 0:
            raise ValueError("Buffer sizes must be positive")
        self._stream = stream
        self._buffer = bytearray()
        self._capacity = min(initial_buffer_size, max_token_size)
        self._max_token_size = max_token_size
        self._splitter = YamlDocumentSplitter()
        self._eof = False

    def __iter__(self) -> Iterator[bytes]:
        """Yield each document chunk in the stream."""
        while True:
            advance, token = self._splitter.split(self._buffer, self._eof)
            if token is not None:
                del self._buffer[:advance]
                yield token
                continue
            if self._eof:
                return
            self._fill()

    def _fill(self) -> None:
        """Read more of the stream, growing the buffer when it is full."""
        if len(self._buffer) >= self._capacity:
            if self._capacity >= self._max_token_size:
                raise ScanException(
                    f"Document too long, exceeds {self._max_token_size} bytes"
                )
            self._capacity = min(self._capacity * 2, self._max_token_size)
            _LOGGER.debug("Growing scan buffer to %d bytes", self._capacity)
        data = self._stream.read(self._capacity - len(self._buffer))
        if not data:
            self._eof = True
            return
        self._buffer.extend(data)


def split_documents(
    content: bytes,
    initial_buffer_size: int = START_BUFFER_SIZE,
    max_token_size: int = MAX_TOKEN_SIZE,
) -> Iterator[bytes]:
    """Yield each document chunk of an in-memory multi-document buffer."""
    return iter(
        DocumentScanner(io.BytesIO(content), initial_buffer_size, max_token_size)
    )
