"""
Sequential byte sources consumed by the hash engines. A byte source is a cursor over a sequence of
bytes that can report whether more data is available, produce the next byte, report its total
length, and rewind to the start. The engines never open or close anything; the lifetime of a file
is owned by whoever creates the `FileSource`.
"""
from __future__ import annotations

import abc
import io
import os

from typing import TYPE_CHECKING, BinaryIO

from gash.lib.environment import logger

if TYPE_CHECKING:
    from gash.lib.types import buf

__all__ = [
    'ByteSource',
    'FileSource',
    'MemorySource',
    'StreamSource',
]

_log = logger(__name__)


class ByteSource(abc.ABC):
    """
    Abstract sequential cursor over bytes.
    """

    @property
    def good(self) -> bool:
        """
        False if the source is unavailable or in a failed state.
        """
        return True

    @abc.abstractmethod
    def has_more(self) -> bool:
        ...

    @abc.abstractmethod
    def next_byte(self) -> int:
        ...

    @abc.abstractmethod
    def total_length(self) -> int:
        """
        The total number of bytes in the source, independent of the cursor position.
        """

    @abc.abstractmethod
    def reset_to_start(self) -> None:
        """
        Move the cursor back to the first byte and clear any end-of-data or error state.
        """

    def read(self, size: int) -> bytes:
        """
        Read up to `size` bytes. Fewer bytes are returned only at the end of the data.
        """
        chunk = bytearray()
        while len(chunk) < size and self.has_more():
            chunk.append(self.next_byte())
        return bytes(chunk)


class MemorySource(ByteSource):
    """
    A byte source over a fixed in-memory buffer.
    """

    def __init__(self, data: buf):
        self._data = memoryview(data).cast('B')
        self._cursor = 0

    def has_more(self) -> bool:
        return self._cursor < len(self._data)

    def next_byte(self) -> int:
        try:
            value = self._data[self._cursor]
        except IndexError:
            raise EOFError('read beyond the end of the buffer') from None
        self._cursor += 1
        return value

    def read(self, size: int) -> bytes:
        start = self._cursor
        end = self._cursor = min(start + size, len(self._data))
        return bytes(self._data[start:end])

    def total_length(self) -> int:
        return len(self._data)

    def reset_to_start(self) -> None:
        self._cursor = 0

    def tell(self) -> int:
        """
        The current cursor position, as the number of bytes consumed since the last rewind.
        """
        return self._cursor


class StreamSource(ByteSource):
    """
    A byte source over a seekable binary stream. Any `OSError` raised by the stream puts the source
    into the failed state until `reset_to_start` is called. The stream is not closed by this class.
    """

    def __init__(self, stream: BinaryIO | None):
        self._stream = stream
        self._failed = stream is None
        self._peek: bytes = B''

    @property
    def good(self) -> bool:
        stream = self._stream
        return not self._failed and stream is not None and not stream.closed

    def _fail(self, error: Exception):
        _log.debug(F'stream read failed: {error!s}')
        self._failed = True
        self._peek = B''

    def has_more(self) -> bool:
        if not self.good:
            return False
        if self._peek:
            return True
        try:
            self._peek = self._stream.read(1)
        except (OSError, ValueError) as E:
            self._fail(E)
            return False
        return bool(self._peek)

    def next_byte(self) -> int:
        if not self.has_more():
            raise EOFError('read beyond the end of the stream')
        value, = self._peek
        self._peek = B''
        return value

    def read(self, size: int) -> bytes:
        if not self.good or size <= 0:
            return B''
        head, self._peek = self._peek, B''
        chunks = [head]
        remaining = size - len(head)
        try:
            while remaining > 0:
                chunk = self._stream.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        except (OSError, ValueError) as E:
            self._fail(E)
        return B''.join(chunks)

    def total_length(self) -> int:
        if not self.good:
            return 0
        stream = self._stream
        try:
            position = stream.tell()
            length = stream.seek(0, io.SEEK_END)
            stream.seek(position, io.SEEK_SET)
        except (OSError, ValueError) as E:
            self._fail(E)
            return 0
        return length

    def reset_to_start(self) -> None:
        self._peek = B''
        stream = self._stream
        if stream is None or stream.closed:
            return
        self._failed = False
        try:
            stream.seek(0)
        except (OSError, ValueError) as E:
            self._fail(E)


class FileSource(StreamSource):
    """
    A stream source over a named file which is opened in binary mode. If the file cannot be opened,
    the source is created in the failed state and the error is available as `error`. The file is
    closed when the source is used as a context manager or when `close` is called.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = path
        self.error: OSError | None = None
        try:
            stream = open(path, 'rb')
        except OSError as E:
            _log.info(F'could not open {os.fspath(path)}: {E!s}')
            self.error = E
            stream = None
        super().__init__(stream)

    def close(self):
        if self._stream is not None:
            self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
        return False
