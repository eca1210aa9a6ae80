"""
Implements the common interface of all hash engines. Every engine is a subclass of `MessageHash`
which stores the digest as a fixed number of 32-bit words and provides formatting and comparison.
An engine is used by calling `MessageHash.calculate_hash` on a buffer, a string, or a byte source:

    >>> from gash.hashes import get_algorithm
    >>> get_algorithm('crc32')().calculate_hash(B'123456789')
    'cbf43926'

The engine classes are also available from their modules:

1. `gash.hashes.md5.md5`
2. `gash.hashes.sha256.sha256`
3. `gash.hashes.checksums.crc32`
4. `gash.hashes.checksums.adler32`
5. `gash.hashes.checksums.elf`
"""
from __future__ import annotations

import abc
import importlib
import struct

from typing import TYPE_CHECKING, ClassVar

from gash.lib.environment import logger
from gash.lib.source import ByteSource
from gash.lib.types import asbuffer

if TYPE_CHECKING:
    from gash.lib.types import buf, wordarray

__all__ = [
    'algorithms',
    'BlockHash',
    'get_algorithm',
    'MessageHash',
    'UnknownAlgorithm',
]


class UnknownAlgorithm(LookupError):
    """
    Raised by `get_algorithm` when the selector does not name one of the available engines.
    """
    def __init__(self, name: str):
        self.name = name
        super().__init__(F'unknown hash algorithm: {name}; pick from: {", ".join(algorithms)}')


class MessageHash(abc.ABC):
    """
    Abstract base class for all hash engines. Subclasses specify the digest size in bits and the
    display label, and implement the four hooks `reset_state`, `absorb_buffer`, `absorb_source`,
    and `finalize`. The digest words are reset to zero at the start of every call to
    `calculate_hash`; no state carries over from one call to the next.
    """
    bits: ClassVar[int]
    label: ClassVar[str]
    name: ClassVar[str]
    word_count: ClassVar[int]

    _words: list[int]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.name = cls.__name__
        if bits := getattr(cls, 'bits', 0):
            cls.word_count = bits // 32

    def __init__(self):
        self._words = [0] * self.word_count
        self.log = logger(F'gash.{self.name}')

    @abc.abstractmethod
    def reset_state(self) -> None:
        """
        Restore the initial chaining state of the algorithm.
        """

    @abc.abstractmethod
    def absorb_buffer(self, data: memoryview) -> None:
        """
        Process a complete in-memory message.
        """

    @abc.abstractmethod
    def absorb_source(self, source: ByteSource, length: int) -> None:
        """
        Process a byte source whose cursor is at the start and whose total size is `length`.
        """

    @abc.abstractmethod
    def finalize(self) -> tuple[int, ...]:
        """
        Produce the digest words from the current state.
        """

    def calculate_hash(self, data: buf | str | ByteSource) -> str:
        """
        Compute the digest of the input and return it as a hexadecimal string. The input can be a
        buffer, a string (which is hashed as its UTF-8 encoding), or a `gash.lib.source.ByteSource`.
        If the byte source is unavailable or in a failed state, the digest is all zero; this does
        not raise an exception.
        """
        self._words = [0] * self.word_count
        self.reset_state()
        if isinstance(data, ByteSource):
            return self._calculate_from_source(data)
        if isinstance(data, str):
            data = data.encode('utf8')
        if (view := asbuffer(data)) is None:
            raise TypeError(F'cannot compute {self.label} of object of type {type(data).__name__}')
        if not view.c_contiguous:
            view = memoryview(view.tobytes())
        self.absorb_buffer(view.cast('B'))
        return self._store(self.finalize())

    def _calculate_from_source(self, source: ByteSource) -> str:
        if not source.good:
            self.log.warning('the byte source is unavailable; returning an all-zero digest')
            return self.hexdigest()
        length = source.total_length()
        source.reset_to_start()
        if not source.good:
            self.log.warning('the byte source failed; returning an all-zero digest')
            return self.hexdigest()
        self.log.debug(F'processing {length} bytes from byte source')
        self.absorb_source(source, length)
        failed = not source.good
        source.reset_to_start()
        if failed:
            self.log.warning('the byte source failed while reading; returning an all-zero digest')
            self._words = [0] * self.word_count
            return self.hexdigest()
        return self._store(self.finalize())

    def _store(self, digest: tuple[int, ...]) -> str:
        if len(digest) != self.word_count:
            raise RuntimeError(
                F'{self.label} produced {len(digest)} words instead of {self.word_count}')
        self._words[:] = digest
        return self.hexdigest()

    @property
    def words(self) -> tuple[int, ...]:
        return tuple(self._words)

    def hexdigest(self) -> str:
        """
        The digest in lower-case hexadecimal, with each word zero-padded to eight digits.
        """
        return ''.join(F'{word:08x}' for word in self._words)

    def digest(self) -> bytes:
        return struct.pack(F'>{self.word_count}I', *self._words)

    def as_word_array(self, out: wordarray | None = None) -> wordarray:
        """
        Copy the digest words into `out`, which has to hold at least `word_count` items. If no
        output sequence is given, a new list is returned.
        """
        if out is None:
            return list(self._words)
        if len(out) < self.word_count:
            raise ValueError(
                F'the output array has {len(out)} entries but {self.word_count} are required')
        for k, word in enumerate(self._words):
            out[k] = word
        return out

    def copy(self):
        clone = self.__class__()
        clone._words[:] = self._words
        return clone

    def __eq__(self, other):
        if isinstance(other, str):
            return self.hexdigest() == other.lower()
        if not isinstance(other, MessageHash):
            return NotImplemented
        if len(self._words) != len(other._words):
            return False
        return all(a == b for a, b in zip(self._words, other._words))

    def __str__(self):
        return self.hexdigest()

    def __repr__(self):
        return F'<{self.label}:{self.hexdigest()}>'


class BlockHash(MessageHash):
    """
    Shared logic of the Merkle-Damgard engines MD5 and SHA-256: the message is padded with a single
    set bit, zero bytes up to 56 modulo 64, and an eight byte length field. Only the low 32 bits of
    the length field are ever set, so messages of 2^32 bits or more are padded incorrectly.
    """
    block_size: ClassVar[int] = 64
    length_offset: ClassVar[int] = 56
    byteorder: ClassVar[str]
    iv: ClassVar[tuple[int, ...]]

    state: list[int]

    def __init__(self):
        super().__init__()
        self.state = list(self.iv)

    def reset_state(self) -> None:
        self.state = list(self.iv)

    @abc.abstractmethod
    def compress(self, block: memoryview) -> None:
        """
        Update the chaining variables with one block of 64 bytes.
        """

    def length_field(self, length: int) -> bytes:
        bit_length = (length << 3) & 0xFFFFFFFF
        if self.byteorder == 'little':
            return struct.pack('<II', bit_length, 0)
        else:
            return struct.pack('>II', 0, bit_length)

    @classmethod
    def block_count(cls, length: int) -> int:
        """
        The number of blocks that a message of `length` bytes occupies after padding.
        """
        return (length + 8) // cls.block_size + 1

    def pad(self, data: buf) -> bytearray:
        length = len(data)
        padded = bytearray(data)
        padded.append(0x80)
        padded.extend(bytes(-(length + 1 + 8) % self.block_size))
        padded.extend(self.length_field(length))
        return padded

    def absorb_buffer(self, data: memoryview) -> None:
        padded = memoryview(self.pad(data))
        size = self.block_size
        for offset in range(0, len(padded), size):
            self.compress(padded[offset:offset + size])

    def absorb_source(self, source: ByteSource, length: int) -> None:
        size = self.block_size
        blocks = self.block_count(length)
        field = self.length_field(length)
        block = bytearray(size)
        view = memoryview(block)
        terminated = False
        self.log.debug(F'message of {length} bytes is padded to {blocks} blocks')
        for index in range(blocks):
            if terminated:
                chunk = B''
            else:
                chunk = source.read(size)
            n = len(chunk)
            block[:n] = chunk
            if n < size:
                block[n:] = bytes(size - n)
                if not terminated:
                    block[n] = 0x80
                    terminated = True
            if index == blocks - 1:
                if n >= self.length_offset:
                    self.log.warning(F'byte source holds more than the expected {length} bytes')
                block[self.length_offset:] = field
            self.compress(view)

    def finalize(self) -> tuple[int, ...]:
        return tuple(self.state)


_ENGINES = {
    'md5'    : ('gash.hashes.md5', 'md5'),
    'sha256' : ('gash.hashes.sha256', 'sha256'),
    'crc32'  : ('gash.hashes.checksums', 'crc32'),
    'adler32': ('gash.hashes.checksums', 'adler32'),
    'elf'    : ('gash.hashes.checksums', 'elf'),
}

algorithms = tuple(_ENGINES)
"""
The names of all available engines, in the order in which they are listed on the command line.
"""

DEFAULT_ALGORITHM = 'md5'


def get_algorithm(name: str | None = None) -> type[MessageHash]:
    """
    Return the engine class for the given selector. The selector is case-insensitive, may have
    leading dashes, and may contain a dash or underscore as in `sha-256`. If no name is given, the
    MD5 engine is returned.
    """
    if name is None:
        name = DEFAULT_ALGORITHM
    key = name.lstrip('-').lower().replace('-', '').replace('_', '')
    try:
        module, attribute = _ENGINES[key]
    except KeyError:
        raise UnknownAlgorithm(name) from None
    return getattr(importlib.import_module(module), attribute)
