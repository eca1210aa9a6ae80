"""
Implements hash algorithms of short length, commonly used as checksums. All of them are rolling
checksums: the state is updated once per input byte and there is no padding, so the result does
not depend on how the input is split into chunks.
"""
from __future__ import annotations

import abc

from threading import Lock

from gash.hashes import MessageHash
from gash.lib.source import ByteSource
from gash.lib.tools import MASK32, buffer_size

__all__ = [
    'adler32',
    'crc32',
    'crc32_table',
    'elf',
]

CRC32_POLYNOMIAL = 0xEDB88320
ADLER32_MODULUS = 65521

_CRC32_TABLE: tuple[int, ...] | None = None
_CRC32_LOCK = Lock()


def _crc32_entry(value: int) -> int:
    for _ in range(8):
        if value & 1:
            value = (value >> 1) ^ CRC32_POLYNOMIAL
        else:
            value >>= 1
    return value


def crc32_table() -> tuple[int, ...]:
    """
    The lookup table for the reflected CRC-32 polynomial. It is computed on first use and shared
    by all `crc32` instances.
    """
    global _CRC32_TABLE
    if (table := _CRC32_TABLE) is None:
        with _CRC32_LOCK:
            if (table := _CRC32_TABLE) is None:
                table = _CRC32_TABLE = tuple(_crc32_entry(n) for n in range(0x100))
    return table


class RollingChecksum(MessageHash):
    bits = 32

    def absorb_source(self, source: ByteSource, length: int) -> None:
        size = buffer_size()
        while chunk := source.read(size):
            self.absorb_buffer(memoryview(chunk))

    @abc.abstractmethod
    def checksum(self) -> int:
        ...

    def finalize(self) -> tuple[int, ...]:
        return (self.checksum(),)


class crc32(RollingChecksum):
    """
    The CRC-32 checksum as used by zlib, computed with a byte-wise lookup table.
    """
    label = 'CRC-32'

    def __init__(self):
        super().__init__()
        self.table = crc32_table()
        self.value = MASK32

    def reset_state(self) -> None:
        self.value = MASK32

    def absorb_buffer(self, data: memoryview) -> None:
        table = self.table
        value = self.value
        for byte in data:
            value = (value >> 8) ^ table[(value & 0xFF) ^ byte]
        self.value = value

    def checksum(self) -> int:
        return ~self.value & MASK32


class adler32(RollingChecksum):
    """
    The Adler-32 checksum of RFC 1950.
    """
    label = 'Adler-32'

    def __init__(self):
        super().__init__()
        self.a = 1
        self.b = 0

    def reset_state(self) -> None:
        self.a = 1
        self.b = 0

    def absorb_buffer(self, data: memoryview) -> None:
        a, b = self.a, self.b
        for byte in data:
            a = (a + byte) % ADLER32_MODULUS
            b = (b + a) % ADLER32_MODULUS
        self.a, self.b = a, b

    def checksum(self) -> int:
        return self.b << 16 | self.a


class elf(RollingChecksum):
    """
    The hash function used for the symbol hash table of ELF object files.
    """
    label = 'ELF'

    def __init__(self):
        super().__init__()
        self.value = 0

    def reset_state(self) -> None:
        self.value = 0

    def absorb_buffer(self, data: memoryview) -> None:
        h = self.value
        for byte in data:
            h = (h << 4) + byte
            if g := h & 0xF0000000:
                h ^= g >> 24
            h &= 0x0FFFFFFF
        self.value = h

    def checksum(self) -> int:
        return self.value
