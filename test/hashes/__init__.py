from __future__ import annotations

import io

from .. import gash, TestBase
from gash.hashes import MessageHash, get_algorithm
from gash.lib.source import MemorySource, StreamSource

__all__ = ['gash', 'TestHashBase']


class BrokenStream(io.BytesIO):
    """
    A binary stream whose reads fail after the given number of bytes.
    """
    def __init__(self, data: bytes, fail_after: int):
        super().__init__(data)
        self.fail_after = fail_after

    def read(self, size=-1):
        if self.tell() >= self.fail_after:
            raise OSError('simulated read failure')
        if size is None or size < 0:
            size = self.fail_after - self.tell()
        return super().read(min(size, self.fail_after - self.tell()))


class TestHashBase(TestBase):

    def ldh(self, name: str | None = None) -> MessageHash:
        return get_algorithm(name)()

    def hash_buffer(self, name: str, data) -> str:
        return self.ldh(name).calculate_hash(data)

    def hash_stream(self, name: str, data: bytes) -> str:
        return self.ldh(name).calculate_hash(StreamSource(io.BytesIO(data)))

    def hash_memory_source(self, name: str, data: bytes) -> str:
        return self.ldh(name).calculate_hash(MemorySource(data))

    def assertAllVariants(self, name: str, data: bytes, goal: str, msg=None):
        """
        Check that the buffer variant and both byte source variants produce the expected digest.
        """
        self.assertEqual(self.hash_buffer(name, data), goal, msg)
        self.assertEqual(self.hash_stream(name, data), goal, msg)
        self.assertEqual(self.hash_memory_source(name, data), goal, msg)
