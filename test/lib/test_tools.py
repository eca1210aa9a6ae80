from gash.lib import tools
from gash.lib.environment import environment

from .. import TestBase


class TestBitOperations(TestBase):

    def test_rotations(self):
        self.assertEqual(tools.rotl32(0x80000001, 1), 0x00000003)
        self.assertEqual(tools.rotr32(0x80000001, 1), 0xC0000000)
        self.assertEqual(tools.rotl32(0x12345678, 0), 0x12345678)
        self.assertEqual(tools.rotr32(0x12345678, 32), 0x12345678)

    def test_rotations_are_inverse(self):
        for shift in range(32):
            value = int.from_bytes(self.generate_random_buffer(4), 'big')
            self.assertEqual(tools.rotr32(tools.rotl32(value, shift), shift), value)

    def test_byteswap(self):
        self.assertEqual(tools.byteswap32(0x01234567), 0x67452301)
        self.assertEqual(tools.byteswap32(0), 0)


class TestSettings(TestBase):

    def test_buffer_size_default(self):
        environment.buffer_size.value = 0
        try:
            self.assertEqual(tools.buffer_size(), tools.DEFAULT_BUFFER_SIZE)
        finally:
            environment.buffer_size.reload()

    def test_buffer_size_override(self):
        environment.buffer_size.value = 0x200
        try:
            self.assertEqual(tools.buffer_size(), 0x200)
        finally:
            environment.buffer_size.reload()

    def test_terminal_size_override(self):
        environment.term_size.value = 77
        try:
            self.assertEqual(tools.get_terminal_size(), 77)
        finally:
            environment.term_size.reload()
