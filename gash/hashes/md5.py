"""
Pure Python implementation of the MD5 message digest algorithm as specified in RFC 1321. The
message is processed in blocks of 64 bytes, each of which is read as sixteen little-endian words.
Only the low 32 bits of the message length in bits are encoded in the padding, which means that
messages of 512 MiB or more produce a wrong digest.
"""
from __future__ import annotations

import struct

from gash.hashes import BlockHash
from gash.lib.tools import MASK32, byteswap32, rotl32

__all__ = ['md5']

_K = (
    0xD76AA478, 0xE8C7B756, 0x242070DB, 0xC1BDCEEE, 0xF57C0FAF, 0x4787C62A, 0xA8304613, 0xFD469501,
    0x698098D8, 0x8B44F7AF, 0xFFFF5BB1, 0x895CD7BE, 0x6B901122, 0xFD987193, 0xA679438E, 0x49B40821,
    0xF61E2562, 0xC040B340, 0x265E5A51, 0xE9B6C7AA, 0xD62F105D, 0x02441453, 0xD8A1E681, 0xE7D3FBC8,
    0x21E1CDE6, 0xC33707D6, 0xF4D50D87, 0x455A14ED, 0xA9E3E905, 0xFCEFA3F8, 0x676F02D9, 0x8D2A4C8A,
    0xFFFA3942, 0x8771F681, 0x6D9D6122, 0xFDE5380C, 0xA4BEEA44, 0x4BDECFA9, 0xF6BB4B60, 0xBEBFBC70,
    0x289B7EC6, 0xEAA127FA, 0xD4EF3085, 0x04881D05, 0xD9D4D039, 0xE6DB99E5, 0x1FA27CF8, 0xC4AC5665,
    0xF4292244, 0x432AFF97, 0xAB9423A7, 0xFC93A039, 0x655B59C3, 0x8F0CCC92, 0xFFEFF47D, 0x85845DD1,
    0x6FA87E4F, 0xFE2CE6E0, 0xA3014314, 0x4E0811A1, 0xF7537E82, 0xBD3AF235, 0x2AD7D2BB, 0xEB86D391,
)


def _F(x: int, y: int, z: int) -> int:
    return (x & y) | (~x & z)


def _G(x: int, y: int, z: int) -> int:
    return (x & z) | (y & ~z)


def _H(x: int, y: int, z: int) -> int:
    return x ^ y ^ z


def _I(x: int, y: int, z: int) -> int:
    return (y ^ (x | ~z)) & MASK32


# function, left rotations, and message word index for each of the four rounds
_ROUNDS = (
    (_F, (7, 12, 17, 22), lambda i: i),
    (_G, (5, 9, 14, 20), lambda i: (5 * i + 1) & 15),
    (_H, (4, 11, 16, 23), lambda i: (3 * i + 5) & 15),
    (_I, (6, 10, 15, 21), lambda i: (7 * i) & 15),
)

_SCHEDULE = tuple(
    (function, shifts[step & 3], index(step), _K[r * 16 + step])
    for r, (function, shifts, index) in enumerate(_ROUNDS)
    for step in range(16)
)


class md5(BlockHash):
    """
    The MD5 message digest of RFC 1321.
    """
    bits = 128
    label = 'MD5'
    byteorder = 'little'
    iv = (
        0x67452301,
        0xEFCDAB89,
        0x98BADCFE,
        0x10325476,
    )

    def compress(self, block: memoryview) -> None:
        x = struct.unpack('<16I', block)
        a, b, c, d = self.state
        for function, shift, index, constant in _SCHEDULE:
            f = (a + function(b, c, d) + constant + x[index]) & MASK32
            a, d, c = d, c, b
            b = (b + rotl32(f, shift)) & MASK32
        state = self.state
        state[0] = (state[0] + a) & MASK32
        state[1] = (state[1] + b) & MASK32
        state[2] = (state[2] + c) & MASK32
        state[3] = (state[3] + d) & MASK32

    def finalize(self) -> tuple[int, ...]:
        # the digest is the little-endian encoding of the chaining variables
        return tuple(byteswap32(word) for word in self.state)
