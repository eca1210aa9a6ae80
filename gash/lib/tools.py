"""
Miscellaneous helper functions.
"""
from __future__ import annotations

import os
import sys

from gash.lib.environment import environment

MASK32 = 0xFFFFFFFF
"""
All hash engines operate on unsigned 32-bit words; intermediate results are reduced with this mask.
"""

DEFAULT_BUFFER_SIZE = 0x10000


def rotl32(value: int, shift: int) -> int:
    """
    Rotate the 32-bit word `value` to the left by `shift` bits.
    """
    shift &= 31
    return ((value << shift) | (value >> (32 - shift))) & MASK32


def rotr32(value: int, shift: int) -> int:
    """
    Rotate the 32-bit word `value` to the right by `shift` bits.
    """
    shift &= 31
    return ((value >> shift) | (value << (32 - shift))) & MASK32


def byteswap32(value: int) -> int:
    """
    Reverse the byte order of a 32-bit word.
    """
    return int.from_bytes(value.to_bytes(4, 'little'), 'big')


def buffer_size() -> int:
    """
    Returns the chunk size for reading byte sources. If the environment variable `GASH_BUFFER_SIZE`
    is set to a positive integer, it takes precedence over the default of 64 KiB.
    """
    size = environment.buffer_size.value
    if size and size > 0:
        return size
    return DEFAULT_BUFFER_SIZE


def get_terminal_size(default=0):
    """
    Returns the size of the currently attached terminal. If the environment variable
    `GASH_TERM_SIZE` is set to an integer value, it takes prescedence. If the width of the
    terminal cannot be determined or if the width is less than 2 characters, the function
    returns the default.
    """
    ev_terminal_size = environment.term_size.value
    if ev_terminal_size and ev_terminal_size > 0:
        return ev_terminal_size
    width = default
    for stream in (sys.stderr, sys.stdout):
        if stream.isatty():
            try:
                width = os.get_terminal_size(stream.fileno()).columns
            except Exception:
                width = default
            else:
                break
    return default if width < 2 else width - 1
