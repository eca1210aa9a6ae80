R"""
Gash is a command-line, multiple hash algorithm file integrity checking program. The package
reduces a file or an in-memory buffer to a short fingerprint with one of five algorithms, all of
which are implemented in pure Python:

- MD5 as specified in RFC 1321
- SHA-256 as specified in FIPS 180-2
- CRC-32 with the reflected polynomial `0xEDB88320`
- Adler-32 as specified in RFC 1950
- the ELF object file symbol hash

The engines are documented in `gash.hashes`; the byte sources that they can read from are
documented in `gash.lib.source`. The behavior of the package can be configured with environment
variables, see `gash.lib.environment`.
"""
from __future__ import annotations

__version__ = '1.0.0'
__distribution__ = 'gash'

from gash.hashes import MessageHash, UnknownAlgorithm, algorithms, get_algorithm
from gash.lib.source import ByteSource, FileSource, MemorySource, StreamSource

__all__ = [
    'algorithms',
    'ByteSource',
    'FileSource',
    'get_algorithm',
    'MemorySource',
    'MessageHash',
    'StreamSource',
    'UnknownAlgorithm',
]
