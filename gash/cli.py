"""
The gash command line interface: compute the digest of one or more files with one of the
available algorithms. If no algorithm is selected, MD5 is used.
"""
from __future__ import annotations

import logging
import sys

from typing import Sequence, TextIO

import colorama

import gash

from gash.hashes import algorithms, get_algorithm
from gash.lib.argparser import ArgparseError, GashArgumentParser
from gash.lib.environment import LogLevel, environment, logger
from gash.lib.source import FileSource

CREDITS = (
    'Gash was written by Gary Hammock and is distributed under the terms of the MIT license.\n'
    'MD5 follows RFC 1321 by Ronald L. Rivest, SHA-256 follows FIPS 180-2 by NIST, CRC-32 uses\n'
    'the reflected polynomial of IEEE 802.3, Adler-32 follows RFC 1950 by Mark Adler, and the\n'
    'ELF checksum is the symbol hash function of the System V ABI.'
)


def argparser() -> GashArgumentParser:
    argp = GashArgumentParser(
        prog='gash',
        description='Gash is a command-line, multiple hash algorithm file integrity checking program.',
    )
    group = argp.add_mutually_exclusive_group()
    for name in algorithms:
        label = get_algorithm(name).label
        group.add_argument(
            F'-{name}', F'--{name}',
            dest='algorithm',
            action='store_const',
            const=name,
            help=F'Compute the {label} digest.' + (' This is the default.' if name == 'md5' else ''),
        )
    argp.add_argument('-c', '--credits', action='store_true', help='Show the credits and exit.')
    argp.add_argument('-v', '--verbose', action='count', default=0,
        help='Increase the verbosity; can be specified twice.')
    argp.add_argument('files', metavar='FILE', nargs='*', help='The files that are to be hashed.')
    return argp


class Console:
    """
    Writes labeled output lines; the labels are colored when the output is a terminal.
    """
    def __init__(self, out: TextIO):
        self.out = out
        self.colored = not environment.colorless.value and out.isatty()
        if self.colored:
            colorama.init()

    def line(self, label: str, value: str):
        if self.colored:
            label = F'{colorama.Style.BRIGHT}{colorama.Fore.CYAN}{label}{colorama.Style.RESET_ALL}'
        self.out.write(F'{label}: {value}\n')

    def text(self, text: str):
        self.out.write(F'{text}\n')


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """
    Run the command line interface with the given arguments and return the exit code.
    """
    log = logger('gash')
    console = Console(out or sys.stdout)
    argp = argparser()

    try:
        args = argp.parse_args(argv)
    except ArgparseError as error:
        argp.print_usage(sys.stderr)
        log.error(str(error))
        return 2

    if args.verbose:
        log.setLevel(LogLevel.FromVerbosity(args.verbose))

    console.line('Gash version', gash.__version__)

    if args.credits:
        console.text(CREDITS)
        return 0
    if not args.files:
        argp.print_help(console.out)
        return 0

    engine = get_algorithm(args.algorithm)()
    errors = 0

    for path in args.files:
        with FileSource(path) as source:
            if not source.good:
                log.error(F'could not open file "{path}": {source.error}')
                errors += 1
                continue
            console.line('File', path)
            console.line(engine.label, engine.calculate_hash(source))
            log.info(F'computed {engine.label} over {source.total_length()} bytes')

    return 1 if errors else 0


def run():
    logging.captureWarnings(True)
    sys.exit(main())
