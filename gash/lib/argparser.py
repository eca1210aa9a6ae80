"""
Provides a customized argument parser for the gash command line interface.
"""
from __future__ import annotations

from argparse import (
    Action,
    ArgumentParser,
    RawDescriptionHelpFormatter,
)

import sys

from gash.lib.tools import get_terminal_size


class ArgparseError(ValueError):
    """
    This custom exception type is thrown from the custom argument parser rather than terminating
    program execution immediately. The `parser` parameter is a reference to the argument parser
    that threw the original argument parsing exception with the given `message`.
    """
    def __init__(self, parser, message):
        self.parser = parser
        super().__init__(message)


class LineWrapRawTextHelpFormatter(RawDescriptionHelpFormatter):
    """
    The gash help text formatter uses the full width of the terminal and prints argument options
    only once after the long name of the option.
    """

    def __init__(self, prog, indent_increment=2, max_help_position=30, width=None):
        super().__init__(prog, indent_increment, max_help_position, width=get_terminal_size() or None)

    def _format_action_invocation(self, action: Action):
        if not action.option_strings:
            metavar, = self._metavar_formatter(action, action.dest)(1)
            return metavar
        parts = []
        if action.nargs == 0:
            parts.extend(action.option_strings)
        else:
            default = action.dest.upper()
            args_string = self._format_args(action, default)
            for option_string in action.option_strings:
                parts.append(str(option_string))
            parts[-1] += F' {args_string}'
        switches = ', '.join(parts)
        if all(opt.startswith('--') for opt in action.option_strings):
            switches = '\x20' * 4 + switches
        return switches


class GashArgumentParser(ArgumentParser):
    """
    An argument parser that raises `ArgparseError` instead of exiting the interpreter.
    """

    def __init__(self, prog=None, description=None, epilog=None, add_help=True):
        super().__init__(
            prog=prog,
            description=description,
            epilog=epilog,
            add_help=add_help,
            formatter_class=LineWrapRawTextHelpFormatter,
        )
        if sys.version_info >= (3, 14):
            self.color = False

    def error(self, message):
        raise ArgparseError(self, message)
