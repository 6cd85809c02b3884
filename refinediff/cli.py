# -*- coding: utf-8 -*-
#
# Copyright (c) 2011 Roy Liu
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#   * Redistributions of source code must retain the above copyright notice,
#     this list of conditions and the following disclaimer.
#   * Redistributions in binary form must reproduce the above copyright notice,
#     this list of conditions and the following disclaimer in the documentation
#     and/or other materials provided with the distribution.
#   * Neither the name of the author nor the names of any contributors may be
#     used to endorse or promote products derived from this software without
#     specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDERS OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

"""The command line interface: filters unified diff output on standard input and writes it, recolorized with
intraline changes highlighted, to standard output.
"""

import logging
import os
import sys
from argparse import ArgumentParser

from refinediff import __version__
from refinediff.config import COLOR_MODES
from refinediff.config import Options
from refinediff.config import get_default_color_mode
from refinediff.errors import UnknownStateError
from refinediff.stream import highlight_stream

logger = logging.getLogger(__name__)

def create_parser():
    """Creates the argument parser.

    Returns:
        The parser.
    """

    parser = ArgumentParser(prog="refinediff",
                            description="Colors unified diff output and highlights which parts of changed lines have"
                            " changed. Usage: git diff | refinediff")
    parser.add_argument("--version", action="version", version="%(prog)s {0}".format(__version__))
    parser.add_argument("-c", "--color", dest="color_mode", nargs="?", const="always",
                        default=get_default_color_mode(), choices=COLOR_MODES,
                        help="the color mode, one of {always, auto, never}")
    parser.add_argument("--strip-color", dest="strip_color", action="store_true",
                        help="strip color escapes from the input before highlighting it")
    parser.add_argument("--no-shift", dest="shift", action="store_false",
                        help="don't slide ambiguous differences to more readable boundaries")
    parser.add_argument("-v", "--verbose", dest="verbose", action="store_true",
                        help="log debugging information to standard error")

    return parser

def reconfigure(stream):
    """Reconfigures a standard stream as UTF-8 text in which arbitrary bytes survive a round trip.

    Args:
        stream: The stream.

    Returns:
        The stream.
    """

    stream.reconfigure(encoding="utf-8", errors="surrogateescape", newline="\n")

    return stream

def main(argv=None, stdin=None, stdout=None):
    """The main method body.

    Args:
        argv: The command line arguments, or None for those of the process.
        stdin: The input text stream, or None for standard input.
        stdout: The output text stream, or None for standard output.

    Returns:
        The exit code.
    """

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(name)s: %(levelname)s: %(message)s",
                        stream=sys.stderr)

    try:
        options = Options(color_mode=args.color_mode, strip_color=args.strip_color, shift=args.shift)
    except ValueError as e:
        parser.error(str(e))

    try:

        if stdin is None:

            if sys.stdin is None or sys.stdin.isatty():
                logger.error("Expected input from a pipe, e.g., git diff | refinediff.")
                return 1

            stdin = reconfigure(sys.stdin)

        if stdout is None:
            stdout = reconfigure(sys.stdout)

    except (AttributeError, ValueError) as e:
        logger.error("Could not set up the standard streams: %s", e)
        return 1

    try:
        highlight_stream(stdin, stdout, options)
    except BrokenPipeError:

        # The reader went away, e.g., somebody quit their pager early.
        logger.debug("The output pipe was closed before the diff was fully written.")

        # Point standard output at the null device so that flushing it at exit doesn't fail again.
        if stdout is sys.stdout:
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())

        return 0

    except UnknownStateError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Could not highlight the diff: %s", e)
        return 1

    return 0
