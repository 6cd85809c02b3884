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

"""The stream driver, reading a diff line by line and writing its highlighted version.
"""

import logging

from refinediff.ansi import strip_sgr
from refinediff.classifier import LineClassifier
from refinediff.config import Options

logger = logging.getLogger(__name__)

def highlight_stream(lines, output, options=None):
    """Highlights a unified diff.

    Args:
        lines: The lines of the diff, e.g., a text stream. Each may or may not end with a line break.
        output: The text stream to write to.
        options: The Options, or None for the defaults.

    Returns:
        The number of lines read.
    """

    if options is None:
        options = Options()

    colorize = options.colorize(output)
    classifier = LineClassifier(options.opcode_filter)
    nlines = 0

    for line in lines:

        nlines += 1

        if line.endswith("\n"):
            line = line[:-1]

        if options.strip_color:
            line = strip_sgr(line)

        if not colorize:
            output.write(line + "\n")
            continue

        output.write(classifier.feed(line))

    output.write(classifier.flush())
    output.flush()

    logger.debug("Highlighted %d lines.", nlines)

    return nlines
