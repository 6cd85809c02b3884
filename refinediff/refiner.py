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

"""Refinement of replacement blocks, i.e., highlighting exactly which characters changed between removed lines and the
added lines that replace them.
"""

import logging

from refinediff.alignment import Common
from refinediff.alignment import NewOnly
from refinediff.alignment import OldOnly
from refinediff.alignment import align
from refinediff.alignment import identity_filter
from refinediff.ansi import GREEN
from refinediff.ansi import LINE_BREAK_MARKER
from refinediff.ansi import RED
from refinediff.segments import StyledSegments

logger = logging.getLogger(__name__)

OLD_PREFIX = "-"
NEW_PREFIX = "+"

def refine(old_text, new_text, opcode_filter=identity_filter):
    """Decorates both sides of a replacement block, highlighting their character level differences in reverse video.

    Args:
        old_text: The removed lines, each with its line break and without its "-" prefix.
        new_text: The added lines, each with its line break and without its "+" prefix.
        opcode_filter: The OpcodeFilter to use for post-processing the alignment.

    Returns:
        A 2-tuple containing the decorated old and new texts. Each is empty if its side is empty.
    """

    old_segments = StyledSegments(OLD_PREFIX, RED)
    new_segments = StyledSegments(NEW_PREFIX, GREEN)

    # A pure deletion or insertion has nothing to be refined against.
    if not old_text or not new_text:

        old_segments.append(old_text)
        new_segments.append(new_text)

        return (old_segments.finalize(), new_segments.finalize())

    logger.debug("Refining %d removed against %d added characters.", len(old_text), len(new_text))

    for run in align(old_text, new_text, opcode_filter):

        if isinstance(run, Common):
            old_segments.append(run.run)
            new_segments.append(run.run)
        elif isinstance(run, OldOnly):
            append_highlighted(old_segments, run.run)
        elif isinstance(run, NewOnly):
            append_highlighted(new_segments, run.run)
        else:
            raise ValueError("Invalid alignment run {0!r}.".format(run))

    return (old_segments.finalize(), new_segments.finalize())

def append_highlighted(segments, text):
    """Appends text in reverse video. Line breaks can't be seen in reverse video, so each one is replaced with a
    highlighted marker followed by an ordinary line break.

    Args:
        segments: The StyledSegments to append to.
        text: The text.
    """

    lines = text.split("\n")

    for line in lines[:-1]:
        segments.append(line, True)
        segments.append(LINE_BREAK_MARKER, True)
        segments.append("\n")

    segments.append(lines[-1], True)
