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

"""The line classifier, a state machine assigning each line of a unified diff its role and collecting replacement
blocks out of consecutive removed and added lines.
"""

import logging
from enum import Enum

from refinediff.alignment import identity_filter
from refinediff.ansi import BOLD
from refinediff.ansi import CYAN
from refinediff.ansi import GREEN
from refinediff.ansi import RED
from refinediff.errors import UnknownStateError
from refinediff.refiner import refine
from refinediff.segments import StyledSegments

logger = logging.getLogger(__name__)

class Role(Enum):
    """The role of a diff line, which doubles as the state of the classifier.
    """

    INITIAL = "initial"
    DIFF_HEADER = "diff_header"
    DIFF_HUNK_HEADER = "diff_hunk_header"
    DIFF_HUNK = "diff_hunk"
    DIFF_ADDED = "diff_added"
    DIFF_REMOVED = "diff_removed"
    DIFF_CONTEXT = "diff_context"

# The (prefix, color) pair of each role.
STYLES = {
    Role.INITIAL: ("", ""),
    Role.DIFF_HEADER: ("", BOLD),
    Role.DIFF_HUNK_HEADER: ("", CYAN),
    Role.DIFF_HUNK: ("", ""),
    Role.DIFF_ADDED: ("+", GREEN),
    Role.DIFF_REMOVED: ("-", RED),
    Role.DIFF_CONTEXT: ("", ""),
}

HUNK_ROLES = frozenset([Role.DIFF_HUNK_HEADER, Role.DIFF_HUNK, Role.DIFF_ADDED, Role.DIFF_REMOVED, Role.DIFF_CONTEXT])

DIFF_HEADER_START = "diff "
HUNK_HEADER_START = "@@ "

class ReplacementBlock(object):
    """Consecutive removed and added lines, waiting to be refined against each other.
    """

    def __init__(self):
        """Default constructor.
        """
        super(ReplacementBlock, self).__init__()

        self.old_lines = []
        self.new_lines = []

    def add_old(self, content):
        """Adds a removed line.

        Args:
            content: The line without its "-" prefix and line break.
        """
        self.old_lines.append(content + "\n")

    def add_new(self, content):
        """Adds an added line.

        Args:
            content: The line without its "+" prefix and line break.
        """
        self.new_lines.append(content + "\n")

    @property
    def old_text(self):
        """The removed lines, joined.
        """
        return "".join(self.old_lines)

    @property
    def new_text(self):
        """The added lines, joined.
        """
        return "".join(self.new_lines)

    def is_empty(self):
        """Checks whether the block holds neither removed nor added lines.

        Returns:
            True if and only if both sides are empty.
        """
        return not self.old_lines and not self.new_lines

class LineClassifier(object):
    """Consumes a unified diff one line at a time. Lines with roles other than added or removed are decorated and
    returned right away, while added and removed lines accumulate in a ReplacementBlock that is refined and returned
    as soon as any other line arrives or flush() is called.
    """

    def __init__(self, opcode_filter=identity_filter):
        """Default constructor.

        Args:
            opcode_filter: The OpcodeFilter to refine replacement blocks with.
        """
        super(LineClassifier, self).__init__()

        self.opcode_filter = opcode_filter
        self.role = Role.INITIAL
        self.block = ReplacementBlock()

    def next_role(self, line):
        """Determines the role of the given line from the current state, without changing it.

        Args:
            line: The line without its line break.

        Returns:
            The role.

        Raises:
            UnknownStateError: If the current state has no rules.
        """

        role = self.role

        if line.startswith(DIFF_HEADER_START):
            return Role.DIFF_HEADER

        if role == Role.INITIAL:
            return Role.INITIAL
        elif role == Role.DIFF_HEADER:

            if line.startswith(HUNK_HEADER_START):
                return Role.DIFF_HUNK_HEADER

            return Role.DIFF_HEADER

        elif role in HUNK_ROLES:

            if line.startswith(HUNK_HEADER_START):
                return Role.DIFF_HUNK_HEADER
            elif line.startswith("+"):
                return Role.DIFF_ADDED
            elif line.startswith("-"):
                return Role.DIFF_REMOVED
            elif line.startswith(" "):
                return Role.DIFF_CONTEXT
            else:
                return Role.DIFF_HUNK

        else:
            raise UnknownStateError(role, line)

    def feed(self, line):
        """Classifies a line and transitions to its role.

        Args:
            line: The line without its line break.

        Returns:
            The decorated text ready to be written, possibly empty if the line was added to the pending replacement
            block.
        """

        self.role = role = self.next_role(line)

        if role == Role.DIFF_ADDED:
            self.block.add_new(line[1:])
            return ""
        elif role == Role.DIFF_REMOVED:
            self.block.add_old(line[1:])
            return ""

        (prefix, color) = STYLES[role]

        return self.flush() + StyledSegments.decorate(line + "\n", prefix, color)

    def flush(self):
        """Refines the pending replacement block, if any, and starts a new one.

        Returns:
            The decorated removed lines followed by the decorated added lines.
        """

        if self.block.is_empty():
            return ""

        (block, self.block) = (self.block, ReplacementBlock())

        logger.debug("Flushing a replacement block of %d removed and %d added lines.",
                     len(block.old_lines), len(block.new_lines))

        (refined_old, refined_new) = refine(block.old_text, block.new_text, self.opcode_filter)

        return refined_old + refined_new
