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

"""Accumulation of styled text segments into decorated output lines.
"""

from refinediff.ansi import NOT_REVERSE
from refinediff.ansi import RESET
from refinediff.ansi import REVERSE

class StyledSegments(object):
    """Builds one logical output line, which may span several physical lines, out of a sequence of (text, reverse)
    appends. The color and prefix are inserted before the first character of every physical line, and reverse video
    escapes are inserted only where the emphasis of consecutive appends differs.
    """

    def __init__(self, prefix="", color=""):
        """Default constructor.

        Args:
            prefix: The prefix of every physical line, e.g., "-" or "+".
            color: The color escape of every physical line, possibly empty.
        """
        super(StyledSegments, self).__init__()

        self.prefix = prefix
        self.color = color
        self.reverse = False
        self.parts = []

    def append(self, text, reverse=False):
        """Appends a segment.

        Args:
            text: The text, possibly containing line breaks.
            reverse: Whether to render the text in reverse video.
        """

        lines = text.split("\n")

        for line in lines[:-1]:
            self.append_line(line + "\n", reverse)

        self.append_line(lines[-1], reverse)

    def append_line(self, text, reverse):
        """Appends a segment lying on a single physical line.

        Args:
            text: The text, ending in a line break or containing none at all.
            reverse: Whether to render the text in reverse video.
        """

        if not text:
            return

        if not self.parts or self.parts[-1].endswith("\n"):
            self.parts.append(self.color)
            self.parts.append(self.prefix)

        if reverse != self.reverse:

            if reverse:
                self.parts.append(REVERSE)
            else:
                self.parts.append(NOT_REVERSE)

        self.reverse = reverse
        self.parts.append(text)

    def finalize(self):
        """Renders the accumulated segments.

        Returns:
            The decorated text ending in exactly one line break, or the empty string if nothing was appended.
        """

        if not self.parts:
            return ""

        text = "".join(self.parts)

        if text.endswith("\n"):
            text = text[:-1]

        if self.color:
            text += RESET

        return text + "\n"

    @staticmethod
    def decorate(text, prefix="", color=""):
        """Decorates the given text without any reverse video.

        Args:
            text: The text.
            prefix: The prefix of every physical line.
            color: The color of every physical line.

        Returns:
            The decorated text.
        """

        segments = StyledSegments(prefix, color)
        segments.append(text)

        return segments.finalize()
