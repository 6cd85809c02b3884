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

"""Runtime options.
"""

import os

from refinediff.alignment import ChainFilter
from refinediff.alignment import merge_filter
from refinediff.alignment import shift_filter

COLOR_MODES = ("always", "auto", "never")

# Supplies the color mode when none is given on the command line.
COLOR_ENVIRONMENT_VARIABLE = "REFINEDIFF_COLOR"

class Options(object):
    """The options controlling how a diff gets highlighted.
    """

    def __init__(self, color_mode="always", strip_color=False, shift=True):
        """Default constructor.

        Args:
            color_mode: The color mode, one of {always, auto, never}.
            strip_color: Whether to strip color escapes from incoming lines before classifying them.
            shift: Whether to slide ambiguous differences to the most readable boundaries.
        """
        super(Options, self).__init__()

        if color_mode not in COLOR_MODES:
            raise ValueError("Please provide a color mode that is one of {always, auto, never}.")

        self.color_mode = color_mode
        self.strip_color = strip_color
        self.shift = shift

    @property
    def opcode_filter(self):
        """The OpcodeFilter to refine replacement blocks with: merging, followed by shifting if enabled.
        """

        if self.shift:
            return ChainFilter(merge_filter, shift_filter)
        else:
            return merge_filter

    def colorize(self, output):
        """Determines whether to colorize what gets written to the given output stream.

        Args:
            output: The output stream.

        Returns:
            True if and only if the color mode is "always", or it's "auto" and the output is a terminal.
        """

        if self.color_mode == "auto":
            return output.isatty()

        return self.color_mode == "always"

def get_default_color_mode(environ=os.environ):
    """Gets the color mode to use when none is given on the command line.

    Args:
        environ: The environment.

    Returns:
        The color mode.
    """
    return environ.get(COLOR_ENVIRONMENT_VARIABLE) or "always"
