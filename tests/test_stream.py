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

"""Tests for the stream driver."""

import io

import pytest

from refinediff.ansi import BOLD
from refinediff.ansi import CYAN
from refinediff.ansi import GREEN
from refinediff.ansi import LINE_BREAK_MARKER
from refinediff.ansi import NOT_REVERSE
from refinediff.ansi import RED
from refinediff.ansi import RESET
from refinediff.ansi import REVERSE
from refinediff.ansi import strip_sgr
from refinediff.config import Options
from refinediff.stream import highlight_stream

SAMPLE = (
    "diff --git a/hello.py b/hello.py\n"
    "index 83db48f..bf269f4 100644\n"
    "--- a/hello.py\n"
    "+++ b/hello.py\n"
    "@@ -1,4 +1,4 @@\n"
    " import sys\n"
    "-print('hello world')\n"
    "+print('hello, world!')\n"
    " \n"
    "-sys.exit(0)\n"
    "\\ No newline at end of file\n"
    "+sys.exit(1)\n"
    "\\ No newline at end of file\n"
)

ALWAYS = Options(color_mode="always")


def highlight(text, options=ALWAYS):
    output = io.StringIO()
    highlight_stream(io.StringIO(text), output, options)
    return output.getvalue()


class TestHighlightStream:
    """Tests for highlight_stream()."""

    def test_sample(self):
        lines = highlight(SAMPLE).split("\n")

        assert lines[0] == BOLD + "diff --git a/hello.py b/hello.py" + RESET
        assert lines[3] == BOLD + "+++ b/hello.py" + RESET
        assert lines[4] == CYAN + "@@ -1,4 +1,4 @@" + RESET
        assert lines[5] == " import sys"
        assert lines[6] == RED + "-print('hello world')" + RESET
        assert lines[7] == (GREEN + "+print('hello" + REVERSE + "," + NOT_REVERSE + " world"
                            + REVERSE + "!" + NOT_REVERSE + "')" + RESET)
        assert lines[9] == RED + "-sys.exit(0)" + RESET
        assert lines[10] == "\\ No newline at end of file"
        assert lines[11] == GREEN + "+sys.exit(1)" + RESET

    def test_line_count(self):
        assert highlight(SAMPLE).count("\n") == SAMPLE.count("\n")

    def test_content_round_trip(self):
        assert strip_sgr(highlight(SAMPLE)) == SAMPLE

    def test_missing_final_line_break(self):
        text = "diff x\n@@ -1 +1 @@\n-a\n+b"
        output = highlight(text)

        assert output.count("\n") == 4
        assert output.endswith(GREEN + "+" + REVERSE + "b" + NOT_REVERSE + RESET + "\n")

    def test_replacement_keeps_counts_and_order(self):
        text = "diff x\n@@ -1,2 +1,3 @@\n-one\n-two\n+uno\n+dos\n+tres\n"
        lines = strip_sgr(highlight(text)).replace(LINE_BREAK_MARKER, "").split("\n")

        assert lines[2:7] == ["-one", "-two", "+uno", "+dos", "+tres"]

    def test_returns_number_of_lines(self):
        assert highlight_stream(io.StringIO(SAMPLE), io.StringIO(), ALWAYS) == 13

    def test_never_colorize(self):
        assert highlight(SAMPLE, Options(color_mode="never")) == SAMPLE

    def test_auto_without_terminal(self):
        assert highlight(SAMPLE, Options(color_mode="auto")) == SAMPLE

    def test_highlights_by_default(self):
        output = io.StringIO()
        highlight_stream(io.StringIO(SAMPLE), output)

        assert output.getvalue() == highlight(SAMPLE)

    def test_strip_color_without_colorizing(self):
        """Incoming escapes are stripped even when nothing gets highlighted."""
        once = highlight(SAMPLE)

        assert highlight(once, Options(color_mode="never", strip_color=True)) == SAMPLE

    def test_styled_input_is_inert(self):
        """Escapes in the input are plain content, so highlighted output passes through untouched."""
        once = highlight(SAMPLE)

        assert highlight(once) == once

    def test_strip_color(self):
        once = highlight(SAMPLE)

        assert highlight(once, Options(color_mode="always", strip_color=True)) == once

    def test_empty_input(self):
        assert highlight("") == ""

    def test_write_errors_propagate(self):

        class BrokenOutput(io.StringIO):

            def write(self, s):
                raise BrokenPipeError()

        with pytest.raises(BrokenPipeError):
            highlight_stream(io.StringIO(SAMPLE), BrokenOutput(), ALWAYS)
