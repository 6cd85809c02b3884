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

"""Tests for the command line interface."""

import io
import logging

import pytest

from refinediff import __version__
from refinediff.ansi import BOLD
from refinediff.ansi import RESET
from refinediff.ansi import REVERSE
from refinediff.cli import main
from refinediff.errors import UnknownStateError

DIFF = "diff --git a/x b/x\n@@ -1 +1 @@\n-cat\n+dog\n"


def run(argv, text=DIFF):
    stdout = io.StringIO()
    code = main(argv, stdin=io.StringIO(text), stdout=stdout)
    return (code, stdout.getvalue())


class TestMain:
    """Tests for main()."""

    @pytest.fixture(autouse=True)
    def no_color_environment(self, monkeypatch):
        monkeypatch.delenv("REFINEDIFF_COLOR", raising=False)

    def test_color_always(self):
        (code, output) = run(["--color", "always"])

        assert code == 0
        assert output.startswith(BOLD + "diff --git a/x b/x" + RESET + "\n")
        assert output.count("\n") == 4

    def test_color_flag_without_mode(self):
        (code, output) = run(["-c"])

        assert code == 0
        assert BOLD in output

    def test_color_never(self):
        assert run(["--color", "never"]) == (0, DIFF)

    def test_highlights_a_pipe_by_default(self):
        """Without arguments, piped output is highlighted."""
        (code, output) = run([])

        assert code == 0
        assert output.startswith(BOLD + "diff --git a/x b/x" + RESET + "\n")
        assert REVERSE in output

    def test_auto_with_a_pipe(self):
        assert run(["--color", "auto"]) == (0, DIFF)

    def test_color_from_environment(self, monkeypatch):
        monkeypatch.setenv("REFINEDIFF_COLOR", "never")

        assert run([]) == (0, DIFF)

    def test_flag_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("REFINEDIFF_COLOR", "never")

        (code, output) = run(["-c"])

        assert code == 0
        assert BOLD in output

    def test_invalid_color_from_environment(self, monkeypatch):
        monkeypatch.setenv("REFINEDIFF_COLOR", "sometimes")

        with pytest.raises(SystemExit) as info:
            run([])

        assert info.value.code == 2

    def test_invalid_color(self):
        with pytest.raises(SystemExit) as info:
            run(["--color", "sometimes"])

        assert info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])

        assert info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_state(self, monkeypatch, caplog):

        def next_role(self, line):
            raise UnknownStateError("bogus", line)

        monkeypatch.setattr("refinediff.classifier.LineClassifier.next_role", next_role)

        with caplog.at_level(logging.ERROR):
            (code, _) = run(["--color", "always"])

        assert code == 1
        assert "bogus" in caplog.text

    def test_broken_pipe(self):

        class BrokenOutput(io.StringIO):

            def write(self, s):
                raise BrokenPipeError()

        assert main(["--color", "always"], stdin=io.StringIO(DIFF), stdout=BrokenOutput()) == 0

    def test_unreadable_input(self, caplog):

        class BrokenInput(object):

            def __iter__(self):
                raise OSError("boom")

        with caplog.at_level(logging.ERROR):
            code = main(["--color", "always"], stdin=BrokenInput(), stdout=io.StringIO())

        assert code == 1
        assert "boom" in caplog.text

    def test_terminal_input(self, monkeypatch, caplog):

        class Terminal(io.StringIO):

            def isatty(self):
                return True

        monkeypatch.setattr("sys.stdin", Terminal())

        with caplog.at_level(logging.ERROR):
            code = main([], stdout=io.StringIO())

        assert code == 1
        assert "Expected input from a pipe" in caplog.text

    def test_closed_input(self, monkeypatch, caplog):
        closed = io.StringIO()
        closed.close()

        monkeypatch.setattr("sys.stdin", closed)

        with caplog.at_level(logging.ERROR):
            code = main([], stdout=io.StringIO())

        assert code == 1
        assert "standard streams" in caplog.text

    def test_input_that_cannot_be_reconfigured(self, monkeypatch, caplog):
        monkeypatch.setattr("sys.stdin", io.StringIO(DIFF))

        with caplog.at_level(logging.ERROR):
            code = main([], stdout=io.StringIO())

        assert code == 1
        assert "standard streams" in caplog.text
