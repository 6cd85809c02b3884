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

"""Character level alignment of two texts.

The edit script itself comes from difflib. Its opcodes, of the form (tag, start1, end1, start2, end2), may be
post-processed by opcode filters before being translated into the runs that the refiner consumes.
"""

from abc import ABCMeta
from abc import abstractmethod
from collections import namedtuple
from difflib import SequenceMatcher

# A run of characters found in both texts.
Common = namedtuple("Common", ["run"])

# A run of characters found only in the old text.
OldOnly = namedtuple("OldOnly", ["run"])

# A run of characters found only in the new text.
NewOnly = namedtuple("NewOnly", ["run"])

#----------------------------------------------------------------------------------------------------------------------#
# Opcode post-processing filters.                                                                                      #
#----------------------------------------------------------------------------------------------------------------------#

class OpcodeFilter(object, metaclass=ABCMeta):
    """An abstract base class for implementing edit script opcode post-processing filters.
    """

    @abstractmethod
    def __call__(self, opcodes, s1, s2):
        """Post-processes the given edit script opcodes arising from the difference of two strings.

        Args:
            opcodes: The opcodes.
            s1: The first string.
            s2: The second string.

        Returns:
            The post-processed opcodes.
        """

class IdentityFilter(OpcodeFilter):
    """An implementation of OpcodeFilter that simply returns its input.
    """

    def __call__(self, opcodes, s1, s2):
        return opcodes

class ChainFilter(OpcodeFilter):
    """An implementation of OpcodeFilter that applies filters in order, with each filter's output being used as its
    successor's input.
    """

    def __init__(self, *filters):
        """Default constructor.

        Args:
            filters: The filters to chain, declared in order of application.
        """
        super(ChainFilter, self).__init__()

        self.filters = list(filters)

    def __call__(self, opcodes, s1, s2):

        for f in self.filters:
            opcodes = f(opcodes, s1, s2)

        return opcodes

class MergeFilter(OpcodeFilter):
    """An implementation of OpcodeFilter that drops empty opcodes and merges neighbors that can be expressed as one.
    Neighbors with equal tags merge into their common tag, and any two neighboring difference opcodes merge into a
    "replace" opcode.
    """

    def __call__(self, opcodes, s1, s2):

        merged = []

        for opcode in opcodes:

            (_, start1, end1, start2, end2) = opcode

            if start1 == end1 and start2 == end2:
                continue

            if merged:

                combined = MergeFilter.merge(merged[-1], opcode)

                if combined:
                    merged[-1] = combined
                    continue

            merged.append(opcode)

        return merged

    @staticmethod
    def merge(left, right):
        """Attempts to merge two neighboring opcodes.

        Args:
            left: The left opcode.
            right: The right opcode.

        Returns:
            The merged opcode, or None if the two can't be merged.
        """

        (tag_left, start_left1, end_left1, start_left2, end_left2) = left
        (tag_right, start_right1, end_right1, start_right2, end_right2) = right

        assert end_left1 == start_right1 and end_left2 == start_right2, \
            "The opcode boundary invariant does not hold."

        if tag_left == tag_right:
            return (tag_left, start_left1, end_right1, start_left2, end_right2)
        elif tag_left != "equal" and tag_right != "equal":
            return ("replace", start_left1, end_right1, start_left2, end_right2)
        else:
            return None

class ShiftFilter(MergeFilter):
    """An implementation of OpcodeFilter for aligning lone insertions and deletions with semantically coherent
    locations, as described by http://neil.fraser.name/writing/diff/ in Section 3.2.2. A difference region sandwiched
    between two equality regions can often slide back and forth without changing what it means; this filter slides it
    to where its boundaries score highest, with three points for line breaks, two for other whitespace and one for
    punctuation. Consuming an entire neighboring equality region scores highest of all.
    """

    def __call__(self, opcodes, s1, s2):

        opcodes = list(opcodes)

        for i in range(1, len(opcodes) - 1):

            (tag_left, start_left1, end_left1, start_left2, end_left2) = opcodes[i - 1]
            (tag_middle, start_middle1, end_middle1, start_middle2, end_middle2) = opcodes[i]
            (tag_right, start_right1, end_right1, start_right2, end_right2) = opcodes[i + 1]

            if not (tag_left == "equal" and tag_middle in ("delete", "insert") and tag_right == "equal"):
                continue

            if tag_middle == "delete":
                offset = ShiftFilter.get_best_offset(s1, start_left1, start_middle1, end_middle1, end_right1)
            else:
                offset = ShiftFilter.get_best_offset(s2, start_left2, start_middle2, end_middle2, end_right2)

            if offset == 0:
                continue

            opcodes[i - 1] = (tag_left, start_left1, end_left1 + offset, start_left2, end_left2 + offset)
            opcodes[i] = (tag_middle,
                          start_middle1 + offset, end_middle1 + offset,
                          start_middle2 + offset, end_middle2 + offset)
            opcodes[i + 1] = (tag_right, start_right1 + offset, end_right1, start_right2 + offset, end_right2)

        # Equality regions may have been consumed entirely, leaving difference regions next to each other.
        return super(ShiftFilter, self).__call__(opcodes, s1, s2)

    @staticmethod
    def get_best_offset(s, start_left, start_middle, end_middle, end_right):
        """Gets the best alignment for the given difference region over its respective string.

        Args:
            s: The string.
            start_left: The left start index.
            start_middle: The middle start index (= the left end index).
            end_middle: The middle end index (= the right start index).
            end_right: The right end index.

        Returns:
            The best alignment offset relative to the middle start index.
        """

        length = end_middle - start_middle

        lowest = start_middle

        while lowest > start_left and s[lowest - 1] == s[lowest - 1 + length]:
            lowest -= 1

        highest = start_middle

        while highest + length < end_right and s[highest] == s[highest + length]:
            highest += 1

        (best_start, best_key) = (start_middle, None)

        for start in range(lowest, highest + 1):

            if start == start_left:
                start_score = 5
            else:
                start_score = ShiftFilter.get_score(s[start - 1])

            if start + length == end_right:
                end_score = 5
            else:
                end_score = ShiftFilter.get_score(s[start + length])

            # Prefer the better of the two boundaries first, then the better start boundary.
            score = (start_score, end_score)
            key = (sorted(score, reverse=True), score)

            if best_key is None or key > best_key:
                (best_start, best_key) = (start, key)

        return best_start - start_middle

    @staticmethod
    def get_score(c):
        """Scores a character adjacent to a difference region boundary.

        Args:
            c: The character.

        Returns:
            The score.
        """

        if c == "\n":
            return 3
        elif c.isspace():
            return 2
        elif not (c.isalnum() or c == "_"):
            return 1
        else:
            return 0

identity_filter = IdentityFilter()
merge_filter = MergeFilter()
shift_filter = ShiftFilter()

#----------------------------------------------------------------------------------------------------------------------#
# Alignment.                                                                                                           #
#----------------------------------------------------------------------------------------------------------------------#

def get_opcodes(s1, s2, opcode_filter=identity_filter):
    """Computes the edit script opcodes transforming one string into another.

    Args:
        s1: The first string.
        s2: The second string.
        opcode_filter: The OpcodeFilter to use for post-processing.

    Returns:
        A list of opcodes of the form (tag, start1, end1, start2, end2), with tags among {"equal", "delete", "insert",
        "replace"}.
    """

    matcher = SequenceMatcher(None, s1, s2, autojunk=False)

    return opcode_filter(matcher.get_opcodes(), s1, s2)

def align(old_text, new_text, opcode_filter=identity_filter):
    """Aligns two texts character by character.

    Args:
        old_text: The old text.
        new_text: The new text.
        opcode_filter: The OpcodeFilter to use for post-processing.

    Returns:
        A list of Common, OldOnly and NewOnly runs. Concatenating the Common and OldOnly runs yields the old text, and
        concatenating the Common and NewOnly runs yields the new text.
    """

    runs = []

    for (tag, start1, end1, start2, end2) in get_opcodes(old_text, new_text, opcode_filter):

        old_run = old_text[start1:end1]
        new_run = new_text[start2:end2]

        if tag == "equal":

            assert old_run == new_run, "Equality regions of the old and new texts do not match."

            runs.append(Common(old_run))

        elif tag in ("delete", "insert", "replace"):

            if old_run:
                runs.append(OldOnly(old_run))

            if new_run:
                runs.append(NewOnly(new_run))

        else:
            raise ValueError("Invalid opcode tag {0!r}.".format(tag))

    return runs
