"""
Line wrapping for option descriptions and other help text.

- LineWrapper(max=80, prefix="").wrap(text)
  Whitespace runs collapse to single spaces, leading and trailing whitespace
  is dropped, and a line break replaces the space before any word that would
  bring the line to max - 1 columns or more (printing into the last terminal
  column already wraps the cursor). Every output line starts with prefix and
  the result ends with exactly one newline. The non-breaking space (U+00A0)
  is part of a word.

- wrap(text): LineWrapper() with 80 columns and no prefix.

- flow(text, width, prefix="", file=None)
  Streams the words of text to file (stdout by default), breaking before a
  word that would reach width columns; the prefix counts toward the width.

Example
    >>> LineWrapper(max=20, prefix="| ").wrap("The  quick  brown  fox  jumped")
    '| The quick brown fox\\n| jumped\\n'
"""
import re
import sys

_BREAKS = re.compile(r"[^\S\u00a0]+")


def _words(text):
    return [word for word in _BREAKS.split(text) if word]


class LineWrapper:
    """
    Wraps text to a number of columns, prefixing every line.
    """
    __slots__ = ("_max", "_prefix")

    def __init__(self, max=80, prefix=""):
        if not isinstance(max, int):
            raise TypeError("LineWrapper 'max' must be an integer")
        if not isinstance(prefix, str):
            raise TypeError("LineWrapper 'prefix' must be a string")
        self._max = max if max > 0 else 80
        self._prefix = prefix

    @property
    def max(self):
        return self._max

    @property
    def prefix(self):
        return self._prefix

    def wrap(self, text, /):
        if not isinstance(text, str):
            raise TypeError("wrap() argument must be a string")

        limit = self._max - 1
        output = [self._prefix]
        columns = 0  # the first prefix is not counted

        for word in _words(text):
            if columns and columns + len(word) >= limit:
                output.append("\n" + self._prefix)
                columns = len(self._prefix)
            elif columns:
                output.append(" ")
                columns += 1
            output.append(word)
            columns += len(word)

        output.append("\n")
        return "".join(output)

    def __repr__(self):
        return f"line-wrapper(max={self._max!r}, prefix={self._prefix!r})"


_default = LineWrapper()


def wrap(text, /):
    """
    Wrap text to 80 columns without a prefix.
    """
    return _default.wrap(text)


def flow(text, width, prefix="", file=None):
    """
    Write text to file, word by word, wrapped to width columns.
    """
    if not isinstance(text, str):
        raise TypeError("flow() text must be a string")
    if file is None:
        file = sys.stdout

    columns = 0
    for word in text.split():
        if not columns:
            file.write(prefix + word)
            columns = len(prefix) + len(word)
        elif columns + len(word) >= width:
            file.write("\n" + prefix + word)
            columns = len(prefix) + len(word)
        else:
            file.write(" " + word)
            columns += 1 + len(word)

    if not columns:
        file.write(prefix)
    file.write("\n")


__all__ = (
    "LineWrapper",
    "wrap",
    "flow",
)
