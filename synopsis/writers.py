"""
Wrapping, indenting text sink used by the help renderer.

IndentingWriter accumulates incremental writes into a pending line and forwards
finished lines to an underlying text stream.

Behavior
- indent(n) / deindent(n) move the current indentation level; the effective level
  is clamped to maxindent so deep nesting never eats the whole line.
- every new line, explicit ("\\n") or produced by wrapping, starts with the
  effective indentation. Indentation changes therefore apply from the next line on:
  writing "\\n", then indent(4), then text yields a hanging indent for the text's
  continuation lines only.
- as soon as the pending line exceeds the width it is broken at the last space
  that fits; words longer than the width are broken hard. Trailing blanks of a
  broken line are dropped, as are the leading blanks of its continuation.
- flush() writes the pending line, newline-terminated, when it holds any
  non-blank text.
"""
import io


class IndentingWriter:
    """
    Text sink wrapping at a fixed width with a stack-like indentation level.

    Parameters
    - stream: writable text stream (anything with write(str)).
    - maxindent: upper bound for the effective indentation (>= 0).
    - width: wrap column (> maxindent).
    """

    def __init__(self, stream, /, maxindent, width):
        if not hasattr(stream, "write") or not callable(stream.write):
            raise TypeError("writer 'stream' must be a writable text stream")
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("writer 'width' must be an integer")
        if not isinstance(maxindent, int) or isinstance(maxindent, bool):
            raise TypeError("writer 'maxindent' must be an integer")
        if not 0 <= maxindent < width:
            raise ValueError("writer 'maxindent' must be non-negative and lower than 'width'")
        self._stream = stream
        self._maxindent = maxindent
        self._width = width
        self._level = 0
        self._line = ""

    @property
    def width(self):
        return self._width

    @property
    def indentation(self):
        """
        Effective indentation (current level clamped to maxindent).
        """
        return min(self._level, self._maxindent)

    def indent(self, columns, /):
        if columns < 0:
            raise ValueError("indent() argument must be non-negative")
        self._level += columns

    def deindent(self, columns, /):
        if columns < 0:
            raise ValueError("deindent() argument must be non-negative")
        if columns > self._level:
            raise ValueError("deindent() cannot go below zero")
        self._level -= columns

    def write(self, text, /):
        if not isinstance(text, str):
            raise TypeError("write() argument must be a string")
        head, *lines = text.split("\n")
        self._append(head)
        for line in lines:
            self._stream.write(self._line + "\n")
            self._line = " " * self.indentation
            self._append(line)

    def flush(self):
        if self._line.strip():
            self._stream.write(self._line + "\n")
        self._line = ""
        if hasattr(self._stream, "flush"):
            self._stream.flush()

    def _append(self, text):
        self._line += text
        while len(self._line) > self._width:
            margin = len(self._line) - len(self._line.lstrip(" "))
            cut = self._line.rfind(" ", margin, self._width + 1)
            if cut == -1:
                head, rest = self._line[:self._width], self._line[self._width:]
            else:
                head, rest = self._line[:cut], self._line[cut + 1:]
            self._stream.write(head.rstrip(" ") + "\n")
            self._line = " " * self.indentation + rest.lstrip(" ")


def wrap(text, width, /):
    """
    Wrap free text on its breaks: each source line is wrapped on its own and keeps
    its leading indentation on the first segment only.

    Returns the list of output lines (blank source lines are preserved).
    """
    lines = []
    for source in text.split("\n"):
        writer = IndentingWriter(buffer := io.StringIO(), maxindent=0, width=width)
        writer.write(source)
        writer.flush()
        lines.extend(buffer.getvalue().splitlines() or [""])
    return lines


__all__ = (
    "IndentingWriter",
    "wrap",
)
