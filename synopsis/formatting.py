"""
Usage rendering: the "--help" text of a command tree node.

HelpFormatter(width).format(command) builds, in order:
- the usage summary: "usage: " + name, optionally " [--flag]" per visible
  parameter (inline commands), " [<command [<args>]]" when visible sub-commands
  exist and " [<hint>]" for the main parameter;
- an "Options:" section: visible parameters sorted by their dash-stripped first
  name, each with its names, arity-many <hint> placeholders and description,
  followed by the main parameter;
- a "Commands:" section: visible sub-commands in declaration order with their
  aliases and descriptions;
- the postfix text.

Everything flows through one IndentingWriter created per call, so rendering is a
pure function of the (immutable) tree and the width.
"""
import io

from .descriptors import descriptor
from .introspection import arity, hints, displaynames, sortkey
from .writers import IndentingWriter

# Right-hand columns indentation never reaches.
MARGIN = 5


class HelpFormatter:
    """
    Render usage text at a fixed wrap width (80 columns by default).
    """

    def __init__(self, width=80):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("formatter 'width' must be an integer")
        if width < 1:
            raise ValueError("formatter 'width' must be positive")
        self._width = width
        self._maxindent = max(0, width - MARGIN)

    @property
    def width(self):
        return self._width

    def format(self, command, /):
        """
        Return the full usage text of command.

        Raises MissingDescriptorError when command (or one of its visible
        children) has no extended descriptor.
        """
        writer = IndentingWriter(buffer := io.StringIO(), maxindent=self._maxindent, width=self._width)
        self._summary(writer, command)
        self._options(writer, command)
        self._commands(writer, command)
        self._postfix(writer, command)
        writer.flush()
        return buffer.getvalue()

    def summary(self, command, /):
        """
        Return the usage summary alone ("usage: name [...]").
        """
        writer = IndentingWriter(buffer := io.StringIO(), maxindent=self._maxindent, width=self._width)
        self._summary(writer, command)
        writer.flush()
        return buffer.getvalue()

    @staticmethod
    def _summary(writer, command):
        metadata = descriptor(command)

        writer.write("usage: ")
        writer.indent(2)

        writer.write(metadata.name)
        if metadata.inline:
            for parameter in command.parameters:
                if not parameter.hidden:
                    writer.write(" [")
                    writer.write(displaynames(parameter)[0])
                    writer.write("]")

        if any(not child.hidden for child in command.children.values()):
            writer.write(" [<command [<args>]]")

        if (main := command.main) is not None and not main.hidden:
            if names := hints(main):
                writer.write(" [<")
                writer.write(names[0])
                writer.write(">]")
            else:
                writer.write(" [<args>]")

        writer.deindent(2)

    @staticmethod
    def _options(writer, command):
        if not command.parameters and command.main is None:
            return

        writer.write("\n\nOptions:")
        writer.indent(2)
        for parameter in sorted(command.parameters, key=sortkey):
            if parameter.hidden:
                continue
            writer.write("\n")
            writer.indent(4)
            writer.write(",".join(displaynames(parameter)))
            names = hints(parameter)
            for index in range(arity(parameter)):
                writer.write(" ")
                if index < len(names):
                    writer.write("<")
                    writer.write(names[index])
                    writer.write(">")
                else:
                    writer.write("<arg>")
            if parameter.descr:
                writer.write(" - ")
                writer.write(parameter.descr)
            writer.deindent(4)

        # The main parameter follows the named ones directly, without a separator.
        if (main := command.main) is not None and not main.hidden:
            writer.write("\n")
            writer.indent(4)
            if names := hints(main):
                writer.write("<")
                writer.write(names[0])
                writer.write(">")
            else:
                writer.write("<args>")
            if main.descr:
                writer.write(" - ")
                writer.write(main.descr)
            writer.deindent(4)
        writer.deindent(2)

    @staticmethod
    def _commands(writer, command):
        if not command.children:
            return

        writer.write("\n\nCommands:")
        writer.indent(2)
        for name, child in command.children.items():
            if child.hidden:
                continue
            writer.write("\n")
            writer.indent(4)
            writer.write(name)
            if aliases := descriptor(child).aliases:
                writer.write("(")
                writer.write(",".join(aliases))
                writer.write(")")
            if child.descr is not None:
                writer.write(" - ")
                writer.write(child.descr)
            writer.deindent(4)
        writer.deindent(2)

    @staticmethod
    def _postfix(writer, command):
        if postfix := descriptor(command).postfix:
            writer.write("\n\n")
            writer.write(postfix)


def render(command, /, width=80):
    """
    Return the usage text of command wrapped at width columns.
    """
    return HelpFormatter(width).format(command)


__all__ = (
    "HelpFormatter",
    "render",
)
