"""
Help topics: the dispatcher behind a CLI's `help [<command>...]` command.

What this module provides
- Topic: a reserved deep-dive keyword and its explanatory text (e.g. an extended
  explanation of one option that does not fit an Options entry).
- show_help(root, topics): print the usage of the root, of each named
  sub-command, or the text of each reserved topic.
- helper(root, *topics): mount a ready-made `help` command on a root command.

Rules
- Reserved keywords are checked before command names, so a topic shadows a
  sub-command of the same name.
- Unknown tokens go through root.select(token): the same unknown-command fault a
  mistyped top-level command produces elsewhere.
"""
from collections.abc import Iterable
from typing import NamedTuple

from rich.console import Console

from .commands import command
from .formatting import render
from .parameters import Cardinal
from .utils import Unset, columns
from .writers import wrap


class Topic(NamedTuple):
    """
    Reserved help keyword.

    Fields
    - name: keyword typed after `help` (e.g. "register-info").
    - text: explanatory text; "\\n" separates lines that are wrapped independently.
    """
    name: str
    text: str


def _keywords(topics, /):
    """
    Internal: validate topics and index them by keyword, preserving order.
    """
    if isinstance(topics, str) or not isinstance(topics, Iterable):
        raise TypeError("help topics must be an iterable of topics")
    keywords = {}
    for topic in topics:
        if not isinstance(topic, Topic):
            raise TypeError("help topics must be an iterable of topics")
        if not isinstance(topic.name, str) or not isinstance(topic.text, str):
            raise TypeError("help topic name and text must be strings")
        if not topic.name.strip() or not topic.text.strip():
            raise ValueError("help topic name and text cannot be empty")
        if topic.name in keywords:
            raise ValueError(f"help topic {topic.name!r} is already in use")
        keywords[topic.name] = topic
    return keywords


def show_help(root, topics=(), /, *, keywords=(), width=Unset, console=Unset):
    """
    Print usage information for a command tree.

    Parameters
    - root: Command whose usage (or sub-commands) is shown.
    - topics: Iterable[str] of tokens typed after `help`; empty shows the root usage.
    - keywords: Iterable[Topic] of reserved deep-dive topics.
    - width: wrap column; defaults to the detected console width.
    - console: rich Console to print to; defaults to stdout.

    Raises
    - UnknownCommandError when a token names neither a topic nor a command (outside
      shell mode; in shell mode the fault is printed and the process exits).
    """
    if isinstance(topics, str) or not isinstance(topics, Iterable):
        raise TypeError("show_help() topics must be an iterable of strings")
    keywords = _keywords(keywords)
    width = columns() if width is Unset else width
    console = Console() if console is Unset else console

    topics = list(topics)
    if not topics:
        console.out(render(root, width), end="", highlight=False)
        return

    for token in topics:
        if not isinstance(token, str):
            raise TypeError("show_help() topics must be an iterable of strings")
        if token in keywords:
            for line in wrap(keywords[token].text, width):
                console.out(line, highlight=False)
        else:
            console.out(render(root.select(token), width), end="", highlight=False)


def helper(root, /, *topics, name="help", aliases=(), misspellings=("hlep",)):
    """
    Mount a `help` command (plus hidden misspelling twins) on root.

    The command takes the tokens to explain as its main parameter; calling it with
    a list of tokens dispatches to show_help(root, tokens, keywords=topics).

    Returns
    - the mounted help Command.
    """
    keywords = tuple(_keywords(topics).values())

    def help(commands=Cardinal(descr="If specified, only show the usage information for the given commands"), /):
        """Shows usage information"""
        # Called without tokens, the default is the declaration itself.
        show_help(root, () if isinstance(commands, Cardinal) else commands, keywords=keywords)

    mounted = command(help, root, name, aliases)
    for misspelling in misspellings:
        command(help, root, misspelling, hidden=True)
    return mounted


__all__ = (
    "Topic",
    "show_help",
    "helper",
)
