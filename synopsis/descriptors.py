"""
Command metadata accessor: extended descriptors and sub-command resolution.

What this module provides
- Descriptor: the renderer-specific metadata of a command type
  (name, aliases, inline, postfix).
- A registry keyed by command type, populated at declaration time:
  • register(cls, descriptor): explicit registration.
  • @extended(...): class decorator for command classes declared by hand.
  • Command construction registers its own factory type automatically.
- descriptor(command): plain lookup; raises MissingDescriptorError when the
  command's type (or any of its bases) carries no descriptor.
- nameof / aliasesof / inlineof / postfixof: projections of the same descriptor.
- resolve(parent, token): child by exact name, then by alias; None when unknown.

Notes
- The registry holds weak references to types, so per-instance factory types
  disappear together with their commands.
"""
import weakref
from collections.abc import Iterable
from typing import NamedTuple

from .faults import MissingDescriptorError
from .utils import rename

_registry = weakref.WeakKeyDictionary()


class Descriptor(NamedTuple):
    """
    Extended, immutable metadata of a command type.

    Fields
    - name: canonical command name.
    - aliases: alternative names, in declaration order.
    - inline: when True, the usage summary lists every visible parameter as [name].
    - postfix: free-form text appended after every help section ("" for none).
    """
    name: str
    aliases: tuple[str, ...] = ()
    inline: bool = False
    postfix: str = ""


def _sanitize_descriptor(name, aliases, inline, postfix, /):
    """
    Internal: validate descriptor fields and build the immutable Descriptor.

    Raises
    - TypeError: when a field has the wrong type.
    - ValueError: when the name or an alias is empty or contains whitespace, or
      when aliases repeat each other or the name.
    """
    if not isinstance(name, str):
        raise TypeError("descriptor 'name' must be a string")
    elif not (name := name.strip()) or len(name.split()) != 1:
        raise ValueError("descriptor 'name' must be a non-empty word")

    if isinstance(aliases, str) or not isinstance(aliases, Iterable):
        raise TypeError("descriptor 'aliases' must be an iterable of strings")
    seen = [name]
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError("descriptor 'aliases' must be an iterable of strings")
        elif not (alias := alias.strip()) or len(alias.split()) != 1:
            raise ValueError("descriptor 'aliases' must be non-empty words")
        elif alias in seen:
            raise ValueError(f"descriptor alias {alias!r} is already in use")
        seen.append(alias)

    if not isinstance(postfix, str):
        raise TypeError("descriptor 'postfix' must be a string")

    return Descriptor(name, tuple(seen[1:]), bool(inline), postfix)


def register(cls, descriptor, /):
    """
    Attach a descriptor to a command type.

    A type is registered once; descriptors are immutable after declaration.
    """
    if not isinstance(cls, type):
        raise TypeError("register() first argument must be a type")
    if not isinstance(descriptor, Descriptor):
        raise TypeError("register() second argument must be a descriptor")
    if cls in _registry:
        raise ValueError(f"type {cls.__qualname__!r} already has a descriptor")
    _registry[cls] = descriptor
    return cls


def extended(name, /, aliases=(), inline=False, postfix=""):
    """
    Class decorator registering a descriptor for a hand-written command class.

    Example
        @extended("list", aliases=("l", "ls"), postfix="See 'list vtables'.")
        class ListCommand: ...
    """
    descriptor = _sanitize_descriptor(name, aliases, inline, postfix)

    @rename("extended")
    def wrapper(cls, /):
        return register(cls, descriptor)

    return wrapper


def descriptor(command, /):
    """
    Return the extended descriptor of a command.

    Raises
    - MissingDescriptorError: the command type was declared without one.
    """
    for cls in type(command).__mro__:
        try:
            return _registry[cls]
        except KeyError:
            continue
    raise MissingDescriptorError(type(command))


def nameof(command, /):
    return descriptor(command).name


def aliasesof(command, /):
    return descriptor(command).aliases


def inlineof(command, /):
    return descriptor(command).inline


def postfixof(command, /):
    return descriptor(command).postfix


def resolve(parent, token, /):
    """
    Look up a sub-command of parent by name or alias.

    The exact child name is tried first; then every child's aliases are scanned in
    insertion order. Hidden children resolve too. Returns None when nothing matches:
    an unknown token is an expected outcome (e.g. `help <unknown>`), not an error.
    """
    children = parent.children
    if token in children:
        return children[token]
    for child in children.values():
        if token in aliasesof(child):
            return child
    return None


__all__ = (
    "Descriptor",
    "register",
    "extended",
    "descriptor",
    "nameof",
    "aliasesof",
    "inlineof",
    "postfixof",
    "resolve",
)
