"""
Synopsis parameter layer: declarations of what a command accepts.

What this module provides
- Option: named, valued parameter (e.g., -a/--api <level>). Consumes one token by default.
- Flag: named, boolean parameter (e.g., -h/--help). Consumes no token by default.
- Cardinal: the main (positional) parameter of a command, at most one per command.

Shared metadata
- names: ordered display names (Option/Flag). The first name is significant: it is the
  one shown in the inline usage summary and the one the Options section sorts by.
- arity: Unset | int (>= 0). Explicit number of argument tokens; overrides the kind default.
- hints: ordered argument-name hints rendered as <hint> placeholders. May be shorter than
  the arity; missing slots render as a generic placeholder.
- descr: Unset | str (short help). Non-empty when provided; Unset becomes None.
- hidden: bool (suppresses the parameter from every help section).

Invariants
- Declarations are sanitized eagerly and immutable after construction; properties are read-only.
- Names keep declaration order (no set normalization): rendering depends on it.
"""
import functools
import operator
import re
from collections.abc import Iterable

from .utils import *


class ParameterType(type):
    """
    Metaclass giving parameter declarations their introspection surface.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens), used
      in diagnostics ("option names cannot be empty").
    - Expose every name listed in __introspectable__ as a read-only property via mirror().
    - Provide stable __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(names=('-a', '--api'), arity=None, hints=('level',), ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the fields every declaration shares ('descr', 'hints').

    - descr: Unset → None; a string must be non-empty after trimming.
    - hints: iterable of non-empty strings (trimmed, whitespace-free), kept in order.

    Raises
    - TypeError: when 'descr' is not a string or 'hints' is not an iterable of strings.
    - ValueError: when a string is empty after trimming or a hint contains whitespace.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    if isinstance(metadata["hints"], str) or not isinstance(metadata["hints"], Iterable):
        raise TypeError(f"{cls.__typename__} 'hints' must be an iterable of strings")
    hints = []
    for hint in metadata["hints"]:
        if not isinstance(hint, str):
            raise TypeError(f"{cls.__typename__} 'hints' must be an iterable of strings")
        elif not (hint := hint.strip()):
            raise ValueError(f"{cls.__typename__} 'hints' cannot contain empty strings")
        elif re.search(r"\s", hint):
            raise ValueError(f"{cls.__typename__} hint {hint!r} cannot contain whitespaces")
        hints.append(hint)
    metadata["hints"] = tuple(hints)


def _sanitize_named_metadata(cls, metadata, /):
    r"""
    Internal: validate display names and the arity override of named declarations.

    - names: at least one; each a whitespace-free string that is not made only of
      dashes (r"-*[^\s-]\S*"). Duplicates are rejected. Order is preserved.
    - arity: Unset or an integer >= 0 (booleans are rejected). Unset becomes None.
    """
    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    names = []
    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif not (name := name.strip()):
            raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
        elif not re.fullmatch(r"-*[^\s-]\S*", name):
            raise ValueError(f"{cls.__typename__} name {name!r} must be a whitespace-free word")
        elif name in names:
            raise ValueError(f"{cls.__typename__} names cannot contain duplicates")
        names.append(name)
    metadata["names"] = tuple(names)

    if not isinstance(arity := metadata["arity"], int | Unset) or isinstance(arity, bool):
        raise TypeError(f"{cls.__typename__} 'arity' must be an integer")
    if isinstance(arity, int) and arity < 0:
        raise ValueError(f"{cls.__typename__} 'arity' cannot be negative")
    metadata["arity"] = coalesce(arity)


class _Named(metaclass=ParameterType):
    """
    Common constructor for Option and Flag; the subclasses only differ by kind.
    """

    __introspectable__ = (
        "names",
        "arity",
        "hints",
        "descr",
        "hidden",
    )

    boolean = False

    def __new__(cls, *names, arity=Unset, hints=(), descr=Unset, hidden=False):
        metadata = {
            "names": names,
            "arity": arity,
            "hints": hints,
            "descr": descr,
            "hidden": bool(hidden),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_named_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __init_subclass__(cls, **options):
        if cls.__name__ not in ("Option", "Flag"):
            raise TypeError(f"type {cls.__base__.__name__!r} is not an acceptable base type")
        super().__init_subclass__(**options)


class Option(_Named):
    """
    Named, valued parameter specification.

    Option declares a named parameter that consumes argument tokens, e.g.
    Option("-a", "--api", hints=("level",), descr="The numeric api level").

    Parameters
    - names: one or more str, in display order ("-a", "--api").
    - arity: int (>= 0), optional. Number of tokens consumed; defaults to 1.
    - hints: Iterable[str]. Placeholder labels, one per consumed token.
    - descr: str, optional. Short description for the Options section.
    - hidden: bool. Suppress from help output.
    """

    def __option__(self):
        """
        Introspection hook: identify this declaration as an Option.
        """
        return self


class Flag(_Named):
    """
    Named, boolean parameter specification.

    Flag declares a presence-only switch such as Flag("-h", "-?", "--help").
    Its arity defaults to 0 (no placeholder is rendered); an explicit positive
    arity overrides that, e.g. for switches spelled "--debug true".
    """

    boolean = True

    def __flag__(self):
        """
        Introspection hook: identify this declaration as a Flag.
        """
        return self


class Cardinal(metaclass=ParameterType):
    """
    Main (positional) parameter specification.

    A command declares at most one Cardinal. It has no display names: help output
    shows it as a placeholder built from its first hint (<file>), or <args> when no
    hint is registered.

    Parameters
    - hints: str, in order. Only the first hint is rendered.
    - descr: str, optional. Description shown after the placeholder.
    - hidden: bool. Suppress from help output.
    """

    __introspectable__ = (
        "hints",
        "descr",
        "hidden",
    )

    boolean = False

    def __new__(cls, *hints, descr=Unset, hidden=False):
        metadata = {
            "hints": hints,
            "descr": descr,
            "hidden": bool(hidden),
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def __init_subclass__(cls, **options):
        raise TypeError(f"type {cls.__base__.__name__!r} is not an acceptable base type")

    def __cardinal__(self):
        """
        Introspection hook: identify this declaration as a Cardinal.
        """
        return self


__all__ = (
    # Public API surface for consumers of synopsis.parameters.
    "Option",
    "Flag",
    "Cardinal",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del ParameterType
