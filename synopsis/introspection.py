"""
Parameter introspection: the few derived facts help rendering needs.

- arity(parameter): number of argument tokens the parameter consumes.
- hints(parameter): registered argument-name hints, possibly fewer than the arity.
- displaynames(parameter): ordered display names.
- sortkey(parameter): first display name without its leading dashes.

These functions only read the declaration; they accept any object exposing the same
attributes as Option/Flag/Cardinal (names, arity, hints, boolean).
"""
from .utils import dedash


def arity(parameter, /):
    """
    Return how many argument tokens a parameter consumes.

    rules
    - an explicit, positive arity wins.
    - otherwise boolean parameters (flags) consume 0 tokens and all others 1.
    """
    if (explicit := getattr(parameter, "arity", None)) and explicit > 0:
        return explicit
    return 0 if getattr(parameter, "boolean", False) else 1


def hints(parameter, /):
    """
    Return the registered argument-name hints, or an empty tuple.
    """
    return tuple(getattr(parameter, "hints", None) or ())


def displaynames(parameter, /):
    """
    Return the ordered display names of a named parameter.
    """
    return tuple(parameter.names)


def sortkey(parameter, /):
    # "--bootclasspath", "-a" and "--classpath" order as a, bootclasspath, classpath
    return dedash(displaynames(parameter)[0])


__all__ = (
    "arity",
    "hints",
    "displaynames",
    "sortkey",
)
