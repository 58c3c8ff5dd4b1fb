"""
Synopsis command layer: declare command trees for help rendering.

What this module provides
- Command: wraps a Python callable into a node of a command tree with:
  • Parameter discovery from the callable's defaults (Option, Flag, Cardinal).
  • Hierarchies (parent/child) to model sub-commands, with aliases and hidden nodes.
  • An extended descriptor (name, aliases, inline, postfix) registered for the
    command's own factory type at construction time.
  • Sub-command selection that surfaces unknown tokens as friendly faults.

- Factories:
  • command(...): create a Command or a decorator that produces one.

Quick start
    from synopsis import command, Option, Flag, Cardinal, render

    @command(postfix="See 'tool help list' for more.")
    def tool(*, help=Flag("-h", "--help", descr="Show usage information")):
        pass

    @tool.command(aliases=("l",), inline=True)
    def list(
        files=Cardinal("file", descr="A dex/apk/oat/odex file"),
        /,
        api=Option("-a", "--api", hints=("level",), descr="The numeric api level"),
    ):
        "Lists the contents of a dex file."

    print(render(tool), end="")

Design notes
- Declaration order of the callback's parameters is the declaration order used by
  the inline usage summary; the Options section sorts independently.
- The whole tree is immutable once declared: attributes are read-only views.
"""
import difflib
import functools
import inspect
import operator
import re
from inspect import Parameter

from .descriptors import _sanitize_descriptor, register, resolve, nameof, aliasesof, inlineof, postfixof
from .faults import *
from .parameters import Cardinal, Option, Flag
from .utils import *


class CommandType(type):
    """
    Metaclass that turns callbacks into introspectable Command classes.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.
    - Expose selected fields as read-only properties using mirror() for all names
      listed in __introspectable__.
    - For factory-backed classes (one per Command instance): register the
      instance's extended descriptor for that class and seal it against subclassing.

    Options (metaclass construction-time)
    - factory: when True, the resulting class represents one concrete Command.
    - descriptor: Descriptor registered for the factory-backed class.
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
            } | ({
                "__module__": "dynamic-factory::commands",
            } if options.get("factory", False) else {}) | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(name='list', aliases=('l',), ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("factory", False):
            register(self, options["descriptor"])

            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                """
                Disallow subclassing of factory-backed Command classes.
                """
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _process_source(cls, metadata):
    """
    Introspect the command callback and materialize its parameter declarations.

    Responsibilities
    - Resolve each callback parameter's default into a declaration (Option, Flag or Cardinal).
    - Keep Option/Flag declarations in declaration (signature) order in metadata["parameters"].
    - Store the single Cardinal, if any, in metadata["main"].

    Errors
    - TypeError on non-inspectable callbacks, parameters without a declaration default,
      a second Cardinal, or a display name used by two parameters.
    """
    parameters = metadata["parameters"] = []
    metadata["main"] = None
    names = set()

    try:
        signature = inspect.signature(metadata["callback"])
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'callback' must be callable") from None
    except ValueError:
        raise ValueError(f"{cls.__typename__} 'callback' must be an inspectable callable") from None

    def _resolve_parameter(x):
        """
        Return the concrete declaration (Option|Flag|Cardinal) from a hook-bearing default.
        """
        if sum((
            hasattr(x, "__option__") and callable(x.__option__),
            hasattr(x, "__flag__") and callable(x.__flag__),
            hasattr(x, "__cardinal__") and callable(x.__cardinal__),
        )) != 1:
            raise TypeError(f"{cls.__typename__} 'callback' parameter {name!r} default must be parameter-resoluble")

        if hasattr(x, "__option__"):
            if not isinstance(option := x.__option__(), Option):
                raise TypeError("__option__() non-option returned")
            return option
        elif hasattr(x, "__flag__"):
            if not isinstance(flag := x.__flag__(), Flag):
                raise TypeError("__flag__() non-flag returned")
            return flag
        elif hasattr(x, "__cardinal__"):
            if not isinstance(cardinal := x.__cardinal__(), Cardinal):
                raise TypeError("__cardinal__() non-cardinal returned")
            return cardinal

        raise RuntimeError("unreachable")

    for name, parameter in signature.parameters.items():
        if parameter.default is Parameter.empty:
            raise TypeError(f"{cls.__typename__} 'callback' parameter {name!r} must have a default")

        if isinstance(declaration := _resolve_parameter(parameter.default), Cardinal):
            if metadata["main"] is not None:
                raise TypeError(f"{cls.__typename__} 'callback' cardinal at parameter {name!r}, only one is allowed")
            metadata["main"] = declaration
            continue

        for display in declaration.names:
            if display in names:
                raise TypeError(f"{cls.__typename__} 'callback' name {display!r} is already in use")
            names.add(display)
        parameters.append(declaration)


def _process_strings(cls, metadata):
    """
    Normalize the description: str | Unset, trimmed, non-empty; Unset becomes None.
    """
    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _attach_to_parent(self, parent):
    """
    Register this command under its parent, enforcing unique names among siblings.
    """
    if getattr(parent, "_children", {}).setdefault(name := self.name, self) is self:
        return

    typeof = "subcommand" if parent.parent else "command"
    raise ValueError(f"{type(self).__typename__} {typeof} name {name!r} is already in use")


class Command(metaclass=CommandType):
    """
    Node of a declared command tree.

    Responsibilities
    - Introspection: exposes metadata (name, aliases, descr, parameters, ...) as
      read-only properties. name/aliases/inline/postfix are projections of the
      extended descriptor registered for this command's type.
    - Composition: parent/child hierarchies model sub-commands.
    - Selection: select(token) resolves a child by name or alias and reports
      unknown tokens through trigger().

    Lifecycle
    - Constructed from a callback; its signature is inspected and defaults are
      resolved to parameter declarations.
    - A factory type is generated per instance and the descriptor is registered
      for it; the command is then attached to its parent (if any).
    """

    __introspectable__ = (
        "descr",
        "hidden",
        "parameters",
        "main",
        "parent",
        "children",
        "shell",
        "fancy",
        "colorful",
    )

    # Parent is left out: its representation would recurse through its children.
    __displayable__ = (
        "name",
        "aliases",
        "descr",
        "hidden",
        "inline",
        "postfix",
        "parameters",
        "main",
        "children",
    )

    name = property(nameof)
    aliases = property(aliasesof)
    inline = property(inlineof)
    postfix = property(postfixof)

    @property
    def root(self):
        """
        Return the topmost command in the current command hierarchy.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the full ancestry from root to this command as a tuple.
        """
        path = [command := self]
        while command.parent:
            path.append(command := command.parent)
        return tuple(reversed(path))

    def __new__(
            cls,
            source,
            /,
            parent=Unset,
            name=Unset,
            aliases=(),
            descr=Unset,
            inline=False,
            postfix="",
            hidden=False,
            *,
            shell=Unset,
            fancy=Unset,
            colorful=Unset
    ):
        """
        Construct a Command from a callback.

        Parameters
        - parent: Command | Unset
          Parent under which to attach this command. If Unset, remains top-level.
        - name: str | Unset
          Canonical name; defaults to the callback's __name__.
        - aliases: Iterable[str]
          Alternative names accepted by select(); rendered as name(a,b).
        - descr: str | Unset
          One-line description; defaults to the first line of the callback docstring.
        - inline: bool
          List every visible parameter as [name] in the usage summary.
        - postfix: str
          Free-form text appended after every help section.
        - hidden: bool
          Exclude from the parent's help output (still selectable).
        - shell, fancy, colorful: bool | Unset
          Fault runtime flags. If Unset, values inherit from parent (or default False).

        Raises
        - TypeError/ValueError on invalid parent, metadata types, duplicate names,
          invalid callback/defaults, or name conflicts upon attachment.
        """
        if not isinstance(parent, Command | Unset):
            raise TypeError(f"{cls.__typename__} 'parent' must be a command")
        if not callable(source):
            raise TypeError(f"{cls.__typename__} 'callback' must be callable")

        summary = (inspect.getdoc(source) or "").strip().partition("\n")[0]
        metadata = {
            "callback": source,
            "descr": coalesce(descr, summary or Unset),
            "hidden": bool(hidden),
            "shell": bool(coalesce(shell, getattr(parent, "shell", False))),
            "fancy": bool(coalesce(fancy, getattr(parent, "fancy", False))),
            "colorful": bool(coalesce(colorful, getattr(parent, "colorful", False))),
            "parent": coalesce(parent),
            "children": {},
        }
        descriptor = _sanitize_descriptor(
            coalesce(name, getattr(source, "__name__", Unset)), aliases, inline, postfix,
        )
        _process_source(cls, metadata)
        _process_strings(cls, metadata)

        self = super().__new__(type(cls)(cls.__name__, (cls,), dict(cls.__dict__), factory=True, descriptor=descriptor))
        self._callback = metadata.pop("callback")
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        _attach_to_parent(self, self.parent)
        return self

    def command(self, source=Unset, /, *args, **kwargs):
        """
        Create and attach a sub-command under this command.

        Thin wrapper around command(...) that injects parent=self. Supports the
        direct form (self.command(callback, ...)) and the decorator form
        (@self.command(...)).
        """
        return command(source, self, *args, **kwargs)  # type: ignore[arg-type]

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command's runtime flags merged in.
        """
        trigger(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def select(self, token, /):
        """
        Return the sub-command named (or aliased) by token.

        Unknown tokens are reported as UnknownCommandError at the root and
        UnknownSubcommandError below it, with close visible names as suggestions.
        Outside shell mode the fault propagates as an exception.
        """
        if (child := resolve(self, token)) is not None:
            return child

        candidates = []
        for name, child in self.children.items():
            if not child.hidden:
                candidates.extend((name, *child.aliases))
        suggestions = difflib.get_close_matches(token, candidates, 5)

        route = " ".join(step.name for step in self.path)
        typeof = "subcommand" if self.parent else "command"
        try:
            hint = "did you mean %r? you can also run '%s help' to see available %ss" % (
                suggestions[0], route, typeof
            )
        except IndexError:
            hint = "run '%s help' to see available %ss" % (route, typeof)

        exception = UnknownSubcommandError if self.parent else UnknownCommandError
        code = FaultCode.UNKNOWN_SUBCOMMAND if self.parent else FaultCode.UNKNOWN_COMMAND

        self.trigger(exception(
            "unknown %s %r" % (typeof, token),
            title="unknown %s" % typeof,
            code=code,
            input=token,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(code),
        ))
        raise RuntimeError("unreachable")

    def __call__(self, *args, **kwargs):
        return self._callback(*args, **kwargs)


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it later.

    Invocation modes
    - Direct:    cmd = command(func, parent, name="x", ...)
    - Decorator: @command(name="x", ...) def func(...): ...

    Returns
    - Command | Callable[[Callable], Command]
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source) or isinstance(source, Command):
            raise TypeError("@command() must be applied to a callable")
        return Command(source, *args, **kwargs)

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "command",
)

# Remove the internal metaclass from the module namespace; not part of the public API.
del CommandType
