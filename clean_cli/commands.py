"""
clean_cli command layer: declare the immutable command tree.

What this module provides
- Command: one node of the registry, with
  • an optional positional value type (ArgType),
  • named parameters (Parameter) resolved through a single collision-checked
    spelling table (every name and alias → one Parameter),
  • child commands resolved through a collision-checked routing table
    (every child name and command alias → one Command),
  • an optional handler, called with the dispatch Context.

- Factories and helpers:
  • command(...): create a Command, or a decorator that wraps a handler into one.

Core ideas
- Bottom-up construction: children exist before their parent, so a Command is
  complete (and frozen) the moment its constructor returns.
- Fail fast: every collision is detected while building, never while parsing.
- Every command declares at least a positional value, a handler or children.

Quick start
    from clean_cli import ArgType, Cli, command, parameter

    @command("greet", value=ArgType.STRING, parameters=[
        parameter("times", ArgType.INT, "t"),
        parameter("loud", ArgType.BOOL, "l"),
    ])
    def greet(context):
        unit = context.terminal
        text = unit.value.value  # the positional ArgValue
        for _ in range(unit.get("times", 1)):
            print(text.upper() if unit.get("loud") else text)

    Cli(greet).exec("greet world --times 2 -l")
"""
import inspect
import re
from collections.abc import Iterable

from .faults import DuplicateNameError, DuplicateAliasError
from .parameters import Parameter
from .utils import *
from .values import ArgType

_SPELLING = re.compile(r"\S+")


def _route(commands, /, owner="cli"):
    """
    Build the routing table of a set of sibling commands.

    Returns
    - (names, routes): canonical name → Command, and every spelling
      (name or alias) → Command.

    Raises
    - TypeError: an item is not a Command.
    - DuplicateNameError: two siblings share a name, or an alias collides with
      a sibling's name or alias.
    """
    names = {}
    routes = {}
    for child in commands:
        if not isinstance(child, Command):
            raise TypeError(f"{owner} children must be commands")
        if names.setdefault(child.name, child) is not child:
            raise DuplicateNameError(f"{owner} command name {child.name!r} is already in use")
        for spelling in child.spellings:
            if routes.setdefault(spelling, child) is not child:
                raise DuplicateNameError(f"{owner} command name or alias {spelling!r} is already in use")
    return names, routes


def _index(parameters, /, owner):
    """
    Build the spelling table of one command's parameters.

    Raises
    - TypeError: an item is not a Parameter.
    - DuplicateNameError: two parameters share a canonical name.
    - DuplicateAliasError: an alias collides with another parameter's name or alias.
    """
    names = {}
    spellings = {}
    for parameter in parameters:
        if not isinstance(parameter, Parameter):
            raise TypeError(f"command {owner!r} parameters must be parameters")
        if names.setdefault(parameter.name, parameter) is not parameter:
            raise DuplicateNameError(f"command {owner!r} parameter name {parameter.name!r} is already in use")
    for parameter in names.values():
        for spelling in parameter.spellings:
            if (other := spellings.setdefault(spelling, parameter)) is not parameter:
                raise DuplicateAliasError(
                    f"command {owner!r} parameter alias {spelling!r} of {parameter.name!r} "
                    f"collides with parameter {other.name!r}"
                )
    return names, spellings


class Command:
    """
    Immutable command node.

    Lifecycle
    - Built once (children first), then only read. The spelling and routing
      tables are snapshots, so the same Command can safely be shared by several
      parents or several Cli instances and read from several threads.

    Properties
    - name, aliases, descr: identity and help text.
    - value: ArgType of the positional value, or None when none is accepted.
    - parameters: canonical name → Parameter (every spelling resolves via lookup()).
    - spellings: the command's own name followed by its aliases.
    - children: canonical name → Command.
    - routes: every child spelling → Command.
    - handler: the callable invoked with the Context, or None.
    """
    __introspectable__ = (
        "name",
        "aliases",
        "descr",
        "value",
        "parameters",
        "children",
        "handler",
    )

    name = mirror("name")
    aliases = mirror("aliases")
    descr = mirror("descr")
    value = mirror("value")
    parameters = mirror("parameters")
    children = mirror("children")
    routes = mirror("routes")
    handler = mirror("handler")

    def __init__(self, name, /, value=Unset, parameters=(), children=(), handler=Unset, aliases=(), descr=Unset):
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        elif not _SPELLING.fullmatch(name):
            raise ValueError("command name must be a non-empty string without whitespace")

        if not isinstance(value, ArgType | Unset):
            raise TypeError(f"command {name!r} value must be an ArgType")

        if not callable(handler) and handler is not Unset:
            raise TypeError(f"command {name!r} handler must be callable")

        if isinstance(aliases, str) or not isinstance(aliases, Iterable):
            raise TypeError(f"command {name!r} aliases must be an iterable of strings")
        seen = {name}
        for alias in (aliases := tuple(aliases)):
            if not isinstance(alias, str) or not _SPELLING.fullmatch(alias):
                raise ValueError(f"command {name!r} aliases must be non-empty strings without whitespace")
            if alias in seen:
                raise DuplicateNameError(f"command {name!r} alias {alias!r} is already in use")
            seen.add(alias)

        if not isinstance(descr, str | Unset):
            raise TypeError(f"command {name!r} descr must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"command {name!r} descr cannot be empty")

        for kind, items in (("parameters", parameters), ("children", children)):
            if isinstance(items, str) or not isinstance(items, Iterable):
                raise TypeError(f"command {name!r} {kind} must be an iterable")

        parameters, spellings = _index(parameters, name)
        children, routes = _route(children, f"command {name!r}")

        if value is Unset and handler is Unset and not children:
            raise ValueError(f"command {name!r} needs a value, a handler or a subcommand")

        self._name = name
        self._aliases = freeze(aliases)
        self._descr = coalesce(descr)
        self._value = coalesce(value)
        self._parameters = freeze(parameters)
        self._lookup = freeze(spellings)
        self._children = freeze(children)
        self._routes = freeze(routes)
        self._handler = coalesce(handler)

    @property
    def spellings(self):
        """every accepted spelling of this command: the name first, then the aliases."""
        return (self._name, *self._aliases)

    def lookup(self, spelling, /):
        """return the parameter spelled `spelling` (name or alias), or None."""
        return self._lookup.get(spelling)

    def route(self, spelling, /):
        """return the child command spelled `spelling` (name or alias), or None."""
        return self._routes.get(spelling)

    def __repr__(self):
        return "command(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            object = getattr(self, name)
            # children are shown by name to keep deep trees readable
            yield name, tuple(object) if name == "children" else object


def command(source=Unset, /, *args, **kwargs):
    """
    Create a Command or return a decorator to build it from a handler.

    Invocation modes
    - Named decorator:
        @command("cmd", value=ArgType.BOOL, parameters=[...])
        def handler(context): ...
    - Bare decorator (name taken from the function):
        @command
        def status(context): ...
    - Direct:
        cmd = command(handler, name="cmd", children=[...])

    The handler's docstring becomes the description unless descr is given.

    Returns
    - Command | Callable[[Callable], Command]
    """
    def wrapper(handler, /, name=Unset):
        if not callable(handler):
            raise TypeError("@command() must be applied to a callable")
        options = dict(kwargs)
        options.setdefault("descr", inspect.getdoc(handler) or Unset)
        name = coalesce(name, options.pop("name", Unset))
        return Command(coalesce(name, getattr(handler, "__name__", Unset)), *args, handler=handler, **options)

    if isinstance(source, str):
        return lambda handler, /: wrapper(handler, source)
    if source is Unset:
        return wrapper
    return wrapper(source)


__all__ = (
    "Command",
    "command",
)
