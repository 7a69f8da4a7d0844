"""
Per-call dispatch context.

Overview
- Binding: (parameter, value) pair recorded for one resolved parameter.
- InvocationUnit: one matched command of the chain, with its optional
  positional ArgValue and its parameter bindings keyed by canonical name.
- Context: the ordered chain of units (root-most first, terminal last) plus the
  caller's state handle. It is what a handler receives.

Lifecycle
- Units and contexts are created fresh by Cli.parse() for one line and are
  discarded once the handler returns. They only reference the registry; they
  never mutate it.
- The state handle is passed through untouched: the engine never inspects it,
  so whatever the handler needs to change must flow through it.
"""
from typing import NamedTuple

from .utils import *


class Binding(NamedTuple):
    parameter: object
    value: object


class InvocationUnit:
    """
    One matched command within a parsed chain.

    Properties
    - command: the matched Command.
    - name: the spelling that matched (the canonical name or a command alias).
    - value: the positional ArgValue, or None when none was bound.
    - parameters: read-only mapping canonical name → Binding.
    """
    __introspectable__ = (
        "name",
        "value",
        "parameters",
    )

    command = mirror("command")
    name = mirror("name")
    value = mirror("value")
    parameters = mirror("parameters")

    def __init__(self, command, name, /, value=None, parameters=()):
        self._command = command
        self._name = name
        self._value = value
        self._parameters = freeze(dict(parameters))

    def get(self, name, default=None, /):
        """
        return the raw Python value bound to a parameter, or `default`.

        `name` may be the canonical name or any alias of the parameter.
        """
        if (parameter := self._command.lookup(name)) is None:
            return default
        try:
            return self._parameters[parameter.name].value.value
        except KeyError:
            return default

    def __contains__(self, name):
        parameter = self._command.lookup(name)
        return parameter is not None and parameter.name in self._parameters

    def __repr__(self):
        return "invocation-unit(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


class Context:
    """
    Call context handed to the terminal command's handler.

    Properties
    - units: tuple of InvocationUnit, root-most first.
    - terminal: the last unit (the one whose handler runs).
    - path: the matched spellings, e.g. ("remote", "add").
    - state: the caller-supplied state handle (opaque to the engine).
    - cli: the Cli that produced this context.
    - line: the raw input line.
    """
    __introspectable__ = (
        "line",
        "units",
        "state",
    )

    units = mirror("units")
    state = mirror("state")
    cli = mirror("cli")
    line = mirror("line")

    def __init__(self, units, /, state=None, cli=None, line=""):
        if not (units := freeze(list(units))):
            raise ValueError("context must hold at least one invocation unit")
        self._units = units
        self._state = state
        self._cli = cli
        self._line = line

    @property
    def terminal(self):
        return self._units[-1]

    @property
    def path(self):
        return tuple(unit.name for unit in self._units)

    def __len__(self):
        return len(self._units)

    def __iter__(self):
        return iter(self._units)

    def __getitem__(self, index):
        return self._units[index]

    def __repr__(self):
        return "context(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "Binding",
    "InvocationUnit",
    "Context",
)
