"""
clean_cli faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  or dispatch failure. Codes are grouped by domain to keep copy consistent and
  make logs/searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased, and actionable way through rich.
- DuplicateNameError / DuplicateAliasError: build-time structural errors. They
  are plain ValueError subclasses: a bad registry is a programming error and
  never reaches the renderer.
- trigger(): central entry point to surface a fault (raise, or print in shell mode).

UX goals
- Position-first messages: every token-related message includes the ordinal
  position of the offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- Cli.parse() raises faults directly. Cli.exec() in shell mode first renders
  them through trigger(fault, shell=True, ...) and then raises them all the same.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping (by high-level domain)
    - routing (111xx)
      • COMMAND_NOT_FOUND, CHILD_COMMAND_NOT_FOUND
    - parameters (112xx)
      • UNKNOWN_PARAMETER, MISSING_VALUE
    - values (113xx)
      • TYPE_MISMATCH
    - dispatch (114xx)
      • NO_HANDLER, EXECUTION_ERROR
    - input (115xx)
      • MALFORMED_LINE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors ---
    COMMAND_NOT_FOUND           = 11101
    CHILD_COMMAND_NOT_FOUND     = 11102

    # --- parameter errors ---
    UNKNOWN_PARAMETER           = 11201
    MISSING_VALUE               = 11202

    # --- value errors ---
    TYPE_MISMATCH               = 11301

    # --- dispatch errors ---
    NO_HANDLER                  = 11401
    EXECUTION_ERROR             = 11402

    # --- input errors ---
    MALFORMED_LINE              = 11501

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _option(name, /):
    # read-only accessor for one of the fault options
    return property(lambda self: self.options.get(name), doc=f"the {name!r} option of this fault")


class CommandException(Exception):
    """
    base class of every parse-time and dispatch-time fault.

    options
    - title, code, hint: rendering metadata (always present for built-in faults).
    - input / index: the offending token and its 1-based position, when relevant.
    - command: the Command whose level the fault belongs to (None at the top level).
    - suggestions: close spellings for unknown commands and parameters.
    - shell, fancy, colorful, console: rendering flags merged in by trigger().
    """

    title = _option("title")
    code = _option("code")
    hint = _option("hint")
    input = _option("input")
    index = _option("index")
    command = _option("command")
    suggestions = _option("suggestions")

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else type(self).__name__

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), styles[style] if colorful else "")

        prog = text(getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "cli"), "prog-name")
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, "code"),
            " | ",
            text(str(self.title or type(self).__name__).title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")

        renders = [message]
        if self.hint:
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        (self.options.get("console") or console).print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        replaced = type(self)(self.message, **{**self.options, **overrides})
        replaced.__cause__ = self.__cause__
        return replaced


class MalformedLineError(CommandException): ...
class CommandNotFoundError(CommandException): ...
class ChildCommandNotFoundError(CommandException): ...
class NoHandlerError(CommandException): ...
class UnknownParameterError(CommandException): ...


class MissingValueError(CommandException):
    parameter = _option("parameter")


class TypeMismatchError(CommandException):
    expected = _option("expected")
    token = _option("token")


class ExecutionError(CommandException):
    """
    a handler raised; the original exception is kept as `exception` and as __cause__.
    """
    exception = _option("exception")


class DuplicateNameError(ValueError):
    """two sibling commands or two parameters of one command share a name."""


class DuplicateAliasError(ValueError):
    """a parameter alias collides with another spelling inside the same command."""


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    (fault.__replace__(**options) if options else fault).__trigger__()


__all__ = (
    "CommandException",
    "MalformedLineError",
    "CommandNotFoundError",
    "ChildCommandNotFoundError",
    "UnknownParameterError",
    "MissingValueError",
    "TypeMismatchError",
    "NoHandlerError",
    "ExecutionError",
    "DuplicateNameError",
    "DuplicateAliasError",
    "FaultCode",
    "trigger",
)
