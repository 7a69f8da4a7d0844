"""
clean_cli entry point: bind a raw line against the command tree, then dispatch.

What this module provides
- Cli: the frozen set of top-level commands plus runtime options, with
  • parse(line): tokenize and bind, returning the Context (no dispatch),
  • exec(line): parse, then invoke the terminal command's handler once.

Binding, in order, for each command level
1. the next token must spell a command of the current level (name or alias,
   case-sensitive); otherwise CommandNotFoundError at the top level and
   ChildCommandNotFoundError below it.
2. when the command declares a positional type, the following token is bound
   as its value unless it starts with the parameter prefix or spells a child
   command (children always win).
3. prefixed tokens are parameters of this command: "--name" / "-n" resolve
   through the command's spelling table; flags bind true, every other
   parameter consumes the next token as its value. The last occurrence wins.
4. the first bare token after that starts the next level (a child command).
5. once tokens run out, the terminal command must own a handler.

Runtime options (keyword-only, fixed at construction)
- state: default caller state handle given to every Context.
- prefix: parameter prefix (default "-"; "--" is the doubled form).
- quoting: split lines with shlex (quoted multi-word tokens) instead of whitespace.
- helper: reserve "help" at the top level and below commands with children.
- shell, fancy, colorful: render faults to the console before raising them.
- console: rich Console used for help output and shell-mode faults.

Empty or all-whitespace lines are a no-op: parse() and exec() return None.
"""
import difflib
import logging
import re

from rich.console import Console

from .commands import Command, _route
from .context import Binding, Context, InvocationUnit
from .faults import *
from .helper import render
from .tokens import split
from .utils import *
from .values import ArgType, ArgValue, coerce

logger = logging.getLogger(__name__)

_PREFIX = re.compile(r"[^\w\s]+")


def _walk(commands, /):
    # every command of the tree once, even when a node is shared by several parents
    seen = set()
    stack = list(commands)
    while stack:
        if id(command := stack.pop()) in seen:
            continue
        seen.add(id(command))
        stack.extend(command.children.values())
        yield command


class Cli:
    """
    Frozen command registry plus the line-level entry points.

    Notes
    - Parsing keeps all per-call state in locals, so one Cli may be read by
      several threads; the caller serializes calls that share a state object.
    - The Cli never touches the state handle; it only hands it to the handler.
    """
    __introspectable__ = (
        "commands",
        "state",
        "prefix",
        "quoting",
        "helper",
        "shell",
        "fancy",
        "colorful",
    )

    commands = mirror("commands")
    state = mirror("state")
    prefix = mirror("prefix")
    quoting = mirror("quoting")
    helper = mirror("helper")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")
    console = mirror("console")

    def __init__(
            self,
            *commands,
            state=None,
            prefix="-",
            quoting=False,
            helper=False,
            shell=False,
            fancy=False,
            colorful=False,
            console=Unset
    ):
        if not isinstance(prefix, str):
            raise TypeError("cli 'prefix' must be a string")
        elif not _PREFIX.fullmatch(prefix):
            raise ValueError("cli 'prefix' must be made of punctuation characters only")

        for name, flag in (
                ("quoting", quoting),
                ("helper", helper),
                ("shell", shell),
                ("fancy", fancy),
                ("colorful", colorful),
        ):
            if not isinstance(flag, bool):
                raise TypeError(f"cli {name!r} must be a boolean")

        if not isinstance(console, Console | Unset):
            raise TypeError("cli 'console' must be a rich console")

        names, routes = _route(commands)

        # spellings starting with the prefix could never be reached
        for command in _walk(names.values()):
            for spelling in command.spellings:
                if spelling.startswith(prefix):
                    raise ValueError(f"command name or alias {spelling!r} cannot start with {prefix!r}")
            for parameter in command.parameters.values():
                for spelling in parameter.spellings:
                    if spelling.startswith(prefix):
                        raise ValueError(
                            f"command {command.name!r} parameter spelling {spelling!r} cannot start with {prefix!r}"
                        )

        self._commands = freeze(names)
        self._routes = freeze(routes)
        self._state = state
        self._prefix = prefix
        self._quoting = quoting
        self._helper = helper
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful
        self._console = Console() if console is Unset else console
        self._help = Command("help", handler=self._print_help, descr="show this help message")

    def _print_help(self, context):
        # the help unit is last; the level it describes is the unit right before it
        if len(context) > 1:
            self._render_help(context[-2].command, context.path[:-2])
        else:
            self._render_help(None)

    def _render_help(self, command, path=()):
        target = self if command is None or command is self._help else command
        self._console.print(render(target, path, prefix=self._prefix, fancy=self._fancy, colorful=self._colorful))

    def _route(self, owner, token):
        command = self._routes.get(token) if owner is None else owner.route(token)
        if command is None and self._helper and token == "help" and (owner is None or owner.children):
            return self._help
        return command

    def _lookup(self, command, token, index):
        doubled = self._prefix * 2
        spelling = token[len(doubled if token.startswith(doubled) else self._prefix):]

        if spelling and (parameter := command.lookup(spelling)) is not None:
            return parameter

        spellings = [
            (doubled if len(x) > 1 else self._prefix) + x
            for parameter in command.parameters.values() for x in parameter.spellings
        ]
        suggestions = difflib.get_close_matches(token, spellings, 5)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            if spellings:
                hint = "%r accepts %s" % (command.name, ", ".join(sorted(spellings)))
            else:
                hint = "%r does not accept any parameter" % command.name
        raise UnknownParameterError(
            "unknown parameter %r for %r at %s position" % (token, command.name, ordinal(index)),
            title="unknown parameter",
            code=FaultCode.UNKNOWN_PARAMETER,
            hint=hint,
            input=token,
            index=index,
            command=command,
            suggestions=tuple(suggestions),
        )

    def _unrouted(self, owner, token, index):
        routes = self._routes if owner is None else owner.routes
        suggestions = difflib.get_close_matches(token, routes.keys(), 5)
        kind = "command" if owner is None else "subcommand"
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            if routes:
                hint = "available %ss: %s" % (kind, ", ".join(sorted(routes)))
            elif owner is not None:
                hint = "%r takes no subcommands; remove %r" % (owner.name, token)
            else:
                hint = "no commands are registered"
        if self._helper and (owner is None or owner.children):
            hint += "; type 'help' to list them"

        if owner is None:
            if token.startswith(self._prefix):
                message = "expected a command at first position, got %r" % token
            else:
                message = "unknown command %r" % token
            return CommandNotFoundError(
                message,
                title="unknown command",
                code=FaultCode.COMMAND_NOT_FOUND,
                hint=hint,
                input=token,
                index=index,
                command=None,
                suggestions=tuple(suggestions),
            )
        return ChildCommandNotFoundError(
            "unknown subcommand %r for %r at %s position" % (token, owner.name, ordinal(index)),
            title="unknown subcommand",
            code=FaultCode.CHILD_COMMAND_NOT_FOUND,
            hint=hint,
            input=token,
            index=index,
            command=owner,
            suggestions=tuple(suggestions),
        )

    def _bind(self, tokens):
        """
        walk the tokens against the tree and return the list of InvocationUnit.

        positions in fault messages are 1-based token indexes.
        """
        units = []
        owner = None
        position = 0

        while position < len(tokens):
            spelling = tokens[position]
            position += 1
            if (command := self._route(owner, spelling)) is None:
                raise self._unrouted(owner, spelling, position)
            logger.debug("matched command %r at position %d", command.name, position)

            value = None
            if (
                command.value is not None and
                position < len(tokens) and
                not tokens[position].startswith(self._prefix) and
                self._route(command, tokens[position]) is None
            ):
                value = coerce(
                    command.value, tokens[position], input=tokens[position], index=position + 1, command=command
                )
                position += 1
                logger.debug("bound positional %r to command %r", value.value, command.name)

            bindings = {}
            while position < len(tokens) and tokens[position].startswith(self._prefix):
                token = tokens[position]
                position += 1
                parameter = self._lookup(command, token, position)
                if parameter.flag:
                    argument = ArgValue(ArgType.BOOL, True)
                elif position < len(tokens):
                    argument = coerce(parameter.type, tokens[position], input=token, index=position + 1, command=command)
                    position += 1
                else:
                    raise MissingValueError(
                        "parameter %r at %s position requires a %s value" % (token, ordinal(position), parameter.type),
                        title="missing value",
                        code=FaultCode.MISSING_VALUE,
                        hint="add a value after %s (for example: %s <%s>)" % (token, token, parameter.type),
                        input=token,
                        index=position,
                        parameter=parameter,
                        command=command,
                    )
                if parameter.name in bindings:
                    logger.debug("parameter %r given again, last value wins", parameter.name)
                bindings[parameter.name] = Binding(parameter, argument)

            units.append(InvocationUnit(command, spelling, value, bindings))
            owner = command

        return units

    def parse(self, line, /, state=Unset):
        """
        tokenize and bind one line without dispatching it.

        returns
        - Context for a non-empty line; None for an empty or all-whitespace line.

        raises
        - MalformedLineError, CommandNotFoundError, ChildCommandNotFoundError,
          UnknownParameterError, MissingValueError, TypeMismatchError, NoHandlerError.
        """
        if not (tokens := split(line, quoting=self._quoting)):
            logger.debug("empty line, nothing to do")
            return None

        units = self._bind(tokens)

        if (terminal := units[-1].command).handler is None:
            children = ", ".join(sorted(terminal.routes))
            raise NoHandlerError(
                "command %r is incomplete" % " ".join(unit.name for unit in units),
                title="incomplete command",
                code=FaultCode.NO_HANDLER,
                hint=("follow it with one of: %s" % children) if children else "%r cannot be run" % terminal.name,
                input=terminal.name,
                index=len(tokens),
                command=terminal,
            )

        return Context(units, state=coalesce(state, self._state), cli=self, line=line)

    def exec(self, line, /, state=Unset):
        """
        parse one line and invoke the terminal handler exactly once.

        returns
        - whatever the handler returns; None for an empty line.

        raises
        - the parse faults listed in parse().
        - ExecutionError: the handler raised; the original exception is its
          __cause__ and its `exception` option.

        in shell mode every fault is rendered to the console before it is
        raised; with the helper enabled, a parse fault is followed by the help
        of the level it happened at.
        """
        try:
            if (context := self.parse(line, state)) is None:
                return None
            return self._dispatch(context)
        except CommandException as fault:
            if self._shell:
                trigger(fault, shell=True, fancy=self._fancy, colorful=self._colorful, console=self._console)
                if self._helper and not isinstance(fault, ExecutionError):
                    self._render_help(fault.command)
            raise

    def _dispatch(self, context):
        handler = context.terminal.command.handler
        logger.debug("dispatching %r", " ".join(context.path))
        try:
            return handler(context)
        except Exception as exception:
            raise ExecutionError(
                "command %r failed: %s" % (" ".join(context.path), str(exception) or type(exception).__name__),
                title="execution error",
                code=FaultCode.EXECUTION_ERROR,
                hint="the command handler raised %s" % type(exception).__name__,
                input=context.line,
                exception=exception,
                command=context.terminal.command,
            ) from exception

    def __repr__(self):
        return "cli(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            object = getattr(self, name)
            yield name, tuple(object) if name == "commands" else object


__all__ = (
    "Cli",
)
