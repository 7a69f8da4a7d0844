"""
Help rendering (rich-based, color-aware).

render(target) builds a renderable describing one level of the command tree:
- a usage line ("usage: remote add <string> [parameters]"),
- the command description when it has one,
- a "parameters" table: every spelling with its prefix ("--name" for long
  spellings, "-n" for single characters), the "<type>" and the description,
- a "commands" table: child names, their aliases and descriptions.

Rows are sorted by name so the output is stable. The target is a Command, or
a Cli (anything with a `commands` mapping) for the top level.

Palette keys can be overridden by the host through __main__.__styles__:
usage-label, program-name, parameters-title, parameter-name, parameter-type,
commands-title, command-name, description, panel-title.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .commands import Command


def _spelled(spelling, prefix):
    return (prefix if len(spelling) == 1 else prefix * 2) + spelling


def render(target, /, path=(), *, prefix="-", fancy=False, colorful=False):
    """
    build a help renderable for a Command or for the top level of a Cli.

    parameters
    - target: Command | Cli
    - path: names of the commands above `target` (used in the usage line).
    - prefix: the parameter prefix of the owning Cli.
    - fancy: wrap the result in a rounded Panel.
    - colorful: apply the palette; otherwise render plain text.
    """
    styles = defaultdict(str, {
        "usage-label": "bold #FF4D94",
        "program-name": "bold #FFFFFF",
        "parameters-title": "bold #FFFFFF",
        "parameter-name": "bold #A78BFA",
        "parameter-type": "#F59E0B",
        "commands-title": "bold #FFFFFF",
        "command-name": "bold #36C5F0",
        "description": "#9CA3AF",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        return Text(str(fragment or ""), styles[style] if colorful else "")

    if isinstance(target, Command):
        names = (*path, target.name)
        value = target.value
        parameters = target.parameters
        children = target.children
        descr = target.descr
    else:
        names = tuple(path)
        value = None
        parameters = {}
        children = target.commands
        descr = None

    usage = Text.assemble(text("usage", "usage-label"), ": ")
    usage.append(text(" ".join(names) or "<command>", "program-name"))
    if value is not None:
        usage.append(" <%s>" % value)
    if parameters:
        usage.append(" [parameters]")
    if children:
        usage.append(" <command>" if names else " ...")

    renders = [usage]

    if descr:
        renders.append(text(descr, "description"))

    if parameters:
        table = Table(box=None, show_header=False, padding=(0, 2, 0, 2))
        for parameter in sorted(parameters.values(), key=lambda x: x.name):
            spellings = Text(", ").join(
                text(_spelled(spelling, prefix), "parameter-name") for spelling in parameter.spellings
            )
            kind = text("" if parameter.flag else "<%s>" % parameter.type, "parameter-type")
            table.add_row(spellings, kind, text(parameter.descr, "description"))
        renders.append(Text.assemble(text("parameters", "parameters-title"), ":"))
        renders.append(table)

    if children:
        table = Table(box=None, show_header=False, padding=(0, 2, 0, 2))
        for name in sorted(children):
            child = children[name]
            label = Text(", ").join(text(spelling, "command-name") for spelling in child.spellings)
            table.add_row(label, text(child.descr, "description"))
        renders.append(Text.assemble(text("commands", "commands-title"), ":"))
        renders.append(table)

    renderable = Group(*renders)

    if fancy:
        renderable = Panel(
            renderable,
            box=ROUNDED,
            title=text("[ %s ]" % " ".join((*names, "help")).upper(), "panel-title"),
            title_align="left",
        )
    return renderable


__all__ = (
    "render",
)
