import sys

from rich.pretty import pprint

from clean_cli import *


@command("cmd", value=ArgType.BOOL, parameters=[
    parameter("bool", ArgType.BOOL, "b", descr="a presence-only switch"),
    parameter("int", ArgType.INT, "i", descr="a whole number"),
    parameter("float", ArgType.FLOAT, "f", descr="a decimal number"),
    parameter("string", ArgType.STRING, "s", descr="a single word"),
])
def callback(context):
    """print the bound invocation chain"""
    pprint(context)
    return context.terminal.get("int")


cli = Cli(callback, helper=True, shell=True, fancy=True, colorful=True)


if __name__ == '__main__':
    try:
        cli.exec(" ".join(sys.argv[1:]) or "cmd false --bool --int 42 --float 4.2 --string bla")
    except CommandException:
        # already rendered by the shell mode
        sys.exit(1)
