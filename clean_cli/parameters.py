"""
Named parameter specifications.

What this module provides
- Parameter: an immutable, named, typed parameter of a command, with zero or
  more aliases (alternate spellings resolved identically to the name).
- parameter(...): factory alias, handy in literal-style command declarations.

Metadata (sanitized on construction)
- name: non-empty string without whitespace (the canonical binding key).
- type: ArgType of the value (defaults to ArgType.STRING).
- aliases: iterable of spellings; each must differ from the name and from the
  other aliases (DuplicateAliasError otherwise).
- descr: Unset | str (short help), non-empty when provided.
- flag: presence-only switch. Defaults to True for ArgType.BOOL and False for
  every other type; only bool parameters may be flags.

Collisions between *different* parameters of one command are checked by the
owning Command, which keeps the single spelling → Parameter lookup table.
"""
import re
from collections.abc import Iterable

from .faults import DuplicateAliasError
from .utils import *
from .values import ArgType

_SPELLING = re.compile(r"\S+")


def _check_spelling(kind, spelling, /):
    if not isinstance(spelling, str):
        raise TypeError(f"parameter {kind} must be a string")
    if not _SPELLING.fullmatch(spelling):
        raise ValueError(f"parameter {kind} must be a non-empty string without whitespace")
    return spelling


class Parameter:
    """
    Immutable parameter specification.

    Notes
    - Identity matters: every spelling of one parameter maps to the same object
      in its command's lookup table, and bindings keep that object.
    - Fields are exposed as read-only properties (see utils.mirror()).
    """
    __introspectable__ = (
        "name",
        "type",
        "aliases",
        "descr",
        "flag",
    )

    name = mirror("name")
    type = mirror("type")
    aliases = mirror("aliases")
    descr = mirror("descr")
    flag = mirror("flag")

    def __init__(self, name, type=ArgType.STRING, /, aliases=(), descr=Unset, *, flag=Unset):
        name = _check_spelling("name", name)

        if not isinstance(type, ArgType):
            raise TypeError(f"parameter {name!r} type must be an ArgType")

        if isinstance(aliases, str) or not isinstance(aliases, Iterable):
            raise TypeError(f"parameter {name!r} aliases must be an iterable of strings")
        seen = {name}
        for alias in (aliases := tuple(aliases)):
            if _check_spelling("alias", alias) in seen:
                raise DuplicateAliasError(f"parameter {name!r} alias {alias!r} is already in use")
            seen.add(alias)

        if not isinstance(descr, str | Unset):
            raise TypeError(f"parameter {name!r} descr must be a string")
        elif isinstance(descr, str) and not (descr := descr.strip()):
            raise ValueError(f"parameter {name!r} descr cannot be empty")

        if not isinstance(flag, bool | Unset):
            raise TypeError(f"parameter {name!r} flag must be a boolean")
        elif flag and type is not ArgType.BOOL:
            raise TypeError(f"parameter {name!r} can be a flag only when its type is bool")

        self._name = name
        self._type = type
        self._aliases = freeze(aliases)
        self._descr = coalesce(descr)
        self._flag = coalesce(flag, type is ArgType.BOOL)

    @property
    def spellings(self):
        """every accepted spelling: the name first, then the aliases in declaration order."""
        return (self._name, *self._aliases)

    def __repr__(self):
        return "parameter(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


def parameter(name, type=ArgType.STRING, /, *aliases, descr=Unset, flag=Unset):
    """
    Build a Parameter with aliases given as extra positional arguments.

    Example
        parameter("int", ArgType.INT, "i")  # --int / -i
    """
    return Parameter(name, type, aliases, descr, flag=flag)


__all__ = (
    "Parameter",
    "parameter",
)
