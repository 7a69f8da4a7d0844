"""
Line tokenizer.

split(line) turns one raw REPL line into an ordered tuple of word tokens.

- default: runs of whitespace separate tokens; leading/trailing whitespace is
  dropped and an empty or all-whitespace line yields ().
- quoting=True: the line is split with shlex in POSIX mode, so "two words" and
  'two words' become single tokens and backslash escapes apply. An unbalanced
  quote raises MalformedLineError.
"""
import logging
import shlex

from .faults import FaultCode, MalformedLineError

logger = logging.getLogger(__name__)


def split(line, /, *, quoting=False, **options):
    if not isinstance(line, str):
        raise TypeError("split() argument must be a string")

    if not quoting:
        tokens = tuple(line.split())
    else:
        try:
            tokens = tuple(shlex.split(line, comments=False, posix=True))
        except ValueError as error:  # "No closing quotation" / "No escaped character"
            raise MalformedLineError(
                "cannot split the line: %s" % str(error).lower(),
                title="malformed line",
                code=FaultCode.MALFORMED_LINE,
                hint="close every quote you open, or escape it with a backslash",
                input=line,
                **options
            ) from None

    logger.debug("split %r into %d token(s)", line, len(tokens))
    return tokens


__all__ = (
    "split",
)
