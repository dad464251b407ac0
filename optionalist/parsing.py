"""
parse(): the public entry point.

Pipeline
- normalize the schema (schema mistakes raise TypeError/ValueError right away),
- build the flag table,
- scan the tokens,
- finalize into Options or Alone.

When the command settings ask for it (show_usage_on_error), a usage mistake
prints "<message>", a blank line and the help text to stderr, then exits with
status 1. Otherwise the UsageError propagates to the caller.
"""
import sys
from collections.abc import Iterable

from .aliases import build
from .faults import UsageError, trigger
from .helptext import render
from .metadata import lookup
from .results import finalize
from .scanner import scan
from .schema import normalize
from .utils import *


def parse(schema, tokens=Unset, /, *, metadata=Unset):
    """
    Parse command-line tokens against a schema.

    Parameters
    - schema: option schema (see optionalist.schema).
    - tokens: iterable of strings; defaults to sys.argv[1:].
    - metadata: program (name, version) for the help banner. Defaults to
      lookup() (run lazily, when help is rendered); None disables it.

    Returns
    - Options, or Alone when an alone option was given.

    Raises
    - TypeError / ValueError: the schema (or the tokens) are malformed.
    - UsageError: the tokens do not satisfy the schema (unless
      show_usage_on_error is set, in which case the process exits).
    """
    normalized = normalize(schema)
    table = build(normalized.descriptors)

    if tokens is Unset:
        tokens = sys.argv[1:]
    elif isinstance(tokens, str) or not isinstance(tokens, Iterable):
        raise TypeError("tokens must be an iterable of strings")
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("tokens must be an iterable of strings")

    def help():
        return render(normalized, lookup() if metadata is Unset else metadata)

    try:
        return finalize(normalized, scan(table, tokens), help=help)
    except UsageError as fault:
        if not normalized.command.show_usage_on_error:
            raise
        trigger(fault, help=help())


__all__ = ("parse",)
