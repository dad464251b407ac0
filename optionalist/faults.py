"""
Optionalist faults (usage errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every end-user mistake
  the scanner and finalizer can detect. Codes are grouped by domain to keep
  copy consistent and make logs/searches predictable.
- UsageError: base type carrying the single-line message plus structured
  options (flag, token, code, ...) and knowing how to render itself with rich.
- trigger(): the "show usage on error" boundary; renders message + help to
  stderr and terminates the process with status 1.

Two disjoint error kinds
- Schema mistakes (made by the tool author) are plain TypeError/ValueError raised
  while normalizing the schema; they are never rendered by trigger().
- Usage mistakes (made by the end user) are UsageError subclasses; str(error) is
  exactly the human-readable message.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - flags (1111x)
      • UNKNOWN_OPTION, STANDALONE_OPTION, DUPLICATED_OPTION, EXCEEDED_COUNT
    - values (1112x)
      • MISSING_PARAMETER, INVALID_NUMBER, INVALID_CHOICE, PATTERN_MISMATCH, OUT_OF_RANGE
    - structure (1113x)
      • REQUIRED_OPTION, NOT_ENOUGH_UNNAMED, TOO_MANY_UNNAMED

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- flag errors ---
    UNKNOWN_OPTION              = 11111
    STANDALONE_OPTION           = 11112
    DUPLICATED_OPTION           = 11113
    EXCEEDED_COUNT              = 11114

    # --- value errors ---
    MISSING_PARAMETER           = 11121
    INVALID_NUMBER              = 11122
    INVALID_CHOICE              = 11123
    PATTERN_MISMATCH            = 11124
    OUT_OF_RANGE                = 11125

    # --- structural errors ---
    REQUIRED_OPTION             = 11131
    NOT_ENOUGH_UNNAMED          = 11132
    TOO_MANY_UNNAMED            = 11133

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class UsageError(Exception):
    """
    An end-user command-line mistake.

    Attributes
    - message: the single-line, human-readable description (also str(self)).
    - options: read-only mapping with structured context. Every fault carries
      'code' (FaultCode); most carry 'flag' and, for value problems, 'token'.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    @property
    def code(self):
        return self.options.get("code")

    def __rich__(self):
        styles = defaultdict(str, {
            "error-message": "bold #FF4DA6",  # friendly pinky message
        } | getattr(__import__("__main__"), "__styles__", {}))

        if not self.options.get("colorful", True):
            return Text(str(self.message))
        return Text(str(self.message), styles["error-message"])


class UnknownOptionError(UsageError): ...
class StandaloneOptionError(UsageError): ...
class DuplicateOptionError(UsageError): ...
class ExceededCountError(UsageError): ...
class MissingParameterError(UsageError): ...
class InvalidNumberError(UsageError): ...
class InvalidChoiceError(UsageError): ...
class PatternMismatchError(UsageError): ...
class OutOfRangeError(UsageError): ...
class RequiredOptionError(UsageError): ...
class NotEnoughUnnamedError(UsageError): ...
class TooManyUnnamedError(UsageError): ...


def trigger(fault, /, *, help):
    """
    surface a usage fault to the end user and terminate.

    contract
    - fault must be a UsageError; schema errors are programming mistakes and
      are never routed here.
    - writes "<message>", a blank line and the help text to stderr through the
      module console, then exits with status 1.

    notes
    - long lines are never wrapped so the help layout stays intact on narrow terminals.
    - this is the only place where the library performs output or terminates.
    """
    if not isinstance(fault, UsageError):
        raise TypeError("trigger() argument must be a usage error")
    console.print(Group(fault, Text(""), Text(help.rstrip("\n"))), soft_wrap=True)
    sys.exit(1)


__all__ = (
    "UsageError",
    "UnknownOptionError",
    "StandaloneOptionError",
    "DuplicateOptionError",
    "ExceededCountError",
    "MissingParameterError",
    "InvalidNumberError",
    "InvalidChoiceError",
    "PatternMismatchError",
    "OutOfRangeError",
    "RequiredOptionError",
    "NotEnoughUnnamedError",
    "TooManyUnnamedError",
    "FaultCode",
    "trigger",
)
