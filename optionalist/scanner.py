"""
Token scanner.

scan(table, tokens) walks command-line tokens left to right and collects raw
option values, positional tokens and the alone flag (if any) into a Scan.

Transition rules (per token)
- "--": every remaining token becomes positional, verbatim; scanning stops.
  Rejected once an alone option has been seen.
- unknown token: starting with "-" it is an unknown option; otherwise it is
  positional.
- known flag: an alone option must be the first flag and nothing may follow it.
- boolean: presence sets True; multiple booleans count their occurrences.
- string/number: the next token is the value, whatever it looks like.

Defaults, required options and positional bounds are not handled here; see
optionalist.results.finalize.
"""
import math
import re
import sys
from collections import deque
from typing import NamedTuple

from .constraints import check
from .faults import *


class Scan(NamedTuple):
    """
    Raw scanning outcome.

    - values: option name -> value (list for multiple options, count for
      multiple booleans), only for options seen on the command line.
    - unnamed: positional tokens in encounter order.
    - alone: the alone flag as typed, or None.
    """
    values: dict
    unnamed: list
    alone: str | None


_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)


def _tonumber(text, /):
    """
    Convert a number literal, or return None when it is not one.

    Accepted forms (ASCII only, surrounding whitespace ignored)
    - decimal integers: "42", "-7", "+3", "007".
    - unsigned prefixed integers: "0x1f", "0o17", "0b101".
    - decimal floats: "1.5", ".5", "-2e3".

    Values must fit a finite double. Integral results come back as int
    ("10.0" -> 10) as long as a double holds them exactly.
    """
    text = text.strip()
    if _PREFIXED.fullmatch(text):
        value = int(text, 0)
    elif not _DECIMAL.fullmatch(text):
        return None
    elif any(char in text for char in ".eE"):
        value = float(text)
    else:
        value = int(text)

    if isinstance(value, int):
        return value if abs(value) <= sys.float_info.max else None
    if not math.isfinite(value):
        return None
    if value.is_integer() and abs(value) <= 2 ** 53:
        return int(value)
    return value


class Scanner:
    """
    Single-use scanning state machine over a flag table.

    State
    - values / unnamed: accumulated results.
    - alone: the alone flag once seen (locks out every other token).
    - previous: the last known flag seen (an alone flag must come first).
    """

    def __init__(self, table, /):
        self.table = table
        self.values = {}
        self.unnamed = []
        self.alone = None
        self.previous = None
        self._tokens = deque()

    def _standalone(self, flag):
        culprit = self.alone or flag
        raise StandaloneOptionError(
            f"{culprit} must be specified alone.",
            code=FaultCode.STANDALONE_OPTION,
            flag=culprit,
        )

    def _parse_flag(self, descriptor, flag):
        if not descriptor.multiple:
            if descriptor.name in self.values:
                raise DuplicateOptionError(
                    f"Duplicate {flag}",
                    code=FaultCode.DUPLICATED_OPTION,
                    flag=flag,
                )
            self.values[descriptor.name] = True
            return

        count = self.values[descriptor.name] = self.values.get(descriptor.name, 0) + 1
        # Boolean constraints are a Range whose only bound is the maximum count.
        if descriptor.constraints is not None and count > descriptor.constraints.max:
            raise ExceededCountError(
                f"Exceeded max count({descriptor.constraints.max}): {flag}",
                code=FaultCode.EXCEEDED_COUNT,
                flag=flag,
                count=count,
            )

    def _parse_value(self, descriptor, flag):
        """
        Consume the value token of a string or number option.

        - missing token: "<flag> needs a [number ]parameter[ as the <example>]"
        - unconvertible number: the same message followed by ": <token>"
        - converted values then go through the constraint checks.
        """
        number = descriptor.type == "number"
        message = f"{flag} needs a {'number ' if number else ''}parameter" + (
            f" as the {descriptor.example}" if descriptor.example else ""
        )

        if not self._tokens:
            raise MissingParameterError(
                message,
                code=FaultCode.MISSING_PARAMETER,
                flag=flag,
            )
        token = self._tokens.popleft()

        if not number:
            value = token
        elif (value := _tonumber(token)) is None:
            raise InvalidNumberError(
                f"{message}: {token}",
                code=FaultCode.INVALID_NUMBER,
                flag=flag,
                token=token,
            )

        value = check(descriptor, value, flag=flag, token=token)

        if descriptor.multiple:
            self.values.setdefault(descriptor.name, []).append(value)
        elif descriptor.name in self.values:
            raise DuplicateOptionError(
                f"Duplicate {flag}: {self.values[descriptor.name]}, {value}",
                code=FaultCode.DUPLICATED_OPTION,
                flag=flag,
                token=token,
            )
        else:
            self.values[descriptor.name] = value

    def scan(self, tokens, /):
        """
        Consume tokens and return the Scan.

        Raises
        - UnknownOptionError, StandaloneOptionError, DuplicateOptionError,
          ExceededCountError, MissingParameterError, InvalidNumberError and
          the constraint errors of optionalist.constraints.
        """
        self._tokens = deque(tokens)

        while self._tokens:
            token = self._tokens.popleft()

            if token == "--":
                if self.alone:
                    self._standalone(token)
                self.unnamed.extend(self._tokens)
                self._tokens.clear()
                break

            if (descriptor := self.table.get(token)) is None:
                if token.startswith("-"):
                    raise UnknownOptionError(
                        f"unknown options: {token}",
                        code=FaultCode.UNKNOWN_OPTION,
                        flag=token,
                    )
                self.unnamed.append(token)
                continue

            if self.alone or (self.previous and descriptor.alone):
                self._standalone(token)
            self.previous = token
            if descriptor.alone:
                self.alone = token

            if descriptor.type == "boolean":
                self._parse_flag(descriptor, token)
            else:
                self._parse_value(descriptor, token)

        return Scan(self.values, self.unnamed, self.alone)


def scan(table, tokens, /):
    """
    Scan tokens against a flag table (see optionalist.aliases.build).
    """
    return Scanner(table).scan(tokens)


__all__ = ("Scan", "Scanner", "scan")
