"""
Value constraint checks.

check(descriptor, value, flag=..., token=...) validates a converted option value
against the descriptor's constraints and returns the value to store, which is
the input itself, the canonical spelling of a case-insensitive choice, or an
auto-adjusted number.

Constraint forms (see optionalist.schema)
- tuple: enumeration of allowed strings or numbers.
- re.Pattern: the string must contain a match (re.search semantics).
- Range: inclusive and/or exclusive numeric bounds.

Auto-adjust
- enumerations: nearest allowed number; on a tie the earlier entry wins.
- inclusive bounds clamp to the bound itself.
- exclusive bounds clamp to the closest representable float inside the range.
"""
import math
import re

from .faults import FaultCode, InvalidChoiceError, OutOfRangeError, PatternMismatchError
from .schema import Range


def _choose(descriptor, value, /, *, flag, token):
    constraints = descriptor.constraints

    if descriptor.type == "string" and descriptor.ignore_case:
        folded = value.casefold()
        for choice in constraints:
            if choice.casefold() == folded:
                return choice
    elif value in constraints:
        return value
    elif descriptor.auto_adjust:
        return min(constraints, key=lambda choice: abs(choice - value))

    raise InvalidChoiceError(
        f"{flag} must be one of {', '.join(map(str, constraints))}.: {token}",
        code=FaultCode.INVALID_CHOICE,
        flag=flag,
        token=token,
        choices=constraints,
    )


def _match(descriptor, value, /, *, flag, token):
    if descriptor.constraints.search(value) is None:
        raise PatternMismatchError(
            f"{flag} does not match /{descriptor.constraints.pattern}/.: {token}",
            code=FaultCode.PATTERN_MISMATCH,
            flag=flag,
            token=token,
        )
    return value


def _bound(descriptor, value, /, *, flag, token):
    range = descriptor.constraints

    # Bounds are applied in order; an adjusted value is checked against the rest.
    for bound, violated, adjusted, phrase in (
        (range.min, lambda bound: value < bound, lambda bound: bound, "greater than or equal to"),
        (range.min_exclusive, lambda bound: value <= bound, lambda bound: math.nextafter(bound, math.inf), "greater than"),
        (range.max, lambda bound: value > bound, lambda bound: bound, "less than or equal to"),
        (range.max_exclusive, lambda bound: value >= bound, lambda bound: math.nextafter(bound, -math.inf), "less than"),
    ):
        if bound is None or not violated(bound):
            continue
        if descriptor.auto_adjust:
            value = adjusted(bound)
            continue
        raise OutOfRangeError(
            f"{flag} must be {phrase} {bound}.: {token}",
            code=FaultCode.OUT_OF_RANGE,
            flag=flag,
            token=token,
            bound=bound,
        )
    return value


def check(descriptor, value, /, *, flag, token):
    """
    Validate (and possibly adjust) a converted value.

    Parameters
    - descriptor: the Descriptor the value belongs to.
    - value: converted value (str for strings, int/float for numbers).
    - flag: the flag token as typed (alias spelling included), used in messages.
    - token: the raw value token, echoed after ".: " in messages.

    Raises
    - InvalidChoiceError / PatternMismatchError / OutOfRangeError.
    """
    match descriptor.constraints:
        case None:
            return value
        case Range():
            return _bound(descriptor, value, flag=flag, token=token)
        case tuple():
            return _choose(descriptor, value, flag=flag, token=token)
        case re.Pattern():
            return _match(descriptor, value, flag=flag, token=token)
    raise TypeError(f"unsupported constraints for {flag}: {descriptor.constraints!r}")


__all__ = ("check",)
