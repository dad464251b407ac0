r"""
Optionalist schema normalization.

Overview
- normalize(schema) turns the caller's declarative schema into a Schema:
  • descriptors: read-only mapping of option name -> Descriptor (declaration order).
  • unnamed: Unnamed positional settings, or None when the schema has none.
  • command: Command settings (description, show-usage-on-error).

- Schema entries
  • shorthand literals: "text" or 123 mean "default = literal"; True means "boolean flag".
  • descriptor mappings with the keys listed in DESCRIPTOR_KEYS.
  • reserved keys `unnamed` and `helpstring` (see optionalist.keys).

Validation highlights
- Names must be non-empty and must not begin or end with a hyphen.
- alone/required/default/multiple are pairwise exclusive.
- Booleans cannot be required nor carry a default; their only constraint is
  {"max": n} on a multiple flag (occurrence count).
- String constraints: a non-empty sequence of strings or a compiled pattern.
- Number constraints: a non-empty sequence of numbers or a range mapping with
  at least one of min/min_exclusive/max/max_exclusive (never both inclusive and
  exclusive on the same side).

Errors raised here are schema (programming) mistakes: TypeError when a value
has the wrong Python type, ValueError when a value or a combination is illegal.
They are raised before any token is scanned.

Quick example:
    >>> schema = normalize({"count": 3, "verbose": True})
    >>> schema.descriptors["count"].type, schema.descriptors["count"].default
    ('number', 3)
"""
import builtins
import enum
import functools
import math
import operator
import re
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import NamedTuple

from .keys import unnamed, helpstring
from .utils import *

DESCRIPTOR_KEYS = frozenset({
    "type",
    "alias",
    "describe",
    "example",
    "alone",
    "required",
    "default",
    "multiple",
    "constraints",
    "ignore_case",
    "auto_adjust",
})

RANGE_KEYS = ("min", "min_exclusive", "max", "max_exclusive")

UNNAMED_KEYS = frozenset({"min", "max", "example", "describe"})

COMMAND_KEYS = frozenset({"describe", "show_usage_on_error"})

# Accepted spellings of a value type (canonical names and Python builtins).
TYPES = MappingProxyType({
    "string": "string",
    "number": "number",
    "boolean": "boolean",
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
})


class Mode(enum.Enum):
    """
    Cardinality of an option; exactly one applies to every descriptor.
    """
    NONE = "none"
    ALONE = "alone"
    REQUIRED = "required"
    DEFAULT = "default"
    MULTIPLE = "multiple"


class Range(NamedTuple):
    """
    Numeric bounds; None marks an absent bound.

    For multiple boolean flags only 'max' is used, as the maximum occurrence count.
    """
    min: int | float | None = None
    min_exclusive: int | float | None = None
    max: int | float | None = None
    max_exclusive: int | float | None = None


class Unnamed(NamedTuple):
    """
    Positional (unnamed) argument settings.
    """
    min: int | float = 0
    max: int | float = math.inf
    example: str = "unnamed_parameters"
    describe: str | None = None


class Command(NamedTuple):
    """
    Command-level settings.
    """
    describe: str | None = None
    show_usage_on_error: bool = False


class Schema(NamedTuple):
    """
    Normalized schema: descriptors in declaration order plus reserved settings.
    """
    descriptors: Mapping
    unnamed: Unnamed | None
    command: Command


class DescriptorType(type):
    """
    Metaclass that turns descriptors into immutable, introspectable records.

    Responsibilities
    - Expose every field listed in __introspectable__ as a read-only property
      (via mirror()) backed by a private "_<field>" attribute.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics.
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for use in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - descriptor(name='verbose', key='verbose', flag='--verbose', ...)
            """
            return f"{type(self).__typename__}(" + (
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            ) + ")"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _isnumber(object, /):
    return isinstance(object, int | float) and not isinstance(object, bool)


def _sanitize_name(name, /, *, alias=False):
    """
    Internal: validate an option name or alias.

    Rules
    - must be a string (TypeError otherwise).
    - must be non-empty: "empty option name" / "empty alias name".
    - must not begin or end with a hyphen: "Invalid option name: <name>".
    """
    kind = "alias" if alias else "option"
    if not isinstance(name, str):
        raise TypeError(f"{kind} names must be strings: {name!r}")
    elif not name:
        raise ValueError(f"empty {kind} name")
    elif name.startswith("-") or name.endswith("-"):
        raise ValueError(f"Invalid {kind} name: {name}")


def _expand_shorthand(name, entry, /):
    """
    Internal: turn a shorthand literal into a descriptor mapping.

    - True          -> {"type": "boolean"}
    - "text"        -> {"default": "text"}
    - 123 / 1.5     -> {"type": "number", "default": 123}
    - any mapping   -> a shallow dict copy
    """
    if entry is True:
        return {"type": "boolean"}
    elif isinstance(entry, bool) or entry is None:
        raise TypeError(f"option {flagify(name)}: shorthand must be True, a string, a number or a mapping: {entry!r}")
    elif isinstance(entry, str):
        return {"default": entry}
    elif _isnumber(entry):
        return {"type": "number", "default": entry}
    elif isinstance(entry, Mapping):
        return dict(entry)
    raise TypeError(f"option {flagify(name)}: shorthand must be True, a string, a number or a mapping: {entry!r}")


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the presentation fields and the value type.

    Responsibilities
    - type: one of TYPES (defaults to "string"); normalized to its canonical name.
    - alias: Unset | str | iterable of str; normalized to a tuple (declaration order).
    - describe: Unset | str; becomes None when Unset. Whitespace-only text is
      kept (help rendering drops it).
    - example: Unset | non-empty str; becomes None when Unset.
    """
    flag = metadata["flag"]

    if not isinstance(type := metadata["type"], str | builtins.type | Unset):
        raise TypeError(f"{cls.__typename__} {flag}: 'type' must be a string")
    try:
        metadata["type"] = TYPES[coalesce(type, "string")]
    except KeyError:
        raise ValueError(f"{cls.__typename__} {flag}: unknown type {type!r}") from None

    aliases = coalesce(metadata["aliases"], ())
    if isinstance(aliases, str):
        aliases = (aliases,)
    elif not isinstance(aliases, Sequence | set | frozenset):
        raise TypeError(f"{cls.__typename__} {flag}: 'alias' must be a string or a sequence of strings")
    for alias in aliases:
        _sanitize_name(alias, alias=True)
    metadata["aliases"] = tuple(aliases)

    if not isinstance(describe := metadata["describe"], str | Unset):
        raise TypeError(f"{cls.__typename__} {flag}: 'describe' must be a string")
    metadata["describe"] = coalesce(describe)

    if not isinstance(example := metadata["example"], str | Unset):
        raise TypeError(f"{cls.__typename__} {flag}: 'example' must be a string")
    elif isinstance(example, str) and not (example := example.strip()):
        raise ValueError(f"{cls.__typename__} {flag}: 'example' cannot be empty")
    metadata["example"] = coalesce(example)


def _sanitize_mode(cls, metadata, /):
    """
    Internal: resolve alone/required/default/multiple into a single Mode.

    Rules
    - at most one of them may be given ("default" counts when the key is present,
      the others when truthy).
    - booleans can be neither required nor defaulted.
    - a default must match the declared type (str for strings; int/float but
      not bool for numbers).
    """
    flag = metadata["flag"]
    type = metadata["type"]
    default = metadata["default"]

    chosen = [mode for mode in (Mode.ALONE, Mode.REQUIRED, Mode.DEFAULT, Mode.MULTIPLE) if (
        default is not Unset if mode is Mode.DEFAULT else bool(metadata[mode.value])
    )]

    if type == "boolean" and Mode.REQUIRED in chosen:
        raise ValueError(f"The {flag} cannot set to be required.")
    if type == "boolean" and Mode.DEFAULT in chosen:
        raise ValueError(f"The default value of the {flag} parameter cannot be specified.: {default!r}")
    if len(chosen) > 1:
        raise ValueError(f"{cls.__typename__} {flag}: {' and '.join(mode.value for mode in chosen)} cannot be combined")

    if default is not Unset:
        if type == "number" and not _isnumber(default):
            raise TypeError(f"The default value of the {flag} parameter must be a number.: {default!r}")
        if type == "string" and not isinstance(default, str):
            raise TypeError(f"The default value of the {flag} parameter must be a string.: {default!r}")

    metadata["mode"] = chosen[0] if chosen else Mode.NONE
    metadata["default"] = coalesce(default)


def _sanitize_range(cls, flag, constraints, /):
    """
    Internal: validate a numeric range mapping and build a Range.
    """
    if unknown := set(constraints) - set(RANGE_KEYS):
        raise ValueError(f"{cls.__typename__} {flag}: unknown range keys {sorted(map(str, unknown))}")
    if not constraints:
        raise ValueError(f"{cls.__typename__} {flag}: range needs at least one of {', '.join(RANGE_KEYS)}")
    for key, bound in constraints.items():
        if not _isnumber(bound):
            raise TypeError(f"{cls.__typename__} {flag}: range {key!r} must be a number")
        if math.isnan(bound):
            raise ValueError(f"{cls.__typename__} {flag}: range {key!r} cannot be NaN")
    if "min" in constraints and "min_exclusive" in constraints:
        raise ValueError(f"{cls.__typename__} {flag}: 'min' and 'min_exclusive' cannot be combined")
    if "max" in constraints and "max_exclusive" in constraints:
        raise ValueError(f"{cls.__typename__} {flag}: 'max' and 'max_exclusive' cannot be combined")

    range = Range(**constraints)
    lower = range.min if range.min is not None else range.min_exclusive
    upper = range.max if range.max is not None else range.max_exclusive
    if lower is not None and upper is not None:
        if lower > upper or (lower == upper and (range.min_exclusive is not None or range.max_exclusive is not None)):
            raise ValueError(f"{cls.__typename__} {flag}: range is empty")
    return range


def _sanitize_constraints(cls, metadata, /):
    """
    Internal: validate constraints, ignore_case and auto_adjust against the type.

    Normalized forms
    - string: tuple[str, ...] (enumeration) or re.Pattern.
    - number: tuple[int | float, ...] (enumeration) or Range.
    - boolean: Range with only 'max' (multiple flags only).
    - absent: None.
    """
    flag = metadata["flag"]
    type = metadata["type"]
    constraints = metadata["constraints"]
    ignore_case = bool(metadata["ignore_case"])
    auto_adjust = bool(metadata["auto_adjust"])

    match type, constraints:
        case _, UnsetType():
            constraints = None
        case "string", re.Pattern():
            pass
        case "string" | "number", str() | bytes():
            raise TypeError(f"{cls.__typename__} {flag}: 'constraints' must be a sequence or a " + (
                "compiled pattern" if type == "string" else "range mapping"
            ))
        case "string", Sequence():
            if not constraints:
                raise ValueError(f"{cls.__typename__} {flag}: 'constraints' cannot be empty")
            if not all(isinstance(constraint, str) for constraint in constraints):
                raise TypeError(f"{cls.__typename__} {flag}: 'constraints' must only contain strings")
            folded = [constraint.casefold() if ignore_case else constraint for constraint in constraints]
            if len(set(folded)) != len(folded):
                raise ValueError(f"{cls.__typename__} {flag}: 'constraints' cannot contain duplicates")
            constraints = tuple(constraints)
        case "number", Sequence():
            if not constraints:
                raise ValueError(f"{cls.__typename__} {flag}: 'constraints' cannot be empty")
            if not all(_isnumber(constraint) for constraint in constraints):
                raise TypeError(f"{cls.__typename__} {flag}: 'constraints' must only contain numbers")
            if not all(math.isfinite(constraint) for constraint in constraints):
                raise ValueError(f"{cls.__typename__} {flag}: 'constraints' must only contain finite numbers")
            if len(set(constraints)) != len(constraints):
                raise ValueError(f"{cls.__typename__} {flag}: 'constraints' cannot contain duplicates")
            constraints = tuple(constraints)
        case "number", Mapping():
            constraints = _sanitize_range(cls, flag, constraints)
        case "boolean", _:
            if metadata["mode"] is not Mode.MULTIPLE:
                raise ValueError(f"{cls.__typename__} {flag}: boolean constraints require 'multiple'")
            if not isinstance(constraints, Mapping) or set(constraints) != {"max"}:
                raise TypeError(f"{cls.__typename__} {flag}: boolean constraints must be {{'max': <count>}}")
            if not isinstance(count := constraints["max"], int) or isinstance(count, bool):
                raise TypeError(f"{cls.__typename__} {flag}: boolean 'max' must be an integer")
            if count < 0:
                raise ValueError(f"{cls.__typename__} {flag}: boolean 'max' cannot be negative")
            constraints = Range(max=count)
        case _:
            raise TypeError(f"{cls.__typename__} {flag}: unsupported constraints {constraints!r}")

    if ignore_case and not (type == "string" and isinstance(constraints, tuple)):
        raise ValueError(f"{cls.__typename__} {flag}: 'ignore_case' requires a string enumeration")
    if auto_adjust and not (type == "number" and constraints is not None):
        raise ValueError(f"{cls.__typename__} {flag}: 'auto_adjust' requires number constraints")

    metadata["constraints"] = constraints
    metadata["ignore_case"] = ignore_case
    metadata["auto_adjust"] = auto_adjust


class Descriptor(metaclass=DescriptorType):
    """
    Normalized description of one named option.

    Properties (read-only)
    - name: schema key, verbatim (case-sensitive, hyphens allowed).
    - key: identifier under which the parsed value is published (hyphens -> underscores).
    - flag: command-line spelling of the name (-x or --name).
    - type: "string" | "number" | "boolean".
    - aliases / flags: alternate names, and every flag token (own flag first).
    - mode: Mode (NONE, ALONE, REQUIRED, DEFAULT, MULTIPLE).
    - default: default value (None unless mode is DEFAULT).
    - constraints: None, tuple (enumeration), re.Pattern or Range.
    - ignore_case / auto_adjust: constraint policies.
    - describe / example: help text fragments (None when absent).
    """

    __introspectable__ = (
        "name",
        "key",
        "flag",
        "type",
        "aliases",
        "flags",
        "mode",
        "default",
        "constraints",
        "ignore_case",
        "auto_adjust",
        "describe",
        "example",
    )

    def __new__(cls, name, entry, /):
        """
        Build a descriptor from a schema key and its entry (shorthand or mapping).

        Raises
        - TypeError / ValueError: see the module documentation.
        """
        _sanitize_name(name)
        entry = _expand_shorthand(name, entry)

        if unknown := set(entry) - DESCRIPTOR_KEYS:
            raise ValueError(f"{cls.__typename__} {flagify(name)}: unknown keys {sorted(map(str, unknown))}")

        metadata = {
            "name": name,
            "key": identify(name),
            "flag": flagify(name),
            "type": entry.get("type", Unset),
            "aliases": entry.get("alias", Unset),
            "describe": entry.get("describe", Unset),
            "example": entry.get("example", Unset),
            "alone": entry.get("alone", False),
            "required": entry.get("required", False),
            "default": entry.get("default", Unset),
            "multiple": entry.get("multiple", False),
            "constraints": entry.get("constraints", Unset),
            "ignore_case": entry.get("ignore_case", False),
            "auto_adjust": entry.get("auto_adjust", False),
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_mode(cls, metadata)
        _sanitize_constraints(cls, metadata)

        metadata["flags"] = (metadata["flag"], *map(flagify, metadata["aliases"]))

        self = super().__new__(cls)
        for name in cls.__introspectable__:
            setattr(self, "_" + name, metadata[name])
        return self

    @property
    def alone(self):
        return self._mode is Mode.ALONE

    @property
    def required(self):
        return self._mode is Mode.REQUIRED

    @property
    def multiple(self):
        return self._mode is Mode.MULTIPLE

    @property
    def placeholder(self):
        """
        Value placeholder used in help and messages; None for booleans.
        """
        if self._type == "boolean":
            return None
        return self._example or "parameter"


def _sanitize_unnamed(settings, /):
    """
    Internal: validate positional settings {"min", "max", "example", "describe"}.
    """
    if not isinstance(settings, Mapping):
        raise TypeError("unnamed settings must be a mapping")
    if unknown := set(settings) - UNNAMED_KEYS:
        raise ValueError(f"unnamed settings: unknown keys {sorted(map(str, unknown))}")

    minimum = settings.get("min", 0)
    maximum = settings.get("max", math.inf)
    for key, bound in (("min", minimum), ("max", maximum)):
        if not _isnumber(bound):
            raise TypeError(f"unnamed settings: {key!r} must be a number")
        if math.isnan(bound) or bound < 0:
            raise ValueError(f"unnamed settings: {key!r} must be a non-negative number")
    if minimum > maximum:
        raise ValueError("unnamed settings: 'min' cannot be greater than 'max'")

    example = settings.get("example", Unset)
    if not isinstance(example, str | Unset):
        raise TypeError("unnamed settings: 'example' must be a string")
    elif isinstance(example, str) and not (example := example.strip()):
        raise ValueError("unnamed settings: 'example' cannot be empty")

    describe = settings.get("describe")
    if not isinstance(describe, str | None):
        raise TypeError("unnamed settings: 'describe' must be a string")

    return Unnamed(minimum, maximum, coalesce(example, "unnamed_parameters"), describe)


def _sanitize_command(settings, /):
    """
    Internal: validate command settings {"describe", "show_usage_on_error"}.
    """
    if not isinstance(settings, Mapping):
        raise TypeError("helpstring settings must be a mapping")
    if unknown := set(settings) - COMMAND_KEYS:
        raise ValueError(f"helpstring settings: unknown keys {sorted(map(str, unknown))}")

    describe = settings.get("describe")
    if not isinstance(describe, str | None):
        raise TypeError("helpstring settings: 'describe' must be a string")

    return Command(describe, bool(settings.get("show_usage_on_error", False)))


def normalize(schema, /):
    """
    Normalize a caller-supplied schema.

    Parameters
    - schema: Mapping whose string keys are option names (values: shorthand or
      descriptor mapping) and whose reserved keys are `unnamed` / `helpstring`.

    Returns
    - Schema(descriptors, unnamed, command).

    Raises
    - TypeError / ValueError on any schema inconsistency (see module documentation).
    """
    if not isinstance(schema, Mapping):
        raise TypeError("schema must be a mapping")

    descriptors = {}
    settings = None
    command = Command()

    for name, entry in schema.items():
        if name is unnamed:
            settings = _sanitize_unnamed(entry)
        elif name is helpstring:
            command = _sanitize_command(entry)
        elif isinstance(name, str):
            descriptors[name] = Descriptor(name, entry)
        else:
            raise TypeError(f"schema keys must be option names or reserved keys: {name!r}")

    return Schema(MappingProxyType(descriptors), settings, command)


__all__ = (
    "Mode",
    "Range",
    "Unnamed",
    "Command",
    "Schema",
    "Descriptor",
    "normalize",
)
