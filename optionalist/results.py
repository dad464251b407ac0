"""
Parse results and finalization.

Two result shapes, matched explicitly by callers:

    match parse(schema):
        case Alone("version"):
            ...
        case Options(unnamed=files):
            ...

- Options: read-only mapping identifier -> value for every option present
  after defaults, plus the positional tokens (`.unnamed`).
- Alone: single-entry read-only mapping for the alone option that was given;
  it has no positional tokens at all.

Both expose `.helpstring`, rendered on first access and cached. Values are
frozen: multiple options hold tuples, multiple booleans hold counts.

Item access also accepts the reserved keys: result[unnamed] and
result[helpstring] mirror the attributes, so an option may itself be named
"unnamed" or "helpstring" and still be reachable by item access.
"""
import functools
from collections.abc import Mapping
from types import MappingProxyType

from .faults import *
from .keys import unnamed, helpstring
from .schema import Mode
from .utils import *


class Result(Mapping):
    """
    Common base: an immutable identifier -> value mapping with attribute access.
    """
    __match_args__ = ()

    def __init__(self, values, /, *, help):
        self._values = MappingProxyType({key: freeze(value) for key, value in values.items()})
        self._help = help

    def __getitem__(self, key):
        if key is helpstring:
            return self.helpstring
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __getattr__(self, name):
        # Only reached for names that are not real attributes.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __setattr__(self, name, value):
        if not name.startswith("_"):
            raise AttributeError(f"{type(self).__name__!r} object is read-only")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if isinstance(other, Result) and type(other) is not type(self):
            return False
        return super().__eq__(other)

    __hash__ = None

    @functools.cached_property
    def helpstring(self):
        """
        Help text for the schema this result was parsed with (rendered once).
        """
        return self._help()

    def __repr__(self):
        return f"{type(self).__name__}({dict(self._values)!r})"

    def __rich_repr__(self):
        yield from self._values.items()


class Options(Result):
    """
    Result of a regular parse.

    - mapping of identifier -> value ("dry-run" is published as "dry_run").
    - unnamed: tuple of positional tokens, in encounter order.
    """
    __match_args__ = ("unnamed",)

    def __init__(self, values, unnamed=(), /, *, help):
        super().__init__(values, help=help)
        self._unnamed = tuple(unnamed)

    def __getitem__(self, key):
        if key is unnamed:
            return self._unnamed
        return super().__getitem__(key)

    @property
    def unnamed(self):
        return self._unnamed

    def __eq__(self, other):
        if isinstance(other, Options) and self._unnamed != other._unnamed:
            return False
        return super().__eq__(other)

    def __repr__(self):
        return f"{type(self).__name__}({dict(self._values)!r}, unnamed={self._unnamed!r})"

    def __rich_repr__(self):
        yield from super().__rich_repr__()
        yield "unnamed", self._unnamed


class Alone(Result):
    """
    Result when an alone option was given: exactly {name: value}.
    """
    __match_args__ = ("name", "value")

    def __init__(self, name, value, /, *, help):
        super().__init__({name: value}, help=help)
        self._name = name

    @property
    def name(self):
        return self._name

    @property
    def value(self):
        return self._values[self._name]

    def __repr__(self):
        return f"{type(self).__name__}({self._name!r}, {self.value!r})"


def finalize(schema, scan, /, *, help):
    """
    Turn a Scan into an Options or Alone result.

    Parameters
    - schema: normalized Schema.
    - scan: Scan produced by optionalist.scanner.
    - help: zero-argument callable rendering the help text (called lazily).

    Alone branch
    - positional tokens are rejected: "<alone flag> must be specified alone."
    - defaults and required options are not processed.

    Regular branch
    - required and absent: "<flag> required".
    - default and absent: the default is installed (falsy defaults included).
    - multiple and absent: () for values, 0 for booleans.
    - positional count must lie within the unnamed bounds.
    """
    descriptors = schema.descriptors

    if scan.alone is not None:
        if scan.unnamed:
            raise StandaloneOptionError(
                f"{scan.alone} must be specified alone.",
                code=FaultCode.STANDALONE_OPTION,
                flag=scan.alone,
            )
        (name, value), = scan.values.items()
        return Alone(descriptors[name].key, value, help=help)

    values = {}
    for name, descriptor in descriptors.items():
        if name in scan.values:
            values[descriptor.key] = scan.values[name]
            continue
        match descriptor.mode:
            case Mode.REQUIRED:
                raise RequiredOptionError(
                    f"{descriptor.flag} required",
                    code=FaultCode.REQUIRED_OPTION,
                    flag=descriptor.flag,
                )
            case Mode.DEFAULT:
                values[descriptor.key] = descriptor.default
            case Mode.MULTIPLE:
                values[descriptor.key] = 0 if descriptor.type == "boolean" else ()

    if (settings := schema.unnamed) is not None:
        if len(scan.unnamed) < settings.min:
            raise NotEnoughUnnamedError(
                f"At least {settings.min} {settings.example} required.",
                code=FaultCode.NOT_ENOUGH_UNNAMED,
                count=len(scan.unnamed),
            )
        if len(scan.unnamed) > settings.max:
            raise TooManyUnnamedError(
                f"Too many {settings.example} specified(up to {settings.max}).",
                code=FaultCode.TOO_MANY_UNNAMED,
                count=len(scan.unnamed),
            )

    return Options(values, scan.unnamed, help=help)


__all__ = ("Result", "Options", "Alone", "finalize")
