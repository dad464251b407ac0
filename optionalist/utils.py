"""
Optionalist utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the schema, scanner and result layers.
- Public-but-internal leaning: stable enough for consumers, designed primarily
  to support the higher-level parsing API.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/().

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated callables for clean tracebacks.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr), frozen.

- freeze(object)
  • Recursively turn containers into their immutable counterparts (tuple, frozenset, mappingproxy).

- flagify(name) / identify(name)
  • Command-line spelling of an option name (-x / --name) and its attribute-friendly identifier.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> flagify("v"), flagify("verbose")
    ('-v', '--verbose')
    >>> identify("dry-run")
    'dry_run'
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value, but the API needs a way
    to distinguish “not provided” from “provided as None”. A single instance,
    Unset, is exposed for use as the default in internal parameters.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when Unset appears on the right.
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        """
        Ensure a single instance for this sentinel type.
        """
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        """
        Disallow subclassing to preserve sentinel semantics.
        """
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve an internal Unset sentinel to a concrete default.

    Returns the given object unless it is the Unset sentinel, in which case
    the provided default is returned. Falsey values like None, 0, "" or ()
    are preserved as-is; they are not treated as “unset”.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(0, "fallback")      -> 0
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable (renamed in place)
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def freeze(object, /):
    """
    Recursively convert containers into immutable counterparts.

    Behavior
    - Named tuple: same named tuple type with frozen items.
    - Sequence (non-string): tuple of frozen items.
    - Mapping: read-only mappingproxy over a fresh dict of frozen values (keys preserved).
    - Set: frozenset of frozen items.
    - Anything else: returned as-is.

    Notes
    - The result never shares mutable state with the input, so callers may keep
      mutating their own containers without affecting frozen copies.
    """
    if isinstance(object, tuple) and hasattr(object, "_fields"):
        # Named tuples keep their type (and field access).
        return object._make(map(freeze, object))
    elif isinstance(object, Sequence) and not isinstance(object, str | bytes):
        return tuple(map(freeze, object))
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(zip(object.keys(), map(freeze, object.values()))))
    elif isinstance(object, Set):
        return frozenset(map(freeze, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns it
    frozen (see freeze), so public views can never alter internal state.

    Example
    - Given self._aliases, declare aliases = mirror("aliases").
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return freeze(getattr(self, "_" + name))

    return property(getter)


def flagify(name, /):
    """
    Return the command-line spelling of an option name or alias.

    One-character names take a single hyphen (-v); anything longer takes two
    (--verbose). The name itself is used verbatim.
    """
    return ("-" if len(name) == 1 else "--") + name


def identify(name, /):
    """
    Return the externally addressable identifier of an option name.

    Hyphen-delimited words are folded with underscores so that every option
    can be read back as an attribute: "dry-run" -> "dry_run".
    """
    return name.replace("-", "_")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid, user-meaningful value but you still
need to distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "freeze",
    "mirror",
    "flagify",
    "identify",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
