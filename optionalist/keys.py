# python
"""
Reserved schema keys.

This module exposes two singletons, `unnamed` and `helpstring`. They are the
only non-string keys a schema may carry, so they can never collide with an
option name:

- `unnamed`: configures positional (unnamed) arguments
  {"min", "max", "example", "describe"}.
- `helpstring`: configures the command itself
  {"describe", "show_usage_on_error"}.

Example
    from optionalist import parse, unnamed, helpstring

    options = parse({
        helpstring: {"describe": "Copy files.", "show_usage_on_error": True},
        "force": True,
        unnamed: {"min": 2, "example": "file"},
    })

Notes
- Both keys are cached singletons (per-process), hashable and truthy.
- They render with colors in Rich and as <unnamed>/<helpstring> elsewhere.
"""
from rich.text import Text


def _key(name, /):
    return type(name + "-type", (), {
        "__module__": __name__,
        "__slots__": (),
        "__rich__": lambda self: Text.assemble(("<", "yellow"), (name, "cyan"), (">", "yellow")),
        "__repr__": lambda self: "<%s>" % name,
        "__doc__": "reserved schema key for %s settings" % name,
        "__reduce__": lambda self: name,
        # Cache the singleton creation so repeated instantiation returns the same object.
        "__new__": __import__("functools").cache(lambda cls: super(type, cls).__new__(cls)),
    })()


# Positional (unnamed) argument settings.
unnamed = _key("unnamed")

# Command-level settings: description and show-usage-on-error behavior.
helpstring = _key("helpstring")


__all__ = ("unnamed", "helpstring")
