"""
Flag lookup table.

build(descriptors) maps every command-line flag token (an option's own flag and
one per alias) to the descriptor it names, in declaration order.

Collisions are schema mistakes and raise ValueError:
- two options whose identifiers coincide after hyphen folding
  ("dry-run" and "dry_run") -> "Duplicate option name: dry_run, dry-run"
- a flag token claimed twice, by a name or an alias
  -> "Duplicate alias name: <current option>, <owner option>"
"""
from types import MappingProxyType


def build(descriptors, /):
    """
    Build the read-only flag -> descriptor table.

    Parameters
    - descriptors: mapping of option name -> Descriptor (as produced by normalize()).

    Returns
    - MappingProxyType keyed by flag token ("-a", "--alpha", ...).
    """
    owners = {}
    table = {}

    for descriptor in descriptors.values():
        if (existing := owners.setdefault(descriptor.key, descriptor.name)) != descriptor.name:
            raise ValueError(f"Duplicate option name: {descriptor.name}, {existing}")
        for flag in descriptor.flags:
            if (owner := table.setdefault(flag, descriptor)) is not descriptor:
                raise ValueError(f"Duplicate alias name: {descriptor.name}, {owner.name}")
            # An option listing the same alias twice (or its own name) is a collision too.
            if descriptor.flags.count(flag) > 1:
                raise ValueError(f"Duplicate alias name: {descriptor.name}, {descriptor.name}")

    return MappingProxyType(table)


__all__ = ("build",)
