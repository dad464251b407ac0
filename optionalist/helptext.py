"""
Help text rendering.

render(schema, metadata) is a pure function of the normalized schema and the
optional program metadata (name, version). Layout:

    Version: <name> <version>
    Usage:
      <name> <required...> [<optional>...] [--] [<example>...]
      <name> <alone option>

    Description:
      <command description>

    Options:
      --name, -a <placeholder>
        <option description>
      [--] [<example>...]
        <positional description>

Notes
- the version line needs both name and version; "<name> " is dropped from the
  usage lines when no name is known.
- the combined usage line is dropped when the schema has neither non-alone
  options nor positional settings.
- booleans have no placeholder; others use their example or "parameter".
- descriptions keep their relative indentation (see indent()).
"""
import textwrap
from collections.abc import Mapping

from .schema import Mode


def indent(text, prefix, /):
    """
    Re-indent a free-form description under a prefix.

    Blank leading/trailing lines and trailing whitespace are dropped, the common
    leading whitespace is removed, then every non-blank line is prefixed. The
    result ends with a newline, or is "" when the text has no visible content.

    Example
        >>> indent('''
        ...     first
        ...       nested
        ... ''', "  ")
        '  first\\n    nested\\n'
    """
    if text is None:
        return ""
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[0]:
        del lines[0]
    while lines and not lines[-1]:
        del lines[-1]
    if not lines:
        return ""
    return textwrap.indent(textwrap.dedent("\n".join(lines)), prefix) + "\n"


def _identity(metadata, /):
    match metadata:
        case None:
            return None, None
        case Mapping():
            return metadata.get("name"), metadata.get("version")
        case (name, version):
            return name, version
    raise TypeError(f"metadata must be a (name, version) pair or a mapping: {metadata!r}")


def _synopsis(descriptor, /):
    if (placeholder := descriptor.placeholder) is None:
        return descriptor.flag
    return f"{descriptor.flag} {placeholder}"


def render(schema, metadata=None, /):
    """
    Render the help text of a normalized schema.

    Parameters
    - schema: Schema (see optionalist.schema.normalize).
    - metadata: None, a (name, version) pair such as Metadata, or a mapping
      with "name"/"version" keys.

    Returns
    - str, newline-terminated.
    """
    name, version = _identity(metadata)
    descriptors = schema.descriptors.values()
    settings = schema.unnamed
    lines = []

    if name and version:
        lines.append(f"Version: {name} {version}")
    lines.append("Usage:")

    usages = []
    required = [_synopsis(descriptor) for descriptor in descriptors if descriptor.mode is Mode.REQUIRED]
    optional = [f"[{_synopsis(descriptor)}]" for descriptor in descriptors if descriptor.mode not in (Mode.REQUIRED, Mode.ALONE)]
    if required or optional or settings is not None:
        combined = [*required, *optional]
        if settings is not None:
            combined.append(f"[--] [{settings.example}...]")
        usages.append(" ".join(combined))
    usages.extend(_synopsis(descriptor) for descriptor in descriptors if descriptor.mode is Mode.ALONE)
    lines.extend(f"  {name} {usage}" if name else f"  {usage}" for usage in usages)

    help = "\n".join(lines) + "\n"

    if description := indent(schema.command.describe, "  "):
        help += "\nDescription:\n" + description

    help += "\nOptions:\n"
    for descriptor in descriptors:
        help += f"  {', '.join(descriptor.flags)}"
        if (placeholder := descriptor.placeholder) is not None:
            help += f" {placeholder}"
        help += "\n" + indent(descriptor.describe, "    ")
    if settings is not None:
        help += f"  [--] [{settings.example}...]\n" + indent(settings.describe, "    ")

    return help


__all__ = ("indent", "render")
