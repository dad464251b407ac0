"""
Program metadata lookup for the help banner.

lookup() tries, in order:
1. the distribution owning the package run with "python -m <package>"
   (__main__.__spec__), through importlib.metadata;
2. the distribution declaring a console script named like sys.argv[0];
3. the nearest pyproject.toml above __main__.__file__ ([project] name/version).

Nothing found yields None; the help text then has no version line and the
usage lines carry no program name.
"""
import importlib.metadata
import os.path
import sys
import tomllib
from typing import NamedTuple


class Metadata(NamedTuple):
    name: str
    version: str


def _from_spec(main):
    if (spec := getattr(main, "__spec__", None)) is None or not spec.name:
        return None
    package = spec.name.partition(".")[0]
    for distribution in importlib.metadata.packages_distributions().get(package, ()):
        try:
            return Metadata(distribution, importlib.metadata.version(distribution))
        except importlib.metadata.PackageNotFoundError:
            continue
    return None


def _from_script():
    if not sys.argv or not sys.argv[0]:
        return None
    script = os.path.splitext(os.path.basename(sys.argv[0]))[0]
    for entry in importlib.metadata.entry_points(group="console_scripts", name=script):
        if entry.dist is not None:
            return Metadata(entry.dist.name, entry.dist.version)
    return None


def _from_pyproject(main):
    if not (file := getattr(main, "__file__", None)):
        return None
    directory = os.path.dirname(os.path.abspath(file))
    while True:
        if os.path.isfile(candidate := os.path.join(directory, "pyproject.toml")):
            with open(candidate, "rb") as stream:
                project = tomllib.load(stream).get("project", {})
            if isinstance(project.get("name"), str) and isinstance(project.get("version"), str):
                return Metadata(project["name"], project["version"])
            return None
        if (parent := os.path.dirname(directory)) == directory:
            return None
        directory = parent


def lookup():
    """
    Return the running program's Metadata(name, version), or None.
    """
    main = __import__("__main__")
    return _from_spec(main) or _from_script() or _from_pyproject(main)


__all__ = ("Metadata", "lookup")
