"""Project-name validation following npm package naming rules.

Example:
    >>> check_project_name("my-app").valid
    True
    >>> check_project_name("MyApp").problems
    ('name can no longer contain capital letters',)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable
from urllib.parse import quote

MAX_NAME_LENGTH = 214
BLACKLISTED_NAMES = ("node_modules", "favicon.ico")
NODE_CORE_MODULES = frozenset(
    {
        "assert",
        "async_hooks",
        "buffer",
        "child_process",
        "cluster",
        "console",
        "constants",
        "crypto",
        "dgram",
        "diagnostics_channel",
        "dns",
        "domain",
        "events",
        "fs",
        "http",
        "http2",
        "https",
        "inspector",
        "module",
        "net",
        "os",
        "path",
        "perf_hooks",
        "process",
        "punycode",
        "querystring",
        "readline",
        "repl",
        "stream",
        "string_decoder",
        "sys",
        "timers",
        "tls",
        "trace_events",
        "tty",
        "url",
        "util",
        "v8",
        "vm",
        "wasi",
        "worker_threads",
        "zlib",
    }
)

_SCOPED_NAME_RE = re.compile(r"^(?:@([^/]+?)/)?([^/]+?)$")
_SPECIAL_CHARS_RE = re.compile(r"[~'!()*]")
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class NameCheck:
    """Outcome of validating a project name.

    Attributes:
        name: The checked name.
        problems: Human-readable reasons the name is rejected, in check order.
    """

    name: str
    problems: tuple[str, ...]

    @property
    def valid(self) -> bool:
        return not self.problems


def _uri_component_safe(value: str) -> bool:
    return quote(value, safe=_URI_COMPONENT_SAFE) == value


def _url_friendly(name: str) -> bool:
    if _uri_component_safe(name):
        return True
    match = _SCOPED_NAME_RE.match(name)
    if match is None:
        return False
    scope, package = match.groups()
    if scope is None:
        return False
    return _uri_component_safe(scope) and _uri_component_safe(package)


def check_project_name(name: str) -> NameCheck:
    """Check ``name`` against npm's rules for new package names.

    Args:
        name: Candidate package name, usually the target directory basename.

    Returns:
        ``NameCheck`` listing every rule the name breaks.

    Example:
        >>> check_project_name("_private").problems
        ('name cannot start with an underscore',)
        >>> check_project_name("@scope/widget").valid
        True
    """
    problems: list[str] = []
    if not name:
        return NameCheck(name=name, problems=("name length must be greater than zero",))
    if name.startswith("."):
        problems.append("name cannot start with a period")
    if name.startswith("_"):
        problems.append("name cannot start with an underscore")
    if name.strip() != name:
        problems.append("name cannot contain leading or trailing spaces")
    for blacklisted in BLACKLISTED_NAMES:
        if name.lower() == blacklisted:
            problems.append(f"{blacklisted} is a blacklisted name")
    if name.lower() in NODE_CORE_MODULES:
        problems.append(f"{name} is a core module name")
    if len(name) > MAX_NAME_LENGTH:
        problems.append(
            f"name can no longer contain more than {MAX_NAME_LENGTH} characters"
        )
    if name.lower() != name:
        problems.append("name can no longer contain capital letters")
    if _SPECIAL_CHARS_RE.search(name.split("/")[-1]):
        problems.append("name can no longer contain special characters (\"~'!()*\")")
    if not _url_friendly(name):
        problems.append("name can only contain URL-friendly characters")
    return NameCheck(name=name, problems=tuple(problems))


def naming_restriction_message(check: NameCheck) -> str:
    """Format the user-facing rejection text for an invalid name.

    Example:
        >>> print(naming_restriction_message(check_project_name("Bad")))
        Cannot create a project named "Bad" because of npm naming restrictions:
        <BLANKLINE>
          * name can no longer contain capital letters
    """
    lines = [
        f'Cannot create a project named "{check.name}" because of npm naming restrictions:',
        "",
    ]
    lines.extend(f"  * {problem}" for problem in check.problems)
    return "\n".join(lines)


def package_name(dependency: str) -> str:
    """Strip a version or tag from a dependency spec.

    Example:
        >>> package_name("@types/react@18.2.0")
        '@types/react'
    """
    if dependency.startswith("@"):
        scope, _, rest = dependency[1:].partition("/")
        package, _, _version = rest.partition("@")
        return f"@{scope}/{package}"
    return dependency.partition("@")[0]


def conflicting_dependency(name: str, dependencies: Iterable[str]) -> str | None:
    """Return the dependency ``name`` collides with, if any.

    Example:
        >>> conflicting_dependency("react", ["react@18", "react-dom"])
        'react'
        >>> conflicting_dependency("my-app", ["react"]) is None
        True
    """
    for dependency in dependencies:
        if package_name(dependency) == name:
            return package_name(dependency)
    return None
