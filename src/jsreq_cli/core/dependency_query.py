"""Parsing of packager dependency queries.

A query names one or more packages joined by ``+``, each as
``name@version``::

    react@16.8.0+@babel/core@7.0.0

The query may arrive URL-encoded and with a leading slash (as a request path).
"""

from urllib.parse import unquote


def parse_dependency_query(query: str) -> dict[str, str]:
    """Parse a dependency query into an ordered name -> version mapping.

    Each entry is split at its last ``@`` so scoped package names keep their
    leading ``@``. When a name repeats, the later version wins.

    Args:
        query: Query string, optionally URL-encoded and prefixed with ``/``.

    Returns:
        Mapping of package name to version, in query order.

    Raises:
        ValueError: If an entry has no name or no version.
    """
    decoded = unquote(query)
    if decoded.startswith("/"):
        decoded = decoded[1:]

    dependencies: dict[str, str] = {}
    for entry in decoded.split("+"):
        name, _, version = entry.rpartition("@")
        if not name or not version:
            raise ValueError(f"Invalid dependency {entry!r}: expected name@version")
        dependencies[name] = version
    return dependencies


def format_dependency_query(dependencies: dict[str, str]) -> str:
    """Build a query string from a name -> version mapping."""
    return "+".join(f"{name}@{version}" for name, version in dependencies.items())
