"""
Dotted field-path lookup over lead attribute maps

Each path segment indexes exactly one level deeper, so a lookup never walks
more than ``len(path.split("."))`` steps. Self-referential attribute maps
are therefore safe: the resolver only follows the path it is given.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from .models import Lead


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if segment.isdigit():
            index = int(segment)
            return current[index] if index < len(current) else None
    return None


def resolve(root: Any, path: str) -> Optional[Any]:
    """
    Resolve ``path`` (e.g. ``fields.enrichment.companySize``) against ``root``.

    Returns None when any segment is missing or when an intermediate value
    cannot be indexed. Never raises for absent data.
    """
    if not isinstance(path, str) or not path:
        return None
    current = root.as_attribute_map() if isinstance(root, Lead) else root
    for segment in path.split("."):
        if current is None:
            return None
        current = _step(current, segment)
    return current


def first_present(root: Any, paths: Sequence[str]) -> Optional[Any]:
    """Return the first non-empty value found along ``paths``"""
    for path in paths:
        value = resolve(root, path)
        if value is not None and value != "":
            return value
    return None
