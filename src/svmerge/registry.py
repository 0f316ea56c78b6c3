"""Feature-kind registry.

Maps kind names and file suffixes to FeatureKind descriptors. The built-in
evidence kinds are registered at import; additional kinds can be added with
register_kind():

    from svmerge.registry import register_kind

    register_kind(MY_KIND)
"""

from __future__ import annotations

import logging
from pathlib import Path

from svmerge.exceptions import UnknownFeatureFormat
from svmerge.kinds import BUILTIN_KINDS, FeatureKind

logger = logging.getLogger(__name__)

COMPRESSED_SUFFIXES = (".gz", ".bgz")

_kind_registry: dict[str, FeatureKind] = {}


def register_kind(kind: FeatureKind) -> None:
    """Register a feature kind. A kind with the same name is replaced."""
    _kind_registry[kind.name] = kind
    logger.debug("Registered feature kind: %s (%s)", kind.name, kind.suffix)


def get_kind(name: str) -> FeatureKind:
    """Look up a registered kind by name."""
    kind = _kind_registry.get(name)
    if kind is None:
        raise UnknownFeatureFormat(f"Unknown feature kind: {name}. Registered: {sorted(_kind_registry)}")
    return kind


def list_registered_kinds() -> dict[str, FeatureKind]:
    """Return all registered kinds."""
    return dict(_kind_registry)


def strip_compression(path: str | Path) -> tuple[str, bool]:
    """Return the lowercased path without a compression suffix, and whether it had one."""
    name = str(path).lower()
    for suffix in COMPRESSED_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)], True
    return name, False


def find_kind_for_path(path: str | Path) -> FeatureKind:
    """Find the kind whose suffix matches a path, ignoring compression."""
    name, _ = strip_compression(path)
    for kind in _kind_registry.values():
        if name.endswith(kind.suffix):
            return kind
    suffixes = ", ".join(sorted(k.suffix for k in _kind_registry.values()))
    raise UnknownFeatureFormat(f"No feature kind handles {path}. Known suffixes: {suffixes}")


def _register_core_kinds() -> None:
    for kind in BUILTIN_KINDS:
        register_kind(kind)


_register_core_kinds()
