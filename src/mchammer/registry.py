"""Process-wide counters backing versioned model types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TagUsage:
    """How many identities and versions were issued for one version tag."""

    tag: int
    identities: int
    versions: int


@dataclass(slots=True)
class VersionRegistry:
    """Hands out version tags for definitions and identity/version numbers for instances.

    Tags are unique per registry. Identity and version numbers are sequences kept
    per tag, so two definitions with identical fields never share a sequence.
    Every increment happens under a single lock.
    """

    start: int = 1
    _lock: Lock = field(default_factory=Lock, repr=False)
    _next_tag: int = field(init=False, repr=False)
    _identities: dict[int, int] = field(default_factory=dict, repr=False)
    _versions: dict[int, int] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._next_tag = self.start

    @classmethod
    def from_settings(cls, settings: Settings) -> VersionRegistry:
        return cls(start=settings.counter_start)

    def next_tag(self) -> int:
        """Reserve a version tag for a new model definition."""

        with self._lock:
            tag = self._next_tag
            self._next_tag += 1
            self._identities[tag] = self.start
            self._versions[tag] = self.start
        logger.debug("Issued version tag %s", tag)
        return tag

    def next_identity(self, tag: int) -> int:
        with self._lock:
            value = self._take(self._identities, tag)
        return value

    def next_version(self, tag: int) -> int:
        with self._lock:
            value = self._take(self._versions, tag)
        return value

    def describe(self, tag: int) -> TagUsage:
        with self._lock:
            try:
                identities = self._identities[tag] - self.start
                versions = self._versions[tag] - self.start
            except KeyError as exc:
                msg = f"Unknown version tag {tag}"
                raise KeyError(msg) from exc
        return TagUsage(tag=tag, identities=identities, versions=versions)

    def _take(self, counters: dict[int, int], tag: int) -> int:
        try:
            value = counters[tag]
        except KeyError as exc:
            msg = f"Unknown version tag {tag}"
            raise KeyError(msg) from exc
        counters[tag] = value + 1
        return value


registry = VersionRegistry.from_settings(get_settings())


__all__ = ["TagUsage", "VersionRegistry", "registry"]
