# src/versioning/nuget_version.py
"""NuGet package versions.

Registration catalogs publish SemVer 2.0 versions with an optional fourth
``revision`` component, e.g. ``5.0.0-preview.1.20120.5`` or ``1.0.0.1``.
Ordering follows SemVer 2.0 precedence:

- numeric components compare numerically, a missing component is 0;
- a pre-release sorts before the matching stable release;
- release labels compare identifier by identifier, numeric identifiers
  numerically and below alphanumeric ones, alphanumeric identifiers
  case-insensitively; a shorter label set that is a prefix sorts first;
- build metadata (after ``+``) is ignored.
"""

from __future__ import annotations

import re
from functools import total_ordering

_IDENTIFIER = re.compile(r"^[0-9A-Za-z-]+$")


@total_ordering
class NuGetVersion:
    """Immutable, comparable NuGet version."""

    __slots__ = ("major", "minor", "patch", "revision", "release_labels", "metadata")

    def __init__(
        self,
        major: int,
        minor: int = 0,
        patch: int = 0,
        revision: int = 0,
        release_labels: tuple[str, ...] = (),
        metadata: str | None = None,
    ) -> None:
        if min(major, minor, patch, revision) < 0:
            raise ValueError("version components must be non-negative")
        object.__setattr__(self, "major", major)
        object.__setattr__(self, "minor", minor)
        object.__setattr__(self, "patch", patch)
        object.__setattr__(self, "revision", revision)
        object.__setattr__(self, "release_labels", tuple(release_labels))
        object.__setattr__(self, "metadata", metadata)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def parse(cls, text: str) -> NuGetVersion:
        """Parse ``text``, raising ValueError when it is not a version."""
        value = text.strip()
        if not value:
            raise ValueError("empty version")

        core, plus, metadata = value.partition("+")
        if plus and not _valid_identifiers(metadata):
            raise ValueError(f"invalid build metadata in {text!r}")

        numbers, dash, release = core.partition("-")
        labels: tuple[str, ...] = ()
        if dash:
            if not _valid_identifiers(release):
                raise ValueError(f"invalid release label in {text!r}")
            labels = tuple(release.split("."))

        parts = numbers.split(".")
        if not 1 <= len(parts) <= 4:
            raise ValueError(f"expected 1 to 4 numeric components in {text!r}")
        if not all(part.isascii() and part.isdigit() for part in parts):
            raise ValueError(f"non-numeric version component in {text!r}")

        components = [int(part) for part in parts] + [0] * (4 - len(parts))
        return cls(*components, release_labels=labels, metadata=metadata if plus else None)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.release_labels)

    @property
    def release(self) -> str:
        return ".".join(self.release_labels)

    def to_normalized_string(self) -> str:
        """``major.minor.patch[.revision][-release]``; metadata is dropped."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.revision:
            text += f".{self.revision}"
        if self.release_labels:
            text += f"-{self.release}"
        return text

    def to_full_string(self) -> str:
        text = self.to_normalized_string()
        if self.metadata is not None:
            text += f"+{self.metadata}"
        return text

    def _sort_key(self) -> tuple:
        if self.release_labels:
            release = (0, tuple(_identifier_key(label) for label in self.release_labels))
        else:
            release = (1, ())
        return (self.major, self.minor, self.patch, self.revision, release)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NuGetVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __str__(self) -> str:
        return self.to_normalized_string()

    def __repr__(self) -> str:
        return f"NuGetVersion({self.to_full_string()!r})"


def _valid_identifiers(text: str) -> bool:
    return all(_IDENTIFIER.match(part) for part in text.split("."))


def _identifier_key(label: str) -> tuple[int, int, str]:
    if label.isascii() and label.isdigit():
        return (0, int(label), "")
    return (1, 0, label.lower())
