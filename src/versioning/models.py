# src/versioning/models.py
"""Version range model.

Versions are ``NuGetVersion`` values, used as an opaque total order. A ``VersionRange`` only keeps its two bounds and their inclusivity;
every comparison downstream goes through these four fields.
"""

from __future__ import annotations

from dataclasses import dataclass

from rangefetch.versioning.nuget_version import NuGetVersion

__all__ = ["NuGetVersion", "VersionRange"]


@dataclass(frozen=True)
class VersionRange:
    """Interval over versions. A missing bound means -inf / +inf."""

    min_version: NuGetVersion | None = None
    min_inclusive: bool = False
    max_version: NuGetVersion | None = None
    max_inclusive: bool = False

    def __post_init__(self) -> None:
        if self.min_version is not None and self.max_version is not None:
            if self.min_version > self.max_version:
                raise ValueError(
                    f"min_version {self.min_version} is greater than "
                    f"max_version {self.max_version}"
                )

    @classmethod
    def closed(cls, lower: NuGetVersion, upper: NuGetVersion) -> VersionRange:
        """Range including both ``lower`` and ``upper``."""
        return cls(
            min_version=lower, min_inclusive=True,
            max_version=upper, max_inclusive=True,
        )

    @property
    def has_lower_bound(self) -> bool:
        return self.min_version is not None

    @property
    def has_upper_bound(self) -> bool:
        return self.max_version is not None

    @property
    def has_lower_and_upper_bounds(self) -> bool:
        return self.has_lower_bound and self.has_upper_bound

    def satisfies(self, version: NuGetVersion) -> bool:
        """Whether ``version`` lies inside this range."""
        if self.min_version is not None:
            if self.min_inclusive:
                if version < self.min_version:
                    return False
            elif version <= self.min_version:
                return False

        if self.max_version is not None:
            if self.max_inclusive:
                if version > self.max_version:
                    return False
            elif version >= self.max_version:
                return False

        return True

    def to_canonical_string(self) -> str:
        """Render in bracket notation, e.g. ``[1.0, 2.0)``.

        Parsing the result yields an equal range.
        """
        left = "[" if self.min_inclusive and self.min_version is not None else "("
        right = "]" if self.max_inclusive and self.max_version is not None else ")"
        low = str(self.min_version) if self.min_version is not None else ""
        high = str(self.max_version) if self.max_version is not None else ""
        if low and high:
            return f"{left}{low}, {high}{right}"
        if low:
            return f"{left}{low}, {right}"
        if high:
            return f"{left}, {high}{right}"
        return f"{left},{right}"

    def __str__(self) -> str:
        return self.to_canonical_string()
