# src/versioning/range_parser.py
"""Version-range expression parser.

Supported forms::

    1.0           >= 1.0
    [1.0]         exactly 1.0
    [1.0, 2.0)    1.0 <= v < 2.0
    (1.0,)        v > 1.0
    (,2.0]        v <= 2.0
    (,)           any version

An empty expression means ``[0.0.0-alpha, )``: every version, pre-releases
included. Floating ranges (``1.*``) are not supported.
"""

from __future__ import annotations

from rangefetch.errors import InvalidRangeFormatError, InvalidVersionError
from rangefetch.versioning.models import VersionRange
from rangefetch.versioning.nuget_version import NuGetVersion

DEFAULT_RANGE_EXPRESSION = "[0.0.0-alpha,)"


def parse_version(text: str) -> NuGetVersion:
    """Parse a single version string.

    Raises:
        InvalidVersionError: If ``text`` is not a valid version.
    """
    try:
        return NuGetVersion.parse(text)
    except ValueError as e:
        raise InvalidVersionError(text) from e


def parse_version_range(expression: str | None) -> VersionRange:
    """Parse ``expression`` into a canonical ``VersionRange``.

    Args:
        expression: Range expression. ``None`` or blank selects the
            default open-ended range starting at ``0.0.0-alpha``.

    Returns:
        VersionRange holding only bounds and inclusivity flags.

    Raises:
        InvalidRangeFormatError: If the expression is malformed or its
            bounds are inverted.
    """
    if expression is None or not expression.strip():
        expression = DEFAULT_RANGE_EXPRESSION

    text = expression.strip()

    if text[0] not in "[(" and text[-1] not in "])":
        # Bare version: minimum inclusive, no upper bound.
        version = _version_token(expression, text)
        return VersionRange(min_version=version, min_inclusive=True)

    if len(text) < 3:
        raise InvalidRangeFormatError(expression, "expression is too short")

    opening, closing = text[0], text[-1]
    if opening not in "[(":
        raise InvalidRangeFormatError(expression, "missing opening bracket")
    if closing not in "])":
        raise InvalidRangeFormatError(expression, "missing closing bracket")

    min_inclusive = opening == "["
    max_inclusive = closing == "]"
    body = text[1:-1]
    parts = body.split(",")

    if len(parts) > 2:
        raise InvalidRangeFormatError(expression, "too many commas")

    if len(parts) == 1:
        # "[1.0]" is an exact match; "(1.0)" and "[]" make no sense.
        if not (min_inclusive and max_inclusive):
            raise InvalidRangeFormatError(
                expression, "a single version requires inclusive brackets"
            )
        if not parts[0].strip():
            raise InvalidRangeFormatError(expression, "empty range")
        version = _version_token(expression, parts[0])
        return VersionRange(
            min_version=version, min_inclusive=True,
            max_version=version, max_inclusive=True,
        )

    low_text, high_text = parts[0].strip(), parts[1].strip()
    min_version = _version_token(expression, low_text) if low_text else None
    max_version = _version_token(expression, high_text) if high_text else None

    if min_version is not None and max_version is not None:
        if min_version > max_version:
            raise InvalidRangeFormatError(
                expression, "minimum version is greater than maximum version"
            )
        if min_version == max_version and not (min_inclusive and max_inclusive):
            raise InvalidRangeFormatError(
                expression, "range with equal bounds must be inclusive on both sides"
            )

    # Inclusivity only means something when the bound exists.
    return VersionRange(
        min_version=min_version,
        min_inclusive=min_inclusive and min_version is not None,
        max_version=max_version,
        max_inclusive=max_inclusive and max_version is not None,
    )


def _version_token(expression: str, token: str) -> NuGetVersion:
    """Parse one bound, reporting failures against the whole expression."""
    token = token.strip()
    if "*" in token:
        raise InvalidRangeFormatError(expression, "floating versions are not supported")
    try:
        return parse_version(token)
    except InvalidVersionError as e:
        raise InvalidRangeFormatError(expression, f"invalid version {token!r}") from e
