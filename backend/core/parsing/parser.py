"""
Coordinate text parsing.

Accepts latitude or longitude text in decimal degrees, degrees and decimal
minutes, or degrees minutes seconds, with or without degree/minute/second
glyphs and with the hemisphere letter before or after the value. Anchored
patterns are tried first; anything they reject is split into whitespace
tokens and parsed positionally.
"""

import re
import logging
from typing import List, Optional, Tuple

from core.constants import (
    DEGREE_GLYPHS, MINUTE_GLYPHS, SECOND_GLYPHS, HEMISPHERE_LETTERS,
    NEGATIVE_HEMISPHERES, MAX_LATITUDE_DEGREES, MAX_LONGITUDE_DEGREES,
    MINUTES_PER_DEGREE, SECONDS_PER_DEGREE
)
from core.models.coordinate import Coordinate
from core.validation import ValidationError, CoordinateFormatError, CoordinateRangeError

logger = logging.getLogger(__name__)

_DEG = re.escape(DEGREE_GLYPHS)
_MIN = re.escape(MINUTE_GLYPHS)
_SEC = re.escape(SECOND_GLYPHS)

DMS_PATTERN = re.compile(
    rf"^\s*([NSEW])?\s*(-?\d{{1,3}})[{_DEG}\s]+(\d{{1,2}})[{_MIN}\s]+"
    rf"(\d{{1,2}}(?:\.\d+)?)[{_SEC}\s]*([NSEW])?\s*$",
    re.IGNORECASE,
)

DM_PATTERN = re.compile(
    rf"^\s*([NSEW])?\s*(-?\d{{1,3}})[{_DEG}\s]+(\d{{1,2}}(?:\.\d+)?)[{_MIN}\s]*([NSEW])?\s*$",
    re.IGNORECASE,
)

DECIMAL_PATTERN = re.compile(
    rf"^\s*([NSEW])?\s*(-?\d{{1,3}}(?:\.\d+)?)[{_DEG}\s]*([NSEW])?\s*$",
    re.IGNORECASE,
)

NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

_GLYPHS = DEGREE_GLYPHS + MINUTE_GLYPHS + SECOND_GLYPHS


def parse(text: str, is_latitude: bool) -> float:
    """
    Parse a latitude or longitude from text.

    Args:
        text: Coordinate text in any supported notation
        is_latitude: True for latitude (limit 90), False for longitude (limit 180)

    Returns:
        Decimal degrees, negative for S/W

    Raises:
        CoordinateFormatError: If the text is empty, unparseable, or has
            minutes/seconds outside [0, 60)
        CoordinateRangeError: If the magnitude exceeds the axis limit
    """
    if text is None or not str(text).strip():
        raise CoordinateFormatError("Coordinate input cannot be empty")

    cleaned = str(text).strip().replace(",", " ")

    value = _parse_with_patterns(cleaned)
    if value is None:
        value = _parse_tokens(cleaned)

    _check_range(value, is_latitude)
    logger.debug(f"Parsed '{text}' as {value}")
    return value


def parse_coordinate(latitude_text: str, longitude_text: str) -> Coordinate:
    """Parse a latitude/longitude text pair into a Coordinate."""
    latitude = parse(latitude_text, is_latitude=True)
    longitude = parse(longitude_text, is_latitude=False)
    return Coordinate(latitude, longitude)


def try_parse_coordinate(latitude_text: str, longitude_text: str) -> Optional[Coordinate]:
    """
    Parse a latitude/longitude text pair, returning None instead of raising.
    """
    try:
        return parse_coordinate(latitude_text, longitude_text)
    except ValidationError as e:
        logger.debug(f"Could not parse coordinate ({latitude_text!r}, {longitude_text!r}): {e}")
        return None


def _check_range(value: float, is_latitude: bool) -> None:
    limit = MAX_LATITUDE_DEGREES if is_latitude else MAX_LONGITUDE_DEGREES
    if abs(value) > limit:
        axis = "latitude" if is_latitude else "longitude"
        raise CoordinateRangeError(f"Coordinate value {value} is out of range for {axis}")


def _check_minutes_seconds(minutes: float, seconds: float = 0.0) -> None:
    if not 0 <= minutes < MINUTES_PER_DEGREE:
        raise CoordinateFormatError(f"Minutes must be between 0 and 60: {minutes}")
    if not 0 <= seconds < 60:
        raise CoordinateFormatError(f"Seconds must be between 0 and 60: {seconds}")


def _assemble(degrees_text: str, minutes: float, seconds: float, hemisphere: Optional[str]) -> float:
    """
    Combine parts into signed decimal degrees.

    A hemisphere letter decides the sign; otherwise the sign of the degrees
    text applies to the whole value, so "-0 30" is -0.5.
    """
    _check_minutes_seconds(minutes, seconds)
    magnitude = abs(float(degrees_text)) + minutes / MINUTES_PER_DEGREE + seconds / SECONDS_PER_DEGREE
    negative = degrees_text.strip().startswith("-")
    return _apply_hemisphere(-magnitude if negative else magnitude, hemisphere)


def _apply_hemisphere(value: float, hemisphere: Optional[str]) -> float:
    if hemisphere is None:
        return value
    if hemisphere.upper() in NEGATIVE_HEMISPHERES:
        return -abs(value)
    return abs(value)


def _parse_with_patterns(text: str) -> Optional[float]:
    """Try the anchored DMS, D-M and decimal patterns in that order."""
    match = DMS_PATTERN.match(text)
    if match:
        prefix, degrees, minutes, seconds, suffix = match.groups()
        return _assemble(degrees, float(minutes), float(seconds), suffix or prefix)

    match = DM_PATTERN.match(text)
    if match:
        prefix, degrees, minutes, suffix = match.groups()
        return _assemble(degrees, float(minutes), 0.0, suffix or prefix)

    match = DECIMAL_PATTERN.match(text)
    if match:
        prefix, degrees, suffix = match.groups()
        return _apply_hemisphere(float(degrees), suffix or prefix)

    return None


def _extract_hemisphere(token: str) -> Tuple[Optional[str], str]:
    """Split a trailing or leading hemisphere letter off a token."""
    if not token:
        return None, token

    last = token[-1].upper()
    if last in HEMISPHERE_LETTERS:
        return last, token[:-1].strip()

    first = token[0].upper()
    if first in HEMISPHERE_LETTERS:
        return first, token[1:].strip()

    return None, token


def _to_number(token: str, part: str) -> float:
    stripped = token.strip(_GLYPHS + " ")
    if not NUMBER_PATTERN.match(stripped):
        raise CoordinateFormatError(f"Cannot parse {part}: {token}")
    return float(stripped)


def _parse_tokens(text: str) -> float:
    """
    Positional fallback: 1 token is D, 2 are D M, 3 are D M S.

    One hemisphere letter may trail or lead any token; the search runs from
    the last token backwards. A fourth token may only hold that letter.
    """
    tokens: List[str] = text.split()
    if not 1 <= len(tokens) <= 4:
        raise CoordinateFormatError(f"Unable to parse coordinate: {text}")

    hemisphere = None
    for index in range(len(tokens) - 1, -1, -1):
        hemisphere, remainder = _extract_hemisphere(tokens[index].strip(_GLYPHS))
        if hemisphere is not None:
            tokens[index] = remainder
            break

    parts = [token for token in tokens if token.strip(_GLYPHS + " ")]
    if not 1 <= len(parts) <= 3:
        raise CoordinateFormatError(f"Unable to parse coordinate: {text}")

    degrees_text = parts[0].strip(_GLYPHS + " ")
    _to_number(degrees_text, "degrees")
    minutes = _to_number(parts[1], "minutes") if len(parts) > 1 else 0.0
    seconds = _to_number(parts[2], "seconds") if len(parts) > 2 else 0.0

    if len(parts) == 1:
        return _apply_hemisphere(float(degrees_text), hemisphere)

    return _assemble(degrees_text, minutes, seconds, hemisphere)
