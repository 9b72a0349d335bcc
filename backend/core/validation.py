"""
Input validation utilities for core functions.

This module defines the error taxonomy used across the application and the
validation helpers that guard route inputs, tabular waypoint data and uploads.
"""

import pandas as pd
import numpy as np
import logging
from typing import Any, Optional, Sequence, Union
from pathlib import Path

from core.constants import MAX_LATITUDE_DEGREES, MAX_LONGITUDE_DEGREES

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


class CoordinateFormatError(ValidationError):
    """Coordinate text could not be parsed, or minutes/seconds are outside [0, 60)."""
    pass


class CoordinateRangeError(ValidationError):
    """Coordinate magnitude exceeds the latitude or longitude limit."""
    pass


def validate_latitude(latitude: float, context: str = "Latitude") -> float:
    """
    Validate a latitude in decimal degrees.

    Raises:
        CoordinateRangeError: If the value is not finite or outside [-90, 90]
    """
    if latitude is None or np.isnan(latitude) or np.isinf(latitude):
        raise CoordinateRangeError(f"{context}: Invalid value: {latitude}")
    if abs(latitude) > MAX_LATITUDE_DEGREES:
        raise CoordinateRangeError(f"{context}: {latitude} is out of range (must be -90 to 90)")
    return float(latitude)


def validate_longitude(longitude: float, context: str = "Longitude") -> float:
    """
    Validate a longitude in decimal degrees.

    Raises:
        CoordinateRangeError: If the value is not finite or outside [-180, 180]
    """
    if longitude is None or np.isnan(longitude) or np.isinf(longitude):
        raise CoordinateRangeError(f"{context}: Invalid value: {longitude}")
    if abs(longitude) > MAX_LONGITUDE_DEGREES:
        raise CoordinateRangeError(f"{context}: {longitude} is out of range (must be -180 to 180)")
    return float(longitude)


def validate_speed(speed_knots: Union[int, float, str, None], context: str = "Speed") -> Optional[float]:
    """
    Validate a vessel speed.

    Args:
        speed_knots: Speed in knots, or None when not supplied
        context: Context description for error messages

    Returns:
        Speed as float, or None

    Raises:
        ValidationError: If the speed is negative or not a number
    """
    if speed_knots is None:
        return None

    try:
        speed = float(speed_knots)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{context}: Cannot convert to float: {speed_knots}") from e

    if np.isnan(speed) or np.isinf(speed):
        raise ValidationError(f"{context}: Invalid value: {speed}")

    if speed < 0:
        raise ValidationError(f"{context}: Must not be negative, got {speed}")

    return speed


def validate_route_waypoints(waypoints: Sequence[Any], minimum: int = 2, context: str = "Route") -> None:
    """
    Ensure a route has enough waypoints to produce legs.

    Raises:
        ValidationError: If fewer than `minimum` waypoints are given
    """
    if waypoints is None:
        raise ValidationError(f"{context}: Waypoint list is None")

    if len(waypoints) < minimum:
        raise ValidationError(f"{context}: At least {minimum} waypoints required, got {len(waypoints)}")


def validate_waypoint_dataframe(df: pd.DataFrame, context: str = "Waypoint data") -> pd.DataFrame:
    """
    Validate a waypoint DataFrame has required columns and valid data.

    Rows with missing or out-of-range coordinates are dropped with a warning
    rather than failing the whole table.

    Args:
        df: DataFrame with 'name', 'latitude', 'longitude' columns
        context: Context description for error messages

    Returns:
        Validated DataFrame

    Raises:
        ValidationError: If validation fails
    """
    if df is None:
        raise ValidationError(f"{context}: DataFrame is None")

    if df.empty:
        return df

    required_columns = ['name', 'latitude', 'longitude']
    missing_columns = [col for col in required_columns if col not in df.columns]

    if missing_columns:
        raise ValidationError(f"{context}: Missing required columns: {missing_columns}")

    valid = (
        df['latitude'].between(-MAX_LATITUDE_DEGREES, MAX_LATITUDE_DEGREES)
        & df['longitude'].between(-MAX_LONGITUDE_DEGREES, MAX_LONGITUDE_DEGREES)
    )
    invalid_count = int((~valid).sum())
    if invalid_count:
        logger.warning(f"{context}: Dropping {invalid_count} rows with invalid coordinates")

    cleaned = df[valid].reset_index(drop=True)
    logger.debug(f"{context}: Validation passed for {len(cleaned)} waypoints")
    return cleaned


def validate_file_upload(uploaded_file: Any, allowed_suffixes: Sequence[str] = ('.gpx',),
                         max_size: int = 10 * 1024 * 1024) -> None:
    """
    Validate uploaded file before processing.

    Args:
        uploaded_file: File-like object, optionally with `name` and `size`
        allowed_suffixes: Accepted file extensions (lower case)
        max_size: Maximum size in bytes

    Raises:
        ValidationError: If file validation fails
    """
    if uploaded_file is None:
        raise ValidationError("No file uploaded")

    if hasattr(uploaded_file, 'size') and uploaded_file.size > max_size:
        raise ValidationError(f"File too large: {uploaded_file.size / 1024 / 1024:.1f}MB "
                              f"(max {max_size / 1024 / 1024:.0f}MB)")

    name = getattr(uploaded_file, 'name', None)
    if isinstance(name, str):
        file_path = Path(name)
        if file_path.suffix.lower() not in allowed_suffixes:
            raise ValidationError(f"Invalid file type: {file_path.suffix} "
                                  f"(expected {', '.join(allowed_suffixes)})")

    logger.debug(f"File validation passed: {getattr(uploaded_file, 'name', 'unknown')}")
