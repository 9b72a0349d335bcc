"""
CSV waypoint import and route export.

Waypoint files are plain Name,Latitude,Longitude tables with an optional
header row. Coordinate cells accept any notation the coordinate parser
understands, so "40° 30.5' N" works as well as 40.508333.
"""

import io
import csv
import logging
import pandas as pd
from typing import List, Sequence

from config.settings import CSV_FLOAT_FORMAT
from core.models.coordinate import Coordinate, Waypoint
from core.models.route import Leg, Route
from core.parsing.parser import parse
from core.validation import ValidationError, validate_waypoint_dataframe

logger = logging.getLogger(__name__)

WAYPOINT_COLUMNS = ['Name', 'Latitude', 'Longitude']


def _is_header(row: Sequence[str]) -> bool:
    text = ','.join(row).lower()
    return 'name' in text and 'latitude' in text


def load_waypoints_csv(csv_file) -> List[Waypoint]:
    """
    Load waypoints from CSV.

    Args:
        csv_file: Path or file-like object

    Returns:
        List of waypoints; rows that cannot be parsed are skipped with a warning

    Raises:
        ValidationError: If the file cannot be read as CSV
    """
    try:
        raw = pd.read_csv(
            csv_file,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            skip_blank_lines=True,
            on_bad_lines='skip',
        )
    except pd.errors.EmptyDataError:
        logger.warning("CSV file is empty")
        return []
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValidationError(f"Invalid CSV file: {str(e)}") from e

    if raw.shape[1] < 3:
        raise ValidationError(f"CSV needs at least 3 columns (Name, Latitude, Longitude), got {raw.shape[1]}")

    rows = []
    for index, row in raw.iloc[:, :3].iterrows():
        cells = [str(value).strip().strip('"') for value in row]

        if index == 0 and _is_header(cells):
            continue
        if not any(cells):
            continue

        name, lat_text, lon_text = cells
        try:
            rows.append({
                'name': name,
                'latitude': parse(lat_text, is_latitude=True),
                'longitude': parse(lon_text, is_latitude=False),
            })
        except ValidationError as e:
            logger.warning(f"Skipping invalid line {index + 1}: {','.join(cells)} - {e}")

    df = validate_waypoint_dataframe(
        pd.DataFrame(rows, columns=['name', 'latitude', 'longitude']), "CSV waypoints"
    )

    waypoints = [
        Waypoint.create(row['name'], Coordinate(row['latitude'], row['longitude']))
        for _, row in df.iterrows()
    ]
    logger.info(f"Successfully loaded {len(waypoints)} waypoints from CSV")
    return waypoints


def waypoints_to_dataframe(waypoints: Sequence[Waypoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [[w.name, w.latitude, w.longitude] for w in waypoints],
        columns=WAYPOINT_COLUMNS,
    )


def waypoints_to_csv(waypoints: Sequence[Waypoint]) -> str:
    """Serialize waypoints as a Name,Latitude,Longitude table."""
    return waypoints_to_dataframe(waypoints).to_csv(
        index=False, float_format=CSV_FLOAT_FORMAT, lineterminator='\n'
    )


def _format_leg_row(number: int, leg: Leg) -> List[str]:
    true_bearing = f"{leg.true_bearing:03.0f}°T"
    magnetic = f"{leg.magnetic_course:03.0f}°M" if leg.magnetic_course is not None else "-"
    if leg.variation is not None:
        variation = f"{abs(leg.variation):.1f}°{'E' if leg.variation >= 0 else 'W'}"
    else:
        variation = "-"
    hours = f"{leg.leg_hours:.2f}" if leg.leg_hours is not None else "-"
    eta = leg.eta.strftime("%Y-%m-%d %H:%M") if leg.eta is not None else "-"

    return [
        str(number), leg.from_waypoint.name, leg.to_waypoint.name, f"{leg.distance_nm:.1f}",
        true_bearing, magnetic, leg.cardinal, variation, hours, eta,
    ]


def route_to_csv(route: Route) -> str:
    """
    Serialize a route as a multi-section CSV document.

    Sections: route summary, numbered waypoint table, leg table.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')

    total_time = route.total_time
    writer.writerow(['Route Name', route.name])
    writer.writerow(['Total Distance (NM)', f"{route.total_distance_nm:.1f}"])
    writer.writerow(['Total Time', f"{total_time.total_seconds() / 3600:.1f} hours" if total_time else "-"])
    writer.writerow([])

    writer.writerow(['Waypoints'])
    table = waypoints_to_dataframe(route.waypoints)
    table.insert(0, 'Number', range(1, len(table) + 1))
    table.to_csv(buffer, index=False, float_format=CSV_FLOAT_FORMAT, lineterminator='\n')
    writer.writerow([])

    writer.writerow(['Legs'])
    writer.writerow(['Leg#', 'From', 'To', 'Distance (NM)', 'True Bearing', 'Magnetic Bearing',
                     'Cardinal', 'Variation', 'Time (hrs)', 'ETA'])
    for number, leg in enumerate(route.legs, start=1):
        writer.writerow(_format_leg_row(number, leg))

    logger.info(f"Exported route '{route.name}' with {len(route.legs)} legs to CSV")
    return buffer.getvalue()
