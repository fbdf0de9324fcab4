"""Mowing path output and time estimation."""

import csv
import json
from typing import TextIO, Optional

from shapely.geometry import LineString, mapping

from .config import DEFAULT_MOWING_SPEED_MPH, DEFAULT_TURN_OVERHEAD_SECONDS
from .planner import PlanResponse
from .units import path_length_meters

METERS_PER_MILE = 1609.344
OUTPUT_FORMATS = ('json', 'geojson', 'csv')


class PathWriter:
    """Write a planned path to disk."""

    def __init__(
        self,
        mowing_speed_mph: float = DEFAULT_MOWING_SPEED_MPH,
        turn_overhead_seconds: float = DEFAULT_TURN_OVERHEAD_SECONDS,
    ):
        """Initialize the path writer.

        Args:
            mowing_speed_mph: Mower ground speed in miles per hour, default 3
            turn_overhead_seconds: Extra time spent at each path vertex, default 1
        """
        self.mowing_speed_mph = mowing_speed_mph
        self.turn_overhead_seconds = turn_overhead_seconds
        self.length_meters = 0.0
        self.time_estimate_minutes = 0.0

    def write(self, response: Optional[PlanResponse], output_file: TextIO, fmt: str = 'json'):
        """Write the path and update the length and time estimates.

        Args:
            response: Planned path
            output_file: File handle to write to
            fmt: 'json' (lat/lon pairs), 'geojson' (lon/lat LineString) or 'csv'
        """
        if response is None:
            raise ValueError("No plan provided for path output")
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Invalid output format '{fmt}'. Must be one of: {', '.join(OUTPUT_FORMATS)}")

        self.length_meters = path_length_meters(response.path)
        self.time_estimate_minutes = self.estimate_minutes(response)

        if fmt == 'json':
            body = response.to_dict()
            body['lengthMeters'] = round(self.length_meters, 2)
            body['estimatedMinutes'] = round(self.time_estimate_minutes, 2)
            json.dump(body, output_file, indent=2)
            output_file.write("\n")
        elif fmt == 'geojson':
            json.dump(self._feature(response), output_file, indent=2)
            output_file.write("\n")
        else:
            writer = csv.writer(output_file)
            writer.writerow(['index', 'latitude', 'longitude'])
            for index, (lat, lon) in enumerate(response.path):
                writer.writerow([index, f"{lat:.10f}", f"{lon:.10f}"])

    def estimate_minutes(self, response: PlanResponse) -> float:
        """Estimated mowing time in minutes.

        Ground distance at mowing speed, plus a fixed overhead per vertex for
        turning, plus a 5% buffer for slowing down at corners.
        """
        if not response.path:
            return 0.0

        meters_per_minute = self.mowing_speed_mph * METERS_PER_MILE / 60.0
        travel_minutes = path_length_meters(response.path) / meters_per_minute
        turn_minutes = (len(response.path) * self.turn_overhead_seconds) / 60.0

        return (travel_minutes + turn_minutes) * 1.05

    def _feature(self, response: PlanResponse) -> dict:
        if len(response.path) >= 2:
            geometry = mapping(LineString([(lon, lat) for lat, lon in response.path]))
        else:
            # LineString needs two points
            geometry = {'type': 'LineString', 'coordinates': [[lon, lat] for lat, lon in response.path]}

        return {
            'type': 'Feature',
            'geometry': geometry,
            'properties': {
                'lengthMeters': round(self.length_meters, 2),
                'estimatedMinutes': round(self.time_estimate_minutes, 2),
            },
        }
