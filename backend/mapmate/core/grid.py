"""
Grid Generator: a fixed 3x3 lattice of query coordinates around a center.
"""
import math
from typing import List

from mapmate.models.geo_model import Coordinate, GridPoint

GRID_SIZE = 3
KM_PER_DEGREE_LAT = 111.32


def generate_grid(center: Coordinate, radius_km: float) -> List[GridPoint]:
    """
    Returns the 9 lattice points in row-major order (row = latitude offset,
    col = longitude offset). Index 4 is the center itself.
    A radius of 0 yields 9 copies of the center.
    """
    step_km = radius_km / (GRID_SIZE - 1)
    lat_step = step_km / KM_PER_DEGREE_LAT
    # Longitude degrees shrink with cos(latitude)
    lng_step = step_km / (KM_PER_DEGREE_LAT * math.cos(math.radians(center.lat)))

    points = []
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            points.append(GridPoint(
                row=row,
                col=col,
                lat=center.lat + (row - 1) * lat_step,
                lng=center.lng + (col - 1) * lng_step,
            ))
    return points
