import math
from typing import Optional
from dataclasses import dataclass

from .validation import ValidationError

EARTH_RADIUS_KM = 6371.0  # Earth mean radius


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great circle distance between two points using the Haversine formula.

    Args:
        lat1: Latitude of the first point in decimal degrees
        lon1: Longitude of the first point in decimal degrees
        lat2: Latitude of the second point in decimal degrees
        lon2: Longitude of the second point in decimal degrees

    Returns:
        Distance in kilometers

    Note:
        Inputs are not validated, out of range degrees are simply wrapped
        by the trigonometry.
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    # Haversine formula
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points
    a = min(max(a, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


@dataclass(frozen=True)
class NavPoint:
    """
    A point on the Earth's surface with an optional name.

    All coordinates are stored in decimal degrees:
    - Latitude: -90 to +90 degrees (negative for South, positive for North)
    - Longitude: -180 to +180 degrees (negative for West, positive for East)

    All distances are in kilometers, bearings in degrees (0-360, 0 is North).
    """

    latitude: float
    longitude: float
    name: Optional[str] = None

    def __post_init__(self):
        """Validate coordinates after initialization."""
        if not -90 <= self.latitude <= 90:
            raise ValidationError("latitude", "Latitude must be between -90 and 90 degrees", self.latitude)
        if not -180 <= self.longitude <= 180:
            raise ValidationError("longitude", "Longitude must be between -180 and 180 degrees", self.longitude)

    def distance_to(self, other: 'NavPoint') -> float:
        """Great circle distance to another point in kilometers."""
        return calculate_distance(self.latitude, self.longitude, other.latitude, other.longitude)

    def bearing_to(self, other: 'NavPoint') -> float:
        """
        Initial bearing to another point.

        Returns:
            Bearing in degrees in [0, 360)
        """
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlon = math.radians(other.longitude - self.longitude)

        y = math.sin(dlon) * math.cos(lat2)
        x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
        bearing = math.degrees(math.atan2(y, x))
        return (bearing + 360) % 360

    def __str__(self) -> str:
        name_str = f"{self.name} " if self.name else ""
        return f"{name_str}({self.latitude}, {self.longitude})"
