"""Read-only queries over the ingested spot collection"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from shapely.geometry import Point, box

from .models.parking_spot import Coordinate, ParkingSpot

DEFAULT_SPAN = 0.01


def _point(coordinate: Coordinate) -> Point:
    return Point(coordinate.longitude, coordinate.latitude)


@dataclass(frozen=True)
class MapRegion:
    """A center point with latitude/longitude spans, as shown on a map"""
    center: Coordinate
    latitude_delta: float = DEFAULT_SPAN
    longitude_delta: float = DEFAULT_SPAN

    @property
    def bounds(self):
        half_lat = self.latitude_delta / 2
        half_lon = self.longitude_delta / 2
        return box(
            self.center.longitude - half_lon,
            self.center.latitude - half_lat,
            self.center.longitude + half_lon,
            self.center.latitude + half_lat,
        )

    def contains(self, coordinate: Coordinate) -> bool:
        # covers() includes the boundary
        return self.bounds.covers(_point(coordinate))


def spots_in_region(spots: Iterable[ParkingSpot], region: Optional[MapRegion]) -> List[ParkingSpot]:
    """Spots visible in region; every spot when there is no region yet"""
    if region is None:
        return list(spots)
    bounds = region.bounds
    return [spot for spot in spots if bounds.covers(_point(spot.coordinate))]


def count_by_kind(spots: Iterable[ParkingSpot]) -> Tuple[int, int]:
    """Return (metered, unmetered) counts"""
    metered = 0
    unmetered = 0
    for spot in spots:
        if spot.is_metered:
            metered += 1
        else:
            unmetered += 1
    return metered, unmetered


def find_spot(spots: Iterable[ParkingSpot], spot_id: Optional[str]) -> Optional[ParkingSpot]:
    if spot_id is None:
        return None
    return next((spot for spot in spots if spot.id == spot_id), None)
