"""Typed parking spot records produced by ingestion"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

METERED_ID_PREFIX = "metered-"
METERED_LOCATION_LABEL = "Metered parking"

# Motorcycle meter rate codes published by SFMTA
RATE_DESCRIPTIONS: Dict[str, str] = {
    "MC1": "$0.70/hour",
    "MC2": "$0.60/hour",
    "MC3": "$0.40/hour",
    "MC5": "$0.25–$6.00/hour",
}


def describe_rate(rate_code: Optional[str]) -> Optional[str]:
    """Human readable rate for a rate code, None for unknown codes"""
    if rate_code is None:
        return None
    return RATE_DESCRIPTIONS.get(rate_code)


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees"""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ParkingSpot:
    """Represents one motorcycle parking location"""
    id: str
    street: str
    location: str
    number_of_spaces: Optional[int]
    coordinate: Coordinate
    neighborhood: Optional[str]
    is_metered: bool
    rate_code: Optional[str] = None

    def __post_init__(self):
        if not self.is_metered and self.rate_code is not None:
            raise ValueError("rate_code is only allowed on metered spots")

    @property
    def rate_description(self) -> Optional[str]:
        return describe_rate(self.rate_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "street": self.street,
            "location": self.location,
            "numberOfSpaces": self.number_of_spaces,
            "lat": self.coordinate.latitude,
            "lon": self.coordinate.longitude,
            "neighborhood": self.neighborhood,
            "isMetered": self.is_metered,
            "rateCode": self.rate_code,
            "rateDescription": self.rate_description,
        }
