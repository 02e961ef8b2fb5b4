"""Validate ingested parking spots for quality and consistency"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from ..config import METERED_DATASET_ID, SF_BOUNDS, UNMETERED_DATASET_ID
from ..models.parking_spot import METERED_ID_PREFIX, RATE_DESCRIPTIONS, ParkingSpot

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of data validation"""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str):
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)


class DataValidator:
    """
    Validates the unified spot collection.

    Errors mark collections the app must not ship; warnings flag data
    quality issues in the upstream exports.
    """

    # DataSF view ids the exports are expected to come from
    EXPECTED_DATASET_IDS = {
        "unmetered": UNMETERED_DATASET_ID,
        "metered": METERED_DATASET_ID,
    }

    def validate_result(self, result) -> ValidationResult:
        """
        Validate an IngestionResult: the spot collection plus the dataset reports.
        """
        validation = self.validate_spots(result.spots)

        for report in result.reports:
            if not report.available:
                validation.add_warning(
                    f"{report.name} dataset unavailable ({report.error_code}): {report.error}"
                )
                continue

            expected_id = self.EXPECTED_DATASET_IDS.get(report.name)
            actual_id = report.metadata.dataset_id if report.metadata else None
            if expected_id and actual_id and actual_id != expected_id:
                validation.add_warning(
                    f"{report.name} export is view {actual_id}, expected {expected_id}"
                )

        return validation

    def validate_spots(self, spots: Iterable[ParkingSpot]) -> ValidationResult:
        spots = list(spots)
        result = ValidationResult(is_valid=True)

        if not spots:
            result.add_warning("No parking spots ingested")

        self._check_ids(spots, result)

        unknown_rates = Counter()
        missing_spaces = 0
        outside_bounds = 0

        for spot in spots:
            if spot.is_metered:
                if spot.rate_code is not None and spot.rate_code not in RATE_DESCRIPTIONS:
                    unknown_rates[spot.rate_code] += 1
            elif spot.rate_code is not None:
                result.add_error(f"Unmetered spot {spot.id} has a rate code")

            if spot.number_of_spaces is None:
                missing_spaces += 1

            if not self._is_in_sf_bounds(spot.coordinate.latitude, spot.coordinate.longitude):
                outside_bounds += 1

        for code, count in sorted(unknown_rates.items()):
            result.add_warning(f"Unknown rate code {code} on {count} metered spots")

        if missing_spaces > 0:
            result.add_warning(f"{missing_spaces} spots without a space count")

        if outside_bounds > 0:
            result.add_warning(f"{outside_bounds} spots outside SF bounds")

        result.stats = {
            "spots_count": len(spots),
            "metered_count": sum(1 for s in spots if s.is_metered),
            "unmetered_count": sum(1 for s in spots if not s.is_metered),
            "validation_time": datetime.now(timezone.utc).isoformat(),
        }

        logger.info(
            f"Validation complete: valid={result.is_valid}, "
            f"errors={len(result.errors)}, warnings={len(result.warnings)}"
        )

        return result

    def _check_ids(self, spots: List[ParkingSpot], result: ValidationResult):
        """Duplicate ids across the two namespaces are errors, within one they are warnings"""
        kinds_by_id: Dict[str, set] = {}
        counts = Counter()

        for spot in spots:
            if not spot.is_metered and spot.id.startswith(METERED_ID_PREFIX):
                result.add_error(f"Unmetered spot uses reserved id prefix: {spot.id}")
            kinds_by_id.setdefault(spot.id, set()).add(spot.is_metered)
            counts[spot.id] += 1

        for spot_id, count in counts.items():
            if count < 2:
                continue
            if len(kinds_by_id[spot_id]) > 1:
                result.add_error(f"Spot id shared by metered and unmetered spots: {spot_id}")
            else:
                result.add_warning(f"Duplicate spot id: {spot_id}")

    def _is_in_sf_bounds(self, lat: float, lon: float) -> bool:
        """Check if coordinate is within San Francisco bounds"""
        return (
            SF_BOUNDS["min_lat"] <= lat <= SF_BOUNDS["max_lat"] and
            SF_BOUNDS["min_lon"] <= lon <= SF_BOUNDS["max_lon"]
        )
