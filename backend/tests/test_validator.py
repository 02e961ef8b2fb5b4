"""Tests for data validator"""
import json
import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from motopark.ingestion import ingest
from motopark.models import Coordinate, ParkingSpot
from motopark.validators import DataValidator


def make_spot(spot_id="1000 MISSION ST-MISSION ST", metered=False, rate_code=None,
              lat=37.7749, lon=-122.4194, spaces=4):
    return ParkingSpot(
        id=spot_id,
        street="1000 MISSION ST",
        location="Metered parking" if metered else "MISSION ST",
        number_of_spaces=spaces,
        coordinate=Coordinate(latitude=lat, longitude=lon),
        neighborhood="Mission",
        is_metered=metered,
        rate_code=rate_code,
    )


class TestDataValidator:
    """Tests for DataValidator"""

    def setup_method(self):
        """Set up test fixtures"""
        self.validator = DataValidator()

    def test_valid_spots(self):
        """A clean collection has no errors or warnings"""
        spots = [make_spot(), make_spot("metered-A12", metered=True, rate_code="MC1")]

        result = self.validator.validate_spots(spots)

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []
        assert result.stats["metered_count"] == 1
        assert result.stats["unmetered_count"] == 1

    def test_empty_collection_warning(self):
        """An empty collection is valid but flagged"""
        result = self.validator.validate_spots([])
        assert result.is_valid
        assert any("No parking spots" in w for w in result.warnings)

    def test_duplicate_id_warning(self):
        """Duplicate ids within one namespace are warnings"""
        result = self.validator.validate_spots([make_spot(), make_spot()])
        assert result.is_valid
        assert any("Duplicate spot id" in w for w in result.warnings)

    def test_cross_namespace_collision_error(self):
        """An id shared across namespaces is an error"""
        spots = [make_spot("metered-A12"), make_spot("metered-A12", metered=True)]
        result = self.validator.validate_spots(spots)
        assert not result.is_valid
        assert any("reserved id prefix" in e for e in result.errors)
        assert any("shared by metered and unmetered" in e for e in result.errors)

    def test_unknown_rate_code_warning(self):
        """Rate codes outside the vocabulary are flagged"""
        result = self.validator.validate_spots([make_spot("metered-B1", metered=True, rate_code="MC7")])
        assert any("Unknown rate code MC7" in w for w in result.warnings)

    def test_outside_sf_bounds_warning(self):
        """Spots outside SF are flagged"""
        result = self.validator.validate_spots([make_spot(lat=40.7128, lon=-74.0060)])
        assert any("outside SF bounds" in w for w in result.warnings)

    def test_missing_space_count_warning(self):
        """Spots without a count are flagged"""
        result = self.validator.validate_spots([make_spot(spaces=None)])
        assert any("without a space count" in w for w in result.warnings)

    def test_sf_bounds_check(self):
        """Test SF bounding box validation"""
        assert self.validator._is_in_sf_bounds(37.7749, -122.4194)
        assert not self.validator._is_in_sf_bounds(40.7128, -74.0060)
        assert not self.validator._is_in_sf_bounds(38.0, -122.4)

    def test_rate_code_on_unmetered_rejected(self):
        """The model itself refuses a rate code on an unmetered spot"""
        with pytest.raises(ValueError):
            make_spot(rate_code="MC1")


def metered_export(view_id):
    row = [None] * 25
    row[19] = "MC1"
    row[21] = "400"
    row[22] = "CASTRO ST"
    row[23] = "A12"
    row[24] = [None, "37.7600", "-122.4350", None, False]
    return json.dumps({"meta": {"view": {"id": view_id}}, "data": [row]}).encode("utf-8")


class TestValidateResult:
    """Tests for validating a whole ingestion run"""

    def setup_method(self):
        """Set up test fixtures"""
        self.validator = DataValidator()

    def test_expected_view_ids(self):
        """Exports from the expected views raise no dataset warnings"""
        unmetered = b'{"meta": {"view": {"id": "egmb-2zhs"}}, "data": []}'
        result = ingest(unmetered, metered_export("uf55-k7py"))

        validation = self.validator.validate_result(result)

        assert validation.is_valid
        assert validation.warnings == []

    def test_unexpected_view_id_warning(self):
        """An export from another view is flagged"""
        result = ingest(b'{"data": []}', metered_export("wrong-id"))
        validation = self.validator.validate_result(result)
        assert validation.is_valid
        assert "metered export is view wrong-id, expected uf55-k7py" in validation.warnings

    def test_unavailable_dataset_warning(self):
        """Unavailable datasets are reported with their error code"""
        result = ingest(b"<html>503</html>", None)

        validation = self.validator.validate_result(result)

        assert validation.is_valid
        assert any(w.startswith("unmetered dataset unavailable (STRUCTURAL_ERROR)") for w in validation.warnings)
        assert any(w.startswith("metered dataset unavailable (NOT_SUPPLIED)") for w in validation.warnings)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
