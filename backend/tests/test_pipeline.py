"""Tests for the pipeline orchestrator"""
import gzip
import json
import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from motopark.ingestion import ingest
from motopark.pipeline import ParkingDataPipeline, main, parse_args


def write_exports(data_dir: Path, metered: bool = True):
    unmetered_row = [None] * 20
    unmetered_row[10] = "STEINER ST"
    unmetered_row[12] = "1000 STEINER ST"
    unmetered_row[13] = "6"
    unmetered_row[17] = "POINT (-122.433569267 37.77868774)"
    unmetered_row[19] = "Western Addition"
    (data_dir / "unmetered.json").write_text(json.dumps({"data": [unmetered_row]}), encoding="utf-8")

    if metered:
        metered_row = [None] * 25
        metered_row[19], metered_row[21], metered_row[22], metered_row[23] = "MC2", "2000", "BAY ST", "S-1"
        metered_row[24] = [None, "37.798279", "-122.426623", None, False]
        (data_dir / "metered.json").write_text(
            json.dumps({"data": [metered_row, metered_row, metered_row]}), encoding="utf-8"
        )


class TestParkingDataPipeline:
    """Tests for ParkingDataPipeline"""

    @pytest.mark.asyncio
    async def test_run_writes_bundle(self, tmp_path):
        """A full run writes the dated bundle and the latest copy"""
        write_exports(tmp_path)
        output_dir = tmp_path / "output"
        pipeline = ParkingDataPipeline(data_dir=tmp_path, output_dir=output_dir, compress=False)

        assert await pipeline.run()

        latest = json.loads((output_dir / "parking_spots_latest.json").read_text(encoding="utf-8"))
        assert [spot["id"] for spot in latest["spots"]] == ["1000 STEINER ST-STEINER ST", "metered-S-1"]
        assert latest["spots"][1]["numberOfSpaces"] == 3
        assert pipeline.run_stats["output_path"].exists()

    @pytest.mark.asyncio
    async def test_concurrent_matches_sync(self, tmp_path):
        """Concurrent normalization gives the same collection as ingest"""
        write_exports(tmp_path)
        pipeline = ParkingDataPipeline(data_dir=tmp_path, output_dir=tmp_path / "out")

        result = await pipeline.ingest()
        expected = ingest(
            (tmp_path / "unmetered.json").read_bytes(),
            (tmp_path / "metered.json").read_bytes(),
        )
        assert result.spots == expected.spots

    @pytest.mark.asyncio
    async def test_missing_metered_file(self, tmp_path):
        """A missing export leaves the other dataset usable"""
        write_exports(tmp_path, metered=False)
        pipeline = ParkingDataPipeline(data_dir=tmp_path, output_dir=tmp_path / "out")

        assert await pipeline.run(write_output=False)
        assert not pipeline.result.metered.available
        assert pipeline.result.unmetered_count == 1
        assert not (tmp_path / "out").exists()

    @pytest.mark.asyncio
    async def test_compressed_output(self, tmp_path):
        """Compressed bundles are gzip JSON"""
        write_exports(tmp_path)
        output_dir = tmp_path / "output"
        pipeline = ParkingDataPipeline(data_dir=tmp_path, output_dir=output_dir, compress=True)

        assert await pipeline.run()

        with gzip.open(output_dir / "parking_spots_latest.json.gz", "rt", encoding="utf-8") as f:
            assert json.load(f)["stats"]["totalSpots"] == 2


class TestCli:
    """Tests for the command line entry point"""

    def test_parse_args(self):
        args = parse_args(["--data-dir", "in", "--no-write"])
        assert args.data_dir == Path("in")
        assert args.write_output is False
        assert args.verbose is False

    def test_main_exit_code(self, tmp_path):
        write_exports(tmp_path)
        assert main(["--data-dir", str(tmp_path), "--output-dir", str(tmp_path / "out")]) == 0
        assert (tmp_path / "out" / "parking_spots_latest.json").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
