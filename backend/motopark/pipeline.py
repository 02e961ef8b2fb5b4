"""Pipeline orchestrator for the SF motorcycle parking exports"""
import argparse
import asyncio
import gzip
import json
import logging
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .ingestion import (
    METERED,
    UNMETERED,
    IngestionResult,
    combine,
    generate_app_data,
    process_dataset,
)
from .query import count_by_kind
from .readers.dataset_reader import load_dataset_file
from .validators import DataValidator

logger = logging.getLogger(__name__)


class ParkingDataPipeline:
    """
    Loads both exports from disk, normalizes them, validates the result and
    writes the app bundle.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        output_dir: Optional[Path] = None,
        compress: bool = config.COMPRESS_OUTPUT,
    ):
        self.data_dir = Path(data_dir or config.DATA_DIR)
        self.output_dir = Path(output_dir or config.OUTPUT_DIR)
        self.compress = compress
        self.validator = DataValidator()
        self.result: Optional[IngestionResult] = None
        self.run_stats: Dict[str, Any] = {
            "start_time": None,
            "end_time": None,
            "validation_result": None,
            "output_path": None,
        }

    def _dataset_path(self, name: str) -> Path:
        filename = config.UNMETERED_FILENAME if name == UNMETERED else config.METERED_FILENAME
        return self.data_dir / filename

    async def ingest(self) -> IngestionResult:
        """Normalize both datasets concurrently; output order is fixed regardless"""
        unmetered_path = self._dataset_path(UNMETERED)
        metered_path = self._dataset_path(METERED)

        unmetered, metered = await asyncio.gather(
            asyncio.to_thread(process_dataset, UNMETERED, lambda: load_dataset_file(unmetered_path, UNMETERED)),
            asyncio.to_thread(process_dataset, METERED, lambda: load_dataset_file(metered_path, METERED)),
        )
        return combine(unmetered, metered)

    async def run(self, write_output: bool = True) -> bool:
        """
        Run the complete pipeline.

        Returns:
            True if the collection passed validation (and was written), False otherwise
        """
        self.run_stats["start_time"] = datetime.now(timezone.utc)
        logger.info("=" * 60)
        logger.info("Starting MotoPark SF ingestion")
        logger.info("=" * 60)

        logger.info("[Step 1/3] Ingesting datasets...")
        self.result = await self.ingest()

        for report in self.result.reports:
            if report.metadata:
                logger.info(
                    f"{report.name}: {report.metadata.name or 'unnamed'}, "
                    f"last modified {report.metadata.formatted_last_modified}"
                )

        logger.info("[Step 2/3] Validating data...")
        validation = self.validator.validate_result(self.result)
        self.run_stats["validation_result"] = validation

        if not validation.is_valid:
            logger.error("Validation failed!")
            for error in validation.errors:
                logger.error(f"  - {error}")
            return False

        if validation.warnings:
            logger.warning("Validation warnings:")
            for warning in validation.warnings:
                logger.warning(f"  - {warning}")

        if write_output:
            logger.info("[Step 3/3] Writing output...")
            self.run_stats["output_path"] = self._write_output(generate_app_data(self.result))

        self.run_stats["end_time"] = datetime.now(timezone.utc)
        duration = (self.run_stats["end_time"] - self.run_stats["start_time"]).total_seconds()

        metered, unmetered = count_by_kind(self.result.spots)
        logger.info("=" * 60)
        logger.info("Pipeline completed successfully!")
        logger.info(f"Duration: {duration:.1f} seconds")
        logger.info(f"Spots: {len(self.result.spots)} ({metered} metered, {unmetered} unmetered)")
        for report in self.result.reports:
            logger.info(
                f"  {report.name:10s}: {report.stats.rows_in:,} rows, "
                f"{report.stats.records_out:,} spots, {report.stats.rows_dropped:,} dropped"
            )
        logger.info("=" * 60)

        return True

    def _write_output(self, app_data: Dict[str, Any]) -> Path:
        """Write the dated bundle and refresh the latest copy"""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")

        output_path = self.output_dir / f"parking_spots_{timestamp}.json"
        latest_path = self.output_dir / "parking_spots_latest.json"

        if self.compress:
            output_path = output_path.with_suffix(".json.gz")
            latest_path = latest_path.with_suffix(".json.gz")
            with gzip.open(output_path, "wt", encoding="utf-8") as f:
                json.dump(app_data, f, indent=2, ensure_ascii=False)
        else:
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(app_data, f, indent=2, ensure_ascii=False)

        logger.info(f"Wrote output to {output_path}")

        shutil.copy(output_path, latest_path)
        logger.info(f"Updated latest copy: {latest_path}")
        return output_path


async def run_pipeline(
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    write_output: bool = True,
) -> bool:
    """Entry point for running the pipeline"""
    pipeline = ParkingDataPipeline(data_dir=data_dir, output_dir=output_dir)
    return await pipeline.run(write_output=write_output)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Normalize SF motorcycle parking exports")
    parser.add_argument("--data-dir", dest="data_dir", type=Path, default=None,
                        help=f"Directory holding {config.UNMETERED_FILENAME} and {config.METERED_FILENAME}")
    parser.add_argument("--output-dir", dest="output_dir", type=Path, default=None,
                        help="Directory for the generated bundle")
    parser.add_argument("--no-write", dest="write_output", action="store_false",
                        help="Ingest and validate without writing output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    success = asyncio.run(run_pipeline(
        data_dir=args.data_dir,
        output_dir=args.output_dir,
        write_output=args.write_output,
    ))
    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
