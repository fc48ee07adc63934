"""
Region Calendar Export — one Parquet file per region plus a JSON summary.

Usage:
    python scripts/run_region_calendar_export.py [OUTPUT_DIR] [REGION ...]
"""
import json
import logging
import os
import sys

from anz_schedule.calendar.frames import build_region_calendar, summarise_region_calendar
from anz_schedule.dataset import load_dataset
from anz_schedule.regions import REGION_NAMES, VALID_REGIONS, parse_region

OUTPUT_DIR = "exports"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("region_calendar_export")


def write_parquet(df, path):
    df.to_parquet(path, index=False, engine="pyarrow")
    logger.info("  Wrote %s (%d rows)", path, len(df))


def write_json(data, path):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)
    logger.info("  Wrote %s", path)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    output_dir = args[0] if args else OUTPUT_DIR
    regions = [parse_region(code) for code in args[1:]] or list(VALID_REGIONS)

    logger.info("=" * 70)
    logger.info("Region calendar export -> %s", output_dir)
    logger.info("=" * 70)

    dataset = load_dataset()
    os.makedirs(output_dir, exist_ok=True)
    summaries = {}

    for region in regions:
        logger.info("-" * 50)
        logger.info("Processing %s", region.value)

        df = build_region_calendar(dataset, region)
        write_parquet(df, os.path.join(output_dir, f"{region.value}_calendar_{dataset.year}.parquet"))
        summaries[region.value] = {"name": REGION_NAMES[region], **summarise_region_calendar(df)}

    write_json(
        {"year": dataset.year, "regions": summaries},
        os.path.join(output_dir, f"calendar_summary_{dataset.year}.json"),
    )

    logger.info("=" * 70)
    logger.info("Export COMPLETE")
    for code, summary in summaries.items():
        logger.info("  %s: %d business days, %d school days",
                    code, summary["business_days"], summary["school_days"])
    return summaries


if __name__ == "__main__":
    main()
