#!/usr/bin/env python3
"""Main entry point for the Active Recap application."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config import settings
from clients.provider import HealthDataProvider
from clients.garmin_client import GarminConnectProvider
from clients.fit_directory import FitDirectoryProvider
from analyzers.date_range import year_progress
from analyzers.workout_ingestion import WorkoutIngestionPipeline
from analyzers.workout_recap import WorkoutRecap
from models.workout import AggregateSnapshot


def setup_logging(verbose: bool = False):
    """Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Summarize a year of workouts from Garmin Connect or FIT files',
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=(
            'Examples:\n'
            '  %(prog)s recap --year 2024\n'
            '  %(prog)s recap --source fit --directory data/ --output recap.json\n'
            '  %(prog)s compare\n'
            '  %(prog)s progress\n'
            '  %(prog)s config --show'
        )
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    source_parser = argparse.ArgumentParser(add_help=False)
    source_parser.add_argument(
        '--year', type=int, default=datetime.now().year, help='Reporting year (default: current year)'
    )
    source_parser.add_argument(
        '--source', choices=['garmin', 'fit'], default=settings.HEALTH_DATA_SOURCE,
        help='Health data source'
    )
    source_parser.add_argument(
        '--directory', '-d', type=str, default=str(settings.DATA_DIR),
        help='Directory containing FIT files (with --source fit)'
    )
    source_parser.add_argument(
        '--concurrency', type=int, default=settings.INGESTION_CONCURRENCY,
        help='Sessions enriched at once (default: 1, sequential)'
    )

    recap_parser = subparsers.add_parser('recap', parents=[source_parser], help='Summarize one year of workouts')
    recap_parser.add_argument(
        '--output', '-o', type=str, help='Write the recap to a JSON file'
    )

    subparsers.add_parser('compare', parents=[source_parser], help='Compare a year with the year before')

    subparsers.add_parser('progress', help='Show how far the year has progressed')

    config_parser = subparsers.add_parser('config', help='Manage configuration')
    config_parser.add_argument(
        '--show', action='store_true', help='Show current configuration'
    )

    return parser.parse_args(argv)


def build_provider(source: str, directory: Optional[str] = None) -> HealthDataProvider:
    """Create the health data provider for a source name.

    Raises:
        ValueError: If the source is unknown
    """
    if source == 'garmin':
        return GarminConnectProvider()
    if source == 'fit':
        return FitDirectoryProvider(Path(directory) if directory else settings.DATA_DIR)
    raise ValueError(f"Unknown health data source: {source}")


class ActiveRecapApp:
    """Main application class."""

    def __init__(self, provider: HealthDataProvider, concurrency: Optional[int] = None):
        self.provider = provider
        self.concurrency = concurrency

    def _new_recap(self, year: int) -> WorkoutRecap:
        pipeline = WorkoutIngestionPipeline(self.provider, concurrency=self.concurrency)
        return WorkoutRecap(self.provider, year=year, pipeline=pipeline)

    def recap_year(self, year: int) -> AggregateSnapshot:
        """Build the recap for one year."""
        recap = self._new_recap(year)
        return asyncio.run(recap.run_ingestion())

    def compare_years(self, year: int) -> List[AggregateSnapshot]:
        """Build recaps for a year and the year before it."""
        return [self.recap_year(year - 1), self.recap_year(year)]

    @staticmethod
    def log_snapshot(snapshot: AggregateSnapshot):
        """Log a recap summary."""
        logging.info(f"Workout recap for {snapshot.year}")
        logging.info("-" * 30)
        logging.info(f"# Workouts: {snapshot.workout_count}")
        logging.info(f"Time Exercising: {snapshot.total_workout_time_minutes} Minutes")
        logging.info(f"Calories Burned: {snapshot.total_calories_burned}")
        logging.info(f"Activity Types: {snapshot.distinct_activity_types}")
        for activity_type, count in snapshot.type_counts.items():
            logging.info(f"  {activity_type}: {count}")

        best = snapshot.most_intense_workout
        if best.is_empty:
            logging.info("Best Workout: none")
        else:
            logging.info(
                f"Best Workout: {best.activity_type} on {best.start_time:%b %d} - "
                f"{best.calories_burned} kcal, peak heart rate {best.peak_heart_rate} bpm"
            )

    @staticmethod
    def write_snapshot(snapshot: AggregateSnapshot, output_path: Path):
        """Write a recap summary as JSON."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(snapshot.get_summary(), f, indent=2)
        logging.info(f"Recap saved to: {output_path}")


def show_progress():
    """Log the day of year and whether the year-end review is open."""
    progress = year_progress()
    logging.info(f"Day {progress.day_of_year}/{progress.days_in_year}")
    if progress.year_end_review_available:
        logging.info("Year-end review is available")
    else:
        logging.info(f"Year-end review opens after day {settings.YEAR_END_REVIEW_DAY}")


def show_config():
    """Display current configuration."""
    logging.info("Current Configuration:")
    logging.info("-" * 30)
    config_dict = {
        'HEALTH_DATA_SOURCE': settings.HEALTH_DATA_SOURCE,
        'DATA_DIR': settings.DATA_DIR,
        'INGESTION_CONCURRENCY': settings.INGESTION_CONCURRENCY,
        'YEAR_END_REVIEW_DAY': settings.YEAR_END_REVIEW_DAY,
        'LOG_LEVEL': settings.LOG_LEVEL,
        'GARMIN_EMAIL': settings.GARMIN_EMAIL or 'N/A',
    }
    for key, value in config_dict.items():
        logging.info(f"{key}: {value}")


def main(argv: Optional[List[str]] = None):
    """Main application entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command in ('recap', 'compare'):
            provider = build_provider(args.source, args.directory)
            app = ActiveRecapApp(provider, concurrency=args.concurrency)

            if args.command == 'recap':
                snapshot = app.recap_year(args.year)
                app.log_snapshot(snapshot)
                if args.output:
                    app.write_snapshot(snapshot, Path(args.output))
            else:
                previous, current = app.compare_years(args.year)
                app.log_snapshot(previous)
                app.log_snapshot(current)
                logging.info(
                    f"Change in workouts from {previous.year} to {current.year}: "
                    f"{current.workout_count - previous.workout_count:+d}"
                )

        elif args.command == 'progress':
            show_progress()

        elif args.command == 'config':
            if getattr(args, 'show', False):
                show_config()

        else:
            logging.error("Please specify a command: recap, compare, progress or config.")
            sys.exit(1)

    except Exception as e:
        logging.error(f"Error: {e}")
        if args.verbose:
            logging.exception("Full traceback:")
        sys.exit(1)


if __name__ == '__main__':
    main()
