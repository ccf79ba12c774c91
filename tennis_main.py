"""
Command-line entry point for the tennis tracker.
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import List, Optional, Union

from database.database_manager import DatabaseManager
from database.match_manager import MatchManager
from database.player_manager import PlayerManager
from models.filters import DateRange, MatchFilter, TimeWindow, MATCH_TYPE_FILTERS
from ranking.match_builder import build_from_parsed
from ranking.ranking_processor import RankingProcessor
from ranking.sorter import SortField
from reports.export_formatter import to_csv, to_fee_rows, to_ranking_rows
from reports.report_generator import ReportGenerator
from services.match_text_client import MatchTextClient
from services.parsed_match_validator import ParsedMatchValidator

logger = logging.getLogger(__name__)

EARLIEST = datetime(1900, 1, 1)


def _parse_timestamp(value: str) -> Union[date, datetime]:
    """Plain dates stay dates so the range covers the whole day."""
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tennis club rankings, fees and exports")
    parser.add_argument('--config', default='config.yaml', help="YAML configuration file")
    parser.add_argument('--db', default=None, help="SQLite database path (overrides config)")
    parser.add_argument('--verbose', action='store_true', help="Enable debug logging")

    filters = argparse.ArgumentParser(add_help=False)
    filters.add_argument('--match-type', choices=MATCH_TYPE_FILTERS, default='all')
    filters.add_argument('--start', type=_parse_timestamp, help="Inclusive start date (ISO format)")
    filters.add_argument('--end', type=_parse_timestamp, help="Inclusive end date (ISO format)")
    filters.add_argument('--window', choices=[w.value for w in TimeWindow], default='all',
                         help="Preset time window, ignored when --start/--end are given")
    filters.add_argument('--months', type=int, help="Only the last N months")
    filters.add_argument('--player', help="Only matches involving this player id")
    filters.add_argument('--search', default='', help="Only players whose name contains this text")

    subparsers = parser.add_subparsers(dest='command', required=True)

    rankings = subparsers.add_parser('rankings', parents=[filters], help="Print the ranking table")
    rankings.add_argument('--sort', default=SortField.POINTS.value,
                          choices=[f.value for f in SortField] + ['winRate', 'notLoseRate'])
    rankings.add_argument('--asc', action='store_true', help="Sort ascending")

    subparsers.add_parser('fees', parents=[filters], help="Print the fee table")

    export = subparsers.add_parser('export', parents=[filters], help="Write match, fee and ranking CSV files")
    export.add_argument('--output-dir', default=None)

    import_players = subparsers.add_parser('import-players', help="Import players from CSV")
    import_players.add_argument('csv_file')

    import_matches = subparsers.add_parser('import-matches', help="Import matches from CSV")
    import_matches.add_argument('csv_file')

    parse_text = subparsers.add_parser('parse-text', help="Record matches from free text")
    parse_text.add_argument('text')
    parse_text.add_argument('--dry-run', action='store_true', help="Validate without recording")

    return parser


def build_filter(args: argparse.Namespace) -> MatchFilter:
    """Translate command-line options into a MatchFilter."""
    if args.start or args.end:
        date_range = DateRange(start=args.start or EARLIEST, end=args.end or datetime.now())
    elif args.months:
        date_range = DateRange.last_months(args.months)
    else:
        date_range = TimeWindow(args.window).to_date_range()

    return MatchFilter(
        date_range=date_range,
        match_type=args.match_type,
        player_id=args.player,
        search_term=args.search
    )


def record_parsed_text(args: argparse.Namespace, db_manager: DatabaseManager,
                       player_manager: PlayerManager, match_manager: MatchManager) -> int:
    """Send text to the parsing service, validate the result and record valid matches."""
    players = player_manager.list_players()
    client = MatchTextClient.from_config(db_manager.config)
    validated = ParsedMatchValidator(players).validate_all(client.parse(args.text, players))

    recorded = 0
    for parsed in validated:
        if not parsed.is_valid:
            logger.warning(f"Invalid match: {parsed.error_message}")
            continue
        payload = build_from_parsed(parsed, match_manager.tie_break)
        if args.dry_run:
            logger.info(f"Would record {payload.match_type} match {payload.score}")
        else:
            match_manager.create_match(payload)
        recorded += 1
    return recorded


def main(argv: Optional[List[str]] = None) -> None:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        db_manager = DatabaseManager(args.db, args.config)
        player_manager = PlayerManager(db_manager)
        match_manager = MatchManager(db_manager)
        ranking_processor = RankingProcessor(db_manager.config)

        if args.command == 'import-players':
            added = player_manager.load_players_from_csv(args.csv_file)
            logger.info(f"Imported {added} players")
            return
        if args.command == 'import-matches':
            added = match_manager.load_matches_from_csv(args.csv_file)
            logger.info(f"Imported {added} matches")
            return
        if args.command == 'parse-text':
            recorded = record_parsed_text(args, db_manager, player_manager, match_manager)
            logger.info(f"Recorded {recorded} matches from text")
            return

        players = player_manager.list_players()
        matches = match_manager.list_matches()
        match_filter = build_filter(args)
        logger.info(f"Loaded {len(players)} players and {len(matches)} matches")

        if args.command == 'rankings':
            stats = ranking_processor.get_player_ranking(players, matches, match_filter, args.sort, args.asc)
            print(to_csv(to_ranking_rows(stats)))
            logger.info(f"Ranking statistics: {ranking_processor.get_player_statistics(stats)}")
        elif args.command == 'fees':
            fees = ranking_processor.get_player_fees(players, matches, match_filter)
            print(to_csv(to_fee_rows(fees)))
        elif args.command == 'export':
            report_generator = ReportGenerator(db_manager.config, ranking_processor)
            report_results = report_generator.generate_all_reports(
                players, matches, match_filter, args.output_dir)
            logger.info(f"Generated reports: {report_results}")

    except Exception as e:
        logger.error(f"Error in tennis tracker: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
