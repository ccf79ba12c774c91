"""
Report generator for the tennis tracker.
"""

import os
import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence

from models.filters import MatchFilter
from models.match import MatchRecord
from models.player import Player
from models.stats import PlayerFee, PlayerStat
from ranking.match_filter import filter_matches
from ranking.ranking_processor import RankingProcessor
from .export_formatter import to_fee_rows, to_match_rows, to_ranking_rows, write_csv

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Writes match, fee and ranking exports as CSV files."""

    def __init__(self, config: Dict[str, Any], ranking_processor: Optional[RankingProcessor] = None):
        self.config = config
        self.ranking_processor = ranking_processor or RankingProcessor(config)
        self.output_directory = config.get('reports', {}).get('output_dir', 'reports')

    def default_filename(self, kind: str, on: Optional[date] = None) -> str:
        """File name for an export, e.g. tennis-tracker-fees-2024-01-31.csv."""
        on = on or date.today()
        return os.path.join(self.output_directory, f"tennis-tracker-{kind}-{on.isoformat()}.csv")

    def _prepare(self, output_file: Optional[str], kind: str) -> str:
        output_file = output_file or self.default_filename(kind)
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return output_file

    def generate_match_report(self, players: Sequence[Player], matches: Sequence[MatchRecord],
                              output_file: Optional[str] = None) -> int:
        """
        Generate the match log export.
        Returns the number of matches in the report.
        """
        if not matches:
            logger.warning("No matches found for report generation")
            return 0

        output_file = self._prepare(output_file, 'matches')
        written = write_csv(to_match_rows(matches, players), output_file)
        logger.info(f"Generated match report with {written} matches: {output_file}")
        return written

    def generate_fee_report(self, fees: Sequence[PlayerFee], output_file: Optional[str] = None) -> int:
        """Generate the fee export. Returns the number of players in the report."""
        if not fees:
            logger.warning("No fees owed in the selected period")
            return 0

        output_file = self._prepare(output_file, 'fees')
        written = write_csv(to_fee_rows(fees), output_file)
        logger.info(f"Generated fee report with {written} players: {output_file}")
        return written

    def generate_ranking_report(self, stats: Sequence[PlayerStat], output_file: Optional[str] = None) -> int:
        """Generate the rankings export. Returns the number of players in the report."""
        if not stats:
            logger.warning("No players found for ranking report")
            return 0

        output_file = self._prepare(output_file, 'rankings')
        written = write_csv(to_ranking_rows(stats), output_file)
        logger.info(f"Generated ranking report with {written} players: {output_file}")
        return written

    def generate_all_reports(self, players: Sequence[Player], matches: Sequence[MatchRecord],
                             match_filter: Optional[MatchFilter] = None,
                             output_directory: Optional[str] = None) -> Dict[str, int]:
        """Generate match, fee and ranking reports for one filter in a directory."""
        output_directory = output_directory or self.output_directory
        os.makedirs(output_directory, exist_ok=True)

        def report_file(kind: str) -> str:
            return os.path.join(output_directory, os.path.basename(self.default_filename(kind)))

        filtered_matches = filter_matches(matches, match_filter)

        report_results = {
            'matches': self.generate_match_report(players, filtered_matches, report_file('matches')),
            'fees': self.generate_fee_report(
                self.ranking_processor.get_player_fees(players, matches, match_filter),
                report_file('fees')),
            'rankings': self.generate_ranking_report(
                self.ranking_processor.get_player_ranking(players, matches, match_filter),
                report_file('rankings')),
        }

        logger.info(f"Generated all reports in directory: {output_directory}")
        return report_results
