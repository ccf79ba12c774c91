#!/usr/bin/env python3
"""
Tests for match filtering, statistics aggregation, sorting and the ranking processor.
"""

import unittest
from datetime import date, datetime

from models.filters import DateRange, MatchFilter, TimeWindow
from models.match import MatchRecord, SINGLES, DOUBLES
from models.player import Player
from models.stats import PlayerStat
from ranking.match_filter import filter_by_search, filter_matches
from ranking.ranking_processor import RankingProcessor
from ranking.sorter import SortField, SortState, sort_stats, toggle_sort
from ranking.stats_aggregator import aggregate, aggregate_player


def make_match(match_id, winner1, loser1, score='6-4', match_type=SINGLES,
               winner2=None, loser2=None, match_date=datetime(2024, 1, 1, 10, 0)):
    return MatchRecord(
        id=match_id, match_type=match_type, winner1_id=winner1, winner2_id=winner2,
        loser1_id=loser1, loser2_id=loser2, score=score, match_date=match_date
    )


class TestMatchFilter(unittest.TestCase):
    """Test cases for match filtering."""

    def setUp(self):
        self.matches = [
            make_match('m1', 'A', 'B', match_date=datetime(2024, 1, 1, 0, 0)),
            make_match('m2', 'A', 'B', match_type=DOUBLES, winner2='C', loser2='D',
                       match_date=datetime(2024, 1, 15, 12, 0)),
            make_match('m3', 'B', 'C', match_date=datetime(2024, 1, 31, 23, 59)),
            make_match('m4', 'C', 'D', match_date=datetime(2024, 2, 1, 0, 0)),
        ]

    def ids(self, matches):
        return [m.id for m in matches]

    def test_no_filter_returns_copy(self):
        result = filter_matches(self.matches)
        self.assertEqual(result, self.matches)
        self.assertIsNot(result, self.matches)
        self.assertEqual(self.ids(filter_matches(self.matches, MatchFilter())), ['m1', 'm2', 'm3', 'm4'])

    def test_date_range_is_inclusive(self):
        """Test that matches on both bounds pass."""
        match_filter = MatchFilter(date_range=DateRange(datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 31, 23, 59)))
        self.assertEqual(self.ids(filter_matches(self.matches, match_filter)), ['m1', 'm2', 'm3'])

    def test_plain_dates_cover_whole_days(self):
        match_filter = MatchFilter(date_range=DateRange(date(2024, 1, 15), date(2024, 1, 31)))
        self.assertEqual(self.ids(filter_matches(self.matches, match_filter)), ['m2', 'm3'])

    def test_match_type(self):
        self.assertEqual(self.ids(filter_matches(self.matches, MatchFilter(match_type='doubles'))), ['m2'])
        self.assertEqual(self.ids(filter_matches(self.matches, MatchFilter(match_type='singles'))),
                         ['m1', 'm3', 'm4'])

    def test_player(self):
        self.assertEqual(self.ids(filter_matches(self.matches, MatchFilter(player_id='D'))), ['m2', 'm4'])

    def test_predicates_combine(self):
        match_filter = MatchFilter(match_type='singles', player_id='C',
                                   date_range=DateRange(date(2024, 1, 1), date(2024, 1, 31)))
        self.assertEqual(self.ids(filter_matches(self.matches, match_filter)), ['m3'])

    def test_unknown_match_type_filter(self):
        with self.assertRaises(ValueError):
            MatchFilter(match_type='mixed')

    def test_inverted_date_range(self):
        with self.assertRaises(ValueError):
            DateRange(date(2024, 2, 1), date(2024, 1, 1))

    def test_time_windows(self):
        now = datetime(2024, 5, 31, 12, 0)
        self.assertIsNone(TimeWindow.ALL.to_date_range(now))
        window = TimeWindow('30d').to_date_range(now)
        self.assertEqual(window.start, datetime(2024, 5, 1, 12, 0))
        self.assertEqual(window.end, now)
        self.assertEqual(TimeWindow.LAST_YEAR.to_date_range(now).start, datetime(2023, 6, 1, 12, 0))

    def test_last_months(self):
        """Test calendar month ranges clamp to the end of shorter months."""
        window = DateRange.last_months(3, now=datetime(2024, 5, 31))
        self.assertEqual(window.start, datetime(2024, 2, 29))

    def test_filter_from_window(self):
        match_filter = MatchFilter.from_window('90d', now=datetime(2024, 3, 1), match_type='singles')
        self.assertEqual(match_filter.match_type, 'singles')
        self.assertEqual(match_filter.date_range.start, datetime(2023, 12, 2))

    def test_search(self):
        """Test case- and accent-insensitive name search."""
        stats = [PlayerStat('1', 'Khải Hiển'), PlayerStat('2', 'Nam'), PlayerStat('3', 'Hiệp Thiện')]
        self.assertEqual([s.player_id for s in filter_by_search(stats, 'khai')], ['1'])
        self.assertEqual([s.player_id for s in filter_by_search(stats, 'Hiệp')], ['3'])
        self.assertEqual([s.player_id for s in filter_by_search(stats, 'hien')], ['1', '3'])
        self.assertEqual([s.player_id for s in filter_by_search(stats, 'HI')], ['1', '3'])
        self.assertEqual(len(filter_by_search(stats, '')), 3)


class TestStatsAggregator(unittest.TestCase):
    """Test cases for per-player aggregation."""

    def setUp(self):
        self.players = [Player('A', 'Ann', 30), Player('B', 'Bob', 31), Player('C', 'Cat', 25)]

    def test_single_win(self):
        """Test the basic win/loss scenario."""
        matches = [make_match('m1', 'A', 'B', score='6-4,6-2')]
        stats = {s.player_id: s for s in aggregate(self.players, matches)}

        self.assertEqual(stats['A'].wins, 1)
        self.assertEqual(stats['A'].points, 3)
        self.assertEqual(stats['A'].win_rate, 100)
        self.assertEqual(stats['B'].losses, 1)
        self.assertEqual(stats['B'].points, -1)
        self.assertEqual(stats['B'].win_rate, 0)

    def test_draw(self):
        """Test that a sentinel score gives both players a draw."""
        matches = [make_match('m1', 'A', 'B', score='5-5')]
        for stat in aggregate(self.players[:2], matches):
            self.assertEqual(stat.draws, 1)
            self.assertEqual(stat.wins, 0)
            self.assertEqual(stat.losses, 0)
            self.assertEqual(stat.points, 1)
            self.assertEqual(stat.win_rate, 0)
            self.assertEqual(stat.not_lose_rate, 100)

    def test_player_without_matches(self):
        stat = aggregate_player(self.players[2], [make_match('m1', 'A', 'B')])
        self.assertEqual((stat.total, stat.points, stat.win_rate, stat.not_lose_rate), (0, 0, 0.0, 0.0))

    def test_doubles_filter_on_singles_log(self):
        """Test that filtering everything out yields zero rows for every player."""
        matches = [make_match('m1', 'A', 'B'), make_match('m2', 'B', 'C')]
        filtered = filter_matches(matches, MatchFilter(match_type='doubles'))
        stats = aggregate(self.players, filtered)
        self.assertEqual([s.player_id for s in stats], ['A', 'B', 'C'])
        for stat in stats:
            self.assertEqual(stat.total, 0)
            self.assertEqual(stat.win_rate, 0)

    def test_counts_and_rates(self):
        """Test count identities and rate bounds over a mixed log."""
        matches = [
            make_match('m1', 'A', 'B'),
            make_match('m2', 'B', 'A', score='7-5'),
            make_match('m3', 'A', 'C', score='6-6'),
            make_match('m4', 'A', 'B', match_type=DOUBLES, winner2='C', loser2='X'),
            make_match('m5', 'X', 'Y'),
        ]
        stats = {s.player_id: s for s in aggregate(self.players, matches)}

        a = stats['A']
        self.assertEqual((a.wins, a.draws, a.losses, a.total), (2, 1, 1, 4))
        self.assertEqual(a.points, 3 + 3 + 1 - 1)
        self.assertEqual(a.win_rate, 50.0)
        self.assertEqual(a.not_lose_rate, 75.0)

        for player in self.players:
            stat = stats[player.id]
            participating = sum(1 for m in matches if player.id in m.participants)
            self.assertEqual(stat.wins + stat.draws + stat.losses, stat.total)
            self.assertEqual(stat.total, participating)
            self.assertTrue(0 <= stat.win_rate <= 100)
            self.assertTrue(0 <= stat.not_lose_rate <= 100)

    def test_unknown_player_ids_do_not_break_aggregation(self):
        matches = [make_match('m1', 'ghost', 'B')]
        stats = {s.player_id: s for s in aggregate(self.players, matches)}
        self.assertEqual(stats['B'].losses, 1)
        self.assertNotIn('ghost', stats)

    def test_recomputation_is_pure(self):
        matches = [make_match('m1', 'A', 'B')]
        self.assertEqual(aggregate(self.players, matches), aggregate(self.players, matches))


class TestSorter(unittest.TestCase):
    """Test cases for ranking order."""

    def setUp(self):
        self.stats = [
            PlayerStat('1', 'One', points=3, wins=1, total=2, win_rate=50.0),
            PlayerStat('2', 'Two', points=5, wins=2, total=2, win_rate=100.0),
            PlayerStat('3', 'Three', points=3, wins=1, total=1, win_rate=100.0),
            PlayerStat('4', 'Four', points=0),
        ]

    def ids(self, stats):
        return [s.player_id for s in stats]

    def test_default_is_points_descending(self):
        self.assertEqual(self.ids(sort_stats(self.stats)), ['2', '1', '3', '4'])

    def test_equal_keys_keep_input_order(self):
        """Test stability in both directions."""
        self.assertEqual(self.ids(sort_stats(self.stats, 'points', ascending=True)), ['4', '1', '3', '2'])
        self.assertEqual(self.ids(sort_stats(self.stats, SortField.WIN_RATE)), ['2', '3', '1', '4'])
        self.assertEqual(self.ids(sort_stats(list(reversed(self.stats)), 'points')), ['2', '3', '1', '4'])

    def test_all_fields_and_aliases(self):
        for field in list(SortField) + ['winRate', 'notLoseRate']:
            with self.subTest(field=field):
                self.assertEqual(len(sort_stats(self.stats, field)), 4)
        self.assertEqual(SortField.parse('notLoseRate'), SortField.NOT_LOSE_RATE)
        with self.assertRaises(ValueError):
            SortField.parse('elo')

    def test_input_is_not_mutated(self):
        before = self.ids(self.stats)
        sort_stats(self.stats, 'total')
        self.assertEqual(self.ids(self.stats), before)

    def test_toggle_sort(self):
        state = SortState()
        state = toggle_sort(state, 'points')
        self.assertEqual(state, SortState(SortField.POINTS, True))
        state = toggle_sort(state, 'winRate')
        self.assertEqual(state, SortState(SortField.WIN_RATE, False))


class TestRankingProcessor(unittest.TestCase):
    """Test cases for the ranking processor façade."""

    def setUp(self):
        self.processor = RankingProcessor()
        self.players = [Player('A', 'Ann Lee', 30), Player('B', 'Bob Lee', 31), Player('C', 'Cat', 25)]
        self.matches = [
            make_match('m1', 'A', 'B', match_date=datetime(2024, 1, 1)),
            make_match('m2', 'C', 'B', match_date=datetime(2024, 2, 1)),
            make_match('m3', 'C', 'A', match_date=datetime(2024, 2, 2)),
        ]

    def test_ranking_with_filter_search_and_sort(self):
        ranking = self.processor.get_player_ranking(self.players, self.matches)
        self.assertEqual([s.player_id for s in ranking], ['C', 'A', 'B'])

        february = MatchFilter(date_range=DateRange(date(2024, 2, 1), date(2024, 2, 29)), search_term='lee')
        ranking = self.processor.get_player_ranking(self.players, self.matches, february, 'losses')
        self.assertEqual([(s.player_id, s.losses) for s in ranking], [('A', 1), ('B', 1)])

    def test_top_players(self):
        top = self.processor.get_top_players(self.players, self.matches, limit=1)
        self.assertEqual([s.player_id for s in top], ['C'])

    def test_statistics(self):
        stats = self.processor.get_player_ranking(self.players, self.matches)
        summary = self.processor.get_player_statistics(stats)
        self.assertEqual(summary['total_players'], 3)
        self.assertEqual(summary['participations'], 6)
        self.assertEqual(summary['total_wins'], 3)
        self.assertEqual(summary['total_losses'], 3)
        self.assertEqual(summary['leader'], 'Cat')
        self.assertEqual(self.processor.get_player_statistics([]), {})

    def test_fees_respect_filter(self):
        fees = self.processor.get_player_fees(self.players, self.matches, MatchFilter(player_id='C'))
        self.assertEqual({f.player_id: f.bet_fee for f in fees}, {'A': 30000, 'B': 30000})

    def test_tie_break_from_config(self):
        processor = RankingProcessor({'matches': {'tie_break': 'side_b'}})
        self.assertEqual(processor.tie_break.value, 'side_b')


if __name__ == '__main__':
    unittest.main()
