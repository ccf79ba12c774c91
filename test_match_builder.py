#!/usr/bin/env python3
"""
Tests for building and editing matches from per-set score entry.
"""

import unittest
from datetime import datetime

from models.match import MatchRecord, MatchValidationError, ParsedMatch, SINGLES, DOUBLES
from ranking.match_builder import (
    SIDE_A, SIDE_B, TieBreakPolicy, build_from_parsed, build_match,
    determine_match_winner, entered_sets, rebuild_match, set_winner, sets_from_score
)
from utils.score_utils import InvalidScoreError


class TestSetWinner(unittest.TestCase):
    """Test cases for single-set and match winner determination."""

    def test_higher_score_wins_the_set(self):
        self.assertEqual(set_winner('6', '4'), SIDE_A)
        self.assertEqual(set_winner('4', '6'), SIDE_B)
        self.assertEqual(set_winner(7, 6), SIDE_A)

    def test_no_winner(self):
        """Test equal, blank and non-numeric sub-scores."""
        self.assertIsNone(set_winner('5', '5'))
        self.assertIsNone(set_winner('', '3'))
        self.assertIsNone(set_winner('6', ' '))
        self.assertIsNone(set_winner('x', '3'))

    def test_entered_sets_skip_blanks(self):
        sets = [('6', '4'), ('', ''), ('3', '')]
        self.assertEqual(entered_sets(sets), [('6', '4')])

    def test_more_set_wins_takes_the_match(self):
        self.assertEqual(determine_match_winner([('4', '6'), ('6', '3'), ('2', '6')]), SIDE_B)
        self.assertEqual(determine_match_winner([('6', '4'), ('4', '6'), ('7', '5')]), SIDE_A)

    def test_tie_break_policies(self):
        """Test that equal set wins follow the configured policy."""
        sets = [('6', '4'), ('4', '6')]
        self.assertEqual(determine_match_winner(sets, TieBreakPolicy.SIDE_A), SIDE_A)
        self.assertEqual(determine_match_winner(sets, TieBreakPolicy.SIDE_B), SIDE_B)
        self.assertEqual(determine_match_winner(sets, 'side_b'), SIDE_B)
        with self.assertRaises(MatchValidationError):
            determine_match_winner(sets, TieBreakPolicy.REJECT)

    def test_reject_policy_allows_draw_sentinels(self):
        self.assertEqual(determine_match_winner([('5', '5')], TieBreakPolicy.REJECT, '5-5'), SIDE_A)


class TestBuildMatch(unittest.TestCase):
    """Test cases for building creation payloads."""

    def setUp(self):
        self.match_date = datetime(2024, 3, 1, 18, 0)

    def test_side_b_wins_singles(self):
        payload = build_match(SINGLES, ('p1', None), ('p3', None),
                              [('4', '6'), ('6', '3'), ('2', '6')], self.match_date)
        self.assertEqual(payload.winner1_id, 'p3')
        self.assertEqual(payload.loser1_id, 'p1')
        self.assertIsNone(payload.winner2_id)
        self.assertIsNone(payload.loser2_id)
        self.assertEqual(payload.score, '6-4,6-3,6-2')
        self.assertEqual(payload.match_date, self.match_date)

    def test_doubles_assigns_partners(self):
        payload = build_match(DOUBLES, ('p1', 'p2'), ('p3', 'p4'),
                              [('6', '4'), ('6', '2'), ('', '')], self.match_date)
        self.assertEqual((payload.winner1_id, payload.winner2_id), ('p1', 'p2'))
        self.assertEqual((payload.loser1_id, payload.loser2_id), ('p3', 'p4'))
        self.assertEqual(payload.score, '6-4,6-2')

    def test_singles_ignores_partner_fields(self):
        payload = build_match(SINGLES, ('p1', 'p2'), ('p3', 'p4'), [('6', '1')], self.match_date)
        self.assertIsNone(payload.winner2_id)
        self.assertIsNone(payload.loser2_id)

    def test_draw_entry(self):
        payload = build_match(SINGLES, ('p1', None), ('p3', None), [('5', '5')], self.match_date,
                              TieBreakPolicy.REJECT)
        self.assertEqual(payload.score, '5-5')
        self.assertEqual(payload.winner1_id, 'p1')

    def test_no_sets_entered(self):
        with self.assertRaises(MatchValidationError):
            build_match(SINGLES, ('p1', None), ('p3', None), [('', ''), ('6', '')])

    def test_invalid_set_score(self):
        with self.assertRaises(InvalidScoreError):
            build_match(SINGLES, ('p1', None), ('p3', None), [('x', '4')])

    def test_doubles_missing_partner(self):
        with self.assertRaises(MatchValidationError):
            build_match(DOUBLES, ('p1', ''), ('p3', 'p4'), [('6', '4')])

    def test_sets_from_score(self):
        self.assertEqual(sets_from_score('4-6,6-3'), [('4', '6'), ('6', '3')])
        self.assertEqual(sets_from_score('6-4, 7-5'), [('6', '4'), ('7', '5')])


class TestRebuildMatch(unittest.TestCase):
    """Test cases for correcting the score of a stored match."""

    def setUp(self):
        self.match = MatchRecord(
            id='m1', match_type=DOUBLES, winner1_id='A', winner2_id='C',
            loser1_id='B', loser2_id='D', score='6-4', match_date=datetime(2024, 1, 1, 9, 0),
            created_at=datetime(2024, 1, 1, 12, 0)
        )

    def test_score_edit_can_swap_teams(self):
        updated = rebuild_match(self.match, [('3', '6'), ('4', '6')])
        self.assertEqual(updated.id, 'm1')
        self.assertEqual((updated.winner1_id, updated.winner2_id), ('B', 'D'))
        self.assertEqual((updated.loser1_id, updated.loser2_id), ('A', 'C'))
        self.assertEqual(updated.score, '6-3,6-4')
        self.assertEqual(updated.match_date, self.match.match_date)
        self.assertEqual(updated.created_at, self.match.created_at)
        self.assertEqual(set(updated.participants), set(self.match.participants))

    def test_score_and_date_edit(self):
        new_date = datetime(2024, 1, 2, 9, 0)
        updated = rebuild_match(self.match, [('7', '5')], new_date)
        self.assertEqual(updated.winner1_id, 'A')
        self.assertEqual(updated.score, '7-5')
        self.assertEqual(updated.match_date, new_date)
        # The original record is unchanged
        self.assertEqual(self.match.score, '6-4')


class TestBuildFromParsed(unittest.TestCase):
    """Test cases for turning validated parser output into payloads."""

    def test_winner_comes_from_the_score(self):
        parsed = ParsedMatch(player1='Ann', player3='Bob', score='4-6,3-6',
                             match_date=datetime(2024, 2, 2), player1_id='a', player3_id='b')
        payload = build_from_parsed(parsed)
        self.assertEqual(payload.winner1_id, 'b')
        self.assertEqual(payload.loser1_id, 'a')
        self.assertEqual(payload.score, '6-4,6-3')

    def test_invalid_parsed_match(self):
        parsed = ParsedMatch(player1='Ann', player3='Zed', score='6-4', is_valid=False,
                             error_message='Player Zed not found')
        with self.assertRaises(MatchValidationError) as ctx:
            build_from_parsed(parsed)
        self.assertIn('Zed', str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
