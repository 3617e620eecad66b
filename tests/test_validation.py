#!/usr/bin/env python3
"""
Unit tests for gamelibrary/validation.py.

Run with:
    python -m pytest tests/test_validation.py
"""
import datetime
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gamelibrary.errors import InvalidRecordError
from gamelibrary.validation import (is_valid_email, parse_date,
                                    validate_collection, validate_game,
                                    validate_player, validate_player_game,
                                    validate_status)

TODAY = datetime.date(2024, 6, 1)


class TestHelpers(unittest.TestCase):

    def test_email_shapes(self):
        self.assertTrue(is_valid_email('a@b.io'))
        self.assertFalse(is_valid_email('a@b'))
        self.assertFalse(is_valid_email('no-at-sign.com'))
        self.assertFalse(is_valid_email(''))

    def test_parse_date(self):
        self.assertEqual(parse_date('2020-02-29'), datetime.date(2020, 2, 29))
        self.assertEqual(parse_date(datetime.datetime(2020, 1, 2, 3, 4)),
                         datetime.date(2020, 1, 2))
        self.assertIsNone(parse_date('2020-02-30'))
        self.assertIsNone(parse_date('yesterday'))
        self.assertIsNone(parse_date(20200101))


class TestValidatePlayer(unittest.TestCase):

    def _player(self, **overrides):
        data = {'id': 'p1', 'username': 'anas_s', 'email': 'anas@example.com',
                'birth_date': '2000-01-01'}
        data.update(overrides)
        return data

    def test_valid(self):
        self.assertEqual(validate_player(self._player(), today=TODAY), self._player())

    def test_birth_date_optional(self):
        record = validate_player(self._player(birth_date=None), today=TODAY)
        self.assertIsNone(record['birth_date'])

    def test_birth_date_today_rejected(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_player(self._player(birth_date='2024-06-01'), today=TODAY)
        self.assertIn('birth_date', ctx.exception.errors)

    def test_birth_date_yesterday_accepted(self):
        record = validate_player(self._player(birth_date='2024-05-31'), today=TODAY)
        self.assertEqual(record['birth_date'], '2024-05-31')

    def test_blank_fields_collected(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_player({'id': ' ', 'username': '', 'email': None}, today=TODAY)
        self.assertEqual(set(ctx.exception.errors), {'id', 'username', 'email'})

    def test_bad_email(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_player(self._player(email='anas'), today=TODAY)
        self.assertEqual(list(ctx.exception.errors), ['email'])

    def test_id_not_required_for_update(self):
        data = self._player()
        del data['id']
        self.assertIsNone(validate_player(data, require_id=False, today=TODAY)['id'])

    def test_unknown_keys_dropped(self):
        record = validate_player(self._player(role='admin'), today=TODAY)
        self.assertNotIn('role', record)

    def test_none_input(self):
        with self.assertRaises(InvalidRecordError):
            validate_player(None)


class TestValidateGame(unittest.TestCase):

    def _game(self, **overrides):
        data = {'id': 'g1', 'title': 'Elden Ring', 'genre': 'Action RPG',
                'platform': 'PS5', 'release_date': '2022-02-25'}
        data.update(overrides)
        return data

    def test_valid(self):
        self.assertEqual(validate_game(self._game(), today=TODAY), self._game())

    def test_release_today_accepted(self):
        record = validate_game(self._game(release_date='2024-06-01'), today=TODAY)
        self.assertEqual(record['release_date'], '2024-06-01')

    def test_release_tomorrow_rejected(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_game(self._game(release_date='2024-06-02'), today=TODAY)
        self.assertIn('release_date', ctx.exception.errors)

    def test_platform_required(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_game(self._game(platform=None), today=TODAY)
        self.assertIn('platform', ctx.exception.errors)

    def test_platform_case_sensitive(self):
        with self.assertRaises(InvalidRecordError):
            validate_game(self._game(platform='ps5'), today=TODAY)

    def test_all_platforms_accepted(self):
        for platform in ('PC', 'PS5', 'XBOX', 'SWITCH', 'ANDROID', 'IOS'):
            self.assertEqual(
                validate_game(self._game(platform=platform), today=TODAY)['platform'],
                platform)


class TestValidateCollection(unittest.TestCase):

    def test_valid_trims_ids(self):
        record = validate_collection({'id': 'c1', 'name': ' Favorites ',
                                      'player_id': 'p1', 'game_ids': [' g1', 'g2']})
        self.assertEqual(record, {'id': 'c1', 'name': 'Favorites',
                                  'player_id': 'p1', 'game_ids': ['g1', 'g2']})

    def test_empty_game_ids(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_collection({'id': 'c1', 'name': 'A', 'player_id': 'p1',
                                 'game_ids': []})
        self.assertEqual(list(ctx.exception.errors), ['game_ids'])

    def test_game_ids_must_be_list(self):
        with self.assertRaises(InvalidRecordError):
            validate_collection({'id': 'c1', 'name': 'A', 'player_id': 'p1',
                                 'game_ids': 'g1'})

    def test_blank_game_id(self):
        with self.assertRaises(InvalidRecordError):
            validate_collection({'id': 'c1', 'name': 'A', 'player_id': 'p1',
                                 'game_ids': ['g1', '']})


class TestValidateStatus(unittest.TestCase):

    def test_known_statuses(self):
        for status in ('NOT_STARTED', 'PLAYING', 'COMPLETED', 'ABANDONED'):
            self.assertEqual(validate_status(status), status)

    def test_unknown_status(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_status('WISHLIST')
        self.assertIn('status', ctx.exception.to_dict())

    def test_missing_status(self):
        with self.assertRaises(InvalidRecordError):
            validate_status(None)


class TestValidatePlayerGame(unittest.TestCase):

    def test_id_discarded(self):
        record = validate_player_game({'id': 'x', 'player_id': 'p1',
                                       'game_id': 'g1', 'status': 'PLAYING'})
        self.assertEqual(record, {'player_id': 'p1', 'game_id': 'g1',
                                  'status': 'PLAYING'})

    def test_missing_fields(self):
        with self.assertRaises(InvalidRecordError) as ctx:
            validate_player_game({})
        self.assertEqual(set(ctx.exception.errors), {'player_id', 'game_id', 'status'})


if __name__ == '__main__':
    unittest.main()
