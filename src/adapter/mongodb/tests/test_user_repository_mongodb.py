"""Tests for MongoUserRepository against a mocked pymongo collection."""

import unittest
from unittest.mock import patch, MagicMock
from datetime import datetime, timezone
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.user import User

NOW = datetime(2026, 1, 23, 12, 0, 0, tzinfo=timezone.utc)


def _doc(**overrides) -> dict:
    doc = {
        '_id': 'user-1',
        'username': 'alice',
        'name': 'alice',
        'password': 'hashed',
        'created_at': NOW,
        'updated_at': NOW,
    }
    doc.update(overrides)
    return doc


class _MongoTestCase(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        db = MagicMock()
        db.__getitem__.return_value = self.collection
        self.repo = MongoUserRepository(db)
        db.__getitem__.assert_called_with('users')


class TestCreate(_MongoTestCase):

    @patch('adapter.mongodb.user_repository.uuid')
    def test_create_success(self, mock_uuid):
        mock_uuid.uuid4.return_value.hex = 'new-user-id'

        user = self.repo.create('alice', 'hashed')

        self.assertEqual(user.id, 'new-user-id')
        self.assertEqual(user.username, 'alice')
        self.assertEqual(user.name, 'alice')
        inserted = self.collection.insert_one.call_args[0][0]
        self.assertEqual(inserted['_id'], 'new-user-id')
        self.assertEqual(inserted['password'], 'hashed')
        self.assertNotIn('google_id', inserted)
        self.assertNotIn('facebook_id', inserted)

    def test_create_duplicate(self):
        self.collection.insert_one.side_effect = DuplicateKeyError('E11000 duplicate key error')

        self.assertIsNone(self.repo.create('alice', 'hashed'))

    def test_create_store_error(self):
        self.collection.insert_one.side_effect = PyMongoError('connection lost')

        self.assertIsNone(self.repo.create('alice', 'hashed'))


class TestFindOrCreate(_MongoTestCase):

    def test_upserts_on_provider_field(self):
        self.collection.find_one_and_update.return_value = _doc(
            _id='fed-1', username=None, password=None, google_id='g-1', name='Alice',
        )

        user = self.repo.find_or_create_by_provider('google', 'g-1', name='Alice', email='a@example.com')

        self.assertEqual(user.id, 'fed-1')
        self.assertEqual(user.google_id, 'g-1')
        args, kwargs = self.collection.find_one_and_update.call_args
        self.assertEqual(args[0], {'google_id': 'g-1'})
        on_insert = args[1]['$setOnInsert']
        self.assertEqual(on_insert['name'], 'Alice')
        self.assertEqual(on_insert['email'], 'a@example.com')
        self.assertNotIn('username', on_insert)
        self.assertTrue(kwargs['upsert'])
        self.assertEqual(kwargs['return_document'], ReturnDocument.AFTER)

    def test_race_falls_back_to_existing_document(self):
        self.collection.find_one_and_update.side_effect = DuplicateKeyError('E11000')
        self.collection.find_one.return_value = _doc(_id='winner', facebook_id='fb-1')

        user = self.repo.find_or_create_by_provider('facebook', 'fb-1')

        self.assertEqual(user.id, 'winner')
        self.collection.find_one.assert_called_once_with({'facebook_id': 'fb-1'})

    def test_store_error(self):
        self.collection.find_one_and_update.side_effect = PyMongoError('down')

        self.assertIsNone(self.repo.find_or_create_by_provider('google', 'g-1'))


class TestReadsAndWrites(_MongoTestCase):

    def test_get_by_username(self):
        self.collection.find_one.return_value = _doc(secret='hello')

        user = self.repo.get_by_username('alice')

        self.assertIsInstance(user, User)
        self.assertEqual(user.secret, 'hello')
        self.collection.find_one.assert_called_once_with({'username': 'alice'})

    def test_get_by_id_not_found(self):
        self.collection.find_one.return_value = None

        self.assertIsNone(self.repo.get_by_id('missing'))

    def test_get_by_id_store_error(self):
        self.collection.find_one.side_effect = PyMongoError('down')

        self.assertIsNone(self.repo.get_by_id('user-1'))

    def test_save_sets_mutable_fields(self):
        self.collection.update_one.return_value.matched_count = 1
        user = User(id='user-1', created_at=NOW, updated_at=NOW, username='alice', secret='hello')

        self.assertTrue(self.repo.save(user))

        query, update = self.collection.update_one.call_args[0]
        self.assertEqual(query, {'_id': 'user-1'})
        self.assertEqual(update['$set']['secret'], 'hello')
        self.assertNotIn('username', update['$set'])
        self.assertGreater(user.updated_at, NOW)

    def test_save_missing_user(self):
        self.collection.update_one.return_value.matched_count = 0
        user = User(id='gone', created_at=NOW, updated_at=NOW)

        self.assertFalse(self.repo.save(user))

    def test_update_last_login_keeps_updated_at(self):
        self.collection.update_one.return_value.modified_count = 1

        self.assertTrue(self.repo.update_last_login('user-1'))

        query, update = self.collection.update_one.call_args[0]
        self.assertEqual(query, {'_id': 'user-1'})
        self.assertEqual(list(update['$set']), ['last_login'])

    def test_list_with_secrets_filters_empty(self):
        cursor = MagicMock()
        cursor.sort.return_value = [_doc(secret='hello')]
        self.collection.find.return_value = cursor

        users = self.repo.list_with_secrets()

        self.assertEqual([u.secret for u in users], ['hello'])
        self.collection.find.assert_called_once_with({'secret': {'$nin': [None, '']}})

    def test_list_with_secrets_store_error(self):
        self.collection.find.side_effect = PyMongoError('down')

        self.assertEqual(self.repo.list_with_secrets(), [])


class TestEnsureIndexes(_MongoTestCase):

    def test_creates_partial_unique_indexes(self):
        self.assertTrue(self.repo.ensure_indexes())

        names = [c.kwargs['name'] for c in self.collection.create_index.call_args_list]
        self.assertIn('idx_users_username', names)
        self.assertIn('idx_users_google_id', names)
        self.assertIn('idx_users_facebook_id', names)
        google_call = next(
            c for c in self.collection.create_index.call_args_list
            if c.kwargs['name'] == 'idx_users_google_id'
        )
        self.assertTrue(google_call.kwargs['unique'])
        self.assertEqual(
            google_call.kwargs['partialFilterExpression'],
            {'google_id': {'$type': 'string'}},
        )


if __name__ == '__main__':
    unittest.main()
