import re
from unittest import TestCase
from nonfungible.db.driver import MongoDriver, ContractDriver


class FakeCursor(list):
    pass


class FakeCollection:
    """Just enough of a pymongo collection for the driver."""
    def __init__(self):
        self.docs = {}

    def find_one(self, query):
        doc = self.docs.get(query['_id'])
        return dict(doc) if doc is not None else None

    def update_one(self, query, update, upsert=False):
        _id = query['_id']
        if _id not in self.docs:
            assert upsert
            self.docs[_id] = {'_id': _id}
        self.docs[_id].update(update['$set'])

    def delete_one(self, query):
        self.docs.pop(query['_id'], None)

    def delete_many(self, query):
        assert query == {}
        self.docs.clear()

    def find(self, query):
        if query == {}:
            return FakeCursor(dict(d) for d in self.docs.values())

        pattern = re.compile(query['_id']['$regex'])
        return FakeCursor(dict(d) for k, d in self.docs.items() if pattern.match(k))


class TestMongoDriver(TestCase):
    def setUp(self):
        self.collection = FakeCollection()
        self.d = MongoDriver(collection=self.collection)

    def test_documents_hold_encoded_values(self):
        self.d.set('token.owners:1', 'alice')

        self.assertEqual(self.collection.docs['token.owners:1'], {'_id': 'token.owners:1', 'value': '"alice"'})

    def test_get_set(self):
        self.d.set('token.approvals:1', {'approved': 'bob', 'live_until_ledger': 5})

        self.assertEqual(self.d.get('token.approvals:1'), {'approved': 'bob', 'live_until_ledger': 5})

    def test_set_none_deletes(self):
        self.d.set('a', 1)
        self.d.set('a', None)

        self.assertIsNone(self.d.get('a'))
        self.assertEqual(self.collection.docs, {})

    def test_iter_escapes_prefix(self):
        self.d.set('token.owners:1', 'alice')
        self.d.set('tokenXowners:1', 'mallory')

        self.assertEqual(self.d.iter('token.owners'), ['token.owners:1'])

    def test_keys_and_flush(self):
        self.d.set('b', 1)
        self.d.set('a', 1)

        self.assertEqual(self.d.keys(), ['a', 'b'])

        self.d.flush()
        self.assertEqual(self.d.keys(), [])

    def test_backs_contract_driver(self):
        cd = ContractDriver(driver=self.d)
        cd.set('token.minted', 3)
        cd.commit()

        self.assertEqual(self.d.get('token.minted'), 3)
        self.assertEqual(cd.items('token.'), {'token.minted': 3})
