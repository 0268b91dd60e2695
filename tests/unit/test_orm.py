from unittest import TestCase
from nonfungible.db.driver import ContractDriver, InMemDriver
from nonfungible.db.orm import Datum, Variable, Hash

driver = ContractDriver(driver=InMemDriver())


class TestDatum(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_init(self):
        d = Datum('stustu', 'test', driver)
        self.assertEqual(d._key, driver.make_key('stustu', 'test'))


class TestVariable(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_set(self):
        contract = 'stustu'
        name = 'balance'
        delimiter = driver.delimiter

        raw_key = '{}{}{}'.format(contract, delimiter, name)

        v = Variable(contract, name, driver=driver)
        v.set(1000)

        self.assertEqual(driver.get(raw_key), 1000)

    def test_get(self):
        contract = 'stustu'
        name = 'balance'
        delimiter = driver.delimiter

        raw_key = '{}{}{}'.format(contract, delimiter, name)

        driver.set(raw_key, 1234)

        v = Variable(contract, name, driver=driver)
        _v = v.get()

        self.assertEqual(_v, 1234)

    def test_default_value(self):
        v = Variable('stustu', 'minted', driver=driver, default_value=0)

        self.assertEqual(v.get(), 0)

    def test_typed_variable_rejects_wrong_type(self):
        v = Variable('stustu', 'name', driver=driver, t=str)

        with self.assertRaises(AssertionError):
            v.set(5)

    def test_typed_variable_accepts_none(self):
        v = Variable('stustu', 'name', driver=driver, t=str)
        v.set('x')
        v.set(None)

        self.assertIsNone(v.get())


class TestHash(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_set_get(self):
        h = Hash('token', 'owners', driver=driver)
        h[1] = 'alice'

        self.assertEqual(h[1], 'alice')
        self.assertEqual(driver.get('token.owners:1'), 'alice')

    def test_multi_dimension(self):
        h = Hash('token', 'operators', driver=driver)
        h['alice', 'bob'] = 10

        self.assertEqual(h['alice', 'bob'], 10)
        self.assertEqual(driver.get('token.operators:alice:bob'), 10)

    def test_default_value(self):
        h = Hash('token', 'balances', driver=driver, default_value=0)

        self.assertEqual(h['nobody'], 0)

    def test_delete(self):
        h = Hash('token', 'owners', driver=driver)
        h[1] = 'alice'
        del h[1]

        self.assertIsNone(h[1])
        self.assertNotIn(1, h)

    def test_contains(self):
        h = Hash('token', 'owners', driver=driver)
        h[1] = 'alice'

        self.assertIn(1, h)
        self.assertNotIn(2, h)

    def test_delimiter_in_key_escaped(self):
        h = Hash('token', 'owners', driver=driver)

        h['a:b'] = 1
        h['a', 'b'] = 2

        self.assertEqual(h['a:b'], 1)
        self.assertEqual(h['a', 'b'], 2)
        self.assertEqual(driver.get('token.owners:a%3Ab'), 1)

    def test_separator_in_key_escaped(self):
        h = Hash('token', 'owners', driver=driver)

        h['a.b'] = 1
        h['a%2Eb'] = 2

        self.assertEqual(h['a.b'], 1)
        self.assertEqual(h['a%2Eb'], 2)
        self.assertEqual(driver.get('token.owners:a%2Eb'), 1)
        self.assertEqual(driver.get('token.owners:a%252Eb'), 2)

    def test_escaped_prefix_scopes_all(self):
        h = Hash('token', 'owner_tokens', driver=driver)

        h['a.b', 0] = 10
        h['a', 0] = 20

        self.assertEqual(h.all('a.b'), [10])
        self.assertEqual(h.all('a'), [20])

    def test_too_many_dimensions(self):
        h = Hash('token', 'owners', driver=driver)

        with self.assertRaises(AssertionError):
            h[tuple(range(17))] = 1

    def test_slices_rejected(self):
        h = Hash('token', 'owners', driver=driver)

        with self.assertRaises(AssertionError):
            h[1, slice(0, 2)] = 1

    def test_all_and_clear(self):
        h = Hash('token', 'operators', driver=driver)
        h['alice', 'bob'] = 1
        h['alice', 'carol'] = 2
        h['dave', 'bob'] = 3

        self.assertEqual(sorted(h.all('alice')), [1, 2])

        h.clear('alice')

        self.assertEqual(h.all('alice'), [])
        self.assertEqual(h['dave', 'bob'], 3)
