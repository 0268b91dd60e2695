from unittest import TestCase
from nonfungible.db.driver import ContractDriver, InMemDriver
from nonfungible.tokens.supply import Supply
from nonfungible.exceptions import TokenIdsDepleted, TokenIdInUse, TokenNotFound, AlreadyBurned, ZeroCount
from nonfungible import config


class TestSupply(TestCase):
    def setUp(self):
        self.driver = ContractDriver(driver=InMemDriver())
        self.s = Supply('token', self.driver)

    def test_sequential_ids_start_at_zero(self):
        self.assertEqual(self.s.next_id_sequential(), 0)
        self.assertEqual(self.s.next_id_sequential(), 1)
        self.assertEqual(self.s.next_id(), 2)

    def test_range_advances_once(self):
        self.assertEqual(self.s.next_id_range(5), (0, 4))
        self.assertEqual(self.s.next_id_range(1), (5, 5))
        self.assertEqual(self.s.minted.get(), 6)

    def test_range_zero_count(self):
        with self.assertRaises(ZeroCount):
            self.s.next_id_range(0)

        self.assertEqual(self.s.next_id(), 0)

    def test_range_non_int_count(self):
        with self.assertRaises(TypeError):
            self.s.next_id_range('5')

    def test_depleted(self):
        self.s.next_token_id.set(config.MAX_TOKEN_ID)

        self.assertEqual(self.s.next_id_sequential(), config.MAX_TOKEN_ID)

        with self.assertRaises(TokenIdsDepleted):
            self.s.next_id_sequential()

    def test_depleted_range_writes_nothing(self):
        self.s.next_token_id.set(config.MAX_TOKEN_ID - 1)

        with self.assertRaises(TokenIdsDepleted):
            self.s.next_id_range(3)

        self.assertEqual(self.s.next_id(), config.MAX_TOKEN_ID - 1)
        self.assertEqual(self.s.minted.get(), 0)

    def test_claim(self):
        self.s.claim(100)

        self.assertTrue(self.s.is_allocated(100))
        self.assertEqual(self.s.minted.get(), 1)

    def test_claim_in_use(self):
        self.s.claim(100)

        with self.assertRaises(TokenIdInUse):
            self.s.claim(100)

    def test_claim_below_sequential_cursor(self):
        self.s.next_id_range(3)

        with self.assertRaises(TokenIdInUse):
            self.s.claim(1)

    def test_claim_out_of_range(self):
        with self.assertRaises(ValueError):
            self.s.claim(config.MAX_TOKEN_ID + 1)

        with self.assertRaises(ValueError):
            self.s.claim(-1)

    def test_record_burn(self):
        self.s.next_id_sequential()
        self.s.record_burn(0)

        self.assertTrue(self.s.is_burned(0))
        self.assertEqual(self.s.total_supply(), 0)

    def test_record_burn_twice(self):
        self.s.next_id_sequential()
        self.s.record_burn(0)

        with self.assertRaises(AlreadyBurned):
            self.s.record_burn(0)

    def test_record_burn_never_minted(self):
        with self.assertRaises(TokenNotFound):
            self.s.record_burn(0)

    def test_burned_claim_is_still_in_use(self):
        self.s.claim(7)
        self.s.record_burn(7)

        with self.assertRaises(TokenIdInUse):
            self.s.claim(7)

    def test_total_supply(self):
        self.s.next_id_range(4)
        self.s.record_burn(1)
        self.s.record_burn(3)

        self.assertEqual(self.s.total_supply(), 2)

    def test_sequential_skips_claimed(self):
        self.s.claim(1)

        self.assertEqual(self.s.next_id_sequential(), 0)
        self.assertEqual(self.s.next_id_sequential(), 2)
        self.assertEqual(self.s.next_id(), 3)
        self.assertEqual(self.s.minted.get(), 3)

    def test_range_over_claimed_writes_nothing(self):
        self.s.claim(2)

        with self.assertRaises(TokenIdInUse):
            self.s.next_id_range(5)

        self.assertEqual(self.s.next_id(), 0)
        self.assertEqual(self.s.minted.get(), 1)
        self.assertEqual(self.s.next_id_range(2), (0, 1))
