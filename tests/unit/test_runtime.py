from unittest import TestCase
from nonfungible.execution import runtime
from nonfungible.execution.runtime import Context, base_state


class TestContext(TestCase):
    def test_base_state(self):
        c = Context(base_state(caller='alice', ledger=7, this='token'))

        self.assertEqual(c.caller, 'alice')
        self.assertEqual(c.signer, 'alice')
        self.assertEqual(c.this, 'token')
        self.assertEqual(c.ledger, 7)

    def test_signer_can_differ(self):
        c = Context(base_state(caller='alice', signer='bob'))

        self.assertEqual(c.caller, 'alice')
        self.assertEqual(c.signer, 'bob')

    def test_ledger_defaults_to_zero(self):
        c = Context({'this': None, 'caller': None, 'signer': None})

        self.assertEqual(c.ledger, 0)

    def test_add_and_pop_state(self):
        state = base_state(caller='alice', this='token')
        c = Context(state)

        c._add_state(dict(state, this='other'))
        self.assertEqual(c.this, 'other')
        self.assertEqual(c.caller, 'alice')

        c._pop_state()
        self.assertEqual(c.this, 'token')

    def test_add_state_same_contract_is_ignored(self):
        state = base_state(caller='alice', this='token')
        c = Context(state)

        c._add_state(dict(state))

        self.assertEqual(c._state, [])

    def test_add_state_respects_maxlen(self):
        c = Context(base_state(this='a'), maxlen=2)

        c._add_state(base_state(this='b'))
        c._add_state(base_state(this='c'))
        c._add_state(base_state(this='d'))

        self.assertEqual(len(c._state), 2)
        self.assertEqual(c.this, 'c')

    def test_reset(self):
        c = Context(base_state(this='a'))
        c._add_state(base_state(this='b'))
        c._reset()

        self.assertEqual(c.this, 'a')


class TestRuntime(TestCase):
    def tearDown(self):
        runtime.rt.clean_up()

    def test_set_up_installs_state(self):
        runtime.rt.set_up(base_state(caller='alice', ledger=3))

        self.assertEqual(runtime.rt.context.caller, 'alice')
        self.assertEqual(runtime.rt.context.ledger, 3)

    def test_clean_up_resets_state(self):
        runtime.rt.set_up(base_state(caller='alice', ledger=3))
        runtime.rt.clean_up()

        self.assertIsNone(runtime.rt.context.caller)
        self.assertEqual(runtime.rt.context.ledger, 0)
