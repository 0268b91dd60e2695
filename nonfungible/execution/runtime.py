from nonfungible import config


class Context:
    def __init__(self, base_state, maxlen=64):
        self._state = []
        self._base_state = base_state
        self._maxlen = maxlen

    def _context_changed(self, contract):
        if self._get_state()['this'] == contract:
            return False
        return True

    def _get_state(self):
        if len(self._state) == 0:
            return self._base_state
        return self._state[-1]

    def _add_state(self, state: dict):
        if self._context_changed(state['this']) and len(self._state) < self._maxlen:
            self._state.append(state)

    def _pop_state(self):
        if len(self._state) > 0:
            self._state.pop(-1)

    def _reset(self):
        self._state = []

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']

    @property
    def ledger(self):
        return self._get_state().get('ledger', config.LEDGER_DEFAULT)


def base_state(caller=None, ledger=config.LEDGER_DEFAULT, this=None, signer=None):
    return {
        'this': this,
        'caller': caller,
        'signer': signer if signer is not None else caller,
        'ledger': ledger
    }


_context = Context(base_state())


class Runtime:
    env = {}

    context = _context

    @classmethod
    def set_up(cls, state: dict):
        cls.context._reset()
        cls.context._base_state = state

    @classmethod
    def clean_up(cls):
        cls.context._reset()
        cls.context._base_state = base_state()


rt = Runtime()
