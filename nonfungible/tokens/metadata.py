from nonfungible.db.orm import Variable
from nonfungible.exceptions import InvalidMetadata
from nonfungible import config


def _check_field(field, value, max_len):
    if not isinstance(value, str):
        raise InvalidMetadata(field=field, reason='expected a string, got {}'.format(type(value).__name__))
    if len(value) > max_len:
        raise InvalidMetadata(field=field, reason='{} characters, max is {}'.format(len(value), max_len))


class Metadata:
    def __init__(self, contract, driver):
        self._name = Variable(contract, 'name', driver=driver, t=str, default_value='')
        self._symbol = Variable(contract, 'symbol', driver=driver, t=str, default_value='')
        self._base_uri = Variable(contract, 'base_uri', driver=driver, t=str, default_value='')

    def set(self, base_uri, name, symbol):
        _check_field('base_uri', base_uri, config.MAX_BASE_URI_LEN)
        _check_field('name', name, config.MAX_NAME_LEN)
        _check_field('symbol', symbol, config.MAX_SYMBOL_LEN)

        self._base_uri.set(base_uri)
        self._name.set(name)
        self._symbol.set(symbol)

    def name(self):
        return self._name.get()

    def symbol(self):
        return self._symbol.get()

    def base_uri(self):
        return self._base_uri.get()

    def token_uri(self, token_id):
        base_uri = self._base_uri.get()
        if base_uri == '':
            return ''
        return '{}{}'.format(base_uri, token_id)
