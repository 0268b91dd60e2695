DELIMITER = ':'
INDEX_SEPARATOR = '.'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

PRIVATE_METHOD_PREFIX = '_'

# Token ids are u32. Balances share the same width.
MAX_TOKEN_ID = 2 ** 32 - 1
MAX_BALANCE = MAX_TOKEN_ID

NULL_ACCOUNT = '0' * 64

# Reserved variable names inside a token namespace
LAYOUT_KEY = '__layout__'
PAUSED_KEY = '__paused__'
ADMIN_KEY = '__admin__'

LAYOUT_BASE = 'base'
LAYOUT_ENUMERABLE = 'enumerable'
LAYOUT_CONSECUTIVE = 'consecutive'
LAYOUT_CONSECUTIVE_ENUMERABLE = 'consecutive_enumerable'

# Metadata limits
MAX_BASE_URI_LEN = 200
MAX_NAME_LEN = 64
MAX_SYMBOL_LEN = 12

LEDGER_DEFAULT = 0
