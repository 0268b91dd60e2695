import json
from nonfungible.config import INDEX_SEPARATOR, DELIMITER

MONGO_MIN_INT = -(2 ** 63)
MONGO_MAX_INT = 2 ** 63 - 1

##
# ENCODER CLASS
# Add to this to encode Python types for storage.
# Bytes are stored as hex strings inside a tagged dict so that opaque account identities supplied as raw bytes
# survive a round trip through JSON.
##


class Encoder(json.JSONEncoder):
    def default(self, o, *args):
        if isinstance(o, (bytes, bytearray)):
            return {
                '__bytes__': bytes(o).hex()
            }
        elif isinstance(o, (set, frozenset)):
            return sorted(o)
        return super().default(o)


def encode_int(value: int):
    if MONGO_MIN_INT < value < MONGO_MAX_INT:
        return value

    return {
        '__big_int__': str(value)
    }


def encode_ints(data):
    if isinstance(data, bool):
        return data
    if isinstance(data, int):
        return encode_int(data)
    if isinstance(data, dict):
        return {k: encode_ints(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [encode_ints(i) for i in data]
    return data


# JSON library from Python 3 doesn't let you instantiate your custom Encoder. You have to pass it as an obj to json
def encode(data):
    """ NOTE:
    Normally encoding behavior is overriden in 'default' method inside
    a class derived from json.JSONEncoder. Unfortunately this can be done only
    for custom types.

    Due to MongoDB integer limitation (8 bytes), we need to preprocess 'big' integers.
    """
    return json.dumps(encode_ints(data), cls=Encoder, separators=(',', ':'))


def as_object(d):
    if '__bytes__' in d:
        return bytes.fromhex(d['__bytes__'])
    elif '__big_int__' in d:
        return int(d['__big_int__'])
    return dict(d)


# Decode has a hook for JSON objects, which are just Python dictionaries. You have to specify the logic in this hook.
def decode(data):
    if data is None:
        return None

    if isinstance(data, bytes):
        data = data.decode()

    try:
        return json.loads(data, object_hook=as_object)
    except json.decoder.JSONDecodeError:
        return None


KEY_ESCAPES = (('%', '%25'), (DELIMITER, '%3A'), (INDEX_SEPARATOR, '%2E'))


def escape_key(k):
    # % goes first so escaped output never collides with a literal key
    k = str(k)
    for raw, escaped in KEY_ESCAPES:
        k = k.replace(raw, escaped)
    return k


def make_key(contract, variable, args=()):
    contract_variable = INDEX_SEPARATOR.join((contract, variable))
    if args:
        return DELIMITER.join((contract_variable, *[escape_key(arg) for arg in args]))
    return contract_variable
