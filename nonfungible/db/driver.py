from nonfungible.db.encoder import encode, decode, make_key as _make_key
from nonfungible.logger import get_logger
from nonfungible import config
import re
import pymongo


log = get_logger('Driver')

# DB maps bytes to bytes
# Driver maps string to python object


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        res = self.db.get(key)
        if res is None:
            return None
        return decode(res)

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str='mongodb://localhost:27017', db='nonfungible', collection_name='state',
                 collection=None):
        if collection is None:
            self.client = pymongo.MongoClient(conn_str)
            collection = self.client[db][collection_name]
            log.info('Using MongoDB collection {}.{}'.format(db, collection_name))
        else:
            self.client = None

        self.db = collection

    def get(self, item: str):
        v = self.db.find_one({'_id': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key: str, value):
        if value is None:
            self.delete(key)
            return

        self.db.update_one({'_id': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({'_id': key})

    def iter(self, prefix: str, length=0):
        cur = self.db.find({'_id': {'$regex': '^{}'.format(re.escape(prefix))}})

        keys = []
        for entry in cur:
            keys.append(entry['_id'])

        keys.sort()
        return keys if length == 0 else keys[:length]

    def keys(self):
        return sorted(entry['_id'] for entry in self.db.find({}))

    def flush(self):
        self.db.delete_many({})

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache, uncommitted writes. None marks a delete.
        self.driver = driver or InMemDriver()  # L0

    def find(self, key: str):
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str):
        return self.find(key)

    def set(self, key, value):
        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def snapshot(self):
        # Savepoint of the uncommitted writes
        return dict(self.pending_writes)

    def restore(self, snapshot):
        self.pending_writes = dict(snapshot)

    def commit(self):
        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.pending_writes.clear()

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR
        self.log = log

    def items(self, prefix=''):
        # Get all of the items in the cache currently
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        # Get all of the keys we need
        db_keys = set(self.driver.iter(prefix=prefix))

        # Subtract the already gotten keys
        for k in db_keys - keys:
            _items[k] = self.driver.get(k)

        return dict(sorted(_items.items()))

    def keys(self, prefix=''):
        return list(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=()):
        return _make_key(contract, variable, args)

    def get_var(self, contract, variable, arguments=()):
        key = self.make_key(contract, variable, arguments)
        return self.get(key)

    def set_var(self, contract, variable, arguments=(), value=None):
        key = self.make_key(contract, variable, arguments)
        self.set(key, value)

    def get_contract_keys(self, name):
        return self.keys(name + self.delimiter)

    def delete_contract(self, name):
        keys = self.get_contract_keys(name)
        for key in keys:
            self.pending_writes.pop(key, None)
            self.driver.delete(key)

        self.log.debug('Deleted {} keys of {}'.format(len(keys), name))

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
