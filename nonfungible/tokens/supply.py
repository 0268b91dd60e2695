from nonfungible.db.orm import Variable, Hash
from nonfungible.exceptions import TokenIdsDepleted, TokenIdInUse, TokenNotFound, AlreadyBurned, ZeroCount
from nonfungible import config


def require_token_id(token_id):
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise TypeError('Token id must be an integer, got {}'.format(type(token_id)))
    if token_id < 0 or token_id > config.MAX_TOKEN_ID:
        raise ValueError('Token id {} is outside [0, {}]'.format(token_id, config.MAX_TOKEN_ID))


class Supply:
    """
    Supply counters and the token id allocator.

    Ids are handed out from ``next_token_id`` upwards and are never reused.
    ``burned`` doubles as the burn marker consulted by range-compressed
    ownership.
    """
    def __init__(self, contract, driver):
        self.next_token_id = Variable(contract, 'next_token_id', driver=driver, default_value=0)
        self.minted = Variable(contract, 'minted', driver=driver, default_value=0)
        self.burned_count = Variable(contract, 'burned_count', driver=driver, default_value=0)
        self.burned = Hash(contract, 'burned', driver=driver, default_value=False)
        self.claimed = Hash(contract, 'claimed', driver=driver, default_value=False)
        self.claimed_count = Variable(contract, 'claimed_count', driver=driver, default_value=0)

    def next_id(self):
        return self.next_token_id.get()

    def next_id_sequential(self):
        """Hands out the lowest unused id at or above the cursor, stepping over claimed ids."""
        first = self.next_token_id.get()
        while first <= config.MAX_TOKEN_ID and self.claimed[first] is True:
            first += 1

        if first > config.MAX_TOKEN_ID:
            raise TokenIdsDepleted(count=1, next_id=first)

        self.next_token_id.set(first + 1)
        self.minted.set(self.minted.get() + 1)

        return first

    def next_id_range(self, count):
        """
        Reserves ``count`` contiguous ids in a single allocator update and
        returns the inclusive ``(first, last)`` pair. Fails if a claimed id
        falls inside the block.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError('Count must be an integer, got {}'.format(type(count)))
        if count <= 0:
            raise ZeroCount()

        first = self.next_token_id.get()
        if first + count - 1 > config.MAX_TOKEN_ID:
            raise TokenIdsDepleted(count=count, next_id=first)

        # Only scan when something has been claimed out of order
        if self.claimed_count.get() > 0:
            for token_id in range(first, first + count):
                if self.claimed[token_id] is True:
                    raise TokenIdInUse(token_id=token_id)

        self.next_token_id.set(first + count)
        self.minted.set(self.minted.get() + count)

        return first, first + count - 1

    def claim(self, token_id):
        """Reserves a caller-chosen id (non-sequential minting)."""
        require_token_id(token_id)

        if self.is_allocated(token_id):
            raise TokenIdInUse(token_id=token_id)

        self.claimed[token_id] = True
        self.claimed_count.set(self.claimed_count.get() + 1)
        self.minted.set(self.minted.get() + 1)

    def is_allocated(self, token_id):
        return token_id < self.next_token_id.get() or self.claimed[token_id] is True

    def is_burned(self, token_id):
        return self.burned[token_id] is True

    def record_burn(self, token_id):
        if self.is_burned(token_id):
            raise AlreadyBurned(token_id=token_id)
        if not self.is_allocated(token_id):
            raise TokenNotFound(token_id=token_id)

        self.burned[token_id] = True
        self.burned_count.set(self.burned_count.get() + 1)

    def total_supply(self):
        return self.minted.get() - self.burned_count.get()
