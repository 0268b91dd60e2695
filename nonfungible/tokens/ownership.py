from nonfungible.db.orm import Hash
from nonfungible.exceptions import TokenNotFound, MathOverflow
from nonfungible import config


class Ownership:
    """
    One owner record per token. Balances are kept alongside so that
    ``balance_of`` is a single read.
    """
    def __init__(self, contract, driver, supply):
        self.owners = Hash(contract, 'owners', driver=driver)
        self.balances = Hash(contract, 'balances', driver=driver, default_value=0)
        self.supply = supply

    def owner_of(self, token_id):
        owner = self.owners[token_id]
        if owner is None:
            raise TokenNotFound(token_id=token_id)
        return owner

    def exists(self, token_id):
        try:
            self.owner_of(token_id)
        except TokenNotFound:
            return False
        return True

    def balance(self, account):
        return self.balances[account]

    def require_capacity(self, account, amount):
        if self.balances[account] + amount > config.MAX_BALANCE:
            raise MathOverflow(account=account)

    def increase_balance(self, account, amount):
        self.require_capacity(account, amount)
        self.balances[account] = self.balances[account] + amount

    def decrease_balance(self, account, amount):
        balance = self.balances[account]
        if balance < amount:
            raise MathOverflow(account=account)

        if balance == amount:
            del self.balances[account]
        else:
            self.balances[account] = balance - amount

    def assign(self, first_id, count, to):
        for token_id in range(first_id, first_id + count):
            self.owners[token_id] = to
        self.increase_balance(to, count)

    def move(self, from_, to, token_id):
        self.decrease_balance(from_, 1)
        self.owners[token_id] = to
        self.increase_balance(to, 1)

    def remove(self, from_, token_id):
        self.decrease_balance(from_, 1)
        del self.owners[token_id]


class ConsecutiveOwnership(Ownership):
    """
    Range-compressed ownership. A batch writes a single owner record at its
    first id; every later id in the batch resolves to the nearest record at or
    below it. Transfers and burns split the run by materialising the owner of
    the following id before the run head moves.
    """
    def owner_of(self, token_id):
        if not self.supply.is_allocated(token_id) or self.supply.is_burned(token_id):
            raise TokenNotFound(token_id=token_id)

        for candidate in range(token_id, -1, -1):
            owner = self.owners[candidate]
            if owner is not None:
                return owner

        raise TokenNotFound(token_id=token_id)

    def assign(self, first_id, count, to):
        self.owners[first_id] = to
        self.increase_balance(to, count)

    def _split_after(self, owner, token_id):
        following = token_id + 1

        if following > config.MAX_TOKEN_ID or not self.supply.is_allocated(following):
            return
        if self.owners[following] is not None or self.supply.is_burned(following):
            return

        self.owners[following] = owner

    def move(self, from_, to, token_id):
        self._split_after(from_, token_id)
        super().move(from_, to, token_id)

    def remove(self, from_, token_id):
        self._split_after(from_, token_id)
        super().remove(from_, token_id)
