from nonfungible.db.orm import Variable, Hash
from nonfungible.exceptions import TokenNotFoundInOwnerList, TokenNotFoundInGlobalList


class EnumerationIndex:
    """
    Dense per-owner and global token lists with reverse lookups.

    Positions run 0..n-1 with no gaps. Removal swaps the last element into
    the vacated slot, so ordering is not stable across removals.
    """
    def __init__(self, contract, driver):
        self.owner_tokens = Hash(contract, 'owner_tokens', driver=driver)
        self.owner_token_index = Hash(contract, 'owner_token_index', driver=driver)
        self.owner_token_count = Hash(contract, 'owner_token_count', driver=driver, default_value=0)
        self.global_tokens = Hash(contract, 'global_tokens', driver=driver)
        self.global_token_index = Hash(contract, 'global_token_index', driver=driver)
        self.global_token_count = Variable(contract, 'global_token_count', driver=driver, default_value=0)

    def balance(self, owner):
        return self.owner_token_count[owner]

    def total_supply(self):
        return self.global_token_count.get()

    def get_owner_token_id(self, owner, index):
        token_id = self.owner_tokens[owner, index]
        if token_id is None:
            raise TokenNotFoundInOwnerList(index=index, owner=owner)
        return token_id

    def get_token_id(self, index):
        token_id = self.global_tokens[index]
        if token_id is None:
            raise TokenNotFoundInGlobalList(index=index)
        return token_id

    def tokens_of(self, owner):
        return [self.owner_tokens[owner, i] for i in range(self.owner_token_count[owner])]

    def track_mint(self, owner, token_id):
        self._add_to_owner(owner, token_id)
        self._add_to_global(token_id)

    def track_burn(self, owner, token_id):
        self._remove_from_owner(owner, token_id)
        self._remove_from_global(token_id)

    def track_transfer(self, from_, to, token_id):
        # The global list is unaffected by a change of owner
        self._remove_from_owner(from_, token_id)
        self._add_to_owner(to, token_id)

    def _add_to_owner(self, owner, token_id):
        index = self.owner_token_count[owner]
        self.owner_tokens[owner, index] = token_id
        self.owner_token_index[token_id] = index
        self.owner_token_count[owner] = index + 1

    def _remove_from_owner(self, owner, token_id):
        index = self.owner_token_index[token_id]
        if index is None or self.owner_tokens[owner, index] != token_id:
            raise TokenNotFoundInOwnerList(index=index, owner=owner)

        last = self.owner_token_count[owner] - 1
        if index != last:
            last_token_id = self.owner_tokens[owner, last]
            self.owner_tokens[owner, index] = last_token_id
            self.owner_token_index[last_token_id] = index

        del self.owner_tokens[owner, last]
        del self.owner_token_index[token_id]

        if last == 0:
            del self.owner_token_count[owner]
        else:
            self.owner_token_count[owner] = last

    def _add_to_global(self, token_id):
        index = self.global_token_count.get()
        self.global_tokens[index] = token_id
        self.global_token_index[token_id] = index
        self.global_token_count.set(index + 1)

    def _remove_from_global(self, token_id):
        index = self.global_token_index[token_id]
        if index is None or self.global_tokens[index] != token_id:
            raise TokenNotFoundInGlobalList(index=index)

        last = self.global_token_count.get() - 1
        if index != last:
            last_token_id = self.global_tokens[last]
            self.global_tokens[index] = last_token_id
            self.global_token_index[last_token_id] = index

        del self.global_tokens[last]
        del self.global_token_index[token_id]
        self.global_token_count.set(last)
