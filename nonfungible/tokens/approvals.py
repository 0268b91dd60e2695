from nonfungible.db.orm import Hash
from nonfungible.exceptions import NotOwner, InvalidExpiration


class Approvals:
    """
    Per-token approvals and per-owner operators, both expiring at a ledger
    sequence. An entry is live while ``live_until_ledger >= ledger``.
    """
    def __init__(self, contract, driver, context):
        self.approvals = Hash(contract, 'approvals', driver=driver)
        self.operators = Hash(contract, 'operators', driver=driver)
        self.context = context

    def get_approved(self, token_id):
        entry = self.approvals[token_id]
        if entry is None or entry['live_until_ledger'] < self.context.ledger:
            return None
        return entry['approved']

    def is_approved_for_all(self, owner, operator):
        live_until_ledger = self.operators[owner, operator]
        return live_until_ledger is not None and live_until_ledger >= self.context.ledger

    def is_authorized(self, spender, owner, token_id):
        return spender == owner or \
               self.get_approved(token_id) == spender or \
               self.is_approved_for_all(owner, spender)

    def approve(self, owner, approver, approved, token_id, live_until_ledger):
        if approver != owner and not self.is_approved_for_all(owner, approver):
            raise NotOwner(account=approver, token_id=token_id)

        if live_until_ledger < self.context.ledger:
            raise InvalidExpiration(reason='ledger {} has already passed (current ledger is {})'.format(
                live_until_ledger, self.context.ledger
            ))

        self.approvals[token_id] = {
            'approved': approved,
            'live_until_ledger': live_until_ledger
        }

    def approve_for_all(self, owner, operator, live_until_ledger):
        # Zero revokes
        if live_until_ledger == 0:
            del self.operators[owner, operator]
            return

        if live_until_ledger < self.context.ledger:
            raise InvalidExpiration(reason='ledger {} has already passed (current ledger is {})'.format(
                live_until_ledger, self.context.ledger
            ))

        self.operators[owner, operator] = live_until_ledger

    def clear(self, token_id):
        if self.approvals[token_id] is not None:
            del self.approvals[token_id]
