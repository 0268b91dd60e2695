from abc import ABC, abstractmethod

from nonfungible.db import orm
from nonfungible.db.orm import Variable
from nonfungible.execution.runtime import rt
from nonfungible.exceptions import NotOwner, Unauthorized, InvalidReceiver, InvalidExpiration, LayoutMismatch, \
    AlreadyBurned, ZeroCount
from nonfungible.tokens.approvals import Approvals
from nonfungible.tokens.enumerable import EnumerationIndex
from nonfungible.tokens.events import EventSink
from nonfungible.tokens.metadata import Metadata
from nonfungible.tokens.ownership import Ownership, ConsecutiveOwnership
from nonfungible.tokens.supply import Supply
from nonfungible.logger import get_logger
from nonfungible import config

log = get_logger('NonFungible')


def is_null_account(account):
    return account is None or account == '' or account == config.NULL_ACCOUNT


class NonFungibleCore(ABC):
    """
    Shared orchestration for every token variant.

    Subclasses choose the ownership encoding and whether the enumeration
    index is maintained. The choice is fixed at construction and recorded in
    the namespace under ``__layout__`` so that the same keys are never read
    back under a different encoding.

    Every mutating operation runs the registered guards first, then performs
    all of its checks, then writes, and finally queues its event. Events are
    only delivered when the caller (normally the executor) publishes them after
    a successful commit.
    """
    layout = None
    enumerable = False

    def __init__(self, contract, driver=None, context=None, events=None, guards=()):
        self.contract = contract
        self.driver = driver or rt.env.get('__Driver') or orm.driver
        self.context = context or rt.context
        self.events = events or EventSink()
        self.guards = list(guards)

        self._check_layout()

        self.supply = Supply(contract, self.driver)
        self.approvals = Approvals(contract, self.driver, self.context)
        self.ownership = self._build_ownership()
        self.enumeration = EnumerationIndex(contract, self.driver) if self.enumerable else None
        self.metadata = Metadata(contract, self.driver)

    @abstractmethod
    def _build_ownership(self):
        raise NotImplementedError

    def _check_layout(self):
        layout = Variable(self.contract, config.LAYOUT_KEY, driver=self.driver)
        stored = layout.get()

        if stored is None:
            layout.set(self.layout)
        elif stored != self.layout:
            raise LayoutMismatch(contract=self.contract, stored=stored, requested=self.layout)

    def add_guard(self, guard):
        self.guards.append(guard)

    def _run_guards(self, operation):
        for guard in self.guards:
            guard(self, operation)

    def _emit(self, event, **data):
        self.events.emit(self.contract, event, **data)

    @staticmethod
    def _require_receiver(account):
        if is_null_account(account):
            raise InvalidReceiver(account=account)

    def _require_caller(self, spender, action):
        if spender != self.context.caller:
            raise Unauthorized(account=self.context.caller, action=action)

    # Queries

    def owner_of(self, token_id):
        return self.ownership.owner_of(token_id)

    def balance_of(self, owner):
        return self.ownership.balance(owner)

    def total_supply(self):
        return self.supply.total_supply()

    def get_approved(self, token_id):
        return self.approvals.get_approved(token_id)

    def is_approved_for_all(self, owner, operator):
        return self.approvals.is_approved_for_all(owner, operator)

    def name(self):
        return self.metadata.name()

    def symbol(self):
        return self.metadata.symbol()

    def base_uri(self):
        return self.metadata.base_uri()

    def token_uri(self, token_id):
        self.ownership.owner_of(token_id)
        return self.metadata.token_uri(token_id)

    def set_metadata(self, base_uri, name, symbol):
        self._run_guards('set_metadata')
        self.metadata.set(base_uri, name, symbol)

    # Mutations

    def mint(self, to):
        self._run_guards('mint')
        self._require_receiver(to)
        self.ownership.require_capacity(to, 1)

        token_id = self.supply.next_id_sequential()
        self._mint(to, token_id)

        return token_id

    def _mint(self, to, token_id):
        self.ownership.assign(token_id, 1, to)
        if self.enumeration is not None:
            self.enumeration.track_mint(to, token_id)

        self._emit('mint', to=to, token_id=token_id)
        log.debug('{}: minted {} to {}'.format(self.contract, token_id, to))

    def transfer(self, from_, to, token_id):
        self._run_guards('transfer')
        self._transfer(self.context.caller, from_, to, token_id)

    def transfer_from(self, spender, from_, to, token_id):
        self._run_guards('transfer_from')
        self._require_caller(spender, 'spend as {}'.format(spender))
        self._transfer(spender, from_, to, token_id)

    def _transfer(self, spender, from_, to, token_id):
        self._require_receiver(to)

        owner = self.ownership.owner_of(token_id)
        if owner != from_:
            raise NotOwner(account=from_, token_id=token_id)

        if not self.approvals.is_authorized(spender, owner, token_id):
            raise Unauthorized(account=spender, action='transfer token {}'.format(token_id))

        if to != from_:
            self.ownership.require_capacity(to, 1)

        self.approvals.clear(token_id)
        self.ownership.move(from_, to, token_id)
        if self.enumeration is not None:
            self.enumeration.track_transfer(from_, to, token_id)

        self._emit('transfer', **{'from': from_, 'to': to, 'token_id': token_id})
        log.debug('{}: transferred {} from {} to {}'.format(self.contract, token_id, from_, to))

    def burn(self, token_id):
        self._run_guards('burn')
        self._burn(self.context.caller, None, token_id)

    def burn_from(self, spender, from_, token_id):
        self._run_guards('burn_from')
        self._require_caller(spender, 'spend as {}'.format(spender))
        self._burn(spender, from_, token_id)

    def _burn(self, spender, from_, token_id):
        if self.supply.is_burned(token_id):
            raise AlreadyBurned(token_id=token_id)

        owner = self.ownership.owner_of(token_id)
        if from_ is not None and owner != from_:
            raise NotOwner(account=from_, token_id=token_id)

        if not self.approvals.is_authorized(spender, owner, token_id):
            raise Unauthorized(account=spender, action='burn token {}'.format(token_id))

        self.approvals.clear(token_id)
        self.ownership.remove(owner, token_id)
        self.supply.record_burn(token_id)
        if self.enumeration is not None:
            self.enumeration.track_burn(owner, token_id)

        self._emit('burn', **{'from': owner, 'token_id': token_id})
        log.debug('{}: burned {} owned by {}'.format(self.contract, token_id, owner))

    def approve(self, owner, spender, token_id, live_until_ledger):
        self._run_guards('approve')

        if not self.ownership.exists(token_id):
            raise InvalidExpiration(reason='token {} does not exist'.format(token_id))

        if self.ownership.owner_of(token_id) != owner:
            raise NotOwner(account=owner, token_id=token_id)

        approver = self.context.caller
        self.approvals.approve(owner, approver, spender, token_id, live_until_ledger)

        self._emit('approve', approver=approver, approved=spender, token_id=token_id,
                   live_until_ledger=live_until_ledger)
        log.debug('{}: {} approved {} for token {} until ledger {}'.format(
            self.contract, approver, spender, token_id, live_until_ledger))

    def approve_for_all(self, owner, operator, live_until_ledger):
        self._run_guards('approve_for_all')

        if self.context.caller != owner:
            raise Unauthorized(account=self.context.caller, action='manage operators of {}'.format(owner))

        self.approvals.approve_for_all(owner, operator, live_until_ledger)

        self._emit('approve_for_all', owner=owner, operator=operator, live_until_ledger=live_until_ledger)
        log.debug('{}: {} set operator {} until ledger {}'.format(self.contract, owner, operator, live_until_ledger))


class EnumerationQueries:
    """Read surface available on variants that maintain the enumeration index."""
    enumerable = True

    def balance_of(self, owner):
        return self.enumeration.balance(owner)

    def total_supply(self):
        return self.enumeration.total_supply()

    def get_owner_token_id(self, owner, index):
        return self.enumeration.get_owner_token_id(owner, index)

    def get_token_id(self, index):
        return self.enumeration.get_token_id(index)

    def tokens_of(self, owner):
        return self.enumeration.tokens_of(owner)


class Base(NonFungibleCore):
    """Sequential minting with one ownership record per token."""
    layout = config.LAYOUT_BASE

    def _build_ownership(self):
        return Ownership(self.contract, self.driver, self.supply)


class Enumerable(EnumerationQueries, Base):
    layout = config.LAYOUT_ENUMERABLE

    def non_sequential_mint(self, to, token_id):
        self._run_guards('non_sequential_mint')
        self._require_receiver(to)
        self.ownership.require_capacity(to, 1)

        self.supply.claim(token_id)
        self._mint(to, token_id)

        return token_id


class Consecutive(NonFungibleCore):
    """
    Batch minting with range-compressed ownership. A batch of any size costs
    one allocator update and one ownership record; resolving the owner of an
    id inside a batch scans backwards to the batch head.
    """
    layout = config.LAYOUT_CONSECUTIVE

    def _build_ownership(self):
        return ConsecutiveOwnership(self.contract, self.driver, self.supply)

    def batch_mint(self, to, count):
        self._run_guards('batch_mint')

        if count == 0:
            raise ZeroCount()
        self._require_receiver(to)
        self.ownership.require_capacity(to, count)

        first, last = self.supply.next_id_range(count)
        self.ownership.assign(first, count, to)

        if self.enumeration is not None:
            for token_id in range(first, last + 1):
                self.enumeration.track_mint(to, token_id)

        self._emit('consecutive_mint', to=to, from_token_id=first, to_token_id=last)
        log.debug('{}: minted {}..{} to {}'.format(self.contract, first, last, to))

        return first, last


class ConsecutiveEnumerable(EnumerationQueries, Consecutive):
    layout = config.LAYOUT_CONSECUTIVE_ENUMERABLE
