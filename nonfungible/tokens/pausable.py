from nonfungible.db.orm import Variable
from nonfungible.exceptions import PausedError, NotPausedError, Unauthorized
from nonfungible.logger import get_logger
from nonfungible import config

log = get_logger('Pausable')


class Pausable:
    """
    Circuit breaker for a token. Attaching it registers a guard that rejects
    every mutating operation while the token is paused.
    """
    def __init__(self, token, admin):
        self.token = token
        self._paused = Variable(token.contract, config.PAUSED_KEY, driver=token.driver, default_value=False)
        self._admin = Variable(token.contract, config.ADMIN_KEY, driver=token.driver)

        if self._admin.get() is None:
            self._admin.set(admin)

        token.add_guard(self)

    def admin(self):
        return self._admin.get()

    def paused(self):
        return self._paused.get() is True

    def _require_admin(self, action):
        caller = self.token.context.caller
        if caller != self._admin.get():
            raise Unauthorized(account=caller, action=action)
        return caller

    def pause(self):
        caller = self._require_admin('pause {}'.format(self.token.contract))
        if self.paused():
            raise PausedError(contract=self.token.contract, operation='pause')

        self._paused.set(True)
        self.token.events.emit(self.token.contract, 'paused', caller=caller)
        log.info('{} paused by {}'.format(self.token.contract, caller))

    def unpause(self):
        caller = self._require_admin('unpause {}'.format(self.token.contract))
        if not self.paused():
            raise NotPausedError(contract=self.token.contract)

        self._paused.set(False)
        self.token.events.emit(self.token.contract, 'unpaused', caller=caller)
        log.info('{} unpaused by {}'.format(self.token.contract, caller))

    def guard(self, operation):
        if self.paused():
            raise PausedError(contract=self.token.contract, operation=operation)

    def __call__(self, token, operation):
        self.guard(operation)
