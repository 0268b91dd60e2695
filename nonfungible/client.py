from nonfungible.execution.executor import Executor
from nonfungible.db.driver import ContractDriver
from nonfungible.tokens.core import Base, Enumerable, Consecutive, ConsecutiveEnumerable
from nonfungible.tokens.pausable import Pausable
from nonfungible.tokens.access import MinterGuard
from nonfungible.tokens.events import EventSink
from nonfungible.execution.runtime import rt
from functools import partial
import inspect

from . import config

from .db.orm import Variable
from .db.orm import Hash

VARIANTS = {
    config.LAYOUT_BASE: Base,
    config.LAYOUT_ENUMERABLE: Enumerable,
    config.LAYOUT_CONSECUTIVE: Consecutive,
    config.LAYOUT_CONSECUTIVE_ENUMERABLE: ConsecutiveEnumerable,
}


def public_functions(obj):
    funcs = []
    for name, member in inspect.getmembers(obj, callable):
        if name.startswith(config.PRIVATE_METHOD_PREFIX):
            continue
        funcs.append(name)
    return funcs


class AbstractContract:
    def __init__(self, name, signer, environment, executor: Executor, funcs):
        self.contract_name = name
        self.signer = signer
        self.environment = environment
        self.executor = executor
        self.functions = funcs

        # each function is a partial that allows kwarg overloading and overriding.
        # signer and environment are reserved, everything else goes to the token.
        for func in funcs:
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        contract_name=self.contract_name,
                                        executor=self.executor,
                                        func=func,
                                        environment=self.environment))

    def keys(self):
        return self.executor.driver.get_contract_keys(self.contract_name)

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(contract=self.contract_name, variable=variable, args=a)
        return self.executor.driver.get(k)

    def __getattr__(self, item):
        # Only reached when normal lookup fails. Resolve contract.item in storage.
        if item.startswith('_') or 'executor' not in self.__dict__:
            raise AttributeError(item)

        fullname = '{}.{}'.format(self.contract_name, item)

        if fullname in self.keys():
            return Variable(contract=self.contract_name, name=item, driver=self.executor.driver)

        if len(self.executor.driver.values(prefix=fullname + config.DELIMITER)) > 0:
            return Hash(contract=self.contract_name, name=item, driver=self.executor.driver)

        raise AttributeError("'{}' has no function or state named '{}'".format(self.contract_name, item))

    def _abstract_function_call(self, signer, executor, contract_name, environment, func, **kwargs):
        output = executor.execute(sender=signer,
                                  contract_name=contract_name,
                                  function_name=func,
                                  kwargs=kwargs,
                                  environment=environment)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class TokenClient:
    """
    Convenience front end: deploys token variants onto one driver and returns
    proxies whose methods run through the executor as the client's signer.
    """
    def __init__(self, signer='sys', driver=None, environment=None, events=None):
        self.raw_driver = driver or ContractDriver()
        self.executor = Executor(driver=self.raw_driver)
        self.signer = signer
        self.environment = environment or {}
        self.events = events or EventSink()

    def flush(self):
        self.raw_driver.flush()
        self.executor.contracts.clear()
        self.events.discard()

    def deploy(self, name, variant=config.LAYOUT_BASE, admin=None, pausable=False, minter=None,
               base_uri='', token_name='', symbol=''):
        token_class = VARIANTS[variant]

        token = token_class(name, driver=self.raw_driver, context=rt.context, events=self.events)

        if minter is not None:
            token.add_guard(MinterGuard(admin=minter))

        if base_uri or token_name or symbol:
            token.metadata.set(base_uri, token_name, symbol)

        self.executor.register(name, token)

        if pausable:
            self.executor.register(name + '_pause', Pausable(token, admin=admin or self.signer))

        self.raw_driver.commit()

        return self.get_contract(name)

    def get_contract(self, name, signer=None):
        contract = self.executor.contracts.get(name)
        assert contract is not None, 'Contract {} does not exist.'.format(name)

        return AbstractContract(name=name,
                                signer=signer or self.signer,
                                environment=self.environment,
                                executor=self.executor,
                                funcs=public_functions(contract))

    def get_var(self, contract, variable, arguments=()):
        return self.raw_driver.get_var(contract, variable, arguments)

    def set_var(self, contract, variable, arguments=(), value=None):
        self.raw_driver.set_var(contract, variable, arguments, value)
        self.raw_driver.commit()
