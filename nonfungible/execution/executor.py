from nonfungible.execution import runtime
from nonfungible.db.driver import ContractDriver
from nonfungible.logger import get_logger
from nonfungible import config
from copy import deepcopy

import traceback

log = get_logger('Executor')

_MISSING = object()


class Executor:
    """
    Entry-point dispatch for registered token contracts.

    Each call runs as a transaction over the shared ContractDriver: on success
    the writes are committed and queued events are published, on failure the
    driver is restored to its savepoint and queued events are dropped. Errors
    never escape; they are reported in the output record.
    """
    def __init__(self, driver=None, bypass_privates=False):
        self.driver = driver

        if not self.driver:
            self.driver = ContractDriver()

        self.bypass_privates = bypass_privates
        self.contracts = {}

        runtime.rt.env.update({'__Driver': self.driver})

    def register(self, name, contract):
        driver = getattr(contract, 'driver', self.driver)
        assert driver is self.driver, 'Contract {} is bound to a different driver.'.format(name)

        self.contracts[name] = contract

    def _sinks(self):
        sinks = []
        for contract in self.contracts.values():
            sink = getattr(contract, 'events', None)
            if sink is None:
                sink = getattr(getattr(contract, 'token', None), 'events', None)
            if sink is not None and all(sink is not s for s in sinks):
                sinks.append(sink)
        return sinks

    def _resolve(self, contract_name, function_name):
        if not self.bypass_privates:
            assert not function_name.startswith(config.PRIVATE_METHOD_PREFIX), 'Private method not callable.'

        contract = self.contracts.get(contract_name)
        assert contract is not None, 'Contract {} does not exist.'.format(contract_name)

        func = getattr(contract, function_name, None)
        assert callable(func), 'Contract {} has no function {}.'.format(contract_name, function_name)

        return func

    def _writes_since(self, savepoint):
        return {
            k: deepcopy(v) for k, v in self.driver.pending_writes.items()
            if savepoint.get(k, _MISSING) != v
        }

    def commit(self):
        self.driver.commit()
        for sink in self._sinks():
            sink.publish()

    def execute(self, sender, contract_name, function_name, kwargs=None,
                environment=None,
                auto_commit=True) -> dict:

        environment = environment or {}
        kwargs = kwargs or {}

        savepoint = self.driver.snapshot()
        marks = [(sink, sink.snapshot()) for sink in self._sinks()]

        runtime.rt.set_up(runtime.base_state(
            caller=sender,
            signer=environment.get('signer', sender),
            this=contract_name,
            ledger=environment.get('ledger', config.LEDGER_DEFAULT)
        ))

        writes = {}
        try:
            func = self._resolve(contract_name, function_name)
            result = func(**kwargs)
            status_code = 0

            writes = self._writes_since(savepoint)
            if auto_commit:
                self.commit()
        except Exception as e:
            result = e
            status_code = 1
            log.error('{}.{} failed: {}'.format(contract_name, function_name, e))
            log.debug(traceback.format_exc())

            self.driver.restore(savepoint)
            for sink, mark in marks:
                sink.restore(mark)
        finally:
            runtime.rt.clean_up()

        return {
            'status_code': status_code,
            'result': result,
            'error_code': getattr(result, 'code', None) if status_code == 1 else None,
            'writes': writes,
        }

    def execute_bundle(self, sender, calls, environment=None, auto_commit=True) -> dict:
        """
        Runs ``calls``, a list of ``(contract_name, function_name, kwargs)``,
        as one transaction. ``this`` follows each call while ``caller`` stays
        the sender. If any call fails nothing is kept.
        """
        environment = environment or {}

        savepoint = self.driver.snapshot()
        marks = [(sink, sink.snapshot()) for sink in self._sinks()]

        state = runtime.base_state(
            caller=sender,
            signer=environment.get('signer', sender),
            ledger=environment.get('ledger', config.LEDGER_DEFAULT)
        )
        runtime.rt.set_up(state)

        results = []
        writes = {}
        try:
            for contract_name, function_name, kwargs in calls:
                func = self._resolve(contract_name, function_name)

                runtime.rt.context._add_state(dict(state, this=contract_name))
                try:
                    results.append(func(**(kwargs or {})))
                finally:
                    runtime.rt.context._pop_state()

            result = results
            status_code = 0

            writes = self._writes_since(savepoint)
            if auto_commit:
                self.commit()
        except Exception as e:
            result = e
            status_code = 1
            log.error('Bundle failed at call {}: {}'.format(len(results), e))
            log.debug(traceback.format_exc())

            self.driver.restore(savepoint)
            for sink, mark in marks:
                sink.restore(mark)
        finally:
            runtime.rt.clean_up()

        return {
            'status_code': status_code,
            'result': result,
            'error_code': getattr(result, 'code', None) if status_code == 1 else None,
            'writes': writes,
        }
