from nonfungible.logger import get_logger

log = get_logger('Events')


class EventSink:
    """
    Collects events raised by token operations and hands them to subscribers
    once the surrounding transaction has committed. Subscribers cannot affect
    the outcome: anything they raise is logged and dropped.
    """
    def __init__(self, subscribers=None):
        self.subscribers = list(subscribers or [])
        self.pending = []
        self.published = []

    def subscribe(self, callback):
        self.subscribers.append(callback)

    def emit(self, contract, event, **data):
        self.pending.append({
            'event': event,
            'contract': contract,
            'data': data
        })

    def snapshot(self):
        return len(self.pending)

    def restore(self, snapshot):
        del self.pending[snapshot:]

    def discard(self):
        self.pending.clear()

    def publish(self):
        events, self.pending = self.pending, []

        for event in events:
            self.published.append(event)

            for subscriber in self.subscribers:
                try:
                    subscriber(event)
                except Exception as e:
                    log.warning('Subscriber {} failed on {} event: {}'.format(subscriber, event['event'], e))

        return events
