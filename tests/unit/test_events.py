from unittest import TestCase
from nonfungible.tokens.events import EventSink


class TestEventSink(TestCase):
    def setUp(self):
        self.received = []
        self.sink = EventSink(subscribers=[self.received.append])

    def test_emit_queues_without_delivering(self):
        self.sink.emit('token', 'mint', to='alice', token_id=0)

        self.assertEqual(self.sink.pending, [{'event': 'mint', 'contract': 'token', 'data': {'to': 'alice', 'token_id': 0}}])
        self.assertEqual(self.received, [])

    def test_publish_delivers_in_order(self):
        self.sink.emit('token', 'mint', to='alice', token_id=0)
        self.sink.emit('token', 'burn', token_id=0)

        delivered = self.sink.publish()

        self.assertEqual([e['event'] for e in self.received], ['mint', 'burn'])
        self.assertEqual(delivered, self.sink.published)
        self.assertEqual(self.sink.pending, [])

    def test_discard(self):
        self.sink.emit('token', 'mint', to='alice', token_id=0)
        self.sink.discard()
        self.sink.publish()

        self.assertEqual(self.received, [])

    def test_snapshot_restore(self):
        self.sink.emit('token', 'mint', to='alice', token_id=0)
        mark = self.sink.snapshot()
        self.sink.emit('token', 'mint', to='alice', token_id=1)

        self.sink.restore(mark)

        self.assertEqual(len(self.sink.pending), 1)

    def test_failing_subscriber_is_isolated(self):
        def broken(event):
            raise ValueError('boom')

        sink = EventSink(subscribers=[broken, self.received.append])
        sink.emit('token', 'mint', to='alice', token_id=0)

        with self.assertLogs('Events', level='WARNING'):
            sink.publish()

        self.assertEqual(len(self.received), 1)
        self.assertEqual(len(sink.published), 1)

    def test_subscribe(self):
        other = []
        self.sink.subscribe(other.append)
        self.sink.emit('token', 'mint', to='alice', token_id=0)
        self.sink.publish()

        self.assertEqual(len(other), 1)
