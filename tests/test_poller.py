import threading
import unittest
from unittest.mock import MagicMock, patch
import requests
from parkease.poller import NewRecordPoller, fetch_latest_from_api


def record(record_id, created_at='2026-10-18T09:00:00'):
    return {
        '_id': record_id,
        'noPlate': f'PLATE-{record_id}',
        'timeIn': '9:00:00 AM',
        'blockId': '0x0badf00d',
        'createdAt': created_at
    }


class TestNewRecordPoller(unittest.TestCase):

    def make_poller(self, responses):
        events = []
        feed = iter(responses)

        def fetch_latest():
            item = next(feed)
            if isinstance(item, Exception):
                raise item
            return item

        return NewRecordPoller(fetch_latest, events.append, interval=0.01), events

    def test_one_event_per_id_change(self):
        ids = ['A', 'A', 'B', 'B', 'C']
        poller, events = self.make_poller([record(i) for i in ids])

        for _ in ids:
            poller.tick()

        self.assertEqual([e['plate'] for e in events], ['PLATE-B', 'PLATE-C'])
        self.assertEqual(events[0], {'plate': 'PLATE-B', 'timeIn': '9:00:00 AM', 'blockId': '0x0badf00d'})

    def test_first_fetch_never_emits(self):
        poller, events = self.make_poller([record('A')])

        self.assertFalse(poller.tick())
        self.assertEqual(events, [])
        self.assertEqual(poller.last_record_id, 'A')

    def test_failed_fetch_keeps_state(self):
        poller, events = self.make_poller([
            record('A'), requests.ConnectionError('down'), record('A'), record('B')
        ])

        for _ in range(4):
            poller.tick()

        self.assertEqual(len(events), 1)
        self.assertEqual(poller.last_record_id, 'B')

    def test_empty_store_changes_nothing(self):
        poller, events = self.make_poller([None, record('A'), None, record('B')])

        results = [poller.tick() for _ in range(4)]

        self.assertEqual(results, [False, False, False, True])
        self.assertEqual(len(events), 1)

    def test_start_and_stop(self):
        arrived = threading.Event()
        calls = {'count': 0}

        def fetch_latest():
            calls['count'] += 1
            return record('A') if calls['count'] < 3 else record('B')

        def on_new_record(car):
            arrived.set()

        poller = NewRecordPoller(fetch_latest, on_new_record, interval=0.01)
        poller.start()
        try:
            self.assertTrue(arrived.wait(2))
            self.assertTrue(poller.is_running)
        finally:
            poller.stop(timeout=2)

        self.assertFalse(poller.is_running)
        count = calls['count']
        arrived.clear()

        # restart keeps the remembered id, so no spurious event
        poller.start()
        try:
            self.assertFalse(arrived.wait(0.1))
        finally:
            poller.stop(timeout=2)
        self.assertGreater(calls['count'], count)

    def test_failing_handler_keeps_polling(self):
        fetched = threading.Event()
        calls = {'count': 0}

        def fetch_latest():
            calls['count'] += 1
            if calls['count'] >= 6:
                fetched.set()
            return record(str(calls['count']))

        def on_new_record(car):
            raise RuntimeError('display failed')

        poller = NewRecordPoller(fetch_latest, on_new_record, interval=0.01)
        with self.assertLogs('parkease.poller', level='ERROR'):
            poller.start()
            try:
                self.assertTrue(fetched.wait(2))
                self.assertTrue(poller.is_running)
            finally:
                poller.stop(timeout=2)

        self.assertFalse(poller.is_running)


class TestFetchLatestFromApi(unittest.TestCase):

    @patch('parkease.poller.requests.get')
    def test_returns_newest_by_created_at(self, mock_get):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = [
            record('old', '2026-10-18T08:00:00'),
            record('new', '2026-10-18T10:00:00'),
            record('mid', '2026-10-18T09:00:00'),
        ]

        latest = fetch_latest_from_api('http://localhost:5000/')

        self.assertEqual(latest['_id'], 'new')
        mock_get.assert_called_once_with('http://localhost:5000/parkingData', timeout=10)

    @patch('parkease.poller.requests.get')
    def test_empty_list(self, mock_get):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = []

        self.assertIsNone(fetch_latest_from_api('http://localhost:5000'))

    @patch('parkease.poller.requests.get')
    def test_http_error_propagates(self, mock_get):
        mock_get.return_value = MagicMock(status_code=500)
        mock_get.return_value.raise_for_status.side_effect = requests.HTTPError('500')

        with self.assertRaises(requests.HTTPError):
            fetch_latest_from_api('http://localhost:5000')


if __name__ == '__main__':
    unittest.main()
