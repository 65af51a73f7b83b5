import unittest
from unittest.mock import patch
from helpers import ParkingTestCase


class TestWatchArrivals(ParkingTestCase):

    @patch('parkease.cli.NewRecordPoller')
    def test_warns_when_poller_stops_on_its_own(self, mock_poller_cls):
        poller = mock_poller_cls.return_value
        poller.is_running = False
        runner = self.app.test_cli_runner()

        with self.assertLogs('parkease.cli', level='WARNING') as logs:
            result = runner.invoke(args=['watch-arrivals', '--interval', '0.5'])

        self.assertEqual(result.exit_code, 0)
        self.assertIn('stopped without being interrupted', logs.output[0])
        poller.start.assert_called_once()
        poller.stop.assert_called_once()
        self.assertEqual(mock_poller_cls.call_args.kwargs['interval'], 0.5)


if __name__ == '__main__':
    unittest.main()
