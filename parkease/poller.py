import logging
import threading
from datetime import datetime

import requests

logger = logging.getLogger(__name__)


def _created_at(record):
    value = record.get('createdAt')
    if not value:
        return datetime.min
    return datetime.fromisoformat(value.replace('Z', '+00:00')).replace(tzinfo=None)


def fetch_latest_from_api(base_url, session=None, timeout=10):
    """Return the newest record served by ``GET /parkingData``, or None."""
    http = session or requests
    response = http.get(f"{base_url.rstrip('/')}/parkingData", timeout=timeout)
    response.raise_for_status()

    records = response.json()
    if not records:
        return None
    return max(records, key=_created_at)


class NewRecordPoller:
    """Periodically re-reads the newest parking record and reports arrivals.

    The first successful fetch only remembers the newest id; afterwards every
    change of that id triggers ``on_new_record`` once. Failed fetches are
    logged and leave the state untouched.
    """

    def __init__(self, fetch_latest, on_new_record, interval=3.0):
        self.fetch_latest = fetch_latest
        self.on_new_record = on_new_record
        self.interval = interval
        self.last_record_id = None

        self._stop_event = threading.Event()
        self._thread = None

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def tick(self):
        try:
            latest = self.fetch_latest()
        except Exception as e:
            logger.error(f"Error polling for new cars: {e}")
            return False

        if not latest:
            return False

        record_id = latest['_id']
        is_new = self.last_record_id is not None and record_id != self.last_record_id
        self.last_record_id = record_id

        if is_new:
            self.on_new_record({
                'plate': latest.get('noPlate'),
                'timeIn': latest.get('timeIn'),
                'blockId': latest.get('blockId')
            })
        return is_new

    def _run(self):
        logger.info(f"Polling for new cars every {self.interval}s")
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("New car handler failed")
            # next wait starts only after the fetch finished
            self._stop_event.wait(self.interval)
        logger.info("Polling stopped")

    def start(self):
        if self.is_running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name='new-record-poller', daemon=True)
        self._thread.start()

    def stop(self, timeout=None):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
