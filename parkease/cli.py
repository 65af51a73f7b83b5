import logging
import time
import click
from flask import current_app
from flask.cli import with_appcontext
from parkease.poller import NewRecordPoller, fetch_latest_from_api
from parkease.services.parking_service import ParkingService

logger = logging.getLogger(__name__)


def _log_arrival(car):
    logger.info(f"New car arrived: {car['plate']} at {car['timeIn']} (block {car['blockId']})")


@click.command('watch-arrivals')
@click.option('--interval', type=float, default=None, help='Seconds between polls.')
@click.option('--api-base', default=None, help='Poll a running server instead of the local database.')
@with_appcontext
def watch_arrivals(interval, api_base):
    """Log every newly scanned car until interrupted."""
    app = current_app._get_current_object()
    interval = interval or app.config['POLL_INTERVAL']

    if api_base:
        def fetch_latest():
            return fetch_latest_from_api(api_base)
    else:
        def fetch_latest():
            with app.app_context():
                return ParkingService.latest_record()

    poller = NewRecordPoller(fetch_latest, _log_arrival, interval=interval)
    poller.start()
    click.echo(f"Watching for new cars every {interval}s, press Ctrl+C to stop")
    try:
        while poller.is_running:
            time.sleep(0.5)
        logger.warning("Arrival watcher stopped without being interrupted")
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()
