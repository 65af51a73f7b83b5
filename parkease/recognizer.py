import logging
from collections import namedtuple

import requests

from parkease.errors import GatewayError

logger = logging.getLogger(__name__)

PlateCandidate = namedtuple('PlateCandidate', ['plate', 'confidence'])


class RecognitionResult:

    def __init__(self, candidates=None):
        self.candidates = list(candidates or [])

    @property
    def detected(self):
        return len(self.candidates) > 0

    @property
    def best(self):
        # upstream returns candidates ranked by confidence
        return self.candidates[0] if self.candidates else None


class PlateRecognizer:
    """Client for the Plate Recognizer ``plate-reader`` endpoint."""

    def __init__(self, app=None):
        self.api_url = None
        self.token = None
        self.auth_scheme = 'Token'
        self.regions = []
        self.timeout = 30

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.api_url = app.config['PLATE_RECOGNIZER_URL']
        self.token = app.config.get('PLATE_RECOGNIZER_TOKEN')
        self.auth_scheme = app.config.get('PLATE_RECOGNIZER_AUTH_SCHEME', 'Token')
        self.timeout = app.config.get('PLATE_RECOGNIZER_TIMEOUT', 30)

        regions = app.config.get('PLATE_RECOGNIZER_REGIONS') or ''
        self.regions = [r.strip() for r in regions.split(',') if r.strip()]

        if not self.token:
            logger.warning("PLATE_RECOGNIZER_TOKEN is not set, plate recognition requests will be rejected")

        app.extensions['plate_recognizer'] = self

    def _headers(self):
        headers = {}
        if self.token:
            headers['Authorization'] = f"{self.auth_scheme} {self.token}"
        return headers

    def recognize(self, image_bytes, filename='upload.jpg'):
        files = {'upload': (filename, image_bytes)}
        data = {'regions': self.regions} if self.regions else None

        logger.info(f"Sending {len(image_bytes)} bytes to {self.api_url}")
        try:
            response = requests.post(
                self.api_url,
                headers=self._headers(),
                files=files,
                data=data,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Plate recognizer unreachable: {e}")
            raise GatewayError(None, str(e)) from e

        logger.info(f"Plate recognizer response status: {response.status_code}")

        if not response.ok:
            logger.error(f"Plate recognizer error {response.status_code}: {response.text}")
            raise GatewayError(response.status_code, response.text)

        try:
            payload = response.json()
        except ValueError as e:
            raise GatewayError(response.status_code, 'Invalid JSON in recognizer response') from e

        return self.parse_results(payload)

    @staticmethod
    def parse_results(payload):
        candidates = []
        for result in payload.get('results') or []:
            plate = (result.get('plate') or '').strip()
            if not plate:
                continue
            confidence = result.get('score', result.get('confidence'))
            candidates.append(PlateCandidate(plate, float(confidence) if confidence is not None else 0.0))

        return RecognitionResult(candidates)
