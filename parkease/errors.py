class ParkingError(Exception):
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(ParkingError):
    status_code = 400
    default_message = 'Invalid request'


class NotFoundError(ParkingError):
    status_code = 404
    default_message = 'Not found'


class PersistenceError(ParkingError):
    status_code = 500
    default_message = 'Database error'


class InternalError(ParkingError):
    status_code = 500


class GatewayError(ParkingError):
    """Failure talking to the plate recognition service.

    ``upstream_status`` is the HTTP status returned by the service, or None
    when no response was received at all. ``body`` keeps the raw response
    text (or the connection error) for diagnostics.
    """

    def __init__(self, upstream_status=None, body=''):
        self.upstream_status = upstream_status
        self.body = body
        self.status_code = self._map_status(upstream_status)
        super().__init__(self._message_for(upstream_status, body))

    @staticmethod
    def _map_status(upstream_status):
        if upstream_status is None:
            return 503
        if upstream_status == 401:
            return 401
        if upstream_status == 429:
            return 429
        if upstream_status == 500:
            return 503
        return 502

    @staticmethod
    def _message_for(upstream_status, body):
        if upstream_status is None:
            return 'Unable to connect to license plate recognition service'
        if upstream_status == 401:
            return 'Invalid API key for license plate recognition service'
        if upstream_status == 429:
            return 'Rate limit exceeded for license plate recognition service'
        if upstream_status == 500:
            return 'License plate recognition service is temporarily unavailable'
        return f'License plate recognition service error: {body}'
