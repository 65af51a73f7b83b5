import os
import tempfile
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default):
    return os.getenv(name, str(default)).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///parking.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Uploads
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024
    MAX_IMAGE_SIZE = int(os.getenv('MAX_IMAGE_SIZE', 5 * 1024 * 1024))
    UPLOAD_FOLDER = os.path.join(BASE_DIR, os.getenv('UPLOAD_FOLDER', 'uploads'))

    # Plate Recognizer
    PLATE_RECOGNIZER_URL = os.getenv('PLATE_RECOGNIZER_URL', 'https://api.platerecognizer.com/v1/plate-reader/')
    PLATE_RECOGNIZER_TOKEN = os.getenv('PLATE_RECOGNIZER_TOKEN')
    PLATE_RECOGNIZER_AUTH_SCHEME = os.getenv('PLATE_RECOGNIZER_AUTH_SCHEME', 'Token')
    PLATE_RECOGNIZER_REGIONS = os.getenv('PLATE_RECOGNIZER_REGIONS', '')
    PLATE_RECOGNIZER_TIMEOUT = float(os.getenv('PLATE_RECOGNIZER_TIMEOUT', 30))

    # No exit sensor yet, so time-out is made up at scan time
    SYNTHESIZE_TIME_OUT = _env_bool('SYNTHESIZE_TIME_OUT', True)

    # Arrival polling
    POLL_INTERVAL = float(os.getenv('POLL_INTERVAL', 3.0))
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:5000')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', os.path.join(BASE_DIR, 'logs', 'app.log'))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), 'parkease-test-uploads')
    PLATE_RECOGNIZER_URL = 'http://recognizer.test/v1/plate-reader/'
    PLATE_RECOGNIZER_TOKEN = 'test-token'
    PLATE_RECOGNIZER_REGIONS = ''
    SYNTHESIZE_TIME_OUT = True
    LOG_FILE = None
