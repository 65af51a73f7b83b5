import io
import shutil
import tempfile
import unittest
from PIL import Image
from parkease import create_app
from parkease.config import TestConfig
from parkease.extensions import db


def make_png(size=(64, 32)):
    buffer = io.BytesIO()
    Image.new('RGB', size, 'white').save(buffer, format='PNG')
    return buffer.getvalue()


class ParkingTestCase(unittest.TestCase):
    def setUp(self):
        self.app = create_app(TestConfig)
        self.upload_dir = tempfile.mkdtemp()
        self.app.config['UPLOAD_FOLDER'] = self.upload_dir
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        self.app_context.pop()
        shutil.rmtree(self.upload_dir, ignore_errors=True)
